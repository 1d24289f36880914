"""Command-line interface for git-workspaces"""

import os
import sys
from rich.console import Console
from rich.markup import escape

from git_workspaces.cli.args import parse_args
from git_workspaces.config import Config
from git_workspaces.constants import SYMBOL_BULLET
from git_workspaces.exceptions import GitWorkspacesError
from git_workspaces.logging_config import get_logger, setup_logging
from git_workspaces.services.display_service import ConsoleUI, UserInterface
from git_workspaces.services.git.env_files import EnvFileService
from git_workspaces.services.git.runner import GitProcessRunner
from git_workspaces.services.git.status import StatusInspector
from git_workspaces.services.git.worktrees import WorktreeRepository
from git_workspaces.services.removal_service import RemovalOrchestrator
from git_workspaces.services.safety_service import SafetyEvaluator

console = Console()
logger = get_logger(__name__)


def build_config(parsed_args) -> Config:
    """Build a Config from parsed arguments."""
    return Config(
        main_branch=parsed_args.main_branch,
        remote_name=parsed_args.remote,
        base_branch=getattr(parsed_args, "base_branch", None) or parsed_args.main_branch,
        auto_remove_branch=getattr(parsed_args, "auto_remove_branch", False),
        copy_envs=getattr(parsed_args, "copy_envs", None),
        force=getattr(parsed_args, "force", False),
        dry_run=getattr(parsed_args, "dry_run", False),
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
    )


def handle_env_files(config: Config, ui: UserInterface, source_root: str, worktree_path: str) -> None:
    """Offer to copy untracked .env files from the current worktree into a new one."""
    service = EnvFileService()
    env_files = service.find_untracked_env_files(source_root)
    if not env_files:
        return

    if config.copy_envs is None:
        ui.info(f"\nFound {len(env_files)} untracked environment file(s):")
        for env_file in env_files:
            ui.info(f"  {SYMBOL_BULLET} {env_file.relative_path}")
        should_copy = ui.confirm("\nCopy them to the new worktree? (y/N):")
    else:
        should_copy = config.copy_envs

    if should_copy:
        for path in service.copy_env_files(env_files, source_root, worktree_path):
            ui.success(f"Copied: {path}")


def _finish_create(config: Config, ui: UserInterface, worktrees: WorktreeRepository, path: str) -> None:
    try:
        handle_env_files(config, ui, worktrees.repository.get_toplevel(), path)
    except GitWorkspacesError as e:
        logger.warning(f"Env file handling failed: {e}")
        ui.warning(f"Failed to handle env files: {e}")
    ui.info(f"\nWorktree ready at:\n   {path}")


def cmd_start(parsed_args, config: Config, ui: UserInterface) -> int:
    worktrees = WorktreeRepository(runner=GitProcessRunner(), remote_name=config.remote_name)
    worktrees.repository.require_repository()

    path = worktrees.path_for_identifier(parsed_args.identifier)
    if os.path.exists(path):
        ui.error(f"Worktree for {parsed_args.identifier} already exists at {path}")
        return 1

    ui.info(f"Creating worktree for {parsed_args.identifier} based on {config.base_branch}...")
    path = worktrees.create(parsed_args.identifier, config.base_branch)
    ui.success(f"Created worktree at {path}")
    _finish_create(config, ui, worktrees, path)
    return 0


def cmd_checkout(parsed_args, config: Config, ui: UserInterface) -> int:
    worktrees = WorktreeRepository(runner=GitProcessRunner(), remote_name=config.remote_name)
    ui.info(f"Creating worktree for branch {parsed_args.branch}...")
    path = worktrees.create_for_branch(parsed_args.branch)
    ui.success(f"Created worktree at {path}")
    _finish_create(config, ui, worktrees, path)
    return 0


def _orchestrator(config: Config, ui: UserInterface) -> RemovalOrchestrator:
    runner = GitProcessRunner()
    worktrees = WorktreeRepository(runner=runner, remote_name=config.remote_name)
    worktrees.repository.require_repository()
    worktrees.pin_to_main_worktree()
    inspector = StatusInspector(runner, remote_name=config.remote_name)
    evaluator = SafetyEvaluator(inspector, main_branch=config.main_branch)
    return RemovalOrchestrator(worktrees, evaluator, ui, config)


def cmd_end(parsed_args, config: Config, ui: UserInterface) -> int:
    orchestrator = _orchestrator(config, ui)
    ui.info(f"Checking worktree for {parsed_args.identifier}...")
    orchestrator.remove_workspace(identifier=parsed_args.identifier)
    return 0


def cmd_clean(parsed_args, config: Config, ui: UserInterface) -> int:
    _orchestrator(config, ui).clean()
    return 0


def cmd_list(parsed_args, config: Config, ui: UserInterface) -> int:
    worktrees = WorktreeRepository(runner=GitProcessRunner(), remote_name=config.remote_name)
    worktrees.repository.require_repository()
    ui.show_workspaces(worktrees.list())
    return 0


COMMANDS = {
    "start": cmd_start,
    "checkout": cmd_checkout,
    "end": cmd_end,
    "clean": cmd_clean,
    "list": cmd_list,
}


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    # Setup logging before any git calls
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = build_config(parsed_args)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        ui = ConsoleUI(console)
        return COMMANDS[parsed_args.command](parsed_args, config, ui)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except EOFError:
        console.print("\n[yellow]No input received, aborting[/yellow]")
        return 1
    except GitWorkspacesError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
