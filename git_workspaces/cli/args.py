"""Command-line argument parsing for git-workspaces."""

import argparse
from git_workspaces.__version__ import __version__


def _add_copy_envs_flags(parser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--copy-envs",
        dest="copy_envs",
        action="store_const",
        const=True,
        default=None,
        help="Copy untracked .env files into the new worktree without asking",
    )
    group.add_argument(
        "--no-copy-envs",
        dest="copy_envs",
        action="store_const",
        const=False,
        help="Never copy untracked .env files",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per workspace operation."""
    parser = argparse.ArgumentParser(
        prog="gw",
        description="Manage one git worktree per issue or branch",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-workspaces {__version__}")
    parser.add_argument("--main-branch", default="main", help="Main branch name (default: main)")
    parser.add_argument("--remote", default="origin", help="Remote name (default: origin)")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    start = subparsers.add_parser("start", help="Create a worktree for an issue or branch name")
    start.add_argument("identifier", help="Issue number (e.g. 123) or branch name (e.g. feature/x)")
    start.add_argument(
        "base_branch", nargs="?", default=None, help="Branch to start from (default: main branch)"
    )
    _add_copy_envs_flags(start)

    checkout = subparsers.add_parser("checkout", help="Create a worktree for an existing branch")
    checkout.add_argument("branch", help="Local branch or remote branch (e.g. origin/feature/x)")
    _add_copy_envs_flags(checkout)

    end = subparsers.add_parser("end", help="Remove the worktree for an issue or branch name")
    end.add_argument("identifier", help="Issue number or branch name the worktree was created for")
    end.add_argument("--force", action="store_true", help="Skip safety checks and confirmation")
    end.add_argument(
        "--auto-remove-branch", action="store_true", help="Delete the branch after removing the worktree"
    )

    clean = subparsers.add_parser("clean", help="Remove all worktrees that are safe to remove")
    clean.add_argument("--force", action="store_true", help="Skip confirmation")
    clean.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview mode - show what would be removed without removing anything",
    )
    clean.add_argument(
        "--auto-remove-branch", action="store_true", help="Delete branches of removed worktrees"
    )

    subparsers.add_parser("list", help="List worktrees")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
