"""Worktree operations service for git-workspaces."""

import os
from typing import List, Optional

from git_workspaces.constants import HEADS_PREFIX
from git_workspaces.exceptions import (
    BranchNotFoundError,
    CreateFailedError,
    GitOperationError,
    RemoveFailedError,
    WorktreeNotFoundError,
)
from git_workspaces.logging_config import get_logger
from git_workspaces.models.worktree import Workspace
from git_workspaces.services.git.naming import (
    resolve,
    sanitize_branch_name_for_directory,
    workspace_dir_name,
)
from git_workspaces.services.git.repository import RepositoryService
from git_workspaces.services.git.runner import GitProcessRunner, ProcessRunner, check_result

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> List[Workspace]:
    """Parse ``git worktree list --porcelain`` output.

    Format (one record per worktree, records separated by a blank line;
    the last record is not always followed by one):

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or a bare "detached" line)

    Args:
        output: Raw porcelain text

    Returns:
        One Workspace per ``worktree`` line, in listing order
    """
    workspaces: List[Workspace] = []
    current: Optional[Workspace] = None

    def flush():
        nonlocal current
        if current is not None and current.path:
            current.is_main = not workspaces
            workspaces.append(current)
        current = None

    for raw_line in output.split("\n"):
        line = raw_line.rstrip("\r")

        if not line.strip():
            # Blank line closes the open record
            flush()
        elif line.startswith("worktree "):
            flush()
            current = Workspace(path=line[len("worktree "):])
        elif current is None:
            # Attribute line outside a record
            continue
        elif line.startswith("HEAD "):
            current.commit = line[len("HEAD "):]
        elif line.startswith("branch "):
            ref = line[len("branch "):]
            current.branch = ref[len(HEADS_PREFIX):] if ref.startswith(HEADS_PREFIX) else ref
        elif line == "detached":
            current.is_detached = True

    # Handle last entry if no trailing blank line
    flush()
    return workspaces


def mark_current(workspaces: List[Workspace], cwd: str) -> None:
    """Flag the worktree containing ``cwd``.

    When worktrees are nested, the deepest one containing ``cwd`` wins.
    """
    cwd = os.path.realpath(cwd)
    best: Optional[Workspace] = None
    best_len = -1
    for wt in workspaces:
        wt.is_current = False
        wt_path = os.path.realpath(os.path.abspath(wt.path))
        if cwd == wt_path or cwd.startswith(wt_path.rstrip(os.sep) + os.sep):
            if len(wt_path) > best_len:
                best, best_len = wt, len(wt_path)
    if best is not None:
        best.is_current = True


class WorktreeRepository:
    """Creates, lists, finds and removes git worktrees."""

    def __init__(
        self,
        repo_path: Optional[str] = None,
        runner: Optional[ProcessRunner] = None,
        remote_name: str = "origin",
    ):
        """Initialize the repository.

        Args:
            repo_path: Directory inside the git repository. None means the
                process working directory at call time.
            runner: Command runner; defaults to GitProcessRunner
            remote_name: Remote whose branches are considered remote-tracking
        """
        self._repo_path = repo_path
        self.runner = runner or GitProcessRunner()
        self.remote_name = remote_name
        self.repository = RepositoryService(repo_path, self.runner)

    @property
    def repo_path(self) -> str:
        return self._repo_path or os.getcwd()

    def _git(self, *args: str):
        return self.runner.run(self.repo_path, "git", list(args))

    # Paths

    def main_worktree_path(self) -> str:
        """Path of the main working tree (first entry in the listing)."""
        workspaces = self.list()
        if workspaces:
            return workspaces[0].path
        return self.repository.get_toplevel()

    def pin_to_main_worktree(self) -> str:
        """Run all later git commands from the main working tree.

        Linked worktrees may be removed while the process sits in one, so
        commands must not depend on the working directory staying valid.

        Returns:
            The main worktree path
        """
        main_path = self.main_worktree_path()
        self._repo_path = main_path
        self.repository = RepositoryService(main_path, self.runner)
        logger.debug(f"Pinned git commands to {main_path}")
        return main_path

    def path_for_suffix(self, dir_suffix: str) -> str:
        """Absolute path of the sibling directory for a worktree suffix."""
        main_path = self.main_worktree_path()
        repo_name = os.path.basename(main_path.rstrip(os.sep))
        parent = os.path.dirname(os.path.abspath(main_path))
        return os.path.join(parent, workspace_dir_name(repo_name, dir_suffix))

    def path_for_identifier(self, identifier: str) -> str:
        """Absolute path a worktree for ``identifier`` is created at."""
        return self.path_for_suffix(resolve(identifier).dir_suffix)

    # Creation

    def create(self, identifier: str, base_branch: str) -> str:
        """Create a worktree with a new branch for an identifier.

        Args:
            identifier: Issue number ("123") or branch name ("feature/x")
            base_branch: Ref the new branch starts from

        Returns:
            Absolute path of the new worktree

        Raises:
            NotARepositoryError: Not inside a git repository
            CreateFailedError: git rejected the worktree (e.g. it already exists)
        """
        self.repository.require_repository()
        if not identifier:
            raise CreateFailedError(identifier, "identifier must not be empty")

        names = resolve(identifier)
        path = self.path_for_suffix(names.dir_suffix)

        logger.debug(f"Creating worktree {path} on new branch {names.branch_name} from {base_branch}")
        result = self._git("worktree", "add", path, "-b", names.branch_name, base_branch)
        check_result(result, CreateFailedError, path)

        logger.info(f"Created worktree at {path} (branch {names.branch_name})")
        return os.path.abspath(path)

    def create_from_branch(self, path: str, source_branch: str, target_branch: str = "") -> str:
        """Create a worktree that checks out an existing branch.

        If ``source_branch`` is a remote-tracking branch, a new local branch
        ``target_branch`` tracking it is created. Otherwise the local branch
        is checked out directly and ``target_branch`` is ignored.

        Returns:
            Absolute path of the new worktree
        """
        self.repository.require_repository()

        if self.repository.is_remote_tracking_ref(source_branch):
            local_name = target_branch or source_branch.split("/", 1)[-1]
            logger.debug(f"Creating worktree {path} tracking {source_branch} as {local_name}")
            result = self._git("worktree", "add", "--track", "-b", local_name, path, source_branch)
        else:
            logger.debug(f"Creating worktree {path} for local branch {source_branch}")
            result = self._git("worktree", "add", path, source_branch)

        check_result(result, CreateFailedError, path)
        abs_path = os.path.abspath(os.path.join(self.repo_path, path))
        logger.info(f"Created worktree at {abs_path} (branch {source_branch})")
        return abs_path

    def create_for_branch(self, branch: str) -> str:
        """Create a worktree for an existing local or remote branch.

        The directory is named after the branch with any remote prefix
        removed, e.g. ``origin/feature/x`` -> ``<repo>-feature-x``.

        Raises:
            BranchNotFoundError: The branch does not exist
        """
        self.repository.require_repository()

        remote_prefix = f"{self.remote_name}/"
        branch_name = branch[len(remote_prefix):] if branch.startswith(remote_prefix) else branch

        if not self.repository.branch_exists(branch):
            raise BranchNotFoundError(branch)

        path = self.path_for_suffix(sanitize_branch_name_for_directory(branch_name))
        return self.create_from_branch(path, branch, branch_name)

    # Listing

    def list(self) -> List[Workspace]:
        """List all worktrees, freshly read from git.

        Raises:
            GitOperationError: git could not list worktrees
        """
        result = self._git("worktree", "list", "--porcelain")
        check_result(result, GitOperationError, "list_worktrees", None)

        workspaces = parse_worktree_porcelain(result.stdout)
        try:
            cwd = os.getcwd()
        except FileNotFoundError:
            # The working directory was deleted; no worktree contains it
            logger.debug("Working directory no longer exists")
        else:
            mark_current(workspaces, cwd)

        logger.debug(f"Found {len(workspaces)} worktrees")
        for wt in workspaces:
            logger.debug(f"  {wt}")
        return workspaces

    def get_for_identifier(self, identifier: str) -> Workspace:
        """Find the worktree created for an identifier.

        Only a linked worktree whose directory is named ``<repo>-<suffix>``
        matches, so ``1`` never finds ``repo-12`` and ``x`` never finds
        ``repo-feature-x``.

        Raises:
            WorktreeNotFoundError: No worktree matches
        """
        if not identifier:
            raise WorktreeNotFoundError(identifier)

        suffix = resolve(identifier).dir_suffix
        workspaces = self.list()
        if not workspaces:
            raise WorktreeNotFoundError(identifier)

        repo_name = os.path.basename(workspaces[0].path.rstrip(os.sep))
        expected = workspace_dir_name(repo_name, suffix)
        for wt in workspaces:
            if not wt.is_main and wt.dir_name == expected:
                return wt

        raise WorktreeNotFoundError(identifier)

    # Removal

    def remove(self, identifier: str) -> None:
        """Remove the worktree at the conventional path for an identifier."""
        if not identifier:
            raise RemoveFailedError(identifier, "identifier must not be empty")
        self.remove_by_path(self.path_for_identifier(identifier))

    def remove_by_path(self, path: str, force: bool = False) -> None:
        """Remove the worktree at ``path``.

        Args:
            path: Worktree directory
            force: Remove even if the worktree is dirty or locked

        Raises:
            RemoveFailedError: git refused to remove the worktree
        """
        if not path:
            raise RemoveFailedError(path, "path must not be empty")

        args = ["worktree", "remove", path]
        if force:
            args.append("--force")

        check_result(self._git(*args), RemoveFailedError, path)
        logger.info(f"Removed worktree at {path}")
