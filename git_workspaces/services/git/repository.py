"""Repository-level git queries for git-workspaces."""

import os
from typing import List, Optional

from git_workspaces.constants import HEADS_PREFIX, REMOTES_PREFIX
from git_workspaces.exceptions import GitOperationError, NotARepositoryError
from git_workspaces.logging_config import get_logger
from git_workspaces.services.git.runner import GitProcessRunner, ProcessRunner, check_result

logger = get_logger(__name__)


class RepositoryService:
    """Queries about the repository containing a directory."""

    def __init__(self, repo_path: Optional[str] = None, runner: Optional[ProcessRunner] = None):
        """Initialize the service.

        Args:
            repo_path: Directory inside the repository. None means the
                process working directory at call time.
            runner: Command runner; defaults to GitProcessRunner
        """
        self._repo_path = repo_path
        self.runner = runner or GitProcessRunner()

    @property
    def repo_path(self) -> str:
        return self._repo_path or os.getcwd()

    def _git(self, *args: str):
        return self.runner.run(self.repo_path, "git", list(args))

    def is_git_repository(self) -> bool:
        """Check if the directory is inside a git repository."""
        return self._git("rev-parse", "--git-dir").ok

    def require_repository(self) -> None:
        """Raise NotARepositoryError unless inside a git repository."""
        if not self.is_git_repository():
            raise NotARepositoryError(self.repo_path)

    def get_toplevel(self) -> str:
        """Absolute path of the working tree containing the directory."""
        result = self._git("rev-parse", "--show-toplevel")
        if not result.ok:
            raise NotARepositoryError(self.repo_path)
        return result.stdout.strip()

    def get_repository_name(self) -> str:
        """Name of the repository (basename of the working tree root)."""
        return os.path.basename(self.get_toplevel())

    def get_current_branch(self) -> str:
        """Name of the checked-out branch ("HEAD" when detached)."""
        result = check_result(self._git("rev-parse", "--abbrev-ref", "HEAD"),
                              GitOperationError, "get_current_branch", None)
        return result.stdout.strip()

    def list_all_branches(self) -> List[str]:
        """List local branches and remote-tracking branches.

        Remote-tracking branches use their short form, e.g. ``origin/feature``.
        Symbolic ``<remote>/HEAD`` refs are skipped.
        """
        result = check_result(
            self._git("for-each-ref", "--format=%(refname)", HEADS_PREFIX, REMOTES_PREFIX),
            GitOperationError, "list_branches", None,
        )

        branches = []
        for line in result.stdout.splitlines():
            ref = line.strip()
            if ref.startswith(HEADS_PREFIX):
                branches.append(ref[len(HEADS_PREFIX):])
            elif ref.startswith(REMOTES_PREFIX):
                if ref.endswith("/HEAD"):
                    continue
                branches.append(ref[len(REMOTES_PREFIX):])
        logger.debug(f"Found {len(branches)} branches")
        return branches

    def branch_exists(self, branch_name: str) -> bool:
        """Check if a local or remote-tracking branch exists."""
        if not branch_name:
            return False
        return branch_name in self.list_all_branches()

    def is_remote_tracking_ref(self, ref_name: str) -> bool:
        """Check if ``ref_name`` (e.g. ``origin/feature``) is a remote-tracking branch."""
        if not ref_name:
            return False
        return self._git("rev-parse", "--verify", "--quiet", f"{REMOTES_PREFIX}{ref_name}").ok

    def delete_branch(self, branch_name: str) -> None:
        """Force-delete a local branch."""
        check_result(self._git("branch", "-D", branch_name), GitOperationError, "delete_branch", branch_name)
        logger.info(f"Deleted branch {branch_name}")
