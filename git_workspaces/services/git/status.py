"""Status queries for the worktree in the current directory."""

import os
from typing import Optional

from git_workspaces.constants import INVALID_REPOSITORY_EXIT_CODE, INVALID_REPOSITORY_MARKERS
from git_workspaces.exceptions import InvalidWorkspaceError, StatusCheckFailedError
from git_workspaces.logging_config import get_logger
from git_workspaces.services.git.runner import GitProcessRunner, ProcessResult, ProcessRunner

logger = get_logger(__name__)


def _is_invalid_repository(result: ProcessResult) -> bool:
    """Check whether a failed git call means the directory is not a usable repository."""
    if result.returncode == INVALID_REPOSITORY_EXIT_CODE:
        return True
    output = result.output.lower()
    return any(marker in output for marker in INVALID_REPOSITORY_MARKERS)


class StatusInspector:
    """Answers questions about the worktree in the process working directory.

    Callers must change into the worktree first (see
    ``git_workspaces.utils.directory.directory_scope``). Failures are raised
    as StatusCheckFailedError and never reported as False.
    """

    def __init__(self, runner: Optional[ProcessRunner] = None, remote_name: str = "origin"):
        self.runner = runner or GitProcessRunner()
        self.remote_name = remote_name

    def _git(self, *args: str) -> ProcessResult:
        return self.runner.run(os.getcwd(), "git", list(args))

    def current_branch(self) -> str:
        """Name of the checked-out branch ("HEAD" when detached)."""
        result = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if not result.ok:
            raise StatusCheckFailedError("current_branch", f"failed to get current branch: {result.describe()}")
        return result.stdout.strip()

    def has_uncommitted_changes(self) -> bool:
        """Check for modified, staged or untracked files.

        Raises:
            InvalidWorkspaceError: The directory is not a valid repository
            StatusCheckFailedError: git status failed for another reason
        """
        result = self._git("status", "--porcelain")
        if not result.ok:
            message = f"failed to check git status: {result.describe()}"
            if _is_invalid_repository(result):
                raise InvalidWorkspaceError("uncommitted_changes", message)
            raise StatusCheckFailedError("uncommitted_changes", message)
        return bool(result.stdout.strip())

    def has_unpushed_commits(self) -> bool:
        """Check for local commits not on the branch's upstream.

        A branch without an upstream counts as unpushed, since its
        relationship to the remote is unknown.
        """
        branch = self.current_branch()

        upstream = self._git("rev-parse", "--abbrev-ref", f"{branch}@{{upstream}}")
        if not upstream.ok:
            logger.debug(f"Branch {branch} has no upstream configured")
            return True

        result = self._git("rev-list", "--count", f"{branch}@{{upstream}}..{branch}")
        if not result.ok:
            raise StatusCheckFailedError(
                "unpushed_commits", f"failed to check unpushed commits: {result.describe()}"
            )

        count = result.stdout.strip()
        try:
            ahead = int(count)
        except ValueError:
            raise StatusCheckFailedError("unpushed_commits", f"unexpected commit count: {count!r}")

        logger.debug(f"Branch {branch} is {ahead} commit(s) ahead of upstream")
        return ahead != 0

    def is_merged_to_origin(self, target_branch: str) -> bool:
        """Check if the current branch is contained in ``<remote>/<target_branch>``.

        The remote branch is fetched first; a failed fetch raises instead of
        reporting "not merged".
        """
        current = self.current_branch()

        fetch = self._git("fetch", self.remote_name, target_branch)
        if not fetch.ok:
            raise StatusCheckFailedError(
                "merge_status", f"failed to fetch {self.remote_name}: {fetch.describe()}"
            )

        result = self._git("branch", "-r", "--contains", current)
        if not result.ok:
            raise StatusCheckFailedError("merge_status", f"failed to check merge status: {result.describe()}")

        target_ref = f"{self.remote_name}/{target_branch}"
        for line in result.stdout.splitlines():
            if line.strip() == target_ref:
                return True
        return False
