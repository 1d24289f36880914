"""Custom exceptions for git-workspaces"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from git_workspaces.models.worktree import CleanReport


class GitWorkspacesError(Exception):
    """Base exception for all git-workspaces errors."""
    pass


class GitOperationError(GitWorkspacesError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotARepositoryError(GitOperationError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        super().__init__("check_repository", path, "not in a git repository")


class WorktreeNotFoundError(GitOperationError):
    """Exception raised when an identifier does not resolve to any worktree."""

    def __init__(self, identifier: str):
        super().__init__("find_worktree", identifier, "worktree not found")


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        super().__init__("find_branch", branch, "Branch not found")


class CreateFailedError(GitOperationError):
    """Exception raised when git refuses to create a worktree."""

    def __init__(self, target: str, message: Optional[str] = None):
        super().__init__("create_worktree", target, message)


class RemoveFailedError(GitOperationError):
    """Exception raised when git refuses to remove a worktree."""

    def __init__(self, target: str, message: Optional[str] = None):
        super().__init__("remove_worktree", target, message)


class StatusCheckFailedError(GitOperationError):
    """Exception raised when a status query fails or returns unparseable output."""

    def __init__(self, check: str, message: Optional[str] = None):
        self.check = check
        super().__init__(check, message=message)


class InvalidWorkspaceError(StatusCheckFailedError):
    """Exception raised when git reports the directory is not a valid repository."""


class BatchRemovalError(GitOperationError):
    """Exception raised when one or more worktrees fail to be removed during a clean."""

    def __init__(self, report: "CleanReport"):
        self.report = report
        super().__init__(
            "clean",
            message=f"failed to remove {report.failure_count} worktree(s)",
        )


class DirectoryAccessError(GitWorkspacesError):
    """Exception raised when a worktree directory cannot be entered."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        error_msg = f"Could not access directory '{path}'"
        if reason:
            error_msg += f": {reason}"
        super().__init__(error_msg)
