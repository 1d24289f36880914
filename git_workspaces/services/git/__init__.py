"""Git operations for git-workspaces.

Every call goes through a ProcessRunner so tests can substitute canned results.
"""

from .env_files import EnvFileService
from .naming import resolve, sanitize_branch_name_for_directory, workspace_dir_name
from .repository import RepositoryService
from .runner import GitProcessRunner, ProcessResult, ProcessRunner, ProcessStatus, check_result
from .status import StatusInspector
from .worktrees import WorktreeRepository, mark_current, parse_worktree_porcelain

__all__ = [
    "EnvFileService",
    "GitProcessRunner",
    "ProcessResult",
    "ProcessRunner",
    "ProcessStatus",
    "RepositoryService",
    "StatusInspector",
    "WorktreeRepository",
    "check_result",
    "mark_current",
    "parse_worktree_porcelain",
    "resolve",
    "sanitize_branch_name_for_directory",
    "workspace_dir_name",
]
