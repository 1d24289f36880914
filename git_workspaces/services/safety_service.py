"""Removability verdicts for worktrees."""

from git_workspaces.constants import (
    WARNING_CHECK_MERGED_FAILED,
    WARNING_CHECK_UNCOMMITTED_FAILED,
    WARNING_CHECK_UNPUSHED_FAILED,
    WARNING_INVALID_REPOSITORY,
    WARNING_NOT_MERGED,
    WARNING_UNCOMMITTED,
    WARNING_UNPUSHED,
)
from git_workspaces.exceptions import InvalidWorkspaceError, StatusCheckFailedError
from git_workspaces.logging_config import get_logger
from git_workspaces.models.worktree import SafetyVerdict, Workspace
from git_workspaces.services.git.status import StatusInspector

logger = get_logger(__name__)


class SafetyEvaluator:
    """Combines status signals into a removability verdict."""

    def __init__(self, inspector: StatusInspector, main_branch: str = "main"):
        """Initialize the evaluator.

        Args:
            inspector: Status queries for the current directory
            main_branch: Branch a worktree must be merged into on the remote
        """
        self.inspector = inspector
        self.main_branch = main_branch

    def evaluate(self, workspace: Workspace) -> SafetyVerdict:
        """Evaluate whether a worktree can be removed safely.

        The caller must already be inside ``workspace.path``. Checks run in a
        fixed order (uncommitted, unpushed, merged). A failed check becomes a
        warning and later checks still run, except when the first check shows
        the directory is not a valid repository at all.
        """
        verdict = SafetyVerdict()
        logger.debug(f"Evaluating {workspace}")

        # Check 1: Uncommitted changes
        try:
            if self.inspector.has_uncommitted_changes():
                verdict.block(WARNING_UNCOMMITTED)
        except InvalidWorkspaceError as e:
            logger.debug(f"{workspace.path} is not a valid repository: {e}")
            verdict.block(WARNING_INVALID_REPOSITORY)
            return verdict
        except StatusCheckFailedError as e:
            verdict.block(WARNING_CHECK_UNCOMMITTED_FAILED.format(error=e))

        # Check 2: Unpushed commits
        try:
            if self.inspector.has_unpushed_commits():
                verdict.block(WARNING_UNPUSHED)
        except StatusCheckFailedError as e:
            verdict.block(WARNING_CHECK_UNPUSHED_FAILED.format(error=e))

        # Check 3: Merge status with the remote main branch
        try:
            if not self.inspector.is_merged_to_origin(self.main_branch):
                verdict.block(
                    WARNING_NOT_MERGED.format(remote=self.inspector.remote_name, branch=self.main_branch)
                )
        except StatusCheckFailedError as e:
            verdict.block(WARNING_CHECK_MERGED_FAILED.format(error=e))

        logger.debug(f"Verdict for {workspace.path}: can_remove={verdict.can_remove} {verdict.warnings}")
        return verdict
