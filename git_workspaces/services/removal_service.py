"""Safety-gated removal of worktrees, one at a time or in bulk."""

import os
from typing import Optional

from git_workspaces.config import Config
from git_workspaces.constants import WARNING_DIRECTORY_ACCESS, WARNING_EVALUATION_FAILED
from git_workspaces.exceptions import (
    BatchRemovalError,
    DirectoryAccessError,
    GitOperationError,
)
from git_workspaces.logging_config import get_logger
from git_workspaces.models.worktree import CleanReport, SafetyVerdict, Workspace, WorkspaceStatus
from git_workspaces.services.display_service import UserInterface, format_removal_summary
from git_workspaces.services.git.worktrees import WorktreeRepository
from git_workspaces.services.safety_service import SafetyEvaluator
from git_workspaces.utils.directory import directory_scope

logger = get_logger(__name__)

CONTINUE_PROMPT = "Do you want to continue? (y/N):"


class RemovalOrchestrator:
    """Removes worktrees only after they have been checked for unsaved work.

    Every safety check runs inside ``directory_scope`` so the working
    directory is back where it started before anything is removed.
    A worktree the process is inside is left for the main worktree before
    git deletes it.
    """

    def __init__(
        self,
        worktrees: WorktreeRepository,
        evaluator: SafetyEvaluator,
        ui: UserInterface,
        config: Optional[Config] = None,
    ):
        self.worktrees = worktrees
        self.evaluator = evaluator
        self.ui = ui
        self.config = config or Config()

    def remove_workspace(
        self,
        identifier: Optional[str] = None,
        workspace: Optional[Workspace] = None,
        force: bool = False,
    ) -> bool:
        """Remove a single worktree.

        Args:
            identifier: Issue number or branch the worktree was created for
            workspace: Worktree to remove, e.g. one picked from a list
            force: Skip the safety checks and the confirmation

        Returns:
            True if the worktree was removed, False if the user declined

        Raises:
            WorktreeNotFoundError: ``identifier`` matches no worktree
            DirectoryAccessError: The worktree directory cannot be entered
            RemoveFailedError: git refused the removal
        """
        if workspace is None:
            if not identifier:
                raise ValueError("Either identifier or workspace is required")
            workspace = self.worktrees.get_for_identifier(identifier)

        force = force or self.config.force
        if not force:
            with directory_scope(workspace.path):
                verdict = self.evaluator.evaluate(workspace)

            if verdict.warnings:
                self.ui.show_warnings(verdict.warnings)
                if not self.ui.confirm(CONTINUE_PROMPT):
                    self.ui.info("Aborted.")
                    logger.info(f"Removal of {workspace.path} declined")
                    return False

        self._step_out_of(workspace)
        # Remove the worktree that was evaluated, not the conventional path
        self.worktrees.remove_by_path(workspace.path)
        self.ui.success(f"Removed worktree at {workspace.path}")

        if self.config.auto_remove_branch and workspace.branch:
            self._delete_branch(workspace.branch)
        return True

    def clean(self, force: bool = False, dry_run: bool = False) -> CleanReport:
        """Remove every worktree that passes the safety checks.

        The main worktree, detached worktrees and trunk branches are never
        considered. Individual removal failures do not stop the batch.

        Returns:
            Report of what was evaluated, removed and failed

        Raises:
            BatchRemovalError: At least one removal failed. Carries the report;
                the successful removals are kept.
        """
        force = force or self.config.force
        dry_run = dry_run or self.config.dry_run
        report = CleanReport(dry_run=dry_run)

        self.ui.info("Checking worktrees...")
        for wt in self.worktrees.list():
            if wt.is_main or not wt.branch or self.config.is_trunk_branch(wt.branch):
                logger.debug(f"Skipping {wt}")
                continue
            report.statuses.append(WorkspaceStatus(wt, self._check_workspace(wt)))

        removable = report.removable
        self.ui.show_clean_report(removable, report.non_removable)

        if not removable:
            return report

        if dry_run:
            self.ui.info("\nDry-run mode: no changes made.")
            return report

        if not force:
            count = len(removable)
            noun = "worktree" if count == 1 else "worktrees"
            if not self.ui.confirm(f"\nRemove {count} {noun}? (y/N):"):
                self.ui.info("Aborted.")
                report.aborted = True
                return report

        for status in removable:
            wt = status.workspace
            try:
                self._step_out_of(wt)
                self.worktrees.remove_by_path(wt.path)
            except (GitOperationError, DirectoryAccessError) as e:
                logger.error(f"Failed to remove {wt.path}: {e}")
                self.ui.error(f"Failed to remove {wt.path}: {e}")
                report.failed.append((wt.path, str(e)))
                continue

            report.removed.append(wt.path)
            self.ui.success(f"Removed {wt.path}")
            if self.config.auto_remove_branch:
                self._delete_branch(wt.branch)

        self.ui.info(f"\n{format_removal_summary(report.removed, report.failed)}")
        if report.failure_count > 0:
            raise BatchRemovalError(report)
        return report

    def _check_workspace(self, workspace: Workspace) -> SafetyVerdict:
        """Evaluate one worktree inside its directory, never raising."""
        try:
            with directory_scope(workspace.path):
                return self.evaluator.evaluate(workspace)
        except DirectoryAccessError as e:
            verdict = SafetyVerdict()
            verdict.block(WARNING_DIRECTORY_ACCESS.format(error=e.reason or e))
            return verdict
        except Exception as e:
            logger.error(f"Error evaluating {workspace.path}: {e}", exc_info=True)
            verdict = SafetyVerdict()
            verdict.block(WARNING_EVALUATION_FAILED.format(error=e))
            return verdict

    def _step_out_of(self, workspace: Workspace) -> None:
        """Move to the main worktree if the process is inside ``workspace``."""
        if not workspace.is_current:
            return
        main_path = self.worktrees.main_worktree_path()
        logger.info(f"Leaving {workspace.path} for {main_path} before removal")
        try:
            os.chdir(main_path)
        except OSError as e:
            raise DirectoryAccessError(main_path, e.strerror or str(e)) from e

    def _delete_branch(self, branch: str) -> None:
        """Delete a local branch, reporting failure as a warning."""
        try:
            self.worktrees.repository.delete_branch(branch)
        except GitOperationError as e:
            logger.warning(f"Could not delete branch {branch}: {e}")
            self.ui.warning(f"Could not delete branch {branch}: {e}")
            return
        self.ui.success(f"Deleted branch {branch}")
