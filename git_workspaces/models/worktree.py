"""Worktree data models."""

import os
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class ResolvedNames:
    """Branch name and directory suffix derived from an identifier."""

    branch_name: str
    dir_suffix: str


@dataclass
class Workspace:
    """Information about a git worktree."""

    path: str
    branch: str = ""  # Empty when detached
    commit: str = ""
    is_detached: bool = False
    is_current: bool = False  # Computed from the process working directory
    is_main: bool = False  # First entry git lists is the main working tree

    @property
    def dir_name(self) -> str:
        """Directory name of the worktree."""
        return os.path.basename(self.path.rstrip(os.sep)) or self.path

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        markers = ""
        if self.is_main:
            markers += " (main)"
        if self.is_current:
            markers += " *"
        return f"{branch} @ {self.path}{markers}"


@dataclass
class SafetyVerdict:
    """Whether a worktree can be removed without losing work."""

    can_remove: bool = True
    warnings: List[str] = field(default_factory=list)

    def block(self, warning: str) -> None:
        """Record a reason preventing removal."""
        self.warnings.append(warning)
        self.can_remove = False


@dataclass
class WorkspaceStatus:
    """A worktree paired with its removability verdict."""

    workspace: Workspace
    verdict: SafetyVerdict

    @property
    def can_remove(self) -> bool:
        return self.verdict.can_remove

    @property
    def warnings(self) -> List[str]:
        return self.verdict.warnings


@dataclass
class CleanReport:
    """Outcome of a batch clean."""

    statuses: List[WorkspaceStatus] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)  # (path, error)
    dry_run: bool = False
    aborted: bool = False

    @property
    def removable(self) -> List[WorkspaceStatus]:
        return [s for s in self.statuses if s.can_remove]

    @property
    def non_removable(self) -> List[WorkspaceStatus]:
        return [s for s in self.statuses if not s.can_remove]

    @property
    def success_count(self) -> int:
        return len(self.removed)

    @property
    def failure_count(self) -> int:
        return len(self.failed)


@dataclass(frozen=True)
class EnvFile:
    """An untracked environment file found in a repository."""

    relative_path: str  # Relative to repository root
    absolute_path: str
