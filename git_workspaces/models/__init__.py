"""Data models for git-workspaces."""

from .worktree import CleanReport, EnvFile, ResolvedNames, SafetyVerdict, Workspace, WorkspaceStatus

__all__ = ["CleanReport", "EnvFile", "ResolvedNames", "SafetyVerdict", "Workspace", "WorkspaceStatus"]
