"""Utility helpers for git-workspaces."""

from .directory import directory_scope

__all__ = ["directory_scope"]
