"""Derive branch and directory names from issue or branch identifiers."""

import re

from git_workspaces.constants import FALLBACK_DIR_NAME, IMPL_BRANCH_SUFFIX
from git_workspaces.models.worktree import ResolvedNames

# Path separators plus characters Windows rejects in file names
_UNSAFE_CHARS = re.compile(r'[/\\*?:<>|"]')
_HYPHEN_RUNS = re.compile(r"-+")


def sanitize_branch_name_for_directory(branch_name: str) -> str:
    """Convert a branch name to a name that is safe to use as a directory.

    Unsafe characters become hyphens, runs of hyphens collapse to one and
    leading/trailing hyphens are dropped.

    Examples:
        >>> sanitize_branch_name_for_directory("feature/auth:*test?")
        'feature-auth-test'
        >>> sanitize_branch_name_for_directory("///")
        'branch'
    """
    sanitized = _UNSAFE_CHARS.sub("-", branch_name)
    sanitized = _HYPHEN_RUNS.sub("-", sanitized)
    sanitized = sanitized.strip("-")
    return sanitized or FALLBACK_DIR_NAME


def resolve(identifier: str) -> ResolvedNames:
    """Resolve an identifier into a branch name and directory suffix.

    A slash-containing identifier is already a branch name; anything else is
    treated as an issue token and gets an ``/impl`` branch.
    """
    if "/" in identifier:
        return ResolvedNames(
            branch_name=identifier,
            dir_suffix=sanitize_branch_name_for_directory(identifier),
        )
    return ResolvedNames(branch_name=f"{identifier}{IMPL_BRANCH_SUFFIX}", dir_suffix=identifier)


def workspace_dir_name(repo_name: str, dir_suffix: str) -> str:
    """Directory name used for a worktree of ``repo_name``."""
    return f"{repo_name}-{dir_suffix}"
