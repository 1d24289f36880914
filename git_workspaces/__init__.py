"""
git-workspaces - One git worktree per issue, removed only when it is safe
"""

from .__version__ import __version__
from .services.git.worktrees import WorktreeRepository
from .services.removal_service import RemovalOrchestrator
from .cli.main import main

__all__ = ["WorktreeRepository", "RemovalOrchestrator", "main", "__version__"]
