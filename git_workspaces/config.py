"""Configuration handling for git-workspaces"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class Config:
    """Configuration for git-workspaces with validation."""

    # Branch handling
    main_branch: str = "main"
    trunk_branches: List[str] = field(default_factory=lambda: ["main", "master"])
    remote_name: str = "origin"
    base_branch: str = "main"  # Default base for new worktrees

    # Removal behaviour
    auto_remove_branch: bool = False  # Delete the local branch after removing its worktree
    copy_envs: Optional[bool] = None  # None = ask the user

    # Execution modes
    force: bool = False
    dry_run: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_main_branch()
        self._validate_trunk_branches()
        self._validate_remote_name()
        self._validate_base_branch()

    def _validate_main_branch(self):
        """Validate main_branch is not empty."""
        if not self.main_branch or not self.main_branch.strip():
            raise ValueError("main_branch cannot be empty")
        self.main_branch = self.main_branch.strip()

    def _validate_trunk_branches(self):
        """Validate trunk_branches list."""
        if not isinstance(self.trunk_branches, list):
            raise ValueError("trunk_branches must be a list")

        # The main branch is always a trunk branch
        if self.main_branch not in self.trunk_branches:
            self.trunk_branches.append(self.main_branch)

    def _validate_remote_name(self):
        """Validate remote_name is a single non-empty token."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        if "/" in self.remote_name.strip():
            raise ValueError(f"remote_name must not contain '/', got '{self.remote_name}'")
        self.remote_name = self.remote_name.strip()

    def _validate_base_branch(self):
        """Validate base_branch is not empty."""
        if not self.base_branch or not self.base_branch.strip():
            raise ValueError("base_branch cannot be empty")
        self.base_branch = self.base_branch.strip()

    def is_trunk_branch(self, branch_name: str) -> bool:
        """Check whether a branch is one of the repository's trunk branches."""
        return branch_name in self.trunk_branches

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "main_branch": self.main_branch,
            "trunk_branches": self.trunk_branches,
            "remote_name": self.remote_name,
            "base_branch": self.base_branch,
            "auto_remove_branch": self.auto_remove_branch,
            "copy_envs": self.copy_envs,
            "force": self.force,
            "dry_run": self.dry_run,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "main_branch",
            "trunk_branches",
            "remote_name",
            "base_branch",
            "auto_remove_branch",
            "copy_envs",
            "force",
            "dry_run",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
