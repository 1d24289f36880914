"""Discovery and copying of untracked environment files."""

import os
import shutil
from typing import Iterable, List, Optional, Set

from git_workspaces.constants import ENV_FILE_MODE, ENV_FILE_PREFIX, ENV_SKIP_DIRS
from git_workspaces.exceptions import GitOperationError, GitWorkspacesError
from git_workspaces.logging_config import get_logger
from git_workspaces.models.worktree import EnvFile
from git_workspaces.services.git.runner import GitProcessRunner, ProcessRunner, check_result

logger = get_logger(__name__)


class EnvFileService:
    """Service for carrying ``.env*`` files over to new worktrees."""

    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or GitProcessRunner()

    def _tracked_files(self, repo_path: str) -> Set[str]:
        result = check_result(
            self.runner.run(repo_path, "git", ["ls-files"]),
            GitOperationError, "list_tracked_files", repo_path,
        )
        return {line for line in result.stdout.splitlines() if line}

    def find_untracked_env_files(self, repo_path: str) -> List[EnvFile]:
        """Find ``.env*`` files in the repository that git does not track.

        Dependency and build directories are skipped, as are unreadable ones.

        Args:
            repo_path: Repository root

        Returns:
            Untracked environment files, sorted by relative path
        """
        candidates = []
        for root, dirs, files in os.walk(repo_path):
            dirs[:] = [d for d in dirs if d not in ENV_SKIP_DIRS]
            for name in files:
                if name.startswith(ENV_FILE_PREFIX):
                    abs_path = os.path.join(root, name)
                    candidates.append(os.path.relpath(abs_path, repo_path))

        if not candidates:
            return []

        tracked = self._tracked_files(repo_path)
        env_files = [
            EnvFile(relative_path=rel, absolute_path=os.path.join(repo_path, rel))
            for rel in sorted(candidates)
            # git ls-files always reports paths with forward slashes
            if rel.replace(os.sep, "/") not in tracked
        ]
        logger.debug(f"Found {len(env_files)} untracked env files in {repo_path}")
        return env_files

    def copy_env_files(self, env_files: Iterable[EnvFile], source_root: str, dest_root: str) -> List[str]:
        """Copy environment files into another worktree.

        Files are written with owner-only permissions.

        Returns:
            Relative paths of the copied files
        """
        copied = []
        for env_file in env_files:
            src = os.path.join(source_root, env_file.relative_path)
            dest = os.path.join(dest_root, env_file.relative_path)
            try:
                os.makedirs(os.path.dirname(dest), exist_ok=True)
                shutil.copyfile(src, dest)
                os.chmod(dest, ENV_FILE_MODE)
            except OSError as e:
                raise GitWorkspacesError(f"Failed to copy {env_file.relative_path}: {e}") from e
            logger.info(f"Copied: {env_file.relative_path}")
            copied.append(env_file.relative_path)
        return copied
