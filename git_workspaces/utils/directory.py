"""Scoped changes of the process working directory."""

import os
from contextlib import contextmanager

from git_workspaces.exceptions import DirectoryAccessError
from git_workspaces.logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def directory_scope(path: str):
    """Run a block with ``path`` as the working directory.

    The original directory is restored on every exit path, including
    exceptions raised inside the block.

    Args:
        path: Directory to enter

    Yields:
        str: The directory that was entered

    Raises:
        DirectoryAccessError: ``path`` cannot be entered

    Example:
        with directory_scope(workspace.path):
            dirty = inspector.has_uncommitted_changes()
    """
    original = os.getcwd()
    try:
        os.chdir(path)
    except OSError as e:
        raise DirectoryAccessError(path, e.strerror or str(e)) from e

    logger.debug(f"Entered {path}")
    try:
        yield path
    finally:
        os.chdir(original)
        logger.debug(f"Restored working directory {original}")
