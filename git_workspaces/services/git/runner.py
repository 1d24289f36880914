"""Subprocess boundary for git invocations."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence, Type

import git

from git_workspaces.exceptions import GitOperationError
from git_workspaces.logging_config import get_logger

logger = get_logger(__name__)


class ProcessStatus(Enum):
    """Classification of a finished command."""
    SUCCESS = "success"
    FAILED = "failed"  # Non-zero exit
    NOT_FOUND = "not-found"  # Executable could not be located


@dataclass
class ProcessResult:
    """Outcome of running a command."""

    command: str
    status: ProcessStatus
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProcessStatus.SUCCESS

    @property
    def output(self) -> str:
        """Combined stdout and stderr, stripped."""
        parts = [p.strip() for p in (self.stdout, self.stderr) if p and p.strip()]
        return "\n".join(parts)

    def describe(self) -> str:
        """Human readable failure description in the style of git errors."""
        if self.status is ProcessStatus.NOT_FOUND:
            return f"'{self.command}' not found"
        output = self.output
        if output:
            return f"'{self.command}' failed (exit {self.returncode}): {output}"
        return f"'{self.command}' failed with exit code {self.returncode}"


class ProcessRunner(Protocol):
    """Anything able to run a command in a directory."""

    def run(self, directory: Optional[str], command: str, args: Sequence[str] = ()) -> ProcessResult:
        ...


class GitProcessRunner:
    """Runs commands through GitPython's command executor."""

    def run(self, directory: Optional[str], command: str = "git", args: Sequence[str] = ()) -> ProcessResult:
        """Run ``command args...`` in ``directory`` and classify the result.

        Args:
            directory: Working directory; None means the current directory
            command: Executable to run
            args: Arguments passed to the executable

        Returns:
            ProcessResult. Never raises for a failed or missing command.
        """
        cmd_line = " ".join([command, *args])
        cwd = directory or os.getcwd()

        if not os.path.isdir(cwd):
            logger.debug(f"Cannot run '{cmd_line}': directory {cwd} does not exist")
            return ProcessResult(
                command=cmd_line,
                status=ProcessStatus.FAILED,
                stderr=f"no such directory: {cwd}",
            )

        logger.debug(f"Running '{cmd_line}' in {cwd}")
        try:
            status, stdout, stderr = git.Git(cwd).execute(
                [command, *args],
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.debug(f"Command not found: {e}")
            return ProcessResult(command=cmd_line, status=ProcessStatus.NOT_FOUND, stderr=str(e))

        result = ProcessResult(
            command=cmd_line,
            status=ProcessStatus.SUCCESS if status == 0 else ProcessStatus.FAILED,
            returncode=status,
            stdout=stdout or "",
            stderr=stderr or "",
        )
        if not result.ok:
            logger.debug(f"'{cmd_line}' exited with {status}: {result.output}")
        return result


def check_result(
    result: ProcessResult,
    error_cls: Type[GitOperationError] = GitOperationError,
    *args,
) -> ProcessResult:
    """Raise ``error_cls(*args, message)`` when the result is not a success.

    Args:
        result: Result to check
        error_cls: Typed error to raise
        *args: Leading positional arguments for the error

    Returns:
        The same result, for chaining
    """
    if not result.ok:
        raise error_cls(*args, result.describe())
    return result
