"""Tests for the git process runner"""
import pytest

from git_workspaces.exceptions import CreateFailedError, GitOperationError
from git_workspaces.services.git.runner import (
    GitProcessRunner,
    ProcessResult,
    ProcessStatus,
    check_result,
)


class TestGitProcessRunner:
    """Test running real commands."""

    def test_success(self, git_repo):
        """A successful command is classified as SUCCESS."""
        result = GitProcessRunner().run(git_repo.working_dir, "git", ["rev-parse", "--git-dir"])
        assert result.ok
        assert result.status is ProcessStatus.SUCCESS
        assert result.returncode == 0
        assert result.stdout.strip() == ".git"

    def test_failure_outside_repository(self, temp_dir):
        """git failing keeps its exit code and output."""
        result = GitProcessRunner().run(str(temp_dir), "git", ["status", "--porcelain"])
        assert not result.ok
        assert result.status is ProcessStatus.FAILED
        assert result.returncode == 128
        assert "not a git repository" in result.output.lower()

    def test_missing_directory(self, temp_dir):
        """A missing working directory is a failure, not a missing executable."""
        result = GitProcessRunner().run(str(temp_dir / "gone"), "git", ["status"])
        assert result.status is ProcessStatus.FAILED
        assert result.returncode is None
        assert "no such directory" in result.stderr

    def test_command_not_found(self, temp_dir):
        """An unknown executable is reported as NOT_FOUND."""
        result = GitProcessRunner().run(str(temp_dir), "git-workspaces-no-such-tool", [])
        assert result.status is ProcessStatus.NOT_FOUND
        assert not result.ok


class TestProcessResult:
    """Test result helpers."""

    def test_output_combines_streams(self):
        result = ProcessResult("git x", ProcessStatus.FAILED, 1, stdout="out\n", stderr="  err\n")
        assert result.output == "out\nerr"

    def test_describe_with_output(self):
        result = ProcessResult("git x", ProcessStatus.FAILED, 1, stderr="fatal: nope")
        assert result.describe() == "'git x' failed (exit 1): fatal: nope"

    def test_describe_without_output(self):
        result = ProcessResult("git x", ProcessStatus.FAILED, 2)
        assert result.describe() == "'git x' failed with exit code 2"

    def test_describe_not_found(self):
        result = ProcessResult("gitx", ProcessStatus.NOT_FOUND)
        assert result.describe() == "'gitx' not found"


class TestCheckResult:
    """Test conversion of failed results into typed errors."""

    def test_returns_successful_result(self):
        result = ProcessResult("git x", ProcessStatus.SUCCESS, 0, stdout="ok")
        assert check_result(result) is result

    def test_raises_typed_error_with_output(self):
        result = ProcessResult("git worktree add", ProcessStatus.FAILED, 128,
                               stderr="fatal: '/tmp/x' already exists")
        with pytest.raises(CreateFailedError) as exc_info:
            check_result(result, CreateFailedError, "/tmp/x")
        assert "already exists" in str(exc_info.value)
        assert exc_info.value.target == "/tmp/x"

    def test_default_error(self):
        result = ProcessResult("git x", ProcessStatus.FAILED, 1)
        with pytest.raises(GitOperationError):
            check_result(result, GitOperationError, "x")
