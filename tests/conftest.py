"""Pytest fixtures for git-workspaces tests"""
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_workspaces.config import Config
from git_workspaces.models.worktree import Workspace
from git_workspaces.services.git.runner import ProcessResult, ProcessStatus


class ScriptedRunner:
    """ProcessRunner double answering git calls by their leading arguments.

    Unscripted calls succeed with empty output. ``run`` is a Mock so calls
    can be asserted on.
    """

    def __init__(self):
        self.responses = {}
        self.run = Mock(side_effect=self._run)

    def respond(self, *prefix, stdout="", stderr="", returncode=0):
        status = ProcessStatus.SUCCESS if returncode == 0 else ProcessStatus.FAILED
        self.responses[tuple(prefix)] = ProcessResult(
            command=" ".join(("git",) + tuple(prefix)),
            status=status,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )

    def _run(self, directory, command, args=()):
        args = tuple(args)
        for prefix in sorted(self.responses, key=len, reverse=True):
            if args[:len(prefix)] == prefix:
                return self.responses[prefix]
        return ProcessResult(command=" ".join((command,) + args), status=ProcessStatus.SUCCESS, returncode=0)

    def was_called_with(self, *prefix) -> bool:
        return any(
            tuple(c.args[2])[:len(prefix)] == prefix for c in self.run.call_args_list
        )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve symlinks (e.g. /tmp -> /private/tmp) so paths match git's output
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()
    repo.config_writer().set_value("commit", "gpgsign", "false").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Git repository whose main branch is pushed to a local bare 'origin'."""
    remote_path = temp_dir / "remote.git"
    git.Repo.init(remote_path, bare=True)

    git_repo.create_remote('origin', str(remote_path))
    git_repo.git.push('-u', 'origin', 'main')

    yield git_repo


@pytest.fixture
def in_repo(git_repo, monkeypatch):
    """Run the test from inside the repository's main worktree."""
    monkeypatch.chdir(git_repo.working_dir)
    return git_repo


@pytest.fixture
def scripted_runner():
    """A ProcessRunner double with scripted responses."""
    return ScriptedRunner()


@pytest.fixture
def mock_ui():
    """A UserInterface double that confirms everything."""
    ui = Mock()
    ui.confirm = Mock(return_value=True)
    return ui


@pytest.fixture
def workspace_dirs(temp_dir):
    """Real directories standing in for linked worktrees."""
    paths = {}
    for name in ("repo", "repo-a", "repo-b", "repo-c"):
        path = temp_dir / name
        path.mkdir()
        paths[name] = str(path)
    return paths


@pytest.fixture
def sample_workspaces(workspace_dirs):
    """Main worktree, two linked worktrees and a detached one."""
    return [
        Workspace(path=workspace_dirs["repo"], branch="main", commit="aaa", is_main=True),
        Workspace(path=workspace_dirs["repo-a"], branch="a/impl", commit="bbb"),
        Workspace(path=workspace_dirs["repo-b"], branch="b/impl", commit="ccc"),
        Workspace(path=workspace_dirs["repo-c"], branch="", commit="ddd", is_detached=True),
    ]


def commit_file(repo_path, name, content="content\n", message=None):
    """Write a file in a worktree and commit it there."""
    worktree_repo = git.Repo(repo_path)
    try:
        (Path(repo_path) / name).write_text(content)
        worktree_repo.git.add(name)
        worktree_repo.git.commit("-m", message or f"Add {name}")
    finally:
        worktree_repo.close()


@pytest.fixture
def commit():
    """Factory committing a file inside any worktree."""
    return commit_file


@pytest.fixture(autouse=True)
def restore_cwd():
    """Put the working directory back after every test."""
    original = os.getcwd()
    yield
    os.chdir(original)
