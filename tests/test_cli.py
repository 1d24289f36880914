"""Tests for the gw command line"""
import os
from pathlib import Path
import pytest

from git_workspaces.cli.args import parse_args
from git_workspaces.cli.main import build_config, main


class TestParseArgs:

    def test_start(self):
        args = parse_args(["start", "42", "develop", "--copy-envs"])
        assert args.command == "start"
        assert args.identifier == "42"
        assert args.base_branch == "develop"
        assert args.copy_envs is True

    def test_start_defaults(self):
        args = parse_args(["start", "42"])
        assert args.base_branch is None
        assert args.copy_envs is None

    def test_copy_flags_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["start", "42", "--copy-envs", "--no-copy-envs"])

    def test_clean(self):
        args = parse_args(["--main-branch", "trunk", "clean", "--dry-run", "--force"])
        assert args.main_branch == "trunk"
        assert args.dry_run and args.force

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestBuildConfig:

    def test_base_branch_defaults_to_main_branch(self):
        config = build_config(parse_args(["--main-branch", "develop", "start", "1"]))
        assert config.base_branch == "develop"
        assert config.is_trunk_branch("develop")

    def test_end_flags(self):
        config = build_config(parse_args(["--remote", "upstream", "end", "1", "--force", "--auto-remove-branch"]))
        assert config.force is True
        assert config.auto_remove_branch is True
        assert config.remote_name == "upstream"
        assert config.dry_run is False

    def test_list_has_safe_defaults(self):
        config = build_config(parse_args(["list"]))
        assert config.force is False
        assert config.copy_envs is None


class TestMain:

    def test_list(self, in_repo):
        assert main(["list"]) == 0

    def test_outside_repository(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert main(["list"]) == 1

    def test_start_and_end(self, in_repo):
        assert main(["start", "77", "--no-copy-envs"]) == 0
        path = Path(in_repo.working_dir).parent / "test_repo-77"
        assert path.is_dir()

        # New local branch without upstream: needs --force past the safety checks
        assert main(["end", "77", "--force"]) == 0
        assert not path.exists()

    def test_start_copies_env_files(self, in_repo):
        Path(in_repo.working_dir, ".env").write_text("TOKEN=abc\n")

        assert main(["start", "env-test", "--copy-envs"]) == 0

        copied = Path(in_repo.working_dir).parent / "test_repo-env-test" / ".env"
        assert copied.read_text() == "TOKEN=abc\n"

    def test_start_existing(self, in_repo):
        assert main(["start", "5", "--no-copy-envs"]) == 0
        assert main(["start", "5", "--no-copy-envs"]) == 1

    def test_end_unknown(self, in_repo):
        assert main(["end", "404"]) == 1

    def test_checkout(self, in_repo):
        in_repo.git.branch("feature/cli")
        assert main(["checkout", "feature/cli", "--no-copy-envs"]) == 0
        assert os.path.isdir(Path(in_repo.working_dir).parent / "test_repo-feature-cli")

    def test_clean_dry_run(self, in_repo):
        assert main(["start", "6", "--no-copy-envs"]) == 0
        assert main(["clean", "--dry-run"]) == 0
        assert (Path(in_repo.working_dir).parent / "test_repo-6").is_dir()

    def test_end_from_inside_worktree_deletes_branch(self, in_repo, monkeypatch):
        assert main(["start", "42", "--no-copy-envs"]) == 0
        path = Path(in_repo.working_dir).parent / "test_repo-42"
        monkeypatch.chdir(path)

        assert main(["end", "42", "--force", "--auto-remove-branch"]) == 0

        assert not path.exists()
        assert os.getcwd() == in_repo.working_dir
        assert "42/impl" not in [head.name for head in in_repo.heads]

    def test_clean_from_inside_worktree(self, git_repo_with_remote, monkeypatch):
        """Pushed, merged worktrees are all removed even when one holds the working directory."""
        monkeypatch.chdir(git_repo_with_remote.working_dir)
        for identifier in ("1", "2"):
            assert main(["start", identifier, "--no-copy-envs"]) == 0
            git_repo_with_remote.git.push("-u", "origin", f"{identifier}/impl")
        parent = Path(git_repo_with_remote.working_dir).parent
        monkeypatch.chdir(parent / "test_repo-1")

        assert main(["clean", "--force", "--auto-remove-branch"]) == 0

        assert not (parent / "test_repo-1").exists()
        assert not (parent / "test_repo-2").exists()
        assert os.getcwd() == git_repo_with_remote.working_dir
        heads = [head.name for head in git_repo_with_remote.heads]
        assert "1/impl" not in heads and "2/impl" not in heads
