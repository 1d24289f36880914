"""Tests for logging setup"""
import logging
import pytest

from git_workspaces.logging_config import ColoredFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the root and GitPython loggers as they were."""
    root = logging.getLogger()
    git_logger = logging.getLogger("git")
    handlers, level, git_level = root.handlers[:], root.level, git_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    git_logger.setLevel(git_level)


class TestGetLogger:

    @pytest.mark.parametrize("module,expected", [
        ("git_workspaces.services.git.worktrees", "gw.git.worktrees"),
        ("git_workspaces.services.removal_service", "gw.removal_service"),
        ("git_workspaces.cli.main", "gw.cli.main"),
    ])
    def test_names(self, module, expected):
        assert get_logger(module).name == expected

    def test_kept_out_of_gitpython_hierarchy(self):
        logger = get_logger("git_workspaces.services.git.status")
        assert logger.parent is not logging.getLogger("git")
        assert not logger.name.startswith("git.")


class TestSetupLogging:

    @pytest.mark.parametrize("verbose,debug,level", [
        (False, False, logging.WARNING),
        (True, False, logging.INFO),
    ])
    def test_levels(self, verbose, debug, level):
        setup_logging(verbose=verbose, debug=debug)
        assert logging.getLogger().level == level
        assert len(logging.getLogger().handlers) == 1

    def test_gitpython_quiet_unless_debug(self):
        setup_logging(verbose=True)
        assert logging.getLogger("git").level == logging.WARNING

    def test_debug_writes_log_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr("git_workspaces.logging_config.get_log_file", lambda: tmp_path / "gw.log")

        setup_logging(debug=True)
        get_logger("git_workspaces.cli.main").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger("git").level == logging.DEBUG
        assert "hello" in (tmp_path / "gw.log").read_text()
        for handler in logging.getLogger().handlers:
            handler.close()


class TestColoredFormatter:

    def make_record(self):
        return logging.LogRecord("gw.test", logging.WARNING, __file__, 1, "careful", None, None)

    def test_colors_copy_only(self):
        record = self.make_record()
        output = ColoredFormatter(fmt="%(levelname)s %(message)s", use_color=True).format(record)

        assert output == "\033[33mWARNING\033[0m careful"
        assert record.levelname == "WARNING"

    def test_plain_without_terminal(self):
        output = ColoredFormatter(fmt="%(levelname)s %(message)s", use_color=False).format(self.make_record())
        assert output == "WARNING careful"
