"""Logging configuration for git-workspaces"""
import logging
import sys
from pathlib import Path

# Root of this package's logger names. Kept apart from GitPython's "git"
# logger, which services.git.* modules would otherwise land under.
LOGGER_ROOT = 'gw'

LOG_FORMAT_DETAILED = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FORMAT_SIMPLE = '[%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Colours the level name when the console is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_color=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = sys.stderr.isatty() if use_color is None else use_color

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not (self.use_color and color):
            return super().format(record)
        # Colour a copy; the record is shared with the log file handler
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / '.git-workspaces' / 'git-workspaces.log'


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages, use detailed formatting,
            mirror everything to the log file and let GitPython trace its
            git invocations
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # GitPython logs every command at DEBUG/INFO under "git"
    logging.getLogger('git').setLevel(logging.DEBUG if debug else logging.WARNING)

    if debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT_DETAILED, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT_DETAILED, datefmt=LOG_DATE_FORMAT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT_SIMPLE))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module of this package.

    ``git_workspaces.services.git.worktrees`` becomes ``gw.git.worktrees``.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    for prefix in ('git_workspaces.', 'services.'):
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")
