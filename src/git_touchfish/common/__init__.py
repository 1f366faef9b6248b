"""
git-touchfish-commit common library

Config storage, git access and timestamp generation shared by the commands.
"""

from .config_store import ConfigStore, TimeWindow, parse_time_of_day
from .errors import (
    GitCommandError,
    InvalidFormatError,
    InvalidWindowError,
    NoCommitsError,
    NotConfiguredError,
    TouchfishError,
    WindowExhaustedError,
)
from .git_client import GitClient, format_git_date
from .log_utils import setup_logger, truncate_value
from .timestamp import generate, local_datetime, window_bounds

__all__ = [
    "ConfigStore",
    "GitClient",
    "GitCommandError",
    "InvalidFormatError",
    "InvalidWindowError",
    "NoCommitsError",
    "NotConfiguredError",
    "TimeWindow",
    "TouchfishError",
    "WindowExhaustedError",
    "format_git_date",
    "generate",
    "local_datetime",
    "parse_time_of_day",
    "setup_logger",
    "truncate_value",
    "window_bounds",
]
