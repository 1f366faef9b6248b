"""
Persisted daily time window for git-touchfish-commit
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, time
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .errors import InvalidFormatError, InvalidWindowError, NotConfiguredError

APP_NAME = "git-touchfish-commit"
CONFIG_FILENAME = "config.json"

_HHMM = re.compile(r"[0-9]{2}:[0-9]{2}")

logger = logging.getLogger("git_touchfish.config")


def parse_time_of_day(value: str) -> time:
    """Parse a strict HH:MM string into a time

    Raises:
        InvalidFormatError: If the value is not a valid 24-hour HH:MM time
    """
    text = value if isinstance(value, str) else ""
    if not _HHMM.fullmatch(text):
        raise InvalidFormatError(
            f"Invalid time format: {value!r}. Use HH:MM (e.g. 09:00)"
        )
    try:
        return datetime.strptime(text, "%H:%M").time()
    except ValueError:
        raise InvalidFormatError(
            f"Invalid time format: {value!r}. Use HH:MM (e.g. 09:00)"
        ) from None


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class TimeWindow:
    """Daily time-of-day interval, start strictly before end"""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidWindowError(
                f"Start time {format_time_of_day(self.start)} must be earlier "
                f"than end time {format_time_of_day(self.end)}"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeWindow":
        """Build a window from two HH:MM strings"""
        return cls(start=parse_time_of_day(start), end=parse_time_of_day(end))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "start_time": format_time_of_day(self.start),
            "end_time": format_time_of_day(self.end),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeWindow":
        """Create from dictionary (JSON deserialization)"""
        try:
            start, end = data["start_time"], data["end_time"]
        except (KeyError, TypeError):
            raise InvalidFormatError(
                "Stored configuration is missing start_time/end_time"
            ) from None
        return cls.parse(start, end)

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)} - {format_time_of_day(self.end)}"


def default_app_dir() -> Path:
    """Directory holding the config file and the log

    GIT_TC_HOME overrides the per-user application directory.
    """
    override = os.environ.get("GIT_TC_HOME")
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME))


class ConfigStore:
    """Reads and writes the configured TimeWindow"""

    def __init__(self, config_file: Optional[str] = None):
        """Initialize config store

        Args:
            config_file: Path to the JSON config file (defaults to the app dir)
        """
        if config_file is None:
            config_file = str(default_app_dir() / CONFIG_FILENAME)
        self.config_file = Path(config_file)

    def set(self, start: str, end: str) -> TimeWindow:
        """Validate and persist a new window, replacing any previous one

        Nothing is written unless both bounds are valid.
        """
        window = TimeWindow.parse(start, end)
        self.save(window)
        logger.info(f"Stored window {window} in {self.config_file}")
        return window

    def show(self) -> TimeWindow:
        """Return the stored window

        Raises:
            NotConfiguredError: If no window has been set yet
        """
        if not self.config_file.exists():
            raise NotConfiguredError(
                "No time window configured. Run `git tc set <start> <end>` first"
            )

        try:
            with self.config_file.open(encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            # JSONDecodeError or UnicodeDecodeError
            raise InvalidFormatError(
                f"Config file {self.config_file} is not valid JSON: {e}"
            ) from e

        return TimeWindow.from_dict(data)

    def save(self, window: TimeWindow) -> None:
        """Write the window atomically"""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.config_file.with_suffix(".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as f:
                json.dump(window.to_dict(), f, indent=2)
            temp_path.replace(self.config_file)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise
