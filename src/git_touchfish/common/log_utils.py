"""
Logging utilities for git-touchfish-commit

Provides consistent log formatting and truncation capabilities.
"""

import logging
import os
from typing import Any, Optional


class TruncatingFormatter(logging.Formatter):
    """Custom formatter that truncates long values in log messages"""

    def __init__(
        self,
        *args: Any,
        max_length: int = 200,
        truncate_enabled: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.max_length = max_length
        self.truncate_enabled = truncate_enabled

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)

        if self.truncate_enabled and len(msg) > self.max_length:
            # Keep timestamp, level and function; truncate only the message part
            parts = msg.split(" - ", 4)
            if len(parts) >= 5:
                prefix = " - ".join(parts[:4])
                message = parts[4]
                if len(message) > self.max_length:
                    truncated_msg = message[: self.max_length] + "... [truncated]"
                    msg = f"{prefix} - {truncated_msg}"

        return msg


def truncate_value(value: Any, max_length: int = 100) -> str:
    """Truncate a value for logging purposes

    Args:
        value: Value to truncate
        max_length: Maximum length before truncation

    Returns:
        String representation of value, truncated if necessary
    """
    if value is None:
        return "None"

    str_val = value if isinstance(value, str) else str(value)
    if len(str_val) > max_length:
        return f"{str_val[:max_length]}... [{len(str_val)} chars total]"
    return str_val


def resolve_log_level(default: int = logging.INFO) -> int:
    """Read the log level from GIT_TC_LOG_LEVEL (name or number)"""
    raw = os.environ.get("GIT_TC_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[int] = None,
    truncate: bool = True,
    max_length: int = 200,
) -> logging.Logger:
    """Set up a logger with consistent formatting and truncation

    Args:
        name: Logger name
        log_file: Path to log file (no handler is attached when None)
        level: Logging level (defaults to GIT_TC_LOG_LEVEL or INFO)
        truncate: Whether to enable truncation
        max_length: Maximum line length before truncation

    Returns:
        Configured logger
    """
    if level is None:
        level = resolve_log_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Only add handler if logger doesn't already have handlers
    if log_file and not logger.handlers:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)

        formatter = TruncatingFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            max_length=max_length,
            truncate_enabled=truncate,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
