"""
Colored logging utility with uvicorn-style level prefixes.
Provides consistent spacing and per-component coloring.

Console output goes to stderr: Claude Code reads a hook's stdout (and adds
SessionStart output to the conversation context), so nothing may be logged
there.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime
from utils.constants import DateTimeConstants, EnvVars


def _log_level() -> int:
    """Resolve the log level from RINGRING_LOG_LEVEL (default INFO)."""
    name = os.getenv(EnvVars.LOG_LEVEL, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


class ColoredFormatter(logging.Formatter):
    """Custom formatter that mimics uvicorn spacing and adds colors."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # cyan
        "INFO": "\033[32m",  # green
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",  # red
        "CRITICAL": "\033[35m",  # magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        """
        Format log record with colors matching uvicorn style.

        Args:
            record: LogRecord instance to format

        Returns:
            Formatted log message with ANSI color codes
        """
        level_color = self.COLORS.get(record.levelname, "")
        # Format with proper spacing like uvicorn (5 spaces after colon)
        return (
            f"{level_color}{record.levelname}:{self.RESET}     "
            f"{record.name}:{record.getMessage()}"
        )


class PlainFormatter(logging.Formatter):
    """Plain formatter for file logging (no colors)."""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime(
            DateTimeConstants.ISO_DATETIME_FORMAT
        )
        # Format: timestamp LEVEL pid component:message
        return (
            f"{timestamp} {record.levelname:8} [{record.process}] "
            f"{record.name}:{record.getMessage()}"
        )


def setup_logger(name: str) -> logging.Logger:
    """
    Set up a module logger.

    Handlers live on the root logger (see configure_root_logging), so module
    loggers only set their level and propagate.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    logger.setLevel(_log_level())
    return logger


def setup_file_logging(log_file: str) -> str:
    """
    Add a plain-text file handler to the root logger.

    Several hook processes append to the same file, so records carry the pid.

    Args:
        log_file: Path of the log file (parent directories are created)

    Returns:
        Absolute path to the log file
    """
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Check if file handler already exists for this file
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(
            log_path.absolute()
        ):
            return str(log_path.absolute())

    file_handler = logging.FileHandler(log_path, mode="a")  # Append mode
    file_handler.setFormatter(PlainFormatter())
    root_logger.addHandler(file_handler)

    return str(log_path.absolute())


def configure_root_logging():
    """Configure root logging: colored stderr, or file-only when RINGRING_LOG_FILE is set."""
    log_file = os.getenv(EnvVars.LOG_FILE)

    root_logger = logging.getLogger()
    configured = any(
        isinstance(h.formatter, (ColoredFormatter, PlainFormatter))
        for h in root_logger.handlers
    )
    if not configured:
        # Remove existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        if log_file:
            try:
                setup_file_logging(log_file)
            except OSError as e:
                print(f"ringring: cannot open log file {log_file}: {e}", file=sys.stderr)
                log_file = None

        # Only add console handler if NOT in file-only mode
        if not log_file:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(ColoredFormatter())
            root_logger.addHandler(handler)

    root_logger.setLevel(_log_level())
