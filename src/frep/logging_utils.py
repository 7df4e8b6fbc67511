"""Custom logging utilities for the frep application."""
# src/frep/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path


# Console Log Formatter
class ConsoleFormatter(logging.Formatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The frep application version.

        """
        super().__init__(
            fmt=f"%(asctime)s | frep - {version} | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc(self, record, datefmt)


# File Log Formatter
class FileFormatter(logging.Formatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__(
            fmt="%(asctime)s | %(name)-16s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc(self, record, datefmt)


def _format_utc(formatter: logging.Formatter, record: logging.LogRecord, datefmt: str | None) -> str:
    ct = formatter.converter(record.created)
    s = time.strftime(datefmt, ct) if datefmt else time.strftime(formatter.default_time_format, ct)
    # Calculate microseconds from the fractional part of `created`
    microseconds = int((record.created - int(record.created)) * 1_000_000)
    return f"{s}.{microseconds:06d}Z"


def setup_logging(version: str, *, debug: bool = False, verbose: bool = False, log_file: Path | None = None) -> None:
    """
    Configure the root logger for the frep application.

    Standard output carries the filtered text, so every log record goes to
    standard error:
    1.  Console: WARNING by default, INFO if verbose=True, DEBUG if debug=True.
    2.  File (DEBUG): Detailed developer logs, written only when log_file is given.

    Args:
        version: The application version, included in console logs.
        debug: If True, sets the console level to DEBUG.
        verbose: If True, sets the console level to INFO.
        log_file: Optional path of a detailed debug log.

    """
    root_logger = logging.getLogger()
    # Clear any handlers created by basicConfig or previous setups
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    if debug:
        console_level = logging.DEBUG
    elif verbose:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING
    root_logger.setLevel(logging.DEBUG if debug or log_file else console_level)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)

            # --- File Handler (DEBUG) ---
            file_handler = FileHandler(log_file, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger(__name__).debug("Detailed logs will be written to %s", log_file)
        except OSError:
            # If creating the log file fails, we should still continue with console logging.
            logging.getLogger(__name__).exception("Failed to create log file. Continuing with console logging only.")
