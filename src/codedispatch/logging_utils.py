"""Custom logging utilities for the CodeDispatch application."""
# src/codedispatch/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path
from typing import Final

from . import paths

DISPATCH_LOGGER_NAME: Final[str] = "codedispatch.dispatch"
DEBUG_LOG_FILE_NAME: Final[str] = "codedispatch_debug.log"


class _UTCFormatter(logging.Formatter):
    """Base formatter rendering timestamps as ISO-8601 UTC with microseconds."""

    def __init__(self, fmt: str) -> None:
        super().__init__(fmt=fmt, datefmt="%Y-%m-%dT%H:%M:%S")
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


# Console Log Formatter
class ConsoleFormatter(_UTCFormatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The CodeDispatch application version.

        """
        super().__init__(f"%(asctime)s | CodeDispatch - {version} | %(levelname)s | %(message)s")


# File Log Formatter
class FileFormatter(_UTCFormatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__("%(asctime)s | %(name)-20s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s")


# Dispatch Log Formatter
class DispatchLogFormatter(_UTCFormatter):
    """Formats dispatch log entries as '<timestamp> <VERB> <details>'."""

    def __init__(self, prefix: str = "") -> None:
        """
        Initialize the dispatch formatter.

        Args:
            prefix: Text placed before each entry, used for console mirroring.

        """
        super().__init__(f"{prefix}%(asctime)s %(message)s")


def get_dispatch_logger() -> logging.Logger:
    """Return the logger that writes the append-only dispatch log."""
    return logging.getLogger(DISPATCH_LOGGER_NAME)


def _reset_handlers(target: logging.Logger) -> None:
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()


def setup_logging(version: str, *, debug: bool = False, debug_log_dir: Path | None = None) -> None:
    """
    Configure the root logger for the CodeDispatch application.

    This function sets up a dual-logging system:
    1.  Console: User-facing messages. Level is INFO by default, DEBUG if debug=True.
    2.  File (DEBUG): Developer-facing, detailed logs written to
        'codedispatch_debug.log' in `debug_log_dir` when debug=True.

    Args:
        version: The application version, included in console logs.
        debug: If True, enables detailed file logging and sets console level to DEBUG.
        debug_log_dir: The directory for the debug log file.

    """
    root_logger = logging.getLogger()
    # Clear any handlers created by basicConfig or previous setups
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug and debug_log_dir is not None:
        try:
            paths.ensure_dir_exists(debug_log_dir)
            log_file_path = debug_log_dir / DEBUG_LOG_FILE_NAME

            file_handler = FileHandler(log_file_path, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            root_logger.info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file_path,
            )
        except OSError:
            # Console logging keeps working without the debug file.
            root_logger.exception("Failed to create debug log file. Continuing with console logging only.")


def setup_dispatch_log(log_path: Path, *, verbose: bool = False) -> logging.Logger:
    """
    Attach the append-only dispatch log file to the dispatch logger.

    Entries never reach the root logger. With `verbose`, each entry is also
    echoed to the console with a '[LOG]' prefix.

    Args:
        log_path: The dispatch log file; created if missing, appended otherwise.
        verbose: If True, mirrors entries to the console.

    Returns:
        The configured dispatch logger.

    """
    dispatch_logger = get_dispatch_logger()
    _reset_handlers(dispatch_logger)
    dispatch_logger.setLevel(logging.INFO)
    dispatch_logger.propagate = False

    paths.ensure_dir_exists(log_path.parent)
    file_handler = FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(DispatchLogFormatter())
    dispatch_logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(DispatchLogFormatter(prefix="[LOG] "))
        dispatch_logger.addHandler(console_handler)

    return dispatch_logger


def close_dispatch_log() -> None:
    """Detach and close every handler of the dispatch logger."""
    _reset_handlers(get_dispatch_logger())
