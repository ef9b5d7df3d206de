"""Logging infrastructure with scan-root context tracking.

Log records are tagged with the root currently being scanned, taken from a
ContextVar so nested helpers never have to pass it around. Output goes to a
log file when one is configured, otherwise to stderr. Stdout is left alone:
it belongs to the live table.
"""

import contextvars
import logging
import sys
from pathlib import Path
from typing import Final, override

# Root of the scan in progress, attached to every record by ScanContextFilter
scan_root_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_root",
    default=None,
)

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_root)s] - %(message)s"

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


class ScanContextFilter(logging.Filter):
    """Logging filter that adds the active scan root to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add scan root to log record from ContextVar.

        Args:
            record: Log record to enhance with the scan root

        Returns:
            True to allow the record to be logged
        """
        scan_root = scan_root_var.get()
        record.scan_root = scan_root if scan_root is not None else "-"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_file: Path | None = None,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Sets up logging infrastructure with:
    - Scan root tracking via ContextVar
    - Optional file output
    - Console output on stderr when no file is configured

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Append log records to this file instead of stderr
        enable_console: Enable stderr handler when no log file is given

    Example:
        >>> configure_logging(log_level="INFO", log_file=Path("wbf.log"))
        >>> logger = logging.getLogger(__name__)
        >>> logger.info("Scan started")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    context_filter = ScanContextFilter()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    elif enable_console:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.NullHandler()

    handler.setFormatter(formatter)
    handler.addFilter(context_filter)
    root_logger.addHandler(handler)


def set_scan_root(root: str) -> None:
    """Set the scan root for the current context.

    Args:
        root: Root directory being scanned
    """
    _ = scan_root_var.set(root)


def get_scan_root() -> str | None:
    """Get the current scan root from context.

    Returns:
        Current scan root or None if not set
    """
    return scan_root_var.get()


def clear_scan_root() -> None:
    """Clear the scan root from the current context."""
    _ = scan_root_var.set(None)
