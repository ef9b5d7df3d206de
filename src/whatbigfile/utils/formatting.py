"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions shared by the live table
and the CSV export. All functions are pure with no side effects.
"""

from __future__ import annotations

from typing import Final

# Decimal (1000-based) magnitude prefixes, smallest first
_DECIMAL_PREFIXES: Final[tuple[str, ...]] = ("k", "M", "G", "T", "P", "E", "Z", "Y")
_DECIMAL_BASE: Final[float] = 1000.0

# Fallback shown when a percentage is requested against an empty total
ZERO_PERCENT: Final[str] = "0.00%"


def humanize(bytes: int) -> str:
    """Convert bytes to a human-readable size with a decimal prefix.

    Uses decimal units (1000-based). Values below 1000 are shown as an
    integer byte count; anything larger is scaled to the biggest prefix that
    keeps the mantissa at or above 1 and shown with two decimals.

    Args:
        bytes: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable string representation of the size.

    Examples:
        >>> humanize(512)
        '512 B'
        >>> humanize(1000)
        '1.00 kB'
        >>> humanize(1_460_000)
        '1.46 MB'

    Note:
        The mantissa is not rounded up into the next prefix, so 999_999
        renders as '1000.00 kB'.
    """
    if bytes < 0:
        msg = "bytes must be non-negative"
        raise ValueError(msg)

    if bytes < _DECIMAL_BASE:
        return f"{bytes} B"

    value = float(bytes)
    prefix = ""
    for candidate in _DECIMAL_PREFIXES:
        value /= _DECIMAL_BASE
        prefix = candidate
        if value < _DECIMAL_BASE:
            break

    return f"{value:.2f} {prefix}B"


def percentage(part: int, total: int) -> str:
    """Render ``part`` as a share of ``total`` with two decimals.

    Args:
        part: Size of the entry
        total: Running total the entry belongs to

    Returns:
        Percentage string such as '25.00%', or '0.00%' when total is zero.
    """
    if total == 0:
        return ZERO_PERCENT
    return f"{part / total * 100.0:.2f}%"


def format_row(path: str, size: int, total: int) -> tuple[str, str, str]:
    """Format one report row as (path, human size, percentage of total)."""
    return path, humanize(size), percentage(size, total)
