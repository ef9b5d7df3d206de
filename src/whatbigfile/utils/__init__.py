"""Shared utility modules for common operations.

This package provides:
- Data size formatting (bytes to human-readable, decimal prefixes)
- Percentage formatting against a running total
- Logging configuration with scan-root context
"""

from whatbigfile.utils.formatting import (
    format_row,
    humanize,
    percentage,
)

__all__ = [
    "format_row",
    "humanize",
    "percentage",
]
