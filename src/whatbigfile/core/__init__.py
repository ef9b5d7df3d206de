"""Core scanning logic: options, traversal and aggregation."""

from __future__ import annotations

from whatbigfile.core.aggregator import Aggregator, Snapshot
from whatbigfile.core.filesystem import Entry, PathFilter, Walker, WalkStats
from whatbigfile.core.options import ScanOptions

__all__ = [
    "Aggregator",
    "Entry",
    "PathFilter",
    "ScanOptions",
    "Snapshot",
    "WalkStats",
    "Walker",
]
