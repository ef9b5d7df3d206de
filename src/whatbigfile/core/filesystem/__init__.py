"""Filesystem traversal module: directory walking and path exclusion."""

from __future__ import annotations

from .exclusions import PathFilter
from .walker import Entry, Walker, WalkStats

__all__ = [
    "Entry",
    "PathFilter",
    "WalkStats",
    "Walker",
]
