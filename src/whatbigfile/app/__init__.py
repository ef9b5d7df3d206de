"""Application module for the wbf scanner."""

from __future__ import annotations

from whatbigfile.app.cli import cli
from whatbigfile.app.runner import ScanResult, ScanRunner

__all__ = [
    "cli",
    "ScanResult",
    "ScanRunner",
]
