"""Terminal presentation module: live table and terminal ownership."""

from __future__ import annotations

from .presenter import Presenter, PresenterState, build_table
from .terminal import TerminalSession

__all__ = [
    "Presenter",
    "PresenterState",
    "TerminalSession",
    "build_table",
]
