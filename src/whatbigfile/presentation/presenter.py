"""Live terminal table of the largest files found so far."""

from __future__ import annotations

import logging
from enum import Enum
from types import TracebackType
from typing import TYPE_CHECKING, Final, TextIO

from rich import box
from rich.console import Console
from rich.table import Table

from whatbigfile.presentation.terminal import TerminalSession

if TYPE_CHECKING:
    from whatbigfile.core.aggregator import Aggregator, Snapshot

logger = logging.getLogger(__name__)

TABLE_TITLE: Final[str] = "Table"
TABLE_HEADER: Final[tuple[str, str, str]] = ("File", "Size", "Percentage of Total")

# Title, top border, header, header rule and bottom border
_TABLE_CHROME_LINES: Final[int] = 5


class PresenterState(str, Enum):
    """Lifecycle of the live view."""

    INITIALIZING = "initializing"
    RENDERING = "rendering"
    FINISHED = "finished"


def build_table(snapshot: Snapshot, max_rows: int | None = None) -> Table:
    """Build the report table for a snapshot.

    Args:
        snapshot: Aggregation snapshot, already sorted largest first
        max_rows: Draw at most this many rows (None for all)

    Returns:
        Full-width Rich table titled "Table"
    """
    table = Table(
        title=TABLE_TITLE,
        box=box.SQUARE,
        expand=True,
        row_styles=["white"],
    )
    table.add_column(TABLE_HEADER[0], no_wrap=True, overflow="ellipsis", ratio=1)
    table.add_column(TABLE_HEADER[1], justify="right", no_wrap=True, min_width=10)
    table.add_column(TABLE_HEADER[2], justify="right", no_wrap=True, min_width=10)

    for index, row in enumerate(snapshot.formatted_rows()):
        if max_rows is not None and index >= max_rows:
            break
        table.add_row(*row)

    return table


class Presenter:
    """Render the aggregation as a live, size-sorted table.

    The presenter owns the terminal session. Every walker step calls
    :meth:`update`; the table is redrawn synchronously every
    ``refresh_every`` steps, and :meth:`finish` always draws the final state.
    """

    def __init__(
        self,
        console: Console | None = None,
        refresh_every: int = 1,
        input_stream: TextIO | None = None,
    ) -> None:
        """Initialize the presenter without touching the terminal.

        Args:
            console: Rich console to draw on (stdout by default)
            refresh_every: Redraw every N steps (1 redraws on every step)
            input_stream: Input stream put in cbreak mode (stdin by default)
        """
        if refresh_every < 1:
            msg = "refresh_every must be at least 1"
            raise ValueError(msg)

        self.session: TerminalSession = TerminalSession(console, input_stream)
        self.refresh_every: int = refresh_every
        self.state: PresenterState = PresenterState.INITIALIZING
        self.frames: int = 0
        self._steps: int = 0
        self._drawn_step: int = -1

    @property
    def console(self) -> Console:
        return self.session.console

    def __enter__(self) -> Presenter:
        _ = self.session.__enter__()
        self.state = PresenterState.RENDERING
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.session.__exit__(exc_type, exc_value, traceback)
        self.state = PresenterState.FINISHED
        logger.debug("Presenter finished after %d frames", self.frames)

    def update(self, aggregator: Aggregator) -> None:
        """Record one walker step and redraw if it is due.

        Args:
            aggregator: Aggregator holding the current state
        """
        self._steps += 1
        if self._steps % self.refresh_every == 0:
            self.render(aggregator.snapshot())
            self._drawn_step = self._steps

    def finish(self, aggregator: Aggregator) -> None:
        """Draw the final state unless the last step was already drawn."""
        if self._drawn_step != self._steps:
            self.render(aggregator.snapshot())
            self._drawn_step = self._steps

    def render(self, snapshot: Snapshot) -> None:
        """Draw one frame.

        Args:
            snapshot: Snapshot to draw

        Raises:
            RuntimeError: If called outside the terminal session
        """
        if self.state is not PresenterState.RENDERING:
            msg = f"Cannot render while {self.state.value}"
            raise RuntimeError(msg)

        visible_rows = max(self.console.size.height - _TABLE_CHROME_LINES, 0)
        self.session.live.update(build_table(snapshot, visible_rows), refresh=True)
        self.frames += 1
