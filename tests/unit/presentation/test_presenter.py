"""Tests for the live table presenter."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from rich.console import Console

from whatbigfile.core.aggregator import Aggregator, Snapshot
from whatbigfile.core.filesystem.walker import Entry
from whatbigfile.exceptions import TerminalError
from whatbigfile.presentation.presenter import (
    TABLE_HEADER,
    TABLE_TITLE,
    Presenter,
    PresenterState,
    build_table,
)

PresenterFactory = Callable[..., Presenter]


def _snapshot(count: int) -> Snapshot:
    rows = tuple((f"/files/f{i:03d}.bin", 1000 - i) for i in range(count))
    return Snapshot(rows=rows, total=sum(size for _, size in rows))


class TestBuildTable:
    """Test build_table."""

    def test_table_layout(self) -> None:
        """The table has the expected title and header."""
        table = build_table(_snapshot(3))

        assert table.title == TABLE_TITLE == "Table"
        assert tuple(column.header for column in table.columns) == TABLE_HEADER
        assert TABLE_HEADER == ("File", "Size", "Percentage of Total")
        assert table.expand is True
        assert table.row_count == 3

    def test_table_row_limit(self) -> None:
        """Rows beyond the visible area are clipped."""
        assert build_table(_snapshot(50), max_rows=10).row_count == 10
        assert build_table(_snapshot(5), max_rows=10).row_count == 5
        assert build_table(_snapshot(5), max_rows=0).row_count == 0

    def test_table_renders_formatted_rows(self) -> None:
        """Rendered rows show path, human size and percentage."""
        snapshot = Snapshot(rows=(("/big", 1_500_000), ("/small", 500_000)), total=2_000_000)
        console = Console(file=io.StringIO(), width=100, color_system=None)

        console.print(build_table(snapshot))
        output = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]

        assert "Percentage of Total" in output
        assert "1.50 MB" in output
        assert "75.00%" in output
        assert "500.00 kB" in output
        assert "25.00%" in output
        assert output.index("/big") < output.index("/small")


class TestPresenter:
    """Test the Presenter class."""

    def test_initial_state(self, make_presenter: PresenterFactory) -> None:
        """A new presenter has not touched the terminal."""
        presenter = make_presenter()

        assert presenter.state is PresenterState.INITIALIZING
        assert presenter.session.active is False
        assert presenter.frames == 0

    def test_invalid_refresh_interval(self) -> None:
        """The refresh interval must be positive."""
        with pytest.raises(ValueError, match="refresh_every"):
            _ = Presenter(refresh_every=0)

    def test_lifecycle_states(self, make_presenter: PresenterFactory) -> None:
        """The presenter moves from initializing to rendering to finished."""
        presenter = make_presenter()

        with presenter:
            assert presenter.state is PresenterState.RENDERING
            assert presenter.session.active is True

        assert presenter.state is PresenterState.FINISHED
        assert presenter.session.active is False

    def test_render_outside_session_fails(self, make_presenter: PresenterFactory) -> None:
        """Frames can only be drawn while the terminal is held."""
        presenter = make_presenter()

        with pytest.raises(RuntimeError, match="initializing"):
            presenter.render(_snapshot(1))

    def test_update_renders_every_step(
        self,
        make_presenter: PresenterFactory,
        console_output: Callable[[Presenter], str],
    ) -> None:
        """Each walker step draws one frame of the current state."""
        presenter = make_presenter()
        aggregator = Aggregator()

        with presenter:
            for index, size in enumerate((100, 200, 700)):
                _ = aggregator.accept(Entry(f"/data/file{index}.bin", size))
                presenter.update(aggregator)
            presenter.finish(aggregator)

        assert presenter.frames == 3
        output = console_output(presenter)
        assert "Table" in output
        assert "file2.bin" in output
        assert "70.00%" in output

    def test_update_batches_redraws(self, make_presenter: PresenterFactory) -> None:
        """With refresh_every, only every Nth step draws; finish draws the rest."""
        presenter = make_presenter(refresh_every=3)
        aggregator = Aggregator()

        with presenter:
            for index in range(7):
                _ = aggregator.accept(Entry(f"/f{index}", index))
                presenter.update(aggregator)
            assert presenter.frames == 2
            presenter.finish(aggregator)

        assert presenter.frames == 3

    def test_finish_without_pending_steps_does_not_redraw(self, make_presenter: PresenterFactory) -> None:
        """The final state is not drawn twice."""
        presenter = make_presenter()
        aggregator = Aggregator()

        with presenter:
            _ = aggregator.accept(Entry("/a", 1))
            presenter.update(aggregator)
            presenter.finish(aggregator)

        assert presenter.frames == 1

    def test_finish_on_empty_scan_draws_empty_table(
        self,
        make_presenter: PresenterFactory,
        console_output: Callable[[Presenter], str],
    ) -> None:
        """An empty walk still shows the table once."""
        presenter = make_presenter()

        with presenter:
            presenter.finish(Aggregator())

        assert presenter.frames == 1
        assert "Percentage of Total" in console_output(presenter)

    def test_terminal_restored_on_error(self, make_presenter: PresenterFactory) -> None:
        """An exception inside the session still releases the terminal."""
        presenter = make_presenter()

        with pytest.raises(KeyboardInterrupt):
            with presenter:
                raise KeyboardInterrupt

        assert presenter.session.active is False
        assert presenter.state is PresenterState.FINISHED

    def test_not_a_terminal(self) -> None:
        """Output that is not a terminal cannot host the live view."""
        presenter = Presenter(
            console=Console(file=io.StringIO(), force_terminal=False),
            input_stream=io.StringIO(),
        )

        with pytest.raises(TerminalError):
            with presenter:
                pass

        assert presenter.state is PresenterState.INITIALIZING
