"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from rich.console import Console

from whatbigfile.presentation.presenter import Presenter

TreeFactory = Callable[[Mapping[str, int]], Path]
PresenterFactory = Callable[..., Presenter]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Create files of the given sizes (relative path -> bytes) under a fresh root."""

    def factory(files: Mapping[str, int]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        root = root.resolve()
        for relative, size in files.items():
            file_path = root / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            _ = file_path.write_bytes(b"x" * size)
        return root

    return factory


def _memory_console(height: int = 40, width: int = 120) -> Console:
    """Build a Rich console that behaves like a terminal but writes to memory."""
    return Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system=None,
        width=width,
        height=height,
    )


@pytest.fixture
def make_presenter() -> PresenterFactory:
    """Build presenters drawing on an in-memory terminal."""

    def factory(refresh_every: int = 1, height: int = 40) -> Presenter:
        return Presenter(
            console=_memory_console(height=height),
            refresh_every=refresh_every,
            input_stream=io.StringIO(),
        )

    return factory


@pytest.fixture
def console_output() -> Callable[[Presenter], str]:
    """Read back everything a presenter has written so far."""

    def read(presenter: Presenter) -> str:
        stream = presenter.console.file
        assert isinstance(stream, io.StringIO)
        return stream.getvalue()

    return read


@pytest.fixture
def memory_console() -> Console:
    """A terminal-like console writing to memory."""
    return _memory_console()
