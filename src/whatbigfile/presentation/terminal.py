"""Scoped ownership of the interactive terminal.

Entering a :class:`TerminalSession` switches stdin to cbreak mode (no echo,
no line buffering), moves to the alternate screen and hides the cursor.
Leaving it, by any path including exceptions and Ctrl+C, undoes all three.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from types import TracebackType
from typing import TextIO

from rich.console import Console
from rich.live import Live

from whatbigfile.exceptions import TerminalError

logger = logging.getLogger(__name__)


@contextmanager
def cbreak_input(stream: TextIO | None) -> Iterator[None]:
    """Put an interactive input stream in cbreak mode for the duration.

    Does nothing when the stream is missing, not a TTY, or the platform has
    no termios.

    Args:
        stream: Input stream whose terminal mode should be changed

    Raises:
        TerminalError: If the terminal mode cannot be read or changed
    """
    if os.name != "posix" or stream is None or not stream.isatty():
        yield
        return

    import termios
    import tty

    try:
        fd = stream.fileno()
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except (OSError, termios.error) as exc:
        msg = f"Could not switch terminal input mode: {exc}"
        raise TerminalError(msg) from exc

    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class TerminalSession:
    """The single owner of terminal state while the live view is shown."""

    def __init__(
        self,
        console: Console | None = None,
        input_stream: TextIO | None = None,
    ) -> None:
        """Initialize the session without touching the terminal.

        Args:
            console: Rich console to draw on (stdout by default)
            input_stream: Stream whose echo is suppressed (stdin by default)
        """
        self.console: Console = console if console is not None else Console()
        self.input_stream: TextIO | None = input_stream if input_stream is not None else sys.stdin
        self._stack: ExitStack | None = None
        self._live: Live | None = None

    @property
    def active(self) -> bool:
        """Whether the terminal is currently held by this session."""
        return self._stack is not None

    @property
    def live(self) -> Live:
        """The live display; only available inside the session."""
        if self._live is None:
            msg = "Terminal session is not active"
            raise RuntimeError(msg)
        return self._live

    def __enter__(self) -> TerminalSession:
        if self._stack is not None:
            msg = "Terminal session is already active"
            raise RuntimeError(msg)

        if not self.console.is_terminal:
            msg = "Standard output is not an interactive terminal"
            raise TerminalError(msg)

        stack = ExitStack()
        try:
            _ = stack.enter_context(cbreak_input(self.input_stream))
            live = Live(
                console=self.console,
                screen=True,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            _ = stack.enter_context(live)
        except TerminalError:
            stack.close()
            raise
        except OSError as exc:
            stack.close()
            msg = f"Could not initialize terminal: {exc}"
            raise TerminalError(msg) from exc

        self._stack = stack
        self._live = live
        logger.debug("Terminal session started")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        stack, self._stack, self._live = self._stack, None, None
        if stack is not None:
            stack.close()
            logger.debug("Terminal session restored")
