"""Regex exclusion filter for filesystem traversal."""

from __future__ import annotations

import os
import re

from whatbigfile.exceptions import InvalidFilterError


class PathFilter:
    """Gate candidate paths against an optional exclusion regex.

    A path is included unless the pattern is found anywhere in it. Paths
    that cannot be represented as valid text are always excluded, so the
    pattern is never matched against mangled names.
    """

    def __init__(self, pattern: re.Pattern[str] | None = None) -> None:
        """Initialize the filter.

        Args:
            pattern: Compiled exclusion pattern, or None to include everything
        """
        self.pattern: re.Pattern[str] | None = pattern

    @classmethod
    def from_expression(cls, expression: str | None) -> PathFilter:
        """Compile an exclusion expression into a filter.

        Args:
            expression: Regular expression source, or None for no filtering

        Returns:
            PathFilter wrapping the compiled pattern

        Raises:
            InvalidFilterError: If the expression is not a valid regex
        """
        if expression is None:
            return cls()

        try:
            compiled = re.compile(expression)
        except re.error as exc:
            raise InvalidFilterError(expression, str(exc)) from exc

        return cls(compiled)

    def includes(self, path: str | os.PathLike[str]) -> bool:
        """Check whether a candidate path passes the filter.

        Args:
            path: Candidate path as produced by the walker

        Returns:
            True if the path should be kept, False if it is excluded
        """
        text = os.fspath(path)
        if not is_valid_text(text):
            return False

        if self.pattern is None:
            return True

        return self.pattern.search(text) is None

    @property
    def expression(self) -> str | None:
        """Source of the configured pattern, if any."""
        return self.pattern.pattern if self.pattern is not None else None


def is_valid_text(text: str) -> bool:
    """Return False for names carrying undecodable bytes (lone surrogates)."""
    try:
        _ = text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
