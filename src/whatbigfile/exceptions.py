"""Error hierarchy for the wbf scanner.

Every fatal condition the application can hit is expressed as a subclass of
:class:`WbfError`, so the command-line layer can restore the terminal and
report a single, actionable message. Per-entry filesystem failures are not
represented here: the walker recovers from those locally.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class WbfError(Exception):
    """Base exception for all fatal scanner errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportAny] # Flexible error context
        """Initialize WbfError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportAny] # Flexible error context


class ConfigurationError(WbfError):
    """Exception raised when scan options are invalid."""

    def __init__(
        self,
        message: str,
        pydantic_error: ValidationError | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportAny] # Flexible error context
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Error message
            pydantic_error: Original Pydantic ValidationError
            context: Additional context information
        """
        full_context = context or {}
        if pydantic_error is not None:
            full_context["validation_errors"] = [
                {
                    "field": ".".join(str(loc) for loc in err["loc"]),
                    "message": err["msg"],
                }
                for err in pydantic_error.errors()
            ]

        super().__init__(message, full_context)
        self.pydantic_error: ValidationError | None = pydantic_error

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConfigurationError:
        """Build a readable configuration error from a Pydantic failure.

        Args:
            error: Pydantic ValidationError raised while building options

        Returns:
            ConfigurationError whose message lists every failing field
        """
        lines: list[str] = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"]) or "options"
            lines.append(f"{field}: {err['msg']}")
        return cls("Invalid scan options:\n  " + "\n  ".join(lines), pydantic_error=error)


class InvalidFilterError(ConfigurationError):
    """Exception raised when the exclusion expression is not a valid regex."""

    def __init__(self, expression: str, reason: str) -> None:
        """Initialize InvalidFilterError.

        Args:
            expression: The expression that failed to compile
            reason: Compiler error message
        """
        super().__init__(
            f"Invalid filter expression {expression!r}: {reason}",
            context={"expression": expression},
        )
        self.expression: str = expression


class TerminalError(WbfError):
    """Exception raised when the interactive terminal cannot be prepared."""


class ScanRootError(WbfError):
    """Exception raised when the scan root is missing or cannot be read."""

    def __init__(self, message: str, root: str) -> None:
        """Initialize ScanRootError.

        Args:
            message: Error message
            root: The root path that could not be scanned
        """
        super().__init__(message, context={"root": root})
        self.root: str = root


class ExportError(WbfError):
    """Exception raised when the CSV report cannot be written."""

    def __init__(self, message: str, destination: str) -> None:
        """Initialize ExportError.

        Args:
            message: Error message
            destination: Path of the file being written
        """
        super().__init__(message, context={"destination": destination})
        self.destination: str = destination


__all__ = [
    "ConfigurationError",
    "ExportError",
    "InvalidFilterError",
    "ScanRootError",
    "TerminalError",
    "WbfError",
]
