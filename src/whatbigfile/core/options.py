"""Scan configuration for the wbf scanner.

Options come from the command line only and are validated once, up front,
with Pydantic. The resulting model is frozen: nothing may change it while a
scan is running.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from whatbigfile.core.filesystem.exclusions import PathFilter
from whatbigfile.exceptions import ConfigurationError


class ScanOptions(BaseModel):
    """Immutable options for a single scan run."""

    model_config = ConfigDict(frozen=True)

    path: Annotated[Path, Field(description="Root directory to scan")]
    depth: Annotated[
        int,
        Field(
            ge=0,
            description="Maximum entry depth below the root (0 means unlimited)",
        ),
    ] = 0
    disable_symlinks: Annotated[
        bool,
        Field(description="Do not follow or report symbolic links"),
    ] = False
    filter: Annotated[
        str | None,
        Field(description="Regular expression; matching paths are excluded"),
    ] = None
    min_size: Annotated[
        int,
        Field(
            ge=0,
            description="Entries smaller than this many bytes are ignored",
        ),
    ] = 0
    output_file: Annotated[
        Path | None,
        Field(description="Write the final report to this CSV file"),
    ] = None
    refresh_every: Annotated[
        int,
        Field(
            ge=1,
            description="Redraw the live table every N walker steps",
        ),
    ] = 1

    @field_validator("filter", mode="before")
    @classmethod
    def empty_filter_is_none(cls, v: object) -> object:
        """Treat an empty filter expression as no filter.

        An empty regex matches every path, which would silently exclude the
        whole tree.

        Args:
            v: Raw filter value

        Returns:
            None for empty strings, the value unchanged otherwise
        """
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("filter")
    @classmethod
    def filter_compiles(cls, v: str | None) -> str | None:
        """Reject filter expressions that are not valid regular expressions.

        Args:
            v: Filter expression after empty strings were cleared

        Returns:
            The expression unchanged

        Raises:
            InvalidFilterError: If the expression does not compile
        """
        _ = PathFilter.from_expression(v)
        return v

    @property
    def max_depth(self) -> int | None:
        """Depth limit, or None when traversal is unlimited."""
        return self.depth if self.depth > 0 else None

    @classmethod
    def create(cls, **values: object) -> ScanOptions:
        """Build options, converting validation failures to ConfigurationError.

        Args:
            **values: Field values

        Returns:
            Validated, frozen options

        Raises:
            ConfigurationError: If any value fails validation
        """
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(exc) from exc
