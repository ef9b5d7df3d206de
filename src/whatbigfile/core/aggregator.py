"""Size aggregation for scanned entries.

The aggregator owns the path-to-size mapping and the running total. It is
mutated only by the scan loop, one entry at a time, and hands out immutable
snapshots to the presenter and the exporter.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from whatbigfile.core.filesystem.walker import Entry
from whatbigfile.utils.formatting import format_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Point-in-time, size-descending view of the aggregation.

    Attributes:
        rows: (path, size) pairs ordered by size, largest first
        total: Sum of all sizes at the moment the snapshot was taken
    """

    rows: tuple[tuple[str, int], ...]
    total: int

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self.rows)

    def formatted_rows(self) -> Iterator[tuple[str, str, str]]:
        """Yield (path, human size, percentage of total) for every row."""
        for path, size in self.rows:
            yield format_row(path, size, self.total)


class Aggregator:
    """Accumulate entry sizes keyed by resolved path.

    Seeing the same resolved path twice (two symlinks to one file, for
    instance) replaces the earlier size, and the total is adjusted by the
    difference so it always equals the sum of the recorded sizes.
    """

    def __init__(self, min_size: int = 0) -> None:
        """Initialize the aggregator.

        Args:
            min_size: Entries strictly smaller than this are rejected
        """
        if min_size < 0:
            msg = "min_size must be non-negative"
            raise ValueError(msg)

        self.min_size: int = min_size
        self._sizes: dict[str, int] = {}
        self._total: int = 0

    @property
    def total(self) -> int:
        """Running sum of all recorded sizes."""
        return self._total

    def __len__(self) -> int:
        return len(self._sizes)

    def __contains__(self, path: object) -> bool:
        return path in self._sizes

    def accept(self, entry: Entry) -> bool:
        """Record an entry if it meets the size threshold.

        Args:
            entry: Entry produced by the walker

        Returns:
            True if the entry was recorded, False if it was rejected
        """
        if entry.size < self.min_size:
            return False

        previous = self._sizes.get(entry.path)
        if previous is not None:
            logger.debug("Replacing size of %s (%d -> %d)", entry.path, previous, entry.size)
            self._total -= previous

        self._sizes[entry.path] = entry.size
        self._total += entry.size
        return True

    def snapshot(self) -> Snapshot:
        """Take an immutable, size-descending view of the current state.

        Returns:
            Snapshot with rows sorted largest first; equal sizes keep the
            order in which their paths were first recorded
        """
        rows = sorted(self._sizes.items(), key=lambda item: item[1], reverse=True)
        return Snapshot(rows=tuple(rows), total=self._total)
