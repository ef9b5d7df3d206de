"""CSV export of the final scan report."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from whatbigfile.exceptions import ExportError

if TYPE_CHECKING:
    from whatbigfile.core.aggregator import Snapshot

logger = logging.getLogger(__name__)


class CsvExporter:
    """Write a snapshot as CSV rows of (path, human size, percentage).

    The file has no header row, matching the report layout users of the tool
    already parse.
    """

    def __init__(self, destination: Path) -> None:
        """Initialize the exporter.

        Args:
            destination: File to create (truncated if it already exists)
        """
        self.destination: Path = destination

    def export(self, snapshot: Snapshot) -> int:
        """Write every row of the snapshot to the destination file.

        Args:
            snapshot: Final aggregation snapshot

        Returns:
            Number of rows written

        Raises:
            ExportError: If the file cannot be created or written
        """
        written = 0
        try:
            with self.destination.open("w", newline="", encoding="utf-8", errors="surrogateescape") as handle:
                writer = csv.writer(handle)
                for row in snapshot.formatted_rows():
                    writer.writerow(row)
                    written += 1
                handle.flush()
        except OSError as exc:
            msg = f"Failed to write report to {self.destination}: {exc.strerror or exc}"
            raise ExportError(msg, str(self.destination)) from exc

        logger.info("Wrote %d rows to %s", written, self.destination)
        return written
