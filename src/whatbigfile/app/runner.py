"""Scan loop coordinating walker, aggregator, presenter and exporter."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from whatbigfile.core.aggregator import Aggregator, Snapshot
from whatbigfile.core.filesystem.walker import Walker, WalkStats
from whatbigfile.core.options import ScanOptions
from whatbigfile.export.csv_exporter import CsvExporter
from whatbigfile.presentation.presenter import Presenter
from whatbigfile.utils.formatting import humanize
from whatbigfile.utils.logging import clear_scan_root, set_scan_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of a completed scan.

    Attributes:
        snapshot: Final, size-descending aggregation
        stats: Walker counters
        exported_rows: Rows written to the CSV file, or None when not exported
    """

    snapshot: Snapshot
    stats: WalkStats
    exported_rows: int | None = None


class ScanRunner:
    """Run one scan from start to finish.

    Each walker step performs exactly one aggregation update followed by one
    presenter update, strictly in that order. The terminal is held only for
    the walk; the export runs after it has been restored.
    """

    def __init__(
        self,
        options: ScanOptions,
        presenter: Presenter | None = None,
        exporter: CsvExporter | None = None,
    ) -> None:
        """Initialize the runner.

        The filter expression is compiled here, so an invalid pattern fails
        before the terminal is touched.

        Args:
            options: Validated scan options
            presenter: Live view to drive (a stdout presenter by default)
            exporter: CSV exporter (built from options.output_file by default)

        Raises:
            InvalidFilterError: If the filter expression is not a valid regex
        """
        self.options: ScanOptions = options
        self.walker: Walker = Walker(options)
        self.aggregator: Aggregator = Aggregator(min_size=options.min_size)
        self.presenter: Presenter = (
            presenter if presenter is not None else Presenter(refresh_every=options.refresh_every)
        )
        if exporter is None and options.output_file is not None:
            exporter = CsvExporter(options.output_file)
        self.exporter: CsvExporter | None = exporter

    def run(self) -> ScanResult:
        """Walk the tree, keep the live table current, then export.

        Returns:
            ScanResult with the final snapshot

        Raises:
            ScanRootError: If the root cannot be scanned
            TerminalError: If the terminal cannot be prepared
            ExportError: If the report cannot be written
        """
        set_scan_root(str(self.options.path))
        try:
            _ = self.walker.check_root()
            logger.info(
                "Starting scan (depth=%s, follow_symlinks=%s, filter=%r, min_size=%d)",
                self.options.max_depth or "unlimited",
                self.walker.follow_symlinks,
                self.options.filter,
                self.options.min_size,
            )

            with self.presenter:
                for entry in self.walker.walk():
                    _ = self.aggregator.accept(entry)
                    self.presenter.update(self.aggregator)
                self.presenter.finish(self.aggregator)

            snapshot = self.aggregator.snapshot()
            stats = self.walker.stats
            logger.info(
                "Scan finished: %d files recorded, %s total, %d directories, %d excluded, %d skipped",
                len(snapshot),
                humanize(snapshot.total),
                stats.directories,
                stats.excluded,
                stats.skipped,
            )

            exported_rows: int | None = None
            if self.exporter is not None:
                exported_rows = self.exporter.export(snapshot)

            return ScanResult(snapshot=snapshot, stats=stats, exported_rows=exported_rows)
        finally:
            clear_scan_root()
