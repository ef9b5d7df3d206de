"""Report export module."""

from __future__ import annotations

from .csv_exporter import CsvExporter

__all__ = ["CsvExporter"]
