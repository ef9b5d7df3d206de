"""Integration tests: walker, aggregator, presenter and exporter together."""

from __future__ import annotations

import csv
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from whatbigfile.app.runner import ScanResult, ScanRunner
from whatbigfile.core.options import ScanOptions
from whatbigfile.presentation.presenter import Presenter

TreeFactory = Callable[[Mapping[str, int]], Path]
PresenterFactory = Callable[..., Presenter]

SAMPLE_TREE: dict[str, int] = {
    "big.iso": 5_000,
    "notes.txt": 120,
    "docs/manual.pdf": 2_500,
    "docs/draft.log": 900,
    "src/main.py": 300,
    "src/vendor/lib.so": 4_000,
    "src/vendor/cache/blob.bin": 7_000,
}


def _scan(root: Path, presenter: Presenter, **options: object) -> ScanResult:
    return ScanRunner(ScanOptions(path=root, **options), presenter=presenter).run()  # pyright: ignore[reportArgumentType]


def _names(result: ScanResult) -> list[str]:
    return [Path(path).name for path, _ in result.snapshot]


class TestScanFlow:
    """End-to-end scans over a sample tree."""

    def test_full_scan(self, make_tree: TreeFactory, make_presenter: PresenterFactory) -> None:
        """Everything is found, ranked largest first, and totals agree."""
        root = make_tree(SAMPLE_TREE)

        result = _scan(root, make_presenter())

        assert _names(result) == ["blob.bin", "big.iso", "lib.so", "manual.pdf", "draft.log", "main.py", "notes.txt"]
        assert result.snapshot.total == sum(SAMPLE_TREE.values())
        assert sum(size for _, size in result.snapshot) == result.snapshot.total

    def test_filter_excludes_matches_and_subtrees(
        self,
        make_tree: TreeFactory,
        make_presenter: PresenterFactory,
    ) -> None:
        """Filtered files and whole filtered directories are absent."""
        root = make_tree(SAMPLE_TREE)

        result = _scan(root, make_presenter(), filter=r"(\.log$|/vendor$)")

        assert set(_names(result)) == {"big.iso", "notes.txt", "manual.pdf", "main.py"}
        assert all("vendor" not in path and not path.endswith(".log") for path, _ in result.snapshot)

    def test_depth_limit(self, make_tree: TreeFactory, make_presenter: PresenterFactory) -> None:
        """Depth 1 keeps only files directly under the root."""
        root = make_tree(SAMPLE_TREE)

        result = _scan(root, make_presenter(), depth=1)

        assert _names(result) == ["big.iso", "notes.txt"]
        for path, _ in result.snapshot:
            assert Path(path).parent == root

    def test_min_size(self, make_tree: TreeFactory, make_presenter: PresenterFactory) -> None:
        """Nothing below the threshold is kept; the total follows."""
        root = make_tree(SAMPLE_TREE)

        result = _scan(root, make_presenter(), min_size=2_500)

        assert _names(result) == ["blob.bin", "big.iso", "lib.so", "manual.pdf"]
        assert result.snapshot.total == 7_000 + 5_000 + 4_000 + 2_500

    def test_combined_options_with_export(
        self,
        make_tree: TreeFactory,
        make_presenter: PresenterFactory,
        tmp_path: Path,
    ) -> None:
        """Depth, filter and size threshold combine; the CSV matches the snapshot."""
        root = make_tree(SAMPLE_TREE)
        report = tmp_path / "report.csv"

        result = _scan(
            root,
            make_presenter(refresh_every=2),
            depth=2,
            filter=r"\.txt$",
            min_size=500,
            output_file=report,
        )

        assert _names(result) == ["big.iso", "manual.pdf", "draft.log"]
        with report.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
        assert rows == [list(row) for row in result.snapshot.formatted_rows()]
        assert [row[1:] for row in rows] == [
            ["5.00 kB", "59.52%"],
            ["2.50 kB", "29.76%"],
            ["900 B", "10.71%"],
        ]

    def test_live_view_shows_final_ranking(
        self,
        make_tree: TreeFactory,
        make_presenter: PresenterFactory,
        console_output: Callable[[Presenter], str],
    ) -> None:
        """The last frame drawn contains the largest file and its share."""
        root = make_tree({"a.bin": 100, "b.bin": 200, "c.bin": 700})
        presenter = make_presenter(refresh_every=100)

        _ = _scan(root, presenter)

        assert presenter.frames == 1
        output = console_output(presenter)
        assert "c.bin" in output
        assert "70.00%" in output
        assert "10.00%" in output

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinks_to_one_file_counted_once(
        self,
        make_tree: TreeFactory,
        make_presenter: PresenterFactory,
    ) -> None:
        """Several links to one target produce a single row and no double count."""
        root = make_tree({"data/target.bin": 1_000, "other.bin": 10})
        for name in ("l1", "l2", "l3"):
            (root / name).symlink_to(root / "data" / "target.bin")

        followed = _scan(root, make_presenter())
        not_followed = _scan(root, make_presenter(), disable_symlinks=True)

        assert followed.snapshot.total == 1_010
        assert len(followed.snapshot) == 2
        assert {os.path.realpath(path) for path, _ in followed.snapshot} == {
            os.path.realpath(root / "data" / "target.bin"),
            os.path.realpath(root / "other.bin"),
        }
        assert not_followed.snapshot.total == 1_010

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinked_root_alias_counts_file_once(
        self,
        make_tree: TreeFactory,
        make_presenter: PresenterFactory,
        tmp_path: Path,
    ) -> None:
        """A file and a link to it dedupe even when the root is reached via an alias."""
        root = make_tree({"data/target.bin": 1_000, "other.bin": 10})
        (root / "link.bin").symlink_to(root / "data" / "target.bin")
        alias = tmp_path / "alias"
        alias.symlink_to(root, target_is_directory=True)

        result = _scan(alias, make_presenter())

        assert result.snapshot.total == 1_010
        assert len(result.snapshot) == 2
        assert [path for path, _ in result.snapshot] == [
            str(root / "data" / "target.bin"),
            str(root / "other.bin"),
        ]
