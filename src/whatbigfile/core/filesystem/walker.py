"""Directory walker producing sized file entries."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from whatbigfile.core.filesystem.exclusions import PathFilter, is_valid_text
from whatbigfile.exceptions import ScanRootError

if TYPE_CHECKING:
    from whatbigfile.core.options import ScanOptions

logger = logging.getLogger(__name__)

# (st_dev, st_ino) of a directory, used to detect symlink loops
_DirKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Entry:
    """A non-directory filesystem object found by the walker.

    Attributes:
        path: Resolved absolute path (the target path for followed symlinks)
        size: Size in bytes (the target's size for followed symlinks)
        depth: Depth below the scan root (direct children are depth 1)
    """

    path: str
    size: int
    # 0 for entries not produced by a walk
    depth: int = 0


@dataclass(slots=True)
class WalkStats:
    """Counters collected during a walk."""

    directories: int = 0
    files: int = 0
    excluded: int = 0
    skipped: int = 0


class Walker:
    """Lazy, depth-first traversal of a directory tree.

    Provides recursive directory traversal with support for:
    - Regex exclusion that prunes whole subtrees
    - Per-directory depth limiting
    - Following or ignoring symbolic links, with loop detection
    - Silent recovery from unreadable or vanished entries
    """

    def __init__(
        self,
        options: ScanOptions,
        path_filter: PathFilter | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            options: Scan options providing root, depth and symlink policy
            path_filter: Pre-built exclusion filter (compiled from options otherwise)

        Raises:
            InvalidFilterError: If the configured filter expression is invalid
        """
        self.root: str = os.fspath(options.path)
        self.max_depth: int | None = options.max_depth
        self.follow_symlinks: bool = not options.disable_symlinks
        self.path_filter: PathFilter = (
            path_filter if path_filter is not None else PathFilter.from_expression(options.filter)
        )
        self.stats: WalkStats = WalkStats()

    def check_root(self) -> os.stat_result:
        """Verify that the scan root is an accessible directory.

        Returns:
            Stat result of the root directory

        Raises:
            ScanRootError: If the root is missing, not a directory or unreadable
        """
        try:
            root_stat = os.stat(self.root)
        except OSError as exc:
            msg = f"Cannot access scan root {self.root}: {exc.strerror or exc}"
            raise ScanRootError(msg, self.root) from exc

        if not stat.S_ISDIR(root_stat.st_mode):
            raise ScanRootError(f"Scan root is not a directory: {self.root}", self.root)

        if not os.access(self.root, os.R_OK | os.X_OK):
            raise ScanRootError(f"Scan root is not readable: {self.root}", self.root)

        return root_stat

    def walk(self) -> Iterator[Entry]:
        """Yield every non-directory entry under the root.

        Entry paths are canonical: they are built from the resolved root, so
        a file reached through a symlinked root or directory gets the same
        path as when reached directly.

        Yields:
            Entry objects in traversal order

        Raises:
            ScanRootError: If the root itself cannot be listed
        """
        root_stat = self.check_root()

        if not self.path_filter.includes(self.root):
            logger.debug("Scan root %s is excluded by filter", self.root)
            self.stats.excluded += 1
            return

        ancestors = frozenset({(root_stat.st_dev, root_stat.st_ino)})
        yield from self._walk_directory(self.root, os.path.realpath(self.root), 0, ancestors)

    def _walk_directory(
        self,
        directory: str,
        real_directory: str,
        depth: int,
        ancestors: frozenset[_DirKey],
    ) -> Iterator[Entry]:
        """Perform depth-first traversal of one directory.

        Args:
            directory: Directory path to list, as reached from the root
            real_directory: Canonical form of directory, used to build entry paths
            depth: Depth of the directory itself (root is 0)
            ancestors: Identities of the directories above, for loop detection

        Yields:
            Entry objects found in this directory and below
        """
        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as exc:
            if depth == 0:
                msg = f"Cannot list scan root {directory}: {exc.strerror or exc}"
                raise ScanRootError(msg, directory) from exc
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            self.stats.skipped += 1
            return

        self.stats.directories += 1
        child_depth = depth + 1

        for child in children:
            if not self.path_filter.includes(child.path):
                self.stats.excluded += 1
                continue

            try:
                is_link = child.is_symlink()
                if is_link and not self.follow_symlinks:
                    continue
                is_dir = child.is_dir(follow_symlinks=self.follow_symlinks)
            except OSError as exc:
                logger.debug("Skipping %s: %s", child.path, exc)
                self.stats.skipped += 1
                continue

            if is_dir:
                # Entries inside would sit past the depth limit
                if self.max_depth is not None and child_depth >= self.max_depth:
                    continue

                key = self._directory_key(child)
                if key is None:
                    continue
                if key in ancestors:
                    logger.debug("Skipping symlink loop at %s", child.path)
                    self.stats.skipped += 1
                    continue

                real_child = (
                    os.path.realpath(child.path) if is_link else os.path.join(real_directory, child.name)
                )
                yield from self._walk_directory(child.path, real_child, child_depth, ancestors | {key})
                continue

            entry = self._make_entry(child, real_directory, child_depth, is_link)
            if entry is not None:
                self.stats.files += 1
                yield entry

    def _directory_key(self, child: os.DirEntry[str]) -> _DirKey | None:
        """Return the identity of a directory, or None if it vanished."""
        try:
            child_stat = child.stat(follow_symlinks=self.follow_symlinks)
        except OSError as exc:
            logger.debug("Skipping %s: %s", child.path, exc)
            self.stats.skipped += 1
            return None
        return child_stat.st_dev, child_stat.st_ino

    def _make_entry(
        self,
        child: os.DirEntry[str],
        real_directory: str,
        depth: int,
        is_link: bool,
    ) -> Entry | None:
        """Build an entry for a leaf, resolving symlinks to their target.

        Args:
            child: Directory entry of the leaf
            real_directory: Canonical path of the directory holding the leaf
            depth: Depth of the leaf below the root
            is_link: Whether the leaf is a symbolic link

        Returns:
            Entry, or None if the leaf cannot be read or its path is not valid text
        """
        try:
            child_stat = child.stat(follow_symlinks=True)
        except OSError as exc:
            # Broken symlink, or the file disappeared mid-walk
            logger.debug("Skipping %s: %s", child.path, exc)
            self.stats.skipped += 1
            return None

        path = os.path.join(real_directory, child.name)
        if is_link:
            try:
                path = os.path.realpath(child.path, strict=True)
            except OSError as exc:
                logger.debug("Could not resolve symlink %s: %s", child.path, exc)

        # A link or an ancestor may resolve to a name that is not valid text
        if not is_valid_text(path):
            logger.debug("Skipping %s: resolved path is not valid text", child.path)
            self.stats.skipped += 1
            return None

        return Entry(path=path, size=child_stat.st_size, depth=depth)
