"""Filesystem scanner for candidate cleanup entries.

Walks one or more root directories depth-first and yields every file
and symlink found beneath them, optionally followed by the directories
themselves once their contents have been visited. Symlinks are never
followed. Entries that cannot be read are skipped and recorded as
warnings instead of aborting the walk.
"""

import logging
import os
import stat
from collections.abc import Generator, Iterable, Iterator
from pathlib import Path

from clir.filesystem.models import FileEntry, PathType, ScanWarning

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Base exception for scan-related errors."""


class InvalidRootError(ScanError):
    """Raised when a scan root is missing or not a directory."""


def resolve_root(root: str | Path) -> str:
    """Expand ``~`` and make a root absolute without following symlinks."""
    return os.path.abspath(os.path.expanduser(str(root)))


def collapse_roots(roots: Iterable[str | Path]) -> list[str]:
    """Resolve roots and drop duplicates and roots nested inside another.

    The first occurrence order is preserved for the roots that remain.

    Args:
        roots: Root directories, absolute or relative.

    Returns:
        Absolute root paths with no root below another.
    """
    resolved: list[str] = []
    for root in roots:
        path = resolve_root(root)
        if path not in resolved:
            resolved.append(path)

    def _is_nested(child: str, parent: str) -> bool:
        prefix = parent.rstrip("/") + "/"
        return child != parent and child.startswith(prefix)

    return [r for r in resolved if not any(_is_nested(r, other) for other in resolved)]


class FilesystemScanner:
    """Walks scan roots and yields FileEntry instances.

    Each call to ``scan()`` performs a fresh traversal; the warnings and
    scanned roots of the previous call are discarded.

    Args:
        include_directories: If True, also yield directories (after their
            contents) with their recursive size.
    """

    def __init__(self, *, include_directories: bool = False) -> None:
        self._include_directories = include_directories
        self._warnings: list[ScanWarning] = []
        self._scanned_roots: list[str] = []

    @property
    def warnings(self) -> list[ScanWarning]:
        """Warnings collected during the most recent scan."""
        return list(self._warnings)

    @property
    def scanned_roots(self) -> list[str]:
        """Roots that were valid and walked during the most recent scan."""
        return list(self._scanned_roots)

    def scan(self, roots: Iterable[str | Path]) -> Iterator[FileEntry]:
        """Scan all roots and yield the entries found beneath them.

        Overlapping roots are collapsed so that no entry is yielded twice.
        Invalid roots are recorded as warnings and skipped.

        Args:
            roots: Directories to walk.

        Yields:
            FileEntry for each file, symlink and (optionally) directory.
        """
        self._warnings = []
        self._scanned_roots = []

        for root in collapse_roots(roots):
            try:
                entries = self.scan_root(root)
            except InvalidRootError as e:
                self._warn(root, str(e))
                continue
            self._scanned_roots.append(root)
            yield from entries

    def scan_root(self, root: str | Path) -> Iterator[FileEntry]:
        """Validate a single root and return a lazy walk over it.

        The root itself is never yielded.

        Args:
            root: Directory to walk.

        Returns:
            Iterator over the entries below the root.

        Raises:
            InvalidRootError: If the root does not exist or is not a directory.
        """
        path = Path(resolve_root(root))
        if not path.exists():
            raise InvalidRootError(f"Scan root does not exist: {path}")
        if not path.is_dir():
            raise InvalidRootError(f"Scan root is not a directory: {path}")

        logger.debug("Scanning root %s", path)
        return self._walk(path, str(path))

    def _walk(self, directory: Path, root: str) -> Generator[FileEntry, None, int]:
        """Recursively walk a directory in sorted order.

        Args:
            directory: Directory to list.
            root: Scan root the directory belongs to.

        Yields:
            FileEntry for each entry below the directory.

        Returns:
            Total size of the files and symlinks below the directory.
        """
        try:
            children = sorted(directory.iterdir())
        except OSError as e:
            self._warn(str(directory), f"Cannot read directory: {e.strerror or e}")
            return 0

        total = 0
        for child in children:
            try:
                info = child.lstat()
            except OSError as e:
                # Vanished between listing and stat, or not accessible
                self._warn(str(child), f"Cannot stat entry: {e.strerror or e}")
                continue

            if stat.S_ISDIR(info.st_mode):
                size = yield from self._walk(child, root)
                total += size
                if self._include_directories:
                    yield FileEntry(
                        path=str(child),
                        size_bytes=size,
                        path_type=PathType.DIRECTORY,
                        root=root,
                    )
            elif stat.S_ISLNK(info.st_mode):
                total += info.st_size
                yield FileEntry(
                    path=str(child),
                    size_bytes=info.st_size,
                    path_type=PathType.SYMLINK,
                    root=root,
                )
            elif stat.S_ISREG(info.st_mode):
                total += info.st_size
                yield FileEntry(
                    path=str(child),
                    size_bytes=info.st_size,
                    path_type=PathType.FILE,
                    root=root,
                )
            else:
                logger.debug("Skipping special file: %s", child)

        return total

    def _warn(self, path: str, message: str) -> None:
        logger.warning("%s: %s", message, path)
        self._warnings.append(ScanWarning(path=path, message=message))
