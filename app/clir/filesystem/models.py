"""Filesystem domain models for scanning.

This module defines the data structures produced while walking scan
roots: the entries themselves and the non-fatal warnings collected
along the way.
"""

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class PathType(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file.
        SYMLINK: Symbolic link (never followed).
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """Represents a filesystem entry discovered during scanning.

    Attributes:
        path: Absolute filesystem path.
        size_bytes: Size in bytes. For directories, the recursive sum of
            the files and symlinks beneath them.
        path_type: Type of the filesystem entry.
        root: Absolute scan root the entry was found under.
    """

    path: str
    size_bytes: int
    path_type: PathType
    root: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size must be non-negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_dir(self) -> bool:
        return self.path_type == PathType.DIRECTORY

    @property
    def depth(self) -> int:
        """Number of path components, used to order directory removal."""
        return self.path.rstrip("/").count("/")


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """A non-fatal problem encountered while scanning.

    Attributes:
        path: Path that could not be read or scanned.
        message: Human-readable description of the problem.
    """

    path: str
    message: str


def collapse_nested(entries: Iterable[FileEntry]) -> list[FileEntry]:
    """Drop entries that lie below a directory entry of the same input.

    Used to total sizes without counting a matched directory and its
    matched contents twice. Order of the remaining entries is preserved.

    Args:
        entries: Entries to collapse.

    Returns:
        Entries with no ancestor directory among the input.
    """
    items = list(entries)
    directories = {e.path for e in items if e.is_dir}
    if not directories:
        return items

    kept: list[FileEntry] = []
    for entry in items:
        parent = posixpath.dirname(entry.path)
        covered = False
        while parent and parent != entry.path:
            if parent in directories:
                covered = True
                break
            if parent == "/":
                break
            parent = posixpath.dirname(parent)
        if not covered:
            kept.append(entry)
    return kept
