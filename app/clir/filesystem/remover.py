"""Filesystem deletion of matched entries.

Deletes each matched path independently and collects one outcome per
path, so a single failure never aborts the rest of the batch. Nothing
here is transactional: a partially completed run is reported as such.
"""

import errno
import logging
import os
import shutil
import stat
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from clir.filesystem.models import FileEntry, PathType, collapse_nested
from clir.filesystem.protected import contains_protected_path, is_protected_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of a single deletion.

    Attributes:
        path: Absolute path that was operated on.
        succeeded: Whether the path was removed.
        error: Reason for the failure, None on success.
        size_bytes: Size recorded for the path when it was scanned.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    succeeded: bool
    error: str | None = None
    size_bytes: int = 0
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Aggregated outcome of a deletion batch.

    Attributes:
        outcomes: One outcome per distinct path, in processing order.
        freed_bytes: Bytes released by successful deletions, with nested
            entries counted once.
    """

    outcomes: tuple[DeletionOutcome, ...]
    freed_bytes: int = 0

    @property
    def deleted_count(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.succeeded)

    @property
    def failures(self) -> tuple[DeletionOutcome, ...]:
        """Failed outcomes in processing order."""
        return tuple(o for o in self.outcomes if not o.succeeded)

    @property
    def dry_run(self) -> bool:
        return any(o.dry_run for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "deleted_count": self.deleted_count,
            "failed_count": self.failed_count,
            "freed_bytes": self.freed_bytes,
            "dry_run": self.dry_run,
            "failures": [{"path": o.path, "error": o.error} for o in self.failures],
        }


class Remover:
    """Deletes matched files and directories.

    Files and symlinks are removed first, then directories from the
    deepest up. By default directories are removed with ``rmdir``, so a
    matched directory only disappears once all of its contents are gone.
    With ``recursive``, a directory that contains a protected path is
    refused as a whole.

    Attributes:
        _dry_run: If True, simulate deletions without modifying the filesystem.
        _recursive: If True, remove matched directories with their contents.
    """

    def __init__(self, *, dry_run: bool = False, recursive: bool = False) -> None:
        """Initialize the Remover.

        Args:
            dry_run: If True, report what would be deleted without deleting.
            recursive: If True, matched directories are deleted together
                with everything below them.
        """
        self._dry_run = dry_run
        self._recursive = recursive

    def delete(self, matched: Iterable[FileEntry | str]) -> DeletionResult:
        """Delete matched entries and return the aggregated result.

        Entries are deduplicated by path. Plain path strings are
        classified by an ``lstat`` at deletion time.

        Args:
            matched: Entries (or absolute paths) to delete.

        Returns:
            DeletionResult with one outcome per distinct path.
        """
        entries: dict[str, FileEntry | None] = {}
        for item in matched:
            if isinstance(item, FileEntry):
                entries.setdefault(item.path, item)
            else:
                entries.setdefault(item, None)

        resolved: list[FileEntry] = []
        outcomes: list[DeletionOutcome] = []
        for path, entry in entries.items():
            if entry is None:
                entry = _entry_for_path(path)
                if entry is None:
                    outcomes.append(_missing(path))
                    continue
            resolved.append(entry)

        files = [e for e in resolved if not e.is_dir]
        directories = sorted((e for e in resolved if e.is_dir), key=lambda e: -e.depth)

        deleted: list[FileEntry] = []
        removed: set[str] = set()
        for entry in (*files, *directories):
            outcome = self._delete_single(entry, removed)
            outcomes.append(outcome)
            if outcome.succeeded:
                deleted.append(entry)
                removed.add(entry.path)

        freed = sum(e.size_bytes for e in collapse_nested(deleted))
        result = DeletionResult(outcomes=tuple(outcomes), freed_bytes=freed)
        logger.info(
            "Deletion finished: %d deleted, %d failed", result.deleted_count, result.failed_count
        )
        return result

    def _delete_single(self, entry: FileEntry, removed: set[str]) -> DeletionOutcome:
        """Delete a single filesystem path.

        The current type of the path is checked again right before
        deletion since the filesystem may have changed since the scan.

        Args:
            entry: Entry to delete.
            removed: Paths already deleted in this batch, used to predict
                whether a dry-run ``rmdir`` would succeed.

        Returns:
            DeletionOutcome indicating success or failure.
        """
        path = entry.path

        if is_protected_path(path):
            logger.warning("Refusing to delete protected path: %s", path)
            return DeletionOutcome(
                path=path,
                succeeded=False,
                error=f"Protected path cannot be deleted: {path}",
                size_bytes=entry.size_bytes,
            )

        try:
            info = os.lstat(path)
        except FileNotFoundError:
            return _missing(path, entry.size_bytes)
        except OSError as e:
            return DeletionOutcome(
                path=path, succeeded=False, error=str(e), size_bytes=entry.size_bytes
            )

        is_dir = stat.S_ISDIR(info.st_mode)
        if is_dir and self._recursive and contains_protected_path(path):
            logger.warning("Refusing to delete %s: it contains a protected path", path)
            return DeletionOutcome(
                path=path,
                succeeded=False,
                error=f"Directory contains a protected path: {path}",
                size_bytes=entry.size_bytes,
            )

        if self._dry_run:
            error = _rmdir_error(path, removed) if is_dir and not self._recursive else None
            if error is not None:
                return DeletionOutcome(
                    path=path,
                    succeeded=False,
                    error=error,
                    size_bytes=entry.size_bytes,
                    dry_run=True,
                )
            logger.info("Dry-run: would delete %s", path)
            return DeletionOutcome(
                path=path, succeeded=True, size_bytes=entry.size_bytes, dry_run=True
            )

        try:
            if is_dir:
                if self._recursive:
                    shutil.rmtree(path)
                else:
                    os.rmdir(path)
            else:
                os.unlink(path)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            return DeletionOutcome(
                path=path, succeeded=False, error=str(e), size_bytes=entry.size_bytes
            )

        logger.debug("Deleted %s", path)
        return DeletionOutcome(path=path, succeeded=True, size_bytes=entry.size_bytes)


def _entry_for_path(path: str) -> FileEntry | None:
    try:
        info = os.lstat(path)
    except OSError:
        return None

    if stat.S_ISDIR(info.st_mode):
        path_type = PathType.DIRECTORY
    elif stat.S_ISLNK(info.st_mode):
        path_type = PathType.SYMLINK
    else:
        path_type = PathType.FILE

    return FileEntry(
        path=path,
        size_bytes=info.st_size if path_type != PathType.DIRECTORY else 0,
        path_type=path_type,
        root=os.path.dirname(path),
    )


def _rmdir_error(path: str, removed: set[str]) -> str | None:
    """Predict the error ``rmdir`` would raise once ``removed`` is gone."""
    try:
        children = os.listdir(path)
    except OSError as e:
        return str(e)

    if any(os.path.join(path, name) not in removed for name in children):
        return str(OSError(errno.ENOTEMPTY, os.strerror(errno.ENOTEMPTY), path))
    return None


def _missing(path: str, size_bytes: int = 0) -> DeletionOutcome:
    return DeletionOutcome(
        path=path,
        succeeded=False,
        error=f"Path does not exist: {path}",
        size_bytes=size_bytes,
    )
