"""Scan engine tying the scanner and the pattern set together.

Every entry the scanner yields is tested against every pattern. A path
may match several patterns; each match counts towards that pattern's
statistics independently, while the report's matched list holds each
path once for deletion.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from clir.filesystem.models import FileEntry, ScanWarning
from clir.filesystem.scanner import (
    FilesystemScanner,
    InvalidRootError,
    ScanError,
    collapse_roots,
)
from clir.models.report import PatternStats, Report
from clir.patterns.matcher import PatternAnchor
from clir.patterns.pattern_set import PatternSet

logger = logging.getLogger(__name__)


class NoValidRootError(ScanError):
    """Raised when a scan is requested without any root."""


def default_roots(pattern_set: PatternSet, cwd: str | Path) -> list[str]:
    """Derive scan roots from the patterns themselves.

    Absolute patterns contribute their wildcard-free base directory.
    Name and relative patterns are looked up below ``cwd``.

    Args:
        pattern_set: Patterns to derive roots for.
        cwd: Working directory used for non-absolute patterns.

    Returns:
        Collapsed list of absolute root directories.
    """
    roots: list[str] = []
    needs_cwd = False
    for pattern in pattern_set.list():
        if pattern.anchor is PatternAnchor.ABSOLUTE:
            if pattern.base_dir:
                roots.append(pattern.base_dir)
        else:
            needs_cwd = True

    if needs_cwd:
        roots.append(str(cwd))

    return collapse_roots(roots)


class ScanEngine:
    """Runs a scan and aggregates matches into a Report.

    Args:
        match_directories: If True, directories are matched against the
            patterns as well as files. If False, directories are never
            matched, even when an injected scanner yields them.
        scanner: Scanner to use. Defaults to a FilesystemScanner that
            yields directories only when ``match_directories`` is set.
            An injected scanner that does not yield directories leaves
            nothing for ``match_directories`` to match.
    """

    def __init__(
        self,
        *,
        match_directories: bool = True,
        scanner: FilesystemScanner | None = None,
    ) -> None:
        self._match_directories = match_directories
        self._scanner = scanner or FilesystemScanner(include_directories=match_directories)

    def run(self, roots: Iterable[str | Path], pattern_set: PatternSet) -> Report:
        """Scan the roots and classify every entry against the pattern set.

        Invalid roots do not abort the run; they are recorded as warnings
        and the remaining roots are still scanned.

        Args:
            roots: Directories to scan.
            pattern_set: Patterns to match.

        Returns:
            Report with per-pattern statistics and all matched entries.

        Raises:
            NoValidRootError: If no roots were given.
        """
        requested = [str(r) for r in roots]
        if not requested:
            raise NoValidRootError("No scan roots given")

        patterns = pattern_set.list()
        if not patterns:
            warnings, scanned = self._check_roots(requested)
            return Report(
                stats=(),
                warnings=tuple(warnings),
                roots=tuple(requested),
                scanned_roots=tuple(scanned),
            )

        per_pattern: list[list[FileEntry]] = [[] for _ in patterns]
        matched: dict[str, FileEntry] = {}
        visited = 0

        for entry in self._scanner.scan(requested):
            visited += 1
            if entry.is_dir and not self._match_directories:
                continue
            for index, pattern in enumerate(patterns):
                if pattern.matches(entry.path, entry.root):
                    per_pattern[index].append(entry)
                    matched.setdefault(entry.path, entry)

        report = Report(
            stats=tuple(
                PatternStats(pattern=p, entries=tuple(e))
                for p, e in zip(patterns, per_pattern, strict=True)
            ),
            matched=tuple(matched.values()),
            warnings=tuple(self._scanner.warnings),
            roots=tuple(requested),
            scanned_roots=tuple(self._scanner.scanned_roots),
        )
        logger.info(
            "Scanned %d entries under %d root(s): %d matched, %d warning(s)",
            visited,
            len(report.scanned_roots),
            len(report.matched),
            len(report.warnings),
        )
        return report

    def _check_roots(self, roots: list[str]) -> tuple[list[ScanWarning], list[str]]:
        """Validate roots without walking them."""
        warnings: list[ScanWarning] = []
        scanned: list[str] = []
        for root in collapse_roots(roots):
            try:
                self._scanner.scan_root(root)
            except InvalidRootError as e:
                logger.warning("%s", e)
                warnings.append(ScanWarning(path=root, message=str(e)))
                continue
            scanned.append(root)
        return warnings, scanned
