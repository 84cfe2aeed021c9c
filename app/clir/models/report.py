"""Scan report models.

A Report is built once per scan and is read-only afterwards. It holds
per-pattern statistics in pattern-set order together with every matched
entry needed for deletion.
"""

from dataclasses import dataclass
from typing import Any

from clir.filesystem.models import FileEntry, ScanWarning, collapse_nested
from clir.patterns.pattern_set import Pattern


@dataclass(frozen=True, slots=True)
class PatternStats:
    """Matches of a single pattern during one scan.

    Attributes:
        pattern: The pattern these statistics belong to.
        entries: Matched entries in scan order.
    """

    pattern: Pattern
    entries: tuple[FileEntry, ...] = ()

    @property
    def match_count(self) -> int:
        """Number of matched files and symlinks."""
        return sum(1 for e in self.entries if not e.is_dir)

    @property
    def dir_count(self) -> int:
        """Number of matched directories."""
        return sum(1 for e in self.entries if e.is_dir)

    @property
    def total_bytes(self) -> int:
        """Bytes covered by this pattern, nested matches counted once."""
        return sum(e.size_bytes for e in collapse_nested(self.entries))

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "pattern": self.pattern.text,
            "anchor": self.pattern.anchor.value,
            "match_count": self.match_count,
            "dir_count": self.dir_count,
            "total_bytes": self.total_bytes,
            "paths": [e.path for e in self.entries],
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Result of one scan.

    Attributes:
        stats: Per-pattern statistics in pattern-set order.
        matched: Every matched entry, deduplicated by path, in scan order.
        warnings: Non-fatal problems met while scanning.
        roots: Roots that were requested.
        scanned_roots: Roots that were valid and walked.
    """

    stats: tuple[PatternStats, ...]
    matched: tuple[FileEntry, ...] = ()
    warnings: tuple[ScanWarning, ...] = ()
    roots: tuple[str, ...] = ()
    scanned_roots: tuple[str, ...] = ()

    @property
    def total_bytes(self) -> int:
        """Bytes covered by all matches, nested matches counted once."""
        return sum(e.size_bytes for e in collapse_nested(self.matched))

    @property
    def total_files(self) -> int:
        return sum(1 for e in self.matched if not e.is_dir)

    @property
    def total_dirs(self) -> int:
        return sum(1 for e in self.matched if e.is_dir)

    @property
    def is_empty(self) -> bool:
        return not self.matched

    @property
    def has_valid_root(self) -> bool:
        return bool(self.scanned_roots)

    def stats_for(self, pattern: Pattern | str) -> PatternStats:
        """Look up the statistics of a pattern.

        Args:
            pattern: Pattern or its normalized text.

        Returns:
            The matching PatternStats.

        Raises:
            KeyError: If the pattern was not part of the scan.
        """
        text = pattern.text if isinstance(pattern, Pattern) else pattern
        for stat in self.stats:
            if stat.pattern.text == text:
                return stat
        raise KeyError(text)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "roots": list(self.roots),
            "scanned_roots": list(self.scanned_roots),
            "patterns": [s.to_dict() for s in self.stats],
            "summary": {
                "total_bytes": self.total_bytes,
                "files": self.total_files,
                "directories": self.total_dirs,
            },
            "warnings": [{"path": w.path, "message": w.message} for w in self.warnings],
        }
