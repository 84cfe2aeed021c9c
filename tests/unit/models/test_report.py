"""Unit tests for scan report models."""

from clir.filesystem.models import FileEntry, PathType, ScanWarning
from clir.models.report import PatternStats, Report
from clir.patterns.pattern_set import Pattern


def _file(path: str, size: int) -> FileEntry:
    return FileEntry(path=path, size_bytes=size, path_type=PathType.FILE, root="/r")


def _dir(path: str, size: int) -> FileEntry:
    return FileEntry(path=path, size_bytes=size, path_type=PathType.DIRECTORY, root="/r")


class TestPatternStats:
    """Tests for PatternStats."""

    def test_counts_files_and_directories_separately(self) -> None:
        """match_count counts files, dir_count counts directories."""
        stats = PatternStats(
            pattern=Pattern.parse("*"),
            entries=(_file("/r/a", 1), _file("/r/b", 2), _dir("/r/c", 3)),
        )

        assert stats.match_count == 2
        assert stats.dir_count == 1

    def test_total_bytes_collapses_nested(self) -> None:
        """Entries below a matched directory are not counted twice."""
        stats = PatternStats(
            pattern=Pattern.parse("*"),
            entries=(_file("/r/c/d", 30), _dir("/r/c", 30), _file("/r/a", 10)),
        )

        assert stats.total_bytes == 40

    def test_empty(self) -> None:
        """Stats without entries are empty."""
        stats = PatternStats(pattern=Pattern.parse("*.log"))

        assert stats.is_empty
        assert stats.total_bytes == 0
        assert stats.to_dict() == {
            "pattern": "*.log",
            "anchor": "name",
            "match_count": 0,
            "dir_count": 0,
            "total_bytes": 0,
            "paths": [],
        }


class TestReport:
    """Tests for Report."""

    def test_totals(self) -> None:
        """Report totals cover every matched entry once."""
        entries = (_file("/r/c/d", 30), _dir("/r/c", 30), _file("/r/a", 10))
        report = Report(
            stats=(PatternStats(pattern=Pattern.parse("*"), entries=entries),),
            matched=entries,
            scanned_roots=("/r",),
        )

        assert report.total_bytes == 40
        assert report.total_files == 2
        assert report.total_dirs == 1
        assert not report.is_empty
        assert report.has_valid_root

    def test_stats_for_accepts_pattern(self) -> None:
        """stats_for accepts a Pattern or its text."""
        pattern = Pattern.parse("*.tmp")
        stats = PatternStats(pattern=pattern)
        report = Report(stats=(stats,))

        assert report.stats_for(pattern) is stats
        assert report.stats_for("*.tmp") is stats

    def test_to_dict(self) -> None:
        """to_dict includes roots, per-pattern data, summary and warnings."""
        entry = _file("/r/a.tmp", 10)
        report = Report(
            stats=(PatternStats(pattern=Pattern.parse("*.tmp"), entries=(entry,)),),
            matched=(entry,),
            warnings=(ScanWarning(path="/x", message="Scan root does not exist: /x"),),
            roots=("/r", "/x"),
            scanned_roots=("/r",),
        )

        data = report.to_dict()

        assert data["roots"] == ["/r", "/x"]
        assert data["scanned_roots"] == ["/r"]
        assert data["patterns"][0]["paths"] == ["/r/a.tmp"]
        assert data["summary"] == {"total_bytes": 10, "files": 1, "directories": 0}
        assert data["warnings"] == [{"path": "/x", "message": "Scan root does not exist: /x"}]
