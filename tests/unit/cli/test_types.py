"""Unit tests for shared CLI types and helpers."""

from pathlib import Path

from clir.cli.types import GlobalOptions, OutputFormat, resolve_pattern_argument


class TestResolvePatternArgument:
    """Tests for resolve_pattern_argument function."""

    def test_absolute_kept(self) -> None:
        """Absolute patterns are not changed."""
        assert resolve_pattern_argument("/srv/*.log", Path("/home/u")) == "/srv/*.log"

    def test_home_kept(self) -> None:
        """~ patterns are expanded later by the pattern set."""
        assert resolve_pattern_argument("~/.cache", Path("/home/u")) == "~/.cache"

    def test_name_kept(self) -> None:
        """Bare names match at any depth and stay relative."""
        assert resolve_pattern_argument("*.tmp", Path("/home/u")) == "*.tmp"
        assert resolve_pattern_argument("build/", Path("/home/u")) == "build/"

    def test_relative_path_joined(self) -> None:
        """Patterns with a directory part are joined to the working directory."""
        assert resolve_pattern_argument("build/*.o", Path("/home/u/proj")) == (
            "/home/u/proj/build/*.o"
        )

    def test_whitespace_stripped(self) -> None:
        """Surrounding whitespace is removed."""
        assert resolve_pattern_argument("  ./x/y ", Path("/w")) == "/w/./x/y"


class TestGlobalOptions:
    """Tests for GlobalOptions defaults."""

    def test_defaults(self) -> None:
        """Defaults describe a plain report run."""
        options = GlobalOptions()

        assert options.config_path is None
        assert options.roots == ()
        assert options.remove is False
        assert options.match_directories is True
        assert options.output_format is OutputFormat.TABLE
