"""Unit tests for glob pattern compilation and matching.

Tests normalization, the wildcard forms, anchoring and
base directory derivation.
"""

import pytest
from clir.patterns.matcher import (
    InvalidPatternError,
    PatternAnchor,
    PatternMatcher,
    compile_pattern,
    has_magic,
    normalize_pattern,
)


class TestNormalizePattern:
    """Tests for normalize_pattern function."""

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is removed."""
        assert normalize_pattern("  *.tmp \n") == "*.tmp"

    def test_expands_home(self) -> None:
        """A leading ~ is replaced by the home directory."""
        assert normalize_pattern("~/cache/*", home="/home/user") == "/home/user/cache/*"
        assert normalize_pattern("~", home="/home/user/") == "/home/user"

    def test_tilde_inside_name_is_kept(self) -> None:
        """Only a leading ~ followed by / is expanded."""
        assert normalize_pattern("*~", home="/home/user") == "*~"
        assert normalize_pattern("~foo", home="/home/user") == "~foo"

    def test_collapses_separators_and_dots(self) -> None:
        """Repeated slashes, '.' segments and trailing slashes are dropped."""
        assert normalize_pattern("/a//b/./c/") == "/a/b/c"
        assert normalize_pattern("build/") == "build"

    def test_resolves_parent_segments_in_absolute_patterns(self) -> None:
        """'..' is resolved lexically in absolute patterns."""
        assert normalize_pattern("/a/b/../c") == "/a/c"
        assert normalize_pattern("/tmp//a/./../*.rs") == "/tmp/*.rs"

    def test_parent_above_root_rejected(self) -> None:
        """Climbing above / is an error."""
        with pytest.raises(InvalidPatternError, match="above the filesystem root"):
            normalize_pattern("/..")

    def test_empty_rejected(self) -> None:
        """Empty and whitespace-only patterns are rejected."""
        with pytest.raises(InvalidPatternError, match="cannot be empty"):
            normalize_pattern("   ")

    def test_dot_only_rejected(self) -> None:
        """A pattern that normalizes to nothing is rejected."""
        with pytest.raises(InvalidPatternError, match="empty after normalization"):
            normalize_pattern("./")

    def test_leading_dot_keeps_root_anchor(self) -> None:
        """./name stays relative to the scan root instead of becoming a name pattern."""
        assert normalize_pattern("./*.tmp") == "./*.tmp"
        assert normalize_pattern("./c/*.tmp") == "c/*.tmp"


class TestHasMagic:
    """Tests for has_magic function."""

    @pytest.mark.parametrize("segment", ["*.tmp", "file?", "[ab]", "a\\*"])
    def test_detects_glob_syntax(self, segment: str) -> None:
        """Segments with wildcards, classes or escapes are magic."""
        assert has_magic(segment) is True

    def test_literal_segment(self) -> None:
        """Plain names are not magic."""
        assert has_magic("build") is False


class TestWildcards:
    """Tests for wildcard semantics of compiled patterns."""

    def test_star_does_not_cross_separator(self) -> None:
        """* matches within one segment only."""
        matcher = compile_pattern("c/*")

        assert matcher.matches("/r/c/d.tmp", root="/r")
        assert not matcher.matches("/r/c/e/f.tmp", root="/r")

    def test_question_mark(self) -> None:
        """? matches exactly one character."""
        matcher = compile_pattern("?.log")

        assert matcher.matches("/r/a.log")
        assert not matcher.matches("/r/ab.log")

    def test_leading_globstar(self) -> None:
        """**/ at the start matches zero or more directories."""
        matcher = compile_pattern("**/x")

        assert matcher.matches("/r/x", root="/r")
        assert matcher.matches("/r/a/b/x", root="/r")
        assert not matcher.matches("/r/a/xy", root="/r")

    def test_repeated_globstars(self) -> None:
        """a/**/**/b behaves like a/**/b."""
        matcher = compile_pattern("a/**/**/b")

        assert matcher.matches("/r/a/b", root="/r")
        assert matcher.matches("/r/a/x/y/b", root="/r")

    def test_entries_below_a_match_are_not_matched(self) -> None:
        """A path inside a matching directory does not match by itself."""
        assert not compile_pattern("/r/c").matches("/r/c/d.tmp")
        assert not compile_pattern("c/*.tmp").matches("/r/c/x.tmp/y", root="/r")
        assert not compile_pattern("build").matches("/r/build/out.o")

    def test_escaped_wildcard_is_literal(self) -> None:
        """A backslash makes the next character literal."""
        matcher = compile_pattern("a\\*")

        assert matcher.matches("/r/a*")
        assert not matcher.matches("/r/ab")

    def test_leading_bang_and_hash_are_literal(self) -> None:
        """! and # at the start are plain characters."""
        assert compile_pattern("!keep").matches("/r/!keep")
        assert compile_pattern("#notes#").matches("/r/#notes#")

    def test_trailing_backslash_rejected(self) -> None:
        """A lone backslash at the end is malformed."""
        with pytest.raises(InvalidPatternError, match="Invalid pattern"):
            compile_pattern("abc\\")

    def test_reversed_range_rejected(self) -> None:
        """Ranges must be ascending."""
        with pytest.raises(InvalidPatternError, match="Invalid pattern"):
            compile_pattern("[z-a]")

    @pytest.mark.parametrize("pattern", ["[abc", "a/[b/c]", "[]", "[!]", "x["])
    def test_unbalanced_brackets_rejected(self, pattern: str) -> None:
        """Unterminated and empty classes are malformed."""
        with pytest.raises(InvalidPatternError, match="unterminated character class"):
            compile_pattern(pattern)

    def test_escaped_bracket_is_literal(self) -> None:
        """An escaped [ does not open a class."""
        assert compile_pattern("\\[abc").matches("/r/[abc")

    def test_caret_negates_class(self) -> None:
        """[^...] is the same as [!...]."""
        matcher = compile_pattern("[^ab].tmp")

        assert matcher.matches("/r/c.tmp")
        assert not matcher.matches("/r/a.tmp")

    def test_negated_class_never_matches_separator(self) -> None:
        """A negated class stays within one segment."""
        matcher = compile_pattern("/r/a[!x]b")

        assert matcher.matches("/r/ayb")
        assert not matcher.matches("/r/a/b")
        assert compile_pattern("[!a-]").matches("/r/b")

    def test_bare_root_rejected(self) -> None:
        """/ alone matches nothing and is refused."""
        with pytest.raises(InvalidPatternError):
            compile_pattern("/")


class TestPatternMatcher:
    """Tests for PatternMatcher matching."""

    def test_name_anchor_matches_any_depth(self) -> None:
        """Patterns without / are tested against the basename."""
        matcher = compile_pattern("*.tmp")

        assert matcher.anchor is PatternAnchor.NAME
        assert matcher.matches("/r/a.tmp")
        assert matcher.matches("/r/c/d.tmp")
        assert not matcher.matches("/r/keep.txt")
        assert not matcher.matches("/r/a.tmp.bak")

    def test_absolute_anchor(self) -> None:
        """Absolute patterns are tested against the full path."""
        matcher = compile_pattern("/r/c/*.tmp")

        assert matcher.anchor is PatternAnchor.ABSOLUTE
        assert matcher.matches("/r/c/d.tmp")
        assert not matcher.matches("/r/a.tmp")
        assert not matcher.matches("/r/c/x/d.tmp")

    def test_relative_anchor_uses_root(self) -> None:
        """Relative patterns are tested against the path below the root."""
        matcher = compile_pattern("c/*.tmp")

        assert matcher.anchor is PatternAnchor.RELATIVE
        assert matcher.matches("/r/c/d.tmp", root="/r")
        assert not matcher.matches("/r/x/c/d.tmp", root="/r")
        assert not matcher.matches("/other/c/d.tmp", root="/r")

    def test_root_anchored_name(self) -> None:
        """./*.tmp only matches directly below the root."""
        matcher = compile_pattern(normalize_pattern("./*.tmp"))

        assert matcher.matches("/r/a.tmp", root="/r")
        assert not matcher.matches("/r/c/d.tmp", root="/r")

    def test_globstar_matches_nested(self) -> None:
        """** spans any number of directories."""
        matcher = compile_pattern("/r/**/*.tmp")

        assert matcher.matches("/r/a.tmp")
        assert matcher.matches("/r/c/d.tmp")
        assert matcher.matches("/r/c/e/f.tmp")
        assert not matcher.matches("/s/a.tmp")

    def test_trailing_globstar_excludes_base(self) -> None:
        """/x/** matches below /x but not /x itself."""
        matcher = compile_pattern("/x/**")

        assert matcher.matches("/x/a")
        assert matcher.matches("/x/a/b")
        assert not matcher.matches("/x")

    def test_character_classes(self) -> None:
        """Bracket classes, negation and a leading ] are supported."""
        assert compile_pattern("[ab].tmp").matches("/r/a.tmp")
        assert not compile_pattern("[ab].tmp").matches("/r/c.tmp")
        assert compile_pattern("[!ab].tmp").matches("/r/c.tmp")
        assert not compile_pattern("[!ab].tmp").matches("/r/a.tmp")
        assert compile_pattern("[]x]").matches("/r/]")
        assert compile_pattern("file[0-9]").matches("/r/file7")
        assert compile_pattern("[a-]").matches("/r/-")

    def test_matching_is_case_sensitive(self) -> None:
        """Case matters."""
        assert not compile_pattern("*.TMP").matches("/r/a.tmp")

    def test_empty_pattern_rejected(self) -> None:
        """An empty pattern cannot be compiled."""
        with pytest.raises(InvalidPatternError):
            PatternMatcher("")

    def test_repr(self) -> None:
        """repr shows the source pattern."""
        assert repr(compile_pattern("*.tmp")) == "PatternMatcher('*.tmp')"


class TestBaseDir:
    """Tests for PatternMatcher.base_dir."""

    def test_wildcard_prefix(self) -> None:
        """The base is the literal directory before the first wildcard."""
        assert compile_pattern("/tmp/build/*.o").base_dir == "/tmp/build"

    def test_literal_pattern_uses_parent(self) -> None:
        """A fully literal path is found by scanning its parent."""
        assert compile_pattern("/tmp/build").base_dir == "/tmp"

    def test_wildcard_below_root(self) -> None:
        """A wildcard right after / yields the filesystem root."""
        assert compile_pattern("/*.log").base_dir == "/"

    def test_non_absolute_has_no_base(self) -> None:
        """Name and relative patterns have no base directory."""
        assert compile_pattern("*.tmp").base_dir is None
        assert compile_pattern("c/*.tmp").base_dir is None
