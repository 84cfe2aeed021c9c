"""Glob pattern compilation and matching.

Patterns are compiled with pathspec's gitwildmatch implementation. The
supported wildcards are ``*``, ``?``, ``**`` and bracket character
classes, with backslash escaping.

Every compiled pattern carries an anchor that decides which part of a
path it is tested against:

- NAME: patterns without ``/`` are matched against the basename, so
  ``*.tmp`` finds ``a.tmp`` and ``c/d.tmp`` alike.
- ABSOLUTE: patterns starting with ``/`` are matched against the full
  absolute path.
- RELATIVE: any other pattern containing ``/`` is matched against the
  path relative to the scan root it was found under.
"""

import re
from enum import Enum
from pathlib import Path

from pathspec.patterns import GitWildMatchPattern

_GLOB_CHARS = frozenset("*?[\\")

# Opening of a negated class in a compiled expression, keeping a leading "]" member
_NEGATED_CLASS = re.compile(r"\[\^(\]?)")


class PatternError(Exception):
    """Base exception for pattern-related errors."""


class InvalidPatternError(PatternError):
    """Raised when a glob pattern is empty or syntactically malformed."""


class PatternAnchor(str, Enum):
    """Which part of a path a pattern is matched against.

    Attributes:
        NAME: The basename of the path.
        ABSOLUTE: The complete absolute path.
        RELATIVE: The path relative to the scan root.
    """

    NAME = "name"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


def normalize_pattern(raw: str, home: str | None = None) -> str:
    """Normalize a user-supplied glob pattern.

    Strips surrounding whitespace, expands a leading ``~``, collapses
    repeated separators, drops ``.`` segments and a trailing ``/``, and
    resolves ``..`` lexically in absolute patterns.

    Args:
        raw: Pattern as typed by the user.
        home: Home directory used for ``~`` expansion. Defaults to the
            current user's home.

    Returns:
        The normalized pattern string.

    Raises:
        InvalidPatternError: If the pattern is empty or climbs above ``/``.
    """
    pattern = raw.strip()
    if not pattern:
        raise InvalidPatternError("Pattern cannot be empty")

    if pattern == "~" or pattern.startswith("~/"):
        home_dir = home if home is not None else str(Path.home())
        pattern = home_dir.rstrip("/") + pattern[1:]

    absolute = pattern.startswith("/")
    raw_segments = [seg for seg in pattern.split("/") if seg]
    segments: list[str] = []

    for seg in raw_segments:
        if seg == ".":
            continue
        if seg == ".." and absolute:
            if not segments:
                raise InvalidPatternError(f"Pattern climbs above the filesystem root: {raw!r}")
            segments.pop()
            continue
        segments.append(seg)

    normalized = "/".join(segments)
    if absolute:
        return "/" + normalized

    if not normalized:
        raise InvalidPatternError(f"Pattern is empty after normalization: {raw!r}")

    # "./*.tmp" stays anchored to the root instead of becoming a name pattern
    if raw_segments[0] == "." and "/" not in normalized:
        normalized = "./" + normalized

    return normalized


def has_magic(segment: str) -> bool:
    """Check whether a pattern segment contains glob syntax."""
    return any(c in _GLOB_CHARS for c in segment)


def _check_segment(segment: str, pattern: str) -> str:
    """Validate escapes and bracket classes of one ``/``-free segment.

    Negated classes are rewritten to the ``[!...]`` form gitwildmatch
    understands.

    Raises:
        InvalidPatternError: On a trailing backslash or an unterminated
            class.
    """
    out: list[str] = []
    i = 0
    while i < len(segment):
        char = segment[i]
        if char == "\\":
            if i + 1 >= len(segment):
                raise InvalidPatternError(f"Invalid pattern {pattern!r}: lone trailing backslash")
            out.append(segment[i : i + 2])
            i += 2
            continue
        if char != "[":
            out.append(char)
            i += 1
            continue

        start = i + 1
        negate = start < len(segment) and segment[start] in "!^"
        if negate:
            start += 1
        # a ']' right after the opening bracket is a member
        end = start + 1 if segment[start : start + 1] == "]" else start
        end = segment.find("]", end)
        if end == -1:
            raise InvalidPatternError(
                f"Invalid pattern {pattern!r}: unterminated character class"
            )

        out.append(("[!" if negate else "[") + segment[start:end] + "]")
        i = end + 1
    return "".join(out)


def _to_gitwildmatch(pattern: str) -> str:
    """Rewrite a normalized pattern into anchored gitwildmatch syntax.

    Relative patterns, including the root-anchored ``./name`` form, get a
    leading ``/`` so they only match from the start of the subject. A
    leading ``!`` or ``#`` is escaped so it is not read as a negation or
    a comment.
    """
    checked = "/".join(_check_segment(seg, pattern) for seg in pattern.split("/"))
    if checked.startswith("./"):
        return "/" + checked[2:]
    if "/" in checked and not checked.startswith("/"):
        return "/" + checked
    if checked[0] in "!#":
        return "\\" + checked
    return checked


class PatternMatcher:
    """A compiled glob pattern.

    Attributes:
        pattern: The glob pattern this matcher was compiled from.
        anchor: Which part of a path the pattern is tested against.
        regex: The compiled regular expression.
    """

    __slots__ = ("anchor", "pattern", "regex")

    def __init__(self, pattern: str) -> None:
        if not pattern:
            raise InvalidPatternError("Pattern cannot be empty")

        self.pattern = pattern
        self.anchor = _classify(pattern)
        if not pattern.strip("/"):
            raise InvalidPatternError(f"Pattern matches nothing: {pattern!r}")
        try:
            compiled = GitWildMatchPattern(_to_gitwildmatch(pattern))
        except (ValueError, re.error) as e:
            raise InvalidPatternError(f"Invalid pattern {pattern!r}: {e}") from e

        if compiled.regex is None:
            raise InvalidPatternError(f"Pattern matches nothing: {pattern!r}")
        # a negated class must not match a separator either
        self.regex = re.compile(_NEGATED_CLASS.sub(r"[^\1/", compiled.regex.pattern))

    def __repr__(self) -> str:
        return f"PatternMatcher({self.pattern!r})"

    @property
    def base_dir(self) -> str | None:
        """Longest wildcard-free directory an absolute pattern lives under.

        A fully literal pattern such as ``/tmp/build`` yields its parent
        so that the path itself is found by a scan of the base directory.
        Name and relative patterns have no base directory.
        """
        if self.anchor is not PatternAnchor.ABSOLUTE:
            return None

        segments = self.pattern.split("/")[1:]
        literal: list[str] = []
        for seg in segments:
            if has_magic(seg):
                break
            literal.append(seg)
        else:
            literal = literal[:-1]

        return "/" + "/".join(seg for seg in literal if seg)

    def matches(self, path: str, root: str | None = None) -> bool:
        """Test whether a path matches this pattern.

        Args:
            path: Absolute path of the entry.
            root: Scan root the entry was found under. Required for
                relative patterns to match anything other than the
                literal path string.

        Returns:
            True if the path matches.
        """
        if self.anchor is PatternAnchor.NAME:
            subject = path.rstrip("/").rsplit("/", 1)[-1]
        elif self.anchor is PatternAnchor.RELATIVE and root is not None:
            prefix = root.rstrip("/") + "/"
            if not path.startswith(prefix):
                return False
            subject = path[len(prefix) :]
        else:
            subject = path.lstrip("/")

        match = self.regex.match(subject)
        if match is None:
            return False
        # gitwildmatch also accepts anything below a matching directory;
        # that branch is the only named group in the expression
        return not any(group is not None for group in match.groupdict().values())


def _classify(pattern: str) -> PatternAnchor:
    if pattern.startswith("/"):
        return PatternAnchor.ABSOLUTE
    if "/" in pattern:
        return PatternAnchor.RELATIVE
    return PatternAnchor.NAME


def compile_pattern(pattern: str) -> PatternMatcher:
    """Compile a glob pattern into a matcher.

    Args:
        pattern: Glob pattern, ideally already normalized.

    Returns:
        Compiled PatternMatcher.

    Raises:
        InvalidPatternError: If the pattern is empty or malformed.
    """
    return PatternMatcher(pattern)
