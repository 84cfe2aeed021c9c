"""Ordered, deduplicated collection of user-defined glob patterns."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from clir.patterns.matcher import (
    InvalidPatternError,
    PatternAnchor,
    PatternError,
    PatternMatcher,
    compile_pattern,
    normalize_pattern,
)

logger = logging.getLogger(__name__)


class DuplicatePatternError(PatternError):
    """Raised when adding a pattern that is already in the set."""


class NotFoundError(PatternError):
    """Raised when removing a pattern that is not in the set."""


@dataclass(frozen=True, slots=True)
class Pattern:
    """A normalized glob pattern together with its compiled matcher.

    Two patterns are equal when their normalized text is equal.

    Attributes:
        text: Normalized glob string.
        matcher: Compiled matcher for ``text``.
    """

    text: str
    matcher: PatternMatcher = field(compare=False, repr=False)

    def __str__(self) -> str:
        return self.text

    @property
    def anchor(self) -> PatternAnchor:
        return self.matcher.anchor

    @property
    def base_dir(self) -> str | None:
        return self.matcher.base_dir

    def matches(self, path: str, root: str | None = None) -> bool:
        """Test a path against this pattern. See PatternMatcher.matches."""
        return self.matcher.matches(path, root)

    @classmethod
    def parse(cls, raw: str, home: str | None = None) -> Pattern:
        """Normalize and compile a raw pattern string.

        Raises:
            InvalidPatternError: If the pattern is empty or malformed.
        """
        text = normalize_pattern(raw, home=home)
        return cls(text=text, matcher=compile_pattern(text))


class PatternSet:
    """Insertion-ordered set of patterns keyed by normalized text.

    The set only mutates its own state; loading and saving are handled
    by the config store.
    """

    def __init__(self, home: str | None = None) -> None:
        """Initialize an empty PatternSet.

        Args:
            home: Home directory used for ``~`` expansion. Defaults to the
                current user's home.
        """
        self._home = home
        self._patterns: dict[str, Pattern] = {}

    @classmethod
    def from_strings(
        cls,
        patterns: Iterable[str],
        home: str | None = None,
    ) -> tuple[PatternSet, list[tuple[str, PatternError]]]:
        """Build a set from stored pattern strings.

        Invalid and duplicate entries are skipped rather than raised so
        that one bad line in the config does not hide the rest.

        Args:
            patterns: Raw pattern strings, in order.
            home: Home directory used for ``~`` expansion.

        Returns:
            Tuple of (pattern set, list of (raw pattern, error) rejects).
        """
        pattern_set = cls(home=home)
        rejected: list[tuple[str, PatternError]] = []
        for raw in patterns:
            try:
                pattern_set.add(raw)
            except PatternError as e:
                logger.warning("Skipping stored pattern %r: %s", raw, e)
                rejected.append((raw, e))
        return pattern_set, rejected

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(list(self._patterns.values()))

    def __contains__(self, raw: object) -> bool:
        if not isinstance(raw, str):
            return False
        try:
            return normalize_pattern(raw, home=self._home) in self._patterns
        except InvalidPatternError:
            return False

    def add(self, raw: str) -> Pattern:
        """Normalize, validate and append a pattern.

        Args:
            raw: Pattern string as supplied by the user.

        Returns:
            The added Pattern.

        Raises:
            InvalidPatternError: If the pattern is empty or malformed.
            DuplicatePatternError: If the normalized pattern is already present.
        """
        text = normalize_pattern(raw, home=self._home)
        if text in self._patterns:
            raise DuplicatePatternError(f"Pattern already exists: {text}")

        pattern = Pattern(text=text, matcher=compile_pattern(text))
        self._patterns[text] = pattern
        logger.debug("Added pattern %s (%s)", text, pattern.anchor.value)
        return pattern

    def remove(self, raw: str) -> Pattern:
        """Remove a pattern by normalized equality.

        Args:
            raw: Pattern string as supplied by the user.

        Returns:
            The removed Pattern.

        Raises:
            NotFoundError: If no pattern with the same normalized form exists.
        """
        try:
            text = normalize_pattern(raw, home=self._home)
        except InvalidPatternError as e:
            raise NotFoundError(f"Pattern not found: {raw.strip()}") from e

        pattern = self._patterns.pop(text, None)
        if pattern is None:
            raise NotFoundError(f"Pattern not found: {text}")

        logger.debug("Removed pattern %s", text)
        return pattern

    def list(self) -> tuple[Pattern, ...]:
        """Return a read-only snapshot of the patterns in insertion order."""
        return tuple(self._patterns.values())

    def to_strings(self) -> list[str]:
        """Return the normalized pattern strings in insertion order."""
        return list(self._patterns)
