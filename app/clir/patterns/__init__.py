"""Glob pattern compilation and the user-defined pattern set."""

from clir.patterns.matcher import (
    InvalidPatternError,
    PatternAnchor,
    PatternError,
    PatternMatcher,
    compile_pattern,
    normalize_pattern,
)
from clir.patterns.pattern_set import DuplicatePatternError, NotFoundError, Pattern, PatternSet

__all__ = [
    "DuplicatePatternError",
    "InvalidPatternError",
    "NotFoundError",
    "Pattern",
    "PatternAnchor",
    "PatternError",
    "PatternMatcher",
    "PatternSet",
    "compile_pattern",
    "normalize_pattern",
]
