"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.markup import escape

from clir.patterns.pattern_set import PatternSet
from clir.utils.formatting import print_warning


class OutputFormat(str, Enum):
    """Output format options for the scan report."""

    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before any subcommand.

    Attributes:
        config_path: Alternative config file, None for the default.
        verbose: Number of ``-v`` flags.
        roots: Scan roots overriding the configured ones.
        absolute: Display absolute paths instead of cwd-relative ones.
        remove: Delete matched entries after the scan.
        yes: Skip the confirmation prompt.
        dry_run: Report deletions without performing them.
        recursive: Delete matched directories with their contents.
        match_directories: Allow patterns to match directories.
        output_format: Report output format.
    """

    config_path: Path | None = None
    verbose: int = 0
    roots: tuple[Path, ...] = field(default_factory=tuple)
    absolute: bool = False
    remove: bool = False
    yes: bool = False
    dry_run: bool = False
    recursive: bool = False
    match_directories: bool = True
    output_format: OutputFormat = OutputFormat.TABLE


def resolve_pattern_argument(raw: str, cwd: Path) -> str:
    """Resolve a pattern typed on the command line against the working dir.

    Absolute and ``~`` patterns are kept. Relative patterns containing a
    ``/`` are joined to ``cwd``; bare name patterns such as ``*.tmp`` are
    kept so they apply at any depth.

    Args:
        raw: Pattern as typed.
        cwd: Current working directory.

    Returns:
        Pattern string ready for PatternSet.add.
    """
    pattern = raw.strip()
    if pattern.startswith(("/", "~")):
        return pattern
    if "/" in pattern.rstrip("/"):
        return f"{str(cwd).rstrip('/')}/{pattern}"
    return pattern


def build_pattern_set(patterns: Iterable[str]) -> PatternSet:
    """Build a PatternSet from stored strings, warning about rejects."""
    pattern_set, rejected = PatternSet.from_strings(patterns)
    for raw, error in rejected:
        print_warning(f"Ignoring stored pattern {escape(repr(raw))}: {escape(str(error))}")
    return pattern_set
