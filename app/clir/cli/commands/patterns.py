"""Pattern management commands.

Provides commands to add, remove and list the stored glob patterns.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from clir.cli.types import GlobalOptions, build_pattern_set, resolve_pattern_argument
from clir.core.config import ConfigError, PatternStore
from clir.patterns.matcher import InvalidPatternError
from clir.patterns.pattern_set import DuplicatePatternError, NotFoundError, PatternSet
from clir.utils.formatting import console, print_error, print_info, print_success, print_warning

PatternArgs = Annotated[
    list[str],
    typer.Argument(
        help="One or more paths or patterns. Paths can either be relative or absolute.",
        show_default=False,
    ),
]


def _options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.find_root().obj
    if isinstance(obj, GlobalOptions):
        return obj
    return GlobalOptions()


def _load(store: PatternStore) -> PatternSet:
    try:
        return build_pattern_set(store.load())
    except ConfigError as e:
        print_error(f"Failed to load config: {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _save(store: PatternStore, pattern_set: PatternSet) -> None:
    try:
        store.save(pattern_set.to_strings())
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def add(ctx: typer.Context, patterns: PatternArgs) -> None:
    """Add new path(s) or glob pattern(s)."""
    store = PatternStore(_options(ctx).config_path)
    pattern_set = _load(store)
    cwd = Path.cwd()

    added = 0
    invalid = False
    for raw in patterns:
        try:
            pattern = pattern_set.add(resolve_pattern_argument(raw, cwd))
        except DuplicatePatternError as e:
            print_warning(escape(str(e)))
            continue
        except InvalidPatternError as e:
            print_error(escape(str(e)))
            invalid = True
            continue
        added += 1
        print_success(f"Added {escape(pattern.text)}")

    if added:
        _save(store, pattern_set)

    if invalid:
        raise typer.Exit(code=1)


def remove(ctx: typer.Context, patterns: PatternArgs) -> None:
    """Remove paths or patterns."""
    store = PatternStore(_options(ctx).config_path)
    pattern_set = _load(store)
    cwd = Path.cwd()

    removed = 0
    missing = False
    for raw in patterns:
        try:
            pattern = pattern_set.remove(resolve_pattern_argument(raw, cwd))
        except NotFoundError as e:
            print_error(escape(str(e)))
            missing = True
            continue
        removed += 1
        print_success(f"Removed {escape(pattern.text)}")

    if removed:
        _save(store, pattern_set)

    if missing:
        raise typer.Exit(code=1)


def list_patterns(ctx: typer.Context) -> None:
    """List the stored patterns."""
    store = PatternStore(_options(ctx).config_path)
    pattern_set = _load(store)

    if not len(pattern_set):
        print_info("No patterns defined. Add one with 'clir add <pattern>'.")
        return

    for index, pattern in enumerate(pattern_set.list(), start=1):
        console.print(
            f"[muted]{index:>3}[/muted]  [pattern]{escape(pattern.text)}[/pattern]"
            f"  [muted]({pattern.anchor.value})[/muted]"
        )
