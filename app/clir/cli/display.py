"""Rich display functions for scan reports and deletion results."""

import os
from pathlib import Path

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clir.filesystem.models import ScanWarning
from clir.filesystem.remover import DeletionResult
from clir.models.report import PatternStats, Report
from clir.patterns.matcher import PatternAnchor
from clir.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)

BAR_SCALE = 8

# Beyond this many ".." an absolute path is easier to read
_MAX_PARENT_STEPS = 2


def format_bar(size: int, total: int) -> str:
    """Render an 8-step usage bar such as ``[|||     ]``.

    Every non-empty share gets at least one step.

    Args:
        size: Bytes of this entry.
        total: Bytes of all entries.

    Returns:
        Bar string including the brackets.
    """
    if total <= 0:
        quota = 0
    else:
        quota = min(BAR_SCALE, int(size / total * BAR_SCALE) + 1)
    return "[" + "|" * quota + " " * (BAR_SCALE - quota) + "]"


def format_pattern_path(text: str, anchor: PatternAnchor, cwd: Path, absolute: bool) -> str:
    """Format a pattern for display.

    Absolute patterns are shown relative to ``cwd`` unless that needs
    more than two ``..`` steps or ``absolute`` is set.

    Args:
        text: Normalized pattern text.
        anchor: Anchor of the pattern.
        cwd: Current working directory.
        absolute: Always show absolute patterns as-is.

    Returns:
        Display string.
    """
    if absolute or anchor is not PatternAnchor.ABSOLUTE:
        return text

    relative = os.path.relpath(text, str(cwd))
    parent_steps = relative.split("/").count("..")
    if parent_steps > _MAX_PARENT_STEPS:
        return text
    return relative


def create_report_table(stats: list[PatternStats], total: int, cwd: Path, absolute: bool) -> Table:
    """Create a Rich table with one row per pattern.

    Args:
        stats: Non-empty pattern statistics in display order.
        total: Report-wide byte total, used for the usage bars.
        cwd: Current working directory.
        absolute: Show absolute paths.

    Returns:
        Rich Table configured for report display.
    """
    table = Table(
        show_header=True,
        header_style="bold_header",
        border_style="border",
        box=box.SIMPLE,
    )
    table.add_column("Usage", no_wrap=True)
    table.add_column("Size", style="size", justify="right")
    table.add_column("Pattern", style="pattern")
    table.add_column("Files", justify="right")
    table.add_column("Dirs", style="directory", justify="right")

    for stat in stats:
        size = stat.total_bytes
        table.add_row(
            f"[bar]{escape(format_bar(size, total))}[/bar]",
            format_size(size),
            escape(format_pattern_path(stat.pattern.text, stat.pattern.anchor, cwd, absolute)),
            str(stat.match_count),
            str(stat.dir_count),
        )

    return table


def summary_text(report: Report) -> str:
    """Build the one-line report summary."""
    files = report.total_files
    dirs = report.total_dirs
    if files == 0:
        counts = f"{dirs} directory(ies) to be freed"
    elif dirs == 0:
        counts = f"{files} file(s) to be freed"
    else:
        counts = f"{files} file(s) and {dirs} directory(ies) to be freed"
    return f"{format_bar(1, 1)}  {format_size(report.total_bytes)}    {counts}"


def print_report(report: Report, cwd: Path, absolute: bool = False) -> None:
    """Print a scan report.

    Patterns without matches are left out; the rest are listed by size,
    smallest first, followed by a boxed summary.

    Args:
        report: Report to print.
        cwd: Current working directory.
        absolute: Show absolute paths.
    """
    if report.is_empty:
        console.print(Panel.fit("There is nothing to do :)", border_style="border"))
        return

    stats = sorted((s for s in report.stats if not s.is_empty), key=lambda s: s.total_bytes)
    console.print(create_report_table(stats, report.total_bytes, cwd, absolute))
    console.print(Panel.fit(escape(summary_text(report)), border_style="border"))


def print_scan_warnings(warnings: tuple[ScanWarning, ...] | list[ScanWarning]) -> None:
    """Print scan warnings to stderr."""
    for warning in warnings:
        print_warning(f"{escape(warning.message)} ({escape(warning.path)})")


def create_deletion_table(result: DeletionResult, show_all: bool = False) -> Table:
    """Create a Rich table of deletion outcomes.

    Args:
        result: Deletion result to display.
        show_all: Include successful outcomes, not only failures.

    Returns:
        Rich Table configured for deletion display.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    outcomes = result.outcomes if show_all else result.failures
    for outcome in outcomes:
        if outcome.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif outcome.succeeded:
            status = "[success]deleted[/]"
            detail = format_size(outcome.size_bytes)
        else:
            status = "[error]failed[/]"
            detail = outcome.error or "Unknown error"
        table.add_row(escape(outcome.path), status, escape(detail))

    return table


def print_deletion_result(result: DeletionResult, verbose: bool = False) -> None:
    """Print deletion outcomes and a summary line.

    Failures are always listed; successful deletions only when verbose
    or in dry-run mode.

    Args:
        result: Deletion result to display.
        verbose: List every outcome.
    """
    show_all = verbose or result.dry_run
    if result.failures or show_all:
        console.print(create_deletion_table(result, show_all=show_all))

    freed = format_size(result.freed_bytes)
    if result.dry_run:
        print_info(f"Dry-run: {result.deleted_count} path(s) would be deleted ({freed}).")
    elif result.failed_count:
        print_warning(
            f"{result.deleted_count} deleted, {result.failed_count} failed ({freed} freed)"
        )
    else:
        print_success(f"{result.deleted_count} deleted, 0 failed ({freed} freed)")
