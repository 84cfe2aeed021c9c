"""Scan and clean implementation.

Runs the scan engine over the stored patterns, prints the report and,
when requested, deletes every matched entry.
"""

import json
from pathlib import Path

import typer
from rich.markup import escape

from clir.cli.display import print_deletion_result, print_report, print_scan_warnings
from clir.cli.types import GlobalOptions, OutputFormat, build_pattern_set
from clir.core.config import require_config
from clir.core.engine import NoValidRootError, ScanEngine, default_roots
from clir.filesystem.remover import DeletionResult, Remover
from clir.models.report import Report
from clir.utils.formatting import console, print_error, print_info


def run(options: GlobalOptions) -> None:
    """Scan for matches, print the report and optionally delete them.

    Args:
        options: Global command line options.

    Raises:
        typer.Exit: With code 1 if the config cannot be loaded or no root
            could be scanned.
    """
    config = require_config(options.config_path)
    pattern_set = build_pattern_set(config.patterns)

    if not len(pattern_set):
        print_info("No patterns defined. Add one with 'clir add <pattern>'.")
        return

    cwd = Path.cwd()
    if options.roots:
        roots = [str(r) for r in options.roots]
    elif config.scan.roots:
        roots = list(config.scan.roots)
    else:
        roots = default_roots(pattern_set, cwd)

    engine = ScanEngine(
        match_directories=config.scan.match_directories and options.match_directories
    )
    try:
        report = engine.run(roots, pattern_set)
    except NoValidRootError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_scan_warnings(report.warnings)
    if not report.has_valid_root:
        print_error("None of the scan roots could be scanned.")
        raise typer.Exit(code=1)

    as_json = options.output_format == OutputFormat.JSON
    if not options.remove:
        if as_json:
            console.print_json(json.dumps(report.to_dict()))
        else:
            print_report(report, cwd, absolute=options.absolute)
        return

    if not as_json:
        print_report(report, cwd, absolute=options.absolute)
    if report.is_empty:
        return

    if not options.yes and not options.dry_run:
        confirmed = typer.confirm("Clean all selected paths?", default=False)
        if not confirmed:
            print_info("Aborting...")
            raise typer.Exit(code=0)

    result = Remover(dry_run=options.dry_run, recursive=options.recursive).delete(report.matched)
    _print_result(report, result, as_json, verbose=options.verbose > 0)


def _print_result(report: Report, result: DeletionResult, as_json: bool, verbose: bool) -> None:
    if as_json:
        console.print_json(json.dumps({"report": report.to_dict(), "deletion": result.to_dict()}))
        return
    print_deletion_result(result, verbose=verbose)
