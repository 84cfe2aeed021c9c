"""Main CLI application entry point.

Defines the Typer application and global options. Invoked without a
subcommand, clir scans for the stored patterns and prints a report.
"""

from pathlib import Path
from typing import Annotated

import typer

from clir import __version__
from clir.cli.commands import clean, patterns
from clir.cli.types import GlobalOptions, OutputFormat
from clir.utils.logging import setup_logging

# Create main Typer app
app = typer.Typer(
    name="clir",
    help="A command line cleaning utility.",
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"clir version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to alternative config file.",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Run in verbose mode (repeat for more detail).",
        ),
    ] = 0,
    root: Annotated[
        list[Path] | None,
        typer.Option(
            "--root",
            "-R",
            help="Directory to scan (repeatable). Overrides configured roots.",
        ),
    ] = None,
    absolute: Annotated[
        bool,
        typer.Option("--absolute-path", "-a", help="Display absolute paths."),
    ] = False,
    remove: Annotated[
        bool,
        typer.Option("--remove", "-r", help="Delete all paths matched by the patterns."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", help="Delete matched directories with their contents."),
    ] = False,
    no_dirs: Annotated[
        bool,
        typer.Option("--no-dirs", help="Only match files, never directories."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """clir - clean up files and directories matching your glob patterns.

    Register patterns with [bold]clir add[/bold], inspect how much space
    they take with [bold]clir[/bold] and free it with [bold]clir -r[/bold].
    """
    setup_logging(verbose)

    options = GlobalOptions(
        config_path=config,
        verbose=verbose,
        roots=tuple(root or ()),
        absolute=absolute,
        remove=remove,
        yes=yes,
        dry_run=dry_run,
        recursive=recursive,
        match_directories=not no_dirs,
        output_format=output_format,
    )
    ctx.obj = options

    if ctx.invoked_subcommand is None:
        clean.run(options)


# Register commands
app.command("add")(patterns.add)
app.command("remove")(patterns.remove)
app.command("list")(patterns.list_patterns)


if __name__ == "__main__":
    app()
