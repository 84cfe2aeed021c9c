"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from clir.core.theme import get_theme

_SIZE_UNITS: tuple[str, ...] = ("K", "M", "G", "T", "P")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format a byte count with decimal units.

    Values below 10 of a unit get two decimals, below 100 one decimal,
    anything larger none (``512B``, ``4.10K``, ``12.3M``, ``340G``).

    Args:
        size_bytes: Byte count.

    Returns:
        Human-readable size string.
    """
    if not size_bytes or size_bytes < 0:
        return "0B"
    if size_bytes < 1000:
        return f"{size_bytes}B"

    size = float(size_bytes)
    for unit in _SIZE_UNITS:
        size /= 1000
        # Precision is picked after rounding so 9.999K shows as 10.0K
        for limit, decimals in ((10, 2), (100, 1), (1000, 0)):
            text = f"{size:.{decimals}f}"
            if float(text) < limit:
                return text + unit

    return f"{size:.0f}{_SIZE_UNITS[-1]}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
