"""CLI commands for clir.

This package contains all subcommand implementations.
"""

from clir.cli.commands import clean, patterns

__all__ = ["clean", "patterns"]
