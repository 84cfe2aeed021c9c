"""Utility modules for clir.

This module exports commonly used utility functions.
"""

from clir.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from clir.utils.logging import setup_logging

__all__ = [
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
