"""Filesystem scanning and cleanup module.

This module provides the recursive scanner, protected path management
and deletion of matched entries.
"""

from clir.filesystem.models import FileEntry, PathType, ScanWarning, collapse_nested
from clir.filesystem.protected import (
    PROTECTED_PATH_PATTERNS,
    contains_protected_path,
    is_protected_path,
)
from clir.filesystem.remover import DeletionOutcome, DeletionResult, Remover
from clir.filesystem.scanner import (
    FilesystemScanner,
    InvalidRootError,
    ScanError,
    collapse_roots,
)

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "DeletionOutcome",
    "DeletionResult",
    "FileEntry",
    "FilesystemScanner",
    "InvalidRootError",
    "PathType",
    "Remover",
    "ScanError",
    "ScanWarning",
    "collapse_nested",
    "collapse_roots",
    "contains_protected_path",
    "is_protected_path",
]
