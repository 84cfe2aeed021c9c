"""Data models for clir.

This package contains the config and report models.
"""

from clir.models.config import ClirConfig, ScanSettings
from clir.models.report import PatternStats, Report

__all__ = [
    "ClirConfig",
    "PatternStats",
    "Report",
    "ScanSettings",
]
