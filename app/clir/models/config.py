"""Config models for the persisted pattern list.

This module defines the Pydantic models representing the config.toml
structure: the ordered list of stored patterns and scan settings.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScanSettings(BaseModel):
    """Scan section of the config.

    Attributes:
        roots: Directories to scan. Empty means roots are derived from
            the stored patterns and the working directory.
        match_directories: Whether patterns may match directories.
    """

    model_config = ConfigDict(extra="forbid")

    roots: Annotated[list[str], Field(default_factory=list, description="Scan roots")]
    match_directories: Annotated[
        bool,
        Field(description="Whether patterns may match directories"),
    ] = True


class ClirConfig(BaseModel):
    """Root config model.

    Attributes:
        patterns: Stored glob patterns, in insertion order.
        scan: Scan settings.
    """

    model_config = ConfigDict(extra="forbid")

    patterns: Annotated[list[str], Field(default_factory=list, description="Glob patterns")]
    scan: Annotated[ScanSettings, Field(default_factory=ScanSettings)]

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Drop blank entries from the stored pattern list."""
        return [p for p in v if p.strip()]
