"""Config file I/O operations.

This module provides functions for loading and saving the config file
in TOML format with validation using Pydantic models. The config holds
the ordered list of stored patterns.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from clir.core.paths import ensure_config_dir, get_config_path
from clir.models.config import ClirConfig


class ConfigError(Exception):
    """Base exception for config-related errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the config content is invalid."""


def load_config(path: Path | None = None) -> ClirConfig:
    """Load and validate the config from a TOML file.

    A missing file is not an error: an empty config is returned.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated ClirConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file exists but cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return ClirConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Config is not valid UTF-8: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ClirConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: ClirConfig, path: Path | None = None) -> Path:
    """Save the config to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        config: The ClirConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise ConfigError(str(e)) from e
        config_path = get_config_path()
    else:
        config_path = path

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ClirConfig) -> dict[str, Any]:
    return {
        "patterns": list(config.patterns),
        "scan": {
            "roots": list(config.scan.roots),
            "match_directories": config.scan.match_directories,
        },
    }


class PatternStore:
    """Loads and saves the ordered pattern list.

    Scan settings present in the file are preserved when the pattern
    list is saved.

    Attributes:
        path: Config file backing this store.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or get_config_path()

    def load(self) -> list[str]:
        """Return the stored pattern strings in order.

        Raises:
            ConfigError: If the config is unreadable or corrupt.
        """
        return list(load_config(self._path).patterns)

    def save(self, patterns: list[str]) -> Path:
        """Replace the stored pattern list.

        Raises:
            ConfigError: If the config is corrupt or cannot be written.
        """
        config = load_config(self._path)
        updated = config.model_copy(update={"patterns": list(patterns)})
        return save_config(updated, self._path)


def require_config(config_path: Path | None = None) -> ClirConfig:
    """Load config or exit with helpful error message.

    This is a convenience wrapper around load_config() that handles
    errors by printing user-friendly messages and exiting.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded and validated ClirConfig.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer
    from rich.markup import escape

    from clir.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigError as e:
        print_error(f"Failed to load config: {escape(str(e))}")
        print_info(f"Fix or remove {escape(str(path))} to continue.")
        raise typer.Exit(code=1) from e
