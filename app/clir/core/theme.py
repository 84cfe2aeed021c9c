"""Report colors for the clir consoles.

The bundled ``data/theme.toml`` holds the defaults. A ``theme.toml`` in
the clir config directory may override any subset of them.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.color import Color, ColorParseError
from rich.theme import Theme

from clir.core.paths import get_theme_path

logger = logging.getLogger(__name__)


class ReportColors(BaseModel):
    """Colors of the report table and status messages as ``#rrggbb`` codes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    size: str = "#0ec1c8"
    bar: str = "#c1ff62"
    directory: str = "#0e8ac8"
    pattern: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69b9a1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    @field_validator("*")
    @classmethod
    def check_hex(cls, value: str) -> str:
        if not value.startswith("#"):
            raise ValueError(f"expected a hex color like #0ec1c8, got {value!r}")
        try:
            Color.parse(value)
        except ColorParseError as e:
            raise ValueError(str(e)) from None
        return value

    def styles(self) -> dict[str, str]:
        """Rich style definitions keyed by the names the CLI renders with."""
        return {
            "size": self.size,
            "bar": self.bar,
            "directory": self.directory,
            "pattern": f"bold {self.pattern}",
            "muted": self.muted,
            "dim": self.muted,
            "bold_header": f"bold {self.header}",
            "border": self.border,
            "success": self.success,
            "warning": self.warning,
            "error": f"bold {self.error}",
            "info": self.info,
        }


def _read_colors(path: Path) -> dict[str, object]:
    """Read the ``[colors]`` table of a theme file, empty if unusable."""
    try:
        with open(path, "rb") as f:
            colors = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return colors


def load_colors(user_path: Path | None = None) -> ReportColors:
    """Merge the user's color overrides over the bundled defaults.

    An override file that fails validation is ignored as a whole.

    Args:
        user_path: Override file. Defaults to ``theme.toml`` in the
            clir config directory.

    Returns:
        The effective ReportColors.
    """
    with resources.as_file(resources.files("clir.data") / "theme.toml") as bundled:
        defaults = _read_colors(bundled)
    overrides = _read_colors(user_path or get_theme_path())

    try:
        return ReportColors(**{**defaults, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ReportColors(**defaults)


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, built once per process."""
    return Theme(load_colors().styles())
