"""Protected filesystem paths that should never be deleted.

A pattern that happens to match one of these paths is still reported,
but the remover refuses to touch it, and refuses to remove any
directory tree that contains one.
"""

import fnmatch
from pathlib import Path

from clir.core.paths import get_config_dir

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    "/",
    "~",
    # SSH and security
    "~/.ssh",
    "~/.ssh/*",
    "~/.gnupg",
    "~/.gnupg/*",
]


def _expand(pattern: str, home: str) -> str:
    return home + pattern[1:] if pattern.startswith("~") else pattern


def is_protected_path(path: str) -> bool:
    """Check if a filesystem path is protected and should not be deleted.

    Besides the static patterns, the clir configuration directory and
    everything below it is protected.

    Args:
        path: Absolute filesystem path to check.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())
    normalized = path.rstrip("/") or "/"

    config_dir = str(get_config_dir())
    if normalized == config_dir or normalized.startswith(config_dir + "/"):
        return True

    return any(
        fnmatch.fnmatchcase(normalized, _expand(pattern, home))
        for pattern in PROTECTED_PATH_PATTERNS
    )


def contains_protected_path(path: str) -> bool:
    """Check if a protected location lies anywhere below a directory.

    Removing such a directory together with its contents would take
    the protected location with it.

    Args:
        path: Absolute directory path to check.

    Returns:
        True if the home directory, a protected key directory or the
        clir configuration directory is inside ``path``.
    """
    home = str(Path.home())
    prefix = path.rstrip("/") + "/"

    locations = [str(get_config_dir())]
    locations.extend(
        _expand(pattern, home)
        for pattern in PROTECTED_PATH_PATTERNS
        if not any(c in pattern for c in "*?[")
    )
    return any(location.startswith(prefix) for location in locations)
