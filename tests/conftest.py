"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

# Sizes of the files created by the sample_tree fixture
SAMPLE_SIZES: dict[str, int] = {
    "a.tmp": 10,
    "b.tmp": 20,
    "c/d.tmp": 30,
    "f/f.tmp": 40,
    "keep.txt": 5,
}


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree to scan.

    Layout::

        tree/
            a.tmp      (10 bytes)
            b.tmp      (20 bytes)
            c/d.tmp    (30 bytes)
            f/f.tmp    (40 bytes)
            keep.txt   (5 bytes)
    """
    root = tmp_path / "tree"
    for relative, size in SAMPLE_SIZES.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"x" * size)
    return root


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path to a not yet existing config file."""
    return tmp_path / "config" / "config.toml"
