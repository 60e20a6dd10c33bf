"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from zapp.core.config.loader import AssetLayout


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """Point ~ at a temporary home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """An empty config directory with the standard asset subdirectories."""
    root = tmp_path / "zapp"
    for sub in ("files", "templates", "params", "tasks"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def layout(config_dir: Path) -> AssetLayout:
    return AssetLayout(config_dir)


@pytest.fixture
def write_file():
    """Write dedented text to a path, creating parents. Returns the path."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content))
        return path

    return _write
