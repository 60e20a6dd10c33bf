"""
Configuration loader — reads config.yaml and parameter files.

The config directory holds everything zapp consumes:

    ~/.config/zapp/
        config.yaml        params: [...] and tasks: [...]
        params/            parameter files (YAML mappings)
        tasks/             task-definition files, <name>.yaml
        files/             sources for copy and symlink tasks
        templates/         Jinja2 templates for template tasks

Asset names are resolved relative to their subdirectory unless they are
absolute (after ~ expansion), in which case they are used verbatim.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from zapp.core.errors import ConfigError
from zapp.core.paths import expand_path

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "config.yaml"

# Asset subdirectories
FILES_DIR = "files"
TEMPLATES_DIR = "templates"
PARAMS_DIR = "params"
TASKS_DIR = "tasks"


class RootConfig(BaseModel):
    """Parsed config.yaml."""

    params: list[str] = Field(default_factory=list)
    tasks: list[Any] = Field(default_factory=list)


class AssetLayout:
    """Maps asset names to paths under the config directory."""

    def __init__(self, root: Path):
        # Always absolute: asset paths become symlink targets
        self.root = expand_path(root).absolute()

    def asset(self, asset_dir: str, asset_path: str) -> Path:
        """Resolve an asset name inside ``asset_dir``.

        Absolute paths (after ~ expansion) are returned unchanged.
        """
        path = expand_path(asset_path)
        if path.is_absolute():
            return path
        return self.root / asset_dir / path

    @property
    def config_file(self) -> Path:
        return self.root / CONFIG_FILE

    @property
    def templates_dir(self) -> Path:
        return self.root / TEMPLATES_DIR

    def __repr__(self) -> str:
        return f"<AssetLayout root={str(self.root)!r}>"


def default_config_dir() -> Path:
    """Resolve the config directory from the environment.

    Precedence: ZAPP_CONFIG_DIR > $XDG_CONFIG_HOME/zapp > ~/.config/zapp
    """
    explicit = os.environ.get("ZAPP_CONFIG_DIR")
    if explicit:
        return expand_path(explicit)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = expand_path(xdg) if xdg else expand_path("~/.config")
    return base / "zapp"


def read_yaml(path: Path, what: str) -> Any:
    """Read and parse a YAML file, raising ConfigError on any problem."""
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{what.capitalize()} {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {what} {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {what} {path}: {e}") from e


def load_config(layout: AssetLayout) -> RootConfig:
    """Load and validate config.yaml.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    path = layout.config_file
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)
    data = read_yaml(path, "config file")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Explicit nulls mean "nothing here"
    for key in ("params", "tasks"):
        if key in data and data[key] is None:
            data[key] = []

    try:
        config = RootConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded config with %d param files and %d task entries",
        len(config.params),
        len(config.tasks),
    )
    return config


def load_params(layout: AssetLayout, names: list[str]) -> dict[str, Any]:
    """Load parameter files and merge them into one template context.

    Files are merged shallowly in the given order; later keys win.
    An empty file contributes nothing.

    Raises:
        ConfigError: If a file is unreadable or not a mapping.
    """
    context: dict[str, Any] = {}

    for name in names:
        path = layout.asset(PARAMS_DIR, name)
        data = read_yaml(path, "param file")
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ConfigError(
                f"Param file {path} must be a mapping, got {type(data).__name__}"
            )

        overridden = sorted(k for k in data if k in context)
        if overridden:
            logger.debug("Param file %s overrides: %s", path, ", ".join(map(str, overridden)))
        context.update(data)

    logger.debug("Template context has %d keys", len(context))
    return context
