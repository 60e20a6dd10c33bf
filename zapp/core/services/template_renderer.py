"""
Template renderer — Jinja2 templates from the config's templates/ dir.

Templates are addressed by their path relative to templates/, e.g.
``git/gitconfig``. Undefined variables are errors rather than empty
strings, so a missing parameter fails the task instead of writing a
half-rendered file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from zapp.core.errors import TemplateRenderError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Render named templates against a parameter context."""

    def __init__(self, templates_dir: Path):
        self.templates_dir = templates_dir
        self._env: Environment | None = None

    @property
    def env(self) -> Environment:
        # Created on first use: a config without template tasks
        # doesn't need a templates/ directory at all.
        if self._env is None:
            self._env = Environment(
                loader=FileSystemLoader(str(self.templates_dir)),
                undefined=StrictUndefined,
                keep_trailing_newline=True,
                autoescape=False,
            )
        return self._env

    def exists(self, name: str) -> bool:
        """Whether a template with this name can be loaded."""
        return (self.templates_dir / name).is_file()

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render template ``name`` with ``context``.

        Raises:
            TemplateRenderError: If the template is missing or fails to render.
        """
        try:
            template = self.env.get_template(name)
            text = template.render(context)
        except TemplateError as e:
            raise TemplateRenderError(f"Failed to render template '{name}': {e}") from e

        logger.debug("Rendered template %s (%d chars)", name, len(text))
        return text
