"""
Template adapter — render a template and write it to its destination.

Rendering happens first: a render error fails the task before anything
touches the filesystem.
"""

from __future__ import annotations

import logging

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.core.errors import TemplateRenderError
from zapp.core.models.receipt import Receipt
from zapp.core.models.task import TemplateTask
from zapp.core.paths import apply_mode, ensure_parent, expand_path, format_mode
from zapp.core.services.template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class TemplateAdapter(Adapter):
    """Render Jinja2 templates into files."""

    @property
    def name(self) -> str:
        return "template"

    @property
    def kinds(self) -> tuple[str, ...]:
        return ("template",)

    def is_available(self) -> bool:
        return True

    def execute(self, context: ExecutionContext) -> Receipt:
        task = context.task.variant
        assert isinstance(task, TemplateTask)

        renderer = context.renderer or TemplateRenderer(context.layout.templates_dir)
        try:
            text = renderer.render(task.src, context.context)
        except TemplateRenderError as e:
            return Receipt.failure(
                adapter=self.name,
                task_name=context.task.name,
                error=str(e),
                metadata={"template": task.src},
            )

        dst = expand_path(task.dst)
        ensure_parent(dst)
        metadata = {"template": task.src, "dst": str(dst), "mode": format_mode(task.mode)}

        try:
            dst.write_text(text, encoding="utf-8", newline="")
            apply_mode(dst, task.mode)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                task_name=context.task.name,
                error=f"Cannot write {dst}: {e}",
                metadata=metadata,
            )

        logger.debug("Rendered %s → %s", task.src, dst)
        return Receipt.success(
            adapter=self.name,
            task_name=context.task.name,
            output=f"Wrote {len(text)} chars to {dst}",
            metadata=metadata,
        )
