"""
Filesystem adapter — copy and symlink tasks.

Sources are asset names under files/; destinations are user paths
with ~ expansion. A missing destination parent is created; a parent
that is a plain file aborts the run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.core.config.loader import FILES_DIR
from zapp.core.models.receipt import Receipt
from zapp.core.models.task import CopyTask, SymlinkTask
from zapp.core.paths import apply_mode, ensure_parent, expand_path, format_mode

logger = logging.getLogger(__name__)


class FilesystemAdapter(Adapter):
    """Copy files and create symlinks."""

    @property
    def name(self) -> str:
        return "filesystem"

    @property
    def kinds(self) -> tuple[str, ...]:
        return ("copy", "symlink")

    def is_available(self) -> bool:
        return True  # filesystem is always available

    def execute(self, context: ExecutionContext) -> Receipt:
        variant = context.task.variant
        if isinstance(variant, CopyTask):
            return self._copy(context, variant)
        elif isinstance(variant, SymlinkTask):
            return self._symlink(context, variant)
        else:
            return Receipt.failure(
                adapter=self.name,
                task_name=context.task.name,
                error=f"Unsupported task kind: {variant.kind}",
            )

    def _copy(self, ctx: ExecutionContext, task: CopyTask) -> Receipt:
        src = ctx.layout.asset(FILES_DIR, task.src)
        dst = expand_path(task.dst)
        ensure_parent(dst)
        metadata = {"src": str(src), "dst": str(dst), "mode": format_mode(task.mode)}

        try:
            shutil.copyfile(src, dst)
            shutil.copymode(src, dst)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                task_name=ctx.task.name,
                error=f"Copy failed: {e}",
                metadata=metadata,
            )

        try:
            apply_mode(dst, task.mode)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                task_name=ctx.task.name,
                error=f"Cannot set mode {format_mode(task.mode)} on {dst}: {e}",
                metadata=metadata,
            )

        logger.debug("Copied %s → %s", src, dst)
        return Receipt.success(
            adapter=self.name,
            task_name=ctx.task.name,
            output=f"Copied {src} to {dst}",
            metadata=metadata,
        )

    def _symlink(self, ctx: ExecutionContext, task: SymlinkTask) -> Receipt:
        src = ctx.layout.asset(FILES_DIR, task.src)
        dst = expand_path(task.dst)
        ensure_parent(dst)
        metadata = {"src": str(src), "dst": str(dst)}

        try:
            Path(dst).symlink_to(src)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                task_name=ctx.task.name,
                error=f"Symlink failed: {e}",
                metadata=metadata,
            )

        logger.debug("Linked %s → %s", dst, src)
        return Receipt.success(
            adapter=self.name,
            task_name=ctx.task.name,
            output=f"Linked {dst} to {src}",
            metadata=metadata,
        )
