"""
Adapter registry — maps each leaf task kind to its adapter.

The engine never talks to adapters directly; it asks the registry to
execute a leaf task. The registry guarantees a Receipt for every
per-task outcome and lets only fatal errors escape.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.core.errors import FatalError
from zapp.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry and dispatcher for leaf-task adapters.

    Features:
        - Register adapters for the kinds they declare
        - Mock mode: every leaf task succeeds without side effects
        - Execute a task through the adapter for its kind
    """

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode

    def register(self, adapter: Adapter) -> None:
        """Register an adapter for every kind it declares."""
        for kind in adapter.kinds:
            if kind in self._adapters:
                logger.warning("Overwriting adapter for kind '%s'", kind)
            self._adapters[kind] = adapter
        logger.debug("Registered adapter %s for %s", adapter.name, ", ".join(adapter.kinds))

    def unavailable(self, kinds: Iterable[str]) -> dict[str, Adapter]:
        """Adapters behind ``kinds`` that report their tool as unusable."""
        missing = {}
        for kind in kinds:
            adapter = self._adapters.get(kind)
            if adapter is not None and not adapter.is_available():
                missing[kind] = adapter
        return missing

    def execute(self, context: ExecutionContext) -> Receipt:
        """Run a leaf task through the adapter for its kind.

        Returns a Receipt for every per-task outcome. FatalError
        subclasses raised by an adapter propagate to the caller.
        """
        task = context.task
        start_time = time.monotonic()

        if self._mock_mode:
            return Receipt.success(
                adapter="mock",
                task_name=task.name,
                output=f"[mock] {task.describe()}",
                metadata={"mock": True},
            )

        adapter = self._adapters.get(task.kind)
        if adapter is None:
            return Receipt.failure(
                adapter=task.kind,
                task_name=task.name,
                error=f"No adapter registered for '{task.kind}'",
            )

        try:
            receipt = adapter.execute(context)
        except FatalError:
            raise
        except Exception as e:
            # Adapters should never raise for per-task failures
            logger.error("Adapter %s raised while running '%s': %s", adapter.name, task.name, e)
            receipt = Receipt.failure(
                adapter=adapter.name,
                task_name=task.name,
                error=f"Unexpected error: {e}",
            )

        if not receipt.duration_ms:
            receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt


def default_registry(mock_mode: bool = False, capture_output: bool = False) -> AdapterRegistry:
    """Registry wired with the real adapters for every leaf kind."""
    from zapp.adapters.shell.command import ShellCommandAdapter
    from zapp.adapters.shell.filesystem import FilesystemAdapter
    from zapp.adapters.template import TemplateAdapter

    registry = AdapterRegistry(mock_mode=mock_mode)
    registry.register(FilesystemAdapter())
    registry.register(TemplateAdapter())
    registry.register(ShellCommandAdapter(capture_output=capture_output))
    return registry
