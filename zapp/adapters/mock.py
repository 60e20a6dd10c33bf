"""
Scripted adapter for engine tests.

Stands in for the real adapters: every leaf task succeeds unless the
script names it as failing or skipping. Tasks are recorded in the order
the engine hands them over.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.core.models.receipt import Receipt
from zapp.core.models.task import LEAF_KINDS


class MockAdapter(Adapter):
    """Answers leaf tasks by name without touching the system.

    Args:
        kinds: Task kinds to claim in the registry.
        failing: Task name → error message for tasks that should fail.
        skipping: Names of tasks that should report SKIPPED.
    """

    def __init__(
        self,
        kinds: tuple[str, ...] = LEAF_KINDS,
        failing: Mapping[str, str] | None = None,
        skipping: Iterable[str] = (),
    ):
        self._kinds = kinds
        self.failing = dict(failing or {})
        self.skipping = set(skipping)
        self.seen: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def kinds(self) -> tuple[str, ...]:
        return self._kinds

    @property
    def called_names(self) -> list[str]:
        return [ctx.task.name for ctx in self.seen]

    def is_available(self) -> bool:
        return True

    def execute(self, context: ExecutionContext) -> Receipt:
        self.seen.append(context)
        name = context.task.name

        if name in self.failing:
            return Receipt.failure(adapter=self.name, task_name=name, error=self.failing[name])
        if name in self.skipping:
            return Receipt.skip(adapter=self.name, task_name=name, reason="scripted")
        return Receipt.success(
            adapter=self.name,
            task_name=name,
            output=f"[mock] {context.task.describe()}",
        )
