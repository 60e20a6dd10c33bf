"""
Adapter base — the contract between the engine and task operations.

Each leaf task kind (copy, symlink, template, shell) is carried out by
an adapter. The engine never touches the filesystem or spawns processes
itself; it hands the task to the adapter registered for its kind.

Adapters report per-task problems through the Receipt. They only raise
for fatal conditions (FatalError subclasses), which abort the run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from zapp.core.config.loader import AssetLayout
from zapp.core.models.receipt import Receipt
from zapp.core.models.task import Task
from zapp.core.services.template_renderer import TemplateRenderer


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one leaf task."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    task: Task
    layout: AssetLayout
    renderer: TemplateRenderer | None = None
    context: dict[str, Any] = Field(default_factory=dict)


class Adapter(ABC):
    """Abstract base class for all adapters.

    To add an adapter:
        1. Subclass Adapter
        2. Implement name, kinds, is_available, execute
        3. Register it in the AdapterRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'filesystem')."""

    @property
    @abstractmethod
    def kinds(self) -> tuple[str, ...]:
        """Task kinds this adapter executes."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool is usable. Fast, never raises."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the task and return a receipt.

        Per-task failures MUST be returned as a failed Receipt.
        Only FatalError subclasses may be raised.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
