"""
Engine executor — walks the task tree and reports every node.

The traversal is single-threaded, depth-first and strictly in declared
order. Each node produces exactly one Status and one report line:

    <two spaces per depth level><name>: <STATUS>

Children report before their group, since a group's status is only
known once all its children have run.

Rules:
    privileged task  → SKIPPED, nothing executed
    unknown entry    → SKIPPED
    group            → every child runs, even after a failure;
                       FAILURE if any child failed, else SUCCESS
    leaf             → dispatched to the adapter registry

Fatal errors (FatalError) raised by adapters are not caught here:
they abort the run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import click

from zapp.adapters.base import ExecutionContext
from zapp.adapters.registry import AdapterRegistry, default_registry
from zapp.core.config.loader import AssetLayout
from zapp.core.models.task import Status, Task, aggregate_status
from zapp.core.services.template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)

INDENT = "  "

_STATUS_COLORS = {
    Status.SUCCESS: "green",
    Status.FAILURE: "red",
    Status.SKIPPED: "yellow",
}


@dataclass
class TaskResult:
    """The reported outcome of one task node."""

    name: str
    kind: str
    depth: int
    status: Status
    error: str | None = None
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "depth": self.depth,
            "status": str(self.status),
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


@dataclass
class ExecutionReport:
    """Every node's result, in emission order."""

    results: list[TaskResult] = field(default_factory=list)

    def _leaves(self) -> list[TaskResult]:
        return [r for r in self.results if r.kind != "group"]

    @property
    def total(self) -> int:
        return len(self._leaves())

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self._leaves() if r.status == Status.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for r in self._leaves() if r.status == Status.FAILURE)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self._leaves() if r.status == Status.SKIPPED)

    @property
    def root_status(self) -> Status | None:
        """Status of the outermost node (reported last)."""
        if not self.results:
            return None
        return self.results[-1].status

    @property
    def all_ok(self) -> bool:
        return self.root_status != Status.FAILURE

    def to_dict(self) -> dict[str, Any]:
        root = self.root_status
        return {
            "status": str(root) if root else None,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass
class ExecutionParams:
    """Mutable state threaded through one traversal.

    ``context`` is read-only during the run; only ``depth`` changes,
    incremented on entering a group and restored on leaving it.
    """

    context: dict[str, Any]
    layout: AssetLayout
    depth: int = 0
    renderer: TemplateRenderer | None = None
    registry: AdapterRegistry = field(default_factory=default_registry)
    emit: Callable[[str], None] | None = click.echo
    styled: bool = False
    report: ExecutionReport = field(default_factory=ExecutionReport)

    def __post_init__(self) -> None:
        if self.renderer is None:
            self.renderer = TemplateRenderer(self.layout.templates_dir)


def format_status_line(name: str, status: Status, depth: int, styled: bool = False) -> str:
    """Build a report line: indentation, name, status."""
    label = str(status)
    if styled:
        label = click.style(label, fg=_STATUS_COLORS[status], bold=True)
    return f"{INDENT * depth}{name}: {label}"


def run_task(task: Task, params: ExecutionParams) -> Status:
    """Run ``task`` (and its subtree) and report it.

    Returns:
        The task's Status. Never SKIPPED for a non-privileged group.
    """
    error: str | None = None
    duration_ms = 0

    if task.privileged:
        # Elevation is not implemented: privileged tasks never run.
        logger.warning(
            "Skipping '%s': tasks requiring elevated privileges are not supported",
            task.name,
        )
        status = Status.SKIPPED
        error = "requires elevated privileges"
    elif task.kind == "unknown":
        status = Status.SKIPPED
    elif task.kind == "group":
        status = _run_group(task, params)
    else:
        logger.debug("Running %s task '%s': %s", task.kind, task.name, task.describe())
        receipt = params.registry.execute(
            ExecutionContext(
                task=task,
                layout=params.layout,
                renderer=params.renderer,
                context=params.context,
            )
        )
        status = receipt.status
        error = receipt.error
        duration_ms = receipt.duration_ms
        if receipt.failed:
            logger.info("Task '%s' failed: %s", task.name, receipt.error)

    _report(task, status, params, error, duration_ms)
    return status


def _run_group(task: Task, params: ExecutionParams) -> Status:
    """Run every child in order, no early exit, and fold their statuses."""
    params.depth += 1
    statuses = [run_task(child, params) for child in task.children]
    params.depth -= 1
    return aggregate_status(statuses)


def _report(
    task: Task,
    status: Status,
    params: ExecutionParams,
    error: str | None,
    duration_ms: int,
) -> None:
    params.report.results.append(
        TaskResult(
            name=task.name,
            kind=task.kind,
            depth=params.depth,
            status=status,
            error=error,
            duration_ms=duration_ms,
        )
    )
    if params.emit is not None:
        params.emit(format_status_line(task.name, status, params.depth, params.styled))


def execute_tree(root: Task, params: ExecutionParams) -> ExecutionReport:
    """Run the whole tree once and return the collected report."""
    status = run_task(root, params)
    report = params.report
    logger.info(
        "Run finished: %s (%d succeeded, %d failed, %d skipped)",
        status,
        report.succeeded,
        report.failed,
        report.skipped,
    )
    return report
