"""
Task model — the provisioning tree.

A Task is a named node holding exactly one variant. The variant set is
closed: unknown, group, copy, symlink, template, shell. Each variant
carries a ``kind`` literal that pydantic uses as the discriminator, and
the engine dispatches on that same tag.

The tree is built once by the task loader and never mutated: every
model is frozen and groups hold their children in a tuple.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Iterable, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zapp.core.paths import format_mode, parse_mode


class Status(StrEnum):
    """Outcome of running one task node."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    SKIPPED = "SKIPPED"


def aggregate_status(statuses: Iterable[Status]) -> Status:
    """Fold child statuses into a group status.

    FAILURE if any child failed, otherwise SUCCESS. A group is never
    SKIPPED, not even an empty one or one whose children all skipped.
    """
    statuses = list(statuses)
    if Status.FAILURE in statuses:
        return Status.FAILURE
    return Status.SUCCESS


# ── Variants ────────────────────────────────────────────────────


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True)


class _ModeMixin(BaseModel):
    """Optional permission bits, given as an octal string (``"644"``)."""

    mode: int | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: object) -> int | None:
        return parse_mode(value)  # type: ignore[arg-type]


class UnknownTask(_Variant):
    """Placeholder for an entry the loader did not recognise."""

    kind: Literal["unknown"] = "unknown"


class GroupTask(_Variant):
    kind: Literal["group"] = "group"
    tasks: tuple[Task, ...] = ()


class CopyTask(_Variant, _ModeMixin):
    kind: Literal["copy"] = "copy"
    src: str        # asset name under files/
    dst: str        # destination, may use ~


class SymlinkTask(_Variant):
    kind: Literal["symlink"] = "symlink"
    src: str
    dst: str


class TemplateTask(_Variant, _ModeMixin):
    kind: Literal["template"] = "template"
    src: str        # template name under templates/
    dst: str


class ShellTask(_Variant):
    kind: Literal["shell"] = "shell"
    command: str


TaskVariant = Annotated[
    Union[UnknownTask, GroupTask, CopyTask, SymlinkTask, TemplateTask, ShellTask],
    Field(discriminator="kind"),
]

LEAF_KINDS: tuple[str, ...] = ("copy", "symlink", "template", "shell")


class Task(BaseModel):
    """A named node in the execution tree.

    ``privileged`` marks a task as needing elevated privileges. Elevation
    is not implemented: the engine skips such tasks.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    privileged: bool = False
    variant: TaskVariant

    @property
    def kind(self) -> str:
        return self.variant.kind

    @property
    def is_group(self) -> bool:
        return isinstance(self.variant, GroupTask)

    @property
    def children(self) -> tuple[Task, ...]:
        """Direct children (empty for anything but a group)."""
        if isinstance(self.variant, GroupTask):
            return self.variant.tasks
        return ()

    @classmethod
    def group(cls, name: str, tasks: Iterable[Task], privileged: bool = False) -> Task:
        return cls(name=name, privileged=privileged, variant=GroupTask(tasks=tuple(tasks)))

    @classmethod
    def unknown(cls, name: str = "unknown") -> Task:
        return cls(name=name, variant=UnknownTask())

    def walk(self, depth: int = 0) -> Iterator[tuple[int, Task]]:
        """Yield ``(depth, task)`` in pre-order.

        Depth follows the reporting rule: a group's children sit one
        level deeper than the group itself.
        """
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def describe(self) -> str:
        """One-line human summary of the task's payload."""
        v = self.variant
        if isinstance(v, (CopyTask, TemplateTask)):
            mode = f" (mode {format_mode(v.mode)})" if v.mode is not None else ""
            return f"{v.kind} {v.src} → {v.dst}{mode}"
        if isinstance(v, SymlinkTask):
            return f"symlink {v.dst} → {v.src}"
        if isinstance(v, ShellTask):
            return f"shell: {v.command}"
        if isinstance(v, GroupTask):
            return f"group ({len(v.tasks)} tasks)"
        return "unknown"

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return 1 + sum(child.count() for child in self.children)


GroupTask.model_rebuild()
Task.model_rebuild()
