"""
Receipt model — the result contract between engine and adapters.

The engine hands a leaf task to an adapter; the adapter returns a
Receipt. Per-task failures are captured here, never raised.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from zapp.core.models.task import Status


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of one adapter execution."""

    adapter: str
    task_name: str = ""
    status: Status = Status.SUCCESS

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == Status.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status == Status.FAILURE

    @classmethod
    def success(
        cls,
        adapter: str,
        task_name: str = "",
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            task_name=task_name,
            status=Status.SUCCESS,
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        task_name: str = "",
        error: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            task_name=task_name,
            status=Status.FAILURE,
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        adapter: str,
        task_name: str = "",
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(
            adapter=adapter,
            task_name=task_name,
            status=Status.SKIPPED,
            output=reason,
            **kwargs,
        )
