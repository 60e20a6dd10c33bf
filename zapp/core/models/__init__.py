"""
Domain models — the task tree, statuses and receipts.

    from zapp.core.models import Task, Status, Receipt
"""

from zapp.core.models.receipt import Receipt
from zapp.core.models.task import (
    LEAF_KINDS,
    CopyTask,
    GroupTask,
    ShellTask,
    Status,
    SymlinkTask,
    Task,
    TemplateTask,
    UnknownTask,
    aggregate_status,
)

__all__ = [
    # task.py
    "LEAF_KINDS",
    "CopyTask",
    "GroupTask",
    "ShellTask",
    "Status",
    "SymlinkTask",
    "Task",
    "TemplateTask",
    "UnknownTask",
    "aggregate_status",
    # receipt.py
    "Receipt",
]
