"""Adapters — the operations behind each leaf task kind.

Public re-exports for convenient access.
"""

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.adapters.mock import MockAdapter
from zapp.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
