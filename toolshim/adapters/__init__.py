"""Adapters — the only code that touches external tools.

Public re-exports for convenient access.
"""

from toolshim.adapters.base import Adapter, ExecutionContext
from toolshim.adapters.mock import MockAdapter
from toolshim.adapters.registry import AdapterRegistry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
]
