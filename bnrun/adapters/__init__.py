"""Adapters — command execution backends.

Public re-exports for convenient access.
"""

from bnrun.adapters.base import Adapter, ExecutionContext
from bnrun.adapters.mock import MockAdapter
from bnrun.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
