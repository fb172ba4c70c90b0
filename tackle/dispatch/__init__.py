"""Command resolution and dispatch.

This package maps a command name to a builtin or a plugin executable, runs
it, and maps its termination to an exit code.
"""

from .discovery import CommandDiscovery, is_executable
from .dispatcher import Dispatcher
from .launcher import ExitOutcome, ProcessLauncher
from .registry import Builtin, BuiltinRegistry
from .suggest import lev_distance, suggest

__all__ = [
    "Builtin",
    "BuiltinRegistry",
    "CommandDiscovery",
    "Dispatcher",
    "ExitOutcome",
    "ProcessLauncher",
    "is_executable",
    "lev_distance",
    "suggest",
]
