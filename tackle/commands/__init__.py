"""Builtin commands.

Every module listed in `BUILTIN_MODULES` exposes a single-command Typer `app`
and a one-line `SUMMARY`; its command name is the module name with `_`
replaced by `-`.
"""

from __future__ import annotations

from ..dispatch.registry import Builtin, BuiltinRegistry
from . import help, locate_project, pkgid, read_manifest, verify_project, version

BUILTIN_MODULES = (
    help,
    locate_project,
    pkgid,
    read_manifest,
    verify_project,
    version,
)


def builtin_registry() -> BuiltinRegistry:
    """Build the registry of every builtin command."""

    return BuiltinRegistry(Builtin.from_module(module) for module in BUILTIN_MODULES)


__all__ = ["BUILTIN_MODULES", "builtin_registry"]
