"""Registry of in-process builtin commands.

Each builtin is a Typer application with its own argument schema. The
registry is built once at startup and is constant for the process lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Iterable, Iterator, Sequence

import typer


def builtin_name(identifier: str) -> str:
    """Derive a command name from a module identifier (`read_manifest` -> `read-manifest`)."""

    return identifier.replace("_", "-")


@dataclass(frozen=True, slots=True)
class Builtin:
    """One builtin command.

    Attributes:
        name: Command name as typed on the command line.
        app: Typer application parsing the command's own arguments.
        summary: One-line description shown in the top-level usage.
    """

    name: str
    app: typer.Typer
    summary: str

    @classmethod
    def from_module(cls, module: ModuleType) -> Builtin:
        """Build a builtin from a command module exposing `app` and `SUMMARY`."""

        identifier = module.__name__.rsplit(".", 1)[-1]
        return cls(name=builtin_name(identifier), app=module.app, summary=module.SUMMARY)

    @property
    def prog_name(self) -> str:
        return f"tackle {self.name}"

    def invoke(self, args: Sequence[str]) -> int:
        """Run the command against a fresh copy of `args` and return its exit code.

        Typer renders usage errors and aborts on its own and ends every run with
        `SystemExit`, whose code is returned. `TackleError`s propagate to the
        CLI boundary.
        """

        command = typer.main.get_command(self.app)
        try:
            command.main(args=list(args), prog_name=self.prog_name, standalone_mode=True)
        except SystemExit as exc:
            return _exit_status(exc.code)
        return 0


class BuiltinRegistry:
    """Closed mapping from command name to builtin."""

    def __init__(self, builtins: Iterable[Builtin]) -> None:
        self._builtins: dict[str, Builtin] = {}
        for builtin in builtins:
            if builtin.name in self._builtins:
                raise ValueError(f"duplicate builtin command `{builtin.name}`")
            self._builtins[builtin.name] = builtin

    def get(self, name: str) -> Builtin | None:
        return self._builtins.get(name)

    def names(self) -> frozenset[str]:
        return frozenset(self._builtins)

    def __contains__(self, name: object) -> bool:
        return name in self._builtins

    def __iter__(self) -> Iterator[Builtin]:
        return iter(sorted(self._builtins.values(), key=lambda builtin: builtin.name))

    def __len__(self) -> int:
        return len(self._builtins)


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1
