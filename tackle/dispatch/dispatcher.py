"""Route a command to a builtin or to a plugin executable."""

from __future__ import annotations

from typing import Sequence

from ..errors import CommandNotFound
from ..telemetry.logger import log_event
from .discovery import CommandDiscovery
from .launcher import ProcessLauncher, outcome_error
from .registry import BuiltinRegistry
from .suggest import suggest


HELP_COMMAND = "help"
_HELP_FLAGS = ("-h", "--help")


def wants_usage(command: str | None, args: Sequence[str]) -> bool:
    """Return whether the invocation asks for the top-level usage."""

    return command in (None, "", HELP_COMMAND) and not args


def route_help(command: str, args: Sequence[str]) -> tuple[str, list[str]]:
    """Rewrite `help <cmd>` into `<cmd> -h`; other invocations pass through.

    `help -h` and `help --help` stay addressed to the help command itself.
    """

    if command != HELP_COMMAND or not args or args[0] in _HELP_FLAGS:
        return command, list(args)
    return args[0], ["-h"]


class Dispatcher:
    """Builtins first, then plugins discovered on disk."""

    def __init__(
        self,
        registry: BuiltinRegistry,
        discovery: CommandDiscovery,
        launcher: ProcessLauncher,
    ) -> None:
        self.registry = registry
        self.discovery = discovery
        self.launcher = launcher

    def dispatch(self, command: str, args: Sequence[str]) -> int:
        """Run `command` and return the exit code for a builtin.

        Plugin failures are raised as `TackleError`s.
        """

        command, routed_args = route_help(command, args)
        builtin = self.registry.get(command)
        if builtin is not None:
            log_event("DEBUG", "dispatch", "builtin", command=command)
            return builtin.invoke(routed_args)

        log_event("DEBUG", "dispatch", "plugin", command=command)
        self.execute_subcommand(command, routed_args)
        return 0

    def execute_subcommand(self, command: str, args: Sequence[str]) -> None:
        """Run the `tackle-<command>` plugin, raising on any failure outcome."""

        executable = self.discovery.resolve(command)
        if executable is None:
            raise CommandNotFound(command, suggest(command, self.discovery.list()))

        outcome = self.launcher.run(executable, [command, *args])
        error = outcome_error(outcome)
        if error is not None:
            raise error
