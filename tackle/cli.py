"""Command-line interface for tackle.

Responsibilities:
- Parse top-level options and split the invocation into `<command> [<args>...]`.
- Configure logging, load configuration, and bootstrap the network transport
  before any command runs.
- Hand the command to the dispatcher and report one error per invocation.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Mapping

import typer
import yaml

from .cli_rendering import echo_command_list, echo_usage, exit_with_cli_error
from .commands import builtin_registry
from .commands.version import version_string
from .config import ConfigLoader, TackleConfig
from .dispatch.discovery import CommandDiscovery, current_exe
from .dispatch.dispatcher import Dispatcher, wants_usage
from .dispatch.launcher import ProcessLauncher
from .dispatch.registry import BuiltinRegistry
from .errors import ConfigError, TackleError
from .net.transport import init_transports
from .telemetry.logger import configure_logging, log_event

USAGE = """tackle: a modular package manager

Usage:
    tackle <command> [<args>...]
    tackle [options]

Options:
    -h, --help       Display this message
    -V, --version    Print version info and exit
    --list           List installed commands
    -v, --verbose    Use verbose output"""

_CONTEXT_SETTINGS = {
    "help_option_names": [],
    "allow_interspersed_args": False,
    "ignore_unknown_options": True,
}

REGISTRY = builtin_registry()

app = typer.Typer(
    name="tackle",
    add_completion=False,
    help="tackle: a modular package manager.",
)


def _build_dispatcher(registry: BuiltinRegistry, env: Mapping[str, str]) -> Dispatcher:
    """Wire discovery and launching around the builtin registry."""

    exe_path = current_exe()
    discovery = CommandDiscovery(registry.names(), exe_path=exe_path, env=env)
    launcher = ProcessLauncher(env=env, tackle_executable=exe_path)
    return Dispatcher(registry, discovery, launcher)


def _load_config(cwd: Path, env: Mapping[str, str]) -> TackleConfig:
    """Load merged configuration and map failures to a config error."""

    try:
        config = ConfigLoader.discover(cwd, env)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Failed to load configuration: {exc}",
            hint="Fix the `.tackle/config.yaml` file or the `TACKLE_*` environment overrides.",
        ) from exc
    log_event("DEBUG", "config", "loaded", files=len(config.sources))
    return config


@app.command(context_settings=_CONTEXT_SETTINGS)
def tackle(
    ctx: typer.Context,
    command: Annotated[
        str | None,
        typer.Argument(help="Command to run.", show_default=False),
    ] = None,
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Arguments passed through to the command.", show_default=False),
    ] = None,
    list_commands: Annotated[
        bool,
        typer.Option("--list", help="List installed commands."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("-V", "--version", help="Print version info and exit."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Use verbose output."),
    ] = False,
    show_help: Annotated[
        bool,
        typer.Option("-h", "--help", help="Display this message."),
    ] = False,
) -> None:
    """Run a builtin command or a `tackle-<command>` plugin."""

    env = os.environ
    configure_logging(verbose, env=env)
    command_args = list(args or [])

    try:
        config = _load_config(Path.cwd(), env)
        init_transports(config, env)
        dispatcher = _build_dispatcher(REGISTRY, env)

        if list_commands:
            echo_command_list(dispatcher.discovery.list())
            return
        if version:
            typer.echo(version_string())
            return
        if show_help or command is None or wants_usage(command, command_args):
            echo_usage(USAGE, REGISTRY)
            return
        if command.startswith("-"):
            ctx.fail(f"No such option: {command}")

        exit_code = dispatcher.dispatch(command, command_args)
    except TackleError as exc:
        exit_with_cli_error(exc)

    if exit_code:
        raise typer.Exit(code=exit_code)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
