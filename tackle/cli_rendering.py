"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for dispatch errors,
the installed command listing, and the top-level usage text.
"""

from __future__ import annotations

from typing import Iterable, NoReturn

import typer

from .dispatch.registry import BuiltinRegistry
from .errors import TackleError


def exit_with_cli_error(exc: TackleError) -> NoReturn:
    """Print one error report and exit with the error's exit code.

    Errors with an empty message (a plugin's own non-zero exit) print nothing.
    """

    if exc.message:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
    if exc.hint:
        typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    raise typer.Exit(code=exc.exit_code) from exc


def echo_command_list(commands: Iterable[str]) -> None:
    """Print installed command names, one indented name per line."""

    typer.echo("Installed Commands:")
    for command in commands:
        typer.echo(f"    {command}")


def echo_usage(help_text: str, registry: BuiltinRegistry) -> None:
    """Print the top-level usage followed by the builtin command summaries."""

    typer.echo(help_text.rstrip())
    typer.echo("")
    typer.echo("Builtin commands:")
    width = max((len(builtin.name) for builtin in registry), default=0)
    for builtin in registry:
        typer.echo(f"    {builtin.name.ljust(width)}    {builtin.summary}")
    typer.echo("")
    typer.echo("See 'tackle help <command>' for more information on a specific command.")
