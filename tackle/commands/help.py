"""`tackle help`: point at per-command help."""

from __future__ import annotations

from typing import Annotated

import typer

from .options import CONTEXT_SETTINGS

SUMMARY = "Display help for a tackle command"

app = typer.Typer(add_completion=False)


@app.command(context_settings=CONTEXT_SETTINGS)
def help_command(
    command: Annotated[
        str | None,
        typer.Argument(help="Command to show help for."),
    ] = None,
) -> None:
    """Display help for a tackle command.

    `tackle help <command>` is equivalent to `tackle <command> -h`.
    """

    if command is None:
        typer.echo("See 'tackle help <command>' for more information on a specific command.")
        return
    typer.echo(f"Run 'tackle {command} -h' for help on `{command}`.")
