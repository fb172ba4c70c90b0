"""`tackle version`: print version information."""

from __future__ import annotations

import typer

from .. import __version__
from .options import CONTEXT_SETTINGS

SUMMARY = "Show version information"

app = typer.Typer(add_completion=False)


def version_string() -> str:
    return f"tackle {__version__}"


@app.command(context_settings=CONTEXT_SETTINGS)
def version_command() -> None:
    """Show version information."""

    typer.echo(version_string())
