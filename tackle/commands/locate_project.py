"""`tackle locate-project`: print the manifest location as JSON."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ..project.manifest import resolve_manifest_path
from .options import CONTEXT_SETTINGS, ManifestPathOption

SUMMARY = "Print the location of the project manifest"

app = typer.Typer(add_completion=False)


@app.command(context_settings=CONTEXT_SETTINGS)
def locate_project_command(manifest_path: ManifestPathOption = None) -> None:
    """Print a JSON object with the absolute path of the project manifest."""

    path = resolve_manifest_path(manifest_path, Path.cwd())
    typer.echo(json.dumps({"root": str(path.resolve())}))
