"""`tackle verify-project`: check that the manifest is well formed."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ..errors import ManifestError
from ..project.manifest import load_manifest, resolve_manifest_path
from .options import CONTEXT_SETTINGS, ManifestPathOption

SUMMARY = "Check the correctness of the project manifest"

app = typer.Typer(add_completion=False)


@app.command(context_settings=CONTEXT_SETTINGS)
def verify_project_command(manifest_path: ManifestPathOption = None) -> None:
    """Print `{"success": "true"}` for a valid manifest, `{"invalid": ...}` otherwise."""

    try:
        load_manifest(resolve_manifest_path(manifest_path, Path.cwd()))
    except ManifestError as exc:
        typer.echo(json.dumps({"invalid": exc.message}))
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps({"success": "true"}))
