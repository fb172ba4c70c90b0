"""`tackle read-manifest`: dump the project manifest as JSON."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ..project.manifest import load_manifest, resolve_manifest_path
from .options import CONTEXT_SETTINGS, ManifestPathOption

SUMMARY = "Print the project manifest as JSON"

app = typer.Typer(add_completion=False)


@app.command(context_settings=CONTEXT_SETTINGS)
def read_manifest_command(manifest_path: ManifestPathOption = None) -> None:
    """Print the parsed project manifest as a JSON object."""

    path = resolve_manifest_path(manifest_path, Path.cwd())
    manifest = load_manifest(path)
    payload = {
        "name": manifest.name,
        "version": manifest.version,
        "authors": list(manifest.authors),
        "dependencies": dict(sorted(manifest.dependencies.items())),
        "manifest_path": str(path),
    }
    typer.echo(json.dumps(payload, sort_keys=True))
