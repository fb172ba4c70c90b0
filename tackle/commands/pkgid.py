"""`tackle pkgid`: print the fully qualified id of a package."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..project.manifest import resolve_manifest_path
from ..project.pkgid import pkgid as resolve_pkgid
from .options import CONTEXT_SETTINGS, ManifestPathOption

SUMMARY = "Print a fully qualified package specification"

app = typer.Typer(add_completion=False)


@app.command(context_settings=CONTEXT_SETTINGS)
def pkgid_command(
    spec: Annotated[
        str | None,
        typer.Argument(help="Package id specification, `[url#][name][:version]`."),
    ] = None,
    manifest_path: ManifestPathOption = None,
) -> None:
    """Print a fully qualified package specification.

    Given a SPEC, look it up in the project's lock file and print the exact
    package it selects. Without a SPEC, print the project's own id. A lock
    file must exist beside the manifest.

    Examples: `foo`, `foo:1.2.3`, `registry+https://index.example.org#foo:1.2.3`.
    """

    path = resolve_manifest_path(manifest_path, Path.cwd())
    typer.echo(str(resolve_pkgid(path, spec)))
