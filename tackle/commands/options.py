"""Options and settings shared by builtin commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

ManifestPathOption = Annotated[
    Path | None,
    typer.Option(
        "--manifest-path",
        help="Path to the manifest of the project to operate on.",
        metavar="PATH",
    ),
]
