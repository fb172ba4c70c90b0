"""Project manifest loading and location helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import ManifestError
from ..models.datatypes import Manifest, is_valid_package_name, is_valid_version
from ..parsing import normalize_optional_string


MANIFEST_NAME = "tackle.yaml"

_SUPPORTED_KEYS = frozenset({"package", "dependencies"})
_SUPPORTED_PACKAGE_KEYS = frozenset({"name", "version", "authors"})


def find_project_manifest(cwd: Path) -> Path:
    """Walk up from `cwd` and return the nearest manifest path.

    Raises:
        ManifestError: If no ancestor directory contains a manifest.
    """

    for directory in (cwd, *cwd.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    raise ManifestError(
        f"could not find `{MANIFEST_NAME}` in `{cwd}` or any parent directory"
    )


def resolve_manifest_path(manifest_path: Path | None, cwd: Path) -> Path:
    """Return an explicit `--manifest-path` or the nearest manifest above `cwd`."""

    if manifest_path is None:
        return find_project_manifest(cwd)
    if manifest_path.name != MANIFEST_NAME:
        raise ManifestError(
            f"the manifest-path must be a path to a `{MANIFEST_NAME}` file",
            hint=f"Pass the path of the `{MANIFEST_NAME}` file itself.",
        )
    candidate = cwd / manifest_path
    if not candidate.is_file():
        raise ManifestError(f"manifest path `{manifest_path}` does not exist")
    return candidate.resolve()


def load_manifest(path: Path) -> Manifest:
    """Read and validate one manifest file."""

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError(f"manifest `{path}` does not exist") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"failed to read manifest `{path}`: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise ManifestError(f"manifest `{path}` must contain a top-level mapping")
    _reject_unknown_keys(payload, _SUPPORTED_KEYS, path, section=None)

    package = payload.get("package")
    if not isinstance(package, Mapping):
        raise ManifestError(f"manifest `{path}` is missing the `package` section")
    _reject_unknown_keys(package, _SUPPORTED_PACKAGE_KEYS, path, section="package")

    name = normalize_optional_string(package.get("name"))
    if name is None or not is_valid_package_name(name):
        raise ManifestError(f"manifest `{path}` has an invalid `package.name`")
    version = normalize_optional_string(package.get("version"))
    if version is None or not is_valid_version(version):
        raise ManifestError(
            f"manifest `{path}` has an invalid `package.version`",
            hint="Versions use the exact `major.minor.patch` form.",
        )

    return Manifest(
        name=name,
        version=version,
        authors=_authors(package.get("authors"), path),
        dependencies=_dependencies(payload.get("dependencies"), path),
    )


def _reject_unknown_keys(
    payload: Mapping[Any, Any],
    supported: frozenset[str],
    path: Path,
    section: str | None,
) -> None:
    unknown = sorted(str(key) for key in payload if key not in supported)
    if not unknown:
        return
    prefix = f"{section}." if section else ""
    key_list = ", ".join(f"{prefix}{key}" for key in unknown)
    raise ManifestError(f"manifest `{path}` includes unsupported key(s): {key_list}")


def _authors(raw: object, path: Path) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ManifestError(f"manifest `{path}` field `package.authors` must be a list")
    authors = tuple(
        author for author in (normalize_optional_string(item) for item in raw) if author
    )
    return authors


def _dependencies(raw: object, path: Path) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ManifestError(f"manifest `{path}` field `dependencies` must be a mapping")

    dependencies: dict[str, str] = {}
    for raw_name, raw_requirement in raw.items():
        name = normalize_optional_string(raw_name)
        requirement = normalize_optional_string(raw_requirement)
        if name is None or not is_valid_package_name(name):
            raise ManifestError(f"manifest `{path}` has an invalid dependency name `{raw_name}`")
        if requirement is None:
            raise ManifestError(
                f"manifest `{path}` dependency `{name}` must declare a version requirement"
            )
        dependencies[name] = requirement
    return dependencies
