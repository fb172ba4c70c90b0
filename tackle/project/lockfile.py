"""Lock file loading and dependency snapshot queries.

The lock file is a persisted resolution of the project's dependency graph.
This module only reads it; producing one is the resolver's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import AmbiguousSpecifier, LockfileError, PackageIdNotFound
from ..models.datatypes import PackageId, PackageIdSpec, SourceId, is_valid_version
from ..parsing import normalize_optional_string


LOCKFILE_NAME = "tackle.lock"


@dataclass(frozen=True, slots=True)
class DependencySnapshot:
    """Immutable view of a lock file.

    Attributes:
        root: Identity of the project that owns the lock file.
        packages: Every locked package, root included, in file order.
    """

    root: PackageId
    packages: tuple[PackageId, ...]

    def query(self, spec: str) -> PackageId:
        """Return the single locked package selected by `spec`.

        Raises:
            InvalidSpecifier: If `spec` cannot be parsed.
            PackageIdNotFound: If nothing matches.
            AmbiguousSpecifier: If more than one package matches.
        """

        parsed = PackageIdSpec.parse(spec)
        matches = sorted(
            {package for package in self.packages if parsed.matches(package)},
            key=PackageId.sort_key,
        )
        if not matches:
            raise PackageIdNotFound(
                f"package id specification `{spec}` matched no packages"
            )
        if len(matches) > 1:
            candidates = "\n".join(
                f"  {PackageIdSpec.from_package_id(package)}" for package in matches
            )
            raise AmbiguousSpecifier(
                f"Ambiguous package id specification: `{spec}`\n"
                "Please re-run this command with `<spec>` set to one of the "
                f"following:\n{candidates}"
            )
        return matches[0]


def load_lockfile(path: Path, source_id: SourceId) -> DependencySnapshot | None:
    """Load the lock file at `path`, or return `None` when it does not exist.

    Entries without a `source` belong to the project's own source and inherit
    `source_id`.
    """

    if not path.is_file():
        return None

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise LockfileError(f"failed to read lock file `{path}`: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise LockfileError(f"lock file `{path}` must contain a top-level mapping")

    root_entry = payload.get("root")
    if not isinstance(root_entry, Mapping):
        raise LockfileError(f"lock file `{path}` is missing the `root` entry")
    root = _package_id(root_entry, source_id, path)

    raw_packages = payload.get("packages") or []
    if not isinstance(raw_packages, list):
        raise LockfileError(f"lock file `{path}` field `packages` must be a list")

    packages: list[PackageId] = [root]
    for entry in raw_packages:
        if not isinstance(entry, Mapping):
            raise LockfileError(f"lock file `{path}` has a malformed package entry")
        package_id = _package_id(entry, source_id, path)
        if package_id not in packages:
            packages.append(package_id)
    return DependencySnapshot(root=root, packages=tuple(packages))


def _package_id(entry: Mapping[str, Any], default_source: SourceId, path: Path) -> PackageId:
    name = normalize_optional_string(entry.get("name"))
    version = normalize_optional_string(entry.get("version"))
    if name is None or version is None or not is_valid_version(version):
        raise LockfileError(
            f"lock file `{path}` has an entry without a valid `name` and `version`"
        )

    raw_source = normalize_optional_string(entry.get("source"))
    if raw_source is None:
        return PackageId(name=name, version=version, source_id=default_source)
    try:
        source_id = SourceId.parse(raw_source)
    except ValueError as exc:
        raise LockfileError(f"lock file `{path}` entry `{name}`: {exc}") from exc
    return PackageId(name=name, version=version, source_id=source_id)
