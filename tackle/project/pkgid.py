"""Resolve a package id specification against a project's lock file."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from ..errors import MissingLockfile
from ..models.datatypes import PackageIdSpec, SourceId
from ..telemetry.logger import log_event
from .lockfile import LOCKFILE_NAME, DependencySnapshot, load_lockfile
from .path_source import PathSource


LockfileLoader = Callable[[Path, SourceId], DependencySnapshot | None]


def pkgid(
    manifest_path: Path,
    spec: str | None = None,
    lockfile_loader: LockfileLoader = load_lockfile,
) -> PackageIdSpec:
    """Return the fully qualified id of the package selected by `spec`.

    Without `spec` the project's own id is returned. The snapshot is loaded
    per call and discarded afterwards.

    Raises:
        MissingLockfile: If no lock file sits beside the manifest.
        InvalidSpecifier: If `spec` cannot be parsed.
        PackageIdNotFound: If `spec` matches no locked package.
        AmbiguousSpecifier: If `spec` matches several locked packages.
    """

    source = PathSource.for_manifest(manifest_path)
    source.update()
    package = source.root_package()

    lockfile = package.root / LOCKFILE_NAME
    source_id = package.package_id.source_id
    snapshot = lockfile_loader(lockfile, source_id)
    if snapshot is None:
        raise MissingLockfile(LOCKFILE_NAME)

    if spec is None:
        package_id = package.package_id
    else:
        package_id = snapshot.query(spec)
    log_event("DEBUG", "pkgid", "resolved", package=package_id.name, version=package_id.version)
    return PackageIdSpec.from_package_id(package_id)
