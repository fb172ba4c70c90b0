"""Local directory package source."""

from __future__ import annotations

from pathlib import Path

from ..models.datatypes import Package, SourceId
from .manifest import MANIFEST_NAME, load_manifest


class PathSource:
    """Package source rooted at a local project directory.

    The manifest is read by `update()`; `root_package()` is only valid after
    an update, mirroring how remote sources must be fetched before querying.
    """

    def __init__(self, directory: Path, manifest_name: str = MANIFEST_NAME) -> None:
        self.directory = directory
        self.manifest_name = manifest_name
        self.source_id = SourceId.for_path(directory)
        self._package: Package | None = None

    @classmethod
    def for_path(cls, directory: Path) -> PathSource:
        """Create a source for the project rooted at `directory`."""

        return cls(directory.resolve())

    @classmethod
    def for_manifest(cls, manifest_path: Path) -> PathSource:
        """Create a source that reads exactly the manifest at `manifest_path`."""

        return cls(manifest_path.parent.resolve(), manifest_path.name)

    @property
    def manifest_path(self) -> Path:
        return self.directory / self.manifest_name

    def update(self) -> None:
        """Re-read the project manifest from disk."""

        manifest_path = self.manifest_path
        self._package = Package(
            manifest=load_manifest(manifest_path),
            manifest_path=manifest_path,
        )

    def root_package(self) -> Package:
        """Return the project package loaded by the last `update()`."""

        if self._package is None:
            raise RuntimeError("PathSource.update() must be called before root_package()")
        return self._package
