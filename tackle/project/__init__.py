"""Project collaborators: manifest, path source, lock file, and package ids."""

from .lockfile import LOCKFILE_NAME, DependencySnapshot, load_lockfile
from .manifest import MANIFEST_NAME, find_project_manifest, load_manifest, resolve_manifest_path
from .path_source import PathSource
from .pkgid import pkgid

__all__ = [
    "DependencySnapshot",
    "LOCKFILE_NAME",
    "MANIFEST_NAME",
    "PathSource",
    "find_project_manifest",
    "load_lockfile",
    "load_manifest",
    "pkgid",
    "resolve_manifest_path",
]
