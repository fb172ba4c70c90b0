"""Shared typed data models for tackle.

This package contains dataclasses used across dispatch and project modules to
avoid cross-module coupling and circular imports.
"""

from .datatypes import Manifest, Package, PackageId, PackageIdSpec, SourceId

__all__ = [
    "Manifest",
    "Package",
    "PackageId",
    "PackageIdSpec",
    "SourceId",
]
