"""Core datatypes shared across tackle modules.

Responsibilities:
- Represent immutable package identity records.
- Parse and render package id specifications.

Key types:
- `SourceId`, `PackageId`, `PackageIdSpec`, `Manifest`, and `Package`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re

from ..errors import InvalidSpecifier


_SOURCE_KINDS = frozenset({"path", "registry", "git"})
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*$")
_VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.+-]+)?$")


def is_valid_package_name(name: str) -> bool:
    """Return whether `name` is a syntactically valid package name."""

    return bool(_NAME_PATTERN.match(name))


def is_valid_version(version: str) -> bool:
    """Return whether `version` is an exact `major.minor.patch` version."""

    return bool(_VERSION_PATTERN.match(version))


@dataclass(frozen=True, slots=True)
class SourceId:
    """Where a package comes from.

    Attributes:
        kind: One of `path`, `registry`, or `git`.
        url: Location of the source, a `file://` URI for path sources.
    """

    kind: str
    url: str

    @classmethod
    def for_path(cls, directory: Path) -> SourceId:
        """Build the path source id for a project directory."""

        return cls(kind="path", url=directory.resolve().as_uri())

    @classmethod
    def parse(cls, text: str) -> SourceId:
        """Parse the `kind+url` form used in lock files."""

        kind, separator, url = text.strip().partition("+")
        if not separator or kind not in _SOURCE_KINDS or not url:
            raise ValueError(f"invalid source id `{text}`")
        return cls(kind=kind, url=url)

    def __str__(self) -> str:
        return f"{self.kind}+{self.url}"


@dataclass(frozen=True, slots=True)
class PackageId:
    """Fully qualified identity of one package."""

    name: str
    version: str
    source_id: SourceId

    def sort_key(self) -> tuple[str, str, str]:
        """Return a deterministic ordering key."""

        return (self.name, self.version, str(self.source_id))

    def __str__(self) -> str:
        return f"{self.name} v{self.version} ({self.source_id})"


@dataclass(frozen=True, slots=True)
class PackageIdSpec:
    """A partial or full package identifier, `[url#][name][:version]`.

    Attributes:
        name: Package name.
        version: Exact version, when specified.
        url: Source URL, when specified.
    """

    name: str
    version: str | None = None
    url: str | None = None

    @classmethod
    def parse(cls, text: str) -> PackageIdSpec:
        """Parse a specifier string.

        Accepted forms are `name`, `name:version`, `url`, `url#version`,
        `url#name`, and `url#name:version`. For URL forms without an explicit
        name, the last path segment of the URL is the name. A leading source
        kind (`registry+`, `git+`, `path+`) is dropped from the URL.

        Raises:
            InvalidSpecifier: If the name or version is malformed.
        """

        raw = text.strip()
        if not raw:
            raise InvalidSpecifier("package id specification must not be empty")

        url: str | None = None
        version: str | None = None
        if "://" in raw:
            url, _, fragment = raw.partition("#")
            kind, separator, rest = url.partition("+")
            if separator and kind in _SOURCE_KINDS:
                url = rest
            url = url.rstrip("/")
            last_segment = url.rsplit("/", 1)[-1]
            if not fragment:
                name = last_segment
            elif ":" in fragment:
                name, _, version = fragment.partition(":")
            elif fragment[0].isdigit():
                name, version = last_segment, fragment
            else:
                name = fragment
        else:
            name, separator, version_text = raw.partition(":")
            version = version_text if separator else None

        if not is_valid_package_name(name):
            raise InvalidSpecifier(f"invalid package name `{name}` in specification `{text}`")
        if version is not None and not is_valid_version(version):
            raise InvalidSpecifier(f"invalid version `{version}` in specification `{text}`")
        return cls(name=name, version=version, url=url)

    @classmethod
    def from_package_id(cls, package_id: PackageId) -> PackageIdSpec:
        """Build the exact specification for a resolved package id."""

        return cls(
            name=package_id.name,
            version=package_id.version,
            url=package_id.source_id.url,
        )

    def matches(self, package_id: PackageId) -> bool:
        """Return whether this specification selects `package_id`."""

        if self.name != package_id.name:
            return False
        if self.version is not None and self.version != package_id.version:
            return False
        if self.url is not None and self.url != package_id.source_id.url.rstrip("/"):
            return False
        return True

    def __str__(self) -> str:
        if self.url is None:
            if self.version is None:
                return self.name
            return f"{self.name}:{self.version}"

        last_segment = self.url.rstrip("/").rsplit("/", 1)[-1]
        if last_segment == self.name:
            rendered = self.url
            if self.version is not None:
                rendered += f"#{self.version}"
            return rendered

        rendered = f"{self.url}#{self.name}"
        if self.version is not None:
            rendered += f":{self.version}"
        return rendered


@dataclass(frozen=True, slots=True)
class Manifest:
    """Parsed contents of a project manifest.

    Attributes:
        name: Package name.
        version: Exact package version.
        authors: Declared authors, possibly empty.
        dependencies: Dependency name to version requirement.
    """

    name: str
    version: str
    authors: tuple[str, ...] = field(default_factory=tuple)
    dependencies: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Package:
    """A manifest together with the location it was loaded from."""

    manifest: Manifest
    manifest_path: Path

    @property
    def root(self) -> Path:
        """Directory containing the manifest."""

        return self.manifest_path.parent

    @property
    def package_id(self) -> PackageId:
        """Identity of this package as a path source."""

        return PackageId(
            name=self.manifest.name,
            version=self.manifest.version,
            source_id=SourceId.for_path(self.root),
        )
