"""Resource loading infrastructure for ReloadableMessageSource.

Provides the protocols for resource handles and loaders, three loader
implementations with path-traversal security, and the result record
tracking each load attempt.

Components:
    Resource - Protocol for one backing resource handle (structural typing)
    ResourceLoader - Protocol resolving a location to zero, one or many handles
    PathResourceLoader - Single-path resolution below a root directory
    PatternResourceLoader - Wildcard resolution across several root directories
    PackageResourceLoader - Resolution inside an importable package
    ResourceLoadResult - Immutable result of a single resource load attempt

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources as importlib_resources
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

from propsource.diagnostics import ErrorTemplate, ResourceResolutionError
from propsource.enums import LoadStatus
from propsource.localization.types import CandidateId, ResourceLocation, Timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence
    from importlib.resources.abc import Traversable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocols
    "Resource",
    "ResourceLoader",
    # Handles
    "PathResource",
    "PackageResource",
    # Concrete loaders
    "PathResourceLoader",
    "PatternResourceLoader",
    "PackageResourceLoader",
    # Load result type
    "ResourceLoadResult",
]

logger = logging.getLogger(__name__)


class Resource(Protocol):
    """Protocol for one backing resource.

    display_name identifies the resource in diagnostics and is the key used
    to match a resource against its previous load for skip-reload.
    """

    @property
    def display_name(self) -> str:
        """Human-readable location for diagnostics."""

    @property
    def filename(self) -> str:
        """Final path component, including the suffix."""

    def exists(self) -> bool:
        """Check whether the resource can be opened."""

    def last_modified(self) -> Timestamp | None:
        """Modification time in seconds, or None when unknown.

        Raises:
            OSError: If the modification time cannot be read
        """

    def open(self) -> BinaryIO:
        """Open the resource for binary reading."""


class ResourceLoader(Protocol):
    """Protocol resolving resource locations to handles.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders.

    Example:
        >>> class DirectoryLoader:
        ...     def resolve(self, location: str) -> list[PathResource]:
        ...         return [PathResource(Path("i18n", location).resolve())]
    """

    def resolve(self, location: ResourceLocation) -> Sequence[Resource]:
        """Resolve a location such as 'messages_en.properties'.

        Returns:
            Matching handles in resolution order. Handles need not exist;
            callers filter with Resource.exists().

        Raises:
            ValueError: If the location is unsafe (path traversal)
            ResourceResolutionError: If the resolution mechanism fails
            OSError: If the underlying storage cannot be listed
        """


@dataclass(frozen=True, slots=True)
class PathResource:
    """File system resource handle.

    Attributes:
        path: Absolute path to the file
    """

    path: Path

    @property
    def display_name(self) -> str:
        """Absolute path as text."""
        return str(self.path)

    @property
    def filename(self) -> str:
        """File name including suffix."""
        return self.path.name

    def exists(self) -> bool:
        """Check whether the path is a regular file."""
        return self.path.is_file()

    def last_modified(self) -> Timestamp | None:
        """File modification time from stat()."""
        return self.path.stat().st_mtime

    def open(self) -> BinaryIO:
        """Open file for binary reading."""
        return self.path.open("rb")


@dataclass(frozen=True, slots=True)
class PackageResource:
    """Resource handle inside an importable package.

    Packaged resources may live in a zip archive or other read-only
    location, so modification time is always unknown.

    Attributes:
        traversable: importlib.resources handle
        display_name: 'package:location' for diagnostics
    """

    traversable: Traversable
    display_name: str

    @property
    def filename(self) -> str:
        """Resource name including suffix."""
        return self.traversable.name

    def exists(self) -> bool:
        """Check whether the resource is a file."""
        return self.traversable.is_file()

    def last_modified(self) -> Timestamp | None:
        """Always None: packaged resources carry no usable modification time."""
        return None

    def open(self) -> BinaryIO:
        """Open resource for binary reading."""
        return self.traversable.open("rb")


def _validate_location(location: ResourceLocation) -> None:
    """Validate a location for path traversal attacks and whitespace.

    Raises:
        ValueError: If location is empty, absolute, or contains '..'
    """
    if not location or location.strip() != location:
        msg = f"Resource location is empty or has leading/trailing whitespace: {location!r}"
        raise ValueError(msg)
    if Path(location).is_absolute() or location.startswith(("/", "\\")):
        msg = f"Absolute paths not allowed in resource location: '{location}'"
        raise ValueError(msg)
    if ".." in location:
        msg = f"Path traversal sequences not allowed in resource location: '{location}'"
        raise ValueError(msg)


def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
    """Check if full_path is safely within base_dir.

    Resolves both paths before comparison so that symlinks cannot escape
    the root directory.
    """
    try:
        full_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system loader resolving each location to exactly one path.

    Uses Python 3.13 frozen dataclass with slots for low memory overhead.

    Security:
        Locations that are absolute, contain "..", or resolve outside
        root_dir are rejected with ValueError.

    Example:
        >>> loader = PathResourceLoader("i18n")
        >>> [r.filename for r in loader.resolve("messages_en.properties")]
        ['messages_en.properties']

    Attributes:
        root_dir: Directory locations are resolved against
    """

    root_dir: str | Path = "."
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    def resolve(self, location: ResourceLocation) -> Sequence[Resource]:
        """Resolve location to a single (possibly missing) file handle.

        Raises:
            ValueError: If location escapes root_dir
        """
        _validate_location(location)
        full_path = (self._resolved_root / location).resolve()
        if not _is_safe_path(self._resolved_root, full_path):
            msg = f"Path traversal detected: '{location}' resolves outside root directory"
            raise ValueError(msg)
        return (PathResource(full_path),)


class PatternResourceLoader:
    """File system loader expanding wildcards across several roots.

    Each root is searched in order and glob wildcards ("*", "?", "[...]",
    "**") in the location are expanded, sorted within each root. Every
    existing match is returned, so one candidate identifier may be backed
    by several files whose entries are merged (later matches win).

    Example:
        >>> loader = PatternResourceLoader("core/i18n", "plugins/i18n")
        >>> [r.display_name for r in loader.resolve("*/messages_en.properties")]  # doctest: +SKIP
        ['.../core/i18n/app/messages_en.properties', '.../plugins/i18n/x/messages_en.properties']
    """

    __slots__ = ("_roots",)

    def __init__(self, *root_dirs: str | Path) -> None:
        """Initialize loader.

        Args:
            *root_dirs: Directories searched in order

        Raises:
            ValueError: If no root directory is given
        """
        if not root_dirs:
            msg = "PatternResourceLoader requires at least one root directory"
            raise ValueError(msg)
        self._roots = tuple(Path(root).resolve() for root in root_dirs)

    @property
    def root_dirs(self) -> tuple[Path, ...]:
        """Resolved root directories in search order."""
        return self._roots

    def resolve(self, location: ResourceLocation) -> Sequence[Resource]:
        """Expand location in every root.

        Raises:
            ValueError: If location is unsafe
            ResourceResolutionError: If the wildcard pattern is invalid
        """
        _validate_location(location)
        matches: list[Resource] = []
        for root in self._roots:
            try:
                paths = sorted(root.glob(location))
            except (ValueError, NotImplementedError) as e:
                raise ResourceResolutionError(
                    ErrorTemplate.resolution_failed(location, str(e))
                ) from e
            for path in paths:
                if not path.is_file():
                    continue
                if not _is_safe_path(root, path):
                    logger.debug("Skipping [%s]: resolves outside [%s]", path, root)
                    continue
                matches.append(PathResource(path.resolve()))
        return matches

    def __repr__(self) -> str:
        roots = ", ".join(repr(str(root)) for root in self._roots)
        return f"PatternResourceLoader({roots})"


@dataclass(frozen=True, slots=True)
class PackageResourceLoader:
    """Loader for resources shipped inside an importable package.

    Example:
        >>> loader = PackageResourceLoader("myapp.i18n")  # doctest: +SKIP
        >>> loader.resolve("messages_en.properties")[0].display_name  # doctest: +SKIP
        'myapp.i18n:messages_en.properties'

    Attributes:
        package: Dotted name of the package holding the resources

    Raises:
        ModuleNotFoundError: If the package cannot be imported
    """

    package: str
    _root: Traversable = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Locate the package root."""
        object.__setattr__(self, "_root", importlib_resources.files(self.package))

    def resolve(self, location: ResourceLocation) -> Sequence[Resource]:
        """Resolve location to a single (possibly missing) packaged resource.

        Raises:
            ValueError: If location is unsafe
        """
        _validate_location(location)
        traversable = self._root.joinpath(*location.replace("\\", "/").split("/"))
        return (PackageResource(traversable, f"{self.package}:{location}"),)


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single resource for a candidate identifier.

    Attributes:
        candidate: Candidate identifier being loaded
        source: Display name of the resource, or the candidate when no
            resource was resolved
        status: Load status (success, unchanged, not_found, error)
        error: Exception if status is ERROR, None otherwise
    """

    candidate: CandidateId
    source: str
    status: LoadStatus
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the resource contributed freshly parsed entries."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_unchanged(self) -> bool:
        """Check if previously parsed entries were reused."""
        return self.status == LoadStatus.UNCHANGED

    @property
    def is_error(self) -> bool:
        """Check if resolution or parsing failed."""
        return self.status == LoadStatus.ERROR
