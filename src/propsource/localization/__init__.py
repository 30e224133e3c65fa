"""Message source package for ReloadableMessageSource.

Provides the full lookup stack: type aliases, locale fallback chains,
resource loading infrastructure, the caches and the orchestrator.

Submodules:
    types        - PEP 695 type aliases (BaseName, CandidateId, MessageKey, ...)
    fallback     - Candidate identifiers for a basename and locale
    loading      - Resource/ResourceLoader protocols, PathResourceLoader,
                   PatternResourceLoader, PackageResourceLoader, ResourceLoadResult
    reading      - PropertiesReader (suffix order, encoding policy)
    cache        - FilenameCache, FileTableCache, MergedViewCache
    orchestrator - ReloadableMessageSource

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from propsource.enums import LoadStatus
from propsource.localization.loading import (
    PackageResourceLoader,
    PathResourceLoader,
    PatternResourceLoader,
    Resource,
    ResourceLoader,
    ResourceLoadResult,
)
from propsource.localization.fallback import (
    calculate_all_filenames,
    calculate_filenames_for_locale,
)
from propsource.localization.reading import PropertiesReader
from propsource.localization.cache import FilenameCache, FileTableCache, MergedViewCache
from propsource.localization.orchestrator import ReloadableMessageSource
from propsource.localization.types import (
    BaseName,
    CandidateId,
    MessageKey,
    ResourceLocation,
    Timestamp,
)

__all__ = [
    # Main orchestrator
    "ReloadableMessageSource",
    # Loader protocols and implementations
    "Resource",
    "ResourceLoader",
    "PathResourceLoader",
    "PatternResourceLoader",
    "PackageResourceLoader",
    "PropertiesReader",
    # Caches
    "FilenameCache",
    "FileTableCache",
    "MergedViewCache",
    # Fallback chains
    "calculate_all_filenames",
    "calculate_filenames_for_locale",
    # Load tracking
    "LoadStatus",
    "ResourceLoadResult",
    # Type aliases for user code type annotations
    "BaseName",
    "CandidateId",
    "MessageKey",
    "ResourceLocation",
    "Timestamp",
]
