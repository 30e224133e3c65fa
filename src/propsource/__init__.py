"""propsource - Reloadable, locale-aware message bundles from .properties files.

Resolves message keys against families of .properties (or XML properties)
resources, falling back from the requested locale to less specific ones,
the default locale and finally the bare basename. Loaded tables are cached
forever or revalidated after a configurable staleness window, skipping
re-parsing of resources whose modification time has not changed.

Public API:
    ReloadableMessageSource - Key lookup across basenames and locale fallbacks
    CacheConfig - Cache lifetime (TTL) configuration
    MessagePattern - Compiled positional message pattern ({0}, {0,number})
    PathResourceLoader - Resources below a directory
    PatternResourceLoader - Wildcard resources across several directories
    PackageResourceLoader - Resources inside an importable package
    Locale - Language/region/variant value type

Exceptions:
    PropSourceError - Base exception class
    NoSuchMessageError - Message missing from every source
    PropertiesSyntaxError - Unparseable resource
    MessagePatternError - Invalid message pattern
    ResourceResolutionError - Resource location could not be resolved

Submodules:
    propsource.syntax - .properties, XML and message pattern parsers
    propsource.runtime - MessagePattern, FileTable, CacheConfig
    propsource.localization - Loaders, caches and the message source
    propsource.diagnostics - Diagnostic codes and exception types
"""

# Essential Public API - Minimal exports for clean namespace
from .constants import CACHE_FOREVER, NO_CACHE
from .diagnostics import (
    MessagePatternError,
    NoSuchMessageError,
    PropertiesSyntaxError,
    PropSourceError,
    ResourceResolutionError,
)
from .locale_utils import Locale, to_locale
from .localization import (
    PackageResourceLoader,
    PathResourceLoader,
    PatternResourceLoader,
    ReloadableMessageSource,
)
from .runtime import CacheConfig, MessagePattern

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("propsource")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CACHE_FOREVER",
    "NO_CACHE",
    "CacheConfig",
    "Locale",
    "MessagePattern",
    "MessagePatternError",
    "NoSuchMessageError",
    "PackageResourceLoader",
    "PathResourceLoader",
    "PatternResourceLoader",
    "PropSourceError",
    "PropertiesSyntaxError",
    "ReloadableMessageSource",
    "ResourceResolutionError",
    "__version__",
    "to_locale",
]
