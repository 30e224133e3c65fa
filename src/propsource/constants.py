"""Shared constants for propsource.

This module provides centralized configuration constants used across
the syntax, runtime and localization packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Resource suffixes: Candidate name to resource location mapping
- Cache lifetimes: TTL sentinels understood by CacheConfig
- Input limits: Size constraints applied while reading resources

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource suffixes
    "PROPERTIES_SUFFIX",
    "XML_SUFFIX",
    # Cache lifetimes
    "CACHE_FOREVER",
    "NO_CACHE",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    # Input limits
    "MAX_RESOURCE_SIZE",
    # Fallback strings
    "FALLBACK_NULL_ARGUMENT",
]

# ============================================================================
# RESOURCE SUFFIXES
# ============================================================================

# Tried first for every candidate identifier.
PROPERTIES_SUFFIX: str = ".properties"

# Tried only when no resource matched PROPERTIES_SUFFIX.
XML_SUFFIX: str = ".xml"

# ============================================================================
# CACHE LIFETIMES
# ============================================================================

# Any negative TTL means "load once, never revalidate".
CACHE_FOREVER: float = -1.0

# Zero TTL means "revalidate on every lookup".
NO_CACHE: float = 0.0

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum number of Babel Locale objects kept by get_babel_locale().
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum size in bytes of a single backing resource (10 MiB).
# Larger resources are treated as parse failures, not loaded partially.
MAX_RESOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendering of a None argument inside a message pattern.
FALLBACK_NULL_ARGUMENT: str = "null"
