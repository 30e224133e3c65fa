"""Cache configuration for ReloadableMessageSource.

Provides a single frozen dataclass that encapsulates the staleness window
shared by the file-table and merged-view caches.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from propsource.constants import CACHE_FOREVER

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable cache lifetime configuration.

    Constructing ``CacheConfig()`` with no arguments loads every resource
    once and never revalidates it.

    Attributes:
        ttl: Seconds a loaded resource table stays fresh. Any negative value
            caches forever (and enables the merged per-locale view); ``0``
            revalidates on every lookup.

    Example:
        >>> CacheConfig().caches_forever
        True
        >>> CacheConfig(ttl=0).always_refresh
        True
        >>> CacheConfig.from_seconds(30).ttl
        30.0
    """

    ttl: float = CACHE_FOREVER

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If ttl is NaN or infinite
        """
        if not math.isfinite(self.ttl):
            msg = f"ttl must be a finite number of seconds, got {self.ttl}"
            raise ValueError(msg)

    @classmethod
    def from_seconds(cls, seconds: int | float) -> CacheConfig:
        """Build a config from a whole or fractional number of seconds."""
        return cls(ttl=float(seconds))

    @property
    def caches_forever(self) -> bool:
        """True when resources are loaded once and never revalidated."""
        return self.ttl < 0

    @property
    def always_refresh(self) -> bool:
        """True when every lookup revalidates its resources."""
        return self.ttl == 0
