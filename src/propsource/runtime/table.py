"""Parsed resource tables with freshness metadata.

A FileTable holds everything loaded for one candidate identifier
(e.g. "messages_en_US"): the merged key/text table of its backing
resources, their modification times, when the table was cached, and a
lazily filled cache of compiled message patterns.

Immutability:
    The key/text table and the per-resource snapshots never change after
    construction. The compiled-pattern cache is the only mutable state and
    is guarded by a lock owned by the FileTable itself. cached_at is
    re-stamped by FileTableCache (under its own lock) when a refresh finds
    every backing resource unchanged.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from propsource.diagnostics import MessagePatternError
from propsource.enums import LoadStatus
from propsource.locale_utils import Locale
from propsource.runtime.message_format import MessagePattern

if TYPE_CHECKING:
    from propsource.localization.loading import ResourceLoadResult

__all__ = ["FileTable", "SourceSnapshot"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceSnapshot:
    """Entries parsed from one backing resource.

    Attributes:
        name: Resource display name (also the skip-reload key)
        modified_at: Modification time when read, None when unknown
        entries: Parsed key/text entries
    """

    name: str
    modified_at: float | None
    entries: Mapping[str, str]


class FileTable:
    """Cached contents of one candidate identifier.

    Entries of later sources override earlier ones on key collision.
    A FileTable without sources is the negative-cache entry for a
    candidate that has no loadable resource.

    Example:
        >>> table = FileTable("app_en", (SourceSnapshot("app_en.properties", 1.0, {"a": "A"}),))
        >>> table.get_text("a")
        'A'
        >>> table.get_text("missing") is None
        True
    """

    __slots__ = (
        "_cached_at",
        "_candidate",
        "_load_results",
        "_pattern_lock",
        "_patterns",
        "_sources",
        "_table",
    )

    def __init__(
        self,
        candidate: str,
        sources: tuple[SourceSnapshot, ...] = (),
        *,
        cached_at: float | None = None,
        load_results: tuple[ResourceLoadResult, ...] = (),
    ) -> None:
        """Initialize file table.

        Args:
            candidate: Candidate identifier this table was loaded for
            sources: Per-resource snapshots in resolution order
            cached_at: Clock reading when cached; None never expires
            load_results: Outcome of each resolved resource
        """
        merged: dict[str, str] = {}
        for source in sources:
            merged.update(source.entries)
        self._candidate = candidate
        self._sources = sources
        self._table = MappingProxyType(merged)
        self._cached_at = cached_at
        self._load_results = load_results
        self._patterns: dict[tuple[str, Locale], MessagePattern] = {}
        self._pattern_lock = threading.Lock()

    @classmethod
    def not_found(
        cls,
        candidate: str,
        *,
        cached_at: float | None = None,
        load_results: tuple[ResourceLoadResult, ...] = (),
    ) -> FileTable:
        """Negative-cache entry: empty table, no modification time."""
        return cls(candidate, cached_at=cached_at, load_results=load_results)

    @property
    def candidate(self) -> str:
        """Candidate identifier this table was loaded for."""
        return self._candidate

    @property
    def table(self) -> Mapping[str, str]:
        """Read-only merged key/text table."""
        return self._table

    @property
    def sources(self) -> tuple[SourceSnapshot, ...]:
        """Per-resource snapshots in resolution order."""
        return self._sources

    @property
    def source_modified_at(self) -> float | None:
        """Latest known modification time of the backing resources.

        None for the negative-cache entry and when no resource reported
        a modification time.
        """
        known = [s.modified_at for s in self._sources if s.modified_at is not None]
        return max(known, default=None)

    @property
    def cached_at(self) -> float | None:
        """Clock reading when cached; None never expires."""
        return self._cached_at

    @property
    def load_results(self) -> tuple[ResourceLoadResult, ...]:
        """Outcome of each resolved resource from the load that built this table."""
        return self._load_results

    @property
    def status(self) -> LoadStatus:
        """Summary of load_results.

        SUCCESS when any resource contributed entries, ERROR when resources
        were found but none loaded, NOT_FOUND otherwise.
        """
        results = self._load_results
        if any(r.is_success or r.is_unchanged for r in results):
            return LoadStatus.SUCCESS
        if any(r.is_error for r in results):
            return LoadStatus.ERROR
        return LoadStatus.NOT_FOUND

    @property
    def pattern_count(self) -> int:
        """Number of compiled patterns memoized so far."""
        with self._pattern_lock:
            return len(self._patterns)

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Check whether the table may be served without a refresh.

        Args:
            now: Current clock reading
            ttl: Staleness window in seconds; negative caches forever
        """
        if ttl < 0 or self._cached_at is None:
            return True
        return now - self._cached_at < ttl

    def get_text(self, key: str) -> str | None:
        """Raw text for key, or None when absent."""
        return self._table.get(key)

    def get_pattern(self, key: str, locale: Locale) -> MessagePattern | None:
        """Compiled pattern for key and locale, or None when key is absent.

        The first request for a (key, locale) pair compiles the text; later
        requests return the same MessagePattern object for the lifetime of
        this table. Text that is not a valid pattern is logged once and
        memoized as a literal pattern.
        """
        text = self._table.get(key)
        if text is None:
            return None
        cache_key = (key, locale)
        with self._pattern_lock:
            pattern = self._patterns.get(cache_key)
            if pattern is None:
                try:
                    pattern = MessagePattern.compile(text, locale)
                except MessagePatternError as e:
                    logger.warning(
                        "Invalid message pattern for key '%s' in [%s]: %s",
                        key,
                        self._candidate,
                        e,
                    )
                    pattern = MessagePattern.literal(text, locale)
                self._patterns[cache_key] = pattern
            return pattern

    def _stamp(self, cached_at: float | None) -> None:
        """Re-stamp after a refresh found every resource unchanged."""
        self._cached_at = cached_at

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return (
            f"FileTable(candidate={self._candidate!r}, entries={len(self._table)}, "
            f"sources={len(self._sources)}, cached_at={self._cached_at})"
        )
