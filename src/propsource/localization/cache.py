"""Thread-safe caches behind ReloadableMessageSource.

Three independent caches, each owning one reentrant lock:

    FilenameCache    (basename, locale) -> fallback chain; never expires
    FileTableCache   candidate -> FileTable; TTL plus modification-time checks
    MergedViewCache  locale -> one FileTable merged across all basenames;
                     only used when resources are cached forever

Lock Order:
    MergedViewCache -> FilenameCache -> FileTableCache -> FileTable patterns.
    A lock is never acquired while a finer-grained one is held.

Loading happens while FileTableCache's lock is held, so lookups of
different candidates that both need I/O serialize. In exchange no two
threads ever build the same candidate's FileTable concurrently.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING

from propsource.diagnostics import PropSourceError, ResourceResolutionError
from propsource.enums import LoadStatus
from propsource.localization.fallback import calculate_all_filenames
from propsource.localization.loading import ResourceLoadResult
from propsource.runtime import CacheConfig, FileTable, SourceSnapshot

if TYPE_CHECKING:
    from propsource.locale_utils import Locale
    from propsource.localization.loading import Resource
    from propsource.localization.reading import PropertiesReader
    from propsource.localization.types import BaseName, CandidateId, Timestamp

__all__ = ["FileTableCache", "FilenameCache", "MergedViewCache"]

logger = logging.getLogger(__name__)

# Failures that make the resolver treat a candidate as having no resources.
_RESOLUTION_ERRORS = (OSError, ValueError, ResourceResolutionError)

# Failures that make one resource contribute no entries. UnicodeDecodeError
# is a ValueError; LookupError covers unknown encoding names.
_READ_ERRORS = (PropSourceError, OSError, ValueError, LookupError)


class FilenameCache:
    """Memoized fallback chains keyed by (basename, locale).

    Chains depend only on configuration, so entries never expire and the
    cache is not cleared by ReloadableMessageSource.clear_cache().
    """

    __slots__ = ("_cache", "_default_locale", "_fallback", "_lock")

    def __init__(
        self, default_locale: Locale | None, *, fallback_to_default_locale: bool = True
    ) -> None:
        self._default_locale = default_locale
        self._fallback = fallback_to_default_locale
        self._cache: dict[tuple[BaseName, Locale], tuple[CandidateId, ...]] = {}
        self._lock = RLock()

    def get(self, basename: BaseName, locale: Locale) -> tuple[CandidateId, ...]:
        """Fallback chain for basename and locale, most specific first."""
        key = (basename, locale)
        with self._lock:
            filenames = self._cache.get(key)
            if filenames is None:
                filenames = calculate_all_filenames(
                    basename,
                    locale,
                    self._default_locale,
                    fallback_to_default_locale=self._fallback,
                )
                self._cache[key] = filenames
            return filenames

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


class FileTableCache:
    """FileTable per candidate identifier with TTL-based refresh.

    A cached table is served while fresh (see FileTable.is_fresh). A stale
    or missing table is rebuilt by refresh(), which re-resolves the
    candidate and re-reads only resources whose modification time changed.

    Attributes:
        hits: Lookups served from a fresh table
        refreshes: Loads performed (first loads included)
        skipped_reloads: Resources reused because their modification time
            was unchanged
    """

    __slots__ = (
        "_clock",
        "_config",
        "_hits",
        "_lock",
        "_reader",
        "_refreshes",
        "_skipped_reloads",
        "_tables",
    )

    def __init__(
        self,
        reader: PropertiesReader,
        config: CacheConfig | None = None,
        clock: Callable[[], Timestamp] = time.monotonic,
    ) -> None:
        """Initialize file table cache.

        Args:
            reader: Resolves and parses candidate resources
            config: Cache lifetime; default caches forever
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._reader = reader
        self._config = config or CacheConfig()
        self._clock = clock
        self._tables: dict[CandidateId, FileTable] = {}
        self._lock = RLock()
        self._hits = 0
        self._refreshes = 0
        self._skipped_reloads = 0

    def get(self, candidate: CandidateId) -> FileTable:
        """Cached table for candidate, refreshed first when stale."""
        with self._lock:
            table = self._tables.get(candidate)
            if table is not None and table.is_fresh(self._clock(), self._config.ttl):
                self._hits += 1
                return table
            return self.refresh(candidate, table)

    def refresh(self, candidate: CandidateId, previous: FileTable | None = None) -> FileTable:
        """Reload candidate and replace its cache entry.

        Args:
            candidate: Candidate identifier
            previous: Table being replaced; its resources are reused when
                their modification time is unchanged

        Returns:
            The new entry. When every resource is unchanged this is
            previous itself, re-stamped.
        """
        with self._lock:
            self._refreshes += 1
            table = self._load(candidate, previous)
            self._tables[candidate] = table
            return table

    def clear(self) -> None:
        """Drop every cached table."""
        with self._lock:
            self._tables.clear()

    def _now(self) -> Timestamp | None:
        """cached_at stamp for new entries; None never expires."""
        return None if self._config.caches_forever else self._clock()

    def _load(self, candidate: CandidateId, previous: FileTable | None) -> FileTable:
        cached_at = self._now()
        try:
            resources = self._reader.resolve(candidate)
        except _RESOLUTION_ERRORS as e:
            logger.warning("Could not resolve resources for [%s]: %s", candidate, e)
            result = ResourceLoadResult(candidate, candidate, LoadStatus.ERROR, e)
            return FileTable.not_found(candidate, cached_at=cached_at, load_results=(result,))
        if not resources:
            logger.debug("No properties file found for [%s]", candidate)
            result = ResourceLoadResult(candidate, candidate, LoadStatus.NOT_FOUND)
            return FileTable.not_found(candidate, cached_at=cached_at, load_results=(result,))

        reusable: dict[str, SourceSnapshot] = {}
        if previous is not None and not self._config.caches_forever:
            reusable = {source.name: source for source in previous.sources}

        sources: list[SourceSnapshot] = []
        results: list[ResourceLoadResult] = []
        for resource in resources:
            snapshot, result = self._load_resource(resource, candidate, reusable)
            results.append(result)
            if snapshot is not None:
                sources.append(snapshot)

        if (
            previous is not None
            and all(r.is_unchanged for r in results)
            and [s.name for s in sources] == [s.name for s in previous.sources]
        ):
            previous._stamp(cached_at)  # noqa: SLF001 - cache owns re-stamping
            return previous
        return FileTable(
            candidate, tuple(sources), cached_at=cached_at, load_results=tuple(results)
        )

    def _load_resource(
        self,
        resource: Resource,
        candidate: CandidateId,
        reusable: dict[str, SourceSnapshot],
    ) -> tuple[SourceSnapshot | None, ResourceLoadResult]:
        """Reuse or parse one backing resource."""
        name = resource.display_name
        modified_at = self._modified_at(resource)
        prior = reusable.get(name)
        if prior is not None and modified_at is not None and prior.modified_at == modified_at:
            logger.debug("Re-caching properties for [%s] - file hasn't been modified", name)
            self._skipped_reloads += 1
            return prior, ResourceLoadResult(candidate, name, LoadStatus.UNCHANGED)
        try:
            entries = self._reader.read(resource, candidate)
        except _READ_ERRORS as e:
            logger.warning("Could not parse properties file [%s]: %s", name, e)
            return None, ResourceLoadResult(candidate, name, LoadStatus.ERROR, e)
        snapshot = SourceSnapshot(name, modified_at, MappingProxyType(entries))
        return snapshot, ResourceLoadResult(candidate, name, LoadStatus.SUCCESS)

    def _modified_at(self, resource: Resource) -> Timestamp | None:
        """Modification time, or None when unknown or not needed."""
        if self._config.caches_forever:
            return None
        try:
            modified_at = resource.last_modified()
        except OSError as e:
            logger.debug("Could not read modification time of [%s]: %s", resource.display_name, e)
            return None
        if modified_at is None:
            logger.debug("Modification time of [%s] is unknown", resource.display_name)
        return modified_at

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with size, hits, refreshes and skipped_reloads
        """
        with self._lock:
            return {
                "size": len(self._tables),
                "hits": self._hits,
                "refreshes": self._refreshes,
                "skipped_reloads": self._skipped_reloads,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


class MergedViewCache:
    """One merged FileTable per locale across every basename.

    Basenames are overlaid in configuration order and, within each
    basename, candidates from least to most specific. Later configured
    basenames therefore override earlier ones, and more specific locales
    override less specific ones within a basename.

    Only valid while resources are cached forever: entries are kept until
    clear() regardless of the underlying tables.
    """

    __slots__ = ("_basenames", "_cache", "_filenames", "_hits", "_lock", "_misses", "_tables")

    def __init__(
        self,
        basenames: Sequence[BaseName],
        filenames: FilenameCache,
        tables: FileTableCache,
    ) -> None:
        self._basenames = tuple(basenames)
        self._filenames = filenames
        self._tables = tables
        self._cache: dict[Locale, FileTable] = {}
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, locale: Locale) -> FileTable:
        """Merged table for locale, built on first request."""
        with self._lock:
            merged = self._cache.get(locale)
            if merged is not None:
                self._hits += 1
                return merged
            self._misses += 1
            sources: list[SourceSnapshot] = []
            for basename in self._basenames:
                for candidate in reversed(self._filenames.get(basename, locale)):
                    sources.extend(self._tables.get(candidate).sources)
            merged = FileTable(f"merged:{locale}", tuple(sources))
            self._cache[locale] = merged
            return merged

    def clear(self) -> None:
        """Drop every merged table."""
        with self._lock:
            self._cache.clear()

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with size, hits and misses
        """
        with self._lock:
            return {"size": len(self._cache), "hits": self._hits, "misses": self._misses}

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
