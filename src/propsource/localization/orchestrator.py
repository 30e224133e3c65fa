"""Reloadable message source: key lookup across basenames and locale fallbacks.

ReloadableMessageSource resolves a message key for a locale by walking the
fallback chain of every configured basename, backed by the three caches in
propsource.localization.cache.

Two lookup modes, selected by CacheConfig.ttl:

    Cache forever (ttl < 0)
        One merged table per locale. Every basename contributes; later
        basenames override earlier ones, more specific locales override
        less specific ones.

    Revalidating (ttl >= 0)
        Basenames are tried in configuration order and, within each, the
        chain from most to least specific. The FIRST basename holding the
        key wins, even if a later basename also defines it.

The two modes intentionally differ: merging is only affordable when the
merged view never has to be rebuilt.

Key architectural decisions:
- Protocol-based ResourceLoader (dependency inversion)
- Lazy loading: nothing is read until the first lookup of a candidate
- Parent delegation by composition: a child holds an optional parent source
- Missing keys are None from resolve_*; only get_message raises

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from propsource.diagnostics import ErrorTemplate, NoSuchMessageError
from propsource.locale_utils import Locale, LocaleLike, get_system_locale, to_locale
from propsource.localization.cache import FilenameCache, FileTableCache, MergedViewCache
from propsource.localization.loading import PathResourceLoader, ResourceLoader
from propsource.localization.reading import PropertiesReader
from propsource.localization.types import BaseName, MessageKey, Timestamp
from propsource.runtime import CacheConfig, MessagePattern

__all__ = ["ReloadableMessageSource"]

logger = logging.getLogger(__name__)


class ReloadableMessageSource:
    """Locale-aware message lookup over .properties and XML resources.

    Example - Disk-based resources, cached forever:
        >>> source = ReloadableMessageSource(
        ...     ["messages", "overrides"],
        ...     PathResourceLoader("i18n"),
        ...     default_encoding="utf-8",
        ... )
        >>> source.get_message("greeting", ("World",), "de-AT")
        # "overrides" wins over "messages" where both define greeting

    Example - Revalidate every 30 seconds:
        >>> source = ReloadableMessageSource(
        ...     ["messages"], PathResourceLoader("i18n"), cache=CacheConfig(ttl=30)
        ... )

    Thread Safety:
        All public methods are safe to call concurrently. Loading happens
        inline on the first thread that observes a missing or stale entry.
    """

    __slots__ = (
        "_basenames",
        "_cache_config",
        "_default_locale",
        "_fallback_to_default_locale",
        "_filenames",
        "_merged",
        "_parent",
        "_reader",
        "_tables",
        "_use_code_as_default_message",
    )

    def __init__(
        self,
        basenames: Iterable[BaseName],
        resource_loader: ResourceLoader | None = None,
        *,
        default_encoding: str | None = None,
        file_encodings: Mapping[str, str] | None = None,
        fallback_to_default_locale: bool = True,
        default_locale: LocaleLike | None = None,
        cache: CacheConfig | None = None,
        parent: ReloadableMessageSource | None = None,
        use_code_as_default_message: bool = False,
        clock: Callable[[], Timestamp] = time.monotonic,
    ) -> None:
        """Initialize message source.

        Args:
            basenames: Resource families in priority order (e.g., ['messages'])
            resource_loader: Resolves resource locations; defaults to
                PathResourceLoader(".")
            default_encoding: Text encoding of .properties files
            file_encodings: Encoding overrides keyed by candidate identifier
                (e.g., {'messages_ja': 'shift_jis'})
            fallback_to_default_locale: Try the default locale's candidates
                before the bare basename
            default_locale: Default locale; detected from the system if omitted
            cache: Cache lifetime; None caches forever
            parent: Source consulted when this one has no message
            use_code_as_default_message: Return the key instead of raising
                NoSuchMessageError from get_message()
            clock: Monotonic time source in seconds (injectable for tests)

        Raises:
            ValueError: If no basenames are given or one is blank
        """
        names: list[BaseName] = []
        for basename in basenames:
            stripped = basename.strip()
            if not stripped:
                msg = f"Basename must not be empty: {basename!r}"
                raise ValueError(msg)
            names.append(stripped)
        if not names:
            msg = "At least one basename is required"
            raise ValueError(msg)

        # dict.fromkeys() removes duplicates while maintaining insertion order
        self._basenames: tuple[BaseName, ...] = tuple(dict.fromkeys(names))
        self._default_locale = (
            to_locale(default_locale) if default_locale is not None else get_system_locale()
        )
        self._fallback_to_default_locale = fallback_to_default_locale
        self._cache_config = cache or CacheConfig()
        self._parent = parent
        self._use_code_as_default_message = use_code_as_default_message

        self._reader = PropertiesReader(
            resource_loader or PathResourceLoader("."), default_encoding, file_encodings
        )
        self._filenames = FilenameCache(
            self._default_locale, fallback_to_default_locale=fallback_to_default_locale
        )
        self._tables = FileTableCache(self._reader, self._cache_config, clock)
        self._merged = MergedViewCache(self._basenames, self._filenames, self._tables)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def basenames(self) -> tuple[BaseName, ...]:
        """Configured basenames in priority order."""
        return self._basenames

    @property
    def default_locale(self) -> Locale:
        """Locale used when none is given and as fallback chain tail."""
        return self._default_locale

    @property
    def fallback_to_default_locale(self) -> bool:
        """Whether the default locale's candidates are searched."""
        return self._fallback_to_default_locale

    @property
    def cache_config(self) -> CacheConfig:
        """Cache lifetime configuration."""
        return self._cache_config

    @property
    def reader(self) -> PropertiesReader:
        """Reader resolving and parsing candidate resources."""
        return self._reader

    @property
    def parent(self) -> ReloadableMessageSource | None:
        """Source consulted when this one cannot resolve a key."""
        return self._parent

    @parent.setter
    def parent(self, parent: ReloadableMessageSource | None) -> None:
        source: ReloadableMessageSource | None = parent
        while source is not None:
            if source is self:
                msg = "Message source cannot be its own ancestor"
                raise ValueError(msg)
            source = source.parent
        self._parent = parent

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_text(self, key: MessageKey, locale: LocaleLike) -> str | None:
        """Raw text for key, or None when no resource defines it.

        Does not consult the parent.
        """
        canonical = to_locale(locale)
        if self._cache_config.caches_forever:
            return self._merged.get(canonical).get_text(key)
        for basename in self._basenames:
            for candidate in self._filenames.get(basename, canonical):
                text = self._tables.get(candidate).get_text(key)
                if text is not None:
                    return text
        return None

    def resolve_format(self, key: MessageKey, locale: LocaleLike) -> MessagePattern | None:
        """Compiled pattern for key, or None when no resource defines it.

        Repeated calls return the same MessagePattern object until the
        backing table is refreshed or the cache is cleared. Does not
        consult the parent.
        """
        canonical = to_locale(locale)
        if self._cache_config.caches_forever:
            return self._merged.get(canonical).get_pattern(key, canonical)
        for basename in self._basenames:
            for candidate in self._filenames.get(basename, canonical):
                pattern = self._tables.get(candidate).get_pattern(key, canonical)
                if pattern is not None:
                    return pattern
        return None

    def get_message(
        self,
        key: MessageKey,
        args: Sequence[Any] = (),
        locale: LocaleLike | None = None,
        *,
        default: str | None = None,
    ) -> str:
        """Resolve and render a message.

        Without args the raw text is returned unparsed, so apostrophes and
        braces need no escaping in messages that take no arguments.

        Lookup order: this source, the parent chain, default (rendered
        with args when args are given), the key itself when
        use_code_as_default_message is set.

        Args:
            key: Message key
            args: Positional pattern arguments
            locale: Requested locale; the default locale if omitted
            default: Text used when no source defines key

        Returns:
            Rendered message

        Raises:
            NoSuchMessageError: If the message cannot be resolved and
                neither default nor use_code_as_default_message applies
            TypeError: If an argument does not suit its placeholder type
        """
        canonical = self._default_locale if locale is None else to_locale(locale)
        message = self._get_message_internal(key, args, canonical)
        if message is not None:
            return message
        if default is not None:
            return self._render_default(default, args, canonical)
        if self._use_code_as_default_message:
            return key
        raise NoSuchMessageError(
            ErrorTemplate.message_not_found(key, str(canonical)), key=key, locale=str(canonical)
        )

    def has_message(self, key: MessageKey, locale: LocaleLike | None = None) -> bool:
        """Check whether this source or an ancestor defines key."""
        canonical = self._default_locale if locale is None else to_locale(locale)
        source: ReloadableMessageSource | None = self
        while source is not None:
            if source.resolve_text(key, canonical) is not None:
                return True
            source = source.parent
        return False

    def get_merged_properties(self, locale: LocaleLike) -> Mapping[str, str]:
        """Every key/text pair visible for locale, merged across basenames.

        Uses the same overlay order as the cache-forever lookup mode. When
        revalidating, the view is rebuilt from current tables on each call.
        """
        canonical = to_locale(locale)
        if self._cache_config.caches_forever:
            return self._merged.get(canonical).table
        merged: dict[str, str] = {}
        for basename in self._basenames:
            for candidate in reversed(self._filenames.get(basename, canonical)):
                merged.update(self._tables.get(candidate).table)
        return MappingProxyType(merged)

    def _get_message_internal(
        self, key: MessageKey, args: Sequence[Any], locale: Locale
    ) -> str | None:
        """Resolve in this source, then the parent chain; None when absent."""
        if args:
            pattern = self.resolve_format(key, locale)
            if pattern is not None:
                return pattern.format(*args)
        else:
            text = self.resolve_text(key, locale)
            if text is not None:
                return text
        if self._parent is not None:
            return self._parent._get_message_internal(key, args, locale)  # noqa: SLF001
        return None

    @staticmethod
    def _render_default(default: str, args: Sequence[Any], locale: Locale) -> str:
        if not args:
            return default
        return MessagePattern.compile(default, locale).format(*args)

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Drop loaded tables and merged views; the next lookup reloads.

        Fallback chains are kept since they depend only on configuration.
        """
        logger.debug("Clearing entire resource bundle cache")
        # Tables first: a merged view rebuilt in between is dropped below.
        self._tables.clear()
        self._merged.clear()

    def clear_cache_including_ancestors(self) -> None:
        """Clear this source's cache and every ancestor's."""
        self.clear_cache()
        if self._parent is not None:
            self._parent.clear_cache_including_ancestors()

    def get_cache_stats(self) -> dict[str, dict[str, int]]:
        """Get statistics of all three caches.

        Returns:
            Dict with 'filenames', 'tables' and 'merged' sections
        """
        return {
            "filenames": {"size": len(self._filenames)},
            "tables": self._tables.get_stats(),
            "merged": self._merged.get_stats(),
        }

    def __repr__(self) -> str:
        return (
            f"ReloadableMessageSource(basenames={list(self._basenames)!r}, "
            f"default_locale='{self._default_locale}', "
            f"ttl={self._cache_config.ttl}, parent={self._parent is not None})"
        )
