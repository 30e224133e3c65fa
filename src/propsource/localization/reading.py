"""Candidate resolution and resource parsing with an encoding policy.

PropertiesReader sits between FileTableCache and a ResourceLoader:

    resolve("messages_en")  -> handles for messages_en.properties, or for
                               messages_en.xml when no .properties matched
    read(handle, candidate) -> parsed key/text entries

Encoding for .properties text, per read:
    1. file_encodings[candidate]
    2. default_encoding
    3. locale.getpreferredencoding(False)

XML documents declare their own encoding and ignore both settings.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import locale as locale_module
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from propsource.constants import MAX_RESOURCE_SIZE, PROPERTIES_SUFFIX, XML_SUFFIX
from propsource.diagnostics import ErrorTemplate, PropSourceError
from propsource.syntax import parse_properties, parse_xml_properties

if TYPE_CHECKING:
    from propsource.localization.loading import Resource, ResourceLoader
    from propsource.localization.types import CandidateId

__all__ = ["PropertiesReader"]

logger = logging.getLogger(__name__)


class PropertiesReader:
    """Resolves candidate identifiers and parses their resources.

    Stateless apart from configuration, so one reader is shared by every
    cache of a message source.

    Example:
        >>> from propsource.localization.loading import PathResourceLoader
        >>> reader = PropertiesReader(PathResourceLoader("i18n"), default_encoding="utf-8")
        >>> reader.encoding_for("messages_ja")
        'utf-8'
    """

    __slots__ = ("_default_encoding", "_file_encodings", "_loader")

    def __init__(
        self,
        loader: ResourceLoader,
        default_encoding: str | None = None,
        file_encodings: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize reader.

        Args:
            loader: Resolves resource locations to handles
            default_encoding: Encoding for .properties text without an override
            file_encodings: Encoding overrides keyed by candidate identifier
        """
        self._loader = loader
        self._default_encoding = default_encoding
        self._file_encodings = MappingProxyType(dict(file_encodings or {}))

    @property
    def loader(self) -> ResourceLoader:
        """Underlying resource loader."""
        return self._loader

    @property
    def default_encoding(self) -> str | None:
        """Configured default text encoding."""
        return self._default_encoding

    @property
    def file_encodings(self) -> Mapping[str, str]:
        """Read-only encoding overrides keyed by candidate identifier."""
        return self._file_encodings

    def encoding_for(self, candidate: CandidateId) -> str:
        """Text encoding used for candidate's .properties resources."""
        encoding = self._file_encodings.get(candidate) or self._default_encoding
        return encoding or locale_module.getpreferredencoding(False)

    def resolve(self, candidate: CandidateId) -> tuple[Resource, ...]:
        """Existing resources backing candidate, in resolution order.

        Raises:
            ValueError: If the location is unsafe
            ResourceResolutionError: If the loader's resolution mechanism fails
            OSError: If the underlying storage cannot be listed
        """
        for suffix in (PROPERTIES_SUFFIX, XML_SUFFIX):
            found = tuple(r for r in self._loader.resolve(candidate + suffix) if r.exists())
            if found:
                return found
        return ()

    def read(self, resource: Resource, candidate: CandidateId) -> dict[str, str]:
        """Parse one resource.

        Raises:
            PropSourceError: If the resource exceeds MAX_RESOURCE_SIZE
            PropertiesSyntaxError: If the content cannot be parsed
            UnicodeDecodeError: If the text does not match its encoding
            LookupError: If the configured encoding is unknown
            OSError: If the resource cannot be read
        """
        name = resource.display_name
        with resource.open() as stream:
            data = stream.read(MAX_RESOURCE_SIZE + 1)
        if len(data) > MAX_RESOURCE_SIZE:
            raise PropSourceError(ErrorTemplate.resource_too_large(name, MAX_RESOURCE_SIZE))

        if resource.filename.endswith(XML_SUFFIX):
            logger.debug("Loading XML properties [%s]", name)
            return parse_xml_properties(data, resource=name)

        encoding = self.encoding_for(candidate)
        logger.debug("Loading properties [%s] with encoding '%s'", name, encoding)
        return parse_properties(data.decode(encoding), resource=name)

    def __repr__(self) -> str:
        return (
            f"PropertiesReader(loader={self._loader!r}, "
            f"default_encoding={self._default_encoding!r}, "
            f"file_encodings={dict(self._file_encodings)!r})"
        )
