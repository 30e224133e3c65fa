"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating ReloadableMessageSource call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "BaseName",
    "CandidateId",
    "MessageKey",
    "ResourceLocation",
    "Timestamp",
]

type BaseName = str
"""Family of locale-variant resources (e.g., 'messages', 'i18n/errors')."""

type CandidateId = str
"""Locale-qualified base name (e.g., 'messages_en_US', 'messages')."""

type ResourceLocation = str
"""Candidate identifier plus suffix (e.g., 'messages_en_US.properties')."""

type MessageKey = str
"""Key of one entry in a resource table (e.g., 'greeting', 'error.404')."""

type Timestamp = float
"""Reading of the cache clock or a resource modification time, in seconds."""
