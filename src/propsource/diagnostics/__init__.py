"""Diagnostic system for propsource errors.

Provides structured error diagnostics with codes, spans and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    MessagePatternError,
    NoSuchMessageError,
    PropertiesSyntaxError,
    PropSourceError,
    ResourceResolutionError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "MessagePatternError",
    "NoSuchMessageError",
    "PropSourceError",
    "PropertiesSyntaxError",
    "ResourceResolutionError",
    "SourceSpan",
]
