"""Tests for diagnostics: codes, spans, formatting and the exception hierarchy."""

from __future__ import annotations

import pytest

from propsource.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    MessagePatternError,
    NoSuchMessageError,
    PropertiesSyntaxError,
    PropSourceError,
    ResourceResolutionError,
    SourceSpan,
)


class TestDiagnosticCode:
    """Code numbering."""

    def test_codes_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "category"),
        [
            (DiagnosticCode.MESSAGE_NOT_FOUND, 1),
            (DiagnosticCode.RESOURCE_TOO_LARGE, 2),
            (DiagnosticCode.PROPERTIES_MALFORMED_ESCAPE, 3),
            (DiagnosticCode.PATTERN_INVALID_CHOICE, 4),
        ],
    )
    def test_category_ranges(self, code: DiagnosticCode, category: int) -> None:
        assert code.value // 1000 == category


class TestSourceSpan:
    """Span invariants."""

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid_spans(self, start: int, end: int, line: int, column: int) -> None:
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start, end, line, column)


class TestFormatting:
    """Compiler-style rendering."""

    def test_span_with_resource(self) -> None:
        span = SourceSpan(start=10, end=16, line=3, column=9)
        diagnostic = ErrorTemplate.malformed_escape(span, "messages_en.properties")
        text = diagnostic.format_error()
        assert text.startswith("error[PROPERTIES_MALFORMED_ESCAPE]: ")
        assert "  --> messages_en.properties:3:9" in text

    def test_resource_without_span(self) -> None:
        text = ErrorTemplate.resource_too_large("memory:big", 8).format_error()
        assert text.splitlines() == [
            "error[RESOURCE_TOO_LARGE]: Resource exceeds the 8 byte limit",
            "  --> memory:big",
            "  = help: Split the resource into several smaller files",
        ]

    def test_str_is_message(self) -> None:
        diagnostic = Diagnostic(code=DiagnosticCode.XML_MALFORMED, message="bad xml")
        assert str(diagnostic) == "bad xml"
        assert diagnostic.format_error() == "error[XML_MALFORMED]: bad xml"


class TestErrors:
    """Exception hierarchy."""

    @pytest.mark.parametrize(
        ("error_type", "builtin"),
        [
            (PropertiesSyntaxError, ValueError),
            (MessagePatternError, ValueError),
            (NoSuchMessageError, LookupError),
            (ResourceResolutionError, PropSourceError),
        ],
    )
    def test_hierarchy(self, error_type: type[Exception], builtin: type[Exception]) -> None:
        assert issubclass(error_type, PropSourceError)
        assert issubclass(error_type, builtin)

    def test_diagnostic_carried(self) -> None:
        diagnostic = ErrorTemplate.message_not_found("title", "de_AT")
        error = NoSuchMessageError(diagnostic, key="title", locale="de_AT")
        assert error.diagnostic is diagnostic
        assert "No message found under code 'title' for locale 'de_AT'" in str(error)

    def test_plain_message(self) -> None:
        error = PropSourceError("boom")
        assert error.diagnostic is None
        assert str(error) == "boom"
