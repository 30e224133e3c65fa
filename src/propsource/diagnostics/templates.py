"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def message_not_found(key: str, locale: str) -> Diagnostic:
        """Message key not found for a locale.

        Args:
            key: The message key that was not found
            locale: The requested locale tag

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"No message found under code '{key}' for locale '{locale}'",
            hint="Check the configured basenames and the candidate resource files",
        )

    @staticmethod
    def resolution_failed(location: str, reason: str) -> Diagnostic:
        """Resource location could not be resolved.

        Args:
            location: Location that was being resolved
            reason: Underlying failure

        Returns:
            Diagnostic for RESOURCE_RESOLUTION_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_RESOLUTION_FAILED,
            message=f"Could not resolve resources for [{location}]: {reason}",
            resource=location,
        )

    @staticmethod
    def resource_too_large(resource: str, limit: int) -> Diagnostic:
        """Resource exceeds the maximum readable size.

        Args:
            resource: Display name of the resource
            limit: Maximum size in bytes

        Returns:
            Diagnostic for RESOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_TOO_LARGE,
            message=f"Resource exceeds the {limit} byte limit",
            hint="Split the resource into several smaller files",
            resource=resource,
        )

    @staticmethod
    def malformed_escape(span: SourceSpan, resource: str | None = None) -> Diagnostic:
        """Invalid \\uxxxx escape sequence in a .properties file.

        Args:
            span: Location of the escape sequence
            resource: Display name of the resource, if known

        Returns:
            Diagnostic for PROPERTIES_MALFORMED_ESCAPE
        """
        return Diagnostic(
            code=DiagnosticCode.PROPERTIES_MALFORMED_ESCAPE,
            message="Malformed \\uxxxx encoding",
            span=span,
            hint="Unicode escapes need exactly four hexadecimal digits",
            resource=resource,
        )

    @staticmethod
    def xml_malformed(reason: str, resource: str | None = None) -> Diagnostic:
        """XML properties document is not well-formed.

        Args:
            reason: Parser error text
            resource: Display name of the resource, if known

        Returns:
            Diagnostic for XML_MALFORMED
        """
        return Diagnostic(
            code=DiagnosticCode.XML_MALFORMED,
            message=f"Malformed XML properties document: {reason}",
            resource=resource,
        )

    @staticmethod
    def xml_unexpected_root(tag: str, resource: str | None = None) -> Diagnostic:
        """XML document root is not <properties>.

        Args:
            tag: Actual root element tag
            resource: Display name of the resource, if known

        Returns:
            Diagnostic for XML_UNEXPECTED_ROOT
        """
        return Diagnostic(
            code=DiagnosticCode.XML_UNEXPECTED_ROOT,
            message=f"Expected <properties> root element, found <{tag}>",
            resource=resource,
        )

    @staticmethod
    def xml_entry_without_key(resource: str | None = None) -> Diagnostic:
        """XML <entry> element lacks the key attribute.

        Args:
            resource: Display name of the resource, if known

        Returns:
            Diagnostic for XML_ENTRY_WITHOUT_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.XML_ENTRY_WITHOUT_KEY,
            message="<entry> element without 'key' attribute",
            hint='Write entries as <entry key="name">value</entry>',
            resource=resource,
        )

    @staticmethod
    def pattern_unmatched_brace(span: SourceSpan) -> Diagnostic:
        """Placeholder opened with '{' but never closed.

        Args:
            span: Location of the opening brace

        Returns:
            Diagnostic for PATTERN_UNMATCHED_BRACE
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_UNMATCHED_BRACE,
            message="Unmatched braces in the pattern",
            span=span,
            hint="Quote literal braces as '{' or close the placeholder",
        )

    @staticmethod
    def pattern_invalid_index(text: str, span: SourceSpan) -> Diagnostic:
        """Placeholder index is not a non-negative integer.

        Args:
            text: The index text found
            span: Location of the placeholder

        Returns:
            Diagnostic for PATTERN_INVALID_ARGUMENT_INDEX
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_INVALID_ARGUMENT_INDEX,
            message=f"Can't parse argument number: '{text}'",
            span=span,
            hint="Placeholders are addressed by position: {0}, {1}, ...",
        )

    @staticmethod
    def pattern_unknown_type(type_name: str, span: SourceSpan) -> Diagnostic:
        """Placeholder names a format type that does not exist.

        Args:
            type_name: The type text found
            span: Location of the placeholder

        Returns:
            Diagnostic for PATTERN_UNKNOWN_FORMAT_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_UNKNOWN_FORMAT_TYPE,
            message=f"Unknown format type: '{type_name}'",
            span=span,
            hint="Supported types are number, date, time and choice",
        )

    @staticmethod
    def pattern_invalid_choice(style: str, reason: str) -> Diagnostic:
        """Choice style text cannot be parsed.

        Args:
            style: The choice style text
            reason: What is wrong with it

        Returns:
            Diagnostic for PATTERN_INVALID_CHOICE
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_INVALID_CHOICE,
            message=f"Invalid choice pattern '{style}': {reason}",
            hint="Write choices as limit#text separated by '|', e.g. 0#none|1#one|1<many",
        )

    @staticmethod
    def pattern_invalid_number_style(style: str, reason: str, span: SourceSpan) -> Diagnostic:
        """Custom number style is not a usable decimal pattern.

        Args:
            style: The number style text
            reason: What is wrong with it
            span: Location of the placeholder

        Returns:
            Diagnostic for PATTERN_INVALID_NUMBER_STYLE
        """
        return Diagnostic(
            code=DiagnosticCode.PATTERN_INVALID_NUMBER_STYLE,
            message=f"Invalid number pattern '{style}': {reason}",
            span=span,
            hint="Use integer, currency, percent or a decimal pattern such as #,##0.00",
        )
