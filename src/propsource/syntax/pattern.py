"""Parser for positional message patterns.

Pattern syntax:
    pattern      := (text | quoted | placeholder)*
    quoted       := "''" (one apostrophe) | "'" any-text "'" (literal, braces allowed)
    placeholder  := "{" index ["," type ["," style]] "}"
    index        := non-negative decimal integer
    type         := "number" | "date" | "time" | "choice"
    style        := number: "integer" | "currency" | "percent" | decimal pattern
                    date/time: "short" | "medium" | "long" | "full" | date pattern
                    choice: limit ("#" | "<" | "≤") text ("|" limit ... )*

Inside a placeholder, quotes and nested braces are kept verbatim in the
style text; they belong to the sub-format (decimal, date or choice pattern).

Choice option text is unquoted when the choice style is parsed; text that
still contains "{" is parsed again as a nested pattern and rendered with
the same arguments.

Custom number styles are checked with Babel when the pattern is parsed,
so a bad decimal pattern fails here rather than at format time.

Python 3.13+.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel import numbers as babel_numbers

from propsource.diagnostics import ErrorTemplate, MessagePatternError
from propsource.enums import ArgumentType
from propsource.syntax.cursor import Cursor

if TYPE_CHECKING:
    from propsource.diagnostics import SourceSpan

__all__ = [
    "ChoiceOption",
    "PatternElement",
    "Placeholder",
    "TextElement",
    "parse_choice",
    "parse_pattern",
]

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})
_NUMBER_STYLES = frozenset({"integer", "currency", "percent"})


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text, already unquoted."""

    value: str


@dataclass(frozen=True, slots=True)
class ChoiceOption:
    """One branch of a choice placeholder.

    Attributes:
        limit: Lowest argument value selecting this branch
        text: Unquoted branch text
        elements: Parsed nested pattern when text contains a placeholder
    """

    limit: float
    text: str
    elements: tuple[PatternElement, ...] | None = None


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Argument reference: {index,type,style}.

    Attributes:
        index: Position of the argument
        type: Format type
        style: Style text as written (keywords compare case-insensitively)
        choices: Parsed branches for choice placeholders
    """

    index: int
    type: ArgumentType = ArgumentType.NONE
    style: str = ""
    choices: tuple[ChoiceOption, ...] = ()

    @property
    def style_keyword(self) -> str | None:
        """Predefined style name, or None when style is a custom pattern."""
        keyword = self.style.strip().lower()
        if not keyword:
            return ""
        if self.type is ArgumentType.NUMBER and keyword in _NUMBER_STYLES:
            return keyword
        if self.type in (ArgumentType.DATE, ArgumentType.TIME) and keyword in _DATE_STYLES:
            return keyword
        return None


type PatternElement = TextElement | Placeholder


def parse_pattern(source: str) -> tuple[PatternElement, ...]:
    """Parse a message pattern into text and placeholder elements.

    Args:
        source: Pattern text

    Returns:
        Elements in source order; adjacent text is merged

    Raises:
        MessagePatternError: On unmatched braces, a bad index, an unknown
            format type, or an invalid choice style

    Example:
        >>> [type(e).__name__ for e in parse_pattern("It''s {0}!")]
        ['TextElement', 'Placeholder', 'TextElement']
    """
    elements: list[PatternElement] = []
    text: list[str] = []
    in_quote = False
    cursor = Cursor(source, 0)
    while not cursor.is_eof:
        char = cursor.current
        if char == "'":
            if cursor.peek(1) == "'":
                text.append("'")
                cursor = cursor.advance(2)
                continue
            in_quote = not in_quote
            cursor = cursor.advance()
        elif char == "{" and not in_quote:
            if text:
                elements.append(TextElement("".join(text)))
                text.clear()
            placeholder, cursor = _parse_placeholder(cursor)
            elements.append(placeholder)
        else:
            text.append(char)
            cursor = cursor.advance()
    if text:
        elements.append(TextElement("".join(text)))
    return tuple(elements)


def _parse_placeholder(start: Cursor) -> tuple[Placeholder, Cursor]:
    """Parse a placeholder; start is positioned on its opening brace."""
    segments: list[list[str]] = [[], [], []]
    part = 0
    depth = 0
    in_quote = False
    cursor = start.advance()
    while not cursor.is_eof:
        char = cursor.current
        cursor = cursor.advance()
        if in_quote:
            segments[part].append(char)
            if char == "'":
                in_quote = False
            continue
        match char:
            case "," if part < 2:
                part += 1
            case "{":
                depth += 1
                segments[part].append(char)
            case "}" if depth == 0:
                return _make_placeholder(start, cursor, segments), cursor
            case "}":
                depth -= 1
                segments[part].append(char)
            case " " if part == 1 and not segments[1]:
                pass
            case "'":
                in_quote = True
                segments[part].append(char)
            case _:
                segments[part].append(char)
    raise MessagePatternError(ErrorTemplate.pattern_unmatched_brace(start.span_to(cursor.pos)))


def _make_placeholder(start: Cursor, end: Cursor, segments: list[list[str]]) -> Placeholder:
    """Validate placeholder segments and build the element."""
    index_text, type_text, style = ("".join(s) for s in segments)
    span = start.span_to(end.pos)
    if not index_text.isascii() or not index_text.isdigit():
        raise MessagePatternError(ErrorTemplate.pattern_invalid_index(index_text, span))
    index = int(index_text)

    type_name = type_text.strip().lower()
    try:
        arg_type = ArgumentType(type_name)
    except ValueError:
        raise MessagePatternError(
            ErrorTemplate.pattern_unknown_type(type_text.strip(), span)
        ) from None

    if arg_type is ArgumentType.CHOICE:
        return Placeholder(index, arg_type, style, parse_choice(style))
    if arg_type is ArgumentType.NONE:
        return Placeholder(index)
    placeholder = Placeholder(index, arg_type, style)
    if arg_type is ArgumentType.NUMBER and placeholder.style_keyword is None:
        _check_number_style(style, span)
    return placeholder


def _check_number_style(style: str, span: SourceSpan) -> None:
    """Reject number styles that are not decimal patterns.

    Babel parses almost any text as a pattern, so a style must also
    contain at least one digit placeholder (0, #, @).
    """
    try:
        number_pattern = babel_numbers.parse_pattern(style)
    except ValueError as e:
        raise MessagePatternError(
            ErrorTemplate.pattern_invalid_number_style(style, str(e), span)
        ) from e
    if number_pattern.int_prec[1] == 0 and number_pattern.frac_prec[1] == 0:
        raise MessagePatternError(
            ErrorTemplate.pattern_invalid_number_style(style, "no digit placeholders", span)
        )


def parse_choice(style: str) -> tuple[ChoiceOption, ...]:
    """Parse a choice style into ordered branches.

    Args:
        style: Choice style text, e.g. "0#no files|1#one file|1<{0} files"

    Returns:
        Branches in source order

    Raises:
        MessagePatternError: If a limit is not numeric, a separator is
            missing, or the style is empty

    Example:
        >>> [(o.limit, o.text) for o in parse_choice("0#none|1<some")]
        [(0.0, 'none'), (1.0000000000000002, 'some')]
    """
    options: list[ChoiceOption] = []
    limit_chars: list[str] = []
    text_chars: list[str] = []
    in_limit = True
    in_quote = False
    limit = 0.0
    cursor = Cursor(style, 0)
    while not cursor.is_eof:
        char = cursor.current
        if char == "'":
            if cursor.peek(1) == "'":
                (limit_chars if in_limit else text_chars).append("'")
                cursor = cursor.advance(2)
                continue
            in_quote = not in_quote
        elif in_quote:
            (limit_chars if in_limit else text_chars).append(char)
        elif in_limit and char in "#<≤":
            limit = _parse_limit(style, "".join(limit_chars))
            if char == "<":
                limit = math.nextafter(limit, math.inf)
            if options and limit <= options[-1].limit:
                raise MessagePatternError(
                    ErrorTemplate.pattern_invalid_choice(style, "limits must be ascending")
                )
            limit_chars.clear()
            in_limit = False
        elif not in_limit and char == "|":
            options.append(_make_option(limit, "".join(text_chars)))
            text_chars.clear()
            in_limit = True
        else:
            (limit_chars if in_limit else text_chars).append(char)
        cursor = cursor.advance()

    if not in_limit:
        options.append(_make_option(limit, "".join(text_chars)))
    elif "".join(limit_chars).strip():
        raise MessagePatternError(
            ErrorTemplate.pattern_invalid_choice(style, "missing '#' or '<' after limit")
        )
    if not options:
        raise MessagePatternError(ErrorTemplate.pattern_invalid_choice(style, "no choices"))
    return tuple(options)


def _parse_limit(style: str, text: str) -> float:
    """Parse a choice limit: a number, '∞' or '-∞'."""
    stripped = text.strip()
    match stripped:
        case "∞":
            return math.inf
        case "-∞":
            return -math.inf
    try:
        return float(stripped)
    except ValueError:
        raise MessagePatternError(
            ErrorTemplate.pattern_invalid_choice(style, f"'{stripped}' is not a number")
        ) from None


def _make_option(limit: float, text: str) -> ChoiceOption:
    """Build a branch, parsing nested placeholders when present."""
    if "{" in text:
        return ChoiceOption(limit, text, parse_pattern(text))
    return ChoiceOption(limit, text)
