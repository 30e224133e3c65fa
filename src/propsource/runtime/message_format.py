"""Compiled message patterns rendered with Babel.

A MessagePattern is the compiled form of one message text for one locale.
Compilation parses the text once; rendering walks the parsed elements and
formats each positional argument according to its placeholder type.

Rendering rules:
    {n}               Numbers with locale grouping, datetimes as short date
                      and time, dates as short date, None as "null",
                      anything else via str()
    {n,number,...}    babel.numbers (integer, currency, percent, or a
                      decimal pattern such as "#,##0.00")
    {n,date,...}      babel.dates.format_date (short/medium/long/full or
                      a date pattern such as "yyyy-MM-dd")
    {n,time,...}      babel.dates.format_time (same styles)
    {n,choice,...}    Last branch whose limit <= value; the first branch
                      when the value is below every limit

An argument index beyond the supplied arguments renders the placeholder
literally ("{3}"), so partially supplied messages stay readable.

Thread Safety:
    MessagePattern is immutable after construction. Babel formatting
    functions are thread-safe, so one pattern may be rendered concurrently.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from propsource.constants import FALLBACK_NULL_ARGUMENT
from propsource.enums import ArgumentType
from propsource.locale_utils import Locale, get_babel_locale
from propsource.syntax.pattern import (
    ChoiceOption,
    PatternElement,
    Placeholder,
    TextElement,
    parse_pattern,
)

__all__ = ["MessagePattern"]

logger = logging.getLogger(__name__)

# Used when the locale has no territory or CLDR lists no currency for it.
_UNKNOWN_CURRENCY = "XXX"

_DEFAULT_DATE_STYLE = "medium"


def _is_number(value: object) -> bool:
    """Numbers accepted by number/choice placeholders (bool excluded)."""
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


class MessagePattern:
    """Compiled message pattern bound to a locale.

    Construct with MessagePattern.compile() (raises on invalid patterns) or
    MessagePattern.literal() (renders its text unchanged).

    Example:
        >>> pattern = MessagePattern.compile("Hello, {0}!", Locale("en", "US"))
        >>> pattern.format("World")
        'Hello, World!'
        >>> MessagePattern.compile("{0,number,integer} files", Locale("en")).format(1234.6)
        '1,235 files'
    """

    __slots__ = ("_elements", "_locale", "_source")

    def __init__(self, source: str, locale: Locale, elements: tuple[PatternElement, ...]) -> None:
        """Initialize from already parsed elements.

        Args:
            source: Pattern text as stored in the resource
            locale: Locale used for number and date formatting
            elements: Parsed pattern elements
        """
        self._source = source
        self._locale = locale
        self._elements = elements

    @classmethod
    def compile(cls, source: str, locale: Locale) -> MessagePattern:
        """Parse pattern text.

        Raises:
            MessagePatternError: If the text is not a valid pattern
        """
        return cls(source, locale, parse_pattern(source))

    @classmethod
    def literal(cls, source: str, locale: Locale) -> MessagePattern:
        """Pattern that renders source verbatim, ignoring arguments."""
        return cls(source, locale, (TextElement(source),))

    @property
    def source(self) -> str:
        """Pattern text as stored in the resource."""
        return self._source

    @property
    def locale(self) -> Locale:
        """Locale used for formatting."""
        return self._locale

    @property
    def elements(self) -> tuple[PatternElement, ...]:
        """Parsed elements in source order."""
        return self._elements

    @property
    def argument_count(self) -> int:
        """Number of positional arguments the pattern references (highest index + 1)."""
        return max(
            (e.index + 1 for e in self._elements if isinstance(e, Placeholder)), default=0
        )

    def format(self, *args: Any) -> str:
        """Render the pattern with positional arguments.

        Raises:
            TypeError: If an argument does not suit its placeholder type,
                e.g. a string passed to {0,number}
        """
        return self._render(self._elements, args)

    def __repr__(self) -> str:
        return f"MessagePattern({self._source!r}, locale='{self._locale}')"

    def _render(self, elements: tuple[PatternElement, ...], args: tuple[Any, ...]) -> str:
        parts: list[str] = []
        for element in elements:
            match element:
                case TextElement(value=value):
                    parts.append(value)
                case Placeholder() if element.index >= len(args):
                    parts.append(f"{{{element.index}}}")
                case Placeholder():
                    parts.append(self._format_argument(element, args[element.index], args))
        return "".join(parts)

    def _format_argument(self, placeholder: Placeholder, value: Any, args: tuple[Any, ...]) -> str:
        if value is None:
            return FALLBACK_NULL_ARGUMENT
        match placeholder.type:
            case ArgumentType.NUMBER:
                return self._format_number(placeholder, value)
            case ArgumentType.DATE:
                return self._format_date(placeholder, value)
            case ArgumentType.TIME:
                return self._format_time(placeholder, value)
            case ArgumentType.CHOICE:
                return self._format_choice(placeholder, value, args)
            case _:
                return self._format_untyped(value)

    def _format_untyped(self, value: Any) -> str:
        babel_locale = get_babel_locale(self._locale)
        if _is_number(value):
            return str(babel_numbers.format_decimal(value, locale=babel_locale))
        if isinstance(value, datetime):
            date_text = babel_dates.format_date(value, format="short", locale=babel_locale)
            time_text = babel_dates.format_time(value, format="short", locale=babel_locale)
            return f"{date_text}, {time_text}"
        if isinstance(value, date):
            return str(babel_dates.format_date(value, format="short", locale=babel_locale))
        return str(value)

    def _format_number(self, placeholder: Placeholder, value: Any) -> str:
        if not _is_number(value):
            msg = f"Argument {placeholder.index} must be a number, got {type(value).__name__}"
            raise TypeError(msg)
        babel_locale = get_babel_locale(self._locale)
        match placeholder.style_keyword:
            case "":
                return str(babel_numbers.format_decimal(value, locale=babel_locale))
            case "integer":
                return str(babel_numbers.format_decimal(value, format="#,##0", locale=babel_locale))
            case "percent":
                return str(babel_numbers.format_percent(value, locale=babel_locale))
            case "currency":
                return str(
                    babel_numbers.format_currency(
                        value, self._currency_code(), locale=babel_locale
                    )
                )
            case _:
                return str(
                    babel_numbers.format_decimal(
                        value, format=placeholder.style, locale=babel_locale
                    )
                )

    def _currency_code(self) -> str:
        """Currency of the locale's territory, per CLDR."""
        territory = get_babel_locale(self._locale).territory
        if not territory:
            return _UNKNOWN_CURRENCY
        currencies = babel_numbers.get_territory_currencies(territory)
        return currencies[0] if currencies else _UNKNOWN_CURRENCY

    def _format_date(self, placeholder: Placeholder, value: Any) -> str:
        if not isinstance(value, date):
            msg = f"Argument {placeholder.index} must be a date, got {type(value).__name__}"
            raise TypeError(msg)
        babel_locale = get_babel_locale(self._locale)
        keyword = placeholder.style_keyword
        if keyword is None:
            return str(
                babel_dates.format_datetime(
                    _as_datetime(value), format=placeholder.style, locale=babel_locale
                )
            )
        return str(
            babel_dates.format_date(
                value, format=keyword or _DEFAULT_DATE_STYLE, locale=babel_locale
            )
        )

    def _format_time(self, placeholder: Placeholder, value: Any) -> str:
        if not isinstance(value, date | time):
            msg = f"Argument {placeholder.index} must be a time, got {type(value).__name__}"
            raise TypeError(msg)
        if isinstance(value, date):
            value = _as_datetime(value)
        keyword = placeholder.style_keyword
        return str(
            babel_dates.format_time(
                value,
                format=placeholder.style if keyword is None else (keyword or _DEFAULT_DATE_STYLE),
                locale=get_babel_locale(self._locale),
            )
        )

    def _format_choice(self, placeholder: Placeholder, value: Any, args: tuple[Any, ...]) -> str:
        if not _is_number(value):
            msg = f"Argument {placeholder.index} must be a number, got {type(value).__name__}"
            raise TypeError(msg)
        option = _select_choice(placeholder.choices, float(value))
        if option.elements is None:
            return option.text
        return self._render(option.elements, args)


def _as_datetime(value: date) -> datetime:
    """Promote a plain date to midnight of that day."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def _select_choice(choices: tuple[ChoiceOption, ...], value: float) -> ChoiceOption:
    """Pick the last branch whose limit does not exceed value.

    NaN and values below the first limit select the first branch.
    """
    selected = choices[0]
    if math.isnan(value):
        return selected
    for option in choices:
        if value < option.limit:
            break
        selected = option
    return selected
