# -*- coding: utf-8 -*-
"""Number codec: free-form amount text <-> canonical Decimal, plus display formats.

Display text uses "." as the thousands separator and "," as the decimal
separator ("8.698,932"). Decoding has to cope with both that format and plain
"12345.123" style input, so a period-only string is resolved heuristically:

- a well-formed thousands grouping ("5.400", "1.234.567") is an integer;
- otherwise exactly three digits after the last period means a decimal point
  ("12345.123");
- anything else means thousands separators ("12.5" -> 125).

"123.456" is genuinely ambiguous and decodes to 123456.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")

_WHITESPACE_RE = re.compile(r"\s+")
# Longest leading numeric prefix, the way a lenient float parser reads text.
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_THREE_DIGITS_RE = re.compile(r"[0-9]{3}")
# "5.400", "1.234.567": every group after the lead is exactly three digits.
_GROUPED_THOUSANDS_RE = re.compile(r"[0-9]{1,3}(?:\.[0-9]{3})+")


def _lenient_decimal(text: str) -> Decimal | None:
    """Read the leading number of text ("12abc" -> 12). None if there is none."""
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return None
    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _coerce_number(value: Any) -> Decimal | None:
    """Convert a numeric value (int, float, Decimal) to Decimal. None if not finite."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # repr gives the shortest text that round-trips, e.g. 1234.5 not 1234.49999...
        number = Decimal(repr(value))
        return number if number.is_finite() else None
    return None


def _normalize_separators(text: str) -> str:
    """Rewrite mixed thousand/decimal separators into plain "1234.56" form."""
    has_comma = "," in text
    has_period = "." in text

    if has_comma and has_period:
        # "1.234,56": periods group thousands, the comma is the decimal separator
        return text.replace(".", "").replace(",", ".")
    if has_comma:
        return text.replace(".", "").replace(",", ".")
    if has_period:
        if _GROUPED_THOUSANDS_RE.fullmatch(text.lstrip("+")):
            return text.replace(".", "")
        tail = text.rsplit(".", 1)[1]
        if _THREE_DIGITS_RE.fullmatch(tail):
            return text
        return text.replace(".", "")
    return text


def parse_amount(value: Any) -> Decimal:
    """Decode free-form amount text into a non-negative Decimal.

    Never raises: None, unparseable text, non-finite and negative values all
    decode to 0.

    Examples:
        parse_amount("1.234,56")  -> Decimal("1234.56")
        parse_amount("5.400")     -> Decimal("5400")
        parse_amount("12345.123") -> Decimal("12345.123")
        parse_amount(" 1 500 ")   -> Decimal("1500")
    """
    if value is None:
        return ZERO

    number: Decimal | None
    if isinstance(value, str):
        text = _WHITESPACE_RE.sub("", value.strip())
        number = _lenient_decimal(_normalize_separators(text))
    else:
        number = _coerce_number(value)

    if number is None or number <= 0:
        return ZERO
    return number


def canonical_text(number: Decimal) -> str:
    """Plain positional text for a Decimal, trailing fractional zeros removed.

    Decimal("5.4E+3") -> "5400", Decimal("1234.500") -> "1234.5".
    """
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def _group_thousands(integer_part: str) -> str:
    """Insert "." between groups of three digits ("1234567" -> "1.234.567")."""
    sign = ""
    if integer_part.startswith("-"):
        sign, integer_part = "-", integer_part[1:]
    return sign + f"{int(integer_part or '0'):,}".replace(",", ".")


def _join_display(text: str) -> str:
    integer_part, _, fraction = text.partition(".")
    grouped = _group_thousands(integer_part)
    return f"{grouped},{fraction}" if fraction else grouped


def _display_number(value: Any) -> Decimal | None:
    if isinstance(value, str):
        return parse_amount(value)
    return _coerce_number(value)


def format_grouped(value: Any) -> str:
    """Format a value as "8.698,932": grouped integer part, "," before the fraction.

    The fraction is not rounded; it is whatever digits the value carries
    (trailing zeros dropped). Falsy or unparseable input yields "0". String
    input is decoded with parse_amount first.
    """
    if not value:
        return "0"
    number = _display_number(value)
    if number is None:
        return "0"
    return _join_display(canonical_text(number))


def format_limited(value: Any, max_decimals: int = 3) -> str:
    """Format a value rounded half-up to at most max_decimals fractional digits.

    Trailing fractional zeros are stripped and the "," is dropped when no
    fraction remains: format_limited(1234.5004) -> "1.234,5",
    format_limited(2.0) -> "2". Falsy or unparseable input yields "0".
    """
    if not value:
        return "0"
    number = _display_number(value)
    if number is None or number == 0:
        return "0"
    places = max(0, int(max_decimals))
    try:
        rounded = number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the context precision allows; show the value unrounded.
        rounded = number
    return _join_display(canonical_text(rounded))
