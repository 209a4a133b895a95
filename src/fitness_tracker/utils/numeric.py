"""
Locale-tolerant numeric parsing.

User input mixes decimal conventions ("82,4" and "82.4") and thousands
separators ("12.345,6" and "12,345.6"). When both a comma and a period are
present, whichever appears last is the decimal separator and every
occurrence of the other is dropped. A lone comma is a decimal comma.

Unparseable text is a missing value, never an error.
"""

import math
import re
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")
_REAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def normalize_separators(text: str) -> str:
    """
    Rewrite a number's separators so the decimal separator is a period.

    Args:
        text: Number text with whitespace already removed.

    Returns:
        Text with thousands separators removed and a period decimal separator.
    """
    has_comma = "," in text
    has_dot = "." in text

    if has_comma and has_dot:
        decimal_sep = "," if text.rfind(",") > text.rfind(".") else "."
        thousands_sep = "." if decimal_sep == "," else ","
        text = text.replace(thousands_sep, "")
        return text.replace(decimal_sep, ".", 1)

    if has_comma:
        return text.replace(",", ".", 1)

    return text


def parse_number(value: Any) -> float | None:
    """
    Parse free-form user input into a finite float.

    Args:
        value: Text (or an already numeric value) to parse.

    Returns:
        The parsed value, or None when the input is empty, malformed or
        not finite.

    Examples:
        >>> parse_number("82,4")
        82.4
        >>> parse_number("12.345,6")
        12345.6
        >>> parse_number("1,234,5") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None

    if not isinstance(value, str):
        return None

    text = _WHITESPACE_RE.sub("", value)
    if not text:
        return None

    text = normalize_separators(text)

    if not _REAL_RE.match(text):
        return None

    try:
        number = float(text)
    except ValueError:
        return None

    return number if math.isfinite(number) else None
