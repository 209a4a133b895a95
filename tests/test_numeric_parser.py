"""Unit tests for locale-tolerant numeric parsing."""

import pytest

from fitness_tracker.utils.numeric import normalize_separators, parse_number


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("82,4", 82.4),
        ("82.4", 82.4),
        ("12.345,6", 12345.6),
        ("12,345.6", 12345.6),
        ("1.234.567,89", 1234567.89),
        ("1,234,567.89", 1234567.89),
        ("12 345", 12345.0),
        ("12 345,5", 12345.5),
        ("12\u00a0345,5", 12345.5),
        ("  70  ", 70.0),
        ("-3,5", -3.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
    ],
)
def test_parse_number_accepts_common_formats(text: str, expected: float) -> None:
    """Test parsing of decimal comma, decimal point and grouped numbers."""
    result = parse_number(text)
    if result != expected:
        raise AssertionError(f"parse_number({text!r}): expected {expected}, got {result}")


@pytest.mark.parametrize(
    "text", ["", "   ", " ", "abc", "12kg", "0x1A", "nan", "inf", "Infinity", "1_000", "1e999"]
)
def test_parse_number_rejects_garbage(text: str) -> None:
    """Test that unparseable or non-finite text is absent."""
    result = parse_number(text)
    if result is not None:
        raise AssertionError(f"Expected None for {text!r}, got {result}")


def test_parse_number_repeated_separator_without_other_is_absent() -> None:
    """Test that two commas and no period do not guess a grouping."""
    if normalize_separators("1,234,5") != "1.234,5":
        raise AssertionError("Expected only the first comma to become a period")

    for text in ("1,234,5", "1.234.5"):
        result = parse_number(text)
        if result is not None:
            raise AssertionError(f"Expected None for {text!r}, got {result}")


def test_parse_number_last_separator_wins() -> None:
    """Test that the rightmost separator decides the decimal separator."""
    if normalize_separators("12.345,6") != "12345.6":
        raise AssertionError("Expected EU grouping to be stripped")
    if normalize_separators("12,345.6") != "12345.6":
        raise AssertionError("Expected US grouping to be stripped")


def test_parse_number_non_text_values() -> None:
    """Test numbers, booleans and other types."""
    if parse_number(None) is not None:
        raise AssertionError("Expected None for None")
    if parse_number(82.4) != 82.4:
        raise AssertionError("Expected finite float to pass through")
    if parse_number(8000) != 8000.0:
        raise AssertionError("Expected int to become float")
    if parse_number(float("nan")) is not None:
        raise AssertionError("Expected NaN to be absent")
    if parse_number(True) is not None:
        raise AssertionError("Expected bool to be absent")
    if parse_number([70]) is not None:
        raise AssertionError("Expected list to be absent")


@pytest.mark.parametrize("value", [82.4, 12345.6, 0.1, -7.25, 1e-7, 1e20, 3.0])
def test_parse_number_is_idempotent_on_canonical_text(value: float) -> None:
    """Test that the canonical text of a parsed value parses back to it."""
    result = parse_number(repr(value))
    if result != value:
        raise AssertionError(f"Expected {value}, got {result}")
