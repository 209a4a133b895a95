"""
Calendar date utilities.

Entries are keyed by zero-padded ``YYYY-MM-DD`` strings so that string
comparison is chronological comparison.
"""

from datetime import date, datetime, timedelta

import pytz
from dateutil import parser

from fitness_tracker.utils.exceptions import ValidationError


def iso_date(d: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def local_today(timezone_str: str = "UTC") -> date:
    """
    Get the current calendar date in a timezone.

    Args:
        timezone_str: Timezone string (e.g., "Europe/Madrid").

    Returns:
        Today's date as seen in that timezone.
    """
    tz = pytz.timezone(timezone_str)
    return datetime.now(tz).date()


def today_iso(timezone_str: str = "UTC") -> str:
    """Get today's local date as ``YYYY-MM-DD``."""
    return iso_date(local_today(timezone_str))


def days_before(d: date, days: int) -> date:
    """Return the date ``days`` calendar days before ``d``."""
    return d - timedelta(days=days)


def normalize_date(text: str) -> str:
    """
    Normalize user-entered date text to ``YYYY-MM-DD``.

    Accepts anything dateutil can read as a calendar date, such as
    ``2024-3-4`` or ``2024/03/04``. Year-first order is assumed.

    Args:
        text: Date text.

    Returns:
        Zero-padded ISO date string.

    Raises:
        ValidationError: If the text is not a recognizable date.
    """
    text = (text or "").strip()
    if not text:
        raise ValidationError("Date is required")

    try:
        parsed = parser.parse(text, yearfirst=True, dayfirst=False)
    except (parser.ParserError, ValueError, OverflowError) as e:
        raise ValidationError(f"Invalid date: {text!r}") from e

    return iso_date(parsed.date())
