"""
Date window filtering.

Selects the entries that fall inside a trailing window of calendar days
ending today, or all entries.
"""

import logging
import math
from datetime import date

from fitness_tracker.domain.entry import Entry
from fitness_tracker.utils.dates import days_before, iso_date, local_today

logger = logging.getLogger(__name__)

ALL_WINDOW = "all"


def window_days(window: str | int | float | None) -> int | None:
    """
    Interpret a window value as a day offset.

    Args:
        window: "all", a day count, or its text form.

    Returns:
        Number of days before today the window starts, or None when the
        window selects everything. Counts below one give a negative offset,
        which places the start after today.
    """
    if window is None or isinstance(window, bool):
        return None

    if isinstance(window, str):
        text = window.strip()
        if not text or text.lower() == ALL_WINDOW:
            return None
        try:
            days = float(text)
        except ValueError:
            logger.debug(f"Unrecognized window {window!r}, showing all entries")
            return None
    else:
        try:
            days = float(window)
        except (TypeError, OverflowError):
            return None

    if not math.isfinite(days):
        logger.debug(f"Window {window!r} is not finite, showing all entries")
        return None

    return int(days - 1)


def filter_entries(
    entries: list[Entry],
    window: str | int | float | None,
    today: date | None = None,
    timezone_str: str = "UTC",
) -> list[Entry]:
    """
    Keep entries dated within the trailing window.

    Args:
        entries: Entries sorted by date.
        window: "all" or a count of days including today.
        today: Reference date; defaults to today in ``timezone_str``.
        timezone_str: Timezone used to determine today.

    Returns:
        Matching entries in their original order.
    """
    offset = window_days(window)
    if offset is None:
        return list(entries)
    if offset < 0:
        return []

    end = today or local_today(timezone_str)
    try:
        start = days_before(end, offset)
    except OverflowError:
        start = date.min
    start_iso = iso_date(start)
    end_iso = iso_date(end)

    return [e for e in entries if start_iso <= e.date <= end_iso]
