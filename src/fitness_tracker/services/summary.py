"""Latest-entry summary panel."""

from fitness_tracker.domain.entry import Entry, Metric
from fitness_tracker.services.chart import MISSING_LABEL


def format_value(value: float | None) -> str:
    """Format a stored number, dropping a trailing ``.0``."""
    if value is None:
        return MISSING_LABEL
    if value.is_integer():
        return str(int(value))
    return str(value)


def latest_rows(entries: list[Entry]) -> list[tuple[str, str]]:
    """
    Build the label/value rows describing the most recent entry.

    Args:
        entries: Entries sorted by date.

    Returns:
        Rows for the last entry, or no rows when there are no entries.
    """
    if not entries:
        return []

    last = entries[-1]
    rows = [("Date", last.date)]
    rows.extend((m.panel_label, format_value(last.value_of(m))) for m in Metric)
    rows.append(("Workout", last.workout or MISSING_LABEL))
    rows.append(("Comments", last.comments or MISSING_LABEL))
    return rows
