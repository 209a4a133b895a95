"""
Parser for untyped entry payloads.

Turns decoded JSON (import files, persisted store slots) into validated
entries. Each item is coerced independently: malformed numbers become
absent, missing text becomes "", and items without a string date are
dropped rather than failing the whole payload.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.entry import NUMERIC_FIELDS, TEXT_FIELDS, Entry
from fitness_tracker.utils.exceptions import ImportFailedError

logger = logging.getLogger(__name__)


class EntryParser:
    """
    Parser for entry-like objects of unknown shape.

    Produces entries sorted by date with at most one entry per date.
    """

    def coerce(self, item: Any) -> Entry | None:
        """
        Coerce one entry-like object into an entry.

        Args:
            item: Decoded JSON value.

        Returns:
            The entry, or None when the item has no string ``date``.
        """
        if not isinstance(item, dict):
            return None

        date = item.get("date")
        if not isinstance(date, str):
            return None

        fields: dict[str, Any] = {"date": date}
        for name in NUMERIC_FIELDS + TEXT_FIELDS:
            fields[name] = item.get(name)

        try:
            return Entry(**fields)
        except PydanticValidationError as e:
            logger.debug(f"Dropping entry for {date!r}: {e}")
            return None

    def normalize(self, items: list[Any]) -> list[Entry]:
        """
        Coerce a list of entry-like objects.

        Later items win when two share a date.

        Args:
            items: Decoded JSON array.

        Returns:
            Entries sorted ascending by date, unique per date.
        """
        by_date: dict[str, Entry] = {}
        dropped = 0

        for item in items:
            entry = self.coerce(item)
            if entry is None:
                dropped += 1
                continue
            by_date[entry.date] = entry

        if dropped:
            logger.warning(f"Dropped {dropped} item(s) without a valid date")

        duplicates = len(items) - dropped - len(by_date)
        if duplicates:
            logger.warning(f"Collapsed {duplicates} duplicate date(s), keeping the last")

        return [by_date[date] for date in sorted(by_date)]

    def parse_text(self, text: str) -> list[Entry]:
        """
        Parse a serialized JSON array of entry-like objects.

        Args:
            text: JSON document.

        Returns:
            Normalized entries.

        Raises:
            ImportFailedError: If the text is not JSON or not an array.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFailedError(f"Invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise ImportFailedError(
                f"Expected a JSON array of entries, got {type(data).__name__}"
            )

        return self.normalize(data)
