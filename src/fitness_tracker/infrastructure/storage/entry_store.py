"""
Entry store over a key-value slot.

The whole collection lives in a single slot as a JSON array and is rewritten
on every change. Reads always return entries sorted by date. A collection
left in the legacy slot by an older version is migrated on first load.
"""

import json
import logging

from fitness_tracker.domain.entry import Entry
from fitness_tracker.infrastructure.parsers.entry_parser import EntryParser
from fitness_tracker.infrastructure.storage.kv_store import KeyValueStore
from fitness_tracker.utils.parameters import StorageConfig

logger = logging.getLogger(__name__)


class EntryStore:
    """
    Ordered, date-keyed collection of entries.

    Corrupt stored data is treated as an empty collection.
    """

    def __init__(self, kv_store: KeyValueStore, config: StorageConfig | None = None) -> None:
        """
        Initialize entry store.

        Args:
            kv_store: Slot storage backend.
            config: Storage configuration (slot keys).
        """
        self.kv_store = kv_store
        self.config = config or StorageConfig()
        self.parser = EntryParser()

    def _decode(self, raw: str, key: str) -> list[Entry] | None:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored slot {key!r} is corrupt, ignoring it: {e}")
            return None

        if not isinstance(data, list):
            logger.warning(f"Stored slot {key!r} is not a list, ignoring it")
            return None

        return self.parser.normalize(data)

    def load(self) -> list[Entry]:
        """
        Load all entries.

        Returns:
            Entries sorted ascending by date; empty if nothing is stored or the
            stored data is unreadable.
        """
        raw = self.kv_store.get(self.config.key)

        if raw:
            entries = self._decode(raw, self.config.key)
            return entries if entries is not None else []

        legacy_raw = self.kv_store.get(self.config.legacy_key)
        if legacy_raw and not raw:
            entries = self._decode(legacy_raw, self.config.legacy_key)
            if entries is not None:
                logger.info(
                    f"Migrating {len(entries)} entries from {self.config.legacy_key!r} "
                    f"to {self.config.key!r}"
                )
                self.save_all(entries)
                return entries

        return []

    def save_all(self, entries: list[Entry]) -> None:
        """
        Replace the stored collection.

        Args:
            entries: Complete collection to persist.
        """
        payload = json.dumps([entry.to_dict() for entry in entries])
        self.kv_store.set(self.config.key, payload)
        logger.info(f"Saved {len(entries)} entries")

    def find(self, date: str) -> Entry | None:
        """Get the entry for a date, if any."""
        for entry in self.load():
            if entry.date == date:
                return entry
        return None

    def upsert(self, entry: Entry) -> list[Entry]:
        """
        Insert an entry, or replace the entry with the same date wholesale.

        Args:
            entry: Entry to store.

        Returns:
            The updated collection, sorted by date.
        """
        entries = [e for e in self.load() if e.date != entry.date]
        entries.append(entry)
        entries.sort(key=lambda e: e.date)
        self.save_all(entries)
        return entries

    def delete(self, date: str) -> list[Entry]:
        """
        Remove the entry for a date.

        Args:
            date: Date of the entry to remove.

        Returns:
            The updated collection.
        """
        entries = self.load()
        remaining = [e for e in entries if e.date != date]
        if len(remaining) == len(entries):
            logger.info(f"No entry for {date} to delete")
        self.save_all(remaining)
        return remaining

    def clear(self) -> None:
        """Remove all stored data, including any legacy slot."""
        self.kv_store.delete(self.config.key)
        self.kv_store.delete(self.config.legacy_key)
        logger.info("Cleared all entries")
