"""
Import and export of the entry collection.

Exports are human-readable JSON that import reads back without loss; a CSV
export is offered for spreadsheets. Imports replace the whole collection and
leave it untouched when they fail.
"""

import json
import logging
from pathlib import Path

import pandas as pd

from fitness_tracker.domain.entry import Entry
from fitness_tracker.infrastructure.parsers.entry_parser import EntryParser
from fitness_tracker.infrastructure.storage.entry_store import EntryStore
from fitness_tracker.utils.exceptions import ExportError, ImportFailedError
from fitness_tracker.utils.parameters import ExportConfig

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = list(Entry.model_fields)


class TransferService:
    """Service for moving the entry collection in and out of files."""

    def __init__(self, store: EntryStore, config: ExportConfig | None = None) -> None:
        """
        Initialize transfer service.

        Args:
            store: Entry store to read from and replace.
            config: Export configuration.
        """
        self.store = store
        self.config = config or ExportConfig()
        self.parser = EntryParser()

    def export_text(self) -> str:
        """
        Serialize the stored collection as JSON.

        Returns:
            JSON array of entries; absent values are ``null``.
        """
        entries = self.store.load()
        return json.dumps(
            [e.to_dict() for e in entries], indent=self.config.indent, ensure_ascii=False
        )

    def export_json(self, path: str | Path | None = None) -> Path:
        """
        Write the collection to a JSON file.

        Args:
            path: Destination; defaults to the configured file name.

        Returns:
            The written path.

        Raises:
            ExportError: If the file cannot be written.
        """
        target = Path(path or self.config.filename)
        text = self.export_text()

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Failed to write export to {target}: {e}") from e

        logger.info(f"Exported entries to {target}")
        return target

    def export_csv(self, path: str | Path) -> Path:
        """
        Write the collection to a CSV file, one row per day.

        Args:
            path: Destination file.

        Returns:
            The written path.

        Raises:
            ExportError: If the file cannot be written.
        """
        target = Path(path)
        entries = self.store.load()
        df = pd.DataFrame([e.to_dict() for e in entries], columns=ENTRY_COLUMNS)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(target, index=False, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Failed to write CSV export to {target}: {e}") from e

        logger.info(f"Exported {len(df)} entries to {target}")
        return target

    def import_text(self, text: str) -> list[Entry]:
        """
        Replace the collection with the entries in a JSON document.

        Args:
            text: JSON array of entry-like objects.

        Returns:
            The imported entries.

        Raises:
            ImportFailedError: If the document is not a JSON array.
        """
        entries = self.parser.parse_text(text)
        self.store.save_all(entries)
        logger.info(f"Imported {len(entries)} entries")
        return entries

    def import_file(self, path: str | Path) -> list[Entry]:
        """
        Replace the collection with the entries in a JSON file.

        Args:
            path: File to import.

        Returns:
            The imported entries.

        Raises:
            ImportFailedError: If the file cannot be read or is malformed.
        """
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ImportFailedError(f"Cannot read {source}: {e}") from e

        return self.import_text(text)
