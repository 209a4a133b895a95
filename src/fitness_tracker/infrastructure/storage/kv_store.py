"""
Key-value slot storage.

The entry store keeps its whole collection in one named string slot. This
module defines that port and two implementations: one JSON file per key on
disk, and an in-memory dictionary for tests.
"""

import logging
import re
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Protocol

from fitness_tracker.utils.exceptions import StorageError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Port for a process-local persisted string slot store."""

    def get(self, key: str) -> str | None:
        """Return the slot content, or None if the slot does not exist."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write the slot content, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove the slot if present."""
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed slot store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value

    def delete(self, key: str) -> None:
        self.slots.pop(key, None)


class JsonFileKeyValueStore:
    """
    Slot store keeping each key in ``<dir>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the slot file, so readers never see a partial write.
    """

    def __init__(self, directory: str | Path) -> None:
        """
        Initialize file store.

        Args:
            directory: Directory holding the slot files. Created on first write.
        """
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read slot {path}: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=path.parent, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tmp:
                tmp.write(value)
                temp_path = Path(tmp.name)
            temp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write slot {path}: {e}") from e

        logger.debug(f"Wrote slot {path}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete slot {path}: {e}") from e
