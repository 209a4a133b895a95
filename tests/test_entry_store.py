"""Unit tests for the entry store and slot storage."""

import json
from pathlib import Path

from fitness_tracker.domain.entry import Entry
from fitness_tracker.infrastructure.storage.entry_store import EntryStore
from fitness_tracker.infrastructure.storage.kv_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from fitness_tracker.utils.parameters import StorageConfig


def sample_entries() -> list[Entry]:
    return [
        Entry(date="2024-03-01", weight=82.4, calories=2100, steps=None, cardio=30),
        Entry(date="2024-03-02", weight=None, calories=None, steps=9500, workout="run"),
        Entry(date="2024-03-04", weight=81.9, comments="felt good"),
    ]


def test_save_load_round_trip(store: EntryStore) -> None:
    """Test that saving and loading preserves entries and absent values."""
    entries = sample_entries()
    store.save_all(entries)
    loaded = store.load()

    if loaded != entries:
        raise AssertionError(f"Expected {entries}, got {loaded}")
    if loaded[0].steps is not None:
        raise AssertionError("Expected absent steps to stay absent")
    if loaded[1].weight is not None:
        raise AssertionError("Expected absent weight to stay absent")


def test_persisted_absent_values_are_null(
    store: EntryStore, kv_store: InMemoryKeyValueStore
) -> None:
    """Test that absent values are stored as null, not omitted or zero."""
    store.save_all([Entry(date="2024-03-01", weight=80)])
    stored = json.loads(kv_store.slots["ft_entries_v2"])

    if stored[0]["calories"] is not None or "calories" not in stored[0]:
        raise AssertionError(f"Expected explicit null calories, got {stored[0]}")


def test_upsert_replaces_whole_entry(store: EntryStore) -> None:
    """Test that upserting an existing date replaces every field."""
    store.save_all(sample_entries())
    entries = store.upsert(Entry(date="2024-03-01", steps=5000))

    if len(entries) != 3:
        raise AssertionError(f"Expected 3 entries, got {len(entries)}")

    replaced = store.find("2024-03-01")
    if replaced is None:
        raise AssertionError("Expected entry for 2024-03-01")
    if replaced.steps != 5000 or replaced.weight is not None or replaced.cardio is not None:
        raise AssertionError(f"Expected wholesale replacement, got {replaced}")


def test_upsert_inserts_in_date_order(store: EntryStore) -> None:
    """Test that a new date is inserted in ascending order."""
    store.save_all(sample_entries())
    store.upsert(Entry(date="2024-03-03", weight=82.0))
    store.upsert(Entry(date="2024-02-28", weight=83.0))

    dates = [e.date for e in store.load()]
    expected = ["2024-02-28", "2024-03-01", "2024-03-02", "2024-03-03", "2024-03-04"]
    if dates != expected:
        raise AssertionError(f"Expected {expected}, got {dates}")


def test_delete_removes_only_that_date(store: EntryStore) -> None:
    """Test deleting by date."""
    store.save_all(sample_entries())
    remaining = store.delete("2024-03-02")

    if [e.date for e in remaining] != ["2024-03-01", "2024-03-04"]:
        raise AssertionError(f"Unexpected remaining entries: {remaining}")

    store.delete("1999-01-01")
    if len(store.load()) != 2:
        raise AssertionError("Expected deleting a missing date to change nothing")


def test_corrupt_slot_loads_as_empty(kv_store: InMemoryKeyValueStore) -> None:
    """Test that unreadable stored data is treated as an empty collection."""
    kv_store.set("ft_entries_v2", "{not json")
    kv_store.set("ft_entries_v1", json.dumps([{"date": "2024-01-01", "weight": 70}]))

    entries = EntryStore(kv_store).load()

    if entries != []:
        raise AssertionError(f"Expected empty collection, got {entries}")
    if kv_store.get("ft_entries_v2") != "{not json":
        raise AssertionError("Expected corrupt slot to be left as is")


def test_non_list_slot_loads_as_empty(kv_store: InMemoryKeyValueStore) -> None:
    """Test that a stored object instead of an array is ignored."""
    kv_store.set("ft_entries_v2", json.dumps({"date": "2024-01-01"}))
    if EntryStore(kv_store).load() != []:
        raise AssertionError("Expected empty collection")


def test_legacy_slot_is_migrated(kv_store: InMemoryKeyValueStore) -> None:
    """Test migration of the legacy slot when the current slot is absent."""
    legacy = [
        {"date": "2024-01-02", "weight": "70,5", "workout": " push "},
        {"date": "2024-01-01", "steps": "8.000,0"},
        {"weight": 99},
    ]
    kv_store.set("ft_entries_v1", json.dumps(legacy))

    entries = EntryStore(kv_store).load()

    if [e.date for e in entries] != ["2024-01-01", "2024-01-02"]:
        raise AssertionError(f"Unexpected migrated dates: {entries}")
    if entries[0].steps != 8000.0 or entries[1].weight != 70.5:
        raise AssertionError(f"Unexpected migrated values: {entries}")
    if entries[1].workout != "push":
        raise AssertionError(f"Expected trimmed workout, got {entries[1].workout!r}")

    migrated = json.loads(kv_store.get("ft_entries_v2") or "[]")
    if len(migrated) != 2:
        raise AssertionError(f"Expected migrated slot to be written, got {migrated}")


def test_clear_removes_current_and_legacy_slots(kv_store: InMemoryKeyValueStore) -> None:
    """Test that clearing does not resurrect legacy data on next load."""
    kv_store.set("ft_entries_v1", json.dumps([{"date": "2024-01-01"}]))
    store = EntryStore(kv_store)
    store.load()
    store.clear()

    if store.load() != []:
        raise AssertionError("Expected no entries after clear")
    if kv_store.slots:
        raise AssertionError(f"Expected all slots removed, got {kv_store.slots}")


def test_custom_slot_keys() -> None:
    """Test configured slot keys."""
    kv_store = InMemoryKeyValueStore()
    store = EntryStore(kv_store, StorageConfig(key="entries", legacy_key="old"))
    store.save_all([Entry(date="2024-01-01")])

    if "entries" not in kv_store.slots:
        raise AssertionError(f"Expected 'entries' slot, got {list(kv_store.slots)}")


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    """Test the file-backed slot store."""
    kv_store = JsonFileKeyValueStore(tmp_path / "data")

    if kv_store.get("ft_entries_v2") is not None:
        raise AssertionError("Expected missing slot to read as None")

    store = EntryStore(kv_store)
    store.save_all(sample_entries())

    slot_file = tmp_path / "data" / "ft_entries_v2.json"
    if not slot_file.exists():
        raise AssertionError(f"Expected slot file {slot_file}")
    if list((tmp_path / "data").glob("*.tmp")):
        raise AssertionError("Expected no temporary files left behind")

    if EntryStore(JsonFileKeyValueStore(tmp_path / "data")).load() != sample_entries():
        raise AssertionError("Expected entries to survive a new store instance")

    kv_store.delete("ft_entries_v2")
    kv_store.delete("ft_entries_v2")
    if slot_file.exists():
        raise AssertionError("Expected slot file removed")
