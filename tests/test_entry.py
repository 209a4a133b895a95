"""Unit tests for entry models and entry payload parsing."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.entry import Entry, Metric, RenderRequest
from fitness_tracker.infrastructure.parsers.entry_parser import EntryParser
from fitness_tracker.utils.exceptions import ImportFailedError


def test_entry_parses_numeric_text_and_trims_text() -> None:
    """Test that form text is normalized on construction."""
    entry = Entry(
        date="2024-03-10",
        weight="82,4",
        calories="2.150",
        steps="",
        cardio="abc",
        workout="  legs  ",
        comments=None,
    )

    if entry.weight != 82.4:
        raise AssertionError(f"Expected weight=82.4, got {entry.weight}")
    if entry.calories != 2.15:
        raise AssertionError(f"Expected calories=2.15, got {entry.calories}")
    if entry.steps is not None or entry.cardio is not None:
        raise AssertionError("Expected empty and malformed numbers to be absent")
    if entry.workout != "legs":
        raise AssertionError(f"Expected trimmed workout, got {entry.workout!r}")
    if entry.comments != "":
        raise AssertionError(f"Expected empty comments, got {entry.comments!r}")


def test_entry_zero_is_not_absent() -> None:
    """Test that zero is stored as a value."""
    entry = Entry(date="2024-03-10", cardio="0")
    if entry.cardio != 0.0:
        raise AssertionError(f"Expected cardio=0.0, got {entry.cardio}")
    if entry.value_of(Metric.CARDIO) is None:
        raise AssertionError("Expected zero to be present")


def test_entry_is_immutable() -> None:
    """Test that entries cannot be patched in place."""
    entry = Entry(date="2024-03-10", weight=80)
    with pytest.raises(PydanticValidationError):
        entry.weight = 81  # type: ignore[misc]


def test_entry_dict_field_order() -> None:
    """Test persisted field order."""
    keys = list(Entry(date="2024-03-10").to_dict())
    expected = ["date", "calories", "weight", "steps", "cardio", "workout", "comments"]
    if keys != expected:
        raise AssertionError(f"Expected {expected}, got {keys}")


def test_render_request_defaults() -> None:
    """Test render request defaults and window coercion."""
    request = RenderRequest()
    if request.window != "all" or request.metrics != []:
        raise AssertionError(f"Unexpected defaults: {request}")

    request = RenderRequest(window=7, metrics=["steps"])
    if request.window != "7":
        raise AssertionError(f"Expected window '7', got {request.window!r}")
    if request.metrics != [Metric.STEPS]:
        raise AssertionError(f"Expected [steps], got {request.metrics}")

    with pytest.raises(PydanticValidationError):
        RenderRequest(metrics=["heart_rate"])


def test_coerce_import_item() -> None:
    """Test coercion of a sparse import item."""
    entry = EntryParser().coerce({"date": "2024-01-01", "weight": "70,5"})

    if entry is None:
        raise AssertionError("Expected an entry")
    if entry.weight != 70.5:
        raise AssertionError(f"Expected weight=70.5, got {entry.weight}")
    if entry.calories is not None:
        raise AssertionError(f"Expected calories absent, got {entry.calories}")
    if entry.workout != "":
        raise AssertionError(f"Expected empty workout, got {entry.workout!r}")


@pytest.mark.parametrize("item", [None, 5, "2024-01-01", [], {"weight": 70}, {"date": 20240101}])
def test_coerce_drops_items_without_string_date(item: object) -> None:
    """Test that items without a string date are rejected."""
    if EntryParser().coerce(item) is not None:
        raise AssertionError(f"Expected {item!r} to be dropped")


def test_normalize_sorts_and_deduplicates() -> None:
    """Test sorting by date and last-wins for duplicate dates."""
    entries = EntryParser().normalize(
        [
            {"date": "2024-01-03", "weight": 71},
            {"date": "2024-01-01", "weight": 70},
            {"nodate": True},
            {"date": "2024-01-03", "weight": 72},
        ]
    )

    dates = [e.date for e in entries]
    if dates != ["2024-01-01", "2024-01-03"]:
        raise AssertionError(f"Expected sorted unique dates, got {dates}")
    if entries[1].weight != 72:
        raise AssertionError(f"Expected last duplicate to win, got {entries[1].weight}")


def test_parse_text_rejects_non_array() -> None:
    """Test that malformed JSON and non-array payloads fail."""
    parser = EntryParser()
    for text in ('{"date": "2024-01-01"}', "not json", "", "42"):
        with pytest.raises(ImportFailedError):
            parser.parse_text(text)
