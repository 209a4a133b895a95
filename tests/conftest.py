"""Shared test fixtures."""

from typing import Any

import pytest

from fitness_tracker.infrastructure.storage.entry_store import EntryStore
from fitness_tracker.infrastructure.storage.kv_store import InMemoryKeyValueStore


class RecordingSurface:
    """Drawing surface that records calls instead of drawing."""

    def __init__(self, width: int = 1000, height: int = 520) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple[str, Any]] = []

    def clear(self, color: str) -> None:
        self.calls.clear()
        self.calls.append(("clear", color))

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self.calls.append(("fill_rect", (x, y, w, h, color)))

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: str, width: float = 1
    ) -> None:
        self.calls.append(("stroke_rect", (x, y, w, h, color, width)))

    def line(self, points: list[tuple[float, float]], color: str, width: float = 1) -> None:
        self.calls.append(("line", (list(points), color, width)))

    def circle(self, center: tuple[float, float], radius: float, color: str) -> None:
        self.calls.append(("circle", (center, radius, color)))

    def text(
        self, position: tuple[float, float], text: str, color: str, align: str = "left"
    ) -> None:
        self.calls.append(("text", (position, text, color, align)))

    def text_width(self, text: str) -> float:
        return 7.0 * len(text)

    def of(self, kind: str) -> list[Any]:
        return [args for name, args in self.calls if name == kind]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv_store: InMemoryKeyValueStore) -> EntryStore:
    return EntryStore(kv_store)
