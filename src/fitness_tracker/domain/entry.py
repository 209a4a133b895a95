"""
Daily entry domain models.

This module defines the per-day record, the chartable metrics and the
request object that drives a chart render.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitness_tracker.utils.numeric import parse_number


class Metric(str, Enum):
    """Enumeration of chartable numeric metrics, in canonical order."""

    WEIGHT = "weight"
    CALORIES = "calories"
    STEPS = "steps"
    CARDIO = "cardio"

    @property
    def display_name(self) -> str:
        """Short name shown in the chart legend."""
        return METRIC_STYLES[self]["name"]

    @property
    def panel_label(self) -> str:
        """Label with unit shown in the latest-entry panel."""
        return METRIC_STYLES[self]["label"]

    @property
    def color(self) -> str:
        """Default series color."""
        return METRIC_STYLES[self]["color"]

    @property
    def is_primary(self) -> bool:
        """Whether the metric is drawn with the heavier primary stroke."""
        return self is PRIMARY_METRIC


METRIC_STYLES: dict[Metric, dict[str, str]] = {
    Metric.WEIGHT: {"name": "Weight", "label": "Weight (kg)", "color": "#2f81f7"},
    Metric.CALORIES: {"name": "Calories", "label": "Calories", "color": "#2ee59d"},
    Metric.STEPS: {"name": "Steps", "label": "Steps", "color": "#ffd166"},
    Metric.CARDIO: {"name": "Cardio", "label": "Cardio (min)", "color": "#ff4d6d"},
}

PRIMARY_METRIC = Metric.WEIGHT

NUMERIC_FIELDS = tuple(m.value for m in Metric)
TEXT_FIELDS = ("workout", "comments")


class Entry(BaseModel):
    """
    One day of measurements.

    Numeric fields are either finite floats or None (absent); absence is
    distinct from zero. Text fields are trimmed and default to "".
    Entries are immutable: edits replace the whole entry.
    """

    date: str = Field(description="Calendar date, YYYY-MM-DD")
    calories: float | None = Field(None, description="Energy intake in kcal")
    weight: float | None = Field(None, description="Body weight in kilograms")
    steps: float | None = Field(None, description="Step count")
    cardio: float | None = Field(None, description="Cardio duration in minutes")
    workout: str = Field("", description="Workout notes")
    comments: str = Field("", description="Free-form comments")

    model_config = ConfigDict(frozen=True)

    @field_validator("calories", "weight", "steps", "cardio", mode="before")
    @classmethod
    def _parse_numeric(cls, value: Any) -> float | None:
        return parse_number(value)

    @field_validator("workout", "comments", mode="before")
    @classmethod
    def _clean_text(cls, value: Any) -> str:
        if not value:
            return ""
        return str(value).strip()

    def value_of(self, metric: Metric) -> float | None:
        """Get the value recorded for a metric."""
        return getattr(self, Metric(metric).value)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the entry to a plain dictionary.

        Returns:
            Dictionary with fields in persisted order; absent values are None.
        """
        return self.model_dump()


class RenderRequest(BaseModel):
    """
    What to chart: a date window and a set of metrics.

    ``window`` is "all" or a trailing day count. An empty ``metrics`` list is
    allowed here; the scaler substitutes the primary metric.
    """

    window: str = "all"
    metrics: list[Metric] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("window", mode="before")
    @classmethod
    def _window_to_text(cls, value: Any) -> str:
        if value is None:
            return "all"
        return str(value).strip()
