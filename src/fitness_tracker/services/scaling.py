"""
Per-metric series scaling.

Each metric gets its own domain so that kilograms, kilocalories, steps and
minutes can share one plot. Values map linearly onto [0, 1]; missing values
stay missing and show up as gaps.
"""

import logging
import math
import sys
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from fitness_tracker.domain.entry import PRIMARY_METRIC, Entry, Metric

logger = logging.getLogger(__name__)

# Relative widening for flat series too large for a unit step to register
FLAT_RELATIVE_PAD = 1e-9


class Domain(BaseModel):
    """Value range of one series; always has a non-zero width."""

    min: float
    max: float

    model_config = ConfigDict(frozen=True)

    @property
    def span(self) -> float:
        return self.max - self.min


class ScaledSeries(BaseModel):
    """A metric's raw values, normalized values and domain, aligned with entries."""

    metric: Metric
    dates: list[str]
    values: list[float | None]
    normalized: list[float | None]
    domain: Domain

    model_config = ConfigDict(frozen=True)


def extract_values(entries: Iterable[Entry], metric: Metric) -> list[float | None]:
    """Get a metric's values in entry order, keeping absent positions."""
    return [entry.value_of(metric) for entry in entries]


def compute_domain(values: Iterable[float | None]) -> Domain:
    """
    Compute the domain of the present values.

    Args:
        values: Series values, None for absent.

    Returns:
        {0, 1} when no value is present; {v-1, v+1} when all values equal v
        (a proportional step for magnitudes where 1 is below float precision);
        otherwise the observed minimum and maximum.
    """
    present = [v for v in values if v is not None]
    if not present:
        return Domain(min=0.0, max=1.0)

    low = min(present)
    high = max(present)
    if low == high:
        pad = max(1.0, abs(low) * FLAT_RELATIVE_PAD)
        low = max(low - pad, -sys.float_info.max)
        high = min(high + pad, sys.float_info.max)

    return Domain(min=low, max=high)


def normalize(values: Iterable[float | None], domain: Domain) -> list[float | None]:
    """Map values onto [0, 1] within the domain; None stays None."""
    span = domain.span
    if not math.isinf(span):
        return [None if v is None else (v - domain.min) / span for v in values]

    # The bounds differ by more than the largest float; scale everything by half
    low = domain.min / 2
    span = domain.max / 2 - low
    return [None if v is None else (v / 2 - low) / span for v in values]


def resolve_metrics(metrics: Iterable[Metric | str] | None) -> list[Metric]:
    """
    Normalize a metric selection.

    Args:
        metrics: Requested metrics, in any order, possibly repeated.

    Returns:
        Unique metrics in canonical order. An empty selection resolves to the
        primary metric.
    """
    requested = {Metric(m) for m in metrics or ()}
    resolved = [m for m in Metric if m in requested]

    if not resolved:
        logger.info(f"No metrics selected, defaulting to {PRIMARY_METRIC.value}")
        resolved = [PRIMARY_METRIC]

    return resolved


class SeriesScaler:
    """Builds scaled series for a set of metrics over a list of entries."""

    def scale_metric(self, entries: list[Entry], metric: Metric) -> ScaledSeries:
        """
        Scale a single metric.

        Args:
            entries: Entries in display order.
            metric: Metric to extract.

        Returns:
            Scaled series aligned with ``entries``.
        """
        values = extract_values(entries, metric)
        domain = compute_domain(values)

        return ScaledSeries(
            metric=metric,
            dates=[e.date for e in entries],
            values=values,
            normalized=normalize(values, domain),
            domain=domain,
        )

    def scale(
        self, entries: list[Entry], metrics: Iterable[Metric | str] | None
    ) -> dict[Metric, ScaledSeries]:
        """
        Scale every selected metric.

        Args:
            entries: Entries in display order.
            metrics: Selected metrics; an empty selection means the primary metric.

        Returns:
            Scaled series keyed by metric, in canonical metric order.
        """
        return {m: self.scale_metric(entries, m) for m in resolve_metrics(metrics)}
