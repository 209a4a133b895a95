"""
Multi-series chart rendering.

Every selected metric is drawn against its own [min, max] domain on a
shared plot area. The y axis therefore carries no numeric labels; each
metric's domain is printed in the legend instead. Missing values break a
series' line rather than being interpolated.
"""

import logging
import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from fitness_tracker.domain.entry import Entry, Metric
from fitness_tracker.infrastructure.drawing.surface import DrawingSurface, Point
from fitness_tracker.services.scaling import Domain, ScaledSeries, SeriesScaler
from fitness_tracker.utils.parameters import ChartConfig

logger = logging.getLogger(__name__)

MISSING_LABEL = "—"

# From this magnitude up, labels use significant digits instead of one decimal
EXPONENT_LABEL_THRESHOLD = 1e15


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def format_range_value(value: float | None) -> str:
    """
    Format a domain bound for the legend.

    Rounds to one decimal; whole numbers are shown without a decimal point.
    Magnitudes of 1e15 and above use up to 15 significant digits.

    >>> format_range_value(82.44)
    '82.4'
    >>> format_range_value(69.97)
    '70'
    """
    if value is None or not math.isfinite(value):
        return MISSING_LABEL
    if abs(value) >= EXPONENT_LABEL_THRESHOLD:
        return f"{value:.15g}"

    rounded = math.floor(value * 10 + 0.5) / 10
    if abs(rounded - round_half_up(rounded)) < 1e-9:
        return str(round_half_up(rounded))
    return str(rounded)


def legend_label(metric: Metric, domain: Domain) -> str:
    """Legend text such as ``Weight (70–82.4)``."""
    return (
        f"{metric.display_name} "
        f"({format_range_value(domain.min)}–{format_range_value(domain.max)})"
    )


def split_segments(points: list[Point | None]) -> list[list[Point]]:
    """
    Split a point sequence into runs of consecutive present points.

    Args:
        points: Points in index order, None where the value is absent.

    Returns:
        Non-empty runs; a run of one point has no line but still gets a marker.
    """
    segments: list[list[Point]] = []
    current: list[Point] = []

    for point in points:
        if point is None:
            if current:
                segments.append(current)
            current = []
            continue
        current.append(point)

    if current:
        segments.append(current)

    return segments


class PlotArea(BaseModel):
    """Plot rectangle inside the surface margins, in logical pixels."""

    left: float
    top: float
    width: float
    height: float

    model_config = ConfigDict(frozen=True)

    def x_at(self, index: int, count: int) -> float:
        """Horizontal position of the entry at ``index`` among ``count`` entries."""
        return self.left + (index / max(1, count - 1)) * self.width

    def y_at(self, normalized: float) -> float:
        """Vertical position of a normalized value; 0 is the bottom edge."""
        return self.top + (1 - normalized) * self.height


class ChartResult(BaseModel):
    """What a render drew: resolved metrics, domains, ticks and point runs."""

    width: int
    height: int
    plot: PlotArea
    metrics: list[Metric]
    domains: dict[Metric, Domain]
    legend: list[str]
    ticks: list[tuple[float, str]]
    segments: dict[Metric, list[list[Point]]]


class ChartRenderer:
    """
    Renders entries as a normalized multi-series line chart.

    Each call redraws the whole surface.
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        """
        Initialize chart renderer.

        Args:
            config: Layout and styling configuration.
        """
        self.config = config or ChartConfig()
        self.scaler = SeriesScaler()

    def plot_area(self, width: float, height: float) -> PlotArea:
        """Compute the plot rectangle for a surface size."""
        cfg = self.config
        return PlotArea(
            left=cfg.pad_left,
            top=cfg.pad_top,
            width=width - cfg.pad_left - cfg.pad_right,
            height=height - cfg.pad_top - cfg.pad_bottom,
        )

    def color_for(self, metric: Metric) -> str:
        return self.config.metric_colors.get(metric.value, metric.color)

    def tick_positions(self, dates: list[str], plot: PlotArea) -> list[tuple[float, str]]:
        """
        Pick evenly spaced x tick labels.

        Args:
            dates: Dates of the plotted entries.
            plot: Plot rectangle.

        Returns:
            (x, label) pairs; labels are ``MM-DD``, or empty when there is no
            entry at the tick.
        """
        n = len(dates)
        tick_count = min(self.config.max_ticks, max(2, n))
        ticks: list[tuple[float, str]] = []

        for i in range(tick_count):
            idx = round_half_up((i / (tick_count - 1)) * (n - 1))
            label = dates[idx][5:] if 0 <= idx < n else ""
            ticks.append((plot.x_at(idx, n), label))

        return ticks

    def series_points(self, series: ScaledSeries, plot: PlotArea) -> list[Point | None]:
        """Map a scaled series to surface points, None where values are absent."""
        n = len(series.normalized)
        return [
            None if v is None else (plot.x_at(i, n), plot.y_at(v))
            for i, v in enumerate(series.normalized)
        ]

    def _draw_grid(self, surface: DrawingSurface, plot: PlotArea) -> None:
        grid_lines = self.config.grid_lines
        for i in range(grid_lines + 1):
            y = plot.top + (i / grid_lines) * plot.height
            surface.line(
                [(plot.left, y), (plot.left + plot.width, y)], self.config.grid_color, 1
            )

    def _draw_ticks(self, surface: DrawingSurface, ticks: list[tuple[float, str]]) -> None:
        baseline = surface.height - self.config.tick_baseline_offset
        for x, label in ticks:
            surface.text((x, baseline), label, self.config.tick_color, align="center")

    def _draw_legend(
        self, surface: DrawingSurface, scaled: dict[Metric, ScaledSeries]
    ) -> list[str]:
        labels: list[str] = []
        lx = self.config.pad_left
        ly = self.config.legend_baseline

        for metric, series in scaled.items():
            surface.fill_rect(lx, ly - 10, 10, 10, self.color_for(metric))
            lx += 14

            label = legend_label(metric, series.domain)
            surface.text((lx, ly), label, self.config.legend_text_color)
            lx += surface.text_width(label) + 16
            labels.append(label)

        return labels

    def _draw_series(
        self, surface: DrawingSurface, metric: Metric, points: list[Point | None]
    ) -> list[list[Point]]:
        cfg = self.config
        color = self.color_for(metric)
        line_width = cfg.primary_line_width if metric.is_primary else cfg.secondary_line_width
        radius = cfg.primary_marker_radius if metric.is_primary else cfg.secondary_marker_radius

        segments = split_segments(points)
        for segment in segments:
            surface.line(segment, color, line_width)

        for segment in segments:
            for point in segment:
                surface.circle(point, radius, color)

        return segments

    def render(
        self,
        entries: list[Entry],
        metrics: Iterable[Metric | str] | None,
        surface: DrawingSurface,
    ) -> ChartResult:
        """
        Draw the chart.

        Args:
            entries: Entries to plot, sorted by date.
            metrics: Selected metrics; empty means the primary metric.
            surface: Surface to draw on; fully redrawn.

        Returns:
            Description of what was drawn.
        """
        cfg = self.config
        scaled = self.scaler.scale(entries, metrics)
        plot = self.plot_area(surface.width, surface.height)
        dates = [e.date for e in entries]

        surface.clear(cfg.background)
        self._draw_grid(surface, plot)

        ticks = self.tick_positions(dates, plot)
        self._draw_ticks(surface, ticks)

        legend = self._draw_legend(surface, scaled)

        segments: dict[Metric, list[list[Point]]] = {}
        for metric, series in scaled.items():
            segments[metric] = self._draw_series(
                surface, metric, self.series_points(series, plot)
            )

        surface.stroke_rect(plot.left, plot.top, plot.width, plot.height, cfg.border_color, 1)

        logger.debug(
            f"Rendered {len(entries)} entries for {[m.value for m in scaled]} "
            f"on {surface.width}x{surface.height}"
        )

        return ChartResult(
            width=surface.width,
            height=surface.height,
            plot=plot,
            metrics=list(scaled),
            domains={m: s.domain for m, s in scaled.items()},
            legend=legend,
            ticks=ticks,
            segments=segments,
        )
