"""
Dashboard rendering pipeline.

Loads the stored entries, applies the request's date window and draws the
chart. Nothing is cached between renders.
"""

import logging
from datetime import date

from pydantic import BaseModel

from fitness_tracker.domain.entry import Entry, RenderRequest
from fitness_tracker.infrastructure.drawing.surface import DrawingSurface
from fitness_tracker.infrastructure.storage.entry_store import EntryStore
from fitness_tracker.services.chart import ChartRenderer, ChartResult
from fitness_tracker.services.range_filter import filter_entries
from fitness_tracker.utils.parameters import ChartConfig

logger = logging.getLogger(__name__)


class DashboardView(BaseModel):
    """Outcome of one dashboard render."""

    has_any_data: bool
    visible: list[Entry]
    chart: ChartResult


class DashboardService:
    """Runs store -> window filter -> scaling -> chart for a render request."""

    def __init__(
        self,
        store: EntryStore,
        chart_config: ChartConfig | None = None,
        timezone_str: str = "UTC",
    ) -> None:
        """
        Initialize dashboard service.

        Args:
            store: Entry store to read.
            chart_config: Chart layout and styling.
            timezone_str: Timezone that defines "today" for date windows.
        """
        self.store = store
        self.renderer = ChartRenderer(chart_config)
        self.timezone_str = timezone_str

    def render(
        self, request: RenderRequest, surface: DrawingSurface, today: date | None = None
    ) -> DashboardView:
        """
        Render the chart for a request.

        Args:
            request: Window and metric selection.
            surface: Surface to draw on.
            today: Reference date for the window; defaults to today.

        Returns:
            The visible entries and what the chart drew.
        """
        entries = self.store.load()
        visible = filter_entries(entries, request.window, today, self.timezone_str)

        if not entries:
            logger.info("No entries yet")

        chart = self.renderer.render(visible, request.metrics, surface)
        logger.info(
            f"Rendered {len(visible)} of {len(entries)} entries "
            f"(window={request.window}, metrics={[m.value for m in chart.metrics]})"
        )

        return DashboardView(has_any_data=bool(entries), visible=visible, chart=chart)
