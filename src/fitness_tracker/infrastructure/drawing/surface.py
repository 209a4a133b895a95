"""
Drawing surface port.

All coordinates are logical pixels. A surface backed by a denser device
(device pixel ratio above 1) scales them itself.
"""

import math
from typing import Protocol

Point = tuple[float, float]


def surface_size(width: float, height_ratio: float = 0.52) -> tuple[int, int]:
    """
    Compute the logical size of a chart surface from its width.

    Args:
        width: Logical width in pixels.
        height_ratio: Height as a fraction of the width.

    Returns:
        (width, height) in logical pixels.
    """
    logical_width = int(width)
    return logical_width, int(math.floor(logical_width * height_ratio + 0.5))


def device_size(width: int, height: int, device_pixel_ratio: float) -> tuple[int, int]:
    """Scale a logical size to device pixels, rounding down."""
    return (
        int(math.floor(width * device_pixel_ratio)),
        int(math.floor(height * device_pixel_ratio)),
    )


class DrawingSurface(Protocol):
    """Minimal 2D drawing API used by the chart renderer."""

    width: int
    height: int

    def clear(self, color: str) -> None:
        """Fill the whole surface, discarding previous content."""
        ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        ...

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: str, width: float = 1
    ) -> None:
        ...

    def line(self, points: list[Point], color: str, width: float = 1) -> None:
        """Stroke an open polyline through the points."""
        ...

    def circle(self, center: Point, radius: float, color: str) -> None:
        """Fill a circle."""
        ...

    def text(self, position: Point, text: str, color: str, align: str = "left") -> None:
        """Draw text with its baseline at ``position``; align is left or center."""
        ...

    def text_width(self, text: str) -> float:
        """Measure text width in logical pixels."""
        ...
