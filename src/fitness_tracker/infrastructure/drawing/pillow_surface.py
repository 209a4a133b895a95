"""
Pillow-backed drawing surface.

Renders into an RGB image sized in device pixels and writes PNG files.
Colors accept anything Pillow understands, including ``#rrggbbaa`` for
translucent strokes blended onto the background.
"""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from fitness_tracker.infrastructure.drawing.surface import Point, device_size, surface_size
from fitness_tracker.utils.exceptions import ExportError

logger = logging.getLogger(__name__)

_ANCHORS = {"left": "ls", "center": "ms", "right": "rs"}


class PillowSurface:
    """
    Drawing surface rendering into a Pillow image.

    Drawing calls take logical coordinates; the surface multiplies them by the
    device pixel ratio.
    """

    def __init__(
        self,
        width: int,
        height: int,
        device_pixel_ratio: float = 1.0,
        font_size: int = 12,
    ) -> None:
        """
        Initialize surface.

        Args:
            width: Logical width in pixels.
            height: Logical height in pixels.
            device_pixel_ratio: Device pixels per logical pixel.
            font_size: Label font size in logical pixels.
        """
        self.width = width
        self.height = height
        self.dpr = device_pixel_ratio
        self.image = Image.new("RGB", device_size(width, height, device_pixel_ratio))
        self.draw = ImageDraw.Draw(self.image, "RGBA")
        self.font = ImageFont.load_default(size=max(1, round(font_size * device_pixel_ratio)))

    @classmethod
    def for_width(
        cls,
        width: int,
        height_ratio: float = 0.52,
        device_pixel_ratio: float = 1.0,
        font_size: int = 12,
    ) -> "PillowSurface":
        """Create a surface whose height follows from its width."""
        logical_width, logical_height = surface_size(width, height_ratio)
        return cls(logical_width, logical_height, device_pixel_ratio, font_size)

    def _scale(self, value: float) -> float:
        return value * self.dpr

    def _point(self, point: Point) -> tuple[float, float]:
        return (point[0] * self.dpr, point[1] * self.dpr)

    def _stroke(self, width: float) -> int:
        return max(1, round(width * self.dpr))

    def clear(self, color: str) -> None:
        self.draw.rectangle((0, 0, self.image.width, self.image.height), fill=color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self.draw.rectangle(
            (self._scale(x), self._scale(y), self._scale(x + w), self._scale(y + h)),
            fill=color,
        )

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: str, width: float = 1
    ) -> None:
        self.draw.rectangle(
            (self._scale(x), self._scale(y), self._scale(x + w), self._scale(y + h)),
            outline=color,
            width=self._stroke(width),
        )

    def line(self, points: list[Point], color: str, width: float = 1) -> None:
        if len(points) < 2:
            return
        self.draw.line(
            [self._point(p) for p in points],
            fill=color,
            width=self._stroke(width),
            joint="curve",
        )

    def circle(self, center: Point, radius: float, color: str) -> None:
        cx, cy = self._point(center)
        r = self._scale(radius)
        self.draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=color)

    def text(self, position: Point, text: str, color: str, align: str = "left") -> None:
        if not text:
            return
        self.draw.text(
            self._point(position), text, fill=color, font=self.font, anchor=_ANCHORS[align]
        )

    def text_width(self, text: str) -> float:
        return self.draw.textlength(text, font=self.font) / self.dpr

    def save(self, path: str | Path) -> Path:
        """
        Write the surface as a PNG file.

        Args:
            path: Destination file.

        Returns:
            The written path.

        Raises:
            ExportError: If the file cannot be written.
        """
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self.image.save(target, format="PNG")
        except OSError as e:
            raise ExportError(f"Failed to write chart to {target}: {e}") from e

        logger.info(f"Wrote chart ({self.image.width}x{self.image.height}) to {target}")
        return target
