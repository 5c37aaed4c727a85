"""Canvas camera: pan/zoom transform with animated zoom-to-fit."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from constellation.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewTransform:
    """World point at the canvas centre, and zoom factor (globalScale)."""

    x: float = 0.0
    y: float = 0.0
    k: float = 1.0


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in world coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> "Bounds | None":
        """Bounding box of points, None when there are none."""
        points = list(points)
        if not points:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))


def _ease_out_quad(t: float) -> float:
    return t * (2 - t)


class Camera:
    """Pan/zoom state of the canvas.

    Transitions are sampled with an explicit timestamp so that paint code
    stays a pure function of time.
    """

    def __init__(
        self,
        width: float | None = None,
        height: float | None = None,
        min_zoom: float | None = None,
        max_zoom: float | None = None,
    ) -> None:
        self.width = width or settings.canvas_width
        self.height = height or settings.canvas_height
        self.min_zoom = min_zoom or settings.min_zoom
        self.max_zoom = max_zoom or settings.max_zoom

        self._start = ViewTransform()
        self._target = ViewTransform()
        self._start_ms = 0.0
        self._duration_ms = 0.0

    def clamp_zoom(self, k: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, k))

    def at(self, now_millis: float) -> ViewTransform:
        """Transform at a point in time (mid-transition or settled)."""
        if self._duration_ms <= 0 or now_millis >= self._start_ms + self._duration_ms:
            return self._target
        t = _ease_out_quad(max(0.0, (now_millis - self._start_ms) / self._duration_ms))
        return ViewTransform(
            x=self._start.x + (self._target.x - self._start.x) * t,
            y=self._start.y + (self._target.y - self._start.y) * t,
            k=self._start.k + (self._target.k - self._start.k) * t,
        )

    def move_to(self, target: ViewTransform, duration_ms: float, now_millis: float) -> None:
        """Start a transition from the current transform to target."""
        self._start = self.at(now_millis)
        self._target = ViewTransform(target.x, target.y, self.clamp_zoom(target.k))
        self._start_ms = now_millis
        self._duration_ms = max(0.0, duration_ms)

    def zoom_to_fit(
        self,
        bounds: Bounds | None,
        padding: float,
        duration_ms: float,
        now_millis: float,
    ) -> ViewTransform:
        """Centre on bounds and zoom so they fit inside the padded canvas."""
        if bounds is None:
            return self.at(now_millis)

        available_w = max(1.0, self.width - 2 * padding)
        available_h = max(1.0, self.height - 2 * padding)
        zoom_w = available_w / bounds.width if bounds.width > 0 else self.max_zoom
        zoom_h = available_h / bounds.height if bounds.height > 0 else self.max_zoom

        cx, cy = bounds.center
        target = ViewTransform(x=cx, y=cy, k=self.clamp_zoom(min(zoom_w, zoom_h)))
        self.move_to(target, duration_ms, now_millis)

        logger.info(f"Zoom to fit: center=({cx:.1f}, {cy:.1f}), k={self._target.k:.3f}")
        return self._target

    def world_to_screen(self, x: float, y: float, now_millis: float) -> tuple[float, float]:
        t = self.at(now_millis)
        return ((x - t.x) * t.k + self.width / 2, (y - t.y) * t.k + self.height / 2)

    def screen_to_world(self, px: float, py: float, now_millis: float) -> tuple[float, float]:
        t = self.at(now_millis)
        return ((px - self.width / 2) / t.k + t.x, (py - self.height / 2) / t.k + t.y)
