from __future__ import annotations
import logging
from typing import Optional, Tuple

from .utils import (CANVAS_W, CANVAS_H, MIN_ZOOM, MAX_ZOOM, ZOOM_STEP,
                    VIEWPORT_W, VIEWPORT_H, clamp)

logger = logging.getLogger(__name__)


class Camera:
    """Pan/zoom over the fixed canvas.

    A viewport point (vx, vy) shows canvas point ((vx - pan_x) / zoom, (vy - pan_y) / zoom).
    Pan is clamped after every mutation so the scaled canvas always covers the viewport.
    """

    def __init__(self, viewport_w: float = VIEWPORT_W, viewport_h: float = VIEWPORT_H,
                 canvas_w: float = CANVAS_W, canvas_h: float = CANVAS_H):
        self.canvas_w = float(canvas_w)
        self.canvas_h = float(canvas_h)
        self.viewport_w = float(viewport_w)
        self.viewport_h = float(viewport_h)
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom = 1.0
        self._anchor: Optional[Tuple[float, float]] = None
        self._moved = False
        self._drag_ended = False

    # ---- conversions ----
    def to_canvas(self, vx: float, vy: float) -> Tuple[float, float]:
        return (vx - self.pan_x) / self.zoom, (vy - self.pan_y) / self.zoom

    def to_viewport(self, cx: float, cy: float) -> Tuple[float, float]:
        return cx * self.zoom + self.pan_x, cy * self.zoom + self.pan_y

    # ---- bounds ----
    def pan_bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        # When the scaled canvas is smaller than the viewport the lower bound
        # would exceed 0; collapse the range to 0 so pan never goes positive.
        min_x = min(self.viewport_w - self.canvas_w * self.zoom, 0.0)
        min_y = min(self.viewport_h - self.canvas_h * self.zoom, 0.0)
        return (min_x, 0.0), (min_y, 0.0)

    def constrain(self):
        (min_x, max_x), (min_y, max_y) = self.pan_bounds()
        self.pan_x = clamp(self.pan_x, min_x, max_x)
        self.pan_y = clamp(self.pan_y, min_y, max_y)

    def resize(self, viewport_w: float, viewport_h: float):
        self.viewport_w = float(viewport_w)
        self.viewport_h = float(viewport_h)
        self.constrain()

    def set_pan(self, pan_x: float, pan_y: float):
        self.pan_x, self.pan_y = float(pan_x), float(pan_y)
        self.constrain()

    # ---- zoom ----
    def zoom_at(self, vx: float, vy: float, delta_y: float) -> float:
        """Wheel zoom anchored at the pointer. Negative delta (wheel up) zooms in."""
        cx, cy = self.to_canvas(vx, vy)
        step = ZOOM_STEP if delta_y < 0 else -ZOOM_STEP
        new_zoom = clamp(round(self.zoom + step, 6), MIN_ZOOM, MAX_ZOOM)
        self.pan_x = vx - cx * new_zoom
        self.pan_y = vy - cy * new_zoom
        self.zoom = new_zoom
        self.constrain()
        logger.debug("zoom=%.2f pan=(%.1f, %.1f)", self.zoom, self.pan_x, self.pan_y)
        return self.zoom

    # ---- pan gesture ----
    @property
    def is_panning(self) -> bool:
        return self._anchor is not None

    def begin_pan(self, px: float, py: float):
        self._anchor = (px - self.pan_x, py - self.pan_y)
        self._moved = False
        self._drag_ended = False

    def drag_to(self, px: float, py: float):
        if self._anchor is None:
            return
        ax, ay = self._anchor
        new_x, new_y = px - ax, py - ay
        if new_x != self.pan_x or new_y != self.pan_y:
            self._moved = True
        self.pan_x, self.pan_y = new_x, new_y
        self.constrain()

    def end_pan(self) -> bool:
        """Finish the gesture; True when the pointer actually dragged."""
        moved = self._anchor is not None and self._moved
        self._anchor = None
        self._moved = False
        self._drag_ended = moved
        return moved

    def consume_drag(self) -> bool:
        """True once after a drag ended, so the click that closes it is not a placement."""
        ended, self._drag_ended = self._drag_ended, False
        return ended
