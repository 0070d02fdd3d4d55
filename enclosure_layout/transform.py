"""Screen <-> logical mapping for the unwrapped canvas.

Drawing applies, in order: translate to the viewport centre plus pan, rotate
by the canvas rotation, scale by zoom, then translate by minus half the layout
size. ``screen_to_logical`` undoes exactly those steps.
"""

import logging
import math
from dataclasses import dataclass

from .config import CANVAS_RULES

log = logging.getLogger(__name__)

VALID_ROTATIONS = (0, 90)


def snap_zoom(value: float) -> float:
    snapped = math.floor(value * 10 + 0.5) / 10
    return max(CANVAS_RULES.min_zoom, min(CANVAS_RULES.max_zoom, snapped))


def coerce_rotation(value: float) -> int:
    if value in VALID_ROTATIONS:
        return int(value)
    log.warning("Unsupported canvas rotation %r, using 0", value)
    return 0


def _rotate(x: float, y: float, degrees: float) -> tuple[float, float]:
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return (x * cos - y * sin, x * sin + y * cos)


@dataclass
class ViewTransform:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    rotation: int = 0

    def __post_init__(self):
        self.zoom = max(CANVAS_RULES.min_zoom, min(CANVAS_RULES.max_zoom, self.zoom))
        self.rotation = coerce_rotation(self.rotation)

    def origin(self, viewport_w: float, viewport_h: float) -> tuple[float, float]:
        return (viewport_w / 2 + self.pan_x, viewport_h / 2 + self.pan_y)

    def logical_to_screen(
        self,
        x: float,
        y: float,
        viewport: tuple[float, float],
        content: tuple[float, float],
    ) -> tuple[float, float]:
        ox, oy = self.origin(*viewport)
        dx = (x - content[0] / 2) * self.zoom
        dy = (y - content[1] / 2) * self.zoom
        rx, ry = _rotate(dx, dy, self.rotation)
        return (ox + rx, oy + ry)

    def screen_to_logical(
        self,
        x: float,
        y: float,
        viewport: tuple[float, float],
        content: tuple[float, float],
    ) -> tuple[float, float]:
        ox, oy = self.origin(*viewport)
        rx, ry = _rotate(x - ox, y - oy, -self.rotation)
        return (rx / self.zoom + content[0] / 2, ry / self.zoom + content[1] / 2)

    def apply(self, painter, viewport: tuple[float, float], content: tuple[float, float]):
        """Set up ``painter`` (a QPainter) so logical coordinates can be drawn directly."""
        ox, oy = self.origin(*viewport)
        painter.translate(ox, oy)
        painter.rotate(self.rotation)
        painter.scale(self.zoom, self.zoom)
        painter.translate(-content[0] / 2, -content[1] / 2)

    def set_zoom(self, value: float) -> bool:
        new_zoom = snap_zoom(value)
        if new_zoom == self.zoom:
            return False
        self.zoom = new_zoom
        return True

    def step_zoom(self, steps: int) -> bool:
        return self.set_zoom(self.zoom + steps * CANVAS_RULES.zoom_step)

    def set_rotation(self, value: float):
        self.rotation = coerce_rotation(value)

    def toggle_rotation(self):
        self.rotation = 90 if self.rotation == 0 else 0

    def pan_by(self, dx: float, dy: float):
        self.pan_x += dx
        self.pan_y += dy

    def reset_pan(self):
        self.pan_x = 0.0
        self.pan_y = 0.0

    def fit_zoom(self, viewport: tuple[float, float], content: tuple[float, float]) -> float:
        content_w, content_h = content
        if self.rotation == 90:
            content_w, content_h = content_h, content_w
        if content_w <= 0 or content_h <= 0:
            return 1.0
        scale = min(viewport[0] / content_w, viewport[1] / content_h) * CANVAS_RULES.fit_margin
        fitted = math.floor(scale * 10 + 1e-9) / 10
        return max(CANVAS_RULES.min_zoom, min(CANVAS_RULES.max_zoom, fitted))

    def zoom_to_fit(self, viewport: tuple[float, float], content: tuple[float, float]) -> float:
        self.zoom = self.fit_zoom(viewport, content)
        self.reset_pan()
        return self.zoom
