"""Physical and interaction constants shared by the canvas, the geometry core
and the template exporter.

Every module reads these from ``CANVAS_RULES`` so the on-screen layout and the
exported template stay at the same scale.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasRules:
    """Canvas constants. Distances are in millimetres unless the name says px."""

    mm_to_px: float = 96.0 / 25.4
    """Logical pixels per millimetre (96 DPI, 1:1 print scale)."""

    corner_radius_mm: float = 5.0
    """Shared corner radius of rounded die-cast enclosures."""

    min_zoom: float = 0.3
    max_zoom: float = 3.0
    zoom_step: float = 0.1

    fit_margin: float = 0.9
    """Fraction of the viewport used by zoom-to-fit."""

    hit_tolerance_px: float = 10.0
    """Extra grab radius around circular drill holes, in logical px."""

    drag_click_suppress_ms: int = 300

    label_offset_px: float = 15.0
    """Gap between a component's visual edge and its dimension label."""

    grid_edge_margin_mm: float = 2.0

    grid_sizes_mm: tuple[float, ...] = (1.0, 2.0, 2.5, 5.0, 10.0)
    default_grid_mm: float = 5.0


CANVAS_RULES = CanvasRules()
