"""Where dimension labels go, and what they say.

Labels sit at the visual bottom of their component: below it normally, to its
right when the whole canvas is turned 90° (which is "down" on screen). Text is
counter-rotated by the canvas rotation only, so it always reads horizontally.
"""

import re
from dataclasses import dataclass

from .config import CANVAS_RULES
from .hit_test import component_size_px, drill_radius_px
from .models import ComponentSpec, MeasurementUnit


@dataclass(frozen=True)
class LabelShape:
    is_rectangular: bool
    width: float = 0.0
    height: float = 0.0
    radius: float = 0.0

    @classmethod
    def for_spec(cls, spec: ComponentSpec) -> "LabelShape":
        if spec.is_rectangular:
            width, height = component_size_px(spec)
            return cls(True, width=width, height=height)
        return cls(False, radius=drill_radius_px(spec))


@dataclass(frozen=True)
class LabelPlacement:
    x: float
    y: float
    text_angle: float
    """Degrees, as QPainter.rotate() takes them."""


def label_position(
    center_x: float,
    center_y: float,
    component_rotation: int,
    canvas_rotation: int,
    shape: LabelShape,
    offset: float = CANVAS_RULES.label_offset_px,
) -> LabelPlacement:
    if shape.is_rectangular:
        if component_rotation == 90:
            half_w, half_h = shape.height / 2, shape.width / 2
        else:
            half_w, half_h = shape.width / 2, shape.height / 2
    else:
        half_w = half_h = shape.radius

    if canvas_rotation == 90:
        return LabelPlacement(center_x + half_w + offset, center_y, -90.0)
    return LabelPlacement(center_x, center_y + half_h + offset, 0.0)


def shows_swapped(component_rotation: int, canvas_rotation: int) -> bool:
    return (component_rotation + canvas_rotation) % 360 in (90, 270)


def _fmt_mm(value: float) -> str:
    return f"{value:g}mm"


def _swap_imperial(label: str) -> str:
    parts = re.split(r"\s*[×x]\s*", label, maxsplit=1)
    if len(parts) != 2:
        return label
    return f"{parts[1]} × {parts[0]}"


def dimension_text(
    spec: ComponentSpec,
    component_rotation: int,
    canvas_rotation: int,
    unit: MeasurementUnit,
) -> str:
    if not spec.is_rectangular:
        if unit == MeasurementUnit.METRIC:
            return f"{spec.drill_size:.1f}mm"
        return spec.imperial_label

    swapped = shows_swapped(component_rotation, canvas_rotation)
    if unit == MeasurementUnit.IMPERIAL:
        return _swap_imperial(spec.imperial_label) if swapped else spec.imperial_label

    width, height = spec.width or 10, spec.height or 10
    if swapped:
        width, height = height, width
    return f"{_fmt_mm(width)}×{_fmt_mm(height)}"
