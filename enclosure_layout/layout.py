"""Cross-pattern layout of the five enclosure faces.

Front sits in the middle with Top above, Bottom below, Left and Right beside
it. All rectangles are in logical pixels (millimetres at 96 DPI), unrotated and
unzoomed; the view transform takes it from there.
"""

from dataclasses import dataclass

from .config import CANVAS_RULES
from .models import CornerStyle, EnclosureDescriptor, Rect, Side, SideDimensions
from .units import mm_to_px

FACE_ORDER = (Side.FRONT, Side.TOP, Side.BOTTOM, Side.LEFT, Side.RIGHT)


@dataclass(frozen=True)
class UnwrappedDimensions:
    front: SideDimensions
    top: SideDimensions
    bottom: SideDimensions
    left: SideDimensions
    right: SideDimensions

    def for_side(self, side: Side) -> SideDimensions:
        return getattr(self, side.value.lower())


@dataclass(frozen=True)
class UnwrappedLayout:
    front: Rect
    top: Rect
    bottom: Rect
    left: Rect
    right: Rect
    total_width: float
    total_height: float
    dimensions: UnwrappedDimensions

    def face(self, side: Side) -> Rect:
        return getattr(self, side.value.lower())

    def faces(self) -> list[tuple[Side, Rect]]:
        return [(side, self.face(side)) for side in FACE_ORDER]


def corner_radius(descriptor: EnclosureDescriptor) -> float:
    if descriptor.corner_style == CornerStyle.SHARP:
        return 0.0
    return CANVAS_RULES.corner_radius_mm


def unwrapped_dimensions(descriptor: EnclosureDescriptor) -> UnwrappedDimensions:
    style = descriptor.corner_style
    w, h, d = descriptor.width, descriptor.height, descriptor.depth

    if descriptor.is_trapezoidal and descriptor.front_depth:
        fd = descriptor.front_depth
        side = SideDimensions(d, h, style, is_trapezoidal=True, front_width=fd)
        return UnwrappedDimensions(
            front=SideDimensions(w, h, style),
            top=SideDimensions(w, d, style),
            bottom=SideDimensions(w, fd, style),
            left=side,
            right=side,
        )

    r = corner_radius(descriptor)
    return UnwrappedDimensions(
        front=SideDimensions(w, h, style),
        top=SideDimensions(w - 2 * r, d, style),
        bottom=SideDimensions(w - 2 * r, d, style),
        left=SideDimensions(d, h - 2 * r, style),
        right=SideDimensions(d, h - 2 * r, style),
    )


def compute_layout(descriptor: EnclosureDescriptor) -> UnwrappedLayout:
    dims = unwrapped_dimensions(descriptor)

    front_w, front_h = mm_to_px(dims.front.width), mm_to_px(dims.front.height)
    top_w, top_h = mm_to_px(dims.top.width), mm_to_px(dims.top.height)
    bottom_w, bottom_h = mm_to_px(dims.bottom.width), mm_to_px(dims.bottom.height)
    left_w, left_h = mm_to_px(dims.left.width), mm_to_px(dims.left.height)
    right_w, right_h = mm_to_px(dims.right.width), mm_to_px(dims.right.height)

    top_offset_x = (front_w - top_w) / 2
    bottom_offset_x = (front_w - bottom_w) / 2

    if descriptor.is_trapezoidal and descriptor.front_depth:
        left_offset_y = right_offset_y = 0.0
        total_width = left_w + front_w + right_w
        total_height = top_h + front_h + bottom_h
    elif descriptor.corner_style == CornerStyle.SHARP:
        left_offset_y = right_offset_y = 0.0
        total_width = left_w + max(top_w, front_w, bottom_w) + right_w
        total_height = top_h + max(left_h, front_h, right_h) + bottom_h
    else:
        left_offset_y = (front_h - left_h) / 2
        right_offset_y = (front_h - right_h) / 2
        total_width = left_w + front_w + right_w
        total_height = top_h + front_h + bottom_h

    return UnwrappedLayout(
        front=Rect(left_w, top_h, front_w, front_h),
        top=Rect(left_w + top_offset_x, 0.0, top_w, top_h),
        bottom=Rect(left_w + bottom_offset_x, top_h + front_h, bottom_w, bottom_h),
        left=Rect(0.0, top_h + left_offset_y, left_w, left_h),
        right=Rect(left_w + front_w, top_h + right_offset_y, right_w, right_h),
        total_width=total_width,
        total_height=total_height,
        dimensions=dims,
    )


def face_at(layout: UnwrappedLayout, x: float, y: float) -> Side | None:
    for side, rect in layout.faces():
        if rect.contains(x, y):
            return side
    return None


def to_face_offset(rect: Rect, x: float, y: float) -> tuple[float, float]:
    cx, cy = rect.center
    return (x - cx, y - cy)


def from_face_offset(rect: Rect, dx: float, dy: float) -> tuple[float, float]:
    cx, cy = rect.center
    return (cx + dx, cy + dy)


def trapezoid_half_width(back_width: float, front_width: float, height: float,
                         dy: float) -> float:
    """Allowed half-width of a trapezoidal face at offset ``dy`` from its centre.

    The back edge is at the top of the face (``dy == -height / 2``) and the
    front edge at the bottom; widths in between are linear. Any consistent
    unit works.
    """
    t = (dy + height / 2) / height if height else 0.0
    return back_width / 2 + (front_width - back_width) / 2 * t


def point_in_trapezoid(back_width: float, front_width: float, height: float,
                       dx: float, dy: float) -> bool:
    if abs(dy) > height / 2:
        return False
    return abs(dx) <= trapezoid_half_width(back_width, front_width, height, dy)


def _trapezoid_px(dims: SideDimensions) -> tuple[float, float, float]:
    front = dims.front_width if dims.front_width is not None else dims.width
    return mm_to_px(dims.width), mm_to_px(front), mm_to_px(dims.height)


def inside_trapezoid(dims: SideDimensions, dx: float, dy: float) -> bool:
    """Face-centre offset ``(dx, dy)`` in logical px against a trapezoidal face."""
    back, front, height = _trapezoid_px(dims)
    return point_in_trapezoid(back, front, height, dx, dy)


def trapezoid_points(rect: Rect, dims: SideDimensions) -> list[tuple[float, float]]:
    back, front, _ = _trapezoid_px(dims)
    cx = rect.x + rect.width / 2
    back_half, front_half = back / 2, front / 2
    return [
        (cx - back_half, rect.y),
        (cx + back_half, rect.y),
        (cx + front_half, rect.y + rect.height),
        (cx - front_half, rect.y + rect.height),
    ]
