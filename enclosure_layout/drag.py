"""Pointer-drag handling for placed components.

A gesture goes Idle -> Dragging(component) -> Idle. Releasing after a drag
raises ``just_finished_drag`` so the click Qt delivers right after the release
does not count as a click on empty canvas; the canvas clears it with a
single-shot timer.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .hit_test import component_at
from .layout import UnwrappedLayout, face_at, inside_trapezoid, to_face_offset
from .models import EnclosureDescriptor, PlacedComponent, Side
from .units import mm_to_px

log = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragContext:
    layout: UnwrappedLayout
    descriptor: EnclosureDescriptor
    grid_mm: float | None = None


@dataclass(frozen=True)
class MoveResult:
    component_id: str
    x: float
    y: float
    side: Side
    side_changed: bool


def snap_to_grid(value: float, grid_mm: float) -> float:
    step = mm_to_px(grid_mm)
    if step <= 0:
        return value
    return math.floor(value / step + 0.5) * step


def placement_allowed(side: Side, dx: float, dy: float, ctx: DragContext) -> bool:
    descriptor = ctx.descriptor
    if side not in (Side.LEFT, Side.RIGHT):
        return True
    if not (descriptor.is_trapezoidal and descriptor.front_depth):
        return True
    return inside_trapezoid(ctx.layout.dimensions.for_side(side), dx, dy)


def resolve_move(
    component: PlacedComponent,
    x: float,
    y: float,
    ctx: DragContext,
    grab: tuple[float, float] = (0.0, 0.0),
) -> MoveResult | None:
    """New face and face-centre offset for ``component`` with the pointer at
    logical ``(x, y)``, or None when the position is not allowed."""
    face = face_at(ctx.layout, x, y)
    if face is None:
        return None

    dx, dy = to_face_offset(ctx.layout.face(face), x, y)
    new_x, new_y = dx - grab[0], dy - grab[1]
    if ctx.grid_mm:
        new_x = snap_to_grid(new_x, ctx.grid_mm)
        new_y = snap_to_grid(new_y, ctx.grid_mm)

    # Faces are laid out unrotated in logical space, so the face under the
    # pointer is already the physical side whatever label it shows.
    side = face

    if not placement_allowed(side, new_x, new_y, ctx):
        log.debug("Rejected move of %s outside trapezoid %s", component.id, side.value)
        return None

    return MoveResult(
        component_id=component.id,
        x=new_x,
        y=new_y,
        side=side,
        side_changed=side != component.side,
    )


class DragController:
    def __init__(self):
        self.state = DragState.IDLE
        self.component_id: str | None = None
        self.just_finished_drag = False
        self._grab = (0.0, 0.0)

    @property
    def dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def press(
        self,
        x: float,
        y: float,
        layout: UnwrappedLayout,
        components: Iterable[PlacedComponent],
    ) -> PlacedComponent | None:
        hit = component_at(x, y, layout, components)
        if hit is None:
            return None

        fx, fy = to_face_offset(layout.face(hit.side), x, y)
        self._grab = (fx - hit.x, fy - hit.y)
        self.component_id = hit.id
        self.state = DragState.DRAGGING
        return hit

    def move(
        self,
        x: float,
        y: float,
        components: Iterable[PlacedComponent],
        ctx: DragContext,
    ) -> MoveResult | None:
        if not self.dragging:
            return None

        component = next((c for c in components if c.id == self.component_id), None)
        if component is None:
            # Deleted mid-drag.
            self.cancel()
            return None

        return resolve_move(component, x, y, ctx, self._grab)

    def release(self) -> bool:
        was_dragging = self.dragging
        self.cancel()
        if was_dragging:
            self.just_finished_drag = True
        return was_dragging

    def cancel(self):
        self.state = DragState.IDLE
        self.component_id = None
        self._grab = (0.0, 0.0)

    def clear_just_finished(self):
        self.just_finished_drag = False

    def consume_click(self) -> bool:
        if self.just_finished_drag:
            self.just_finished_drag = False
            return True
        return False
