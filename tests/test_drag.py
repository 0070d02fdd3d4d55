"""Tests for drag resolution and the drag gesture state machine."""

import logging

import pytest

from enclosure_layout.catalog import lookup_enclosure
from enclosure_layout.drag import (
    DragContext,
    DragController,
    DragState,
    resolve_move,
    snap_to_grid,
)
from enclosure_layout.layout import compute_layout
from enclosure_layout.models import Side
from enclosure_layout.sides import display_label
from enclosure_layout.units import mm_to_px


@pytest.mark.parametrize("value", [0.0, 3.3, -7.9, 18.9, 123.456, -250.0])
@pytest.mark.parametrize("grid_mm", [1.0, 2.5, 5.0])
def test_snap_is_idempotent(value, grid_mm):
    snapped = snap_to_grid(value, grid_mm)
    assert snap_to_grid(snapped, grid_mm) == snapped


def test_snap_to_nearest_multiple():
    assert snap_to_grid(mm_to_px(7), 5) == pytest.approx(mm_to_px(5))
    assert snap_to_grid(mm_to_px(8), 5) == pytest.approx(mm_to_px(10))
    assert snap_to_grid(mm_to_px(-8), 5) == pytest.approx(mm_to_px(-10))


def test_move_within_front(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    component = component_factory()
    cx, cy = layout.front.center

    result = resolve_move(component, cx + 10, cy - 20, DragContext(layout, standard_enclosure))
    assert result.side == Side.FRONT
    assert (result.x, result.y) == pytest.approx((10, -20))
    assert not result.side_changed


def test_move_onto_other_face(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    component = component_factory()
    cx, cy = layout.right.center

    result = resolve_move(component, cx, cy + 5, DragContext(layout, standard_enclosure))
    assert result.side == Side.RIGHT
    assert result.side_changed
    assert (result.x, result.y) == pytest.approx((0, 5))


def test_move_outside_all_faces_is_rejected(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    assert resolve_move(component_factory(), -5, -5, DragContext(layout, standard_enclosure)) is None


def test_grab_offset_is_kept(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    cx, cy = layout.front.center
    result = resolve_move(
        component_factory(), cx + 30, cy + 30, DragContext(layout, standard_enclosure), grab=(3, 4)
    )
    assert (result.x, result.y) == pytest.approx((27, 26))


def test_move_snaps_to_grid(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    cx, cy = layout.front.center
    ctx = DragContext(layout, standard_enclosure, grid_mm=5)

    result = resolve_move(component_factory(), cx + mm_to_px(6), cy - mm_to_px(11), ctx)
    assert (result.x, result.y) == pytest.approx((mm_to_px(5), mm_to_px(-10)))


def test_drop_stores_physical_face(standard_enclosure, component_factory):
    """After a 90 degree turn the physical Left face is what the user sees as Top."""
    layout = compute_layout(standard_enclosure)
    ctx = DragContext(layout, standard_enclosure)

    result = resolve_move(component_factory(), *layout.left.center, ctx)
    assert display_label(Side.LEFT, 90, True) == Side.TOP
    assert result.side == Side.LEFT


def test_physical_right_face_shows_bottom_when_rotated(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    ctx = DragContext(layout, standard_enclosure)

    result = resolve_move(component_factory(), *layout.right.center, ctx)
    assert result.side == Side.RIGHT
    assert display_label(result.side, 90, standard_enclosure.rotates_labels) == Side.BOTTOM


def test_trapezoid_rejects_outside_point(wedge_enclosure, component_factory, caplog):
    layout = compute_layout(wedge_enclosure)
    ctx = DragContext(layout, wedge_enclosure)
    rect = layout.left
    component = component_factory(side=Side.LEFT)

    # Bottom outer corner: the face is only 25 mm wide at the front edge.
    with caplog.at_level(logging.DEBUG, logger="enclosure_layout.drag"):
        assert resolve_move(component, rect.x + 1, rect.y + rect.height - 1, ctx) is None
    assert "outside trapezoid" in caplog.text

    # Top outer corner is within the 40 mm back edge.
    assert resolve_move(component, rect.x + 1, rect.y + 1, ctx) is not None


def test_trapezoid_rejects_outside_point_on_right_face(wedge_enclosure, component_factory):
    layout = compute_layout(wedge_enclosure)
    ctx = DragContext(layout, wedge_enclosure)
    rect = layout.right
    component = component_factory(side=Side.RIGHT)

    assert resolve_move(component, rect.x + rect.width - 1, rect.y + rect.height - 1, ctx) is None

    result = resolve_move(component, rect.x + rect.width - 1, rect.y + 1, ctx)
    assert result is not None
    assert result.side == Side.RIGHT


def test_trapezoid_check_uses_snapped_position(wedge_enclosure, component_factory):
    layout = compute_layout(wedge_enclosure)
    cx, cy = layout.left.center
    component = component_factory(side=Side.LEFT)
    plain = DragContext(layout, wedge_enclosure)
    gridded = DragContext(layout, wedge_enclosure, grid_mm=10)

    # Inside the face near the back edge, but snaps out to 20 mm.
    point = (cx - mm_to_px(15.5), cy - mm_to_px(30))
    assert resolve_move(component, *point, plain) is not None
    assert resolve_move(component, *point, gridded) is None

    # Past the slanted edge near the front, but snaps back in to (-10, 40) mm.
    point = (cx - mm_to_px(14), cy + mm_to_px(44))
    assert resolve_move(component, *point, plain) is None
    assert resolve_move(component, *point, gridded) is not None


def test_press_on_empty_space_stays_idle(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    drag = DragController()
    assert drag.press(1, 1, layout, [component_factory()]) is None
    assert drag.state is DragState.IDLE
    assert not drag.release()
    assert not drag.just_finished_drag


def test_drag_gesture(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    component = component_factory()
    cx, cy = layout.front.center
    drag = DragController()

    hit = drag.press(cx + 2, cy + 1, layout, [component])
    assert hit is component
    assert drag.dragging and drag.component_id == component.id

    ctx = DragContext(layout, standard_enclosure)
    result = drag.move(cx + 12, cy + 11, [component], ctx)
    assert (result.x, result.y) == pytest.approx((10, 10))

    assert drag.release()
    assert drag.state is DragState.IDLE
    assert drag.just_finished_drag
    assert drag.consume_click()
    assert not drag.consume_click()


def test_just_finished_flag_clears(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    component = component_factory()
    drag = DragController()
    drag.press(*layout.front.center, layout, [component])
    drag.release()

    drag.clear_just_finished()
    assert not drag.consume_click()


def test_move_cancels_when_component_disappears(standard_enclosure, component_factory):
    layout = compute_layout(standard_enclosure)
    component = component_factory()
    drag = DragController()
    drag.press(*layout.front.center, layout, [component])

    assert drag.move(0, 0, [], DragContext(layout, standard_enclosure)) is None
    assert drag.state is DragState.IDLE


def test_move_when_idle_is_noop(component_factory):
    layout = compute_layout(lookup_enclosure("HAM-1590B"))
    drag = DragController()
    ctx = DragContext(layout, lookup_enclosure("HAM-1590B"))
    assert drag.move(*layout.front.center, [component_factory()], ctx) is None
