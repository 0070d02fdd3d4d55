"""Tests for the unwrapped cross layout."""

from itertools import combinations

import pytest

from enclosure_layout.catalog import ENCLOSURE_TYPES
from enclosure_layout.layout import (
    FACE_ORDER,
    compute_layout,
    face_at,
    from_face_offset,
    inside_trapezoid,
    point_in_trapezoid,
    to_face_offset,
    trapezoid_half_width,
    trapezoid_points,
)
from enclosure_layout.models import Side
from enclosure_layout.units import mm_to_px


@pytest.mark.parametrize("key", sorted(ENCLOSURE_TYPES))
def test_faces_never_overlap(key):
    layout = compute_layout(ENCLOSURE_TYPES[key])
    faces = layout.faces()
    assert [side for side, _ in faces] == list(FACE_ORDER)
    for _, rect in faces:
        assert rect.width > 0 and rect.height > 0
    for (a_side, a), (b_side, b) in combinations(faces, 2):
        assert not a.overlaps(b), f"{key}: {a_side.value} overlaps {b_side.value}"


def test_rounded_enclosure_faces(standard_enclosure):
    layout = compute_layout(standard_enclosure)

    assert layout.top.width == pytest.approx(mm_to_px(50))
    assert layout.bottom.width == pytest.approx(mm_to_px(50))
    assert layout.left.height == pytest.approx(mm_to_px(103))
    assert layout.right.height == pytest.approx(mm_to_px(103))
    assert layout.front.x == pytest.approx(layout.left.width)
    assert layout.front.y == pytest.approx(layout.top.height)
    assert layout.total_width == pytest.approx(mm_to_px(30 + 60 + 30))
    assert layout.total_height == pytest.approx(mm_to_px(30 + 113 + 30))


def test_rounded_side_faces_are_centred(standard_enclosure):
    layout = compute_layout(standard_enclosure)
    assert layout.left.center[1] == pytest.approx(layout.front.center[1])
    assert layout.top.center[0] == pytest.approx(layout.front.center[0])


def test_sharp_enclosure_faces(sharp_enclosure):
    layout = compute_layout(sharp_enclosure)

    assert layout.top.width == pytest.approx(layout.front.width)
    assert layout.left.height == pytest.approx(layout.front.height)
    assert layout.left.y == pytest.approx(layout.top.height)
    assert layout.total_width == pytest.approx(mm_to_px(40 + 100 + 40))
    assert layout.total_height == pytest.approx(mm_to_px(40 + 60 + 40))


def test_trapezoid_enclosure_faces(wedge_enclosure):
    layout = compute_layout(wedge_enclosure)
    dims = layout.dimensions

    assert dims.top.height == 40
    assert dims.bottom.height == 25
    assert dims.left.is_trapezoidal and dims.right.is_trapezoidal
    assert (dims.left.width, dims.left.front_width) == (40, 25)
    assert layout.left.height == pytest.approx(layout.front.height)
    assert layout.total_height == pytest.approx(mm_to_px(40 + 94 + 25))


def test_face_at(standard_enclosure):
    layout = compute_layout(standard_enclosure)
    for side, rect in layout.faces():
        assert face_at(layout, *rect.center) == side
    assert face_at(layout, -1, -1) is None
    # Corner notch between Top and Left belongs to no face.
    assert face_at(layout, layout.left.width / 2, layout.top.height / 2) is None


def test_face_offset_round_trip(standard_enclosure):
    layout = compute_layout(standard_enclosure)
    rect = layout.face(Side.RIGHT)
    dx, dy = to_face_offset(rect, rect.x + 3, rect.y + 4)
    assert from_face_offset(rect, dx, dy) == pytest.approx((rect.x + 3, rect.y + 4))


def test_trapezoid_back_edge_centre_is_inside():
    assert point_in_trapezoid(30, 10, 100, 0, -50)


def test_trapezoid_point_past_interpolated_edge_is_outside():
    # Half-width at the vertical centre is (15 + 5) / 2 = 10.
    assert trapezoid_half_width(30, 10, 100, 0) == pytest.approx(10)
    assert point_in_trapezoid(30, 10, 100, 10, 0)
    assert not point_in_trapezoid(30, 10, 100, 11, 0)


def test_trapezoid_outside_vertically():
    assert not point_in_trapezoid(30, 10, 100, 0, 51)
    assert trapezoid_half_width(30, 10, 100, 50) == pytest.approx(5)


def test_inside_trapezoid_uses_logical_px(wedge_enclosure):
    layout = compute_layout(wedge_enclosure)
    dims = layout.dimensions.for_side(Side.LEFT)
    half_height = mm_to_px(94) / 2

    assert inside_trapezoid(dims, 0, 0)
    assert inside_trapezoid(dims, mm_to_px(19), -half_height)
    assert not inside_trapezoid(dims, mm_to_px(19), half_height)


def test_trapezoid_points(wedge_enclosure):
    layout = compute_layout(wedge_enclosure)
    rect = layout.left
    points = trapezoid_points(rect, layout.dimensions.left)

    (tl_x, tl_y), (tr_x, _), (br_x, br_y), (bl_x, _) = points
    assert tr_x - tl_x == pytest.approx(mm_to_px(40))
    assert br_x - bl_x == pytest.approx(mm_to_px(25))
    assert tl_y == pytest.approx(rect.y)
    assert br_y == pytest.approx(rect.y + rect.height)
