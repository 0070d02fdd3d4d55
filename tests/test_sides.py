"""Tests for face label remapping under canvas rotation."""

import pytest

from enclosure_layout.models import Side
from enclosure_layout.sides import actual_side_for_drag, display_label


@pytest.mark.parametrize("side", list(Side))
def test_forward_then_inverse_is_identity(side):
    assert actual_side_for_drag(display_label(side, 90, True), 90, True) == side


@pytest.mark.parametrize("side", list(Side))
def test_inverse_then_forward_is_identity(side):
    assert display_label(actual_side_for_drag(side, 90, True), 90, True) == side


@pytest.mark.parametrize("side", list(Side))
@pytest.mark.parametrize("rotation, supports", [(0, True), (0, False), (90, False)])
def test_identity_without_remapping(side, rotation, supports):
    assert display_label(side, rotation, supports) == side
    assert actual_side_for_drag(side, rotation, supports) == side


def test_forward_map():
    assert display_label(Side.FRONT, 90, True) == Side.FRONT
    assert display_label(Side.LEFT, 90, True) == Side.TOP
    assert display_label(Side.TOP, 90, True) == Side.RIGHT
    assert display_label(Side.RIGHT, 90, True) == Side.BOTTOM
    assert display_label(Side.BOTTOM, 90, True) == Side.LEFT


def test_inverse_map():
    assert actual_side_for_drag(Side.TOP, 90, True) == Side.LEFT
    assert actual_side_for_drag(Side.RIGHT, 90, True) == Side.TOP
    assert actual_side_for_drag(Side.BOTTOM, 90, True) == Side.RIGHT
    assert actual_side_for_drag(Side.LEFT, 90, True) == Side.BOTTOM
