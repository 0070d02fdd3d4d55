"""Tests for unit conversion and dimension formatting."""

import pytest

from enclosure_layout.models import MeasurementUnit
from enclosure_layout.units import format_dimension, mm_to_fraction, mm_to_px, px_to_mm


def test_one_inch_is_96_px():
    assert mm_to_px(25.4) == pytest.approx(96.0)


def test_px_to_mm_inverts_mm_to_px():
    assert px_to_mm(mm_to_px(12.3)) == pytest.approx(12.3)


def test_fraction_whole_inch():
    assert mm_to_fraction(25.4) == '1"'


def test_fraction_reduces():
    assert mm_to_fraction(38.1) == '1 1/2"'


def test_fraction_nearest_64th():
    # 6 mm = 0.236" = 15.1/64
    assert mm_to_fraction(6.0) == '15/64"'


def test_fraction_override_table():
    assert mm_to_fraction(12.7) == '1/2"'
    assert mm_to_fraction(6.35) == '1/4"'


def test_fraction_below_one_64th_uses_decimal():
    assert mm_to_fraction(0.1) == '0.004"'


def test_format_dimension_metric():
    assert format_dimension(12.34, MeasurementUnit.METRIC) == "12.3mm"


def test_format_dimension_imperial():
    assert format_dimension(25.4, MeasurementUnit.IMPERIAL) == '1"'
