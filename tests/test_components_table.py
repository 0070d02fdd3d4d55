"""Tests for the placed-components table model."""

from PySide6.QtCore import Qt

from enclosure_layout.components_table import PlacedComponentsModel, natural_sort_key
from enclosure_layout.models import MeasurementUnit, Side
from enclosure_layout.units import mm_to_px


def test_natural_sort_key():
    names = ["slide-100", "slide-20", "slide-15"]
    assert sorted(names, key=natural_sort_key) == ["slide-15", "slide-20", "slide-100"]


def test_rows(qapp, component_factory):
    model = PlacedComponentsModel()
    model.set_components([
        component_factory("b", type="pot-9mm", x=mm_to_px(10), y=0, side=Side.TOP),
        component_factory("a", type="spst-toggle", exclude_from_print=True),
    ])

    assert model.rowCount() == 2
    assert model.index(0, 0).data() == "9mm Potentiometer"
    assert model.index(0, 1).data() == "Top"
    assert model.index(0, 2).data() == "10.0mm, 0.0mm"
    assert model.index(0, 3).data() == "Yes"
    assert model.index(1, 3).data() == "No"
    assert model.index(1, 0).data(Qt.ItemDataRole.UserRole) == "a"
    assert model.row_of("a") == 1
    assert model.component_id(5) is None


def test_imperial_positions(qapp, component_factory):
    model = PlacedComponentsModel()
    model.set_components([component_factory(x=mm_to_px(25.4), y=0)], MeasurementUnit.IMPERIAL)
    assert model.index(0, 2).data() == '1", 0.000"'
