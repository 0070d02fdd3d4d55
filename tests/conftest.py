"""Shared test fixtures."""

import os

# Must be set before the first QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from enclosure_layout.catalog import lookup_enclosure
from enclosure_layout.document import Document
from enclosure_layout.models import CornerStyle, EnclosureDescriptor, PlacedComponent, Side


@pytest.fixture(scope="session")
def qapp():
    """A QApplication for tests that paint or build widgets."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def standard_enclosure():
    """60 x 113 mm rounded box, 30 mm deep, that rotates its labels."""
    return EnclosureDescriptor(
        width=60,
        height=113,
        depth=30,
        corner_style=CornerStyle.ROUNDED,
        manufacturer="Hammond",
        display_name="Test",
        rotates_labels=True,
    )


@pytest.fixture
def sharp_enclosure():
    return lookup_enclosure("GEN-BOX-100")


@pytest.fixture
def wedge_enclosure():
    return lookup_enclosure("GEN-WEDGE-120")


@pytest.fixture
def document():
    return Document(enclosure_type="HAM-1590B")


def make_component(component_id="comp-1", type="pot-16mm", x=0.0, y=0.0, side=Side.FRONT,
                   rotation=0, sequence=1, exclude_from_print=False):
    return PlacedComponent(
        id=component_id,
        type=type,
        x=x,
        y=y,
        side=side,
        rotation=rotation,
        exclude_from_print=exclude_from_print,
        sequence=sequence,
    )


@pytest.fixture
def component_factory():
    """Builds PlacedComponents with sensible defaults."""
    return make_component
