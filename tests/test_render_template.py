"""Tests for exact-scale template export."""

import pytest

from enclosure_layout.document import Document
from enclosure_layout.render_template import (
    export_pdf,
    export_svg,
    printable_components,
    render_template,
)


def test_page_size_matches_unwrapped_enclosure(document):
    template = render_template(document.snapshot())
    # HAM-1590B: 60 x 113 mm front, 29 mm deep.
    assert template.width_mm == pytest.approx(29 + 60 + 29)
    assert template.height_mm == pytest.approx(29 + 113 + 29)
    assert template.svg.startswith(b"<?xml")
    assert b'width="118.000mm"' in template.svg


def test_rotated_page_is_swapped(document):
    template = render_template(document.snapshot(), rotation=90)
    assert template.width_mm == pytest.approx(171)
    assert template.height_mm == pytest.approx(118)
    assert b"rotate(90)" in template.svg
    assert b"rotate(-90" in template.svg


def test_excluded_components_are_not_printed(document):
    document.add_component("pot-16mm")
    guide = document.add_component("pot-16")
    assert guide.exclude_from_print

    snapshot = document.snapshot()
    assert len(printable_components(snapshot.components)) == 1
    assert render_template(snapshot).svg.count(b"<circle") == 1


def test_included_guide_is_dashed_without_label(document):
    guide = document.add_component("spst-toggle")
    document.toggle_print(guide.id)
    svg = render_template(document.snapshot()).svg
    assert b'stroke-dasharray="5,5"' in svg
    assert b"6.8mm" not in svg


def test_component_label_text(document):
    document.add_component("pot-16mm")
    assert b">7.0mm</text>" in render_template(document.snapshot()).svg


def test_trapezoid_faces_are_polygons():
    template = render_template(Document("GEN-WEDGE-120").snapshot())
    assert template.svg.count(b"<polygon") == 2


def test_front_face_has_rounded_corners(document):
    assert b'rx="18.89' in render_template(document.snapshot()).svg


def test_export_svg(tmp_path, document):
    path = tmp_path / "template.svg"
    template = export_svg(document.snapshot(), path)
    assert path.read_bytes() == template.svg


def test_export_pdf(qapp, tmp_path, document):
    document.add_component("footswitch")
    path = tmp_path / "template.pdf"
    export_pdf(document.snapshot(), path)
    assert path.read_bytes().startswith(b"%PDF")
