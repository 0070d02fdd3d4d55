import logging
from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import escape

from PySide6.QtCore import QMarginsF, QRectF, QSizeF
from PySide6.QtGui import QPageLayout, QPageSize, QPainter, QPdfWriter
from PySide6.QtSvg import QSvgRenderer

from .catalog import lookup_component
from .config import CANVAS_RULES
from .document import DocumentSnapshot
from .hit_test import component_size_px, drill_radius_px
from .labels import LabelShape, dimension_text, label_position
from .layout import UnwrappedLayout, compute_layout, corner_radius, trapezoid_points
from .models import CornerStyle, PlacedComponent, Rect, Side
from .sides import display_label
from .units import mm_to_px, px_to_mm

log = logging.getLogger(__name__)

STROKE = "#000000"
BORDER_WIDTH = 1.2
COMPONENT_WIDTH = 1.0
CROSSHAIR_WIDTH = 0.5
SIDE_LABEL_SIZE = 15
COMPONENT_LABEL_SIZE = 9
LABEL_PADDING = 2


@dataclass(frozen=True)
class Template:
    svg: bytes
    width_mm: float
    height_mm: float


def printable_components(components) -> list[PlacedComponent]:
    return [c for c in components if not c.exclude_from_print]


def _face_outline(side: Side, rect: Rect, layout: UnwrappedLayout, radius_px: float) -> str:
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    dims = layout.dimensions.for_side(side)

    if side == Side.FRONT:
        return (
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" rx="{radius_px}" '
            f'fill="none" stroke="{STROKE}" stroke-width="{BORDER_WIDTH}"/>'
        )
    if dims.is_trapezoidal:
        points = " ".join(f"{px},{py}" for px, py in trapezoid_points(rect, dims))
        return (
            f'<polygon points="{points}" fill="none" stroke="{STROKE}" '
            f'stroke-width="{BORDER_WIDTH}"/>'
        )

    # Skip the edge shared with the front face so it is not drawn twice.
    if side == Side.TOP:
        d = f"M{x},{y + h} L{x},{y} L{x + w},{y} L{x + w},{y + h}"
    elif side == Side.BOTTOM:
        d = f"M{x},{y} L{x},{y + h} L{x + w},{y + h} L{x + w},{y}"
    elif side == Side.LEFT:
        d = f"M{x + w},{y} L{x},{y} L{x},{y + h} L{x + w},{y + h}"
    else:
        d = f"M{x},{y} L{x + w},{y} L{x + w},{y + h} L{x},{y + h}"
    return f'<path d="{d}" fill="none" stroke="{STROKE}" stroke-width="{BORDER_WIDTH}"/>'


def _text(x: float, y: float, text: str, size: float, angle: float, weight: str = "normal") -> str:
    rotate = f' transform="rotate({angle} {x} {y})"' if angle else ""
    return (
        f'<text x="{x}" y="{y}" font-family="Arial, sans-serif" font-size="{size}" '
        f'font-weight="{weight}" text-anchor="middle" dominant-baseline="central"'
        f'{rotate}>{escape(text)}</text>'
    )


def _label(x: float, y: float, text: str, angle: float) -> str:
    # Rough width; the background only needs to keep grid lines off the text.
    width = len(text) * COMPONENT_LABEL_SIZE * 0.6 + LABEL_PADDING * 2
    height = COMPONENT_LABEL_SIZE + LABEL_PADDING * 2
    rotate = f' transform="rotate({angle} {x} {y})"' if angle else ""
    return (
        f'<g{rotate}>'
        f'<rect x="{x - width / 2}" y="{y - height / 2}" width="{width}" height="{height}" fill="white"/>'
        + _text(x, y, text, COMPONENT_LABEL_SIZE, 0)
        + '</g>'
    )


def _component(component: PlacedComponent, rect: Rect, rotation: int, snapshot: DocumentSnapshot) -> list[str]:
    spec = lookup_component(component.type)
    cx, cy = rect.center
    cx += component.x
    cy += component.y
    parts = []

    if spec.is_rectangular:
        w, h = component_size_px(spec)
        dash = ' stroke-dasharray="5,5"' if spec.is_footprint_guide else ""
        fill = "none" if spec.is_footprint_guide else "white"
        parts.append(
            f'<rect x="{cx - w / 2}" y="{cy - h / 2}" width="{w}" height="{h}" '
            f'transform="rotate({component.rotation} {cx} {cy})" fill="{fill}" '
            f'stroke="{STROKE}" stroke-width="{COMPONENT_WIDTH}"{dash}/>'
        )
    else:
        r = drill_radius_px(spec)
        parts.append(
            f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="white" '
            f'stroke="{STROKE}" stroke-width="{COMPONENT_WIDTH}"/>'
        )

    if spec.is_footprint_guide:
        return parts

    if spec.is_rectangular:
        half_w, half_h = w / 2, h / 2
        if component.rotation == 90:
            half_w, half_h = half_h, half_w
    else:
        half_w = half_h = r
    parts.append(
        f'<path d="M{cx - half_w},{cy} L{cx + half_w},{cy} M{cx},{cy - half_h} L{cx},{cy + half_h}" '
        f'stroke="{STROKE}" stroke-width="{CROSSHAIR_WIDTH}"/>'
    )

    placement = label_position(
        cx, cy, component.rotation, rotation, LabelShape.for_spec(spec),
        CANVAS_RULES.label_offset_px,
    )
    text = dimension_text(spec, component.rotation, rotation, snapshot.unit)
    parts.append(_label(placement.x, placement.y, text, placement.text_angle))
    return parts


def render_template(snapshot: DocumentSnapshot, rotation: int = 0) -> Template:
    layout = compute_layout(snapshot.descriptor)
    supports = snapshot.descriptor.rotates_labels

    page_w, page_h = layout.total_width, layout.total_height
    if rotation == 90:
        page_w, page_h = page_h, page_w
        transform = f"translate({page_w},0) rotate(90)"
    else:
        transform = ""

    radius_px = 0.0
    if snapshot.descriptor.corner_style == CornerStyle.ROUNDED:
        radius_px = mm_to_px(corner_radius(snapshot.descriptor))

    width_mm, height_mm = px_to_mm(page_w), px_to_mm(page_h)
    svg_parts = [
        '<?xml version="1.0" encoding="utf-8"?>',
        f'<svg width="{width_mm:.3f}mm" height="{height_mm:.3f}mm" '
        f'viewBox="0 0 {page_w} {page_h}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect x="0" y="0" width="{page_w}" height="{page_h}" fill="white"/>',
        f'<g transform="{transform}">' if transform else '<g>',
    ]

    printable = printable_components(snapshot.components)
    for side, rect in layout.faces():
        svg_parts.append(_face_outline(side, rect, layout, radius_px))

        label = display_label(side, rotation, supports)
        cx, cy = rect.center
        angle = -90 if rotation == 90 else 0
        svg_parts.append(_text(cx, cy, label.value, SIDE_LABEL_SIZE, angle, weight="bold"))

        for component in printable:
            if component.side == side:
                svg_parts.extend(_component(component, rect, rotation, snapshot))

    svg_parts.append('</g>')
    svg_parts.append('</svg>')
    return Template(
        svg='\n'.join(svg_parts).encode('utf-8'),
        width_mm=width_mm,
        height_mm=height_mm,
    )


def export_svg(snapshot: DocumentSnapshot, path: str | Path, rotation: int = 0) -> Template:
    template = render_template(snapshot, rotation)
    Path(path).write_bytes(template.svg)
    log.info("Exported %.1f x %.1f mm template to %s", template.width_mm, template.height_mm, path)
    return template


def export_pdf(snapshot: DocumentSnapshot, path: str | Path, rotation: int = 0) -> Template:
    template = render_template(snapshot, rotation)

    writer = QPdfWriter(str(path))
    writer.setResolution(96)
    writer.setPageSize(QPageSize(QSizeF(template.width_mm, template.height_mm), QPageSize.Unit.Millimeter))
    writer.setPageMargins(QMarginsF(0, 0, 0, 0), QPageLayout.Unit.Millimeter)

    renderer = QSvgRenderer(template.svg)
    if not renderer.isValid():
        log.error("Template SVG could not be parsed for %s", path)
        raise RuntimeError("Template SVG could not be rendered")

    painter = QPainter(writer)
    try:
        renderer.render(painter, QRectF(0, 0, writer.width(), writer.height()))
    finally:
        painter.end()

    log.info("Exported %.1f x %.1f mm PDF to %s", template.width_mm, template.height_mm, path)
    return template
