import math

from PySide6.QtCore import Qt, QElapsedTimer, QPointF, QRectF, QTimer, Signal
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPen,
    QPolygonF,
    QWheelEvent,
)
from PySide6.QtWidgets import QWidget

from .catalog import lookup_component
from .config import CANVAS_RULES
from .document import Document, DocumentSnapshot
from .drag import DragContext, DragController
from .hit_test import component_size_px, drill_radius_px, hit_test, z_order
from .labels import LabelShape, dimension_text, label_position
from .layout import UnwrappedLayout, compute_layout, corner_radius, trapezoid_points
from .models import CornerStyle, PlacedComponent, Rect, Side
from .sides import display_label
from .transform import ViewTransform
from .units import mm_to_px

BACKGROUND = QColor("#1a1a1a")
FACE_COLOR = QColor("#e0e0e0")
GRID_COLOR = QColor(255, 255, 255, 40)
SELECTED_COLOR = QColor("#ff8c42")
HOVER_COLOR = QColor("#ffd27f")
CROSSHAIR_COLOR = QColor("#808080")


class UnwrappedCanvas(QWidget):
    selectionChanged = Signal(object)
    componentChanged = Signal(str)
    componentDeleted = Signal(str)
    zoomChanged = Signal(float)
    canvasClicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(400, 300)

        self._document: Document | None = None
        self._view = ViewTransform()
        self._drag = DragController()
        self._selected_id: str | None = None
        self._hovered_id: str | None = None
        self._panning = False
        self._pan_last = QPointF()
        self._pulse_mult = 1.0

        self._drag_click_timer = QTimer(self)
        self._drag_click_timer.setSingleShot(True)
        self._drag_click_timer.setInterval(CANVAS_RULES.drag_click_suppress_ms)
        self._drag_click_timer.timeout.connect(self._drag.clear_just_finished)

        self._pulse_timer_elapsed = QElapsedTimer()
        self._pulse_timer = QTimer(self)
        self._pulse_timer.timeout.connect(self._on_pulse_tick)
        self._pulse_timer.setInterval(30)
        self._pulse_timer.start()
        self._pulse_timer_elapsed.start()

    def _on_pulse_tick(self):
        self._pulse_mult = math.sin(self._pulse_timer_elapsed.elapsed() / 300.0) * 0.3 + 1.0
        if self._selected_id is not None:
            self.update()

    @property
    def view(self) -> ViewTransform:
        return self._view

    @property
    def selected_component_id(self) -> str | None:
        return self._selected_id

    @property
    def hovered_component_id(self) -> str | None:
        return self._hovered_id

    @property
    def drag(self) -> DragController:
        return self._drag

    def set_document(self, document: Document | None):
        self._document = document
        self._drag.cancel()
        self._hovered_id = None
        self._set_selected(None)
        self.update()

    def set_view(self, view: ViewTransform):
        self._view = view
        self.zoomChanged.emit(self._view.zoom)
        self.update()

    def set_rotation(self, rotation: int):
        self._view.set_rotation(rotation)
        self.update()

    def toggle_rotation(self):
        self._view.toggle_rotation()
        self.update()

    def set_zoom(self, zoom: float):
        if self._view.set_zoom(zoom):
            self.zoomChanged.emit(self._view.zoom)
            self.update()

    def zoom_to_fit(self) -> float:
        if self._document is None:
            return self._view.zoom
        layout = compute_layout(self._document.descriptor)
        zoom = self._view.zoom_to_fit(self._viewport(), (layout.total_width, layout.total_height))
        self.zoomChanged.emit(zoom)
        self.update()
        return zoom

    def select_component(self, component_id: str | None):
        self._set_selected(component_id)
        self.update()

    def _set_selected(self, component_id: str | None):
        if component_id == self._selected_id:
            return
        self._selected_id = component_id
        self.selectionChanged.emit(component_id)

    def delete_selected(self) -> bool:
        if self._document is None or self._selected_id is None:
            return False
        component_id = self._selected_id
        if not self._document.delete_component(component_id):
            return False
        self._drag.cancel()
        self._set_selected(None)
        self.componentDeleted.emit(component_id)
        self.update()
        return True

    def _viewport(self) -> tuple[float, float]:
        return (float(self.width()), float(self.height()))

    def to_logical(self, pos: QPointF, layout: UnwrappedLayout) -> tuple[float, float]:
        return self._view.screen_to_logical(
            pos.x(), pos.y(), self._viewport(), (layout.total_width, layout.total_height)
        )

    def to_screen(self, x: float, y: float, layout: UnwrappedLayout) -> QPointF:
        sx, sy = self._view.logical_to_screen(
            x, y, self._viewport(), (layout.total_width, layout.total_height)
        )
        return QPointF(sx, sy)

    def pointer_down(self, pos: QPointF, button: Qt.MouseButton):
        if button in (Qt.MouseButton.RightButton, Qt.MouseButton.MiddleButton):
            self._panning = True
            self._pan_last = QPointF(pos)
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            return

        if button != Qt.MouseButton.LeftButton or self._document is None:
            return

        snapshot = self._document.snapshot()
        layout = compute_layout(snapshot.descriptor)
        x, y = self.to_logical(pos, layout)
        hit = self._drag.press(x, y, layout, snapshot.components)
        self._set_selected(hit.id if hit else None)
        self.update()

    def pointer_move(self, pos: QPointF):
        if self._panning:
            delta = pos - self._pan_last
            self._pan_last = QPointF(pos)
            self._view.pan_by(delta.x(), delta.y())
            self.update()
            return

        if self._document is None:
            return

        snapshot = self._document.snapshot()
        layout = compute_layout(snapshot.descriptor)
        x, y = self.to_logical(pos, layout)

        if self._drag.dragging:
            ctx = DragContext(layout, snapshot.descriptor, snapshot.grid_mm)
            result = self._drag.move(x, y, snapshot.components, ctx)
            if result is not None:
                self._document.apply_move(result)
                self.componentChanged.emit(result.component_id)
                self.update()
            return

        hovered = hit_test(x, y, layout, snapshot.components)
        if hovered != self._hovered_id:
            self._hovered_id = hovered
            self.setCursor(
                Qt.CursorShape.OpenHandCursor if hovered else Qt.CursorShape.ArrowCursor
            )
            self.update()

    def pointer_up(self):
        if self._panning:
            self._panning = False
            self.setCursor(Qt.CursorShape.ArrowCursor)
        if self._drag.release():
            self._drag_click_timer.start()

    def pointer_click(self, pos: QPointF) -> bool:
        if self._drag.consume_click():
            return False
        if self._document is None:
            return False
        snapshot = self._document.snapshot()
        layout = compute_layout(snapshot.descriptor)
        x, y = self.to_logical(pos, layout)
        if hit_test(x, y, layout, snapshot.components) is None:
            self._set_selected(None)
            self.canvasClicked.emit()
            self.update()
        return True

    def mousePressEvent(self, event: QMouseEvent):
        self.pointer_down(event.position(), event.button())
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        self.pointer_move(event.position())
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        was_panning = self._panning
        self.pointer_up()
        if event.button() == Qt.MouseButton.LeftButton and not was_panning:
            self.pointer_click(event.position())
        event.accept()

    def leaveEvent(self, event):
        self.pointer_up()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        steps = 1 if event.angleDelta().y() > 0 else -1
        if self._view.step_zoom(steps):
            self.zoomChanged.emit(self._view.zoom)
            self.update()
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            if self.delete_selected():
                event.accept()
                return
        super().keyPressEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), BACKGROUND)

            if self._document is None:
                painter.setPen(FACE_COLOR)
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No enclosure selected")
                return

            snapshot = self._document.snapshot()
            layout = compute_layout(snapshot.descriptor)
            self._view.apply(painter, self._viewport(), (layout.total_width, layout.total_height))

            for side, rect in layout.faces():
                self._draw_face(painter, side, rect, layout, snapshot)

            # Bottom of the z-order first so the topmost part is drawn last.
            ordered = list(reversed(z_order(snapshot.components)))
            for component in ordered:
                self._draw_component(painter, component, layout.face(component.side))
            for component in ordered:
                self._draw_label(painter, component, layout.face(component.side), snapshot)
        finally:
            painter.end()

    def _pen(self, color: QColor, width_px: float, style=Qt.PenStyle.SolidLine) -> QPen:
        pen = QPen(color, width_px / self._view.zoom)
        pen.setStyle(style)
        return pen

    def _draw_grid(self, painter: QPainter, rect: Rect, grid_mm: float):
        step = mm_to_px(grid_mm)
        margin = mm_to_px(CANVAS_RULES.grid_edge_margin_mm)
        has_margin = rect.width > margin * 2 and rect.height > margin * 2
        cx, cy = rect.center

        painter.setPen(self._pen(GRID_COLOR, 0.5))
        offset = step
        while offset <= rect.width / 2:
            for x in (cx - offset, cx + offset):
                if not has_margin or rect.x + margin < x < rect.x + rect.width - margin:
                    painter.drawLine(QPointF(x, rect.y), QPointF(x, rect.y + rect.height))
            offset += step
        offset = step
        while offset <= rect.height / 2:
            for y in (cy - offset, cy + offset):
                if not has_margin or rect.y + margin < y < rect.y + rect.height - margin:
                    painter.drawLine(QPointF(rect.x, y), QPointF(rect.x + rect.width, y))
            offset += step

        painter.setPen(self._pen(FACE_COLOR, 1.5))
        painter.drawLine(QPointF(cx, rect.y), QPointF(cx, rect.y + rect.height))
        painter.drawLine(QPointF(rect.x, cy), QPointF(rect.x + rect.width, cy))

    def _draw_face(self, painter: QPainter, side: Side, rect: Rect, layout: UnwrappedLayout,
                   snapshot: DocumentSnapshot):
        if snapshot.grid_mm:
            self._draw_grid(painter, rect, snapshot.grid_mm)

        painter.setPen(self._pen(FACE_COLOR, 2))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        qrect = QRectF(rect.x, rect.y, rect.width, rect.height)
        dims = layout.dimensions.for_side(side)

        if side == Side.FRONT and snapshot.descriptor.corner_style == CornerStyle.ROUNDED:
            radius = mm_to_px(corner_radius(snapshot.descriptor))
            painter.drawRoundedRect(qrect, radius, radius)
        elif dims.is_trapezoidal:
            painter.drawPolygon(QPolygonF([QPointF(x, y) for x, y in trapezoid_points(rect, dims)]))
        else:
            painter.drawRect(qrect)

        label = display_label(side, self._view.rotation, snapshot.descriptor.rotates_labels)
        cx, cy = rect.center
        painter.save()
        painter.translate(cx, cy)
        painter.rotate(-self._view.rotation)
        painter.scale(1 / self._view.zoom, 1 / self._view.zoom)
        font = QFont("Arial")
        font.setPixelSize(14)
        painter.setFont(font)
        painter.setPen(FACE_COLOR)
        painter.drawText(QRectF(-100, -10, 200, 20), Qt.AlignmentFlag.AlignCenter, label.value)
        painter.restore()

    def _component_color(self, component: PlacedComponent) -> QColor:
        if component.id == self._selected_id:
            return SELECTED_COLOR
        if component.id == self._hovered_id:
            return HOVER_COLOR
        return FACE_COLOR

    def _draw_component(self, painter: QPainter, component: PlacedComponent, rect: Rect):
        spec = lookup_component(component.type)
        cx, cy = rect.center
        cx += component.x
        cy += component.y
        color = self._component_color(component)
        selected = component.id == self._selected_id

        painter.save()
        painter.translate(cx, cy)

        if spec.is_rectangular:
            painter.rotate(component.rotation)
            w, h = component_size_px(spec)
            style = Qt.PenStyle.DashLine if spec.is_footprint_guide else Qt.PenStyle.SolidLine
            painter.setPen(self._pen(color, 2.5 if selected else 2, style))
            painter.setBrush(Qt.BrushStyle.NoBrush if spec.is_footprint_guide else QBrush(Qt.GlobalColor.white))
            painter.drawRect(QRectF(-w / 2, -h / 2, w, h))
            half_w, half_h = w / 2, h / 2
        else:
            r = drill_radius_px(spec)
            if selected:
                halo = r + CANVAS_RULES.hit_tolerance_px / self._view.zoom * self._pulse_mult
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QColor(255, 140, 66, 60))
                painter.drawEllipse(QPointF(0, 0), halo, halo)
            style = Qt.PenStyle.DashLine if spec.is_footprint_guide else Qt.PenStyle.SolidLine
            painter.setPen(self._pen(color, 2.5 if selected else 2, style))
            painter.setBrush(Qt.BrushStyle.NoBrush if spec.is_footprint_guide else QBrush(Qt.GlobalColor.white))
            painter.drawEllipse(QPointF(0, 0), r, r)
            half_w = half_h = r

        if not spec.is_footprint_guide:
            painter.setPen(self._pen(SELECTED_COLOR if selected else CROSSHAIR_COLOR, 1))
            painter.drawLine(QPointF(-half_w, 0), QPointF(half_w, 0))
            painter.drawLine(QPointF(0, -half_h), QPointF(0, half_h))

        painter.restore()

    def _draw_label(self, painter: QPainter, component: PlacedComponent, rect: Rect,
                    snapshot: DocumentSnapshot):
        spec = lookup_component(component.type)
        cx, cy = rect.center
        placement = label_position(
            cx + component.x,
            cy + component.y,
            component.rotation,
            self._view.rotation,
            LabelShape.for_spec(spec),
            CANVAS_RULES.label_offset_px / self._view.zoom,
        )
        text = dimension_text(spec, component.rotation, self._view.rotation, snapshot.unit)

        painter.save()
        painter.translate(placement.x, placement.y)
        painter.rotate(placement.text_angle)
        painter.scale(1 / self._view.zoom, 1 / self._view.zoom)

        font = QFont("monospace")
        font.setPixelSize(10)
        painter.setFont(font)
        metrics = QFontMetricsF(font)
        text_w = metrics.horizontalAdvance(text)
        text_h = 10.0
        padding = 4.0
        pill = QRectF(-text_w / 2 - padding, -text_h / 2 - padding, text_w + padding * 2, text_h + padding * 2)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(255, 255, 255, 217))
        painter.drawRoundedRect(pill, pill.height() / 2, pill.height() / 2)
        painter.setPen(QColor("black"))
        painter.drawText(pill, Qt.AlignmentFlag.AlignCenter, text)
        painter.restore()
