import logging
from pathlib import Path

from PySide6.QtCore import Qt, QItemSelectionModel, QTimer
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QSplitter,
    QToolBar,
    QComboBox,
    QCheckBox,
    QPushButton,
    QFileDialog,
    QLabel,
    QMessageBox,
    QGroupBox,
)

from .catalog import (
    ENCLOSURE_TYPES,
    COMPONENT_TYPES,
    UnknownEnclosureError,
    components_grouped,
    enclosures_grouped,
)
from .components_table import PlacedComponentsModel, PlacedComponentsView
from .config import CANVAS_RULES
from .document import Document
from .models import MeasurementUnit
from .project import PROJECT_SUFFIX, load_project, save_project
from .render_template import export_pdf, export_svg
from .unwrapped_view import UnwrappedCanvas

log = logging.getLogger(__name__)

APP_NAME = "Enclosure Layout"


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setMinimumSize(1200, 800)

        self._document = Document()
        self._project_path: Path | None = None
        self._fitted = False

        self._setup_ui()
        self._connect_signals()
        self._load_document(self._document)

    def _setup_ui(self):
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._new_btn = QPushButton("New")
        toolbar.addWidget(self._new_btn)
        self._open_btn = QPushButton("Open...")
        toolbar.addWidget(self._open_btn)
        self._save_btn = QPushButton("Save")
        toolbar.addWidget(self._save_btn)
        self._save_as_btn = QPushButton("Save As...")
        toolbar.addWidget(self._save_as_btn)

        toolbar.addSeparator()

        self._export_svg_btn = QPushButton("Export SVG...")
        toolbar.addWidget(self._export_svg_btn)
        self._export_pdf_btn = QPushButton("Export PDF...")
        toolbar.addWidget(self._export_pdf_btn)

        toolbar.addSeparator()

        toolbar.addWidget(QLabel("Enclosure: "))
        self._enclosure_combo = QComboBox()
        for manufacturer, keys in enclosures_grouped().items():
            if not keys:
                continue
            self._enclosure_combo.insertSeparator(self._enclosure_combo.count())
            for key in keys:
                descriptor = ENCLOSURE_TYPES[key]
                self._enclosure_combo.addItem(f"{manufacturer} {descriptor.display_name}", key)
        toolbar.addWidget(self._enclosure_combo)

        toolbar.addWidget(QLabel("  Add: "))
        self._component_combo = QComboBox()
        self._component_combo.addItem("Add component...", None)
        for category, keys in components_grouped().items():
            self._component_combo.insertSeparator(self._component_combo.count())
            for key in keys:
                self._component_combo.addItem(f"{category}: {COMPONENT_TYPES[key].name}", key)
        toolbar.addWidget(self._component_combo)

        toolbar.addSeparator()

        self._rotate_view_btn = QPushButton("Rotate View")
        toolbar.addWidget(self._rotate_view_btn)
        self._zoom_fit_btn = QPushButton("Zoom to Fit")
        toolbar.addWidget(self._zoom_fit_btn)

        self._grid_check = QCheckBox("Grid")
        toolbar.addWidget(self._grid_check)
        self._grid_combo = QComboBox()
        for size in CANVAS_RULES.grid_sizes_mm:
            self._grid_combo.addItem(f"{size:g} mm", size)
        toolbar.addWidget(self._grid_combo)

        self._unit_combo = QComboBox()
        self._unit_combo.addItem("mm", MeasurementUnit.METRIC.value)
        self._unit_combo.addItem("inch", MeasurementUnit.IMPERIAL.value)
        toolbar.addWidget(self._unit_combo)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        layout.addWidget(splitter)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)

        table_group = QGroupBox("Placed Components")
        table_layout = QVBoxLayout(table_group)

        self._table_model = PlacedComponentsModel()
        self._table_view = PlacedComponentsView()
        self._table_view.setModel(self._table_model)
        table_layout.addWidget(self._table_view)

        buttons = QHBoxLayout()
        self._rotate_part_btn = QPushButton("Rotate")
        self._print_btn = QPushButton("Toggle Print")
        self._delete_btn = QPushButton("Delete")
        for btn in (self._rotate_part_btn, self._print_btn, self._delete_btn):
            btn.setEnabled(False)
            buttons.addWidget(btn)
        table_layout.addLayout(buttons)

        left_layout.addWidget(table_group)

        self._canvas = UnwrappedCanvas()

        splitter.addWidget(left_panel)
        splitter.addWidget(self._canvas)
        splitter.setSizes([300, 900])

        self._status_label = QLabel()
        self.statusBar().addWidget(self._status_label)
        self._zoom_label = QLabel()
        self.statusBar().addPermanentWidget(self._zoom_label)

    def _connect_signals(self):
        self._new_btn.clicked.connect(self._on_new)
        self._open_btn.clicked.connect(self._on_open)
        self._save_btn.clicked.connect(self._on_save)
        self._save_as_btn.clicked.connect(self._on_save_as)
        self._export_svg_btn.clicked.connect(self._on_export_svg)
        self._export_pdf_btn.clicked.connect(self._on_export_pdf)
        self._enclosure_combo.currentIndexChanged.connect(self._on_enclosure_changed)
        self._component_combo.activated.connect(self._on_add_component)
        self._rotate_view_btn.clicked.connect(self._on_rotate_view)
        self._zoom_fit_btn.clicked.connect(self._canvas.zoom_to_fit)
        self._grid_check.toggled.connect(self._on_grid_changed)
        self._grid_combo.currentIndexChanged.connect(self._on_grid_changed)
        self._unit_combo.currentIndexChanged.connect(self._on_unit_changed)
        self._rotate_part_btn.clicked.connect(self._on_rotate_part)
        self._print_btn.clicked.connect(self._on_toggle_print)
        self._delete_btn.clicked.connect(self._canvas.delete_selected)

        self._canvas.selectionChanged.connect(self._on_canvas_selection_changed)
        self._canvas.componentChanged.connect(self._on_document_edited)
        self._canvas.componentDeleted.connect(self._on_document_edited)
        self._canvas.zoomChanged.connect(self._on_zoom_changed)
        self._table_view.selectionModel().selectionChanged.connect(
            self._on_table_selection_changed
        )

    def _load_document(self, document: Document):
        self._document = document
        self._canvas.set_document(document)
        self._sync_controls()
        self._refresh_table()
        self._update_title()

    def _sync_controls(self):
        widgets = (self._enclosure_combo, self._grid_check, self._grid_combo, self._unit_combo)
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self._enclosure_combo.setCurrentIndex(
                self._enclosure_combo.findData(self._document.enclosure_type)
            )
            self._grid_check.setChecked(self._document.grid_enabled)
            index = self._grid_combo.findData(self._document.grid_size_mm)
            if index < 0:
                self._grid_combo.addItem(f"{self._document.grid_size_mm:g} mm", self._document.grid_size_mm)
                index = self._grid_combo.count() - 1
            self._grid_combo.setCurrentIndex(index)
            self._unit_combo.setCurrentIndex(self._unit_combo.findData(self._document.unit.value))
        finally:
            for widget in widgets:
                widget.blockSignals(False)
        self._on_zoom_changed(self._canvas.view.zoom)

    def _refresh_table(self):
        selected = self._canvas.selected_component_id
        self._table_model.set_components(self._document.components, self._document.unit)
        self._select_table_row(selected)
        self._status_label.setText(
            f"{self._document.descriptor.manufacturer} {self._document.descriptor.display_name}: "
            f"{len(self._document.components)} components"
        )

    def _select_table_row(self, component_id: str | None):
        selection = self._table_view.selectionModel()
        selection.blockSignals(True)
        try:
            selection.clearSelection()
            row = self._table_model.row_of(component_id) if component_id else -1
            if row >= 0:
                selection.select(
                    self._table_model.index(row, 0),
                    QItemSelectionModel.SelectionFlag.Select | QItemSelectionModel.SelectionFlag.Rows,
                )
        finally:
            selection.blockSignals(False)

    def _update_title(self):
        name = self._project_path.name if self._project_path else "Untitled"
        marker = "*" if self._document.dirty else ""
        self.setWindowTitle(f"{name}{marker} - {APP_NAME}")

    def _on_document_edited(self, component_id: str = ""):
        self._refresh_table()
        self._update_title()

    def _confirm_discard(self) -> bool:
        if not self._document.dirty:
            return True
        answer = QMessageBox.question(
            self,
            APP_NAME,
            "The layout has unsaved changes. Save them first?",
            QMessageBox.StandardButton.Save
            | QMessageBox.StandardButton.Discard
            | QMessageBox.StandardButton.Cancel,
        )
        if answer == QMessageBox.StandardButton.Save:
            return self._on_save()
        return answer == QMessageBox.StandardButton.Discard

    def showEvent(self, event):
        super().showEvent(event)
        if not self._fitted:
            self._fitted = True
            QTimer.singleShot(0, self._canvas.zoom_to_fit)

    def closeEvent(self, event):
        if self._confirm_discard():
            event.accept()
        else:
            event.ignore()

    def _on_new(self):
        if not self._confirm_discard():
            return
        self._project_path = None
        self._load_document(Document(enclosure_type=self._document.enclosure_type))

    def _on_open(self):
        if not self._confirm_discard():
            return
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open Layout", "", f"Enclosure Layouts (*{PROJECT_SUFFIX} *.json);;All Files (*)"
        )
        if not file_path:
            return

        try:
            project = load_project(file_path)
        except (OSError, ValueError) as e:
            log.warning("Could not open %s: %s", file_path, e)
            QMessageBox.critical(self, "Error", f"Failed to open layout: {e}")
            return

        self._project_path = Path(file_path)
        self._canvas.set_view(project.view)
        self._load_document(project.document)
        if project.legacy_enclosure:
            self._status_label.setText(
                f"Enclosure '{project.legacy_enclosure}' migrated to '{project.document.enclosure_type}'"
            )

    def _on_save(self) -> bool:
        if self._project_path is None:
            return self._on_save_as()
        return self._save_to(self._project_path)

    def _on_save_as(self) -> bool:
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Layout", "", f"Enclosure Layouts (*{PROJECT_SUFFIX})"
        )
        if not file_path:
            return False
        path = Path(file_path)
        if not path.suffix:
            path = path.with_suffix(PROJECT_SUFFIX)
        return self._save_to(path)

    def _save_to(self, path: Path) -> bool:
        try:
            save_project(path, self._document, self._canvas.view)
        except OSError as e:
            log.error("Could not save %s: %s", path, e)
            QMessageBox.critical(self, "Error", f"Failed to save layout: {e}")
            return False
        self._project_path = path
        self._update_title()
        return True

    def _on_export_svg(self):
        file_path, _ = QFileDialog.getSaveFileName(self, "Export SVG Template", "", "SVG Files (*.svg)")
        if not file_path:
            return
        try:
            template = export_svg(self._document.snapshot(), file_path, self._canvas.view.rotation)
        except OSError as e:
            log.error("SVG export to %s failed: %s", file_path, e)
            QMessageBox.critical(self, "Error", f"Failed to export SVG: {e}")
            return
        self._status_label.setText(
            f"Exported {template.width_mm:.1f} x {template.height_mm:.1f} mm template to: {file_path}"
        )

    def _on_export_pdf(self):
        file_path, _ = QFileDialog.getSaveFileName(self, "Export PDF Template", "", "PDF Files (*.pdf)")
        if not file_path:
            return
        try:
            template = export_pdf(self._document.snapshot(), file_path, self._canvas.view.rotation)
        except (OSError, RuntimeError) as e:
            log.error("PDF export to %s failed: %s", file_path, e)
            QMessageBox.critical(self, "Error", f"Failed to export PDF: {e}")
            return
        self._status_label.setText(
            f"Exported {template.width_mm:.1f} x {template.height_mm:.1f} mm template to: {file_path}"
        )

    def _on_enclosure_changed(self, index: int):
        key = self._enclosure_combo.itemData(index)
        if key is None:
            return
        try:
            self._document.set_enclosure(key)
        except UnknownEnclosureError as e:
            QMessageBox.critical(self, "Error", f"Unknown enclosure: {e}")
            return
        self._canvas.update()
        self._canvas.zoom_to_fit()
        self._refresh_table()
        self._update_title()

    def _on_add_component(self, index: int):
        key = self._component_combo.itemData(index)
        self._component_combo.setCurrentIndex(0)
        if key is None:
            return
        component = self._document.add_component(key)
        self._canvas.select_component(component.id)
        self._on_document_edited(component.id)

    def _on_rotate_view(self):
        self._canvas.toggle_rotation()
        self._document.mark_dirty()
        self._update_title()

    def _on_grid_changed(self, *args):
        self._document.set_grid(self._grid_check.isChecked(), self._grid_combo.currentData())
        self._canvas.update()
        self._update_title()

    def _on_unit_changed(self, index: int):
        self._document.set_unit(MeasurementUnit(self._unit_combo.itemData(index)))
        self._canvas.update()
        self._refresh_table()
        self._update_title()

    def _on_rotate_part(self):
        component_id = self._canvas.selected_component_id
        if component_id and self._document.rotate_component(component_id):
            self._canvas.update()
            self._on_document_edited(component_id)

    def _on_toggle_print(self):
        component_id = self._canvas.selected_component_id
        if component_id and self._document.toggle_print(component_id):
            self._on_document_edited(component_id)

    def _on_zoom_changed(self, zoom: float):
        self._zoom_label.setText(f"Zoom: {zoom * 100:.0f}%")

    def _on_canvas_selection_changed(self, component_id):
        for btn in (self._rotate_part_btn, self._print_btn, self._delete_btn):
            btn.setEnabled(component_id is not None)
        self._select_table_row(component_id)

    def _on_table_selection_changed(self, selected, deselected):
        indexes = self._table_view.selectionModel().selectedRows()
        if not indexes:
            self._canvas.select_component(None)
            return

        component_id = self._table_model.component_id(indexes[0].row())
        self._canvas.select_component(component_id)
