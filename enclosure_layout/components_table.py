import re
from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
from PySide6.QtWidgets import QTableView, QHeaderView

from .catalog import lookup_component
from .models import MeasurementUnit, PlacedComponent
from .units import format_dimension, px_to_mm


def natural_sort_key(text: str):
    parts = re.split(r'(\d+)', text)
    return [int(p) if p.isdigit() else p.lower() for p in parts]


class PlacedComponentsModel(QAbstractTableModel):
    COLUMNS = ["Component", "Side", "Position", "Print"]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._components: list[PlacedComponent] = []
        self._unit = MeasurementUnit.METRIC

    def set_components(self, components, unit: MeasurementUnit = MeasurementUnit.METRIC):
        self.beginResetModel()
        self._unit = unit
        self._components = sorted(
            components,
            key=lambda c: (natural_sort_key(lookup_component(c.type).name), c.sequence),
        )
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._components)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.COLUMNS)

    def data(self, index: QModelIndex, role=Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None

        component = self._components[index.row()]
        spec = lookup_component(component.type)

        if role == Qt.ItemDataRole.DisplayRole:
            if index.column() == 0:
                return spec.name
            elif index.column() == 1:
                return component.side.value
            elif index.column() == 2:
                x = format_dimension(px_to_mm(component.x), self._unit)
                y = format_dimension(px_to_mm(component.y), self._unit)
                return f"{x}, {y}"
            elif index.column() == 3:
                return "No" if component.exclude_from_print else "Yes"
        elif role == Qt.ItemDataRole.ToolTipRole:
            return f"{spec.name} ({spec.category})"
        elif role == Qt.ItemDataRole.UserRole:
            return component.id

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role=Qt.ItemDataRole.DisplayRole):
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            return self.COLUMNS[section]
        return None

    def component_id(self, row: int) -> str | None:
        if 0 <= row < len(self._components):
            return self._components[row].id
        return None

    def row_of(self, component_id: str) -> int:
        for row, component in enumerate(self._components):
            if component.id == component_id:
                return row
        return -1


class PlacedComponentsView(QTableView):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.setAlternatingRowColors(True)
        self.horizontalHeader().setStretchLastSection(True)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        self.verticalHeader().setVisible(False)
