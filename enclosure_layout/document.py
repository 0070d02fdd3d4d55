import logging
import uuid
from dataclasses import dataclass, replace

from .catalog import lookup_component, lookup_enclosure
from .config import CANVAS_RULES
from .drag import MoveResult, snap_to_grid
from .models import EnclosureDescriptor, MeasurementUnit, PlacedComponent, Side

log = logging.getLogger(__name__)

DEFAULT_ENCLOSURE = "HAM-1590B"


@dataclass(frozen=True)
class DocumentSnapshot:
    enclosure_type: str
    descriptor: EnclosureDescriptor
    components: tuple[PlacedComponent, ...]
    grid_enabled: bool
    grid_size_mm: float
    unit: MeasurementUnit

    @property
    def grid_mm(self) -> float | None:
        if self.grid_enabled and self.grid_size_mm > 0:
            return self.grid_size_mm
        return None

    def get(self, component_id: str) -> PlacedComponent | None:
        return next((c for c in self.components if c.id == component_id), None)


class Document:
    """The open project: enclosure, placed components and grid settings.

    Components are immutable; every edit swaps in a new instance so a
    snapshot taken for one paint never changes under it. Edits mark the
    document dirty.
    """

    def __init__(
        self,
        enclosure_type: str = DEFAULT_ENCLOSURE,
        components: list[PlacedComponent] | None = None,
        grid_enabled: bool = False,
        grid_size_mm: float = CANVAS_RULES.default_grid_mm,
        unit: MeasurementUnit = MeasurementUnit.METRIC,
    ):
        self._descriptor = lookup_enclosure(enclosure_type)
        self.enclosure_type = enclosure_type
        self.components: list[PlacedComponent] = list(components or [])
        self.grid_enabled = grid_enabled
        self.grid_size_mm = grid_size_mm
        self.unit = unit
        self.dirty = False
        self._next_sequence = max((c.sequence for c in self.components), default=0) + 1

    @property
    def descriptor(self) -> EnclosureDescriptor:
        return self._descriptor

    def snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(
            enclosure_type=self.enclosure_type,
            descriptor=self._descriptor,
            components=tuple(self.components),
            grid_enabled=self.grid_enabled,
            grid_size_mm=self.grid_size_mm,
            unit=self.unit,
        )

    def get(self, component_id: str) -> PlacedComponent | None:
        return next((c for c in self.components if c.id == component_id), None)

    def mark_dirty(self):
        self.dirty = True

    def mark_clean(self):
        self.dirty = False

    def set_enclosure(self, enclosure_type: str):
        if enclosure_type == self.enclosure_type:
            return
        self._descriptor = lookup_enclosure(enclosure_type)
        self.enclosure_type = enclosure_type
        self.mark_dirty()

    def set_grid(self, enabled: bool, size_mm: float | None = None):
        self.grid_enabled = enabled
        if size_mm is not None:
            self.grid_size_mm = size_mm
        self.mark_dirty()

    def set_unit(self, unit: MeasurementUnit):
        self.unit = unit
        self.mark_dirty()

    def add_component(self, component_type: str) -> PlacedComponent:
        spec = lookup_component(component_type)

        x = y = 0.0
        if self.grid_enabled and self.grid_size_mm > 0:
            x = snap_to_grid(x, self.grid_size_mm)
            y = snap_to_grid(y, self.grid_size_mm)

        component = PlacedComponent(
            id=f"comp-{uuid.uuid4().hex[:12]}",
            type=component_type,
            x=x,
            y=y,
            side=Side.FRONT,
            rotation=0,
            exclude_from_print=spec.is_footprint_guide,
            sequence=self._next_sequence,
        )
        self._next_sequence += 1
        self.components.append(component)
        self.mark_dirty()
        log.debug("Added %s (%s)", component.id, component_type)
        return component

    def _replace(self, component_id: str, **changes) -> PlacedComponent | None:
        for i, component in enumerate(self.components):
            if component.id == component_id:
                updated = replace(component, **changes)
                self.components[i] = updated
                self.mark_dirty()
                return updated
        return None

    def apply_move(self, result: MoveResult) -> PlacedComponent | None:
        if result.side_changed:
            log.debug("Moving %s to %s", result.component_id, result.side.value)
        return self._replace(result.component_id, x=result.x, y=result.y, side=result.side)

    def rotate_component(self, component_id: str) -> PlacedComponent | None:
        component = self.get(component_id)
        if component is None:
            return None
        return self._replace(component_id, rotation=0 if component.rotation == 90 else 90)

    def toggle_print(self, component_id: str) -> PlacedComponent | None:
        component = self.get(component_id)
        if component is None:
            return None
        return self._replace(component_id, exclude_from_print=not component.exclude_from_print)

    def delete_component(self, component_id: str) -> bool:
        remaining = [c for c in self.components if c.id != component_id]
        if len(remaining) == len(self.components):
            return False
        self.components = remaining
        self.mark_dirty()
        return True
