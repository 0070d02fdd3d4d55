import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from .catalog import COMPONENT_TYPES, ENCLOSURE_TYPES, normalize_enclosure_type
from .config import CANVAS_RULES
from .document import Document
from .hit_test import timestamp_from_id
from .models import MeasurementUnit, PlacedComponent, Side
from .transform import ViewTransform, coerce_rotation

log = logging.getLogger(__name__)

PROJECT_SUFFIX = ".enclosure"


@dataclass
class Project:
    document: Document
    view: ViewTransform
    legacy_enclosure: str | None = None


def _read_text(path: Path) -> str:
    encodings = ["utf-8-sig", "utf-8", "utf-16", "cp1252", "latin-1"]
    for encoding in encodings:
        try:
            with open(path, "r", encoding=encoding) as f:
                return f.read()
        except (UnicodeDecodeError, UnicodeError):
            continue
    raise ValueError("Could not decode file with any supported encoding")


def _parse_component(raw: dict, index: int) -> PlacedComponent | None:
    component_type = raw.get("type")
    spec = COMPONENT_TYPES.get(component_type)
    if spec is None:
        log.warning("Skipping component %d: unknown type %r", index, component_type)
        return None

    try:
        side = Side(raw.get("side", Side.FRONT.value))
        x = float(raw.get("x", 0))
        y = float(raw.get("y", 0))
    except (TypeError, ValueError):
        log.warning("Skipping component %d: bad side or position", index)
        return None

    exclude = raw.get("excludeFromPrint")
    if not isinstance(exclude, bool):
        exclude = spec.is_footprint_guide

    rotation = raw.get("rotation", 0)
    if rotation not in (0, 90):
        log.warning("Component %d has unsupported rotation %r, using 0", index, rotation)
        rotation = 0

    sequence = raw.get("sequence")
    return PlacedComponent(
        id=str(raw.get("id") or f"comp-{index}"),
        type=component_type,
        x=x,
        y=y,
        side=side,
        rotation=int(rotation),
        exclude_from_print=exclude,
        sequence=sequence if _has_sequence(raw) else 0,
    )


def _has_sequence(raw: dict) -> bool:
    sequence = raw.get("sequence")
    return isinstance(sequence, int) and not isinstance(sequence, bool)


def _assign_sequences(raw_components: list[dict], components: list[PlacedComponent]) -> list[PlacedComponent]:
    missing = [i for i, raw in enumerate(raw_components) if not _has_sequence(raw)]
    if not missing:
        return components

    # Older files carry creation order only as a timestamp inside the id.
    # Those components are numbered after every explicit sequence.
    start = max((c.sequence for i, c in enumerate(components) if i not in missing), default=0)
    missing.sort(key=lambda i: (timestamp_from_id(components[i].id), i))
    sequenced = list(components)
    for seq, i in enumerate(missing, start=start + 1):
        sequenced[i] = replace(components[i], sequence=seq)
    return sequenced


def _number(value, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def _read_zoom(value) -> float:
    # Older files kept one zoom per side.
    if isinstance(value, dict):
        value = value.get("Front")
    zoom = _number(value, 1.0)
    return zoom if zoom > 0 else 1.0


def _grid_size(value) -> float:
    size = _number(value, CANVAS_RULES.default_grid_mm)
    return size if size > 0 else CANVAS_RULES.default_grid_mm


def parse_project(data: dict) -> Project:
    if not isinstance(data, dict):
        raise ValueError("Project file must contain a JSON object")

    raw_type = data.get("enclosureType")
    if not isinstance(raw_type, str) or not raw_type:
        raise ValueError("Project file has no enclosure type")

    enclosure_type = normalize_enclosure_type(raw_type)
    if enclosure_type not in ENCLOSURE_TYPES:
        raise ValueError(f"Unknown enclosure type: {raw_type}")

    raw_components = data.get("components") or []
    if not isinstance(raw_components, list):
        raise ValueError("'components' must be a list")

    kept_raw: list[dict] = []
    components: list[PlacedComponent] = []
    for i, raw in enumerate(raw_components):
        if not isinstance(raw, dict):
            log.warning("Skipping component %d: not an object", i)
            continue
        component = _parse_component(raw, i)
        if component is None:
            continue
        kept_raw.append(raw)
        components.append(component)

    try:
        unit = MeasurementUnit(data.get("unit", MeasurementUnit.METRIC.value))
    except ValueError:
        unit = MeasurementUnit.METRIC

    document = Document(
        enclosure_type=enclosure_type,
        components=_assign_sequences(kept_raw, components),
        grid_enabled=bool(data.get("gridEnabled", False)),
        grid_size_mm=_grid_size(data.get("gridSize")),
        unit=unit,
    )
    view = ViewTransform(
        zoom=_read_zoom(data.get("zoom")),
        rotation=coerce_rotation(data.get("rotation", 0)),
    )
    legacy = raw_type if raw_type != enclosure_type else None
    return Project(document=document, view=view, legacy_enclosure=legacy)


def load_project(path: str | Path) -> Project:
    text = _read_text(Path(path))
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Not a valid project file: {e}") from e

    project = parse_project(data)
    log.info(
        "Loaded %d components (%s) from %s",
        len(project.document.components), project.document.enclosure_type, path,
    )
    return project


def project_to_dict(document: Document, view: ViewTransform) -> dict:
    return {
        "enclosureType": document.enclosure_type,
        "components": [
            {
                "id": c.id,
                "type": c.type,
                "x": c.x,
                "y": c.y,
                "side": c.side.value,
                "rotation": c.rotation,
                "excludeFromPrint": c.exclude_from_print,
                "sequence": c.sequence,
            }
            for c in document.components
        ],
        "gridEnabled": document.grid_enabled,
        "gridSize": document.grid_size_mm,
        "zoom": view.zoom,
        "rotation": view.rotation,
        "unit": document.unit.value,
    }


def save_project(path: str | Path, document: Document, view: ViewTransform):
    path = Path(path)
    path.write_text(json.dumps(project_to_dict(document, view), indent=2), encoding="utf-8")
    document.mark_clean()
    log.info("Saved project to %s", path)
