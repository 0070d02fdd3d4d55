from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    FRONT = "Front"
    TOP = "Top"
    BOTTOM = "Bottom"
    LEFT = "Left"
    RIGHT = "Right"


class CornerStyle(str, Enum):
    ROUNDED = "rounded"
    SHARP = "sharp"


class Shape(str, Enum):
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    SQUARE = "square"


class MeasurementUnit(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


FOOTPRINT_GUIDES = "Footprint Guides"


@dataclass(frozen=True)
class EnclosureDescriptor:
    width: float
    height: float
    depth: float
    corner_style: CornerStyle
    manufacturer: str
    display_name: str
    rotates_labels: bool = False
    is_trapezoidal: bool = False
    front_depth: float | None = None


@dataclass(frozen=True)
class ComponentSpec:
    name: str
    drill_size: float
    imperial_label: str
    category: str
    shape: Shape = Shape.CIRCLE
    width: float | None = None
    height: float | None = None

    @property
    def is_rectangular(self) -> bool:
        return self.shape in (Shape.RECTANGLE, Shape.SQUARE)

    @property
    def is_footprint_guide(self) -> bool:
        return self.category == FOOTPRINT_GUIDES


@dataclass(frozen=True)
class SideDimensions:
    width: float
    height: float
    corner_style: CornerStyle
    is_trapezoidal: bool = False
    front_width: float | None = None


@dataclass(frozen=True)
class PlacedComponent:
    id: str
    type: str
    x: float
    y: float
    side: Side
    rotation: int = 0
    exclude_from_print: bool = False
    sequence: int = 0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x: float, y: float) -> bool:
        return (
            self.x <= x <= self.x + self.width
            and self.y <= y <= self.y + self.height
        )

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )
