"""Face labels under a 90° canvas rotation.

Rotating the whole cross layout clockwise moves the Left face to the top of
the screen, Top to the right, and so on. Enclosures flagged ``rotates_labels``
show the label matching where a face now appears; the side stored on each
component always stays the physical face.
"""

from .models import Side

_ROTATED_LABEL = {
    Side.FRONT: Side.FRONT,
    Side.LEFT: Side.TOP,
    Side.TOP: Side.RIGHT,
    Side.RIGHT: Side.BOTTOM,
    Side.BOTTOM: Side.LEFT,
}

_PHYSICAL_SIDE = {label: side for side, label in _ROTATED_LABEL.items()}


def _remaps(rotation: int, supports_rotation: bool) -> bool:
    return supports_rotation and rotation == 90


def display_label(side: Side, rotation: int, supports_rotation: bool) -> Side:
    if not _remaps(rotation, supports_rotation):
        return side
    return _ROTATED_LABEL[side]


def actual_side_for_drag(label: Side, rotation: int, supports_rotation: bool) -> Side:
    if not _remaps(rotation, supports_rotation):
        return label
    return _PHYSICAL_SIDE[label]
