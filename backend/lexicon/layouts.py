"""Spatial vocabulary: group layouts, neighbor directions and relations."""

from dataclasses import dataclass
from enum import Enum

from .vocabulary import Color3, GradientAxis


class GroupType(str, Enum):
    WALL = "wall"
    FLOOR = "floor"
    COLUMN = "column"
    STRUCTURE = "structure"
    TERRAIN = "terrain"


@dataclass(frozen=True, slots=True)
class GroupLayout:
    extent: tuple[int, int, int]
    axis: GradientAxis


GROUP_LAYOUTS: dict[GroupType, GroupLayout] = {
    GroupType.WALL: GroupLayout((4, 3, 1), GradientAxis.Y),
    GroupType.FLOOR: GroupLayout((4, 1, 4), GradientAxis.RADIAL),
    GroupType.COLUMN: GroupLayout((1, 4, 1), GradientAxis.Y),
    GroupType.STRUCTURE: GroupLayout((3, 3, 3), GradientAxis.RADIAL),
    GroupType.TERRAIN: GroupLayout((5, 1, 5), GradientAxis.X),
}

# Extra shift per cell, scaled by the cell's position factor.
POSITION_COLOR_SHIFT: Color3 = (0.15, 0.10, 0.05)


class Direction(str, Enum):
    POS_X = "x"
    NEG_X = "-x"
    POS_Y = "y"
    NEG_Y = "-y"
    POS_Z = "z"
    NEG_Z = "-z"


Position = tuple[int, int, int]

ORIGIN: Position = (0, 0, 0)

DIRECTION_OFFSETS: dict[Direction, Position] = {
    Direction.POS_X: (1, 0, 0),
    Direction.NEG_X: (-1, 0, 0),
    Direction.POS_Y: (0, 1, 0),
    Direction.NEG_Y: (0, -1, 0),
    Direction.POS_Z: (0, 0, 1),
    Direction.NEG_Z: (0, 0, -1),
}


class Relation(str, Enum):
    SIMILAR = "similar"
    CONTRAST = "contrast"
    GRADIENT = "gradient"
    COMPLEMENT = "complement"


# Only the shift-based relations carry a vector; similar/contrast are blends.
RELATION_SHIFTS: dict[Relation, Color3] = {
    Relation.GRADIENT: (0.1, 0.05, -0.05),
    Relation.COMPLEMENT: (-0.15, 0.1, 0.15),
}

VARIATION_WORDS: tuple[str, ...] = ("weathered", "mossy", "polished", "ancient", "dark")


def get_group_layout(name: str) -> GroupLayout | None:
    try:
        return GROUP_LAYOUTS[GroupType(name.strip().lower())]
    except ValueError:
        return None


def get_group_type_names() -> list[str]:
    return [g.value for g in GROUP_LAYOUTS]


def direction_offset(name: str) -> Position | None:
    try:
        return DIRECTION_OFFSETS[Direction(name.strip().lower())]
    except ValueError:
        return None
