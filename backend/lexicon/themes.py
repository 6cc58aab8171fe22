"""Named themes applied on top of contextual generation."""

from dataclasses import dataclass
from enum import Enum

from .vocabulary import Color3, MaterialType


class Theme(str, Enum):
    MEDIEVAL = "medieval"
    FANTASY = "fantasy"
    INDUSTRIAL = "industrial"
    NATURE = "nature"
    MODERN = "modern"
    VOLCANIC = "volcanic"
    ARCTIC = "arctic"


@dataclass(frozen=True, slots=True)
class ThemeStyle:
    color_shift: Color3
    material: MaterialType | None = None
    tags: tuple[str, ...] = ()


THEMES: dict[Theme, ThemeStyle] = {
    Theme.MEDIEVAL: ThemeStyle((-0.05, -0.05, -0.08), MaterialType.STONE, ("medieval", "castle")),
    Theme.FANTASY: ThemeStyle((0.08, -0.02, 0.12), None, ("fantasy", "magical")),
    Theme.INDUSTRIAL: ThemeStyle((-0.05, -0.03, 0.0), MaterialType.METAL, ("industrial", "urban")),
    Theme.NATURE: ThemeStyle((-0.05, 0.1, -0.05), MaterialType.ORGANIC, ("nature", "natural")),
    Theme.MODERN: ThemeStyle((0.05, 0.05, 0.05), None, ("modern", "clean")),
    Theme.VOLCANIC: ThemeStyle((0.15, -0.05, -0.1), None, ("volcanic", "hot")),
    Theme.ARCTIC: ThemeStyle((0.05, 0.08, 0.15), MaterialType.CRYSTAL, ("arctic", "cold")),
}


def get_theme(name: str) -> ThemeStyle | None:
    try:
        return THEMES[Theme(name.strip().lower())]
    except ValueError:
        return None


def get_theme_names() -> list[str]:
    return [t.value for t in THEMES]
