"""Descriptive modifiers and gradient patterns.

Modifiers shift color and roughness additively without choosing a material.
Gradient patterns request per-axis color variation; an object keeps at most
one gradient per axis.
"""

from dataclasses import dataclass
from enum import Enum

from .vocabulary import Color3, GradientAxis, ZERO_SHIFT


class Modifier(str, Enum):
    DARK = "dark"
    LIGHT = "light"
    BRIGHT = "bright"
    PALE = "pale"
    DEEP = "deep"
    WEATHERED = "weathered"
    POLISHED = "polished"
    ROUGH = "rough"
    SMOOTH = "smooth"
    OLD = "old"
    NEW = "new"
    ANCIENT = "ancient"
    FRESH = "fresh"
    WET = "wet"
    DRY = "dry"
    DUSTY = "dusty"
    SHINY = "shiny"
    MATTE = "matte"
    GLOSSY = "glossy"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    PURPLE = "purple"
    PINK = "pink"
    WHITE = "white"
    BLACK = "black"
    GRAY = "gray"
    GREY = "grey"
    BROWN = "brown"
    CYAN = "cyan"
    MAGENTA = "magenta"


@dataclass(frozen=True, slots=True)
class ModifierEffect:
    color_shift: Color3 = ZERO_SHIFT
    roughness_shift: float = 0.0


MODIFIERS: dict[Modifier, ModifierEffect] = {
    Modifier.DARK: ModifierEffect((-0.2, -0.2, -0.2)),
    Modifier.LIGHT: ModifierEffect((0.2, 0.2, 0.2)),
    Modifier.BRIGHT: ModifierEffect((0.15, 0.15, 0.15), -0.1),
    Modifier.PALE: ModifierEffect((0.1, 0.1, 0.12)),
    Modifier.DEEP: ModifierEffect((-0.1, -0.1, -0.05)),
    Modifier.WEATHERED: ModifierEffect(roughness_shift=0.2),
    Modifier.POLISHED: ModifierEffect(roughness_shift=-0.3),
    Modifier.ROUGH: ModifierEffect(roughness_shift=0.25),
    Modifier.SMOOTH: ModifierEffect(roughness_shift=-0.2),
    Modifier.OLD: ModifierEffect(roughness_shift=0.15),
    Modifier.NEW: ModifierEffect(roughness_shift=-0.1),
    Modifier.ANCIENT: ModifierEffect(roughness_shift=0.2),
    Modifier.FRESH: ModifierEffect(roughness_shift=-0.15),
    Modifier.WET: ModifierEffect(roughness_shift=-0.25),
    Modifier.DRY: ModifierEffect(roughness_shift=0.1),
    Modifier.DUSTY: ModifierEffect(roughness_shift=0.2),
    Modifier.SHINY: ModifierEffect(roughness_shift=-0.35),
    Modifier.MATTE: ModifierEffect(roughness_shift=0.2),
    Modifier.GLOSSY: ModifierEffect(roughness_shift=-0.4),
    # Color words
    Modifier.RED: ModifierEffect((0.3, -0.1, -0.1)),
    Modifier.BLUE: ModifierEffect((-0.1, -0.05, 0.3)),
    Modifier.GREEN: ModifierEffect((-0.1, 0.25, -0.1)),
    Modifier.YELLOW: ModifierEffect((0.25, 0.2, -0.15)),
    Modifier.ORANGE: ModifierEffect((0.3, 0.1, -0.15)),
    Modifier.PURPLE: ModifierEffect((0.15, -0.1, 0.25)),
    Modifier.PINK: ModifierEffect((0.25, 0.05, 0.15)),
    Modifier.WHITE: ModifierEffect((0.3, 0.3, 0.3)),
    Modifier.BLACK: ModifierEffect((-0.35, -0.35, -0.35)),
    Modifier.GRAY: ModifierEffect((0.0, 0.0, 0.0)),
    Modifier.GREY: ModifierEffect((0.0, 0.0, 0.0)),
    Modifier.BROWN: ModifierEffect((0.1, -0.05, -0.15)),
    Modifier.CYAN: ModifierEffect((-0.1, 0.2, 0.25)),
    Modifier.MAGENTA: ModifierEffect((0.2, -0.1, 0.2)),
}


class GradientPattern(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    RADIAL = "radial"
    CENTER = "center"
    EDGE = "edge"
    LAYERED = "layered"


@dataclass(frozen=True, slots=True)
class GradientStep:
    axis: GradientAxis
    factor: float
    color_shift: Color3


_Y = GradientAxis.Y
_X = GradientAxis.X
_R = GradientAxis.RADIAL

GRADIENT_PATTERNS: dict[GradientPattern, tuple[GradientStep, ...]] = {
    GradientPattern.TOP: (GradientStep(_Y, 0.3, (0.1, 0.1, 0.1)),),
    GradientPattern.BOTTOM: (GradientStep(_Y, -0.3, (-0.1, -0.1, -0.1)),),
    GradientPattern.VERTICAL: (GradientStep(_Y, 0.4, (0.15, 0.1, 0.05)),),
    GradientPattern.HORIZONTAL: (GradientStep(_X, 0.3, (0.1, 0.05, 0.1)),),
    GradientPattern.RADIAL: (GradientStep(_R, 0.25, (-0.1, -0.1, 0.1)),),
    GradientPattern.CENTER: (GradientStep(_R, -0.3, (0.1, 0.1, 0.15)),),
    GradientPattern.EDGE: (GradientStep(_R, 0.35, (-0.15, -0.1, -0.05)),),
    GradientPattern.LAYERED: (
        GradientStep(_Y, 0.25, (0.1, 0.05, 0.0)),
        GradientStep(_X, 0.15, (0.0, 0.05, 0.1)),
    ),
}

_MODIFIER_BY_TOKEN = {m.value: effect for m, effect in MODIFIERS.items()}
_GRADIENT_BY_TOKEN = {p.value: steps for p, steps in GRADIENT_PATTERNS.items()}


def get_modifier(token: str) -> ModifierEffect | None:
    return _MODIFIER_BY_TOKEN.get(token)


def get_gradient_steps(token: str) -> tuple[GradientStep, ...]:
    return _GRADIENT_BY_TOKEN.get(token, ())
