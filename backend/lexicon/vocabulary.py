"""Closed vocabularies shared by the lexicon tables and the object schema."""

from enum import Enum


class NoiseType(str, Enum):
    PERLIN = "perlin"
    WORLEY = "worley"
    CRACKLE = "crackle"


class MaterialType(str, Enum):
    STONE = "stone"
    WOOD = "wood"
    METAL = "metal"
    GLASS = "glass"
    ORGANIC = "organic"
    CRYSTAL = "crystal"
    LIQUID = "liquid"


class BreakPattern(str, Enum):
    CRUMBLE = "crumble"
    SHATTER = "shatter"
    SPLINTER = "splinter"
    MELT = "melt"
    DISSOLVE = "dissolve"


class GradientAxis(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"
    RADIAL = "radial"


class GenerationMethod(str, Enum):
    KEYWORD = "keyword"
    TEMPLATE = "template"
    RANDOM = "random"
    HYBRID = "hybrid"


Color3 = tuple[float, float, float]

NEUTRAL_COLOR: Color3 = (0.5, 0.5, 0.5)
ZERO_SHIFT: Color3 = (0.0, 0.0, 0.0)
