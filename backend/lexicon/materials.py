"""Material keyword table.

Each keyword a prompt may contain maps to a preset of visual and physical
parameters. Dict order is definition order; the matcher and the template
listing both rely on it.
"""

from dataclasses import dataclass, field
from enum import Enum

from .vocabulary import BreakPattern, Color3, MaterialType, NoiseType, NEUTRAL_COLOR


class MaterialKeyword(str, Enum):
    STONE = "stone"
    ROCK = "rock"
    GRANITE = "granite"
    MARBLE = "marble"
    COBBLESTONE = "cobblestone"
    WOOD = "wood"
    OAK = "oak"
    BIRCH = "birch"
    BARK = "bark"
    METAL = "metal"
    IRON = "iron"
    STEEL = "steel"
    GOLD = "gold"
    COPPER = "copper"
    RUST = "rust"
    CRYSTAL = "crystal"
    GLASS = "glass"
    ICE = "ice"
    GEM = "gem"
    GRASS = "grass"
    MOSS = "moss"
    DIRT = "dirt"
    SAND = "sand"
    BRICK = "brick"
    CONCRETE = "concrete"
    MAGIC = "magic"
    LAVA = "lava"
    WATER = "water"


@dataclass(frozen=True, slots=True)
class MaterialPreset:
    keyword: MaterialKeyword
    color: Color3 = NEUTRAL_COLOR
    roughness: float = 0.5
    transparency: float = 1.0
    noise_type: NoiseType = NoiseType.PERLIN
    noise_scale: float = 8.0
    material: MaterialType = MaterialType.STONE
    break_pattern: BreakPattern = BreakPattern.CRUMBLE
    density: float = 2.5
    tags: tuple[str, ...] = field(default_factory=tuple)


_K = MaterialKeyword
_N = NoiseType
_M = MaterialType
_B = BreakPattern

MATERIALS: dict[MaterialKeyword, MaterialPreset] = {
    # Stone
    _K.STONE: MaterialPreset(_K.STONE, (0.5, 0.48, 0.45), 0.8, noise_type=_N.PERLIN, noise_scale=8,
                             material=_M.STONE, break_pattern=_B.CRUMBLE, density=2.5, tags=("stone", "natural")),
    _K.ROCK: MaterialPreset(_K.ROCK, (0.45, 0.42, 0.4), 0.85, noise_type=_N.PERLIN, noise_scale=6,
                            material=_M.STONE, break_pattern=_B.CRUMBLE, density=2.6, tags=("rock", "natural")),
    _K.GRANITE: MaterialPreset(_K.GRANITE, (0.55, 0.52, 0.5), 0.6, noise_type=_N.WORLEY, noise_scale=12,
                               material=_M.STONE, break_pattern=_B.SHATTER, density=2.7, tags=("granite", "stone")),
    _K.MARBLE: MaterialPreset(_K.MARBLE, (0.9, 0.88, 0.85), 0.2, noise_type=_N.PERLIN, noise_scale=4,
                              material=_M.STONE, break_pattern=_B.SHATTER, density=2.7,
                              tags=("marble", "stone", "elegant")),
    _K.COBBLESTONE: MaterialPreset(_K.COBBLESTONE, (0.45, 0.43, 0.4), 0.9, noise_type=_N.WORLEY, noise_scale=10,
                                   material=_M.STONE, break_pattern=_B.CRUMBLE, density=2.4,
                                   tags=("cobblestone", "stone", "path")),
    # Wood
    _K.WOOD: MaterialPreset(_K.WOOD, (0.55, 0.35, 0.2), 0.6, noise_type=_N.PERLIN, noise_scale=16,
                            material=_M.WOOD, break_pattern=_B.SPLINTER, density=0.7, tags=("wood", "natural")),
    _K.OAK: MaterialPreset(_K.OAK, (0.6, 0.4, 0.25), 0.55, noise_type=_N.PERLIN, noise_scale=20,
                           material=_M.WOOD, break_pattern=_B.SPLINTER, density=0.75, tags=("oak", "wood")),
    _K.BIRCH: MaterialPreset(_K.BIRCH, (0.85, 0.8, 0.7), 0.4, noise_type=_N.PERLIN, noise_scale=18,
                             material=_M.WOOD, break_pattern=_B.SPLINTER, density=0.65,
                             tags=("birch", "wood", "light")),
    _K.BARK: MaterialPreset(_K.BARK, (0.35, 0.25, 0.18), 0.95, noise_type=_N.CRACKLE, noise_scale=6,
                            material=_M.WOOD, break_pattern=_B.SPLINTER, density=0.5, tags=("bark", "wood", "tree")),
    # Metal
    _K.METAL: MaterialPreset(_K.METAL, (0.6, 0.6, 0.65), 0.3, noise_type=_N.WORLEY, noise_scale=4,
                             material=_M.METAL, break_pattern=_B.SHATTER, density=7.8, tags=("metal", "industrial")),
    _K.IRON: MaterialPreset(_K.IRON, (0.5, 0.5, 0.52), 0.4, noise_type=_N.PERLIN, noise_scale=6,
                            material=_M.METAL, break_pattern=_B.SHATTER, density=7.9, tags=("iron", "metal")),
    _K.STEEL: MaterialPreset(_K.STEEL, (0.65, 0.68, 0.7), 0.15, noise_type=_N.WORLEY, noise_scale=3,
                             material=_M.METAL, break_pattern=_B.SHATTER, density=8.0,
                             tags=("steel", "metal", "modern")),
    _K.GOLD: MaterialPreset(_K.GOLD, (0.95, 0.8, 0.3), 0.1, noise_type=_N.PERLIN, noise_scale=2,
                            material=_M.METAL, break_pattern=_B.SHATTER, density=19.3,
                            tags=("gold", "metal", "precious")),
    _K.COPPER: MaterialPreset(_K.COPPER, (0.85, 0.55, 0.35), 0.35, noise_type=_N.WORLEY, noise_scale=5,
                              material=_M.METAL, break_pattern=_B.SHATTER, density=8.9, tags=("copper", "metal")),
    _K.RUST: MaterialPreset(_K.RUST, (0.6, 0.35, 0.2), 0.85, noise_type=_N.WORLEY, noise_scale=8,
                            material=_M.METAL, break_pattern=_B.CRUMBLE, density=5.2,
                            tags=("rust", "metal", "weathered")),
    # Crystal / glass
    _K.CRYSTAL: MaterialPreset(_K.CRYSTAL, (0.8, 0.85, 0.95), 0.05, 0.4, _N.WORLEY, 3,
                               _M.CRYSTAL, _B.SHATTER, 3.2, ("crystal", "fantasy")),
    _K.GLASS: MaterialPreset(_K.GLASS, (0.9, 0.92, 0.95), 0.02, 0.2, _N.PERLIN, 1,
                             _M.GLASS, _B.SHATTER, 2.5, ("glass", "transparent")),
    _K.ICE: MaterialPreset(_K.ICE, (0.85, 0.92, 0.98), 0.15, 0.5, _N.CRACKLE, 4,
                           _M.CRYSTAL, _B.SHATTER, 0.9, ("ice", "cold", "frozen")),
    _K.GEM: MaterialPreset(_K.GEM, (0.6, 0.2, 0.8), 0.05, 0.3, _N.WORLEY, 2,
                           _M.CRYSTAL, _B.SHATTER, 3.5, ("gem", "precious", "fantasy")),
    # Natural / organic
    _K.GRASS: MaterialPreset(_K.GRASS, (0.3, 0.5, 0.2), 0.7, noise_type=_N.PERLIN, noise_scale=12,
                             material=_M.ORGANIC, break_pattern=_B.CRUMBLE, density=0.3,
                             tags=("grass", "natural", "green")),
    _K.MOSS: MaterialPreset(_K.MOSS, (0.25, 0.4, 0.2), 0.9, noise_type=_N.PERLIN, noise_scale=10,
                            material=_M.ORGANIC, break_pattern=_B.CRUMBLE, density=0.2,
                            tags=("moss", "natural", "green")),
    _K.DIRT: MaterialPreset(_K.DIRT, (0.4, 0.3, 0.2), 0.95, noise_type=_N.PERLIN, noise_scale=8,
                            material=_M.ORGANIC, break_pattern=_B.CRUMBLE, density=1.5,
                            tags=("dirt", "earth", "natural")),
    _K.SAND: MaterialPreset(_K.SAND, (0.85, 0.75, 0.55), 0.85, noise_type=_N.PERLIN, noise_scale=20,
                            material=_M.ORGANIC, break_pattern=_B.CRUMBLE, density=1.6,
                            tags=("sand", "beach", "desert")),
    # Building
    _K.BRICK: MaterialPreset(_K.BRICK, (0.7, 0.35, 0.25), 0.75, noise_type=_N.PERLIN, noise_scale=6,
                             material=_M.STONE, break_pattern=_B.CRUMBLE, density=1.9,
                             tags=("brick", "building", "red")),
    _K.CONCRETE: MaterialPreset(_K.CONCRETE, (0.6, 0.58, 0.55), 0.7, noise_type=_N.PERLIN, noise_scale=4,
                                material=_M.STONE, break_pattern=_B.CRUMBLE, density=2.4,
                                tags=("concrete", "building", "modern")),
    # Fantasy
    _K.MAGIC: MaterialPreset(_K.MAGIC, (0.6, 0.3, 0.9), 0.1, 0.4, _N.WORLEY, 5,
                             _M.CRYSTAL, _B.DISSOLVE, 1.0, ("magic", "fantasy", "glowing")),
    _K.LAVA: MaterialPreset(_K.LAVA, (0.95, 0.4, 0.1), 0.6, noise_type=_N.CRACKLE, noise_scale=6,
                            material=_M.LIQUID, break_pattern=_B.MELT, density=3.1,
                            tags=("lava", "hot", "volcanic")),
    _K.WATER: MaterialPreset(_K.WATER, (0.3, 0.5, 0.8), 0.05, 0.3, _N.PERLIN, 8,
                             _M.LIQUID, _B.DISSOLVE, 1.0, ("water", "liquid", "blue")),
}

_BY_TOKEN: dict[str, MaterialPreset] = {k.value: preset for k, preset in MATERIALS.items()}


def get_material(token: str) -> MaterialPreset | None:
    """Exact, case-sensitive lookup of a canonical English token."""
    return _BY_TOKEN.get(token)


def get_template_names() -> list[str]:
    return [k.value for k in MATERIALS]
