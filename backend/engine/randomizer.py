from dataclasses import dataclass, field

import numpy as np

from lexicon.materials import MaterialPreset
from lexicon.vocabulary import BreakPattern, Color3, MaterialType, NoiseType, NEUTRAL_COLOR

RANDOM_NOISE_TYPES = (NoiseType.PERLIN, NoiseType.WORLEY, NoiseType.CRACKLE)
RANDOM_MATERIALS = (
    MaterialType.STONE,
    MaterialType.WOOD,
    MaterialType.METAL,
    MaterialType.GLASS,
    MaterialType.ORGANIC,
    MaterialType.CRYSTAL,
    MaterialType.LIQUID,
)
RANDOM_BREAK_PATTERNS = (
    BreakPattern.CRUMBLE,
    BreakPattern.SHATTER,
    BreakPattern.SPLINTER,
    BreakPattern.MELT,
    BreakPattern.DISSOLVE,
)
OPAQUE_PROBABILITY = 0.7


@dataclass(slots=True)
class BaseParameters:
    """Unshifted parameters an object is assembled from."""

    color: Color3 = NEUTRAL_COLOR
    roughness: float = 0.5
    transparency: float = 1.0
    noise_type: NoiseType = NoiseType.PERLIN
    noise_scale: float = 8.0
    material: MaterialType = MaterialType.STONE
    break_pattern: BreakPattern = BreakPattern.CRUMBLE
    density: float = 2.5
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_preset(cls, preset: MaterialPreset) -> "BaseParameters":
        return cls(
            color=preset.color,
            roughness=preset.roughness,
            transparency=preset.transparency,
            noise_type=preset.noise_type,
            noise_scale=float(preset.noise_scale),
            material=preset.material,
            break_pattern=preset.break_pattern,
            density=preset.density,
            tags=list(preset.tags),
        )


def _pick(rng: np.random.Generator, options: tuple):
    return options[int(rng.integers(len(options)))]


def random_parameters(rng: np.random.Generator) -> BaseParameters:
    color = rng.uniform(0.1, 0.9, size=3)
    if rng.random() < OPAQUE_PROBABILITY:
        transparency = 1.0
    else:
        transparency = float(rng.uniform(0.3, 0.8))
    return BaseParameters(
        color=(float(color[0]), float(color[1]), float(color[2])),
        roughness=float(rng.uniform(0.1, 0.9)),
        transparency=transparency,
        noise_type=_pick(rng, RANDOM_NOISE_TYPES),
        noise_scale=float(rng.uniform(2.0, 17.0)),
        material=_pick(rng, RANDOM_MATERIALS),
        break_pattern=_pick(rng, RANDOM_BREAK_PATTERNS),
        density=float(rng.uniform(0.5, 8.5)),
        tags=["generated", "random"],
    )
