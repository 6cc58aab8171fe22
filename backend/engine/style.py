import math
from collections import Counter

import numpy as np

from lexicon.themes import ThemeStyle

from .schemas import ExtractedStyle, GeneratedObject, ObjectBase, PhysicsSettings
from .synthesizer import clamp, clamp_color, shift_color, unique_tags

STYLE_WEIGHT = 0.4


def extract_style(objects: list[GeneratedObject]) -> ExtractedStyle:
    """Aggregate color, roughness, material, noise and tags over objects.

    Empty input yields the ExtractedStyle defaults.
    """
    if not objects:
        return ExtractedStyle()

    colors = np.array([obj.base.color for obj in objects], dtype=float)
    roughness = np.array([obj.base.roughness for obj in objects], dtype=float)
    mean_color = colors.mean(axis=0)

    # most_common keeps first-encountered order among equal counts, so a tie
    # goes to whichever value appeared first in the input.
    material = Counter(obj.physics.material for obj in objects).most_common(1)[0][0]
    noise_type = Counter(obj.noise.type for obj in objects).most_common(1)[0][0]

    threshold = math.ceil(len(objects) / 2)
    tag_counts = Counter(tag for obj in objects for tag in dict.fromkeys(obj.meta.tags))
    common_tags = [tag for tag, count in tag_counts.items() if count >= threshold]

    return ExtractedStyle(
        average_color=(float(mean_color[0]), float(mean_color[1]), float(mean_color[2])),
        average_roughness=float(roughness.mean()),
        dominant_material=material,
        dominant_noise_type=noise_type,
        common_tags=common_tags,
    )


def blend_toward_style(obj: GeneratedObject, style: ExtractedStyle) -> GeneratedObject:
    """Pull color and roughness toward a style, returning a new object."""
    color = np.asarray(obj.base.color, dtype=float)
    target = np.asarray(style.average_color, dtype=float)
    blended = color + STYLE_WEIGHT * (target - color)
    roughness = (1 - STYLE_WEIGHT) * obj.base.roughness + STYLE_WEIGHT * style.average_roughness
    base = ObjectBase(
        color=clamp_color(blended),
        roughness=clamp(roughness),
        transparency=obj.base.transparency,
    )
    return obj.model_copy(update={"base": base}, deep=True)


def apply_theme(obj: GeneratedObject, theme: ThemeStyle) -> GeneratedObject:
    base = obj.base.model_copy(update={"color": shift_color(obj.base.color, theme.color_shift)})
    physics = obj.physics
    if theme.material is not None:
        physics = PhysicsSettings(
            material=theme.material,
            density=obj.physics.density,
            break_pattern=obj.physics.break_pattern,
        )
    meta = obj.meta.model_copy(update={"tags": unique_tags(obj.meta.tags, theme.tags)})
    return obj.model_copy(update={"base": base, "physics": physics, "meta": meta}, deep=True)


def recolor(obj: GeneratedObject, color) -> GeneratedObject:
    base = obj.base.model_copy(update={"color": clamp_color(color)})
    return obj.model_copy(update={"base": base}, deep=True)


def add_tags(obj: GeneratedObject, *tags: str) -> GeneratedObject:
    meta = obj.meta.model_copy(update={"tags": unique_tags(obj.meta.tags, tags)})
    return obj.model_copy(update={"meta": meta}, deep=True)
