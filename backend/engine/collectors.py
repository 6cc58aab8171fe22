from dataclasses import dataclass

import numpy as np

from lexicon.modifiers import get_gradient_steps, get_modifier
from lexicon.vocabulary import GradientAxis

from .schemas import Gradient


@dataclass(slots=True)
class ModifierShift:
    color_shift: np.ndarray
    roughness_shift: float = 0.0
    count: int = 0


def collect_modifiers(tokens: list[str]) -> ModifierShift:
    """Sum the color and roughness shifts of every modifier token."""
    shift = ModifierShift(color_shift=np.zeros(3))
    for token in tokens:
        effect = get_modifier(token)
        if effect is None:
            continue
        shift.count += 1
        shift.color_shift = shift.color_shift + np.asarray(effect.color_shift, dtype=float)
        shift.roughness_shift += effect.roughness_shift
    return shift


def collect_gradients(tokens: list[str]) -> list[Gradient]:
    """Collect gradient steps in token order, keeping the first one per axis."""
    gradients: list[Gradient] = []
    claimed: set[GradientAxis] = set()
    for token in tokens:
        for step in get_gradient_steps(token):
            if step.axis in claimed:
                continue
            claimed.add(step.axis)
            gradients.append(
                Gradient(axis=step.axis, factor=step.factor, color_shift=step.color_shift)
            )
    return gradients
