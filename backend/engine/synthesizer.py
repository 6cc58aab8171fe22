"""Turn matched keywords, modifiers and gradients into a GenerationResult.

Method selection:
  keyword  - a material matched (upgraded to hybrid when modifiers or
             gradients also fired)
  hybrid   - no material, but modifiers matched; random base underneath
  random   - nothing recognized
"""

import logging
import uuid
from datetime import datetime, timezone

import numpy as np

from lexicon.materials import MaterialPreset
from lexicon.vocabulary import GenerationMethod

from .collectors import ModifierShift
from .randomizer import BaseParameters, random_parameters
from .schemas import (
    GeneratedObject,
    GenerationResult,
    Gradient,
    NoiseSettings,
    ObjectBase,
    ObjectMeta,
    PhysicsSettings,
)
from .validation import Validator

logger = logging.getLogger(__name__)

AUTHOR = "cubesmith"
NAME_LIMIT = 50
VALIDATION_PENALTY = 0.8

NO_MATERIAL_WARNING = "No specific material recognized, using random base with detected modifiers"
NO_KEYWORDS_WARNING = "No recognizable keywords found, using random generation"


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return float(min(max(value, low), high))


def clamp_color(color) -> tuple[float, float, float]:
    arr = np.clip(np.asarray(color, dtype=float), 0.0, 1.0)
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def shift_color(color, shift) -> tuple[float, float, float]:
    return clamp_color(np.asarray(color, dtype=float) + np.asarray(shift, dtype=float))


def new_object_id() -> str:
    return f"gen_{uuid.uuid4().hex[:12]}"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def unique_tags(*groups) -> list[str]:
    """Merge tag sequences, keeping the first occurrence of each tag."""
    return list(dict.fromkeys(tag for group in groups for tag in group))


def display_name(prompt: str) -> str:
    if len(prompt) > NAME_LIMIT:
        return prompt[:NAME_LIMIT] + "..."
    return prompt


def assemble_object(
    prompt: str,
    params: BaseParameters,
    color_shift=(0.0, 0.0, 0.0),
    roughness_shift: float = 0.0,
    gradients: list[Gradient] | None = None,
    extra_tags: tuple[str, ...] = ("generated",),
    name: str | None = None,
) -> GeneratedObject:
    """Build a fresh object with clamped base values and a new id."""
    return GeneratedObject(
        id=new_object_id(),
        prompt=prompt,
        base=ObjectBase(
            color=shift_color(params.color, color_shift),
            roughness=clamp(params.roughness + roughness_shift),
            transparency=clamp(params.transparency),
        ),
        gradients=list(gradients or []),
        noise=NoiseSettings(type=params.noise_type, scale=params.noise_scale),
        physics=PhysicsSettings(
            material=params.material,
            density=params.density,
            break_pattern=params.break_pattern,
        ),
        meta=ObjectMeta(
            name=name if name is not None else display_name(prompt),
            tags=unique_tags(params.tags, extra_tags),
            author=AUTHOR,
            created=utc_now(),
        ),
    )


def apply_validation(
    validator: Validator, obj: GeneratedObject, confidence: float, warnings: list[str]
) -> float:
    """Run the validator; a failure adds a warning and returns a penalized confidence."""
    result = validator(obj)
    if result.valid:
        return confidence
    details = "; ".join(f"{issue.path}: {issue.message}" for issue in result.errors)
    logger.warning("Object %s failed validation: %s", obj.id, details)
    warnings.append(f"Validation warnings: {details}")
    return confidence * VALIDATION_PENALTY


def synthesize(
    prompt: str,
    match: MaterialPreset | None,
    score: int,
    shift: ModifierShift,
    gradients: list[Gradient],
    rng: np.random.Generator,
    validator: Validator,
) -> GenerationResult:
    warnings: list[str] = []

    if match is not None and score > 0:
        params = BaseParameters.from_preset(match)
        confidence = min(0.5 + score * 0.1 + shift.count * 0.05, 0.95)
        if shift.count > 0 or gradients:
            method = GenerationMethod.HYBRID
        else:
            method = GenerationMethod.KEYWORD
    elif shift.count > 0:
        params = random_parameters(rng)
        confidence = clamp(0.3 + shift.count * 0.1)
        method = GenerationMethod.HYBRID
        warnings.append(NO_MATERIAL_WARNING)
    else:
        params = random_parameters(rng)
        confidence = 0.2
        method = GenerationMethod.RANDOM
        warnings.append(NO_KEYWORDS_WARNING)

    obj = assemble_object(
        prompt,
        params,
        color_shift=shift.color_shift,
        roughness_shift=shift.roughness_shift,
        gradients=gradients,
    )
    confidence = apply_validation(validator, obj, confidence, warnings)

    logger.debug(
        "Synthesized %s via %s (confidence=%.2f, modifiers=%d, gradients=%d)",
        obj.physics.material.value,
        method.value,
        confidence,
        shift.count,
        len(gradients),
    )
    return GenerationResult(
        success=True,
        object=obj,
        method=method,
        confidence=confidence,
        warnings=warnings,
    )
