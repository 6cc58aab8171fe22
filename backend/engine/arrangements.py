"""Multi-object generation: composites, batches and grid groups.

Sub-generations run strictly one after another. Batches and groups read the
objects produced earlier in the same call, so ordering is part of the result.
"""

import itertools
import logging
from typing import TYPE_CHECKING, AsyncIterator

import numpy as np

from lexicon.layouts import (
    GROUP_LAYOUTS,
    ORIGIN,
    POSITION_COLOR_SHIFT,
    RELATION_SHIFTS,
    VARIATION_WORDS,
    GroupType,
    Position,
    Relation,
    direction_offset,
    get_group_layout,
)
from lexicon.vocabulary import GradientAxis

from .schemas import (
    ArrangementResult,
    BatchRequest,
    CompositeDescription,
    GeneratedObject,
    GenerationContext,
    GenerationResult,
    Grouping,
)
from .style import add_tags, extract_style, recolor

if TYPE_CHECKING:
    from .generator import ObjectGenerator

logger = logging.getLogger(__name__)

ARRANGEMENT_CAP = 0.95
FOLLOWER_CELL_CONFIDENCE = 0.8
MAX_GROUP_EXTENT = 16

_AXIS_INDEX = {GradientAxis.X: 0, GradientAxis.Y: 1, GradientAxis.Z: 2}


# --- composite ---


def relate_color(relation: Relation, primary, candidate) -> np.ndarray:
    primary = np.asarray(primary, dtype=float)
    candidate = np.asarray(candidate, dtype=float)
    if relation is Relation.SIMILAR:
        return 0.3 * candidate + 0.7 * primary
    if relation is Relation.CONTRAST:
        return 0.5 * (1.0 - primary) + 0.5 * candidate
    return primary + np.asarray(RELATION_SHIFTS[relation], dtype=float)


def _parse_relation(name: str) -> Relation | None:
    try:
        return Relation(name.strip().lower())
    except ValueError:
        return None


async def generate_composite(
    generator: "ObjectGenerator", description: CompositeDescription
) -> ArrangementResult:
    warnings: list[str] = []
    confidences: list[float] = []

    if description.theme or description.context_objects:
        context = GenerationContext(neighbors=description.context_objects, theme=description.theme)
        primary = await generator.generate_contextual(description.primary, context)
    else:
        primary = await generator.generate_from_prompt(description.primary)

    if not primary.success or primary.object is None:
        return ArrangementResult(success=False, warnings=list(primary.warnings))

    objects: list[GeneratedObject] = [primary.object]
    positions: list[Position] = [ORIGIN]
    confidences.append(primary.confidence)
    warnings.extend(primary.warnings)

    primary_color = primary.object.base.color
    primary_style = extract_style([primary.object])

    for neighbor in description.neighbors:
        context = GenerationContext(extracted_style=primary_style, theme=description.theme)
        candidate = await generator.generate_contextual(neighbor.description, context)
        if not candidate.success or candidate.object is None:
            warnings.append(f"Neighbor '{neighbor.description}' failed to generate")
            continue
        warnings.extend(candidate.warnings)

        obj = candidate.object
        relation = _parse_relation(neighbor.relation)
        if relation is None:
            logger.warning("Unknown relation %r, keeping candidate as generated", neighbor.relation)
            warnings.append(f"Unknown relation '{neighbor.relation}', neighbor left unchanged")
        else:
            obj = recolor(obj, relate_color(relation, primary_color, obj.base.color))
            obj = add_tags(obj, relation.value)

        offset = direction_offset(neighbor.direction)
        if offset is None:
            logger.warning("Unknown direction %r, placing neighbor at origin", neighbor.direction)
            warnings.append(
                f"Unknown direction '{neighbor.direction}', neighbor placed at origin "
                "and overlaps the primary object"
            )
            offset = ORIGIN

        objects.append(obj)
        positions.append(offset)
        confidences.append(candidate.confidence)

    # Variation i sits in a row behind the primary at (i, 0, 2).
    for i, word in zip(range(description.variations - 1), VARIATION_WORDS):
        context = GenerationContext(
            extracted_style=extract_style(objects), theme=description.theme
        )
        variant = await generator.generate_contextual(f"{word} {description.primary}", context)
        if not variant.success or variant.object is None:
            warnings.append(f"Variation '{word}' failed to generate")
            continue
        objects.append(add_tags(variant.object, "variation"))
        positions.append((i, 0, 2))
        confidences.append(variant.confidence)

    return ArrangementResult(
        success=True,
        objects=objects,
        positions=positions,
        confidence=min(float(np.mean(confidences)), ARRANGEMENT_CAP),
        warnings=warnings,
    )


# --- batch ---


async def iter_batch(
    generator: "ObjectGenerator", request: BatchRequest
) -> AsyncIterator[GenerationResult]:
    """Yield one result per prompt, in input order."""
    generated: list[GeneratedObject] = []
    for prompt in request.prompts:
        text = f"{request.style} {prompt}" if request.style else prompt

        if request.grouping is Grouping.INDIVIDUAL:
            result = await generator.generate_from_prompt(text)
        else:
            pool = list(request.context_objects) + generated
            context = GenerationContext(
                extracted_style=extract_style(pool) if pool else None,
                theme=request.theme,
            )
            result = await generator.generate_contextual(text, context)

        if result.success and result.object is not None:
            generated.append(result.object)
        yield result


# --- group ---


def _normalize_dimensions(
    dimensions, default: tuple[int, int, int], warnings: list[str]
) -> tuple[int, int, int]:
    if dimensions is None:
        return default
    values = list(dimensions)
    if len(values) != 3:
        warnings.append(f"Dimensions must have 3 entries, got {len(values)}; using default extent")
        return default
    fixed = []
    for value in values:
        value = int(value)
        if value < 1:
            warnings.append(f"Dimension {value} raised to 1")
            value = 1
        elif value > MAX_GROUP_EXTENT:
            warnings.append(f"Dimension {value} lowered to {MAX_GROUP_EXTENT}")
            value = MAX_GROUP_EXTENT
        fixed.append(value)
    return (fixed[0], fixed[1], fixed[2])


def position_factor(
    position: Position, extent: tuple[int, int, int], axis: GradientAxis
) -> float:
    """Scale a cell's place in the grid to [0, 1] along a linear axis or radially."""
    if axis is GradientAxis.RADIAL:
        center = (np.asarray(extent, dtype=float) - 1.0) / 2.0
        max_distance = float(np.linalg.norm(center))
        if max_distance == 0:
            return 0.0
        distance = float(np.linalg.norm(np.asarray(position, dtype=float) - center))
        return distance / max_distance

    i = _AXIS_INDEX[axis]
    if extent[i] <= 1:
        return 0.0
    return position[i] / (extent[i] - 1)


async def generate_group(
    generator: "ObjectGenerator",
    group_type: str,
    description: str,
    dimensions=None,
) -> ArrangementResult:
    warnings: list[str] = []

    layout = get_group_layout(group_type)
    type_tag = group_type.strip().lower()
    if layout is None:
        logger.warning("Unknown group type %r, using structure layout", group_type)
        warnings.append(f"Unknown group type '{group_type}', using structure layout")
        layout = GROUP_LAYOUTS[GroupType.STRUCTURE]
        type_tag = GroupType.STRUCTURE.value

    extent = _normalize_dimensions(dimensions, layout.extent, warnings)

    base = await generator.generate_from_prompt(description)
    if not base.success or base.object is None:
        return ArrangementResult(success=False, warnings=warnings + list(base.warnings))
    style = extract_style([base.object])
    warnings.extend(base.warnings)

    objects: list[GeneratedObject] = []
    positions: list[Position] = []
    first_confidence: float | None = None

    for x, y, z in itertools.product(range(extent[0]), range(extent[1]), range(extent[2])):
        position = (x, y, z)
        cell = await generator.generate_contextual(
            description, GenerationContext(extracted_style=style)
        )
        if not cell.success or cell.object is None:
            logger.warning("Group cell %s failed to generate", position)
            warnings.append(f"Cell {position} failed to generate")
            continue

        factor = position_factor(position, extent, layout.axis)
        shifted = np.asarray(cell.object.base.color) + factor * np.asarray(POSITION_COLOR_SHIFT)
        obj = add_tags(recolor(cell.object, shifted), type_tag)
        warnings.extend(cell.warnings)

        if first_confidence is None:
            first_confidence = cell.confidence
        objects.append(obj)
        positions.append(position)

    if first_confidence is None:
        return ArrangementResult(success=False, warnings=list(dict.fromkeys(warnings)))

    scores = [first_confidence] + [FOLLOWER_CELL_CONFIDENCE] * (len(objects) - 1)
    logger.info("Generated %s group of %d objects", type_tag, len(objects))
    return ArrangementResult(
        success=True,
        objects=objects,
        positions=positions,
        confidence=min(float(np.mean(scores)), ARRANGEMENT_CAP),
        warnings=list(dict.fromkeys(warnings)),
    )
