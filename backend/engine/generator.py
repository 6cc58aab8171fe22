import logging

import numpy as np

from lexicon.layouts import get_group_type_names
from lexicon.materials import get_material, get_template_names
from lexicon.themes import get_theme, get_theme_names
from lexicon.vocabulary import GenerationMethod

from . import arrangements
from .collectors import collect_gradients, collect_modifiers
from .finetune import FineTuningStore
from .matcher import find_material_match
from .randomizer import BaseParameters, random_parameters
from .schemas import (
    BatchRequest,
    CompositeDescription,
    CompositeResult,
    ExtractedStyle,
    FineTuningDataset,
    GeneratedObject,
    GenerationContext,
    GenerationResult,
    GroupResult,
    TrainingExample,
)
from .style import apply_theme, blend_toward_style, extract_style
from .synthesizer import (
    assemble_object,
    display_name,
    new_object_id,
    synthesize,
    unique_tags,
    utc_now,
)
from .tokenizer import prepare_tokens
from .validation import Validator, validate_object

logger = logging.getLogger(__name__)

CONTEXT_BONUS = 0.1
CONTEXT_CAP = 0.98
FINE_TUNE_THRESHOLD = 0.5
FINE_TUNE_CAP = 0.98
FINE_TUNED_TAG = "fine-tuned"


def _resolve_style(context: GenerationContext) -> ExtractedStyle | None:
    """First non-empty source wins: explicit style, existing objects, neighbors."""
    if context.extracted_style is not None:
        return context.extracted_style
    if context.existing_objects:
        return extract_style(list(context.existing_objects.values()))
    if context.neighbors:
        return extract_style(context.neighbors)
    return None


class ObjectGenerator:
    """Keyword-driven object generator.

    Every generation method is a coroutine so a model-backed implementation
    can be swapped in without changing callers; none of them actually await
    I/O. Sub-generations always run sequentially.
    """

    def __init__(
        self,
        store: FineTuningStore | None = None,
        validator: Validator = validate_object,
        rng: np.random.Generator | None = None,
    ):
        self.store = store if store is not None else FineTuningStore()
        self.validator = validator
        self.rng = rng if rng is not None else np.random.default_rng()

    def is_ready(self) -> bool:
        return True

    # --- single-object generation ---

    async def generate_from_prompt(self, prompt: str) -> GenerationResult:
        tokens = prepare_tokens(prompt)
        match, score = find_material_match(tokens)
        shift = collect_modifiers(tokens)
        gradients = collect_gradients(tokens)
        result = synthesize(prompt, match, score, shift, gradients, self.rng, self.validator)
        logger.info(
            "Generated from prompt %r: method=%s confidence=%.2f",
            prompt, result.method.value, result.confidence,
        )
        return result

    async def generate_from_template(self, name: str) -> GenerationResult:
        key = name.strip().lower()
        preset = get_material(key)
        if preset is None:
            available = ", ".join(get_template_names())
            logger.info("Unknown template %r", name)
            return GenerationResult(
                success=False,
                object=None,
                method=GenerationMethod.TEMPLATE,
                confidence=0.0,
                warnings=[f'Template "{name}" not found. Available: {available}'],
            )

        obj = assemble_object(
            f"{name} (template)",
            BaseParameters.from_preset(preset),
            extra_tags=(),
            name=name[:1].upper() + name[1:],
        )
        return GenerationResult(
            success=True, object=obj, method=GenerationMethod.TEMPLATE, confidence=1.0
        )

    async def generate_random(self) -> GenerationResult:
        obj = assemble_object(
            "Random generation",
            random_parameters(self.rng),
            extra_tags=(),
            name="Random Cube",
        )
        return GenerationResult(
            success=True, object=obj, method=GenerationMethod.RANDOM, confidence=0.2
        )

    async def generate_contextual(
        self, prompt: str, context: GenerationContext
    ) -> GenerationResult:
        """Generate from a prompt, then pull the result toward a style and theme."""
        result = await self.generate_from_prompt(prompt)
        if not result.success or result.object is None:
            return result

        obj = result.object
        warnings = list(result.warnings)

        style = _resolve_style(context)
        if style is not None:
            obj = blend_toward_style(obj, style)

        if context.theme:
            theme = get_theme(context.theme)
            if theme is None:
                logger.warning("Unknown theme %r, leaving parameters unchanged", context.theme)
                warnings.append(
                    f"Unknown theme '{context.theme}'. Available: {', '.join(get_theme_names())}"
                )
            else:
                obj = apply_theme(obj, theme)

        return GenerationResult(
            success=True,
            object=obj,
            method=GenerationMethod.HYBRID,
            confidence=min(result.confidence + CONTEXT_BONUS, CONTEXT_CAP),
            warnings=warnings,
        )

    # --- multi-object generation ---

    async def generate_from_composite(self, description: CompositeDescription) -> CompositeResult:
        return await arrangements.generate_composite(self, description)

    async def generate_batch(self, request: BatchRequest) -> list[GenerationResult]:
        return [result async for result in arrangements.iter_batch(self, request)]

    async def generate_group(
        self,
        group_type: str,
        description: str,
        dimensions: list[int] | tuple[int, int, int] | None = None,
    ) -> GroupResult:
        return await arrangements.generate_group(self, group_type, description, dimensions)

    # --- fine-tuning ---

    async def generate_with_fine_tuning(self, prompt: str) -> GenerationResult:
        if not self.store.has_dataset():
            return await self.generate_from_prompt(prompt)

        example, score = self.store.best_match(prompt)
        if example is None or score <= FINE_TUNE_THRESHOLD:
            logger.debug("No fine-tuned match for %r (best score %.2f)", prompt, score)
            return await self.generate_from_prompt(prompt)

        source = example.object
        meta = source.meta.model_copy(
            update={
                "name": display_name(prompt),
                "tags": unique_tags(source.meta.tags, [FINE_TUNED_TAG]),
                "created": utc_now(),
            }
        )
        obj = source.model_copy(
            update={"id": new_object_id(), "prompt": prompt, "meta": meta}, deep=True
        )
        confidence = min(0.7 + score * 0.3, FINE_TUNE_CAP)
        logger.info("Fine-tuned match for %r from %r (score %.2f)", prompt, example.prompt, score)
        return GenerationResult(
            success=True, object=obj, method=GenerationMethod.HYBRID, confidence=confidence
        )

    def extract_style(self, objects: list[GeneratedObject]) -> ExtractedStyle:
        return extract_style(objects)

    def record_feedback(self, prompt: str, obj: GeneratedObject, rating: float) -> TrainingExample:
        return self.store.record_feedback(prompt, obj, rating)

    def add_training_example(self, example: TrainingExample) -> TrainingExample:
        return self.store.add_example(example)

    def get_fine_tuning_dataset(self) -> FineTuningDataset | None:
        return self.store.get_dataset()

    def clear_fine_tuning_dataset(self) -> None:
        self.store.clear()

    def export_fine_tuning_dataset(self) -> str | None:
        return self.store.export()

    def load_fine_tuning_dataset(self, document: str) -> FineTuningDataset:
        return self.store.load(document)

    # --- catalogs ---

    def get_available_templates(self) -> list[str]:
        return get_template_names()

    def get_available_themes(self) -> list[str]:
        return get_theme_names()

    def get_available_group_types(self) -> list[str]:
        return get_group_type_names()
