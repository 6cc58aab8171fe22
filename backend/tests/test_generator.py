import pytest
from unittest.mock import MagicMock

from conftest import make_object
from engine.generator import ObjectGenerator
from engine.schemas import ExtractedStyle, GenerationContext
from engine.synthesizer import AUTHOR, NO_KEYWORDS_WARNING, NO_MATERIAL_WARNING
from engine.validation import ValidationIssue, ValidationResult
from lexicon.vocabulary import BreakPattern, GenerationMethod, GradientAxis, MaterialType


def _in_unit_range(obj):
    return (
        all(0.0 <= c <= 1.0 for c in obj.base.color)
        and 0.0 <= obj.base.roughness <= 1.0
        and 0.0 <= obj.base.transparency <= 1.0
    )


# --- prompt ---


@pytest.mark.asyncio
async def test_keyword_match(generator):
    result = await generator.generate_from_prompt("stone")
    assert result.success is True
    assert result.method == GenerationMethod.KEYWORD
    assert result.confidence == pytest.approx(0.95)
    assert result.warnings == []

    obj = result.object
    assert obj.physics.material == MaterialType.STONE
    assert obj.base.color == pytest.approx((0.5, 0.48, 0.45))
    assert obj.meta.tags == ["stone", "natural", "generated"]
    assert obj.meta.author == AUTHOR
    assert obj.meta.created is not None
    assert obj.id.startswith("gen_")
    assert obj.noise.octaves == 4


@pytest.mark.asyncio
async def test_short_keyword_confidence(generator):
    result = await generator.generate_from_prompt("ice")
    assert result.confidence == pytest.approx(0.8)


@pytest.mark.asyncio
async def test_modifiers_upgrade_to_hybrid(generator):
    result = await generator.generate_from_prompt("dark weathered stone")
    assert result.method == GenerationMethod.HYBRID
    assert result.confidence >= 0.9
    assert result.object.base.color == pytest.approx((0.3, 0.28, 0.25))
    assert result.object.base.roughness == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_gradient_alone_upgrades_to_hybrid(generator):
    result = await generator.generate_from_prompt("vertical oak")
    assert result.method == GenerationMethod.HYBRID
    assert [g.axis for g in result.object.gradients] == [GradientAxis.Y]


@pytest.mark.asyncio
async def test_russian_prompt(generator):
    result = await generator.generate_from_prompt("тёмный камень")
    assert result.method == GenerationMethod.HYBRID
    assert result.object.physics.material == MaterialType.STONE
    assert result.object.prompt == "тёмный камень"


@pytest.mark.asyncio
async def test_russian_adjectives_without_keyword_do_not_pick_material(generator):
    result = await generator.generate_from_prompt("светящийся камень")
    assert result.method == GenerationMethod.KEYWORD
    assert result.object.physics.material == MaterialType.STONE
    assert "magic" not in result.object.meta.tags

    frozen = await generator.generate_from_prompt("замёрзший камень")
    assert frozen.object.physics.material == MaterialType.STONE


@pytest.mark.asyncio
async def test_modifier_only_uses_random_base(generator):
    result = await generator.generate_from_prompt("dark shiny")
    assert result.method == GenerationMethod.HYBRID
    assert result.confidence == pytest.approx(0.5)
    assert result.warnings == [NO_MATERIAL_WARNING]
    assert _in_unit_range(result.object)


@pytest.mark.asyncio
async def test_nothing_recognized_falls_back_to_random(generator):
    result = await generator.generate_from_prompt("xyzzy qwerty")
    assert result.success is True
    assert result.method == GenerationMethod.RANDOM
    assert result.confidence == pytest.approx(0.2)
    assert result.warnings == [NO_KEYWORDS_WARNING]


@pytest.mark.asyncio
async def test_extreme_modifiers_stay_clamped(generator):
    result = await generator.generate_from_prompt("black black black dark deep polished glossy wet ice")
    assert _in_unit_range(result.object)
    assert result.object.base.roughness == 0.0


@pytest.mark.asyncio
async def test_long_prompt_name_truncated(generator):
    prompt = "stone " * 20
    result = await generator.generate_from_prompt(prompt)
    assert result.object.meta.name == prompt[:50] + "..."


@pytest.mark.asyncio
async def test_validation_failure_is_non_fatal():
    validator = MagicMock(return_value=ValidationResult(
        valid=False,
        errors=[ValidationIssue(path="/base/color/0", message="too big", keyword="less_than_equal")],
    ))
    gen = ObjectGenerator(validator=validator)
    result = await gen.generate_from_prompt("stone")
    assert result.success is True
    assert result.confidence == pytest.approx(0.95 * 0.8)
    assert result.warnings[-1].startswith("Validation warnings:")
    assert "/base/color/0" in result.warnings[-1]
    validator.assert_called_once()


# --- template / random ---


@pytest.mark.asyncio
async def test_template_stone(generator):
    result = await generator.generate_from_template("stone")
    assert result.success is True
    assert result.method == GenerationMethod.TEMPLATE
    assert result.confidence == 1.0
    assert result.warnings == []
    assert result.object.physics.material == MaterialType.STONE
    assert result.object.physics.break_pattern == BreakPattern.CRUMBLE
    assert result.object.gradients == []
    assert result.object.meta.tags == ["stone", "natural"]
    assert result.object.prompt == "stone (template)"
    assert result.object.meta.name == "Stone"


@pytest.mark.asyncio
async def test_template_name_normalized(generator):
    result = await generator.generate_from_template("  GRANITE ")
    assert result.success is True
    assert "granite" in result.object.meta.name.lower()


@pytest.mark.asyncio
async def test_unknown_template(generator):
    result = await generator.generate_from_template("unobtainium")
    assert result.success is False
    assert result.object is None
    assert result.confidence == 0.0
    assert "stone" in result.warnings[0]
    assert "water" in result.warnings[0]


@pytest.mark.asyncio
async def test_random_generation(generator):
    result = await generator.generate_random()
    assert result.success is True
    assert result.method == GenerationMethod.RANDOM
    assert result.confidence == 0.2
    assert result.object.prompt == "Random generation"
    assert result.object.meta.name == "Random Cube"
    assert set(result.object.meta.tags) == {"generated", "random"}


@pytest.mark.asyncio
async def test_random_ids_unique(generator):
    ids = {(await generator.generate_random()).object.id for _ in range(20)}
    assert len(ids) == 20


@pytest.mark.asyncio
async def test_random_values_in_range(generator):
    for _ in range(25):
        obj = (await generator.generate_random()).object
        assert all(0.1 <= c <= 0.9 for c in obj.base.color)
        assert 0.1 <= obj.base.roughness <= 0.9
        assert obj.base.transparency == 1.0 or 0.3 <= obj.base.transparency <= 0.8
        assert 2.0 <= obj.noise.scale <= 17.0
        assert 0.5 <= obj.physics.density <= 8.5


# --- contextual ---


@pytest.mark.asyncio
async def test_contextual_blends_toward_style(generator):
    style = ExtractedStyle(average_color=(1.0, 1.0, 1.0), average_roughness=0.0)
    result = await generator.generate_contextual("stone", GenerationContext(extracted_style=style))
    assert result.method == GenerationMethod.HYBRID
    assert result.confidence == pytest.approx(0.98)
    assert result.object.base.color == pytest.approx((0.7, 0.688, 0.67))
    assert result.object.base.roughness == pytest.approx(0.48)


@pytest.mark.asyncio
async def test_contextual_uses_existing_objects(generator):
    existing = {"a": make_object(color=(1.0, 1.0, 1.0), roughness=0.0)}
    result = await generator.generate_contextual("stone", GenerationContext(existing_objects=existing))
    assert result.object.base.color == pytest.approx((0.7, 0.688, 0.67))


@pytest.mark.asyncio
async def test_contextual_explicit_style_beats_neighbors(generator):
    style = ExtractedStyle(average_color=(1.0, 1.0, 1.0), average_roughness=0.0)
    context = GenerationContext(
        extracted_style=style,
        neighbors=[make_object(color=(0.0, 0.0, 0.0))],
    )
    result = await generator.generate_contextual("stone", context)
    assert result.object.base.color == pytest.approx((0.7, 0.688, 0.67))


@pytest.mark.asyncio
async def test_contextual_without_style_source(generator):
    result = await generator.generate_contextual("stone", GenerationContext())
    assert result.method == GenerationMethod.HYBRID
    assert result.object.base.color == pytest.approx((0.5, 0.48, 0.45))


@pytest.mark.asyncio
async def test_contextual_theme(generator):
    result = await generator.generate_contextual("oak", GenerationContext(theme="industrial"))
    assert result.object.physics.material == MaterialType.METAL
    assert "industrial" in result.object.meta.tags
    assert result.warnings == []


@pytest.mark.asyncio
async def test_contextual_unknown_theme(generator):
    plain = await generator.generate_contextual("oak", GenerationContext())
    result = await generator.generate_contextual("oak", GenerationContext(theme="steampunk"))
    assert any("steampunk" in w for w in result.warnings)
    assert result.object.physics.material == MaterialType.WOOD
    assert result.object.base.color == pytest.approx(plain.object.base.color)


@pytest.mark.asyncio
async def test_contextual_does_not_mutate_inputs(generator):
    neighbor = make_object(color=(0.9, 0.1, 0.1))
    before = neighbor.model_dump()
    await generator.generate_contextual("stone", GenerationContext(neighbors=[neighbor], theme="arctic"))
    assert neighbor.model_dump() == before


# --- fine-tuning ---


@pytest.mark.asyncio
async def test_fine_tuning_without_dataset_uses_base(generator):
    result = await generator.generate_with_fine_tuning("stone")
    assert result.method == GenerationMethod.KEYWORD
    assert generator.get_fine_tuning_dataset() is None


@pytest.mark.asyncio
async def test_fine_tuning_reuses_rated_example(generator):
    from engine.schemas import TrainingExample

    source = make_object(id="gen_source", color=(0.1, 0.2, 0.3), tags=("stone", "favorite"))
    generator.add_training_example(TrainingExample(prompt="mossy castle stone", object=source, rating=1.0))

    result = await generator.generate_with_fine_tuning("mossy castle stone")
    assert result.success is True
    assert "fine-tuned" in result.object.meta.tags
    assert "favorite" in result.object.meta.tags
    assert result.confidence >= 0.7
    assert result.object.id != "gen_source"
    assert result.object.prompt == "mossy castle stone"
    assert result.object.base.color == pytest.approx((0.1, 0.2, 0.3))
    assert "fine-tuned" not in source.meta.tags


@pytest.mark.asyncio
async def test_fine_tuning_low_score_falls_back(generator):
    generator.record_feedback("mossy castle stone", make_object(), 0.4)
    result = await generator.generate_with_fine_tuning("mossy castle stone")
    assert "fine-tuned" not in result.object.meta.tags


@pytest.mark.asyncio
async def test_fine_tuning_partial_overlap(generator):
    generator.record_feedback("old castle stone wall", make_object(), 1.0)
    # 3 of 4 tokens shared -> 0.75
    result = await generator.generate_with_fine_tuning("castle stone wall")
    assert "fine-tuned" in result.object.meta.tags
    assert result.confidence == pytest.approx(0.7 + 0.75 * 0.3)


@pytest.mark.asyncio
async def test_fine_tuning_empty_dataset_falls_back(generator):
    generator.load_fine_tuning_dataset(
        '{"id": "ds_1", "created": "2024-01-01T00:00:00+00:00", '
        '"updated": "2024-01-01T00:00:00+00:00", "examples": []}'
    )
    result = await generator.generate_with_fine_tuning("stone")
    assert result.method == GenerationMethod.KEYWORD


def test_record_feedback_clamps_rating(generator):
    example = generator.record_feedback("stone", make_object(), 1.7)
    assert example.rating == 1.0
    example = generator.record_feedback("stone", make_object(), -3)
    assert example.rating == 0.0
    assert len(generator.get_fine_tuning_dataset().examples) == 2


def test_catalogs(generator):
    assert "granite" in generator.get_available_templates()
    assert "medieval" in generator.get_available_themes()
    assert "terrain" in generator.get_available_group_types()
    assert generator.is_ready() is True
