import pytest

from conftest import make_object
from engine.schemas import ExtractedStyle
from engine.style import apply_theme, blend_toward_style, extract_style
from lexicon.themes import get_theme
from lexicon.vocabulary import MaterialType, NoiseType


def test_extract_style_empty_returns_defaults():
    style = extract_style([])
    assert style.average_color == (0.5, 0.5, 0.5)
    assert style.average_roughness == 0.5
    assert style.dominant_material == MaterialType.STONE
    assert style.dominant_noise_type == NoiseType.PERLIN
    assert style.common_tags == []


def test_extract_style_means():
    objects = [
        make_object(color=(0.2, 0.4, 0.6), roughness=0.2),
        make_object(color=(0.4, 0.6, 0.8), roughness=0.6),
    ]
    style = extract_style(objects)
    assert style.average_color == pytest.approx((0.3, 0.5, 0.7))
    assert style.average_roughness == pytest.approx(0.4)


def test_extract_style_dominant_values():
    objects = [
        make_object(material=MaterialType.WOOD, noise_type=NoiseType.WORLEY),
        make_object(material=MaterialType.METAL, noise_type=NoiseType.CRACKLE),
        make_object(material=MaterialType.METAL, noise_type=NoiseType.CRACKLE),
    ]
    style = extract_style(objects)
    assert style.dominant_material == MaterialType.METAL
    assert style.dominant_noise_type == NoiseType.CRACKLE


def test_extract_style_ties_go_to_first_seen():
    objects = [
        make_object(material=MaterialType.WOOD, noise_type=NoiseType.WORLEY),
        make_object(material=MaterialType.GLASS, noise_type=NoiseType.PERLIN),
    ]
    style = extract_style(objects)
    assert style.dominant_material == MaterialType.WOOD
    assert style.dominant_noise_type == NoiseType.WORLEY

    style = extract_style(list(reversed(objects)))
    assert style.dominant_material == MaterialType.GLASS


def test_common_tags_threshold_rounds_up():
    objects = [
        make_object(tags=("stone", "old")),
        make_object(tags=("stone", "mossy")),
        make_object(tags=("old", "wet")),
    ]
    style = extract_style(objects)
    # ceil(3 / 2) == 2
    assert style.common_tags == ["stone", "old"]


def test_common_tags_single_object():
    style = extract_style([make_object(tags=("a", "b", "a"))])
    assert style.common_tags == ["a", "b"]


def test_blend_returns_new_object():
    obj = make_object(color=(0.0, 0.0, 0.0), roughness=1.0)
    style = ExtractedStyle(average_color=(1.0, 0.5, 0.0), average_roughness=0.0)
    blended = blend_toward_style(obj, style)
    assert blended.base.color == pytest.approx((0.4, 0.2, 0.0))
    assert blended.base.roughness == pytest.approx(0.6)
    assert obj.base.color == (0.0, 0.0, 0.0)
    assert blended.id == obj.id


def test_apply_theme_overrides_material_and_tags():
    obj = make_object(color=(0.5, 0.5, 0.5), material=MaterialType.WOOD, tags=("oak",))
    themed = apply_theme(obj, get_theme("arctic"))
    assert themed.physics.material == MaterialType.CRYSTAL
    assert themed.meta.tags == ["oak", "arctic", "cold"]
    assert themed.base.color == pytest.approx((0.55, 0.58, 0.65))
    assert obj.physics.material == MaterialType.WOOD


def test_apply_theme_without_material_keeps_physics():
    obj = make_object(material=MaterialType.WOOD)
    themed = apply_theme(obj, get_theme("fantasy"))
    assert themed.physics.material == MaterialType.WOOD
