import numpy as np
import pytest

from engine.finetune import FineTuningStore
from engine.generator import ObjectGenerator
from engine.schemas import (
    GeneratedObject,
    NoiseSettings,
    ObjectBase,
    ObjectMeta,
    PhysicsSettings,
)
from lexicon.vocabulary import MaterialType, NoiseType


@pytest.fixture
def generator():
    return ObjectGenerator(store=FineTuningStore(), rng=np.random.default_rng(42))


def make_object(
    id: str = "obj_1",
    color=(0.5, 0.5, 0.5),
    roughness: float = 0.5,
    material: MaterialType = MaterialType.STONE,
    noise_type: NoiseType = NoiseType.PERLIN,
    tags=("stone",),
    prompt: str = "",
) -> GeneratedObject:
    return GeneratedObject(
        id=id,
        prompt=prompt,
        base=ObjectBase(color=color, roughness=roughness),
        noise=NoiseSettings(type=noise_type),
        physics=PhysicsSettings(material=material),
        meta=ObjectMeta(name=id, tags=list(tags)),
    )
