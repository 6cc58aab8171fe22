from enum import Enum

from pydantic import BaseModel, Field

from lexicon.layouts import Position
from lexicon.vocabulary import (
    BreakPattern,
    GenerationMethod,
    GradientAxis,
    MaterialType,
    NoiseType,
)


class ObjectBase(BaseModel):
    color: tuple[float, float, float] = (0.5, 0.5, 0.5)
    roughness: float = 0.5
    transparency: float = 1.0


class Gradient(BaseModel):
    axis: GradientAxis
    factor: float
    color_shift: tuple[float, float, float]


class NoiseSettings(BaseModel):
    type: NoiseType = NoiseType.PERLIN
    scale: float = 8.0
    octaves: int = 4
    persistence: float = 0.5


class PhysicsSettings(BaseModel):
    material: MaterialType = MaterialType.STONE
    density: float = 2.5
    break_pattern: BreakPattern = BreakPattern.CRUMBLE


class ObjectMeta(BaseModel):
    name: str = ""
    tags: list[str] = []
    author: str | None = None
    created: str | None = None


class GeneratedObject(BaseModel):
    id: str
    prompt: str = ""
    base: ObjectBase = Field(default_factory=ObjectBase)
    gradients: list[Gradient] = []
    noise: NoiseSettings = Field(default_factory=NoiseSettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    meta: ObjectMeta = Field(default_factory=ObjectMeta)


class GenerationResult(BaseModel):
    success: bool
    object: GeneratedObject | None = None
    method: GenerationMethod
    confidence: float = Field(ge=0.0, le=1.0)
    warnings: list[str] = []


class ExtractedStyle(BaseModel):
    average_color: tuple[float, float, float] = (0.5, 0.5, 0.5)
    average_roughness: float = 0.5
    dominant_material: MaterialType = MaterialType.STONE
    dominant_noise_type: NoiseType = NoiseType.PERLIN
    common_tags: list[str] = []


class GenerationContext(BaseModel):
    extracted_style: ExtractedStyle | None = None
    existing_objects: dict[str, GeneratedObject] = {}
    neighbors: list[GeneratedObject] = []
    theme: str | None = None


class NeighborSpec(BaseModel):
    direction: str
    relation: str
    description: str


class CompositeDescription(BaseModel):
    primary: str
    neighbors: list[NeighborSpec] = []
    theme: str | None = None
    context_objects: list[GeneratedObject] = []
    variations: int = 1


class ArrangementResult(BaseModel):
    """Objects laid out on an integer grid, one position per object."""

    success: bool
    objects: list[GeneratedObject] = []
    positions: list[Position] = []
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    warnings: list[str] = []


CompositeResult = ArrangementResult
GroupResult = ArrangementResult


class Grouping(str, Enum):
    INDIVIDUAL = "individual"
    RELATED = "related"
    THEMED = "themed"


class BatchRequest(BaseModel):
    prompts: list[str]
    style: str | None = None
    context_objects: list[GeneratedObject] = []
    grouping: Grouping = Grouping.INDIVIDUAL
    theme: str | None = None


class TrainingExample(BaseModel):
    prompt: str
    object: GeneratedObject
    rating: float = Field(default=0.7, ge=0.0, le=1.0)
    created: str | None = None


class FineTuningDataset(BaseModel):
    id: str
    name: str = "feedback"
    version: int = 1
    created: str
    updated: str
    examples: list[TrainingExample] = []
