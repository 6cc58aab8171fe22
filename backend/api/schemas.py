from typing import Annotated

from pydantic import BaseModel, Field

from engine.arrangements import MAX_GROUP_EXTENT
from engine.schemas import ExtractedStyle, GeneratedObject, NeighborSpec


class GenerateRequest(BaseModel):
    prompt: str
    use_fine_tuning: bool = True


class ContextualRequest(BaseModel):
    prompt: str
    extracted_style: ExtractedStyle | None = None
    existing_objects: dict[str, GeneratedObject] = {}
    neighbors: list[GeneratedObject] = []
    theme: str | None = None


class CompositeRequest(BaseModel):
    primary: str
    neighbors: list[NeighborSpec] = []
    theme: str | None = None
    context_objects: list[GeneratedObject] = []
    variations: int = Field(default=1, ge=1, le=6)


class GroupRequest(BaseModel):
    group_type: str
    description: str
    dimensions: Annotated[
        list[Annotated[int, Field(le=MAX_GROUP_EXTENT)]], Field(min_length=3, max_length=3)
    ] | None = None


class StyleRequest(BaseModel):
    objects: list[GeneratedObject] = []


class FeedbackRequest(BaseModel):
    prompt: str
    object: GeneratedObject
    rating: float


class CatalogResponse(BaseModel):
    items: list[str]


class HealthResponse(BaseModel):
    status: str
    engine: str
    templates: int
    themes: int
    group_types: int
    dataset_examples: int
