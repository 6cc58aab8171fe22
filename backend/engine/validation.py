"""Schema validation for generated objects.

The schema is stricter than the working models in ``engine.schemas``: it
enforces value ranges and closed vocabularies, so a candidate object can be
checked without being rejected at construction time.
"""

from typing import Annotated, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from lexicon.vocabulary import BreakPattern, GradientAxis, MaterialType, NoiseType

from .schemas import GeneratedObject

UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]
ShiftFloat = Annotated[float, Field(ge=-1.0, le=1.0)]


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class BaseSchema(_Strict):
    color: tuple[UnitFloat, UnitFloat, UnitFloat]
    roughness: UnitFloat = 0.5
    transparency: UnitFloat = 1.0


class GradientSchema(_Strict):
    axis: GradientAxis
    factor: ShiftFloat
    color_shift: tuple[ShiftFloat, ShiftFloat, ShiftFloat]


class NoiseSchema(_Strict):
    type: NoiseType = NoiseType.PERLIN
    scale: float = Field(default=8.0, gt=0.0)
    octaves: int = Field(default=4, ge=1, le=8)
    persistence: UnitFloat = 0.5


class PhysicsSchema(_Strict):
    material: MaterialType = MaterialType.STONE
    density: float = Field(default=2.5, gt=0.0)
    break_pattern: BreakPattern = BreakPattern.CRUMBLE


class MetaSchema(_Strict):
    name: str | None = None
    tags: list[str] = []
    author: str | None = None
    created: str | None = None


class ObjectSchema(_Strict):
    id: str = Field(min_length=1)
    prompt: str | None = None
    base: BaseSchema
    gradients: list[GradientSchema] = []
    noise: NoiseSchema | None = None
    physics: PhysicsSchema | None = None
    meta: MetaSchema | None = None


class ValidationIssue(BaseModel):
    path: str
    message: str
    keyword: str
    params: dict[str, Any] = {}


class ValidationResult(BaseModel):
    valid: bool
    errors: list[ValidationIssue] = []


Validator = Callable[[Any], ValidationResult]


def _pointer(loc: tuple) -> str:
    if not loc:
        return "/"
    return "/" + "/".join(str(part) for part in loc)


def validate_object(candidate: Any) -> ValidationResult:
    """Validate a candidate object (model or plain dict) against the schema."""
    if isinstance(candidate, GeneratedObject):
        candidate = candidate.model_dump(mode="json")

    try:
        ObjectSchema.model_validate(candidate)
    except PydanticValidationError as exc:
        errors = [
            ValidationIssue(
                path=_pointer(err.get("loc", ())),
                message=err.get("msg", "Unknown validation error"),
                keyword=err.get("type", "unknown"),
                params={k: str(v) for k, v in (err.get("ctx") or {}).items()},
            )
            for err in exc.errors()
        ]
        return ValidationResult(valid=False, errors=errors)

    return ValidationResult(valid=True, errors=[])
