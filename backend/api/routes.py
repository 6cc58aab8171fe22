import logging
import time

from fastapi import APIRouter, HTTPException, Request, Response
from sse_starlette.sse import EventSourceResponse

from engine.arrangements import iter_batch
from engine.finetune import DatasetFormatError
from engine.generator import ObjectGenerator
from engine.schemas import (
    ArrangementResult,
    BatchRequest,
    CompositeDescription,
    ExtractedStyle,
    FineTuningDataset,
    GenerationContext,
    GenerationResult,
    TrainingExample,
)

from .schemas import (
    CatalogResponse,
    CompositeRequest,
    ContextualRequest,
    FeedbackRequest,
    GenerateRequest,
    GroupRequest,
    HealthResponse,
    StyleRequest,
)
from .streaming import sse_error, sse_event

logger = logging.getLogger(__name__)

router = APIRouter()


def _engine(request: Request) -> ObjectGenerator:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(503, "Generation engine not available")
    return engine


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Liveness check -- reports engine readiness and catalog sizes."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None or not engine.is_ready():
        return HealthResponse(
            status="degraded",
            engine="not loaded",
            templates=0,
            themes=0,
            group_types=0,
            dataset_examples=0,
        )
    dataset = engine.get_fine_tuning_dataset()
    return HealthResponse(
        status="healthy",
        engine="ready",
        templates=len(engine.get_available_templates()),
        themes=len(engine.get_available_themes()),
        group_types=len(engine.get_available_group_types()),
        dataset_examples=len(dataset.examples) if dataset else 0,
    )


@router.get("/templates", response_model=CatalogResponse)
async def list_templates(request: Request):
    return CatalogResponse(items=_engine(request).get_available_templates())


@router.get("/themes", response_model=CatalogResponse)
async def list_themes(request: Request):
    return CatalogResponse(items=_engine(request).get_available_themes())


@router.get("/group-types", response_model=CatalogResponse)
async def list_group_types(request: Request):
    return CatalogResponse(items=_engine(request).get_available_group_types())


@router.post("/generate", response_model=GenerationResult)
async def generate(request: Request, body: GenerateRequest):
    """Generate one object from free text, preferring rated examples when enabled."""
    engine = _engine(request)
    if body.use_fine_tuning:
        return await engine.generate_with_fine_tuning(body.prompt)
    return await engine.generate_from_prompt(body.prompt)


@router.post("/templates/{name}", response_model=GenerationResult)
async def generate_template(name: str, request: Request):
    result = await _engine(request).generate_from_template(name)
    if not result.success:
        raise HTTPException(404, result.warnings[0] if result.warnings else f"Template '{name}' not found")
    return result


@router.post("/random", response_model=GenerationResult)
async def generate_random(request: Request):
    return await _engine(request).generate_random()


@router.post("/contextual", response_model=GenerationResult)
async def generate_contextual(request: Request, body: ContextualRequest):
    context = GenerationContext(
        extracted_style=body.extracted_style,
        existing_objects=body.existing_objects,
        neighbors=body.neighbors,
        theme=body.theme,
    )
    return await _engine(request).generate_contextual(body.prompt, context)


@router.post("/composite", response_model=ArrangementResult)
async def generate_composite(request: Request, body: CompositeRequest):
    description = CompositeDescription(**body.model_dump())
    return await _engine(request).generate_from_composite(description)


@router.post("/group", response_model=ArrangementResult)
async def generate_group(request: Request, body: GroupRequest):
    return await _engine(request).generate_group(body.group_type, body.description, body.dimensions)


@router.post("/style", response_model=ExtractedStyle)
async def extract_style(request: Request, body: StyleRequest):
    return _engine(request).extract_style(body.objects)


@router.post("/batch")
async def generate_batch(request: Request, body: BatchRequest):
    """Batch generation. Returns an SSE stream with one event per prompt."""
    engine = _engine(request)

    async def event_generator():
        t0 = time.monotonic()
        succeeded = 0
        index = 0
        try:
            async for result in iter_batch(engine, body):
                if result.success:
                    succeeded += 1
                yield sse_event("object_generated", {
                    "index": index,
                    "prompt": body.prompts[index],
                    "result": result.model_dump(mode="json"),
                })
                index += 1

            elapsed_ms = int((time.monotonic() - t0) * 1000)
            logger.info("Batch of %d prompts completed in %dms", len(body.prompts), elapsed_ms)
            yield sse_event("batch_complete", {
                "total": len(body.prompts),
                "succeeded": succeeded,
                "failed": len(body.prompts) - succeeded,
                "latency_ms": elapsed_ms,
            })
        except Exception as e:
            logger.error("Batch error at prompt %d: %s", index, e, exc_info=True)
            yield sse_error(f"Batch error: {e}", stage="batch")

    return EventSourceResponse(event_generator())


@router.post("/feedback", response_model=TrainingExample)
async def record_feedback(request: Request, body: FeedbackRequest):
    return _engine(request).record_feedback(body.prompt, body.object, body.rating)


@router.get("/fine-tuning/dataset", response_model=FineTuningDataset)
async def get_dataset(request: Request):
    dataset = _engine(request).get_fine_tuning_dataset()
    if dataset is None:
        raise HTTPException(404, "No fine-tuning dataset")
    return dataset


@router.put("/fine-tuning/dataset", response_model=FineTuningDataset)
async def load_dataset(request: Request):
    """Replace the dataset with the JSON document in the request body."""
    engine = _engine(request)
    document = (await request.body()).decode("utf-8", errors="replace")
    try:
        return engine.load_fine_tuning_dataset(document)
    except DatasetFormatError as e:
        raise HTTPException(400, str(e))


@router.delete("/fine-tuning/dataset", status_code=204)
async def clear_dataset(request: Request):
    _engine(request).clear_fine_tuning_dataset()
    return Response(status_code=204)
