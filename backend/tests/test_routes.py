import json
import pytest
import numpy as np
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
import sse_starlette.sse as sse_module
from api.routes import router
from engine.finetune import FineTuningStore
from engine.generator import ObjectGenerator


@pytest.fixture(autouse=True)
def _fresh_sse_exit_event():
    # The exit event binds to the first event loop that touches it.
    status = getattr(sse_module, "AppStatus", None)
    if status is not None:
        status.should_exit_event = None
    yield


def _make_app(engine=None):
    """Create a test FastAPI app with an in-process engine."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.state.engine = engine if engine is not None else ObjectGenerator(
        store=FineTuningStore(), rng=np.random.default_rng(7)
    )
    return app


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["templates"] == 28
        assert data["dataset_examples"] == 0


@pytest.mark.asyncio
async def test_health_without_engine():
    app = _make_app()
    app.state.engine = None
    async with _client(app) as client:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_missing_engine_returns_503():
    app = _make_app()
    app.state.engine = None
    async with _client(app) as client:
        resp = await client.post("/api/generate", json={"prompt": "stone"})
        assert resp.status_code == 503


@pytest.mark.asyncio
async def test_catalog_endpoints():
    async with _client(_make_app()) as client:
        templates = (await client.get("/api/templates")).json()["items"]
        themes = (await client.get("/api/themes")).json()["items"]
        groups = (await client.get("/api/group-types")).json()["items"]
        assert templates[0] == "stone"
        assert "arctic" in themes
        assert groups == ["wall", "floor", "column", "structure", "terrain"]


@pytest.mark.asyncio
async def test_generate_from_prompt():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/generate", json={"prompt": "dark weathered stone"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["method"] == "hybrid"
        assert data["object"]["physics"]["material"] == "stone"


@pytest.mark.asyncio
async def test_generate_requires_prompt():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/generate", json={})
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_template_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/templates/stone")
        assert resp.status_code == 200
        data = resp.json()
        assert data["confidence"] == 1.0
        assert data["object"]["physics"]["break_pattern"] == "crumble"

        resp = await client.post("/api/templates/unobtainium")
        assert resp.status_code == 404
        assert "Available" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_random_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/random")
        assert resp.status_code == 200
        assert resp.json()["method"] == "random"


@pytest.mark.asyncio
async def test_contextual_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/contextual", json={
            "prompt": "stone",
            "extracted_style": {"average_color": [1.0, 1.0, 1.0], "average_roughness": 0.0},
            "theme": "steampunk",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["method"] == "hybrid"
        assert data["object"]["base"]["roughness"] == pytest.approx(0.48)
        assert any("steampunk" in w for w in data["warnings"])


@pytest.mark.asyncio
async def test_composite_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/composite", json={
            "primary": "stone wall",
            "neighbors": [{"direction": "y", "relation": "gradient", "description": "moss"}],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["objects"]) == 2
        assert data["positions"] == [[0, 0, 0], [0, 1, 0]]


@pytest.mark.asyncio
async def test_group_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/group", json={
            "group_type": "structure", "description": "brick", "dimensions": [2, 2, 2],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["objects"]) == 8
        assert len({tuple(p) for p in data["positions"]}) == 8


@pytest.mark.asyncio
async def test_group_endpoint_rejects_oversized_dimensions():
    engine = AsyncMock()
    async with _client(_make_app(engine)) as client:
        resp = await client.post("/api/group", json={
            "group_type": "structure", "description": "brick", "dimensions": [10000, 10000, 10000],
        })
        assert resp.status_code == 422
    engine.generate_group.assert_not_called()


@pytest.mark.asyncio
async def test_style_endpoint():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/style", json={"objects": []})
        assert resp.status_code == 200
        data = resp.json()
        assert data["average_color"] == [0.5, 0.5, 0.5]
        assert data["dominant_material"] == "stone"


@pytest.mark.asyncio
async def test_batch_returns_sse_stream():
    async with _client(_make_app()) as client:
        resp = await client.post("/api/batch", json={"prompts": ["stone", "oak", "xyzzy"]})
        assert resp.status_code == 200
        assert "text/event-stream" in resp.headers["content-type"]

        events = _parse_sse(resp.text)
        event_types = [e["event"] for e in events]
        assert event_types == ["object_generated"] * 3 + ["batch_complete"]

        prompts = [json.loads(e["data"])["prompt"] for e in events[:3]]
        assert prompts == ["stone", "oak", "xyzzy"]

        summary = json.loads(events[-1]["data"])
        assert summary["total"] == 3
        assert summary["succeeded"] == 3


@pytest.mark.asyncio
async def test_batch_engine_error_emits_error_event():
    engine = ObjectGenerator()
    engine.generate_from_prompt = AsyncMock(side_effect=RuntimeError("boom"))
    async with _client(_make_app(engine)) as client:
        resp = await client.post("/api/batch", json={"prompts": ["stone"]})
        events = _parse_sse(resp.text)
        assert events[-1]["event"] == "error"
        assert "boom" in json.loads(events[-1]["data"])["error"]


@pytest.mark.asyncio
async def test_feedback_and_dataset_lifecycle():
    async with _client(_make_app()) as client:
        resp = await client.get("/api/fine-tuning/dataset")
        assert resp.status_code == 404

        generated = (await client.post("/api/generate", json={"prompt": "mossy castle stone"})).json()
        resp = await client.post("/api/feedback", json={
            "prompt": "mossy castle stone", "object": generated["object"], "rating": 1.5,
        })
        assert resp.status_code == 200
        assert resp.json()["rating"] == 1.0

        dataset = (await client.get("/api/fine-tuning/dataset")).json()
        assert len(dataset["examples"]) == 1

        resp = await client.post("/api/generate", json={"prompt": "mossy castle stone"})
        assert "fine-tuned" in resp.json()["object"]["meta"]["tags"]

        resp = await client.post("/api/generate", json={
            "prompt": "mossy castle stone", "use_fine_tuning": False,
        })
        assert "fine-tuned" not in resp.json()["object"]["meta"]["tags"]

        resp = await client.delete("/api/fine-tuning/dataset")
        assert resp.status_code == 204
        assert (await client.get("/api/fine-tuning/dataset")).status_code == 404


@pytest.mark.asyncio
async def test_dataset_upload():
    source = FineTuningStore()
    source.record_feedback("oak plank", _object(), 0.9)
    async with _client(_make_app()) as client:
        resp = await client.put("/api/fine-tuning/dataset", content=source.export())
        assert resp.status_code == 200
        assert resp.json()["examples"][0]["prompt"] == "oak plank"

        resp = await client.put("/api/fine-tuning/dataset", content="not json")
        assert resp.status_code == 400
        dataset = (await client.get("/api/fine-tuning/dataset")).json()
        assert len(dataset["examples"]) == 1


def _object():
    from engine.schemas import GeneratedObject
    return GeneratedObject(id="gen_upload")


def _parse_sse(text: str) -> list[dict]:
    """Parse raw SSE text into a list of {event, data} dicts."""
    events = []
    current = {}
    for line in text.strip().split("\n"):
        line = line.strip()
        if line.startswith("event:"):
            current["event"] = line[len("event:"):].strip()
        elif line.startswith("data:"):
            current["data"] = line[len("data:"):].strip()
        elif line == "" and current:
            events.append(current)
            current = {}
    if current:
        events.append(current)
    return events
