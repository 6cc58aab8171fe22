import json

SSE_EVENT_TYPES = [
    "object_generated",
    "batch_complete",
    "error",
]


def sse_event(event_type: str, data: dict) -> dict:
    """Create a typed SSE event dict for EventSourceResponse."""
    return {
        "event": event_type,
        "data": json.dumps(data),
    }


def sse_error(message: str, stage: str | None = None) -> dict:
    """Create an error SSE event."""
    payload = {"error": message}
    if stage:
        payload["stage"] = stage
    return {
        "event": "error",
        "data": json.dumps(payload),
    }
