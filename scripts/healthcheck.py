"""Health check script for the Cubesmith API endpoints.

Hits every endpoint on the running server and reports status.
Requires: uvicorn running on localhost:8000 (default).

Usage:
    python scripts/healthcheck.py
    python scripts/healthcheck.py --base-url http://localhost:9000
    python scripts/healthcheck.py --verbose
"""

import argparse
import asyncio
import json
import sys
import time

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"

BATCH_PAYLOAD = {
    "prompts": ["granite block", "mossy oak", "red brick"],
    "grouping": "related",
}

COMPOSITE_PAYLOAD = {
    "primary": "stone wall",
    "neighbors": [{"direction": "y", "relation": "gradient", "description": "moss"}],
}

GROUP_PAYLOAD = {"group_type": "structure", "description": "brick", "dimensions": [2, 2, 2]}

EXPECTED_SSE_EVENTS = ["object_generated", "batch_complete"]


def parse_sse(text: str) -> list[dict]:
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


class Check:
    def __init__(self, name: str):
        self.name = name
        self.status = "SKIP"
        self.latency_ms: float = 0.0
        self.detail = ""
        self.errors: list[str] = []

    def pass_(self, detail: str = ""):
        self.status = "PASS"
        self.detail = detail

    def fail(self, error: str):
        self.status = "FAIL"
        self.errors.append(error)

    def warn(self, msg: str):
        if self.status != "FAIL":
            self.status = "WARN"
        self.detail = msg


async def _request(
    client: httpx.AsyncClient, c: Check, method: str, url: str, verbose: bool, **kwargs
) -> httpx.Response | None:
    """Issue a request, recording latency and connection/HTTP failures on the check."""
    t0 = time.monotonic()
    try:
        resp = await client.request(method, url, **kwargs)
        c.latency_ms = (time.monotonic() - t0) * 1000
        resp.raise_for_status()
    except httpx.ConnectError:
        c.latency_ms = (time.monotonic() - t0) * 1000
        c.fail("server not reachable")
        return None
    except httpx.HTTPStatusError as e:
        c.fail(f"HTTP {e.response.status_code}")
        return None
    if verbose and "json" in resp.headers.get("content-type", ""):
        print(f"    Response: {json.dumps(resp.json(), indent=2, ensure_ascii=False)[:400]}")
    return resp


async def check_health(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("GET /api/health")
    resp = await _request(client, c, "GET", f"{base_url}/api/health", verbose)
    if resp is None:
        return c
    data = resp.json()
    status = data.get("status")
    if status == "healthy":
        c.pass_(f"templates={data.get('templates')}, examples={data.get('dataset_examples')}")
    elif status == "degraded":
        c.warn(f"degraded: engine={data.get('engine', 'unknown')}")
    else:
        c.fail(f"unexpected status: {status}")
    return c


async def check_catalog(client: httpx.AsyncClient, base_url: str, path: str, verbose: bool) -> Check:
    c = Check(f"GET /api/{path}")
    resp = await _request(client, c, "GET", f"{base_url}/api/{path}", verbose)
    if resp is None:
        return c
    items = resp.json().get("items", [])
    if items:
        c.pass_(f"{len(items)} entries")
    else:
        c.warn("empty catalog")
    return c


async def check_generate(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("POST /api/generate")
    resp = await _request(
        client, c, "POST", f"{base_url}/api/generate", verbose,
        json={"prompt": "dark weathered granite", "use_fine_tuning": False},
    )
    if resp is None:
        return c
    data = resp.json()
    material = (data.get("object") or {}).get("physics", {}).get("material")
    if data.get("success") and material == "stone":
        c.pass_(f"method={data.get('method')}, confidence={data.get('confidence'):.2f}")
    else:
        c.fail(f"unexpected result: success={data.get('success')}, material={material}")
    return c


async def check_template(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("POST /api/templates/stone")
    resp = await _request(client, c, "POST", f"{base_url}/api/templates/stone", verbose)
    if resp is None:
        return c
    data = resp.json()
    if data.get("confidence") == 1.0 and not data.get("warnings"):
        c.pass_("confidence=1.0")
    else:
        c.fail(f"confidence={data.get('confidence')}, warnings={data.get('warnings')}")
    return c


async def check_composite(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("POST /api/composite")
    resp = await _request(client, c, "POST", f"{base_url}/api/composite", verbose, json=COMPOSITE_PAYLOAD)
    if resp is None:
        return c
    data = resp.json()
    if len(data.get("objects", [])) == 2 and data.get("positions", [None])[0] == [0, 0, 0]:
        c.pass_("2 objects, primary at origin")
    else:
        c.fail(f"got {len(data.get('objects', []))} objects, positions={data.get('positions')}")
    return c


async def check_group(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("POST /api/group")
    resp = await _request(client, c, "POST", f"{base_url}/api/group", verbose, json=GROUP_PAYLOAD)
    if resp is None:
        return c
    data = resp.json()
    count = len(data.get("objects", []))
    if count == 8:
        c.pass_(f"8 objects, confidence={data.get('confidence'):.2f}")
    else:
        c.fail(f"expected 8 objects, got {count}")
    for w in data.get("warnings", []):
        c.warn(w)
    return c


async def check_batch(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("POST /api/batch (SSE)")
    resp = await _request(
        client, c, "POST", f"{base_url}/api/batch", verbose, json=BATCH_PAYLOAD, timeout=30.0
    )
    if resp is None:
        return c
    if "text/event-stream" not in resp.headers.get("content-type", ""):
        c.fail(f"wrong content-type: {resp.headers.get('content-type')}")
        return c

    events = parse_sse(resp.text)
    event_types = [e.get("event") for e in events]
    if verbose:
        print(f"    Events: {event_types}")

    if "error" in event_types:
        err = next(e for e in events if e.get("event") == "error")
        c.fail(f"pipeline error: {err.get('data', '')[:120]}")
        return c

    missing = [e for e in EXPECTED_SSE_EVENTS if e not in event_types]
    generated = event_types.count("object_generated")
    if missing:
        c.fail(f"missing events: {missing}")
    elif generated != len(BATCH_PAYLOAD["prompts"]):
        c.fail(f"expected {len(BATCH_PAYLOAD['prompts'])} objects, got {generated}")
    else:
        c.pass_(f"{len(events)} events")
    return c


async def check_dataset(client: httpx.AsyncClient, base_url: str, verbose: bool) -> Check:
    c = Check("GET /api/fine-tuning/dataset")
    t0 = time.monotonic()
    try:
        resp = await client.get(f"{base_url}/api/fine-tuning/dataset")
        c.latency_ms = (time.monotonic() - t0) * 1000
    except httpx.ConnectError:
        c.latency_ms = (time.monotonic() - t0) * 1000
        c.fail("server not reachable")
        return c
    if resp.status_code == 404:
        c.warn("no dataset yet")
    elif resp.status_code == 200:
        c.pass_(f"{len(resp.json().get('examples', []))} examples")
    else:
        c.fail(f"HTTP {resp.status_code}")
    return c


async def run_all(base_url: str, verbose: bool) -> list[Check]:
    async with httpx.AsyncClient() as client:
        # Always run health first -- if server is down, skip the rest
        health = await check_health(client, base_url, verbose)
        results = [health]

        if health.status == "FAIL":
            print(f"\n  Server not reachable at {base_url} -- skipping remaining checks.\n")
            return results

        fast_checks = await asyncio.gather(
            check_catalog(client, base_url, "templates", verbose),
            check_catalog(client, base_url, "themes", verbose),
            check_catalog(client, base_url, "group-types", verbose),
            check_dataset(client, base_url, verbose),
        )
        results.extend(fast_checks)

        results.append(await check_generate(client, base_url, verbose))
        results.append(await check_template(client, base_url, verbose))
        results.append(await check_composite(client, base_url, verbose))
        results.append(await check_group(client, base_url, verbose))
        results.append(await check_batch(client, base_url, verbose))

        return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Cubesmith API health check")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server base URL")
    parser.add_argument("--verbose", action="store_true", help="Print response bodies")
    args = parser.parse_args()

    print("Cubesmith Health Check")
    print(f"Target: {args.base_url}\n")

    results = asyncio.run(run_all(args.base_url, args.verbose))

    # Summary table
    status_icon = {"PASS": "+", "FAIL": "X", "WARN": "~", "SKIP": "-"}
    print(f"{'='*70}")
    print(f"  {'Endpoint':<35} {'Status':<8} {'Latency':>10}  Detail")
    print(f"  {'-'*66}")
    for r in results:
        icon = status_icon.get(r.status, "?")
        detail = r.detail or (r.errors[0] if r.errors else "")
        latency_str = f"{r.latency_ms:.0f} ms" if r.latency_ms > 0 else "--"
        print(f"  [{icon}] {r.name:<32} {r.status:<8} {latency_str:>8}  {detail}")
    print(f"{'='*70}")

    passed = sum(1 for r in results if r.status == "PASS")
    warned = sum(1 for r in results if r.status == "WARN")
    failed = sum(1 for r in results if r.status == "FAIL")
    total = len(results)

    print(f"\n  {passed}/{total} passed", end="")
    if warned:
        print(f", {warned} warnings", end="")
    if failed:
        print(f", {failed} FAILED", end="")
    print()

    if failed:
        sys.exit(1)
    elif warned:
        sys.exit(0)
    else:
        print("  All endpoints healthy.")
        sys.exit(0)


if __name__ == "__main__":
    main()
