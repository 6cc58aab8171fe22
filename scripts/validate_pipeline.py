"""End-to-end validation of the generation engine, run in-process.

Runs acceptance scenarios covering keyword, hybrid and random prompts,
templates, groups, composites and fine-tuning, and checks each result
against expected materials, methods and invariants (unit-range colors,
one gradient per axis, unique ids). This is the gate before shipping a
lexicon change.

Usage:
    python scripts/validate_pipeline.py
    python scripts/validate_pipeline.py --scenario "Russian prompt" --verbose
    python scripts/validate_pipeline.py --seed 7
"""

import argparse
import asyncio
import itertools
import json
import time

import numpy as np

from engine.finetune import FineTuningStore
from engine.generator import ObjectGenerator
from engine.schemas import CompositeDescription, GeneratedObject, NeighborSpec, TrainingExample

# --- Test Scenarios ---

SCENARIOS = [
    {
        "name": "Plain keyword",
        "kind": "prompt",
        "input": "granite",
        "expected": {"material": "stone", "method": "keyword", "min_confidence": 0.9},
    },
    {
        "name": "Keyword with modifiers",
        "kind": "prompt",
        "input": "dark weathered stone",
        "expected": {"material": "stone", "method": "hybrid", "min_confidence": 0.9},
    },
    {
        "name": "Gradient axes",
        "kind": "prompt",
        "input": "layered vertical top horizontal oak",
        "expected": {"material": "wood", "method": "hybrid", "gradient_count": 2},
    },
    {
        "name": "Russian prompt",
        "kind": "prompt",
        "input": "тёмный гранитный блок",
        "expected": {"material": "stone", "method": "hybrid"},
    },
    {
        "name": "Modifiers only",
        "kind": "prompt",
        "input": "shiny purple",
        "expected": {"method": "hybrid", "max_confidence": 0.6, "warnings": 1},
    },
    {
        "name": "Unrecognized prompt",
        "kind": "prompt",
        "input": "xyzzy qwerty",
        "expected": {"method": "random", "max_confidence": 0.2, "warnings": 1},
    },
    {
        "name": "Stone template",
        "kind": "template",
        "input": "stone",
        "expected": {"material": "stone", "break_pattern": "crumble", "method": "template",
                     "min_confidence": 1.0, "warnings": 0},
    },
    {
        "name": "Unknown template",
        "kind": "template",
        "input": "unobtainium",
        "expected": {"success": False},
    },
    {
        "name": "Brick structure",
        "kind": "group",
        "input": {"group_type": "structure", "description": "brick", "dimensions": [2, 2, 2]},
        "expected": {"count": 8, "positions": sorted(itertools.product((0, 1), repeat=3))},
    },
    {
        "name": "Wall with moss",
        "kind": "composite",
        "input": {
            "primary": "stone wall",
            "neighbors": [{"direction": "y", "relation": "gradient", "description": "moss"}],
        },
        "expected": {"count": 2, "first_position": (0, 0, 0)},
    },
    {
        "name": "Fine-tuned recall",
        "kind": "fine_tuning",
        "input": "ancient castle gate",
        "expected": {"tag": "fine-tuned", "min_confidence": 0.7},
    },
]


# --- Invariant Checks ---


def check_object(obj: GeneratedObject) -> list[str]:
    """Return invariant violations for one generated object."""
    failures = []
    if not all(0.0 <= c <= 1.0 for c in obj.base.color):
        failures.append(f"{obj.id}: color out of range {obj.base.color}")
    if not 0.0 <= obj.base.roughness <= 1.0:
        failures.append(f"{obj.id}: roughness out of range {obj.base.roughness}")
    if not 0.0 <= obj.base.transparency <= 1.0:
        failures.append(f"{obj.id}: transparency out of range {obj.base.transparency}")
    axes = [g.axis for g in obj.gradients]
    if len(axes) != len(set(axes)):
        failures.append(f"{obj.id}: duplicate gradient axis {axes}")
    return failures


def check_result(result, expected: dict) -> list[str]:
    failures = []
    if result.success != expected.get("success", True):
        failures.append(f"success: expected {expected.get('success', True)}, got {result.success}")
        return failures
    if not result.success:
        return failures

    obj = result.object
    failures.extend(check_object(obj))

    if "material" in expected and obj.physics.material.value != expected["material"]:
        failures.append(f"material: expected '{expected['material']}', got '{obj.physics.material.value}'")
    if "break_pattern" in expected and obj.physics.break_pattern.value != expected["break_pattern"]:
        failures.append(f"break_pattern: expected '{expected['break_pattern']}', got '{obj.physics.break_pattern.value}'")
    if "method" in expected and result.method.value != expected["method"]:
        failures.append(f"method: expected '{expected['method']}', got '{result.method.value}'")
    if "min_confidence" in expected and result.confidence < expected["min_confidence"]:
        failures.append(f"confidence {result.confidence:.2f} below {expected['min_confidence']}")
    if "max_confidence" in expected and result.confidence > expected["max_confidence"]:
        failures.append(f"confidence {result.confidence:.2f} above {expected['max_confidence']}")
    if "warnings" in expected and len(result.warnings) != expected["warnings"]:
        failures.append(f"warnings: expected {expected['warnings']}, got {result.warnings}")
    if "gradient_count" in expected and len(obj.gradients) != expected["gradient_count"]:
        failures.append(f"gradients: expected {expected['gradient_count']}, got {len(obj.gradients)}")
    if "tag" in expected and expected["tag"] not in obj.meta.tags:
        failures.append(f"tag '{expected['tag']}' missing from {obj.meta.tags}")
    return failures


def check_arrangement(result, expected: dict) -> list[str]:
    failures = []
    if not result.success:
        return [f"arrangement failed: {result.warnings}"]
    for obj in result.objects:
        failures.extend(check_object(obj))
    if len({obj.id for obj in result.objects}) != len(result.objects):
        failures.append("duplicate object ids")
    if "count" in expected and len(result.objects) != expected["count"]:
        failures.append(f"count: expected {expected['count']}, got {len(result.objects)}")
    if len(result.positions) != len(result.objects):
        failures.append(f"{len(result.positions)} positions for {len(result.objects)} objects")
    if "positions" in expected and sorted(result.positions) != expected["positions"]:
        failures.append(f"positions: got {sorted(result.positions)}")
    if "first_position" in expected and tuple(result.positions[0]) != expected["first_position"]:
        failures.append(f"first position: got {result.positions[0]}")
    return failures


# --- Scenario Runner ---


async def run_scenario(engine: ObjectGenerator, scenario: dict, verbose: bool = False) -> dict:
    kind = scenario["kind"]
    data = scenario["input"]
    expected = scenario["expected"]

    start_time = time.time()
    if kind == "prompt":
        result = await engine.generate_from_prompt(data)
        failures = check_result(result, expected)
    elif kind == "template":
        result = await engine.generate_from_template(data)
        failures = check_result(result, expected)
    elif kind == "group":
        result = await engine.generate_group(data["group_type"], data["description"], data["dimensions"])
        failures = check_arrangement(result, expected)
    elif kind == "composite":
        result = await engine.generate_from_composite(CompositeDescription(
            primary=data["primary"],
            neighbors=[NeighborSpec(**n) for n in data["neighbors"]],
        ))
        failures = check_arrangement(result, expected)
    elif kind == "fine_tuning":
        seed = await engine.generate_from_prompt(data)
        engine.add_training_example(TrainingExample(prompt=data, object=seed.object, rating=1.0))
        result = await engine.generate_with_fine_tuning(data)
        failures = check_result(result, expected)
        engine.clear_fine_tuning_dataset()
    else:
        raise ValueError(f"Unknown scenario kind: {kind}")
    latency_ms = (time.time() - start_time) * 1000

    if verbose:
        print(f"\n  Result: {json.dumps(result.model_dump(mode='json'), ensure_ascii=False)[:500]}")

    outcome = {
        "name": scenario["name"],
        "status": "PASS" if not failures else "FAIL",
        "latency_ms": latency_ms,
    }
    if failures:
        outcome["failures"] = failures
    return outcome


async def check_random_ids(engine: ObjectGenerator, count: int = 200) -> dict:
    start_time = time.time()
    ids = {(await engine.generate_random()).object.id for _ in range(count)}
    failures = [] if len(ids) == count else [f"{count - len(ids)} duplicate ids in {count} draws"]
    return {
        "name": "Random id uniqueness",
        "status": "PASS" if not failures else "FAIL",
        "latency_ms": (time.time() - start_time) * 1000,
        **({"failures": failures} if failures else {}),
    }


# --- Main ---


async def async_main(scenarios: list[dict], seed: int | None, verbose: bool) -> list[dict]:
    engine = ObjectGenerator(store=FineTuningStore(), rng=np.random.default_rng(seed))

    results = []
    for scenario in scenarios:
        print(f"Running: {scenario['name']}...", end="", flush=True)
        result = await run_scenario(engine, scenario, verbose=verbose)
        print(f" {result['status']} ({result['latency_ms']:.0f}ms)")
        for f in result.get("failures", []):
            print(f"  - {f}")
        results.append(result)

    results.append(await check_random_ids(engine))
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate the generation pipeline end-to-end")
    parser.add_argument("--verbose", action="store_true", help="Print full generation results")
    parser.add_argument("--scenario", type=str, help="Run a single scenario by name")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random generation")
    args = parser.parse_args()

    scenarios = SCENARIOS
    if args.scenario:
        scenarios = [s for s in SCENARIOS if s["name"] == args.scenario]
        if not scenarios:
            available = [s["name"] for s in SCENARIOS]
            raise ValueError(f"Scenario '{args.scenario}' not found. Available: {available}")

    print(f"Running {len(scenarios)} scenario(s)...\n")

    results = asyncio.run(async_main(scenarios, seed=args.seed, verbose=args.verbose))

    # Summary table
    print(f"\n{'='*60}")
    print(f"{'Scenario':<28} {'Status':<8} {'Latency':>10}")
    print(f"{'-'*60}")
    for r in results:
        print(f"{r['name']:<28} {r['status']:<8} {r['latency_ms']:>8.0f} ms")
    print(f"{'='*60}")

    passed = sum(1 for r in results if r["status"] == "PASS")
    total = len(results)
    print(f"\nResult: {passed}/{total} passed")

    if passed < total:
        print("\nFailed scenarios need investigation.")
        raise SystemExit(1)

    print("\nAll scenarios passed.")


if __name__ == "__main__":
    main()
