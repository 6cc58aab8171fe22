"""Generate a synthetic fine-tuning dataset from the keyword engine.

Builds prompts by pairing every material template with modifier and
gradient words (and a share of Russian variants), generates an object for
each, rates it, and writes the result as one dataset document.

The document loads with PUT /api/fine-tuning/dataset or by pointing
CUBESMITH_DATASET_PATH at it.

Output:
- data/synthetic/fine_tuning_dataset.json
"""

import argparse
import asyncio
import json
import random
from pathlib import Path

import numpy as np

from engine.finetune import FineTuningStore
from engine.generator import ObjectGenerator
from engine.schemas import TrainingExample
from lexicon.materials import get_template_names
from lexicon.modifiers import GRADIENT_PATTERNS, MODIFIERS
from lexicon.translations import RUSSIAN_TO_ENGLISH

BASE_DIR = Path(__file__).resolve().parent.parent
SYNTHETIC_DIR = BASE_DIR / "data" / "synthetic"
DEFAULT_OUTPUT = SYNTHETIC_DIR / "fine_tuning_dataset.json"

# --- Configuration ---

PROMPTS_PER_TEMPLATE = 6
RUSSIAN_SHARE = 0.2
MIN_RATING = 0.55
RATING_JITTER = 0.1

ENGLISH_TO_RUSSIAN: dict[str, str] = {}
for russian, english in RUSSIAN_TO_ENGLISH.items():
    ENGLISH_TO_RUSSIAN.setdefault(english, russian)


# --- Prompt Building ---


def build_prompts(per_template: int, rnd: random.Random) -> list[str]:
    """Pair each template with random modifier/gradient words."""
    modifiers = [m.value for m in MODIFIERS]
    gradients = [g.value for g in GRADIENT_PATTERNS]

    prompts: list[str] = []
    for template in get_template_names():
        for _ in range(per_template):
            words = rnd.sample(modifiers, k=rnd.randint(1, 2))
            if rnd.random() < 0.3:
                words.append(rnd.choice(gradients))
            words.append(template)
            if rnd.random() < RUSSIAN_SHARE:
                words = [ENGLISH_TO_RUSSIAN.get(w, w) for w in words]
            prompts.append(" ".join(words))
    return list(dict.fromkeys(prompts))


def rate(confidence: float, rnd: random.Random) -> float:
    """Derive a synthetic user rating from engine confidence."""
    rating = confidence + rnd.uniform(-RATING_JITTER, RATING_JITTER)
    return round(min(max(rating, 0.0), 1.0), 3)


# --- Main ---


async def build_dataset(prompts: list[str], seed: int, rnd: random.Random) -> tuple[FineTuningStore, int]:
    store = FineTuningStore()
    engine = ObjectGenerator(store=FineTuningStore(), rng=np.random.default_rng(seed))
    rejected = 0
    for prompt in prompts:
        result = await engine.generate_from_prompt(prompt)
        if not result.success or result.object is None:
            rejected += 1
            continue
        rating = rate(result.confidence, rnd)
        if rating < MIN_RATING:
            rejected += 1
            continue
        store.add_example(TrainingExample(prompt=prompt, object=result.object, rating=rating))
    return store, rejected


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a synthetic fine-tuning dataset")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output JSON path")
    parser.add_argument("--per-template", type=int, default=PROMPTS_PER_TEMPLATE,
                        help="Prompts generated per material template")
    parser.add_argument("--seed", type=int, default=0, help="Seed for prompts, ratings and engine")
    parser.add_argument("--dry-run", action="store_true", help="Print prompts, write nothing")
    args = parser.parse_args()

    rnd = random.Random(args.seed)
    prompts = build_prompts(args.per_template, rnd)
    print(f"Built {len(prompts)} unique prompts from {len(get_template_names())} templates")

    if args.dry_run:
        for prompt in prompts[:20]:
            print(f"  {prompt}")
        if len(prompts) > 20:
            print(f"  ... {len(prompts) - 20} more")
        return

    store, rejected = asyncio.run(build_dataset(prompts, args.seed, rnd))
    dataset = store.get_dataset()
    if dataset is None:
        raise RuntimeError("Every generated example was rejected; lower MIN_RATING")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    store.save_to_file(str(args.output))

    ratings = [e.rating for e in dataset.examples]
    print(f"Kept {len(dataset.examples)} examples, rejected {rejected}")
    print(f"Mean rating: {sum(ratings) / len(ratings):.3f}")
    print(f"Wrote {args.output}")
    print(json.dumps({"id": dataset.id, "examples": len(dataset.examples)}))


if __name__ == "__main__":
    main()
