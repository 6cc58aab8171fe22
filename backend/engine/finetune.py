import json
import logging
import os
import threading
import uuid

from pydantic import ValidationError

from .schemas import FineTuningDataset, GeneratedObject, TrainingExample
from .synthesizer import clamp, utc_now
from .tokenizer import prepare_tokens

logger = logging.getLogger(__name__)


class DatasetFormatError(Exception):
    """Raised when a fine-tuning dataset document cannot be parsed."""
    pass


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


class FineTuningStore:
    """Rated (prompt, object) examples, created lazily on first write.

    All reads and writes go through one lock so the store can be shared
    between request handlers.
    """

    def __init__(self, dataset: FineTuningDataset | None = None):
        self._lock = threading.Lock()
        self._dataset = dataset

    def _ensure_dataset(self) -> FineTuningDataset:
        if self._dataset is None:
            now = utc_now()
            self._dataset = FineTuningDataset(
                id=f"ds_{uuid.uuid4().hex[:12]}", created=now, updated=now
            )
            logger.info("Created fine-tuning dataset %s", self._dataset.id)
        return self._dataset

    def add_example(self, example: TrainingExample) -> TrainingExample:
        if example.created is None:
            example = example.model_copy(update={"created": utc_now()})
        with self._lock:
            dataset = self._ensure_dataset()
            dataset.examples.append(example)
            dataset.updated = utc_now()
            count = len(dataset.examples)
        logger.debug("Stored training example for %r (%d total)", example.prompt, count)
        return example

    def record_feedback(
        self, prompt: str, obj: GeneratedObject, rating: float
    ) -> TrainingExample:
        example = TrainingExample(prompt=prompt, object=obj, rating=clamp(rating), created=utc_now())
        return self.add_example(example)

    def get_dataset(self) -> FineTuningDataset | None:
        with self._lock:
            if self._dataset is None:
                return None
            return self._dataset.model_copy(deep=True)

    def has_dataset(self) -> bool:
        with self._lock:
            return self._dataset is not None

    def clear(self) -> None:
        with self._lock:
            self._dataset = None
        logger.info("Fine-tuning dataset cleared")

    def export(self) -> str | None:
        """Serialize the dataset as pretty-printed JSON, or None if absent."""
        with self._lock:
            if self._dataset is None:
                return None
            payload = self._dataset.model_dump(mode="json")
        return json.dumps(payload, ensure_ascii=False, indent=2)

    def load(self, document: str | bytes) -> FineTuningDataset:
        """Replace the dataset with one parsed from a JSON document.

        The current dataset is kept if the document is invalid. Returns a copy
        of the loaded dataset.
        """
        try:
            dataset = FineTuningDataset.model_validate_json(document)
        except (ValidationError, UnicodeDecodeError) as e:
            raise DatasetFormatError(f"Invalid fine-tuning dataset: {e}") from e
        with self._lock:
            self._dataset = dataset
        logger.info("Loaded fine-tuning dataset %s (%d examples)", dataset.id, len(dataset.examples))
        return dataset.model_copy(deep=True)

    def save_to_file(self, path: str) -> bool:
        """Atomically write the dataset to path.

        With no dataset the file at path is removed, so a cleared dataset
        stays cleared. Returns False in that case.
        """
        document = self.export()
        if document is None:
            if os.path.exists(path):
                os.remove(path)
                logger.info("Removed fine-tuning dataset file %s", path)
            return False
        tmp = path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(document)
        os.replace(tmp, path)
        logger.info("Saved fine-tuning dataset to %s", path)
        return True

    def load_from_file(self, path: str) -> FineTuningDataset | None:
        if not os.path.exists(path):
            logger.info("No fine-tuning dataset at %s", path)
            return None
        with open(path, "rb") as f:
            return self.load(f.read())

    def best_match(self, prompt: str) -> tuple[TrainingExample | None, float]:
        """Find the stored example whose rating-weighted Jaccard score is highest."""
        query = set(prepare_tokens(prompt))
        with self._lock:
            examples = list(self._dataset.examples) if self._dataset else []

        best: TrainingExample | None = None
        best_score = 0.0
        for example in examples:
            similarity = jaccard_similarity(query, set(prepare_tokens(example.prompt)))
            score = similarity * example.rating
            if score > best_score:
                best = example
                best_score = score
        return best, best_score
