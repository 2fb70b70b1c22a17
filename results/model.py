"""Scored recommendation results and their on-disk representation."""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """A single recommended item together with its score."""

    item_id: int
    score: float

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation of the result."""

        return {"item_id": self.item_id, "score": self.score}

    @staticmethod
    def from_json(payload: Mapping[str, Any]) -> "Result":
        """Instantiate a result from a JSON payload."""

        return create_result(payload["item_id"], payload["score"])


def create_result(item_id: int, score: float) -> Result:
    """Build a :class:`Result`, coercing the id and score to their canonical types."""

    return Result(item_id=int(item_id), score=float(score))


def result_ids(results: Sequence[Result]) -> List[int]:
    """Return the item ids of ``results`` in order."""

    return [result.item_id for result in results]


def save_results(results: Sequence[Result], destination: Path | str) -> None:
    """Persist a list of results as a JSON array."""

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    payload = [result.to_json() for result in results]
    destination.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def load_results(path: Path | str) -> List[Result]:
    """Load results saved via :func:`save_results`."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Result file {path} does not exist")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise TypeError("Result file must contain a JSON array")
    results = [Result.from_json(item) for item in data]
    logger.debug("Loaded %s results from %s", len(results), path)
    return results
