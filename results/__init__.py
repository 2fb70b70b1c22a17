"""Result value types shared by recommenders and rerankers."""
from __future__ import annotations

from .model import (
    Result,
    create_result,
    load_results,
    result_ids,
    save_results,
)

__all__ = [
    "Result",
    "create_result",
    "load_results",
    "result_ids",
    "save_results",
]
