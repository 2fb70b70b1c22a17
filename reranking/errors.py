"""Errors raised by the greedy reranking loop."""
from __future__ import annotations

from typing import Optional


class StrategyContractError(RuntimeError):
    """A strategy picked something that is not among the current candidates."""

    def __init__(self, message: str, *, strategy: Optional[object] = None) -> None:
        super().__init__(message)
        self.strategy = strategy


__all__ = ["StrategyContractError"]
