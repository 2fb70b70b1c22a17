"""Logging and metrics helpers for reranking runs."""

from .logging import configure_logging
from .metrics import RerankMetrics

__all__ = ["configure_logging", "RerankMetrics"]
