"""In-memory metrics for greedy reranking calls."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Dict


@dataclass(slots=True)
class RerankSnapshot:
    uptime_seconds: float
    calls_total: int
    avg_latency_ms: float
    avg_pool_size: float
    avg_selected: float
    early_stop_rate: float


@dataclass
class RerankMetrics:
    """Track pool sizes, selections and latency of rerank calls."""

    start_time: float = field(default_factory=time.perf_counter)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _total_latency_ms: float = 0.0
    _call_count: int = 0
    _pool_size_sum: int = 0
    _selected_sum: int = 0
    _early_stops: int = 0

    def record(
        self,
        latency_ms: float,
        pool_size: int,
        selected: int,
        early_stop: bool,
    ) -> None:
        with self._lock:
            self._total_latency_ms += max(0.0, latency_ms)
            self._pool_size_sum += max(0, pool_size)
            self._selected_sum += max(0, selected)
            self._early_stops += 1 if early_stop else 0
            self._call_count += 1

    def snapshot(self) -> RerankSnapshot:
        with self._lock:
            count = self._call_count
            avg_latency = self._total_latency_ms / count if count else 0.0
            avg_pool = self._pool_size_sum / count if count else 0.0
            avg_selected = self._selected_sum / count if count else 0.0
            early_rate = self._early_stops / count if count else 0.0
        return RerankSnapshot(
            uptime_seconds=time.perf_counter() - self.start_time,
            calls_total=count,
            avg_latency_ms=avg_latency,
            avg_pool_size=avg_pool,
            avg_selected=avg_selected,
            early_stop_rate=early_rate,
        )

    def as_dict(self) -> Dict[str, float | int]:
        snapshot = self.snapshot()
        return {
            "uptime_seconds": round(snapshot.uptime_seconds, 3),
            "calls_total": snapshot.calls_total,
            "avg_latency_ms": round(snapshot.avg_latency_ms, 3),
            "avg_pool_size": round(snapshot.avg_pool_size, 3),
            "avg_selected": round(snapshot.avg_selected, 3),
            "early_stop_rate": round(snapshot.early_stop_rate, 3),
        }


__all__ = ["RerankMetrics", "RerankSnapshot"]
