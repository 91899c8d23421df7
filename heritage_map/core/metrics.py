"""Discovery & tour metrics.

Collects nearby-search latency, cache hit stats and tour counters.
"""
import time
from collections import deque
from contextlib import contextmanager

# most recent samples only
MAX_TIMING_SAMPLES = 1000
_nearby_timings_ms: deque = deque(maxlen=MAX_TIMING_SAMPLES)
_nearby_cache_hits: int = 0
_nearby_cache_misses: int = 0
_tour_counters: dict[str, int] = {"started": 0, "advanced": 0, "completed": 0}


@contextmanager
def record_nearby_latency():
    start = time.perf_counter()
    try:
        yield
    finally:
        _nearby_timings_ms.append((time.perf_counter() - start) * 1000.0)


def record_nearby_cache(hit: bool) -> None:
    global _nearby_cache_hits, _nearby_cache_misses
    if hit:
        _nearby_cache_hits += 1
    else:
        _nearby_cache_misses += 1


def record_tour_event(event: str) -> None:
    _tour_counters[event] = _tour_counters.get(event, 0) + 1


def _percentiles(values: list[float]) -> dict:
    if not values:
        return {"count": 0, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    return {
        "nearby": _percentiles(_nearby_timings_ms),
        "nearby_cache": {
            "hits": _nearby_cache_hits,
            "misses": _nearby_cache_misses,
        },
        "tours": dict(_tour_counters),
    }


def reset_metrics() -> None:
    global _nearby_cache_hits, _nearby_cache_misses
    _nearby_timings_ms.clear()
    _nearby_cache_hits = 0
    _nearby_cache_misses = 0
    for key in _tour_counters:
        _tour_counters[key] = 0
