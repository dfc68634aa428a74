"""Timing helpers shared by the keyscript benchmark scripts.

Importing this module puts ``src/`` on ``sys.path`` so the scripts run
from a plain checkout without installing the package.
"""
from __future__ import annotations

import json
import sys
import time
from collections.abc import Callable
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
RESULTS_DIR = Path(__file__).parent / "results"

if str(_REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT / "src"))


def measure(fn: Callable[[], object], iterations: int, warmup: int = 0) -> list[float]:
    """Call ``fn`` repeatedly and return per-call latencies in milliseconds."""
    for _ in range(warmup):
        fn()
    latencies_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        fn()
        latencies_ms.append((time.perf_counter() - t0) * 1000)
    return latencies_ms


def summarize(operation: str, latencies_ms: list[float]) -> dict[str, object]:
    """Reduce a latency sample to throughput and percentile figures."""
    ordered = sorted(latencies_ms)
    n = len(ordered)
    total_seconds = sum(ordered) / 1000
    result: dict[str, object] = {
        "operation": operation,
        "iterations": n,
        "total_seconds": round(total_seconds, 4),
        "ops_per_second": round(n / total_seconds, 1) if total_seconds else 0.0,
        "avg_latency_ms": round(sum(ordered) / n, 4),
        "p50_ms": round(ordered[n // 2], 4),
        "p95_ms": round(ordered[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[{operation}] {result['ops_per_second']:,.0f} ops/sec  "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms"
    )
    return result


def save(result: dict[str, object]) -> Path:
    """Write ``result`` to ``results/<operation>.json`` and return the path."""
    RESULTS_DIR.mkdir(exist_ok=True)
    path = RESULTS_DIR / f"{result['operation']}.json"
    path.write_text(json.dumps(result, indent=2), encoding="utf-8")
    return path
