"""Smoke tests for the benchmark scripts under benchmarks/."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))

import bench_parse  # noqa: E402
import harness  # noqa: E402

_EXPECTED_KEYS = {"operation", "iterations", "ops_per_second", "avg_latency_ms", "p50_ms", "p95_ms"}


@pytest.mark.parametrize(
    "bench_fn",
    [
        bench_parse.bench_parse_throughput,
        bench_parse.bench_format_throughput,
        bench_parse.bench_error_latency,
    ],
)
def test_bench_returns_summary(bench_fn) -> None:
    result = bench_fn(iterations=5)
    assert _EXPECTED_KEYS <= set(result)
    assert result["iterations"] == 5
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]


def test_summarize_percentiles() -> None:
    result = harness.summarize("sample", [1.0, 2.0, 3.0, 4.0])
    assert result["p50_ms"] == 3.0
    assert result["p95_ms"] == 4.0
    assert result["avg_latency_ms"] == 2.5


def test_save_writes_json(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(harness, "RESULTS_DIR", tmp_path / "results")
    path = harness.save({"operation": "sample", "ops_per_second": 1.0})
    assert path.name == "sample.json"
    assert path.exists()
