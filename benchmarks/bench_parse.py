"""Benchmark: keyscript parse, format and error-reporting speed.

Usage::

    python benchmarks/bench_parse.py
"""
from __future__ import annotations

from harness import measure, save, summarize

import keyscript

_ITERATIONS: int = 500
_WARMUP: int = 50

_SAMPLE_SCRIPT = """
// Home-row modifiers and a gaming layer.
let gaming = false;
let speed = 1.5;

capslock::esc;
^!t::{ spawn("terminal"); };
f12::{ gaming = ??gaming; };

if (gaming) {
    !a::left;
    !d::right;
    !w::up;
    !s::down;
}

if (active_window() == "editor" && ??gaming) {
    ^s::{ save(); };
    let repeat = speed * 2 + 1;
}
"""

# Every alternative at the failing statement is tried before the
# diagnostic is rendered.
_FAILING_SCRIPT = """
capslock::esc;
a::b c::d;
"""


def bench_parse_throughput(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Time ``keyscript.parse`` on a representative script."""
    latencies = measure(lambda: keyscript.parse(_SAMPLE_SCRIPT), iterations, _WARMUP)
    return summarize("keyscript_parse", latencies)


def bench_format_throughput(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Time ``keyscript.format`` on an already-parsed script."""
    block = keyscript.parse(_SAMPLE_SCRIPT)
    latencies = measure(lambda: keyscript.format(block), iterations, _WARMUP)
    return summarize("keyscript_format", latencies)


def bench_error_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Time rejecting a script, including rendering its diagnostic."""

    def reject() -> None:
        try:
            keyscript.parse(_FAILING_SCRIPT)
        except keyscript.ScriptSyntaxError as exc:
            str(exc)

    return summarize("keyscript_parse_error", measure(reject, iterations, _WARMUP))


if __name__ == "__main__":
    for bench_fn in (bench_parse_throughput, bench_format_throughput, bench_error_latency):
        print(f"Results saved to {save(bench_fn())}")
