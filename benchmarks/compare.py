"""Render saved keyscript benchmark results as a table."""
from __future__ import annotations

import json

from harness import RESULTS_DIR
from rich.console import Console
from rich.table import Table


def main() -> None:
    table = Table(title="keyscript benchmark results")
    table.add_column("Operation")
    table.add_column("Ops/sec", justify="right")
    table.add_column("p50", justify="right")
    table.add_column("p95", justify="right")

    paths = sorted(RESULTS_DIR.glob("*.json")) if RESULTS_DIR.exists() else []
    for path in paths:
        data = json.loads(path.read_text(encoding="utf-8"))
        table.add_row(
            str(data["operation"]),
            f"{float(data['ops_per_second']):,.0f}",
            f"{float(data['p50_ms']):.3f}ms",
            f"{float(data['p95_ms']):.3f}ms",
        )

    console = Console()
    if not paths:
        console.print("[yellow]No results yet.[/yellow] Run: python benchmarks/bench_parse.py")
        return
    console.print(table)


if __name__ == "__main__":
    main()
