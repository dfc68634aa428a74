#!/usr/bin/env python3
"""Example: Quickstart

Minimal working example: parse a remapping script, walk its top-level
statements, and format it back to canonical style.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install keyscript
"""
from __future__ import annotations

import keyscript
from keyscript.ast import ExprStmt, IfStmt, KeyMappingInline

SCRIPT = '''
// Caps lock becomes escape everywhere.
capslock::esc;

let gaming = false;
f12::{ gaming = ??gaming; };

if (gaming) {
    !a::left;
    !d::right;
}
'''


def main() -> None:
    print(f"keyscript version: {keyscript.__version__}")

    # Step 1: Parse the script into an AST
    block = keyscript.parse(SCRIPT)
    print(f"Parsed {len(block.statements)} top-level statements")

    # Step 2: Inspect what was parsed
    for stmt in block:
        if isinstance(stmt, IfStmt):
            print(f"  if-statement with {len(stmt.body.statements)} nested statement(s)")
        elif isinstance(stmt, ExprStmt) and isinstance(stmt.expr, KeyMappingInline):
            kind = "block" if stmt.expr.is_block else "key"
            print(f"  key mapping to a {kind}")
        else:
            print(f"  {type(stmt).__name__}")

    # Step 3: Format to canonical style
    print("\nFormatted:")
    print(keyscript.format(block))


if __name__ == "__main__":
    main()
