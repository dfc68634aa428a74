#!/usr/bin/env python3
"""Example: Syntax Errors and Merge Policies

Demonstrates the caret diagnostics produced for invalid scripts and how
the merge policy changes which failure is reported.

Usage:
    python examples/02_diagnostics.py

Requirements:
    pip install keyscript
"""
from __future__ import annotations

from keyscript.parser import (
    FurthestFailureWins,
    Parser,
    ScriptSyntaxError,
    parse,
    render_failure,
)

BROKEN = '''capslock::esc;
a::b c::d;
'''


def main() -> None:
    # Step 1: Default policy reports the last alternative tried
    try:
        parse(BROKEN)
    except ScriptSyntaxError as error:
        print("Default policy:")
        print(error)

    # Step 2: Furthest-failure policy points at the missing ';'
    try:
        parse(BROKEN, merge_policy=FurthestFailureWins())
    except ScriptSyntaxError as error:
        print("Furthest policy:")
        print(error)
        print("Every alternative:")
        print(render_failure(BROKEN, error.failure, verbose=True))

    # Step 3: Lenient parsing keeps what parsed and returns the rest
    block, remaining = Parser(BROKEN).parse_global()
    print(f"Lenient parse kept {len(block.statements)} statement(s); remaining: {remaining!r}")


if __name__ == "__main__":
    main()
