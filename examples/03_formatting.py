#!/usr/bin/env python3
"""Example: Canonical Formatting

Demonstrates formatting a messy script to canonical style and checking
that formatting is idempotent and preserves the parsed tree.

Usage:
    python examples/03_formatting.py

Requirements:
    pip install keyscript
"""
from __future__ import annotations

import keyscript

UNFORMATTED = '''
let   speed=1.5 ;
if(speed>1&&??paused){#!^+q::{quit();};}
let total=(1+2)*speed ;
'''


def main() -> None:
    block = keyscript.parse(UNFORMATTED)
    canonical = keyscript.format(block)
    print("Formatted (canonical):")
    print(canonical)

    # Formatting twice gives the same text, and the tree is unchanged
    twice = keyscript.format(keyscript.parse(canonical))
    print(f"Format is idempotent: {canonical == twice}")
    print(f"Tree preserved: {keyscript.parse(canonical) == block}")


if __name__ == "__main__":
    main()
