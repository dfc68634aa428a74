#!/usr/bin/env python3
"""Example: AST Export

Demonstrates exporting a parsed script to JSON and YAML and loading it
back into an identical tree.

Usage:
    python examples/04_ast_export.py

Requirements:
    pip install keyscript
"""
from __future__ import annotations

import keyscript
from keyscript.ast import AstSerializer

SCRIPT = '''
^c::{ copy(); };
^v::{ paste(); };
'''


def main() -> None:
    block = keyscript.parse(SCRIPT)
    serializer = AstSerializer()

    # Step 1: JSON
    json_text = serializer.to_json(block)
    print("JSON (excerpt):")
    print(json_text[:400])

    # Step 2: YAML
    yaml_text = serializer.to_yaml(block)
    print("\nYAML (excerpt):")
    print(yaml_text[:400])

    # Step 3: Round trip
    print(f"\nJSON round trip equal: {serializer.from_json(json_text) == block}")
    print(f"YAML round trip equal: {serializer.from_yaml(yaml_text) == block}")


if __name__ == "__main__":
    main()
