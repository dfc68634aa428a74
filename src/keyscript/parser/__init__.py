"""keyscript parser module.

Exports the ``Parser`` class, the ``parse`` convenience functions, the
failure types and merge policies, and the diagnostic renderer.
"""
from __future__ import annotations

from keyscript.parser.diagnostics import render_failure
from keyscript.parser.errors import (
    MERGE_POLICIES,
    FailureKind,
    FurthestFailureWins,
    LastAlternativeWins,
    MergePolicy,
    ParseFailure,
    ScriptSyntaxError,
)
from keyscript.parser.parser import Parser, parse, parse_expression

__all__ = [
    "Parser",
    "parse",
    "parse_expression",
    "ParseFailure",
    "FailureKind",
    "ScriptSyntaxError",
    "MergePolicy",
    "LastAlternativeWins",
    "FurthestFailureWins",
    "MERGE_POLICIES",
    "render_failure",
]
