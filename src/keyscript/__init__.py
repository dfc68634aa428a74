"""keyscript: front end for a key-remapping scripting language.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import keyscript

    # Parse a script into an AST
    block = keyscript.parse('''
        let gaming = false;
        capslock::esc;
        if (gaming) {
            !a::left;
        }
    ''')

    # Format to canonical style
    canonical = keyscript.format(block)

    # Turn a failure into a caret diagnostic
    try:
        keyscript.parse("a::b")
    except keyscript.ScriptSyntaxError as exc:
        print(exc)

    keyscript.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from keyscript.parser.errors import ScriptSyntaxError

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from keyscript.ast.nodes import Block, Expr
    from keyscript.keys.registry import KeyRegistry
    from keyscript.parser.errors import MergePolicy, ParseFailure


def parse(
    source: str,
    registry: "KeyRegistry | None" = None,
    merge_policy: "MergePolicy | None" = None,
) -> "Block":
    """Parse a complete script into its root ``Block``.

    Parameters
    ----------
    source:
        Complete script text.
    registry:
        Key registry used to resolve key names; defaults to the
        process-wide registry.
    merge_policy:
        How failures of sibling grammar alternatives are merged.

    Raises
    ------
    ScriptSyntaxError
        If the script is not syntactically valid.
    """
    from keyscript.parser.parser import parse as _parse

    return _parse(source, registry=registry, merge_policy=merge_policy)


def parse_expression(source: str, registry: "KeyRegistry | None" = None) -> "Expr":
    """Parse ``source`` as a single expression."""
    from keyscript.parser.parser import parse_expression as _parse_expression

    return _parse_expression(source, registry=registry)


def format(block: "Block") -> str:  # noqa: A001
    """Format a ``Block`` to canonical keyscript text."""
    from keyscript.formatter.formatter import format_script

    return format_script(block)


def render(source: str, failure: "ParseFailure") -> str:
    """Render a parse failure as a caret diagnostic for ``source``."""
    from keyscript.parser.diagnostics import render_failure

    return render_failure(source, failure)


__all__ = [
    "__version__",
    "parse",
    "parse_expression",
    "format",
    "render",
    "ScriptSyntaxError",
]
