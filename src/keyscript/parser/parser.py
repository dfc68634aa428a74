"""keyscript top-level parser.

Parses a complete script into a root ``Block``.  The grammar itself is
split across ``keyscript.parser.expression`` (precedence chain) and
``keyscript.parser.statement`` (statements and blocks); ``Parser`` binds
them to one input string, one key registry and one merge policy.

A ``Parser`` instance is single-use and holds no state beyond its
constructor arguments, so independent parses can run concurrently.

Usage
-----
::

    from keyscript.parser import parse

    block = parse('''
        let enabled = true;
        if (enabled) {
            capslock::esc;
        }
    ''')
"""
from __future__ import annotations

import logging
import sys
from typing import NoReturn

from keyscript.ast.nodes import Block, Expr
from keyscript.keys.registry import KeyRegistry, default_registry
from keyscript.parser.diagnostics import render_failure
from keyscript.parser.errors import MergePolicy, ParseFailure, ScriptSyntaxError
from keyscript.parser.statement import StatementRules

logger = logging.getLogger(__name__)


class Parser(StatementRules):
    """Recursive-descent parser over one script.

    Parameters
    ----------
    source:
        The complete script text.
    registry:
        Key registry used to resolve key names.  Defaults to the
        process-wide ``default_registry()``.
    merge_policy:
        How failures of sibling alternatives are merged.  Defaults to
        ``LastAlternativeWins``.
    """

    def __init__(
        self,
        source: str,
        registry: KeyRegistry | None = None,
        merge_policy: MergePolicy | None = None,
    ) -> None:
        super().__init__(source, merge_policy)
        self._registry = registry if registry is not None else default_registry()

    @property
    def source(self) -> str:
        return self._source

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse_global(self) -> tuple[Block, str]:
        """Parse the script body and return it with any unparsed text.

        A script whose first statement is malformed yields an empty block
        and the whole input as remaining text.

        Raises
        ------
        ScriptSyntaxError
            Only if the input nests deeper than the interpreter's
            recursion limit allows.
        """
        try:
            block, pos = self.global_block(0)
        except RecursionError:
            self._raise_too_deep()
        return block, self._source[pos:]

    def parse(self) -> Block:
        """Parse the whole script, requiring every character to be consumed.

        Raises
        ------
        ScriptSyntaxError
            If any input remains after the last statement.  The reported
            failure is the one the next statement produced.  Also raised
            when the input nests too deeply to parse.
        """
        logger.debug("Parsing script of %d characters", len(self._source))
        try:
            block, pos = self.global_block(0)
            if not self._at_end(pos):
                try:
                    self.statement(pos)
                except ParseFailure as exc:
                    self._raise(exc)
                self._raise(self._fail(pos, "end of input"))
        except RecursionError:
            self._raise_too_deep()
        logger.debug("Parsed %d top-level statement(s)", len(block.statements))
        return block

    def parse_expression(self) -> Expr:
        """Parse the input as a single expression.

        Raises
        ------
        ScriptSyntaxError
            If the input is not exactly one expression, or nests too
            deeply to parse.
        """
        try:
            expr, pos = self.expression(self._ws0(0))
        except ParseFailure as exc:
            self._raise(exc)
        except RecursionError:
            self._raise_too_deep()
        if not self._at_end(pos):
            self._raise(self._fail(pos, "end of input"))
        return expr

    def _raise_too_deep(self) -> NoReturn:
        logger.warning("Nesting exceeds the recursion limit (%d)", sys.getrecursionlimit())
        self._raise(self._fail(0, "shallower nesting"))

    def _raise(self, failure: ParseFailure) -> NoReturn:
        diagnostic = render_failure(self._source, failure)
        logger.debug(
            "Parse failed at offset %d (%s): expected %s",
            failure.offset,
            failure.kind.name,
            ", ".join(failure.expected),
        )
        raise ScriptSyntaxError(failure, diagnostic) from None


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def parse(
    source: str,
    registry: KeyRegistry | None = None,
    merge_policy: MergePolicy | None = None,
) -> Block:
    """Parse a complete script and return its root ``Block``.

    Parameters
    ----------
    source:
        Complete script text.
    registry:
        Optional key registry; defaults to ``default_registry()``.
    merge_policy:
        Optional failure merge policy.

    Raises
    ------
    ScriptSyntaxError
        If the script is not syntactically valid.

    Example
    -------
    ::

        from keyscript.parser import parse
        block = parse("a::b; !c::^d;")
        len(block.statements)
        2
    """
    return Parser(source, registry=registry, merge_policy=merge_policy).parse()


def parse_expression(
    source: str,
    registry: KeyRegistry | None = None,
    merge_policy: MergePolicy | None = None,
) -> Expr:
    """Parse ``source`` as one expression."""
    return Parser(source, registry=registry, merge_policy=merge_policy).parse_expression()
