"""Statement and block grammar for keyscript.

::

    stmt        ::= if_stmt | expr ';' | block
    if_stmt     ::= 'if' '(' expr ')' block
    block       ::= '{' block_body '}'
    block_body  ::= [stmt {stmt}]
    global      ::= block_body

Whitespace (including ``//`` comments) is allowed between every token.
"""
from __future__ import annotations

from keyscript.ast.nodes import Block, BlockStmt, ExprStmt, IfStmt, Stmt
from keyscript.parser.errors import ParseFailure
from keyscript.parser.expression import ExpressionRules

STATEMENT_TERMINATOR = ";"


class StatementRules(ExpressionRules):
    """Statement-level grammar rules layered on top of expressions."""

    def statement(self, pos: int) -> tuple[Stmt, int]:
        """Parse one statement; alternatives are tried in a fixed order."""
        return self._alt(pos, self._if_stmt, self._expr_stmt, self._block_stmt)

    def _if_stmt(self, pos: int) -> tuple[Stmt, int]:
        pos = self._tag(pos, "if")
        pos = self._ws0(pos)
        pos = self._tag(pos, "(")
        pos = self._ws0(pos)
        condition, pos = self.expression(pos)
        pos = self._ws0(pos)
        pos = self._tag(pos, ")")
        pos = self._ws0(pos)
        body, pos = self.block(pos)
        return IfStmt(condition=condition, body=body), pos

    def _expr_stmt(self, pos: int) -> tuple[Stmt, int]:
        expr, pos = self.expression(pos)
        pos = self._tag(pos, STATEMENT_TERMINATOR)
        return ExprStmt(expr=expr), pos

    def _block_stmt(self, pos: int) -> tuple[Stmt, int]:
        block, pos = self.block(pos)
        return BlockStmt(block=block), pos

    def block_body(self, pos: int) -> tuple[Block, int]:
        """Parse zero or more statements, keeping their source order."""
        try:
            first, pos = self.statement(pos)
        except ParseFailure:
            return Block(), pos

        def next_statement(p: int) -> tuple[Stmt, int]:
            return self.statement(self._ws0(p))

        rest, pos = self._many0(pos, next_statement)
        return Block(statements=(first, *rest)), pos

    def block(self, pos: int) -> tuple[Block, int]:
        """Parse ``{ ... }``."""
        pos = self._tag(pos, "{")
        pos = self._ws0(pos)
        body, pos = self.block_body(pos)
        pos = self._ws0(pos)
        pos = self._tag(pos, "}")
        return body, pos

    def global_block(self, pos: int) -> tuple[Block, int]:
        """Parse a whole script body; no enclosing braces."""
        pos = self._ws0(pos)
        body, pos = self.block_body(pos)
        pos = self._ws0(pos)
        return body, pos
