"""keyscript canonical formatter: AST -> formatted source text.

The ``ScriptFormatter`` renders a ``Block`` as canonical source with:

- 4-space indentation, one statement per line
- single spaces around binary operators
- parentheses only where the tree would otherwise reparse differently
- keys written as lower-case registry names with modifier prefixes in
  ``+^!#`` order

Comments are not preserved (the formatter works from the AST).  For any
tree the parser can produce, ``parse(format_script(tree)) == tree``.

Usage
-----
::

    from keyscript.formatter import ScriptFormatter
    from keyscript.parser import parse

    block = parse(source)
    canonical = ScriptFormatter().format(block)
"""
from __future__ import annotations

import math
from decimal import Decimal

from keyscript.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Block,
    BlockStmt,
    BoolValue,
    Expr,
    ExprStmt,
    FunctionCall,
    IfStmt,
    KeyMappingInline,
    Lambda,
    NumberValue,
    Stmt,
    StringValue,
    UnaryOpExpr,
    Value,
    ValueType,
    Variable,
    VariableAssign,
    VariableInit,
)
from keyscript.keys.modifiers import KeyClickActionWithMods
from keyscript.keys.registry import KeyRegistry, default_registry

_INDENT = "    "

_BINOP_SYMBOLS: dict[BinOp, str] = {
    BinOp.ADD: "+",
    BinOp.SUB: "-",
    BinOp.MUL: "*",
    BinOp.DIV: "/",
    BinOp.EQ: "==",
    BinOp.NEQ: "!=",
    BinOp.GT: ">",
    BinOp.LT: "<",
    BinOp.AND: "&&",
    BinOp.OR: "||",
}

# Binding tiers, loosest first; atoms bind tightest.
_TIER_RELATIONAL = 0
_TIER_ADDITIVE = 1
_TIER_MULTIPLICATIVE = 2
_TIER_UNARY = 3
_TIER_ATOM = 4

_BINOP_TIERS: dict[BinOp, int] = {
    BinOp.ADD: _TIER_ADDITIVE,
    BinOp.SUB: _TIER_ADDITIVE,
    BinOp.MUL: _TIER_MULTIPLICATIVE,
    BinOp.DIV: _TIER_MULTIPLICATIVE,
    BinOp.EQ: _TIER_RELATIONAL,
    BinOp.NEQ: _TIER_RELATIONAL,
    BinOp.GT: _TIER_RELATIONAL,
    BinOp.LT: _TIER_RELATIONAL,
    BinOp.AND: _TIER_RELATIONAL,
    BinOp.OR: _TIER_RELATIONAL,
}

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def _tier(expr: Expr) -> int:
    if isinstance(expr, BinaryOpExpr):
        return _BINOP_TIERS[expr.op]
    if isinstance(expr, UnaryOpExpr):
        return _TIER_UNARY
    return _TIER_ATOM


def _is_open_ended(expr: Expr) -> bool:
    """Return True for atoms whose trailing expression would absorb operators."""
    return isinstance(expr, (VariableInit, VariableAssign))


class ScriptFormatter:
    """Produces canonical keyscript text from a ``Block``.

    Parameters
    ----------
    registry:
        Registry used to turn keys back into names.  Defaults to
        ``default_registry()``.
    """

    def __init__(self, registry: KeyRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    def format(self, block: Block) -> str:
        """Render a script body.

        Returns
        -------
        str
            One top-level statement per line, ending with a newline; an
            empty block renders as the empty string.
        """
        lines = [self.format_statement(stmt, 0) for stmt in block.statements]
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def format_statement(self, stmt: Stmt, level: int = 0) -> str:
        """Render one statement indented to ``level``."""
        indent = _INDENT * level
        if isinstance(stmt, ExprStmt):
            return f"{indent}{self.format_expression(stmt.expr, level)};"
        if isinstance(stmt, IfStmt):
            condition = self.format_expression(stmt.condition, level)
            return f"{indent}if ({condition}) {self._format_block(stmt.body, level)}"
        if isinstance(stmt, BlockStmt):
            return f"{indent}{self._format_block(stmt.block, level)}"
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def _format_block(self, block: Block, level: int) -> str:
        if block.is_empty:
            return "{}"
        inner = [self.format_statement(stmt, level + 1) for stmt in block.statements]
        return "{\n" + "\n".join(inner) + "\n" + _INDENT * level + "}"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def format_expression(self, expr: Expr, level: int = 0) -> str:
        """Render an expression; ``level`` sets the indentation of nested blocks."""
        if isinstance(expr, Value):
            return self._format_value(expr.value)
        if isinstance(expr, BinaryOpExpr):
            tier = _BINOP_TIERS[expr.op]
            # Left association: the left operand may share the tier, the
            # right operand must bind strictly tighter.
            left = self._format_operand(expr.left, level, min_tier=tier)
            right = self._format_operand(expr.right, level, min_tier=tier + 1)
            return f"{left} {_BINOP_SYMBOLS[expr.op]} {right}"
        if isinstance(expr, UnaryOpExpr):
            return "??" + self._format_operand(expr.operand, level, min_tier=_TIER_ATOM)
        if isinstance(expr, VariableInit):
            return f"let {expr.name} = {self.format_expression(expr.value, level)}"
        if isinstance(expr, VariableAssign):
            return f"{expr.name} = {self.format_expression(expr.value, level)}"
        if isinstance(expr, FunctionCall):
            args = ", ".join(self.format_expression(a, level) for a in expr.arguments)
            return f"{expr.name}({args})"
        if isinstance(expr, KeyMappingInline):
            if isinstance(expr.target, Block):
                target = self._format_block(expr.target, level)
            else:
                target = self.format_key_action(expr.target)
            return f"{self.format_key_action(expr.trigger)}::{target}"
        if isinstance(expr, Lambda):
            return f"|{', '.join(expr.params)}| {self._format_block(expr.body, level)}"
        if isinstance(expr, Variable):
            return expr.name
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _format_operand(self, expr: Expr, level: int, min_tier: int) -> str:
        text = self.format_expression(expr, level)
        if _tier(expr) < min_tier or _is_open_ended(expr):
            return f"({text})"
        return text

    def _format_value(self, value: ValueType) -> str:
        if isinstance(value, BoolValue):
            return "true" if value.value else "false"
        if isinstance(value, NumberValue):
            return _format_number(value.value)
        if isinstance(value, StringValue):
            escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in value.value)
            return f'"{escaped}"'
        raise TypeError(f"Unknown value type: {type(value).__name__}")

    def format_key_action(self, action: KeyClickActionWithMods) -> str:
        """Render a key action, e.g. ``^!delete``."""
        return action.prefix + self._registry.name_of(action.key).lower()


def _format_number(value: float) -> str:
    """Render a float in the ``digits[.digits]`` form the parser accepts."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite number {value!r}")
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def format_script(block: Block, registry: KeyRegistry | None = None) -> str:
    """Format a ``Block`` to canonical keyscript text."""
    return ScriptFormatter(registry=registry).format(block)
