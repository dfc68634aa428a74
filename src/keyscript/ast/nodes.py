"""AST node definitions for keyscript.

Every node produced by the parser is a frozen dataclass, so trees are
immutable and hashable.  Children are held in tuples and owned by exactly
one parent; a parse produces a single root ``Block``.

The ``Expr`` and ``Stmt`` unions cover all variants; downstream code
should dispatch with ``isinstance`` checks.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from keyscript.keys.modifiers import KeyClickActionWithMods

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinOp(Enum):
    """Binary operator kinds used in expressions."""

    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    EQ = auto()
    NEQ = auto()
    GT = auto()
    LT = auto()
    AND = auto()
    OR = auto()


class UnaryOpKind(Enum):
    """Unary operator kinds."""

    NEG = auto()


# ---------------------------------------------------------------------------
# Literal values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BoolValue:
    """A boolean literal (``true`` or ``false``)."""

    value: bool


@dataclass(frozen=True, slots=True)
class NumberValue:
    """A numeric literal; always stored as a float."""

    value: float


@dataclass(frozen=True, slots=True)
class StringValue:
    """A double-quoted string literal, escapes already decoded."""

    value: str


ValueType = Union[BoolValue, NumberValue, StringValue]

# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

# Forward reference: most expression nodes are recursive.
Expr = Union[
    "Value",
    "BinaryOpExpr",
    "UnaryOpExpr",
    "VariableInit",
    "VariableAssign",
    "FunctionCall",
    "KeyMappingInline",
    "Lambda",
    "Variable",
]


@dataclass(frozen=True, slots=True)
class Value:
    """A literal value expression."""

    value: ValueType


@dataclass(frozen=True, slots=True)
class BinaryOpExpr:
    """An arithmetic, comparison or logical expression, e.g. ``a + b``."""

    op: BinOp
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True, slots=True)
class UnaryOpExpr:
    """A prefix operator applied to one operand, e.g. ``??done``."""

    op: UnaryOpKind
    operand: "Expr"


@dataclass(frozen=True, slots=True)
class VariableInit:
    """A variable declaration: ``let name = value``."""

    name: str
    value: "Expr"


@dataclass(frozen=True, slots=True)
class VariableAssign:
    """An assignment to an existing variable: ``name = value``."""

    name: str
    value: "Expr"


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """A call such as ``send("hello", 2)``; arguments keep source order."""

    name: str
    arguments: tuple["Expr", ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class KeyMappingInline:
    """A key mapping literal: ``trigger::target``.

    The target is either another key action (``a::b``) or a block run
    when the trigger fires (``a::{ ... }``).
    """

    trigger: KeyClickActionWithMods
    target: Union[KeyClickActionWithMods, "Block"]

    @property
    def is_block(self) -> bool:
        """Return True when the target is a block."""
        return isinstance(self.target, Block)


@dataclass(frozen=True, slots=True)
class Lambda:
    """An anonymous function: ``|a, b| { ... }``."""

    params: tuple[str, ...]
    body: "Block"


@dataclass(frozen=True, slots=True)
class Variable:
    """A bare variable reference."""

    name: str


# ---------------------------------------------------------------------------
# Statements and blocks
# ---------------------------------------------------------------------------

Stmt = Union["ExprStmt", "IfStmt", "BlockStmt"]


@dataclass(frozen=True, slots=True)
class ExprStmt:
    """An expression followed by ``;``."""

    expr: "Expr"


@dataclass(frozen=True, slots=True)
class IfStmt:
    """``if (condition) { body }``."""

    condition: "Expr"
    body: "Block"


@dataclass(frozen=True, slots=True)
class BlockStmt:
    """A bare nested block used as a statement."""

    block: "Block"


@dataclass(frozen=True, slots=True)
class Block:
    """An ordered sequence of statements.

    Order is execution order and always matches the source.
    """

    statements: tuple["Stmt", ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.statements)

    @property
    def is_empty(self) -> bool:
        """Return True if the block has no statements."""
        return not self.statements
