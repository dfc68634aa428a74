"""Expression grammar for keyscript.

Precedence climbing over five levels, tightest first::

    atom        ::= '(' expr ')' | BOOL | STRING | NUMBER | lambda
                  | 'let' IDENT '=' expr | IDENT '=' expr
                  | IDENT '(' [expr {',' expr}] ')'
                  | key_action '::' (block | key_action)
                  | IDENT
    unary       ::= '??' atom | atom
    product     ::= unary {('*' | '/') unary}
    sum         ::= product {('+' | '-') product}
    expr        ::= sum {('==' | '!=' | '&&' | '||' | '<' | '>') sum}

Atom alternatives are tried in the order written and the first match
wins, so a key mapping such as ``a::b`` is recognised before ``a`` is
taken as a variable.  All binary levels are left-associative.
"""
from __future__ import annotations

import math
import re
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Final

from keyscript.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    BoolValue,
    Expr,
    FunctionCall,
    KeyMappingInline,
    Lambda,
    NumberValue,
    StringValue,
    UnaryOpExpr,
    UnaryOpKind,
    Value,
    Variable,
    VariableAssign,
    VariableInit,
)
from keyscript.keys.modifiers import (
    MODIFIER_PREFIXES,
    CapitalKey,
    KeyClickActionWithMods,
    KeyModifierFlags,
    ParsedSingleKey,
    SingleKey,
)
from keyscript.keys.registry import Key, KeyRegistry, UnknownKeyError
from keyscript.parser.combinators import Combinators
from keyscript.parser.errors import FailureKind

if TYPE_CHECKING:
    from keyscript.ast.nodes import Block

_NUMBER: Final[re.Pattern[str]] = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_KEY_WORD: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_]+")

_STRING_ESCAPES: Final[dict[str, str]] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

_RESERVED: Final[frozenset[str]] = frozenset({"let"})

_MULTIPLICATIVE_OPS: Final[dict[str, BinOp]] = {"*": BinOp.MUL, "/": BinOp.DIV}
_ADDITIVE_OPS: Final[dict[str, BinOp]] = {"+": BinOp.ADD, "-": BinOp.SUB}
# Two-character operators first so '<' never shadows a longer token.
_RELATIONAL_OPS: Final[dict[str, BinOp]] = {
    "==": BinOp.EQ,
    "!=": BinOp.NEQ,
    "&&": BinOp.AND,
    "||": BinOp.OR,
    "<": BinOp.LT,
    ">": BinOp.GT,
}


class ExpressionRules(Combinators):
    """Expression-level grammar rules.

    Relies on ``block`` being provided by the statement rules and on
    ``self._registry`` being set by the concrete parser.
    """

    _registry: KeyRegistry
    block: Callable[[int], tuple["Block", int]]

    # ------------------------------------------------------------------
    # Precedence chain
    # ------------------------------------------------------------------

    def expression(self, pos: int) -> tuple[Expr, int]:
        """Parse a full expression (the loosest-binding level)."""
        return self._fold_binary(pos, self._expr_sum, _RELATIONAL_OPS)

    def _expr_sum(self, pos: int) -> tuple[Expr, int]:
        return self._fold_binary(pos, self._expr_product, _ADDITIVE_OPS)

    def _expr_product(self, pos: int) -> tuple[Expr, int]:
        return self._fold_binary(pos, self._expr_unary, _MULTIPLICATIVE_OPS)

    def _expr_unary(self, pos: int) -> tuple[Expr, int]:
        return self._alt(pos, self._negation, self._expr_atom)

    def _negation(self, pos: int) -> tuple[Expr, int]:
        pos = self._tag(pos, "??")
        operand, pos = self._expr_atom(pos)
        return UnaryOpExpr(op=UnaryOpKind.NEG, operand=operand), pos

    def _expr_atom(self, pos: int) -> tuple[Expr, int]:
        expr, pos = self._alt(
            pos,
            self._parenthesized,
            self._boolean,
            self._string,
            self._number,
            self._lambda,
            self._variable_init,
            self._variable_assign,
            self._function_call,
            self._key_mapping_inline,
            self._variable,
        )
        return expr, self._ws0(pos)

    def _fold_binary(
        self,
        pos: int,
        operand: Callable[[int], tuple[Expr, int]],
        operators: dict[str, BinOp],
    ) -> tuple[Expr, int]:
        """Seed with one ``operand`` and fold ``(ws op ws operand)*`` onto it."""
        init, pos = operand(pos)
        symbols = [partial(self._token, literal=symbol) for symbol in operators]

        def step(p: int) -> tuple[tuple[BinOp, Expr], int]:
            p = self._ws0(p)
            symbol, p = self._alt(p, *symbols)
            p = self._ws0(p)
            right, p = operand(p)
            return (operators[symbol], right), p

        return self._fold_many0(
            pos,
            step,
            init,
            lambda left, item: BinaryOpExpr(op=item[0], left=left, right=item[1]),
        )

    # ------------------------------------------------------------------
    # Atoms
    # ------------------------------------------------------------------

    def _parenthesized(self, pos: int) -> tuple[Expr, int]:
        pos = self._tag(pos, "(")
        pos = self._ws0(pos)
        expr, pos = self.expression(pos)
        pos = self._tag(pos, ")")
        return expr, pos

    def _boolean(self, pos: int) -> tuple[Expr, int]:
        for word, value in (("true", True), ("false", False)):
            if self._source.startswith(word, pos) and not self._is_word_char(pos + len(word)):
                return Value(BoolValue(value)), pos + len(word)
        raise self._fail(pos, "boolean")

    def _string(self, pos: int) -> tuple[Expr, int]:
        if not self._source.startswith('"', pos):
            raise self._fail(pos, "string")
        start = pos
        pos += 1
        chars: list[str] = []
        source = self._source
        while True:
            if self._at_end(pos):
                raise self._fail(start, "string", kind=FailureKind.MALFORMED_LITERAL)
            ch = source[pos]
            if ch == '"':
                return Value(StringValue("".join(chars))), pos + 1
            if ch == "\\":
                escaped = source[pos + 1:pos + 2]
                if escaped not in _STRING_ESCAPES:
                    raise self._fail(pos, "escape sequence", kind=FailureKind.MALFORMED_LITERAL)
                chars.append(_STRING_ESCAPES[escaped])
                pos += 2
                continue
            chars.append(ch)
            pos += 1

    def _number(self, pos: int) -> tuple[Expr, int]:
        match = _NUMBER.match(self._source, pos)
        if match is None:
            raise self._fail(pos, "number")
        value = float(match.group())
        if not math.isfinite(value):
            raise self._fail(pos, "number", kind=FailureKind.MALFORMED_LITERAL)
        return Value(NumberValue(value)), match.end()

    def _lambda(self, pos: int) -> tuple[Expr, int]:
        pos = self._tag(pos, "|")
        pos = self._ws0(pos)
        params, pos = self._separated_list0(pos, self._identifier, ",")
        pos = self._ws0(pos)
        pos = self._tag(pos, "|")
        pos = self._ws0(pos)
        body, pos = self.block(pos)
        return Lambda(params=tuple(params), body=body), pos

    def _variable_init(self, pos: int) -> tuple[Expr, int]:
        pos = self._keyword(pos, "let")
        pos = self._ws0(pos)
        name, pos = self._variable_name(pos)
        pos = self._ws0(pos)
        pos = self._tag(pos, "=")
        pos = self._ws0(pos)
        value, pos = self.expression(pos)
        return VariableInit(name=name, value=value), pos

    def _variable_assign(self, pos: int) -> tuple[Expr, int]:
        name, pos = self._variable_name(pos)
        pos = self._ws0(pos)
        pos = self._tag(pos, "=")
        pos = self._ws0(pos)
        value, pos = self.expression(pos)
        return VariableAssign(name=name, value=value), pos

    def _function_call(self, pos: int) -> tuple[Expr, int]:
        name, pos = self._identifier(pos)
        pos = self._tag(pos, "(")
        pos = self._ws0(pos)
        arguments, pos = self._separated_list0(pos, self.expression, ",")
        pos = self._ws0(pos)
        pos = self._tag(pos, ")")
        return FunctionCall(name=name, arguments=tuple(arguments)), pos

    def _key_mapping_inline(self, pos: int) -> tuple[Expr, int]:
        trigger, pos = self.key_action(pos)
        pos = self._ws0(pos)
        pos = self._tag(pos, "::")
        pos = self._ws0(pos)
        target, pos = self._alt(pos, self.block, self.key_action)
        return KeyMappingInline(trigger=trigger, target=target), pos

    def _variable(self, pos: int) -> tuple[Expr, int]:
        name, pos = self._variable_name(pos)
        return Variable(name=name), pos

    def _variable_name(self, pos: int) -> tuple[str, int]:
        name, end = self._identifier(pos)
        if name in _RESERVED:
            raise self._fail(pos, "identifier")
        return name, end

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def key_action(self, pos: int) -> tuple[KeyClickActionWithMods, int]:
        """Parse modifier prefixes followed by a single key, e.g. ``^!a``."""
        modifiers = KeyModifierFlags.NONE
        source = self._source
        while not self._at_end(pos) and source[pos] in MODIFIER_PREFIXES:
            flag = MODIFIER_PREFIXES[source[pos]]
            if flag in modifiers:
                raise self._fail(pos, "key")
            modifiers |= flag
            pos += 1
        parsed, pos = self.single_key(pos)
        return KeyClickActionWithMods.from_parsed(parsed, modifiers), pos

    def single_key(self, pos: int) -> tuple[ParsedSingleKey, int]:
        """Parse one key name and resolve it through the registry.

        A single capital letter yields a ``CapitalKey``; any other word is
        looked up upper-cased (``enter`` -> ``ENTER``), while single
        lowercase letters, digits and punctuation are looked up as written.
        """
        match = _KEY_WORD.match(self._source, pos)
        if match is not None:
            word = match.group()
            end = match.end()
            if len(word) == 1 and "A" <= word <= "Z":
                return CapitalKey(self._resolve_key(pos, word.lower())), end
            name = word if len(word) == 1 else word.upper()
            return SingleKey(self._resolve_key(pos, name)), end

        ch = self._source[pos:pos + 1]
        if ch and not ch.isspace() and ch in self._registry.aliases:
            return SingleKey(self._resolve_key(pos, ch)), pos + 1
        raise self._fail(pos, "key")

    def _resolve_key(self, pos: int, name: str) -> Key:
        try:
            return self._registry.lookup(name)
        except UnknownKeyError:
            raise self._fail(pos, "key", kind=FailureKind.UNKNOWN_KEY) from None

