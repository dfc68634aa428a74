"""Unit tests for keyscript.formatter: canonical output and round-trips."""
from __future__ import annotations

import pytest

from keyscript.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Block,
    BlockStmt,
    ExprStmt,
    NumberValue,
    StringValue,
    UnaryOpExpr,
    UnaryOpKind,
    Value,
    Variable,
    VariableAssign,
    VariableInit,
)
from keyscript.formatter import ScriptFormatter, format_script
from keyscript.parser import parse


def _fmt_expr(expr: object) -> str:
    return ScriptFormatter().format_expression(expr)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Canonical layout
# ---------------------------------------------------------------------------


class TestLayout:
    def test_empty_block(self) -> None:
        assert format_script(Block()) == ""

    def test_one_statement_per_line(self) -> None:
        assert format_script(parse("a::b;c::d;")) == "a::b;\nc::d;\n"

    def test_if_statement_indentation(self) -> None:
        text = format_script(parse("if(x){a::b;}"))
        assert text == "if (x) {\n    a::b;\n}\n"

    def test_nested_indentation(self) -> None:
        text = format_script(parse("{ if (x) { a; } }"))
        assert text == "{\n    if (x) {\n        a;\n    }\n}\n"

    def test_empty_blocks(self) -> None:
        assert format_script(parse("if (x) {} {}")) == "if (x) {}\n{}\n"

    def test_comments_are_dropped(self) -> None:
        assert format_script(parse("a; // note")) == "a;\n"

    def test_spaces_around_operators(self) -> None:
        assert format_script(parse("let x=1+2*3;")) == "let x = 1 + 2 * 3;\n"

    def test_function_call(self) -> None:
        assert format_script(parse('send( "x" ,y );')) == 'send("x", y);\n'

    def test_lambda(self) -> None:
        assert format_script(parse("let f = |a,b| { a; };")) == "let f = |a, b| {\n    a;\n};\n"

    def test_block_target(self) -> None:
        assert format_script(parse("a::{b::c;};")) == "a::{\n    b::c;\n};\n"


# ---------------------------------------------------------------------------
# Values and keys
# ---------------------------------------------------------------------------


class TestValues:
    @pytest.mark.parametrize(
        ("value", "text"),
        [(1.0, "1"), (0.5, "0.5"), (3.25, "3.25"), (100.0, "100"), (1e-7, "0.0000001")],
    )
    def test_numbers(self, value: float, text: str) -> None:
        assert _fmt_expr(Value(NumberValue(value))) == text

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_numbers_rejected(self, value: float) -> None:
        with pytest.raises(ValueError):
            _fmt_expr(Value(NumberValue(value)))

    def test_string_escapes(self) -> None:
        assert _fmt_expr(Value(StringValue('a"b\\c\n'))) == r'"a\"b\\c\n"'

    def test_booleans(self) -> None:
        assert format_script(parse("true; false;")) == "true;\nfalse;\n"

    def test_keys_are_lower_case_names(self) -> None:
        assert format_script(parse("CAPSLOCK::Esc;")) == "capslock::esc;\n"

    def test_alias_written_as_canonical_name(self) -> None:
        assert format_script(parse("ctrl::-;")) == "leftctrl::minus;\n"

    def test_modifiers_in_canonical_order(self) -> None:
        assert format_script(parse("#!^+a::b;")) == "+^!#a::b;\n"

    def test_capital_letter_becomes_shift(self) -> None:
        assert format_script(parse("A::b;")) == "+a::b;\n"


# ---------------------------------------------------------------------------
# Parentheses
# ---------------------------------------------------------------------------


class TestParentheses:
    def test_no_parens_when_precedence_suffices(self) -> None:
        expr = BinaryOpExpr(BinOp.ADD, Variable("a"), BinaryOpExpr(BinOp.MUL, Variable("b"), Variable("c")))
        assert _fmt_expr(expr) == "a + b * c"

    def test_parens_for_looser_child(self) -> None:
        expr = BinaryOpExpr(BinOp.MUL, BinaryOpExpr(BinOp.ADD, Variable("a"), Variable("b")), Variable("c"))
        assert _fmt_expr(expr) == "(a + b) * c"

    def test_left_chain_needs_no_parens(self) -> None:
        expr = BinaryOpExpr(BinOp.SUB, BinaryOpExpr(BinOp.SUB, Variable("a"), Variable("b")), Variable("c"))
        assert _fmt_expr(expr) == "a - b - c"

    def test_right_nested_same_tier_parenthesised(self) -> None:
        expr = BinaryOpExpr(BinOp.SUB, Variable("a"), BinaryOpExpr(BinOp.SUB, Variable("b"), Variable("c")))
        assert _fmt_expr(expr) == "a - (b - c)"

    def test_negation_of_compound(self) -> None:
        expr = UnaryOpExpr(UnaryOpKind.NEG, BinaryOpExpr(BinOp.AND, Variable("a"), Variable("b")))
        assert _fmt_expr(expr) == "??(a && b)"

    def test_assignment_operand_parenthesised(self) -> None:
        expr = BinaryOpExpr(BinOp.ADD, VariableAssign("x", Value(NumberValue(1.0))), Variable("y"))
        assert _fmt_expr(expr) == "(x = 1) + y"

    def test_init_operand_parenthesised(self) -> None:
        expr = UnaryOpExpr(UnaryOpKind.NEG, VariableInit("x", Variable("y")))
        assert _fmt_expr(expr) == "??(let x = y)"


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

ROUND_TRIP_SOURCES = [
    "a::b;",
    "let x = 1 + 2 * 3;",
    "let y = (1 + 2) * 3;",
    "z = a - (b - c);",
    "??(a == b) || c;",
    "if (gaming && active_window() == \"game\") { !a::left; ^+b::#c; }",
    "f1::{ let n = 0.25; n = n * 2; };",
    "let handler = |ev, data| { send(ev, data); };",
    "{ {} { a; } }",
    "1 + (x = 2);",
    'msg = "tab\\there \\"quoted\\"";',
    "+1::2; a::-; btn_left::btn_right;",
]


class TestRoundTrip:
    @pytest.mark.parametrize("source", ROUND_TRIP_SOURCES)
    def test_parse_format_parse_is_identity(self, source: str) -> None:
        tree = parse(source)
        assert parse(format_script(tree)) == tree

    @pytest.mark.parametrize("source", ROUND_TRIP_SOURCES)
    def test_format_is_idempotent(self, source: str) -> None:
        once = format_script(parse(source))
        assert format_script(parse(once)) == once

    def test_hand_built_tree(self) -> None:
        tree = Block(
            (
                ExprStmt(VariableInit("x", BinaryOpExpr(BinOp.DIV, Value(NumberValue(7.5)), Variable("y")))),
                BlockStmt(Block()),
            )
        )
        assert parse(format_script(tree)) == tree
