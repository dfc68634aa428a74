"""Unit tests for the keyscript statement and block grammar."""
from __future__ import annotations

import pytest

from keyscript.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Block,
    BlockStmt,
    BoolValue,
    ExprStmt,
    IfStmt,
    KeyMappingInline,
    Value,
    Variable,
    VariableInit,
)
from keyscript.parser import ParseFailure, Parser, ScriptSyntaxError, parse


class TestExpressionStatements:
    def test_single_statement(self) -> None:
        block = parse("let x = true;")
        assert block == Block((ExprStmt(VariableInit("x", Value(BoolValue(True)))),))

    def test_statements_keep_source_order(self) -> None:
        block = parse("a; b; c;")
        assert [stmt.expr.name for stmt in block] == ["a", "b", "c"]

    def test_statements_on_separate_lines(self) -> None:
        block = parse("a::b;\nc::d;\n")
        assert len(block.statements) == 2
        assert all(isinstance(stmt.expr, KeyMappingInline) for stmt in block)

    def test_terminator_may_follow_whitespace(self) -> None:
        assert parse("a ;") == Block((ExprStmt(Variable("a")),))

    def test_missing_terminator_is_error(self) -> None:
        with pytest.raises(ScriptSyntaxError):
            parse("a")

    def test_comments_are_whitespace(self) -> None:
        block = parse("// leading\na::b; // trailing\n// end")
        assert len(block.statements) == 1

    def test_comment_between_tokens(self) -> None:
        assert parse("let x // note\n = 1;") == parse("let x = 1;")


class TestBlocks:
    def test_empty_script(self) -> None:
        assert parse("") == Block()

    def test_whitespace_only_script(self) -> None:
        assert parse("  \n\t ") == Block()

    def test_empty_block_statement(self) -> None:
        assert parse("{}") == Block((BlockStmt(Block()),))

    def test_empty_block_with_whitespace(self) -> None:
        assert parse("{ \n }") == Block((BlockStmt(Block()),))

    def test_empty_block_is_truthy(self) -> None:
        block = parse("{}")
        inner = block.statements[0].block
        assert inner.is_empty
        assert inner

    def test_nested_blocks_keep_order(self) -> None:
        block = parse("{ a; { b; c; } d; }")
        outer = block.statements[0].block
        assert isinstance(outer.statements[1], BlockStmt)
        assert [s.expr.name for s in outer.statements[1].block] == ["b", "c"]
        assert outer.statements[2] == ExprStmt(Variable("d"))

    def test_unclosed_block_is_error(self) -> None:
        with pytest.raises(ScriptSyntaxError):
            parse("{ a;")

    def test_block_rule_requires_brace(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            Parser("a;").block(0)
        assert exc_info.value.expected == ("{",)


class TestIfStatements:
    def test_if_statement(self) -> None:
        block = parse("if (enabled) { a::b; }")
        stmt = block.statements[0]
        assert isinstance(stmt, IfStmt)
        assert stmt.condition == Variable("enabled")
        assert len(stmt.body.statements) == 1

    def test_if_without_spaces(self) -> None:
        assert parse("if(true){ a::b; }") == parse("if (true) { a::b; }")

    def test_if_with_empty_body(self) -> None:
        stmt = parse("if (x) {}").statements[0]
        assert isinstance(stmt, IfStmt)
        assert stmt.body.is_empty

    def test_if_condition_expression(self) -> None:
        stmt = parse("if (a == 1 && b) {}").statements[0]
        assert isinstance(stmt.condition, BinaryOpExpr)
        assert stmt.condition.op is BinOp.AND

    def test_if_needs_no_terminator(self) -> None:
        block = parse("if (x) {} a;")
        assert isinstance(block.statements[0], IfStmt)
        assert block.statements[1] == ExprStmt(Variable("a"))

    def test_nested_if(self) -> None:
        stmt = parse("if (a) { if (b) { c; } }").statements[0]
        inner = stmt.body.statements[0]
        assert isinstance(inner, IfStmt)
        assert inner.condition == Variable("b")

    def test_if_without_block_is_error(self) -> None:
        with pytest.raises(ScriptSyntaxError):
            parse("if (x) a;")

    def test_identifier_starting_with_if(self) -> None:
        assert parse("iffy;") == Block((ExprStmt(Variable("iffy")),))
