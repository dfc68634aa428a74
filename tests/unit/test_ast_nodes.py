"""Unit tests for keyscript.ast.nodes: node dataclasses and helpers."""
from __future__ import annotations

import dataclasses

import pytest

from keyscript.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Block,
    BlockStmt,
    ExprStmt,
    FunctionCall,
    KeyMappingInline,
    Lambda,
    NumberValue,
    Value,
    Variable,
)
from keyscript.keys import Key, KeyClickActionWithMods


class TestNodes:
    def test_nodes_are_frozen(self) -> None:
        node = Variable("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "y"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert BinaryOpExpr(BinOp.ADD, Variable("a"), Variable("b")) == BinaryOpExpr(
            BinOp.ADD, Variable("a"), Variable("b")
        )

    def test_nodes_are_hashable(self) -> None:
        nodes = {Variable("a"), Variable("a"), Value(NumberValue(1.0))}
        assert len(nodes) == 2

    def test_function_call_defaults_to_no_arguments(self) -> None:
        assert FunctionCall("f").arguments == ()

    def test_key_mapping_target_kinds(self) -> None:
        action = KeyClickActionWithMods(Key(30))
        assert not KeyMappingInline(action, action).is_block
        assert KeyMappingInline(action, Block()).is_block

    def test_lambda_params_tuple(self) -> None:
        assert Lambda(("a", "b"), Block()).params == ("a", "b")


class TestBlock:
    def test_default_block_is_empty(self) -> None:
        assert Block().statements == ()
        assert Block().is_empty

    def test_iteration_follows_statement_order(self) -> None:
        stmts = (ExprStmt(Variable("a")), BlockStmt(Block()), ExprStmt(Variable("b")))
        assert list(Block(stmts)) == list(stmts)

    def test_non_empty_block(self) -> None:
        assert not Block((ExprStmt(Variable("a")),)).is_empty
