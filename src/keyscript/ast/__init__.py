"""keyscript AST module.

Exports all AST node types and the serializer for converting trees to
and from JSON/YAML.
"""
from __future__ import annotations

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
    UnaryOpKind,
    Value,
    ValueType,
    Variable,
    VariableAssign,
    VariableInit,
)
from keyscript.ast.serializer import AstSerializer

__all__ = [
    # Enums
    "BinOp",
    "UnaryOpKind",
    # Values
    "ValueType",
    "BoolValue",
    "NumberValue",
    "StringValue",
    # Expression types
    "Expr",
    "Value",
    "BinaryOpExpr",
    "UnaryOpExpr",
    "VariableInit",
    "VariableAssign",
    "FunctionCall",
    "KeyMappingInline",
    "Lambda",
    "Variable",
    # Statements
    "Stmt",
    "ExprStmt",
    "IfStmt",
    "BlockStmt",
    "Block",
    # Serializer
    "AstSerializer",
]
