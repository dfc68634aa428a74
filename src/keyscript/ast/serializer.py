"""AST serialization and deserialization for keyscript.

Provides round-trip serialization of ``Block`` trees to and from JSON
and YAML.  The serialized form is a plain dict/list structure with a
``"kind"`` discriminator on every node.

Usage
-----
::

    from keyscript.ast.serializer import AstSerializer

    serializer = AstSerializer()
    json_text = serializer.to_json(block)
    assert serializer.from_json(json_text) == block
"""
from __future__ import annotations

import json

import yaml

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
from keyscript.keys.modifiers import KeyClickActionWithMods, KeyModifierFlags
from keyscript.keys.registry import Key, KeyRegistry, UnknownKeyError, default_registry

_MODIFIER_ORDER = (
    KeyModifierFlags.SHIFT,
    KeyModifierFlags.CTRL,
    KeyModifierFlags.ALT,
    KeyModifierFlags.META,
)


class AstSerializer:
    """Converts between ``Block`` trees and plain Python dicts.

    Parameters
    ----------
    registry:
        Registry used to attach readable names to serialized keys.
        Defaults to ``default_registry()``.
    """

    def __init__(self, registry: KeyRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    # ------------------------------------------------------------------
    # Serialization (AST -> dict)
    # ------------------------------------------------------------------

    def to_dict(self, block: Block) -> dict[str, object]:
        """Serialize a ``Block`` to a JSON-compatible dict."""
        return {
            "kind": "Block",
            "statements": [self._stmt_to_dict(s) for s in block.statements],
        }

    def _stmt_to_dict(self, stmt: Stmt) -> dict[str, object]:
        if isinstance(stmt, ExprStmt):
            return {"kind": "ExprStmt", "expr": self._expr_to_dict(stmt.expr)}
        if isinstance(stmt, IfStmt):
            return {
                "kind": "IfStmt",
                "condition": self._expr_to_dict(stmt.condition),
                "body": self.to_dict(stmt.body),
            }
        if isinstance(stmt, BlockStmt):
            return {"kind": "BlockStmt", "block": self.to_dict(stmt.block)}
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def _value_to_dict(self, value: ValueType) -> dict[str, object]:
        return {"type": type(value).__name__, "value": value.value}

    def _key_to_dict(self, key: Key) -> dict[str, object]:
        return {"code": key.code, "name": self._registry.name_of(key)}

    def _action_to_dict(self, action: KeyClickActionWithMods) -> dict[str, object]:
        return {
            "kind": "KeyAction",
            "key": self._key_to_dict(action.key),
            "modifiers": [m.name for m in _MODIFIER_ORDER if m in action.modifiers],
        }

    def _expr_to_dict(self, expr: Expr) -> dict[str, object]:
        if isinstance(expr, Value):
            return {"kind": "Value", "value": self._value_to_dict(expr.value)}
        if isinstance(expr, BinaryOpExpr):
            return {
                "kind": "BinaryOpExpr",
                "op": expr.op.name,
                "left": self._expr_to_dict(expr.left),
                "right": self._expr_to_dict(expr.right),
            }
        if isinstance(expr, UnaryOpExpr):
            return {
                "kind": "UnaryOpExpr",
                "op": expr.op.name,
                "operand": self._expr_to_dict(expr.operand),
            }
        if isinstance(expr, VariableInit):
            return {"kind": "VariableInit", "name": expr.name, "value": self._expr_to_dict(expr.value)}
        if isinstance(expr, VariableAssign):
            return {"kind": "VariableAssign", "name": expr.name, "value": self._expr_to_dict(expr.value)}
        if isinstance(expr, FunctionCall):
            return {
                "kind": "FunctionCall",
                "name": expr.name,
                "arguments": [self._expr_to_dict(a) for a in expr.arguments],
            }
        if isinstance(expr, KeyMappingInline):
            target = (
                self.to_dict(expr.target)
                if isinstance(expr.target, Block)
                else self._action_to_dict(expr.target)
            )
            return {
                "kind": "KeyMappingInline",
                "trigger": self._action_to_dict(expr.trigger),
                "target": target,
            }
        if isinstance(expr, Lambda):
            return {"kind": "Lambda", "params": list(expr.params), "body": self.to_dict(expr.body)}
        if isinstance(expr, Variable):
            return {"kind": "Variable", "name": expr.name}
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    # ------------------------------------------------------------------
    # Deserialization (dict -> AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Block:
        """Deserialize a ``Block`` from a plain dict."""
        return Block(statements=tuple(self._stmt_from_dict(s) for s in data.get("statements", [])))

    def _stmt_from_dict(self, d: dict[str, object]) -> Stmt:
        kind = d.get("kind")
        if kind == "ExprStmt":
            return ExprStmt(expr=self._expr_from_dict(d["expr"]))
        if kind == "IfStmt":
            return IfStmt(condition=self._expr_from_dict(d["condition"]), body=self.from_dict(d["body"]))
        if kind == "BlockStmt":
            return BlockStmt(block=self.from_dict(d["block"]))
        raise ValueError(f"Unknown statement kind: {kind!r}")

    def _value_from_dict(self, d: dict[str, object]) -> ValueType:
        value_type = d["type"]
        if value_type == "BoolValue":
            return BoolValue(bool(d["value"]))
        if value_type == "NumberValue":
            return NumberValue(float(d["value"]))
        if value_type == "StringValue":
            return StringValue(str(d["value"]))
        raise ValueError(f"Unknown value type: {value_type!r}")

    def _action_from_dict(self, d: dict[str, object]) -> KeyClickActionWithMods:
        modifiers = KeyModifierFlags.NONE
        for name in d.get("modifiers", []):
            modifiers |= KeyModifierFlags[name]
        key = Key(int(d["key"]["code"]))
        try:
            self._registry.name_of(key)
        except UnknownKeyError:
            raise ValueError(f"Unknown key code: {key.code}") from None
        return KeyClickActionWithMods(key=key, modifiers=modifiers)

    def _expr_from_dict(self, d: dict[str, object]) -> Expr:
        kind = d.get("kind")
        if kind == "Value":
            return Value(self._value_from_dict(d["value"]))
        if kind == "BinaryOpExpr":
            return BinaryOpExpr(
                op=BinOp[d["op"]],
                left=self._expr_from_dict(d["left"]),
                right=self._expr_from_dict(d["right"]),
            )
        if kind == "UnaryOpExpr":
            return UnaryOpExpr(op=UnaryOpKind[d["op"]], operand=self._expr_from_dict(d["operand"]))
        if kind == "VariableInit":
            return VariableInit(name=d["name"], value=self._expr_from_dict(d["value"]))
        if kind == "VariableAssign":
            return VariableAssign(name=d["name"], value=self._expr_from_dict(d["value"]))
        if kind == "FunctionCall":
            return FunctionCall(
                name=d["name"],
                arguments=tuple(self._expr_from_dict(a) for a in d.get("arguments", [])),
            )
        if kind == "KeyMappingInline":
            target_data = d["target"]
            target = (
                self.from_dict(target_data)
                if target_data.get("kind") == "Block"
                else self._action_from_dict(target_data)
            )
            return KeyMappingInline(trigger=self._action_from_dict(d["trigger"]), target=target)
        if kind == "Lambda":
            return Lambda(params=tuple(d.get("params", [])), body=self.from_dict(d["body"]))
        if kind == "Variable":
            return Variable(name=d["name"])
        raise ValueError(f"Unknown expression kind: {kind!r}")

    # ------------------------------------------------------------------
    # JSON / YAML
    # ------------------------------------------------------------------

    def to_json(self, block: Block, indent: int = 2) -> str:
        """Serialize a ``Block`` to a JSON string."""
        return json.dumps(self.to_dict(block), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Block:
        """Deserialize a ``Block`` from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    def to_yaml(self, block: Block) -> str:
        """Serialize a ``Block`` to a YAML string."""
        return yaml.dump(self.to_dict(block), default_flow_style=False, allow_unicode=True, sort_keys=False)

    def from_yaml(self, text: str) -> Block:
        """Deserialize a ``Block`` from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
