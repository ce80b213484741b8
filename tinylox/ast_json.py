"""JSON serialization/deserialization for the tinylox AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens are kept whole (type,
lexeme and line) so that a program loaded back from JSON reports the
same line numbers as the source it was emitted from.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Assign,
    Binary,
    Block,
    ExprStmt,
    Grouping,
    Literal,
    Print,
    Stmt,
    Unary,
    VarDecl,
    Variable,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": "Token", "token_type": t.type.name, "lexeme": t.lexeme, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["token_type"]], o["lexeme"], o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Token):
        return token_to_obj(node)

    # Expressions
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "operand": ast_to_obj(node.operand)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "inner": ast_to_obj(node.inner)}
    if isinstance(node, Literal):
        return {"type": "Literal", "token": token_to_obj(node.token)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}

    # Statements
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}

    raise TypeError(f"Unsupported AST node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError(f"Expected an AST object, got {type(obj).__name__}")

    t = obj.get("type")
    if t == "Token":
        return token_from_obj(obj)
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["operand"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["inner"]))
    if t == "Literal":
        return Literal(token_from_obj(obj["token"]))
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "VarDecl":
        return VarDecl(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Print":
        return Print(ast_from_obj(obj["expr"]))
    if t == "ExprStmt":
        return ExprStmt(ast_from_obj(obj["expr"]))
    if t == "Block":
        return Block([ast_from_obj(s) for s in obj.get("statements", [])])

    raise TypeError(f"Unknown AST object type: {t}")


def program_to_obj(statements: List[Stmt]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Dict[str, Any]) -> List[Stmt]:
    if obj.get("type") != "Program":
        raise TypeError(f"Expected a Program object, got {obj.get('type')}")
    return [ast_from_obj(s) for s in obj.get("body", [])]
