"""Abstract Syntax Tree (AST) definitions for the tinylox language.

The node classes are plain data: the parser builds them and the
interpreter walks them by dispatching on the node class, so adding a new
kind of statement or expression never requires touching the existing
nodes. Every child node is owned by exactly one parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .tokens import Token


@dataclass
class Expr:
    """Base class for expression nodes."""
    pass


@dataclass
class Stmt:
    """Base class for statement nodes."""
    pass


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Unary(Expr):
    operator: Token
    operand: Expr


@dataclass
class Grouping(Expr):
    inner: Expr


@dataclass
class Literal(Expr):
    token: Token  # NUMBER, STRING, TRUE, FALSE or NIL


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass
class Print(Stmt):
    expr: Expr


@dataclass
class ExprStmt(Stmt):
    expr: Expr


@dataclass
class Block(Stmt):
    statements: List[Stmt]


Node = Union[Expr, Stmt]


def to_string(node: Node) -> str:
    """Render a node in its parenthesised debug form.

    `-1 * (-3 + 4)` renders as `(* (- 1) (grouping (+ (- 3) 4)))`.
    """
    if isinstance(node, Binary):
        return f"({node.operator.lexeme} {to_string(node.left)} {to_string(node.right)})"
    if isinstance(node, Unary):
        return f"({node.operator.lexeme} {to_string(node.operand)})"
    if isinstance(node, Grouping):
        return f"(grouping {to_string(node.inner)})"
    if isinstance(node, Literal):
        return node.token.lexeme
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assign):
        return f"{node.name.lexeme} = {to_string(node.value)}"
    if isinstance(node, VarDecl):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {to_string(node.initializer)})"
    if isinstance(node, Print):
        return f"(print {to_string(node.expr)})"
    if isinstance(node, ExprStmt):
        return f"(expr {to_string(node.expr)})"
    if isinstance(node, Block):
        return ' '.join(['(block'] + [to_string(s) for s in node.statements]) + ')'
    raise TypeError(f"unknown node type {type(node).__name__}")
