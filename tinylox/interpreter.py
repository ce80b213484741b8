"""Tree-walking interpreter for the tinylox language.

The interpreter evaluates expressions and executes statements produced
by `tinylox.parser`. All node behaviour lives here: the AST classes are
plain data and the walker dispatches on the node class. The scope stack
is an explicit `Environment` passed down the walk, so an interpreter
never depends on process-wide state.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Expr, Stmt, Binary, Unary, Grouping, Literal, Variable, Assign,
    VarDecl, Print, ExprStmt, Block, to_string as node_to_string,
)
from .environment import Environment
from .errors import LoxRuntimeError
from .tokens import TokenType
from .values import Nil, is_number, is_truthy, to_string, type_name


ARITHMETIC_OPS = {
    TokenType.PLUS: lambda a, b: a + b,
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.STAR: lambda a, b: a * b,
    TokenType.SLASH: lambda a, b: a / b,
}

COMPARISON_OPS = {
    TokenType.EQUAL_EQUAL: lambda a, b: a == b,
    TokenType.BANG_EQUAL: lambda a, b: a != b,
    TokenType.GREATER: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
}


class Interpreter:
    """Executes tinylox statements against an environment.

    `output` is any object with a `write` method and receives the text
    of `print` statements; it defaults to whatever `sys.stdout` is at
    the time of writing. With `debug_level` above zero a trace of the
    execution is written to `debug_file`.
    """
    def __init__(self, output: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.environment = Environment()
        self.output = output
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Public API
    def interpret(self, statements: List[Stmt], env: Optional[Environment] = None):
        """Execute statements in order; the first runtime error aborts the rest."""
        if env is None:
            env = self.environment
        try:
            for stmt in statements:
                self.execute(stmt, env)
        except RecursionError:
            raise LoxRuntimeError('Expression nested too deeply to evaluate.') from None

    def execute(self, stmt: Stmt, env: Optional[Environment] = None):
        if env is None:
            env = self.environment
        if self.debug_level >= 1:
            self.debug(f"execute {node_to_string(stmt)}")
        if isinstance(stmt, ExprStmt):
            self.evaluate(stmt.expr, env)
            return
        if isinstance(stmt, Print):
            value = self.evaluate(stmt.expr, env)
            out = self.output if self.output is not None else sys.stdout
            out.write(to_string(value) + '\n')
            return
        if isinstance(stmt, VarDecl):
            value = Nil if stmt.initializer is None else self.evaluate(stmt.initializer, env)
            env.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {stmt.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(stmt, Block):
            with env.scope():
                if self.debug_level >= 2:
                    self.debug(f"push scope (depth {env.depth})")
                for inner in stmt.statements:
                    self.execute(inner, env)
            if self.debug_level >= 2:
                self.debug(f"pop scope (depth {env.depth + 1})")
            return
        raise LoxRuntimeError(f"Unknown statement type {type(stmt).__name__}")

    def evaluate(self, expr: Expr, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = self.environment
        value = self.evaluate_node(expr, env)
        if self.debug_level >= 3:
            self.debug(f"evaluate {node_to_string(expr)} -> {to_string(value)}")
        return value

    def evaluate_node(self, expr: Expr, env: Environment) -> Any:
        if isinstance(expr, Literal):
            return self.literal_value(expr)
        if isinstance(expr, Grouping):
            return self.evaluate(expr.inner, env)
        if isinstance(expr, Variable):
            return env.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value, env)
            env.assign(expr.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {expr.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return value
        if isinstance(expr, Unary):
            return self.evaluate_unary(expr, env)
        if isinstance(expr, Binary):
            return self.evaluate_binary(expr, env)
        raise LoxRuntimeError(f"Unknown expression type {type(expr).__name__}")

    def literal_value(self, expr: Literal) -> Any:
        token = expr.token
        if token.type is TokenType.NUMBER:
            return float(token.lexeme)
        if token.type is TokenType.STRING:
            return token.lexeme
        if token.type is TokenType.TRUE:
            return True
        if token.type is TokenType.FALSE:
            return False
        if token.type is TokenType.NIL:
            return Nil
        raise LoxRuntimeError(f"Invalid literal `{token.lexeme}`")

    def evaluate_unary(self, expr: Unary, env: Environment) -> Any:
        operand = self.evaluate(expr.operand, env)
        op = expr.operator.type
        if op is TokenType.MINUS:
            if not is_number(operand):
                raise LoxRuntimeError(
                    f"Operand must be a Number, not {type_name(operand)} `{to_string(operand)}`."
                )
            return -operand
        if op is TokenType.BANG:
            return not is_truthy(operand)
        raise LoxRuntimeError(f"Invalid unary operator `{expr.operator.lexeme}`")

    def evaluate_binary(self, expr: Binary, env: Environment) -> Any:
        left = self.evaluate(expr.left, env)
        right = self.evaluate(expr.right, env)
        op = expr.operator.type
        # Checked before any type dispatch, whatever the left operand is
        if op is TokenType.SLASH and is_number(right) and right == 0.0:
            raise LoxRuntimeError('Divided by zero is not allowed.')
        if is_number(left) and is_number(right):
            if op in ARITHMETIC_OPS:
                return ARITHMETIC_OPS[op](left, right)
            if op in COMPARISON_OPS:
                return COMPARISON_OPS[op](left, right)
        if isinstance(left, str) and isinstance(right, str) and op is TokenType.PLUS:
            return left + right
        raise LoxRuntimeError(f"Expression `{node_to_string(expr)}` can not be interpreted.")
