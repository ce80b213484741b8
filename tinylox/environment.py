from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from tinylox.errors import LoxRuntimeError
from tinylox.tokens import Token


class Environment:
    """Stack of scopes mapping variable names to runtime values.

    The first scope is the global scope; it is created with the
    environment and can never be dropped. Blocks push a scope on entry
    and pop it on exit through `scope()`.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def get(self, name: Token) -> Any:
        for scope in reversed(self.scopes):
            if name.lexeme in scope:
                return scope[name.lexeme]
        raise LoxRuntimeError(f"Undefined variable `{name.lexeme}`.")

    def define(self, name: str, value: Any):
        # Shadows outer bindings; redefinition in the same scope overwrites
        self.scopes[-1][name] = value

    def assign(self, name: Token, value: Any):
        for scope in reversed(self.scopes):
            if name.lexeme in scope:
                scope[name.lexeme] = value
                return
        raise LoxRuntimeError(f"Undefined variable `{name.lexeme}`.")

    def push_scope(self):
        self.scopes.append({})

    def pop_scope(self) -> Dict[str, Any]:
        if len(self.scopes) == 1:
            raise LoxRuntimeError('cannot drop the global scope')
        return self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator['Environment']:
        self.push_scope()
        try:
            yield self
        finally:
            self.pop_scope()
