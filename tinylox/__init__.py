# tinylox language package
# This package provides a scanner, parser and tree-walking interpreter for tinylox.
from .errors import LoxRuntimeError, ParseError
from .interpreter import Interpreter
from .lox import Lox
from .parser import Parser
from .scanner import scan

__all__ = [
    'Lox',
    'Interpreter',
    'Parser',
    'scan',
    'ParseError',
    'LoxRuntimeError',
]
