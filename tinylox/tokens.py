"""Token definitions for the tinylox language.

A token is the smallest unit the parser works with. Tokens are immutable
once the scanner has produced them; they carry their kind, the exact
source substring they were scanned from and the line they appeared on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FOR = 'for'
    FUNC = 'func'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'end of input'

    # Scanner-internal markers, never handed to the parser
    INVALID = 'invalid'
    BLANK = 'blank'


KEYWORDS: Dict[str, TokenType] = {
    kind.value: kind
    for kind in (
        TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE,
        TokenType.FOR, TokenType.FUNC, TokenType.IF, TokenType.NIL,
        TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.SUPER,
        TokenType.THIS, TokenType.TRUE, TokenType.VAR, TokenType.WHILE,
    )
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int
