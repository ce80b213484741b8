"""Scanner for the tinylox language.

`scan` turns raw source text into the list of tokens consumed by the
parser. Scanning never fails: characters the language does not know
about are reported through the `report` callback and skipped, strings
missing their closing quote run to the end of the input, and a number
may end with a bare decimal point.
"""

from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

from .tokens import KEYWORDS, Token, TokenType


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
}

# operator -> (type alone, type when followed by '=')
EQUAL_SUFFIXED_TOKENS = {
    '!': (TokenType.BANG, TokenType.BANG_EQUAL),
    '=': (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    '>': (TokenType.GREATER, TokenType.GREATER_EQUAL),
    '<': (TokenType.LESS, TokenType.LESS_EQUAL),
}

WHITESPACE = ' \t\r\n'


def report_invalid(token: Token, stream: Optional[TextIO] = None) -> None:
    """Default sink for characters the scanner does not recognise."""
    print(f"[line {token.line}] invalid token: {token.lexeme}", file=stream or sys.stdout)


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_identifier_start(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_identifier_part(c: str) -> bool:
    return c.isalnum() or c == '_'


def scan(source: str, report: Optional[Callable[[Token], None]] = None) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF.

    Whitespace produces BLANK markers and unknown characters produce
    INVALID tokens; neither reaches the returned list. INVALID tokens
    are passed to `report` (printed to stdout by default).
    """
    if report is None:
        report = report_invalid
    tokens: List[Token] = []
    i = 0
    line = 1
    length = len(source)

    def peek(offset: int = 0) -> str:
        pos = i + offset
        return source[pos] if pos < length else ''

    def scan_identifier() -> Token:
        nonlocal i
        start = i
        while i < length and is_identifier_part(source[i]):
            i += 1
        text = source[start:i]
        return Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, line)

    def scan_number() -> Token:
        nonlocal i
        start = i
        has_dot = False
        while i < length:
            c = source[i]
            if is_digit(c):
                i += 1
            elif c == '.' and not has_dot:
                has_dot = True
                i += 1
            else:
                break
        return Token(TokenType.NUMBER, source[start:i], line)

    def scan_string() -> Token:
        nonlocal i, line
        i += 1  # opening quote
        chars: List[str] = []
        while i < length:
            c = source[i]
            i += 1
            if c == '"':
                break
            if c == '\n':
                line += 1
            chars.append(c)
        return Token(TokenType.STRING, ''.join(chars), line)

    def scan_token() -> Token:
        nonlocal i, line
        c = source[i]
        if c in SINGLE_CHAR_TOKENS:
            i += 1
            return Token(SINGLE_CHAR_TOKENS[c], c, line)
        if c in EQUAL_SUFFIXED_TOKENS:
            alone, suffixed = EQUAL_SUFFIXED_TOKENS[c]
            if peek(1) == '=':
                i += 2
                return Token(suffixed, c + '=', line)
            i += 1
            return Token(alone, c, line)
        if c in WHITESPACE:
            token = Token(TokenType.BLANK, c, line)
            i += 1
            if c == '\n':
                line += 1
            return token
        if is_identifier_start(c):
            return scan_identifier()
        if is_digit(c):
            return scan_number()
        if c == '"':
            return scan_string()
        i += 1
        return Token(TokenType.INVALID, c, line)

    while i < length:
        token = scan_token()
        if token.type is TokenType.INVALID:
            report(token)
        elif token.type is not TokenType.BLANK:
            tokens.append(token)
    tokens.append(Token(TokenType.EOF, '', line))
    return tokens
