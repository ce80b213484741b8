"""Recursive-descent parser for the tinylox language.

The grammar, lowest precedence first::

    program     -> declaration* EOF
    declaration -> "var" IDENT ( "=" expression )? ";" | statement
    statement   -> "print" expression ";" | "{" declaration* "}" | expression ";"
    expression  -> assignment
    assignment  -> IDENT "=" assignment | equality
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENT

Each binary level loops over its operators and folds the operands into
a left-leaning tree. A declaration that fails to parse is recorded in
`Parser.errors` and skipped with panic-mode recovery (`synchronize`), so
one malformed statement never hides the statements that follow it.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Expr, Stmt, Binary, Unary, Grouping, Literal, Variable, Assign,
    VarDecl, Print, ExprStmt, Block,
)
from .errors import ParseError
from .tokens import Token, TokenType


LITERAL_TYPES = (
    TokenType.NUMBER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE, TokenType.NIL,
)

# Tokens that begin a new statement; recovery stops in front of them
STATEMENT_STARTS = (
    TokenType.CLASS, TokenType.FUNC, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
)


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError('token stream must end with an EOF token')
        self.tokens = tokens
        self.pos = 0
        self.errors: List[ParseError] = []

    ###########################################################################
    # Entry points
    ###########################################################################

    def parse(self) -> List[Stmt]:
        """Parse a whole program, collecting every statement that parses."""
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Expr:
        """Parse a single expression; errors propagate without recovery."""
        return self.expression()

    def all_parsed(self) -> bool:
        return self.pos == len(self.tokens) - 1

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    ###########################################################################
    # Statements
    ###########################################################################

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as e:
            self.errors.append(e)
            self.synchronize()
            return None
        except RecursionError:
            self.errors.append(self.error(self.peek(), 'expression nested too deeply'))
            self.synchronize()
            return None

    def var_declaration(self) -> VarDecl:
        name = self.consume(TokenType.IDENTIFIER, 'expected variable name')
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, 'expected \';\' after variable declaration')
        return VarDecl(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            expr = self.expression()
            self.consume(TokenType.SEMICOLON, 'expected \';\' after value')
            return Print(expr)
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, 'expected \';\' after expression')
        return ExprStmt(expr)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, 'expected \'}\' after block')
        return statements

    ###########################################################################
    # Expressions
    ###########################################################################

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error(equals, 'invalid assignment target')
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            expr = Binary(expr, operator, self.comparison())
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            expr = Binary(expr, operator, self.term())
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            expr = Binary(expr, operator, self.factor())
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            expr = Binary(expr, operator, self.unary())
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match(*LITERAL_TYPES):
            return Literal(self.previous())
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, 'expected \')\' after expression')
            return Grouping(expr)
        raise self.error(self.peek(), 'expected expression')

    ###########################################################################
    # Token helpers
    ###########################################################################

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def match(self, *token_types: TokenType) -> bool:
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        found = 'end of input' if token.type is TokenType.EOF else repr(token.lexeme)
        return ParseError(f"[line {token.line}] {message}, got {found}")

    def synchronize(self):
        """Skip tokens up to the next statement boundary."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()
