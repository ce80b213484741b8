from tinylox.scanner import scan
from tinylox.tokens import Token, TokenType


def kinds(tokens):
    return [t.type for t in tokens]


def test_scan_var_declaration():
    tokens = scan('var id = 114.514;')
    assert tokens == [
        Token(TokenType.VAR, 'var', 1),
        Token(TokenType.IDENTIFIER, 'id', 1),
        Token(TokenType.EQUAL, '=', 1),
        Token(TokenType.NUMBER, '114.514', 1),
        Token(TokenType.SEMICOLON, ';', 1),
        Token(TokenType.EOF, '', 1),
    ]


def test_scan_tracks_lines_and_skips_invalid_characters():
    reported = []
    source = 'while (a == 114@) {\n var b = "while";\n }\n'
    tokens = scan(source, report=reported.append)
    assert tokens == [
        Token(TokenType.WHILE, 'while', 1),
        Token(TokenType.LEFT_PAREN, '(', 1),
        Token(TokenType.IDENTIFIER, 'a', 1),
        Token(TokenType.EQUAL_EQUAL, '==', 1),
        Token(TokenType.NUMBER, '114', 1),
        Token(TokenType.RIGHT_PAREN, ')', 1),
        Token(TokenType.LEFT_BRACE, '{', 1),
        Token(TokenType.VAR, 'var', 2),
        Token(TokenType.IDENTIFIER, 'b', 2),
        Token(TokenType.EQUAL, '=', 2),
        Token(TokenType.STRING, 'while', 2),
        Token(TokenType.SEMICOLON, ';', 2),
        Token(TokenType.RIGHT_BRACE, '}', 3),
        Token(TokenType.EOF, '', 4),
    ]
    assert reported == [Token(TokenType.INVALID, '@', 1)]


def test_invalid_characters_go_to_stdout_by_default(capsys):
    tokens = scan('1 # 2')
    assert kinds(tokens) == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
    assert capsys.readouterr().out == '[line 1] invalid token: #\n'


def test_one_and_two_character_operators():
    tokens = scan('! != = == > >= < <= ( ) { } , . - + ; / *')
    assert kinds(tokens) == [
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS,
        TokenType.SEMICOLON, TokenType.SLASH, TokenType.STAR, TokenType.EOF,
    ]


def test_operators_without_spaces():
    tokens = scan('a>=1!=b')
    assert [t.lexeme for t in tokens] == ['a', '>=', '1', '!=', 'b', '']


def test_keywords_override_identifiers():
    words = 'and class else false for func if nil or print return super this true var while'
    tokens = scan(words)
    assert [t.type.value for t in tokens[:-1]] == words.split()
    assert kinds(scan('variable printer _tmp x1')) == [TokenType.IDENTIFIER] * 4 + [TokenType.EOF]


def test_number_with_trailing_dot_is_consumed_greedily():
    assert [t.lexeme for t in scan('1.')] == ['1.', '']
    tokens = scan('1.2.3')
    assert [(t.type, t.lexeme) for t in tokens] == [
        (TokenType.NUMBER, '1.2'),
        (TokenType.DOT, '.'),
        (TokenType.NUMBER, '3'),
        (TokenType.EOF, ''),
    ]


def test_unterminated_string_runs_to_end_of_input():
    tokens = scan('print "abc\ndef')
    assert tokens[1] == Token(TokenType.STRING, 'abc\ndef', 2)
    assert tokens[-1] == Token(TokenType.EOF, '', 2)


def test_string_has_no_escapes():
    tokens = scan(r'"a\n"')
    assert tokens[0].lexeme == 'a\\n'


def test_empty_source_yields_only_eof():
    assert scan('') == [Token(TokenType.EOF, '', 1)]
    assert scan(' \t\r\n') == [Token(TokenType.EOF, '', 2)]
