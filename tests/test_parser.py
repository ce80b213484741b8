import pytest

from tinylox.ast import Assign, Block, ExprStmt, Print, VarDecl, Variable, to_string
from tinylox.errors import ParseError
from tinylox.parser import Parser
from tinylox.scanner import scan


def parse_expr(source: str):
    return Parser(scan(source)).parse_expression()


def parse_program(source: str):
    parser = Parser(scan(source))
    return parser, parser.parse()


@pytest.mark.parametrize('source, expected', [
    ('1 + 2', '(+ 1 2)'),
    ('-1 * (-3 + 4)', '(* (- 1) (grouping (+ (- 3) 4)))'),
    ('1 - 2 - 3', '(- (- 1 2) 3)'),
    ('1 + 2 * 3', '(+ 1 (* 2 3))'),
    ('1 < 2 == 3 >= 4', '(== (< 1 2) (>= 3 4))'),
    ('!!true', '(! (! true))'),
    ('"s" + nil', '(+ s nil)'),
])
def test_expression_text_form(source, expected):
    assert to_string(parse_expr(source)) == expected


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert to_string(expr) == 'a = b = 1'


def test_invalid_assignment_target_is_rejected():
    with pytest.raises(ParseError, match='invalid assignment target'):
        parse_expr('1 = 2')
    with pytest.raises(ParseError, match='invalid assignment target'):
        parse_expr('(a) = 2')


def test_missing_closing_paren():
    with pytest.raises(ParseError, match=r"\[line 1\] expected '\)' after expression"):
        parse_expr('(1 + 2')


def test_parse_expression_leaves_trailing_tokens():
    parser = Parser(scan('1 + 2 3'))
    parser.parse_expression()
    assert not parser.all_parsed()

    parser = Parser(scan('1 + 2'))
    parser.parse_expression()
    assert parser.all_parsed()


def test_statements():
    parser, statements = parse_program('var a; var b = 1; print b; a = b; { var c = a; }')
    assert not parser.had_error
    assert parser.all_parsed()
    assert [type(s) for s in statements] == [VarDecl, VarDecl, Print, ExprStmt, Block]
    assert statements[0].initializer is None
    assert [to_string(s) for s in statements] == [
        '(var a)', '(var b 1)', '(print b)', '(expr a = b)', '(block (var c a))',
    ]


def test_print_accepts_assignment_expression():
    parser, statements = parse_program('print a = 1;')
    assert not parser.had_error
    assert isinstance(statements[0].expr, Assign)


def test_recovery_keeps_following_statements():
    parser, statements = parse_program('print 1; var = 2; print 3; 1 + ; print 4;')
    assert len(parser.errors) == 2
    assert [to_string(s) for s in statements] == ['(print 1)', '(print 3)', '(print 4)']
    assert parser.all_parsed()


def test_recovery_stops_at_statement_keyword():
    # no semicolon before the next statement: recovery stops in front of `var`
    parser, statements = parse_program('1 + + var a = 1;')
    assert len(parser.errors) == 1
    assert len(statements) == 1
    assert isinstance(statements[0], VarDecl)


def test_recovery_inside_block():
    parser, statements = parse_program('{ print ; var x = 1; } print x;')
    assert len(parser.errors) == 1
    assert [to_string(s) for s in statements] == ['(block (var x 1))', '(print x)']


def test_unterminated_block_reports_error():
    parser, statements = parse_program('{ var a = 1;')
    assert statements == []
    assert "expected '}' after block" in parser.errors[0].message
    assert 'got end of input' in parser.errors[0].message


def test_error_messages_name_the_line():
    parser, _ = parse_program('var a = 1;\nvar b = ;')
    assert parser.errors[0].message == '[line 2] expected expression, got \';\''


def test_variable_node_holds_token():
    expr = parse_expr('abc')
    assert isinstance(expr, Variable)
    assert expr.name.line == 1


def test_parser_requires_eof_terminated_tokens():
    with pytest.raises(ValueError):
        Parser([])


def test_deep_nesting_is_reported_not_raised():
    source = 'print ' + '(' * 200 + '1' + ')' * 200 + '; print 2;'
    parser, statements = parse_program(source)
    assert len(parser.errors) == 1
    assert 'nested too deeply' in parser.errors[0].message
    assert [to_string(s) for s in statements] == ['(print 2)']


def test_long_negation_chain_is_reported_not_raised():
    parser, statements = parse_program('print ' + '!' * 5000 + 'true; var a = 1;')
    assert 'nested too deeply' in parser.errors[0].message
    assert isinstance(statements[-1], VarDecl)
