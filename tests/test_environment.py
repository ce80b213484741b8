import pytest

from tinylox.environment import Environment
from tinylox.errors import LoxRuntimeError
from tinylox.tokens import Token, TokenType


def name(lexeme: str) -> Token:
    return Token(TokenType.IDENTIFIER, lexeme, 1)


def test_starts_with_global_scope():
    env = Environment()
    assert env.depth == 1
    with pytest.raises(LoxRuntimeError, match='global scope'):
        env.pop_scope()


def test_lookup_walks_outward():
    env = Environment()
    env.define('a', 1.0)
    env.push_scope()
    env.define('b', 2.0)
    assert env.get(name('a')) == 1.0
    assert env.get(name('b')) == 2.0
    env.pop_scope()
    with pytest.raises(LoxRuntimeError, match='Undefined variable `b`.'):
        env.get(name('b'))


def test_shadowing_does_not_touch_outer_binding():
    env = Environment()
    env.define('a', 0.0)
    with env.scope():
        env.define('a', 2.0)
        assert env.get(name('a')) == 2.0
    assert env.get(name('a')) == 0.0


def test_assign_updates_nearest_defining_scope():
    env = Environment()
    env.define('a', 0.0)
    with env.scope():
        env.assign(name('a'), 5.0)
    assert env.get(name('a')) == 5.0


def test_assign_never_creates_binding():
    env = Environment()
    with pytest.raises(LoxRuntimeError, match='Undefined variable `a`.'):
        env.assign(name('a'), 1.0)
    assert env.scopes == [{}]


def test_scope_is_popped_when_block_fails():
    env = Environment()
    with pytest.raises(LoxRuntimeError):
        with env.scope():
            env.define('local', 1.0)
            env.get(name('missing'))
    assert env.depth == 1
    with pytest.raises(LoxRuntimeError):
        env.get(name('local'))
