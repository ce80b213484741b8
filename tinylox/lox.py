"""Session object tying the scanner, parser and interpreter together.

`Lox.run` is the single entry point for source text: scan, parse,
reject a parse that left tokens behind, then execute. A session keeps
one interpreter for its whole life so that bindings made by one `run`
call are visible to the next, which is what the interactive prompt
relies on.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from .errors import LoxRuntimeError, ParseError
from .interpreter import Interpreter
from .parser import Parser
from .scanner import report_invalid, scan
from .tokens import Token

Failure = Union[ParseError, LoxRuntimeError]

PROMPT = '>>> '


class Lox:
    def __init__(self, output: Optional[TextIO] = None, errors: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.errors = errors
        self.interpreter = Interpreter(output=output, debug_level=debug_level,
                                       debug_file=debug_file)
        self.had_error = False

    @property
    def error_stream(self) -> TextIO:
        return self.errors if self.errors is not None else sys.stderr

    def report_invalid(self, token: Token):
        report_invalid(token, self.error_stream)

    def run(self, source: str) -> Optional[Failure]:
        """Run source text and return the first failure, or None on success.

        Statements recovered around a malformed one are still executed;
        the parse error is reported and returned afterwards.
        """
        tokens = scan(source, report=self.report_invalid)
        parser = Parser(tokens)
        statements = parser.parse()
        for err in parser.errors:
            err.report(self.error_stream)
        failure: Optional[Failure] = parser.errors[0] if parser.errors else None
        # parse() runs to EOF; this rejects a parser that stopped short
        if not parser.all_parsed():
            err = ParseError('not all tokens were parsed')
            err.report(self.error_stream)
            self.had_error = True
            return failure or err
        try:
            self.interpreter.interpret(statements)
        except LoxRuntimeError as e:
            e.report(self.error_stream)
            failure = failure or e
        if failure is not None:
            self.had_error = True
        return failure

    def run_file(self, path: Union[str, Path]) -> Optional[Failure]:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.run(source)

    def run_prompt(self, lines: Optional[Iterable[str]] = None):
        """Read-eval-print loop; each line is run on its own.

        Lines come from `lines` when given, otherwise from `input()`
        until end of input.
        """
        if lines is not None:
            for line in lines:
                self.run(line)
            return
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                print()
                return
            self.run(line)

    def close(self):
        self.interpreter.close()
