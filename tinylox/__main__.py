"""CLI entry point for the tinylox interpreter.

Usage:
    python -m tinylox [-v|-vv|-vvv] [program_file]
    python -m tinylox [-v...] --emit-ast <program_file>
    python -m tinylox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive prompt is started; every line is
run on its own and bindings persist between lines. Debug information is
written to `debug.txt` in the current directory when verbosity is
greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import program_from_obj, program_to_obj
from .errors import LoxRuntimeError, ParseError
from .lox import Lox
from .parser import Parser
from .scanner import scan

EXIT_PARSE_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def exit_code(failure) -> int:
    if isinstance(failure, ParseError):
        return EXIT_PARSE_ERROR
    return EXIT_RUNTIME_ERROR


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='tinylox', description="tinylox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given source file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute; omit for a prompt')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        token_parser = Parser(scan(source))
        statements = token_parser.parse()
        if token_parser.errors:
            for err in token_parser.errors:
                err.report()
            sys.exit(EXIT_PARSE_ERROR)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    lox = Lox(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                statements = program_from_obj(json.load(f))
            try:
                lox.interpreter.interpret(statements)
            except LoxRuntimeError as e:
                e.report()
                sys.exit(EXIT_RUNTIME_ERROR)
            return

        if not args.program:
            lox.run_prompt()
            return

        failure = lox.run(read_source(Path(args.program)))
        if failure is not None:
            sys.exit(exit_code(failure))
    finally:
        lox.close()


if __name__ == '__main__':
    main()
