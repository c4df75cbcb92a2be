import argparse
import sys
from pathlib import Path
from typing import TextIO

from rill.debug import debug_ast, debug_tokens, format_header
from rill.errors import LexError, ParseError, RillRuntimeError
from rill.interpreter import Interpreter
from rill.parser import Parser
from rill.scanner import Scanner

# Each parenthesized level costs about a dozen parser frames.
RECURSION_LIMIT = 5000


def run(
    source: str,
    dump_tokens: bool = False,
    dump_ast: bool = False,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Scan, parse and interpret source text, returning the process exit status."""
    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    color = err.isatty()

    try:
        tokens = Scanner().tokenize(source)
    except LexError as e:
        print(f"Lexer error: {e.message}", file=err)
        return 1

    if dump_tokens:
        print(format_header("Tokens", color=color), file=err)
        print(debug_tokens(tokens), file=err)

    try:
        program = Parser().parse(tokens)
    except ParseError as e:
        print(f"Parser error: {e.message}", file=err)
        return 1

    if dump_ast:
        print(format_header("AST", color=color), file=err)
        print(debug_ast(program), file=err)

    try:
        Interpreter(out=out).interpret(program)
    except RillRuntimeError as e:
        out.flush()
        print(f"Runtime error: {e.message}", file=err)
        return 1

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="rill",
        description="Rill scripting language interpreter"
    )
    parser.add_argument(
        "source_file",
        type=Path,
        help="Source file to run (e.g. example.rill)"
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token stream to stderr before running"
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        help="Print the abstract syntax tree as JSON to stderr before running"
    )
    args = parser.parse_args()

    try:
        source = args.source_file.read_text()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading source file: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run(source, dump_tokens=args.tokens, dump_ast=args.ast))


if __name__ == "__main__":
    main()
