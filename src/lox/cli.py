"""Command-line entry point for Lox."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from .errors import EvalError, ParseError, format_diagnostic, recursion_headroom
from .interpreter import Evaluator, stringify
from .lexer import scan
from .parser import Parser
from .position import Diagnostic, LineOffsets
from .printer import render

EXIT_OK = 0
EXIT_DATA_ERROR = 65
EXIT_RUNTIME_ERROR = 70


#unreadable files are reported and then treated as empty input
def read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        print(f"Failed to read file {path}", file=sys.stderr)
        return ""


def report(diagnostics: Iterable[Diagnostic], source: str) -> None:
    lines = LineOffsets.from_text(source)
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic, lines), file=sys.stderr)


#handles the `lox tokenize` subcommand
def cmd_tokenize(args: argparse.Namespace) -> int:
    source = read_source(args.source)
    tokens, diagnostics = scan(source)
    for token in tokens:
        print(token.value)
    report(diagnostics, source)
    return EXIT_DATA_ERROR if diagnostics else EXIT_OK


#handles the `lox parse` subcommand
def cmd_parse(args: argparse.Namespace) -> int:
    source = read_source(args.source)
    if not source:
        return EXIT_OK
    tokens, diagnostics = scan(source)
    report(diagnostics, source)
    exit_code = EXIT_DATA_ERROR if diagnostics else EXIT_OK
    parser = Parser(tokens)
    try:
        expr = parser.parse()
    except ParseError:
        report(parser.diagnostics, source)
        return EXIT_DATA_ERROR
    with recursion_headroom():
        print(render(expr))
    return exit_code


#parses then evaluates, optionally tracing every evaluated node
def cmd_evaluate(args: argparse.Namespace) -> int:
    source = read_source(args.source)
    if not source:
        return EXIT_OK
    tokens, diagnostics = scan(source)
    report(diagnostics, source)
    exit_code = EXIT_DATA_ERROR if diagnostics else EXIT_OK
    parser = Parser(tokens)
    try:
        expr = parser.parse()
    except ParseError:
        report(parser.diagnostics, source)
        return EXIT_DATA_ERROR
    try:
        value = Evaluator(trace=args.trace).evaluate(expr)
    except EvalError as exc:
        report([exc.diagnostic], source)
        return max(exit_code, EXIT_RUNTIME_ERROR)
    print(stringify(value))
    return exit_code


#configures the CLI surface across tokenize/parse/evaluate
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lox", description="Lox expression tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_tokenize = subparsers.add_parser("tokenize", help="print the token stream of a source file")
    p_tokenize.add_argument("source", help="path to source file")
    p_tokenize.set_defaults(func=cmd_tokenize)

    p_parse = subparsers.add_parser("parse", help="print the parsed expression tree")
    p_parse.add_argument("source", help="path to source file")
    p_parse.set_defaults(func=cmd_parse)

    p_evaluate = subparsers.add_parser("evaluate", help="evaluate the expression and print its value")
    p_evaluate.add_argument("source", help="path to source file")
    p_evaluate.add_argument("--trace", action="store_true", help="print each evaluated node")
    p_evaluate.set_defaults(func=cmd_evaluate)

    return parser


#entry point used by both console script and module execution
def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
