"""Lox: scanner, parser and evaluator for Lox expressions."""

#makes package exports explicit for downstream imports
from . import ast, cli, errors, interpreter, lexer, parser, position, printer, token

__all__ = [
    "ast",
    "cli",
    "errors",
    "interpreter",
    "lexer",
    "parser",
    "position",
    "printer",
    "token",
]
