"""Error taxonomy for the scanner, parser and evaluator."""
from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

from .position import Diagnostic, LineOffsets, Span

#frames available to the recursive parser and evaluator while they run
RECURSION_LIMIT = 10_000

NESTING_TOO_DEEP = "Expression nests too deeply."


#normalizes the base exception for every pipeline stage
class LoxError(Exception):
    """Base class for Lox-related errors."""


#shared shape for errors that surface a user diagnostic
class DiagnosticError(LoxError):
    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def span(self) -> Span:
        return self.diagnostic.span


#parser raises this on the first syntax error; no recovery is attempted
class ParseError(DiagnosticError):
    """Raised when the parser encounters an invalid construct."""


#evaluation halts with this at the first runtime type or arithmetic failure
class EvalError(DiagnosticError):
    """Raised when an expression cannot be evaluated."""


#signals a broken contract between stages rather than bad user input
class InvariantError(LoxError):
    """Raised when an internal assumption of the pipeline does not hold."""


#raises the interpreter recursion limit for one pipeline stage, never lowers it
@contextmanager
def recursion_headroom(limit: int = RECURSION_LIMIT) -> Iterator[None]:
    previous = sys.getrecursionlimit()
    if previous < limit:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


#renders a diagnostic the way the command line reports it
def format_diagnostic(diagnostic: Diagnostic, lines: LineOffsets) -> str:
    line = lines.line(diagnostic.span.end)
    return f"[line {line}] Error: {diagnostic.message}"


__all__ = [
    "DiagnosticError",
    "EvalError",
    "InvariantError",
    "LoxError",
    "NESTING_TOO_DEEP",
    "ParseError",
    "RECURSION_LIMIT",
    "format_diagnostic",
    "recursion_headroom",
]
