"""Abstract syntax tree definitions for Lox expressions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .position import WithSpan
from .token import Token


# Nodes own their children outright; spans live on the WithSpan wrappers.


#literal leaves keep the scanned token so numbers stay as raw lexemes
@dataclass(frozen=True, slots=True)
class Literal:
    token: Token


#prefix `-` and `!` applications, right-recursive in the grammar
@dataclass(frozen=True, slots=True)
class Unary:
    operator: WithSpan[Token]
    right: WithSpan["Expr"]


#binary operations store the operator token to dispatch evaluation
@dataclass(frozen=True, slots=True)
class Binary:
    operator: WithSpan[Token]
    left: WithSpan["Expr"]
    right: WithSpan["Expr"]


#parenthesized sub-expression with no semantics of its own
@dataclass(frozen=True, slots=True)
class Grouping:
    inner: WithSpan["Expr"]


Expr = Union[Literal, Unary, Binary, Grouping]

__all__ = ["Binary", "Expr", "Grouping", "Literal", "Unary"]
