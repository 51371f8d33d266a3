"""Textual renderings of Lox expression trees."""
from __future__ import annotations

from typing import List, Union

from . import ast
from .errors import InvariantError
from .position import WithSpan
from .token import Token, TokenType

ExprLike = Union[ast.Expr, WithSpan[ast.Expr]]


def _unwrap(expr: ExprLike) -> ast.Expr:
    if isinstance(expr, WithSpan):
        return expr.value
    return expr


def _leaf(token: Token) -> str:
    if token.type is TokenType.STRING:
        assert token.text is not None
        return token.text
    return token.lexeme


#outermost first; the last entry's left operand is not a Binary
def _left_spine(node: ast.Binary) -> List[ast.Binary]:
    spine = [node]
    while isinstance(spine[-1].left.value, ast.Binary):
        spine.append(spine[-1].left.value)
    return spine


#fully-parenthesized prefix form used by `lox parse`, e.g. (+ 1 (* 2 3))
def render(expr: ExprLike) -> str:
    node = _unwrap(expr)
    if isinstance(node, ast.Literal):
        return _leaf(node.token)
    if isinstance(node, ast.Unary):
        return f"({node.operator.value.lexeme} {render(node.right)})"
    if isinstance(node, ast.Binary):
        spine = _left_spine(node)
        text = render(spine[-1].left)
        for binary in reversed(spine):
            text = f"({binary.operator.value.lexeme} {text} {render(binary.right)})"
        return text
    if isinstance(node, ast.Grouping):
        return f"(group {render(node.inner)})"
    raise InvariantError(f"unexpected expression {node!r}")


#infix form the parser accepts again; groups keep their parentheses
def to_source(expr: ExprLike) -> str:
    node = _unwrap(expr)
    if isinstance(node, ast.Literal):
        return node.token.lexeme
    if isinstance(node, ast.Unary):
        return f"{node.operator.value.lexeme}{to_source(node.right)}"
    if isinstance(node, ast.Binary):
        spine = _left_spine(node)
        parts = [to_source(spine[-1].left)]
        for binary in reversed(spine):
            parts.append(binary.operator.value.lexeme)
            parts.append(to_source(binary.right))
        return " ".join(parts)
    if isinstance(node, ast.Grouping):
        return f"({to_source(node.inner)})"
    raise InvariantError(f"unexpected expression {node!r}")


__all__ = ["render", "to_source"]
