"""Tree-walking evaluator for Lox expressions."""
from __future__ import annotations

import math
import operator
from typing import Callable, Union

from . import ast
from .errors import NESTING_TOO_DEEP, EvalError, InvariantError, recursion_headroom
from .position import Diagnostic, Span, WithSpan
from .token import Token, TokenType

# nil is None; booleans, numbers and strings map onto bool, float and str.
Value = Union[None, bool, float, str]

_COMPARISONS: dict[TokenType, Callable[[float, float], bool]] = {
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}


def _is_number(value: Value) -> bool:
    return isinstance(value, float)


#nil and false are falsy; every number and string is truthy, zero included
def is_truthy(value: Value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


#equality never crosses variants, so 1 == "1" and true == 1 are both false
def is_equal(left: Value, right: Value) -> bool:
    if type(left) is not type(right):
        return False
    return left == right


#textual form printed by `lox evaluate`
def stringify(value: Value) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return f"{value:.0f}"
        return repr(value)
    return value


#walks the spanned tree top-down and stops at the first runtime error
class Evaluator:
    def __init__(self, trace: bool = False) -> None:
        self.trace = trace

    def evaluate(self, expr: WithSpan[ast.Expr]) -> Value:
        with recursion_headroom():
            try:
                return self._evaluate(expr)
            except RecursionError:
                raise self._error(NESTING_TOO_DEEP, expr.span) from None

    def _evaluate(self, expr: WithSpan[ast.Expr]) -> Value:
        node = expr.value
        if isinstance(node, ast.Literal):
            value = self._literal(node.token)
        elif isinstance(node, ast.Grouping):
            value = self._evaluate(node.inner)
        elif isinstance(node, ast.Unary):
            value = self._unary(node)
        elif isinstance(node, ast.Binary):
            value = self._binary(node)
        else:
            raise InvariantError(f"unexpected expression {node!r}")
        if self.trace:
            self._trace(node, value)
        return value

    # Helpers -----------------------------------------------------------------

    def _trace(self, node: ast.Expr, value: Value) -> None:
        detail = ""
        if isinstance(node, (ast.Unary, ast.Binary)):
            detail = f" op={node.operator.value.lexeme}"
        self._log(f"node={type(node).__name__}{detail} value={stringify(value)}")

    def _log(self, message: str) -> None:
        print(f"[trace] {message}")

    #the scanner only emits digit sequences, so a failed conversion is a bug
    def _literal(self, token: Token) -> Value:
        if token.type is TokenType.NUMBER:
            assert token.text is not None
            try:
                return float(token.text)
            except ValueError as exc:
                raise InvariantError(f"malformed number lexeme {token.text!r}") from exc
        if token.type is TokenType.STRING:
            return token.text
        if token.type is TokenType.TRUE:
            return True
        if token.type is TokenType.FALSE:
            return False
        return None

    def _unary(self, node: ast.Unary) -> Value:
        right = self._evaluate(node.right)
        op = node.operator
        if op.value.type is TokenType.MINUS:
            if not _is_number(right):
                raise self._error(f"Operand {op.value.lexeme} must be a number.", op.span)
            return -right
        if op.value.type is TokenType.BANG:
            return not is_truthy(right)
        raise self._error("Invalid operator", op.span)

    #folds a left-leaning chain bottom-up so long sums do not recurse per operand
    def _binary(self, node: ast.Binary) -> Value:
        spine = [node]
        while isinstance(spine[-1].left.value, ast.Binary):
            spine.append(spine[-1].left.value)
        value = self._evaluate(spine[-1].left)
        for binary in reversed(spine):
            value = self._apply(binary, value, self._evaluate(binary.right))
            if self.trace and binary is not node:
                self._trace(binary, value)
        return value

    #both operands are always evaluated, left first; there is no short-circuit
    def _apply(self, node: ast.Binary, left: Value, right: Value) -> Value:
        op_type = node.operator.value.type
        span = Span.union(node.left.span, node.right.span)

        if op_type is TokenType.PLUS:
            if _is_number(left) and _is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise self._error("Operands must be two numbers or two strings.", span)
        if op_type is TokenType.MINUS:
            self._require_numbers(left, right, span)
            return left - right
        if op_type is TokenType.STAR:
            self._require_numbers(left, right, span)
            return left * right
        if op_type is TokenType.SLASH:
            self._require_numbers(left, right, span)
            return self._safe_div(left, right, span)
        if op_type in _COMPARISONS:
            self._require_numbers(left, right, span)
            return _COMPARISONS[op_type](left, right)
        if op_type is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op_type is TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        raise self._error("Invalid operator", node.operator.span)

    def _require_numbers(self, left: Value, right: Value, span: Span) -> None:
        if not (_is_number(left) and _is_number(right)):
            raise self._error("Operands must be numbers.", span)

    #division with an explicit zero guard ahead of the float division
    def _safe_div(self, left: float, right: float, span: Span) -> float:
        if right == 0.0:
            raise self._error("Divide by zero.", span)
        return left / right

    def _error(self, message: str, span: Span) -> EvalError:
        return EvalError(Diagnostic(message=message, span=span))


#evaluates a parsed expression with a fresh evaluator
def evaluate(expr: WithSpan[ast.Expr], trace: bool = False) -> Value:
    return Evaluator(trace=trace).evaluate(expr)


__all__ = ["Evaluator", "Value", "evaluate", "is_equal", "is_truthy", "stringify"]
