"""Parser that turns Lox tokens into a spanned expression tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from . import ast
from .errors import NESTING_TOO_DEEP, InvariantError, ParseError, recursion_headroom
from .position import Diagnostic, Span, WithSpan
from .token import Token, TokenType

SpannedExpr = WithSpan[ast.Expr]

_LITERAL_TYPES = (
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NIL,
)


#navigates the token stream via recursive descent
@dataclass(slots=True)
class Parser:
    tokens: List[WithSpan[Token]]
    diagnostics: List[Diagnostic] = field(init=False, default_factory=list)
    _current: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self._current = 0

    def parse(self) -> SpannedExpr:
        """Parse a single expression.

        Raises ``ParseError`` on the first syntax error; the same diagnostic
        is left in ``diagnostics`` for callers that report in bulk.
        """

        with recursion_headroom():
            try:
                return self._expression()
            except RecursionError:
                raise self._error(NESTING_TOO_DEEP, self._peek().span) from None

    # Expressions ---------------------------------------------------------------

    def _expression(self) -> SpannedExpr:
        return self._equality()

    def _equality(self) -> SpannedExpr:
        return self._left_assoc(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> SpannedExpr:
        return self._left_assoc(
            self._term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _term(self) -> SpannedExpr:
        return self._left_assoc(self._factor, TokenType.PLUS, TokenType.MINUS)

    def _factor(self) -> SpannedExpr:
        return self._left_assoc(self._unary, TokenType.SLASH, TokenType.STAR)

    #folds `operand (op operand)*` into a left-leaning chain of Binary nodes
    def _left_assoc(self, operand: Callable[[], SpannedExpr], *operators: TokenType) -> SpannedExpr:
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            right = operand()
            span = expr.span.merge(right.span)
            expr = WithSpan(ast.Binary(operator=operator, left=expr, right=right), span)
        return expr

    #right-recursive so `--x` and `!!x` nest naturally
    def _unary(self) -> SpannedExpr:
        if self._match(TokenType.MINUS, TokenType.BANG):
            operator = self._previous()
            right = self._unary()
            span = operator.span.merge(right.span)
            return WithSpan(ast.Unary(operator=operator, right=right), span)
        return self._primary()

    #literals and parenthesized groups; anything else is a syntax error
    def _primary(self) -> SpannedExpr:
        if self._match(*_LITERAL_TYPES):
            token = self._previous()
            return WithSpan(ast.Literal(token.value), token.span)
        if self._match(TokenType.LEFT_PAREN):
            open_paren = self._previous()
            inner = self._expression()
            if not self._match(TokenType.RIGHT_PAREN):
                raise self._error("Unmatched parentheses.", inner.span)
            close_paren = self._previous()
            span = open_paren.span.merge(close_paren.span)
            return WithSpan(ast.Grouping(inner), span)
        raise self._error("Expected expression.", self._peek().span)

    # Utilities ----------------------------------------------------------------

    #records the diagnostic and hands back the exception for the caller to raise
    def _error(self, message: str, span: Span) -> ParseError:
        diagnostic = Diagnostic(message=message, span=span)
        self.diagnostics.append(diagnostic)
        return ParseError(diagnostic)

    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().value.type is token_type

    def _advance(self) -> WithSpan[Token]:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    #EOF tokens guard termination
    def _is_at_end(self) -> bool:
        return self._peek().value.type is TokenType.EOF

    def _peek(self) -> WithSpan[Token]:
        if self._current >= len(self.tokens):
            raise InvariantError("token stream is not terminated by EOF")
        return self.tokens[self._current]

    def _previous(self) -> WithSpan[Token]:
        return self.tokens[self._current - 1]


#parses a token list, raising ParseError on the first syntax error
def parse(tokens: List[WithSpan[Token]]) -> SpannedExpr:
    return Parser(tokens).parse()


__all__ = ["Parser", "SpannedExpr", "parse"]
