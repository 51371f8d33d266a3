"""Lexical analysis for the Lox language."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .position import BytePos, Diagnostic, Span, WithSpan
from .token import KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


#transforms raw characters into a stream of spanned tokens consumed by the parser
@dataclass(slots=True)
class Scanner:
    """Single-pass scanner that collects diagnostics instead of stopping.

    Positions are byte offsets, so a multi-byte character advances the
    cursor by its UTF-8 width.
    """

    source: str
    _length: int = field(init=False)
    _index: int = field(init=False, default=0)
    _pos: BytePos = field(init=False, default_factory=BytePos)
    _diagnostics: List[Diagnostic] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._length = len(self.source)

    def scan(self) -> List[WithSpan[Token]]:
        tokens: List[WithSpan[Token]] = []
        while not self._is_at_end():
            start = self._pos
            char = self._advance()
            token = self._scan_token(char, start)
            if token is not None:
                tokens.append(WithSpan(token, Span(start, self._pos)))
        tokens.append(WithSpan(Token(TokenType.EOF), Span(self._pos, self._pos)))
        return tokens

    def has_errors(self) -> bool:
        return bool(self._diagnostics)

    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    #returns None for skipped input and for characters that produced a diagnostic
    def _scan_token(self, char: str, start: BytePos) -> Token | None:
        match char:
            case " " | "\t" | "\r" | "\n":
                return None
            case '"':
                return self._string(start)
            case "/":
                if self._match("/"):
                    self._line_comment()
                    return None
                return Token(TokenType.SLASH)
            case "!":
                return self._either("=", TokenType.BANG_EQUAL, TokenType.BANG)
            case "=":
                return self._either("=", TokenType.EQUAL_EQUAL, TokenType.EQUAL)
            case "<":
                return self._either("=", TokenType.LESS_EQUAL, TokenType.LESS)
            case ">":
                return self._either("=", TokenType.GREATER_EQUAL, TokenType.GREATER)
            case _ if _is_digit(char):
                return self._number(char)
            case _ if char.isalpha() or char == "_":
                return self._identifier(char)
            case _:
                token_type = SINGLE_CHAR_TOKENS.get(char)
                if token_type is not None:
                    return Token(token_type)
                self._error(f"Unexpected character: {char}", start)
                return None

    # Internal helpers -------------------------------------------------

    def _is_at_end(self) -> bool:
        return self._index >= self._length

    def _advance(self) -> str:
        char = self.source[self._index]
        self._index += 1
        self._pos = self._pos.shift(char)
        return char

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self._index]

    def _peek_next(self) -> str:
        if self._index + 1 >= self._length:
            return "\0"
        return self.source[self._index + 1]

    def _match(self, expected: str) -> bool:
        if self._is_at_end():
            return False
        if self.source[self._index] != expected:
            return False
        self._advance()
        return True

    #one-character lookahead choosing between the two-char and one-char operator
    def _either(self, expected: str, matched: TokenType, unmatched: TokenType) -> Token:
        if self._match(expected):
            return Token(matched)
        return Token(unmatched)

    def _consume_while(self, predicate) -> str:
        start_index = self._index
        while not self._is_at_end() and predicate(self._peek()):
            self._advance()
        return self.source[start_index:self._index]

    def _error(self, message: str, start: BytePos) -> None:
        self._diagnostics.append(Diagnostic.at(message, start, self._pos))

    #string contents exclude the quotes; an unterminated string emits no token
    def _string(self, start: BytePos) -> Token | None:
        contents = self._consume_while(lambda char: char != '"')
        if self._is_at_end():
            self._error("Unterminated String", start)
            return None
        self._advance()  # closing quote
        return Token.string(contents)

    #the dot is only part of the number when a digit follows it
    def _number(self, first_char: str) -> Token:
        lexeme = first_char + self._consume_while(_is_digit)
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            lexeme += "." + self._consume_while(_is_digit)
        return Token.number(lexeme)

    def _identifier(self, first_char: str) -> Token:
        name = first_char + self._consume_while(lambda char: char.isalnum() or char == "_")
        token_type = KEYWORDS.get(name)
        if token_type is not None:
            return Token(token_type)
        return Token.identifier(name)

    def _line_comment(self) -> None:
        self._consume_while(lambda char: char != "\n")


#convenience wrapper used by the CLI and tests
def scan(source: str) -> tuple[List[WithSpan[Token]], List[Diagnostic]]:
    scanner = Scanner(source)
    tokens = scanner.scan()
    return tokens, scanner.diagnostics()


__all__ = ["Scanner", "scan"]
