"""Token definitions for the Lox language."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Optional


#enumerates every lexical category produced by the scanner
class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals and identifiers
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


#fixed spellings for every token whose text never varies
FIXED_LEXEMES: Final[dict[TokenType, str]] = {
    TokenType.LEFT_PAREN: "(",
    TokenType.RIGHT_PAREN: ")",
    TokenType.LEFT_BRACE: "{",
    TokenType.RIGHT_BRACE: "}",
    TokenType.COMMA: ",",
    TokenType.DOT: ".",
    TokenType.MINUS: "-",
    TokenType.PLUS: "+",
    TokenType.SEMICOLON: ";",
    TokenType.SLASH: "/",
    TokenType.STAR: "*",
    TokenType.BANG: "!",
    TokenType.BANG_EQUAL: "!=",
    TokenType.EQUAL: "=",
    TokenType.EQUAL_EQUAL: "==",
    TokenType.GREATER: ">",
    TokenType.GREATER_EQUAL: ">=",
    TokenType.LESS: "<",
    TokenType.LESS_EQUAL: "<=",
    TokenType.EOF: "",
}

#punctuation the scanner can emit without any lookahead
SINGLE_CHAR_TOKENS: Final[dict[str, TokenType]] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

#normalized keyword lookup so the scanner can emit keyword tokens quickly
KEYWORDS: Final[dict[str, TokenType]] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

_KEYWORD_LEXEMES: Final[dict[TokenType, str]] = {kind: word for word, kind in KEYWORDS.items()}

_PAYLOAD_TYPES: Final[frozenset[TokenType]] = frozenset(
    {TokenType.IDENTIFIER, TokenType.STRING, TokenType.NUMBER}
)


#immutable token; only identifiers, strings and numbers carry a payload
@dataclass(frozen=True, slots=True)
class Token:
    """A scanned token.

    ``text`` holds the identifier name, the string contents without quotes,
    or the unparsed number lexeme. It is ``None`` for every other kind.
    """

    type: TokenType
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.type in _PAYLOAD_TYPES) != (self.text is not None):
            raise ValueError(f"{self.type.name} token payload mismatch: {self.text!r}")

    @classmethod
    def identifier(cls, name: str) -> Token:
        return cls(TokenType.IDENTIFIER, name)

    @classmethod
    def string(cls, contents: str) -> Token:
        return cls(TokenType.STRING, contents)

    @classmethod
    def number(cls, lexeme: str) -> Token:
        return cls(TokenType.NUMBER, lexeme)

    @property
    def lexeme(self) -> str:
        if self.type is TokenType.STRING:
            return f'"{self.text}"'
        if self.text is not None:
            return self.text
        if self.type in _KEYWORD_LEXEMES:
            return _KEYWORD_LEXEMES[self.type]
        return FIXED_LEXEMES[self.type]

    @property
    def literal(self) -> str:
        if self.type is TokenType.STRING:
            assert self.text is not None
            return self.text
        if self.type is TokenType.NUMBER:
            assert self.text is not None
            return repr(float(self.text))
        return "null"

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"


__all__ = ["FIXED_LEXEMES", "KEYWORDS", "SINGLE_CHAR_TOKENS", "Token", "TokenType"]
