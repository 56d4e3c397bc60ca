"""Token types for the unite DSL lexer.

Defines all token kinds and the Token dataclass used by the lexer and parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from unite.core.types import Span


class TokenKind(Enum):
    """All token types recognized by the unite lexer."""

    # Literals
    STRING = auto()  # "quoted string", '...', """..."""
    NUMBER = auto()  # 42, 0.5, 1e-5, 0xFF
    IDENTIFIER = auto()  # unquoted name

    # Keywords
    ENUM = auto()  # enum
    PUB = auto()  # pub

    # Punctuation
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COMMA = auto()  # ,
    DOT = auto()  # .
    EQUALS = auto()  # =
    AT = auto()  # @
    OP = auto()  # any other operator run, only meaningful inside decorator arguments

    # Special
    EOF = auto()


# Map keyword strings to token kinds
KEYWORDS: dict[str, TokenKind] = {
    "enum": TokenKind.ENUM,
    "pub": TokenKind.PUB,
}

PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "=": TokenKind.EQUALS,
    "@": TokenKind.AT,
}

OPERATOR_CHARS = frozenset("+-*/%<>|&^~:!")


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer.

    ``value`` is the decoded value (string contents for STRING tokens),
    ``text`` is the raw lexeme as written in the source.
    """

    kind: TokenKind
    value: str
    line: int
    column: int
    end_line: int
    end_column: int
    text: str = ""

    @property
    def span(self) -> Span:
        return Span(self.line, self.column, self.end_line, self.end_column)

    @property
    def lexeme(self) -> str:
        return self.text or self.value

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, L{self.line}:{self.column})"
