"""Hand-written lexer for the unite DSL.

Tokenizes union declarations into a stream of Token objects.
No external dependencies: pure Python character scanning.
"""

from __future__ import annotations

from unite.core.types import Span, UniteSyntaxError
from unite.dsl.tokens import KEYWORDS, OPERATOR_CHARS, PUNCTUATION, Token, TokenKind


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


class LexerError(UniteSyntaxError):
    """Raised when the lexer encounters an invalid character sequence."""


class Lexer:
    """Tokenize unite DSL source text.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return all tokens including EOF."""
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            self._scan_token()

        self._tokens.append(Token(TokenKind.EOF, "", self._line, self._col, self._line, self._col))
        return self._tokens

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._peek()

        # Comments
        if ch == "#":
            self._scan_comment()
            return

        if ch in ('"', "'"):
            self._scan_string()
            return

        if ch.isdigit():
            self._scan_number()
            return

        # Identifiers / keywords
        if ch.isalpha() or ch == "_":
            self._scan_identifier()
            return

        # `==` is an operator, a lone `=` is punctuation
        if ch == "=" and self._peek_next() != "=":
            self._emit_single(TokenKind.EQUALS)
            return

        if ch in PUNCTUATION and ch != "=":
            self._emit_single(PUNCTUATION[ch])
            return

        if ch in OPERATOR_CHARS or ch == "=":
            self._scan_operator()
            return

        raise LexerError(
            f"Unexpected character: {ch!r}",
            Span(self._line, self._col, self._line, self._col + 1),
        )

    def _scan_comment(self) -> None:
        """Consume a # comment until end of line."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _scan_string(self) -> None:
        """Scan a single, double, or triple quoted string literal."""
        start_line, start_col, start_pos = self._line, self._col, self._pos
        quote = self._peek()
        triple = self._source.startswith(quote * 3, self._pos)
        delimiter = quote * 3 if triple else quote
        for _ in delimiter:
            self._advance()

        text = ""
        while not self._at_end():
            if self._source.startswith(delimiter, self._pos):
                for _ in delimiter:
                    self._advance()
                self._tokens.append(
                    Token(
                        TokenKind.STRING,
                        text,
                        start_line,
                        start_col,
                        self._line,
                        self._col,
                        self._source[start_pos : self._pos],
                    )
                )
                return
            ch = self._peek()
            if ch == "\\":
                self._advance()
                if self._at_end():
                    break
                escaped = self._advance()
                text += _ESCAPES.get(escaped, "\\" + escaped)
            else:
                if ch == "\n" and not triple:
                    raise LexerError(
                        "Unterminated string (newline before closing quote)",
                        Span(start_line, start_col, self._line, self._col),
                    )
                text += self._advance()

        raise LexerError(
            "Unterminated string (hit EOF)",
            Span(start_line, start_col, self._line, self._col),
        )

    def _scan_number(self) -> None:
        """Scan a numeric literal (int, float, hex, with optional exponent)."""
        start_line, start_col = self._line, self._col
        text = ""

        while not self._at_end() and (self._peek().isalnum() or self._peek() in "._"):
            ch = self._advance()
            text += ch
            # Scientific notation sign
            if ch in "eE" and not text.lower().startswith("0x") and self._peek() in "+-":
                text += self._advance()

        self._tokens.append(
            Token(TokenKind.NUMBER, text, start_line, start_col, self._line, self._col)
        )

    def _scan_identifier(self) -> None:
        """Scan an identifier or keyword."""
        start_line, start_col = self._line, self._col
        text = ""

        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            text += self._advance()

        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        self._tokens.append(Token(kind, text, start_line, start_col, self._line, self._col))

    def _scan_operator(self) -> None:
        """Scan a run of operator characters such as `->`, `**` or `==`."""
        start_line, start_col = self._line, self._col
        text = ""

        while not self._at_end() and (self._peek() in OPERATOR_CHARS or self._peek() == "="):
            text += self._advance()

        self._tokens.append(Token(TokenKind.OP, text, start_line, start_col, self._line, self._col))

    def _emit_single(self, kind: TokenKind) -> None:
        line, col = self._line, self._col
        ch = self._advance()
        self._tokens.append(Token(kind, ch, line, col, self._line, self._col))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self._source[self._pos]

    def _peek_next(self) -> str:
        if self._pos + 1 >= len(self._source):
            return "\0"
        return self._source[self._pos + 1]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs, carriage returns, and newlines."""
        while not self._at_end() and self._peek() in (" ", "\t", "\r", "\n"):
            self._advance()
