"""Hand-written recursive descent parser for the unite DSL.

Consumes a list of Token objects from the lexer and produces a UnionSpec.
No external parsing libraries used.
"""

from __future__ import annotations

import keyword

from unite.core.types import Span, UniteSyntaxError, Visibility
from unite.dsl.ast_nodes import (
    Attribute,
    Decorator,
    DocComment,
    ExplicitType,
    ImplicitSameName,
    NamedType,
    TupleType,
    TypeRef,
    UnionSpec,
    VariantSpec,
)
from unite.dsl.lexer import Lexer
from unite.dsl.tokens import Token, TokenKind


_CLOSERS = {
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LBRACE: TokenKind.RBRACE,
}
_TIGHT_BEFORE = {
    TokenKind.RPAREN,
    TokenKind.RBRACKET,
    TokenKind.RBRACE,
    TokenKind.COMMA,
    TokenKind.DOT,
}
_TIGHT_AFTER = {TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE, TokenKind.DOT}
_CALLABLE = {TokenKind.IDENTIFIER, TokenKind.RPAREN, TokenKind.RBRACKET, TokenKind.STRING}
_UNARY_AFTER = {
    TokenKind.LPAREN,
    TokenKind.LBRACKET,
    TokenKind.LBRACE,
    TokenKind.COMMA,
    TokenKind.EQUALS,
    TokenKind.OP,
}
_STRING_PREFIXES = {"r", "u", "b", "f", "br", "rb", "fr", "rf"}


class ParseError(UniteSyntaxError):
    """Raised when the parser encounters an unexpected token."""

    def __init__(self, message: str, token: Token) -> None:
        self.token = token
        super().__init__(message, token.span)


def parse(source: str) -> UnionSpec:
    """Lex and parse DSL source text into a UnionSpec."""
    return Parser(Lexer(source).tokenize()).parse()


class Parser:
    """Parse a unite token stream into a UnionSpec.

    Usage:
        parser = Parser(tokens)
        union_spec = parser.parse()
    """

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def parse(self) -> UnionSpec:
        """Parse the full token stream into a UnionSpec.

        The stream must hold exactly one declaration followed by EOF.
        """
        start = self._current()
        attributes = self._parse_attributes()
        visibility = self._parse_visibility()
        self._consume(TokenKind.ENUM, "Expected 'enum'")
        name = self._consume_identifier("Expected union name")

        self._consume(TokenKind.LBRACE, "Expected '{' after union name")
        variants = self._parse_variants()
        end = self._consume(TokenKind.RBRACE, "Expected '}' to close variant list")

        if not self._at_end():
            raise ParseError(
                f"Unexpected trailing token after '}}': {self._current().kind.name}",
                self._current(),
            )

        return UnionSpec(
            name=name.value,
            variants=tuple(variants),
            attributes=attributes,
            visibility=visibility,
            span=Span(start.line, start.column, end.end_line, end.end_column),
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_visibility(self) -> Visibility:
        if self._check(TokenKind.PUB):
            self._advance()
            return Visibility.PUBLIC
        return Visibility.PRIVATE

    def _parse_variants(self) -> list[VariantSpec]:
        """Parse a comma-separated variant list; a trailing comma is allowed."""
        variants: list[VariantSpec] = []

        while not self._check(TokenKind.RBRACE) and not self._at_end():
            variants.append(self._parse_variant())
            if self._check(TokenKind.COMMA):
                self._advance()
                continue
            if not self._check(TokenKind.RBRACE) and not self._at_end():
                raise ParseError(
                    f"Expected ',' or '}}' after variant, got {self._current().kind.name}",
                    self._current(),
                )

        return variants

    def _parse_variant(self) -> VariantSpec:
        start = self._current()
        attributes = self._parse_attributes()
        name = self._consume_identifier("Expected variant name")
        # dunder names belong to the union class, other `__x` names get mangled
        if name.value.startswith("__"):
            raise ParseError(
                f"Variant name '{name.value}' is reserved, it starts with '__'",
                name,
            )

        if self._check(TokenKind.EQUALS):
            self._advance()
            payload = ExplicitType(self._parse_type("Expected type after '='"))
        else:
            payload = ImplicitSameName()

        end = self._tokens[self._pos - 1]
        return VariantSpec(
            name=name.value,
            payload=payload,
            attributes=attributes,
            span=Span(start.line, start.column, end.end_line, end.end_column),
        )

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_attributes(self) -> tuple[Attribute, ...]:
        """Parse zero or more `@decorator` or docstring attributes."""
        attributes: list[Attribute] = []

        while True:
            token = self._current()
            if token.kind == TokenKind.STRING:
                self._advance()
                attributes.append(DocComment(token.value, token.span))
            elif token.kind == TokenKind.AT:
                attributes.append(self._parse_decorator())
            else:
                return tuple(attributes)

    def _parse_decorator(self) -> Decorator:
        """Parse `@dotted.name` followed by any number of `(...)` / `[...]` trailers."""
        at = self._consume(TokenKind.AT, "Expected '@'")
        parts = [self._consume_identifier("Expected decorator name after '@'")]
        while self._check(TokenKind.DOT):
            parts.append(self._advance())
            parts.append(self._consume_identifier("Expected identifier after '.'"))

        while self._check(TokenKind.LPAREN) or self._check(TokenKind.LBRACKET):
            parts.extend(self._parse_balanced())

        end = parts[-1]
        return Decorator(
            _join_lexemes(parts),
            Span(at.line, at.column, end.end_line, end.end_column),
        )

    def _parse_balanced(self) -> list[Token]:
        """Collect an opening bracket, everything up to its match, and the match."""
        opener = self._advance()
        collected = [opener]
        stack = [opener]

        while stack:
            token = self._current()
            if token.kind == TokenKind.EOF:
                raise ParseError(f"Unterminated '{stack[-1].value}' in decorator", stack[-1])
            if token.kind in _CLOSERS:
                stack.append(token)
            elif token.kind in _CLOSERS.values():
                if token.kind != _CLOSERS[stack[-1].kind]:
                    raise ParseError(
                        f"Mismatched '{token.value}' for '{stack[-1].value}' in decorator",
                        token,
                    )
                stack.pop()
            collected.append(self._advance())

        return collected

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _parse_type(self, message: str) -> TypeRef:
        token = self._current()

        if token.kind == TokenKind.LPAREN:
            self._advance()
            elements: list[TypeRef] = []
            comma = False
            while not self._check(TokenKind.RPAREN):
                elements.append(self._parse_type("Expected type in tuple"))
                if not self._check(TokenKind.COMMA):
                    break
                self._advance()
                comma = True
            self._consume(TokenKind.RPAREN, "Expected ')' to close tuple type")
            # `(T)` groups, `(T,)` is a 1-tuple
            if len(elements) == 1 and not comma:
                return elements[0]
            return TupleType(tuple(elements))

        if token.kind != TokenKind.IDENTIFIER:
            raise ParseError(f"{message} (got {token.kind.name}: {token.value!r})", token)

        if token.value == "None":
            self._advance()
            return NamedType(("None",))

        path = [self._consume_identifier(message).value]
        while self._check(TokenKind.DOT):
            self._advance()
            path.append(self._consume_identifier("Expected identifier after '.'").value)

        args: tuple[TypeRef, ...] | None = None
        if self._check(TokenKind.LBRACKET):
            self._advance()
            items = [self._parse_type("Expected type argument")]
            while self._check(TokenKind.COMMA):
                self._advance()
                if self._check(TokenKind.RBRACKET):
                    break  # trailing comma
                items.append(self._parse_type("Expected type argument"))
            self._consume(TokenKind.RBRACKET, "Expected ']' to close type arguments")
            args = tuple(items)

        return NamedType(tuple(path), args)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self._pos >= len(self._tokens):
            last = self._tokens[-1] if self._tokens else None
            line, col = (last.end_line, last.end_column) if last else (1, 1)
            return Token(TokenKind.EOF, "", line, col, line, col)
        return self._tokens[self._pos]

    def _at_end(self) -> bool:
        return self._current().kind == TokenKind.EOF

    def _check(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        token = self._current()
        if not self._at_end():
            self._pos += 1
        return token

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        raise ParseError(
            f"{message} (got {self._current().kind.name}: {self._current().value!r})",
            self._current(),
        )

    def _consume_identifier(self, message: str) -> Token:
        token = self._consume(TokenKind.IDENTIFIER, message)
        if keyword.iskeyword(token.value) or not token.value.isidentifier():
            raise ParseError(f"{message}, '{token.value}' is not a valid identifier", token)
        return token


def _join_lexemes(tokens: list[Token]) -> str:
    """Rebuild expression text from tokens, PEP 8 spacing where it matters."""
    out = ""
    depth = 0
    prev: Token | None = None
    unary = False

    for token in tokens:
        if prev is not None:
            tight = (
                token.kind in _TIGHT_BEFORE
                or (token.kind == TokenKind.OP and token.value == ":")
                or prev.kind in _TIGHT_AFTER
                or (token.kind in (TokenKind.LPAREN, TokenKind.LBRACKET) and prev.kind in _CALLABLE)
                or (depth > 0 and TokenKind.EQUALS in (token.kind, prev.kind))
                or unary
                or _is_string_prefix(prev, token)
            )
            if not tight:
                out += " "
        out += token.lexeme
        if token.kind in _CLOSERS:
            depth += 1
        elif token.kind in _CLOSERS.values():
            depth -= 1
        unary = (
            token.kind == TokenKind.OP
            and token.value in ("-", "+")
            and (prev is None or prev.kind in _UNARY_AFTER)
        )
        prev = token

    return out


def _is_string_prefix(prev: Token, token: Token) -> bool:
    return (
        token.kind == TokenKind.STRING
        and prev.kind == TokenKind.IDENTIFIER
        and prev.value.lower() in _STRING_PREFIXES
        and prev.end_line == token.line
        and prev.end_column == token.column
    )
