"""unite DSL: tokenizer and parser for union declarations.

Usage:
    from unite.dsl import Lexer, Parser

    tokens = Lexer(source).tokenize()
    union_spec = Parser(tokens).parse()
"""

from unite.dsl.lexer import Lexer, LexerError
from unite.dsl.parser import ParseError, Parser, parse

__all__ = [
    "Lexer",
    "LexerError",
    "ParseError",
    "Parser",
    "parse",
]
