"""unite: compose existing types into a tagged union.

Usage:
    from unite import unite

    unite('enum Number { Whole = int, Ratio = float }')
    value = Number(3)
    value.as_whole()  # -> 3
"""

from unite.compiler import generate, render
from unite.core.types import UniteSyntaxError
from unite.dsl import LexerError, ParseError, parse
from unite.macro import expand, unite
from unite.runtime import (
    PayloadRef,
    TaggedUnion,
    assign,
    discriminant_of,
    from_value,
    register_conversion,
    tag_of,
)

__version__ = "0.1.0"

__all__ = [
    "LexerError",
    "ParseError",
    "PayloadRef",
    "TaggedUnion",
    "UniteSyntaxError",
    "assign",
    "discriminant_of",
    "expand",
    "from_value",
    "generate",
    "parse",
    "register_conversion",
    "render",
    "tag_of",
    "unite",
]
