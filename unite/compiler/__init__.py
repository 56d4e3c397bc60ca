"""unite compiler: turns a parsed UnionSpec into Python declarations.

Usage:
    from unite.compiler import generate, render

    declarations = generate(union_spec)
    source = render(declarations)
"""

from unite.compiler.emitter import render
from unite.compiler.generator import accessor_methods, conversions, generate, type_declaration
from unite.compiler.naming import split_words, to_snake_case
from unite.compiler.serializer import serialize_to_dict, serialize_to_json

__all__ = [
    "accessor_methods",
    "conversions",
    "generate",
    "render",
    "serialize_to_dict",
    "serialize_to_json",
    "split_words",
    "to_snake_case",
    "type_declaration",
]
