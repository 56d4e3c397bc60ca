"""AST node definitions for the unite DSL.

These dataclasses form the model produced by the parser:

    UnionSpec
      -> attributes (decorators, docstrings)
      -> visibility
      -> name
      -> variants
          -> attributes
          -> name
          -> payload (explicit type or same-named type)
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field

from unite.core.types import Span, Visibility


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Decorator:
    """An `@expression` attribute, kept as verbatim expression text."""

    expression: str
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class DocComment:
    """A string literal attribute that becomes a docstring."""

    text: str
    span: Span | None = field(default=None, compare=False)


Attribute = Decorator | DocComment


def decorators_of(attributes: tuple[Attribute, ...]) -> list[str]:
    """Return decorator expressions in declaration order."""
    return [a.expression for a in attributes if isinstance(a, Decorator)]


def doc_of(attributes: tuple[Attribute, ...]) -> str:
    """Join all docstring attributes, one per line, in declaration order."""
    return "\n".join(inspect.cleandoc(a.text) for a in attributes if isinstance(a, DocComment))


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedType:
    """A dotted type path with optional subscript arguments, e.g. `list[int]`."""

    path: tuple[str, ...]
    args: tuple[TypeRef, ...] | None = None

    def render(self) -> str:
        base = ".".join(self.path)
        if self.args is None:
            return base
        return f"{base}[{', '.join(a.render() for a in self.args)}]"


@dataclass(frozen=True)
class TupleType:
    """A parenthesised tuple type; `()` is the unit type."""

    elements: tuple[TypeRef, ...] = ()

    def render(self) -> str:
        if not self.elements:
            return "tuple[()]"
        return f"tuple[{', '.join(e.render() for e in self.elements)}]"


TypeRef = NamedType | TupleType


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExplicitType:
    """`Variant = Type`: the payload type is spelled out."""

    type_ref: TypeRef


@dataclass(frozen=True)
class ImplicitSameName:
    """`Variant`: the payload type has the same name as the variant."""


Payload = ExplicitType | ImplicitSameName


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VariantSpec:
    """One case of the union."""

    name: str
    payload: Payload = field(default_factory=ImplicitSameName)
    attributes: tuple[Attribute, ...] = ()
    span: Span | None = field(default=None, compare=False)

    def resolve_payload(self) -> TypeRef:
        """Resolve the payload into a concrete type reference."""
        if isinstance(self.payload, ExplicitType):
            return self.payload.type_ref
        return NamedType((self.name,))


@dataclass(frozen=True)
class UnionSpec:
    """Root of the AST: a whole `enum Name { ... }` declaration."""

    name: str
    variants: tuple[VariantSpec, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    span: Span | None = field(default=None, compare=False)
