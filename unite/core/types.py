"""Core data types for unite.

Shared dataclasses used across the DSL, the generator, and the emitter.
Compiler output types are JSON-serializable via their to_dict methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Visibility(str, Enum):
    """Exposure level of a generated union type."""

    PRIVATE = "private"
    PUBLIC = "public"


class AccessorKind(str, Enum):
    """The three accessor methods generated for every case."""

    IS = "is"
    AS_REF = "as_ref"
    AS_MUT = "as_mut"


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Span:
    """A source region, 1-based, end column exclusive."""

    line: int
    column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"L{self.line}:{self.column}"


class UniteSyntaxError(Exception):
    """Raised when DSL input does not match the grammar.

    Carries a human-readable message and the span of the offending text.
    """

    def __init__(self, message: str, span: Span) -> None:
        self.message = message
        self.span = span
        super().__init__(f"{message} at {span}")

    def format(self, filename: str = "<input>") -> str:
        """Render as a compiler-style diagnostic line."""
        return f"{filename}:{self.span.line}:{self.span.column}: error: {self.message}"


# ---------------------------------------------------------------------------
# Generated declarations
# ---------------------------------------------------------------------------


@dataclass
class CaseDeclaration:
    """One case of the generated union."""

    name: str
    discriminant: int
    payload_type: str
    decorators: list[str] = field(default_factory=list)
    doc: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "discriminant": self.discriminant,
            "payload_type": self.payload_type,
            "decorators": self.decorators,
            "doc": self.doc,
        }


@dataclass
class TypeDeclaration:
    """The union class itself."""

    name: str
    visibility: Visibility = Visibility.PRIVATE
    decorators: list[str] = field(default_factory=list)
    doc: str = ""
    cases: list[CaseDeclaration] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "visibility": self.visibility.value,
            "decorators": self.decorators,
            "doc": self.doc,
            "cases": [c.to_dict() for c in self.cases],
        }


@dataclass
class AccessorMethod:
    """An is_/as_/as_..._mut method attached to the union class."""

    name: str
    kind: AccessorKind
    case: str
    discriminant: int
    payload_type: str
    doc: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "case": self.case,
            "discriminant": self.discriminant,
            "payload_type": self.payload_type,
            "doc": self.doc,
        }


@dataclass
class Conversion:
    """A payload-type to union conversion constructing one case."""

    payload_type: str
    case: str

    def to_dict(self) -> dict[str, Any]:
        return {"payload_type": self.payload_type, "case": self.case}


@dataclass
class DeclarationSet:
    """Everything generated for one union: type, methods, conversions."""

    type_decl: TypeDeclaration
    methods: list[AccessorMethod] = field(default_factory=list)
    conversions: list[Conversion] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.type_decl.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_decl.to_dict(),
            "methods": [m.to_dict() for m in self.methods],
            "conversions": [c.to_dict() for c in self.conversions],
        }
