"""unite generator: translates a parsed UnionSpec into generated declarations.

Takes a UnionSpec (from the parser) and produces a DeclarationSet holding
the union type declaration, the accessor methods, and the conversions.
Each group is an independent map over the variant list.
"""

from __future__ import annotations

import logging

from unite.compiler.naming import to_snake_case
from unite.core.types import (
    AccessorKind,
    AccessorMethod,
    CaseDeclaration,
    Conversion,
    DeclarationSet,
    TypeDeclaration,
)
from unite.dsl.ast_nodes import UnionSpec, VariantSpec, decorators_of, doc_of

logger = logging.getLogger(__name__)


_IS_DOC = "Checks whether this `{name}` is a `{variant}`."
_AS_DOC = "Attempts to cast this `{name}` to a reference to the underlying `{variant}`."
_AS_MUT_DOC = (
    "Attempts to cast this `{name}` to a mutable reference to the underlying `{variant}`."
)


def generate(spec: UnionSpec) -> DeclarationSet:
    """Generate the full declaration set for a union."""
    result = DeclarationSet(
        type_decl=type_declaration(spec),
        methods=accessor_methods(spec),
        conversions=conversions(spec),
    )
    logger.debug(
        "Generated union '%s': %d cases, %d methods, %d conversions",
        spec.name,
        len(result.type_decl.cases),
        len(result.methods),
        len(result.conversions),
    )
    return result


def type_declaration(spec: UnionSpec) -> TypeDeclaration:
    """The union class with one case per variant, in declaration order."""
    return TypeDeclaration(
        name=spec.name,
        visibility=spec.visibility,
        decorators=decorators_of(spec.attributes),
        doc=doc_of(spec.attributes),
        cases=[
            CaseDeclaration(
                name=variant.name,
                discriminant=index,
                payload_type=variant.resolve_payload().render(),
                decorators=decorators_of(variant.attributes),
                doc=doc_of(variant.attributes),
            )
            for index, variant in enumerate(spec.variants)
        ],
    )


def accessor_methods(spec: UnionSpec) -> list[AccessorMethod]:
    """Three accessors per variant: is_<token>, as_<token>, as_<token>_mut."""
    return [
        method
        for index, variant in enumerate(spec.variants)
        for method in _variant_accessors(spec.name, index, variant)
    ]


def conversions(spec: UnionSpec) -> list[Conversion]:
    """One payload-to-union conversion per variant, shared payload types included."""
    return [
        Conversion(payload_type=variant.resolve_payload().render(), case=variant.name)
        for variant in spec.variants
    ]


def _variant_accessors(name: str, index: int, variant: VariantSpec) -> list[AccessorMethod]:
    token = to_snake_case(variant.name)
    payload_type = variant.resolve_payload().render()
    fmt = {"name": name, "variant": variant.name}

    return [
        AccessorMethod(
            name=f"is_{token}",
            kind=AccessorKind.IS,
            case=variant.name,
            discriminant=index,
            payload_type=payload_type,
            doc=_IS_DOC.format(**fmt),
        ),
        AccessorMethod(
            name=f"as_{token}",
            kind=AccessorKind.AS_REF,
            case=variant.name,
            discriminant=index,
            payload_type=payload_type,
            doc=_AS_DOC.format(**fmt),
        ),
        AccessorMethod(
            name=f"as_{token}_mut",
            kind=AccessorKind.AS_MUT,
            case=variant.name,
            discriminant=index,
            payload_type=payload_type,
            doc=_AS_MUT_DOC.format(**fmt),
        ),
    ]
