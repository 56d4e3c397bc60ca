import logging

from unite.compiler.generator import accessor_methods, conversions, generate, type_declaration
from unite.core.types import AccessorKind, Visibility
from unite.dsl.parser import parse

SHAPE = """
"A shape."
@register
pub enum Shape {
    "A round shape."
    @traced
    Circle,
    Square = Rect,
    Empty = (),
}
"""


def test_counts_per_variant():
    decls = generate(parse(SHAPE))
    assert len(decls.type_decl.cases) == 3
    assert len(decls.methods) == 9
    assert len(decls.conversions) == 3


def test_type_declaration_carries_attributes_and_order():
    decl = type_declaration(parse(SHAPE))
    assert decl.name == "Shape"
    assert decl.visibility == Visibility.PUBLIC
    assert decl.decorators == ["register"]
    assert decl.doc == "A shape."

    assert [(c.name, c.discriminant, c.payload_type) for c in decl.cases] == [
        ("Circle", 0, "Circle"),
        ("Square", 1, "Rect"),
        ("Empty", 2, "tuple[()]"),
    ]
    circle = decl.cases[0]
    assert circle.decorators == ["traced"]
    assert circle.doc == "A round shape."
    assert decl.cases[1].decorators == []
    assert decl.cases[1].doc == ""


def test_accessor_names_and_kinds():
    methods = accessor_methods(parse(SHAPE))
    assert [m.name for m in methods] == [
        "is_circle",
        "as_circle",
        "as_circle_mut",
        "is_square",
        "as_square",
        "as_square_mut",
        "is_empty",
        "as_empty",
        "as_empty_mut",
    ]
    assert [m.kind for m in methods[:3]] == [
        AccessorKind.IS,
        AccessorKind.AS_REF,
        AccessorKind.AS_MUT,
    ]
    assert {m.payload_type for m in methods if m.case == "Square"} == {"Rect"}
    assert {m.discriminant for m in methods if m.case == "Empty"} == {2}


def test_accessor_docs_name_type_and_variant():
    methods = {m.name: m for m in accessor_methods(parse(SHAPE))}
    assert methods["is_square"].doc == "Checks whether this `Shape` is a `Square`."
    assert methods["as_square"].doc == (
        "Attempts to cast this `Shape` to a reference to the underlying `Square`."
    )
    assert methods["as_square_mut"].doc == (
        "Attempts to cast this `Shape` to a mutable reference to the underlying `Square`."
    )


def test_accessor_tokens_use_snake_case():
    methods = accessor_methods(parse("enum Server { HTTPServer = int }"))
    assert [m.name for m in methods] == [
        "is_http_server",
        "as_http_server",
        "as_http_server_mut",
    ]


def test_conversions_exist_for_shared_payload_types():
    result = conversions(parse("enum Num { Small = int, Large = int, Text = str }"))
    assert [(c.payload_type, c.case) for c in result] == [
        ("int", "Small"),
        ("int", "Large"),
        ("str", "Text"),
    ]


def test_duplicate_variants_are_not_merged():
    decls = generate(parse("enum Dup { A = int, A = str }"))
    assert [c.name for c in decls.type_decl.cases] == ["A", "A"]
    assert len(decls.methods) == 6
    assert len(decls.conversions) == 2


def test_zero_variants():
    decls = generate(parse("enum Empty {}"))
    assert decls.type_decl.cases == []
    assert decls.methods == []
    assert decls.conversions == []


def test_generation_is_deterministic():
    spec = parse(SHAPE)
    assert generate(spec) == generate(spec)


def test_to_dict():
    data = generate(parse("enum A { B = int }")).to_dict()
    assert data["type"]["name"] == "A"
    assert data["type"]["visibility"] == "private"
    assert data["type"]["cases"][0]["payload_type"] == "int"
    assert [m["kind"] for m in data["methods"]] == ["is", "as_ref", "as_mut"]
    assert data["conversions"] == [{"payload_type": "int", "case": "B"}]


def test_generation_logs_summary(caplog):
    with caplog.at_level(logging.DEBUG, logger="unite.compiler.generator"):
        generate(parse(SHAPE))
    assert "Generated union 'Shape': 3 cases, 9 methods, 3 conversions" in caplog.text
