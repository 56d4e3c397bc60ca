import ast
import textwrap

from unite.compiler.emitter import render
from unite.compiler.generator import generate
from unite.core.config import UniteConfig
from unite.dsl.parser import parse

SHAPE = """
"A shape."
enum Shape {
    "A round shape."
    Circle,
    Square = Rect,
    Empty = (),
}
"""


def emit(source: str, **config) -> str:
    return render(generate(parse(source)), UniteConfig(**config))


def member(text: str) -> str:
    return textwrap.indent(textwrap.dedent(text), "    ")


def class_node(code: str) -> ast.ClassDef:
    module = ast.parse(code)
    return next(node for node in module.body if isinstance(node, ast.ClassDef))


def test_output_is_valid_python_with_expected_shape():
    code = emit(SHAPE)
    cls = class_node(code)

    assert cls.name == "Shape"
    functions = [node.name for node in cls.body if isinstance(node, ast.FunctionDef)]
    assert functions[:3] == ["Circle", "Square", "Empty"]
    assert len(functions) == 3 + 9
    assert ast.get_docstring(cls) == "A shape."


def test_case_constructors_and_accessors():
    code = emit(SHAPE)

    assert member(
        '''\
            @classmethod
            def Circle(cls, value: "Circle") -> "Shape":
                """A round shape."""
                return cls.__unite_make__(0, value)
        '''
    ) in code
    assert member(
        '''\
            def is_square(self) -> bool:
                """Checks whether this `Shape` is a `Square`."""
                return self.__unite_tag__ == 1
        '''
    ) in code
    assert member(
        '''\
            def as_empty(self) -> "tuple[()] | None":
                """Attempts to cast this `Shape` to a reference to the underlying `Empty`."""
                if self.__unite_tag__ == 2:
                    return self.__unite_value__
                return None
        '''
    ) in code
    assert 'def as_square_mut(self) -> "_PayloadRef[Rect] | None":' in code
    assert "            return _PayloadRef(self, 1)\n" in code


def test_header_and_conversions():
    code = emit(SHAPE)
    assert code.startswith(
        "from unite.runtime import (\n"
        "    PayloadRef as _PayloadRef,\n"
        "    TaggedUnion as _TaggedUnion,\n"
        "    register_conversion as _register_conversion,\n"
        ")\n"
    )
    assert code.endswith(
        "_register_conversion(Shape, Circle, Shape.Circle)\n"
        "_register_conversion(Shape, Rect, Shape.Square)\n"
        "_register_conversion(Shape, tuple[()], Shape.Empty)\n"
    )
    assert '__cases__ = ("Circle", "Square", "Empty")' in code


def test_private_union_is_not_exported():
    assert "__all__" not in emit("enum A { B = int }")


def test_public_union_extends_all():
    code = emit("pub enum A { B = int }")
    assert '__all__ = [*globals().get("__all__", ()), "A"]' in code


def test_single_case_tuple_has_trailing_comma():
    assert '__cases__ = ("B",)' in emit("enum A { B = int }")


def test_zero_variants_render_an_empty_union():
    code = emit("enum Empty {}")
    cls = class_node(code)
    assert [n for n in cls.body if isinstance(n, ast.FunctionDef)] == []
    assert "__cases__ = ()" in code
    assert "register_conversion" not in code


def test_decorators_are_emitted_in_order():
    code = emit('@first\n@second(1, key="v")\nenum A { @traced B = int }')
    assert '@first\n@second(1, key="v")\nclass A(_TaggedUnion):' in code
    assert "    @classmethod\n    @traced\n    def B(cls" in code


def test_multiline_docstring():
    code = emit('"""\n    Summary.\n\n    Details here.\n    """\nenum A {}')
    assert ast.get_docstring(class_node(code)) == "Summary.\n\nDetails here."


def test_docstring_quotes_are_escaped():
    code = emit('\'Say "hi"\'\nenum A {}')
    assert ast.get_docstring(class_node(code)) == 'Say "hi"'


def test_emit_docs_disabled():
    code = emit(SHAPE, emit_docs=False)
    assert '"""' not in code
    ast.parse(code)


def test_indent_width():
    code = emit("enum A { B = int }", indent=2)
    assert "\n  __slots__ = ()\n" in code
    assert "\n      return self.__unite_value__\n" in code


def test_runtime_module_override():
    code = emit("enum A {}", runtime_module="vendor.unite_runtime")
    assert code.startswith("from vendor.unite_runtime import ")


def test_preamble_and_source_name():
    code = render(
        generate(parse("enum A { B }")),
        UniteConfig(),
        preamble=("from models import *",),
        source_name="a.unite",
    )
    lines = code.splitlines()
    assert lines[0] == "# Generated by unite from a.unite. Do not edit."
    assert lines[2:7] == [
        "from unite.runtime import (",
        "    PayloadRef as _PayloadRef,",
        "    TaggedUnion as _TaggedUnion,",
        "    register_conversion as _register_conversion,",
        ")",
    ]
    assert lines[7] == "from models import *"
