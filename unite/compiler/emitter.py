"""Python source emitter for generated unions.

Renders a DeclarationSet as a block of Python code: the runtime import,
the union class with its case constructors and accessors, the optional
`__all__` export, and one conversion registration per case.
"""

from __future__ import annotations

from unite.core.config import UniteConfig, get_config
from unite.core.types import (
    AccessorKind,
    AccessorMethod,
    CaseDeclaration,
    Conversion,
    DeclarationSet,
    Visibility,
)

_BASE = "_TaggedUnion"
_REF = "_PayloadRef"
_REGISTER = "_register_conversion"


def render(
    declarations: DeclarationSet,
    config: UniteConfig | None = None,
    preamble: tuple[str, ...] = (),
    source_name: str | None = None,
) -> str:
    """Render the declarations as Python source text.

    Args:
        declarations: Output of the generator.
        config: Emission settings; the global config when omitted.
        preamble: Extra lines placed after the runtime import, e.g. imports
            that bring payload types into scope.
        source_name: When given, a header comment naming the DSL source is added.
    """
    config = config or get_config()
    return _Emitter(declarations, config).render(preamble, source_name)


class _Emitter:
    def __init__(self, declarations: DeclarationSet, config: UniteConfig) -> None:
        self._decls = declarations
        self._config = config
        self._lines: list[str] = []

    def render(self, preamble: tuple[str, ...], source_name: str | None) -> str:
        name = self._decls.name

        if source_name is not None:
            self._emit(0, f"# Generated by unite from {source_name}. Do not edit.")
            self._blank()
        self._emit(0, f"from {self._config.runtime_module} import (")
        self._emit(1, f"PayloadRef as {_REF},")
        self._emit(1, f"TaggedUnion as {_BASE},")
        self._emit(1, f"register_conversion as {_REGISTER},")
        self._emit(0, ")")
        for line in preamble:
            self._emit(0, line)
        self._blank(2)

        self._emit_class()

        if self._decls.type_decl.visibility == Visibility.PUBLIC:
            self._blank(2)
            self._emit(0, f'__all__ = [*globals().get("__all__", ()), "{name}"]')

        if self._decls.conversions:
            self._blank(2)
            for conversion in self._decls.conversions:
                self._emit_conversion(conversion)

        return "\n".join(self._lines) + "\n"

    # ------------------------------------------------------------------
    # Type declaration
    # ------------------------------------------------------------------

    def _emit_class(self) -> None:
        decl = self._decls.type_decl

        for decorator in decl.decorators:
            self._emit(0, f"@{decorator}")
        self._emit(0, f"class {decl.name}({_BASE}):")
        if decl.doc and self._config.emit_docs:
            self._emit_doc(1, decl.doc)
            self._blank()

        cases = ", ".join(f'"{c.name}"' for c in decl.cases)
        if len(decl.cases) == 1:
            cases += ","
        self._emit(1, "__slots__ = ()")
        self._emit(1, f"__cases__ = ({cases})")

        for case in decl.cases:
            self._blank()
            self._emit_case(case)

        for method in self._decls.methods:
            self._blank()
            self._emit_method(method)

    def _emit_case(self, case: CaseDeclaration) -> None:
        self._emit(1, "@classmethod")
        for decorator in case.decorators:
            self._emit(1, f"@{decorator}")
        self._emit(
            1,
            f'def {case.name}(cls, value: "{case.payload_type}") -> "{self._decls.name}":',
        )
        if case.doc:
            self._emit_doc(2, case.doc)
        self._emit(2, f"return cls.__unite_make__({case.discriminant}, value)")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _emit_method(self, method: AccessorMethod) -> None:
        if method.kind == AccessorKind.IS:
            self._emit(1, f"def {method.name}(self) -> bool:")
            self._emit_doc(2, method.doc)
            self._emit(2, f"return self.__unite_tag__ == {method.discriminant}")
            return

        if method.kind == AccessorKind.AS_REF:
            returns = f"{method.payload_type} | None"
            result = "self.__unite_value__"
        else:
            returns = f"{_REF}[{method.payload_type}] | None"
            result = f"{_REF}(self, {method.discriminant})"

        self._emit(1, f'def {method.name}(self) -> "{returns}":')
        self._emit_doc(2, method.doc)
        self._emit(2, f"if self.__unite_tag__ == {method.discriminant}:")
        self._emit(3, f"return {result}")
        self._emit(2, "return None")

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def _emit_conversion(self, conversion: Conversion) -> None:
        name = self._decls.name
        self._emit(
            0,
            f"{_REGISTER}({name}, {conversion.payload_type}, {name}.{conversion.case})",
        )

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _emit(self, level: int, text: str) -> None:
        self._lines.append(self._config.indent_unit * level + text)

    def _blank(self, count: int = 1) -> None:
        self._lines.extend([""] * count)

    def _emit_doc(self, level: int, text: str) -> None:
        if not self._config.emit_docs:
            return
        body = text.replace("\\", "\\\\").replace('"', '\\"')
        lines = body.split("\n")
        if len(lines) == 1:
            self._emit(level, f'"""{body}"""')
            return
        self._emit(level, f'"""{lines[0]}')
        for line in lines[1:]:
            if line:
                self._emit(level, line)
            else:
                self._blank()
        self._emit(level, '"""')
