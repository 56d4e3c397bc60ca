"""Entry points that expand union declarations.

`expand` returns the generated Python source. `unite` executes it into a
namespace, by default the calling module's globals, the way a macro expands
at its invocation site:

    from unite import unite

    unite('''
        pub enum Shape { Circle, Square = Rect, Empty = () }
    ''')

    shape = Shape(Rect(2, 3))
    assert shape.is_square()
"""

from __future__ import annotations

import linecache
import logging
import sys
from typing import Any

from unite.compiler.emitter import render
from unite.compiler.generator import generate
from unite.core.config import UniteConfig
from unite.dsl.parser import parse

logger = logging.getLogger(__name__)


def expand(
    source: str,
    config: UniteConfig | None = None,
    preamble: tuple[str, ...] = (),
    source_name: str | None = None,
) -> str:
    """Parse a union declaration and return the generated Python source.

    Raises:
        UniteSyntaxError: If the declaration does not match the grammar.
    """
    spec = parse(source)
    return render(generate(spec), config, preamble=preamble, source_name=source_name)


def unite(
    source: str,
    namespace: dict[str, Any] | None = None,
    config: UniteConfig | None = None,
) -> type:
    """Generate a union and define it in ``namespace``.

    Payload types are resolved in ``namespace`` when the generated code runs.
    Errors raised there (unknown payload types, duplicate cases) propagate
    unchanged.

    Args:
        source: The union declaration.
        namespace: Target namespace; the caller's module globals when omitted.
        config: Emission settings; the global config when omitted.

    Returns:
        The generated union class.
    """
    spec = parse(source)
    code = render(generate(spec), config)

    if namespace is None:
        namespace = sys._getframe(1).f_globals

    filename = f"<unite:{spec.name}>"
    linecache.cache[filename] = (len(code), None, code.splitlines(keepends=True), filename)
    logger.debug("Defining union '%s' in %s", spec.name, namespace.get("__name__", "<namespace>"))

    exec(compile(code, filename, "exec"), namespace)
    return namespace[spec.name]
