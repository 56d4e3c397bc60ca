"""unite core: shared types, diagnostics, and configuration.

Import the most commonly used types from here for convenience:

    from unite.core import DeclarationSet, UniteSyntaxError, get_config
"""

from unite.core.config import UniteConfig, get_config, set_config
from unite.core.types import (
    AccessorKind,
    AccessorMethod,
    CaseDeclaration,
    Conversion,
    DeclarationSet,
    Span,
    TypeDeclaration,
    UniteSyntaxError,
    Visibility,
)

__all__ = [
    "AccessorKind",
    "AccessorMethod",
    "CaseDeclaration",
    "Conversion",
    "DeclarationSet",
    "Span",
    "TypeDeclaration",
    "UniteConfig",
    "UniteSyntaxError",
    "Visibility",
    "get_config",
    "set_config",
]
