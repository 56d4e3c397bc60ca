"""Serializer for generated unite declarations.

Converts DeclarationSet objects to JSON for tooling that wants the
generated structure rather than Python source.
"""

from __future__ import annotations

import json
from typing import Any

from unite.core.types import DeclarationSet


def serialize_to_json(declarations: DeclarationSet, indent: int = 2) -> str:
    """Serialize a DeclarationSet to a JSON string."""
    return json.dumps(declarations.to_dict(), indent=indent)


def serialize_to_dict(declarations: DeclarationSet) -> dict[str, Any]:
    """Convert a DeclarationSet to a plain dictionary."""
    return declarations.to_dict()
