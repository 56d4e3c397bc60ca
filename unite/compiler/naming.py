"""Identifier case conversion for generated accessor names.

Words are split on non-alphanumeric characters, on a lower-case to
upper-case transition, and before the last letter of an upper-case run
that is followed by lower case. Digits take the case of what precedes
them, so `Foo2Bar` becomes `foo2_bar` and `HTTP2Server` `http2_server`.
"""

from __future__ import annotations

import re

_BOUNDARY, _LOWER, _UPPER = range(3)


def split_words(identifier: str) -> list[str]:
    """Split an identifier into its case-delimited words."""
    words: list[str] = []

    for chunk in re.split(r"[\W_]+", identifier):
        start = 0
        mode = _BOUNDARY
        for i, ch in enumerate(chunk):
            if i + 1 == len(chunk):
                words.append(chunk[start:])
                break

            nxt = chunk[i + 1]
            if ch.islower():
                next_mode = _LOWER
            elif ch.isupper():
                next_mode = _UPPER
            else:
                next_mode = mode

            if next_mode == _LOWER and nxt.isupper():
                words.append(chunk[start : i + 1])
                start = i + 1
                mode = _BOUNDARY
            elif mode == _UPPER and ch.isupper() and nxt.islower():
                if i > start:
                    words.append(chunk[start:i])
                start = i
                mode = _BOUNDARY
            else:
                mode = next_mode

    return words


def to_snake_case(identifier: str) -> str:
    """Convert an identifier to lower snake case, e.g. `HTTPServer` -> `http_server`."""
    return "_".join(word.lower() for word in split_words(identifier))
