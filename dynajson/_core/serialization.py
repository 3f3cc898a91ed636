from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from typing_extensions import assert_never

from .errors import ElementTypeError
from .value import ValueKind, classify


def serialize(value: Any, /) -> str:
    """Renders JSON value as text.

    Only ``"`` and ``\\`` are escaped in strings and object keys,
    other characters (including control ones) are written as is.
    """
    from .element import Element

    return ''.join(
        _iter_chunks(value.raw if isinstance(value, Element) else value)
    )


def escape_string(value: str, /) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')


def _iter_chunks(value: Any, /) -> Iterator[str]:
    kind = classify(value)
    if kind is ValueKind.NULL:
        yield 'null'
    elif kind is ValueKind.BOOLEAN:
        yield 'true' if value else 'false'
    elif kind is ValueKind.NUMBER:
        yield _number_to_string(value)
    elif kind is ValueKind.STRING:
        yield f'"{escape_string(value)}"'
    elif kind is ValueKind.ARRAY:
        yield '['
        for index, element in enumerate(value):
            if index > 0:
                yield ', '
            yield from _iter_chunks(element)
        yield ']'
    elif kind is ValueKind.OBJECT:
        yield '{'
        for index, (key, element) in enumerate(value.items()):
            if not isinstance(key, str):
                raise ElementTypeError(
                    f'Expected object key to be {str}, but got {type(key)}.'
                )
            if index > 0:
                yield ', '
            yield f'"{escape_string(key)}": '
            yield from _iter_chunks(element)
        yield '}'
    else:
        assert_never(kind)


def _number_to_string(value: int | float, /) -> str:
    if isinstance(value, int):
        return int.__repr__(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return float.__repr__(value)
