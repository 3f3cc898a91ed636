from __future__ import annotations

import enum
from typing import Any, TypeAlias

from .errors import ElementTypeError

JsonObject: TypeAlias = dict[str, 'JsonValue']
JsonArray: TypeAlias = list['JsonValue']
JsonScalar: TypeAlias = bool | int | float | str | None
JsonValue: TypeAlias = JsonArray | JsonObject | JsonScalar


class ValueKind(str, enum.Enum):
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'

    def __str__(self, /) -> str:
        return self.value


def classify(value: Any, /) -> ValueKind:
    # ``bool`` is a subclass of ``int``, so it has to be checked first
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int | float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise ElementTypeError(
        f'Expected JSON value, but got {type(value).__qualname__}.'
    )


def check_value(value: Any, /) -> None:
    """Checks that value is JSON all the way down."""
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        for element in value:
            check_value(element)
    elif kind is ValueKind.OBJECT:
        for key, element in value.items():
            if not isinstance(key, str):
                raise ElementTypeError(
                    f'Expected object key to be {str}, but got {type(key)}.'
                )
            check_value(element)
