from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, final

from typing_extensions import Self

PathStep = str | int


@final
class JsonPath:
    """Dotted location of a node inside a JSON tree, e.g. ``$.a.b[2]``."""

    @classmethod
    def from_steps(cls, steps: Iterable[PathStep], /) -> Self:
        result = cls()
        for step in steps:
            result = (
                result.join_key(step)
                if isinstance(step, str)
                else result.join_index(step)
            )
        return result

    @property
    def steps(self, /) -> tuple[PathStep, ...]:
        return self._steps

    def join_index(self, index: int, /) -> Self:
        if not isinstance(index, self._index_type) or isinstance(
            index, bool
        ):
            raise TypeError(
                f'Expected index to be {self._index_type}, '
                f'but got {type(index)}.'
            )
        return type(self)(*self._steps, index)

    def join_key(self, key: str, /) -> Self:
        if not isinstance(key, self._key_type):
            raise TypeError(
                f'Expected key to be {self._key_type}, but got {type(key)}.'
            )
        return type(self)(*self._steps, key)

    _index_type: ClassVar[type[int]] = int
    _key_type: ClassVar[type[str]] = str

    _steps: tuple[PathStep, ...]

    __slots__ = ('_steps',)

    def __init__(self, *steps: PathStep) -> None:
        if not all(
            isinstance(step, str)
            or (isinstance(step, int) and not isinstance(step, bool))
            for step in steps
        ):
            raise TypeError(
                f'All steps of {type(self).__qualname__} '
                f'must be {str} or {int}.'
            )
        self._steps = steps

    def __eq__(self, other: object, /) -> bool:
        return (
            self._steps == other._steps
            if isinstance(other, JsonPath)
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(self._steps)

    def __len__(self, /) -> int:
        return len(self._steps)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({", ".join(map(repr, self._steps))})'
        )

    def __str__(self, /) -> str:
        return '$' + ''.join(map(_step_to_component, self._steps))


def _step_to_component(step: PathStep, /) -> str:
    return f'.{step}' if isinstance(step, str) else f'[{step}]'
