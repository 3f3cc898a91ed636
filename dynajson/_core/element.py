from __future__ import annotations

import enum
import logging
import math
import operator
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any, Final, NamedTuple, NoReturn, TypeAlias

import httpx
from typing_extensions import Self, assert_never

from .configuration import LoaderConfiguration
from .diagnostics import Diagnostic, DiagnosticHandler, ElementPolicy, Severity
from .errors import ElementError, ElementTypeError, ReadOnlyError, StateError
from .json_path import JsonPath, PathStep
from .loading import parse_json, read_source
from .serialization import serialize
from .value import JsonValue, ValueKind, check_value, classify

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)


class Traversal(str, enum.Enum):
    CONTINUE = 'continue'
    STOP = 'stop'


class WalkStep(NamedTuple):
    parents: tuple[PathStep, ...]
    key: PathStep
    value: JsonValue

    @property
    def path(self, /) -> JsonPath:
        return JsonPath(*self.parents, self.key)


ArrayVisitor: TypeAlias = Callable[[int, 'Element'], Traversal | None]
ObjectVisitor: TypeAlias = Callable[[str, 'Element'], Traversal | None]
WalkVisitor: TypeAlias = Callable[
    [tuple[PathStep, ...], PathStep, JsonValue], Traversal | None
]


class Element:
    """Navigable and mutable wrapper around a node of a JSON tree.

    Arrays and objects are held by reference, so mutations made through
    one element are visible through every other element wrapping the same
    container.
    Reading absent or mismatched data never raises: it yields a null
    element (or a zero value) and reports a warning to the warn handler.
    Mutations raise on violated preconditions after reporting them
    to the fatal handler (or the warn handler if there is none).
    """

    @classmethod
    def load(
        cls,
        locator: str | Path,
        /,
        *,
        client: httpx.Client | None = None,
        configuration: LoaderConfiguration | None = None,
        fatal_handler: DiagnosticHandler | None = None,
        logger: logging.Logger = _LOGGER,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        return cls.parse(
            read_source(
                locator,
                client=client,
                configuration=configuration,
                logger=logger,
            ),
            fatal_handler=fatal_handler,
            read_only=read_only,
            warn_handler=warn_handler,
        )

    @classmethod
    def new_array_root(
        cls,
        /,
        *,
        fatal_handler: DiagnosticHandler | None = None,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        return cls(
            [],
            fatal_handler=fatal_handler,
            read_only=read_only,
            warn_handler=warn_handler,
        )

    @classmethod
    def new_object_root(
        cls,
        /,
        *,
        fatal_handler: DiagnosticHandler | None = None,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        return cls(
            {},
            fatal_handler=fatal_handler,
            read_only=read_only,
            warn_handler=warn_handler,
        )

    @classmethod
    def parse(
        cls,
        data: bytes | bytearray | str,
        /,
        *,
        fatal_handler: DiagnosticHandler | None = None,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        return cls(
            parse_json(data),
            fatal_handler=fatal_handler,
            read_only=read_only,
            warn_handler=warn_handler,
        )

    @property
    def fatal_handler(self, /) -> DiagnosticHandler | None:
        return self._policy.fatal_handler

    @fatal_handler.setter
    def fatal_handler(self, value: DiagnosticHandler | None, /) -> None:
        self._policy = ElementPolicy(
            fatal_handler=value,
            read_only=self._policy.read_only,
            warn_handler=self._policy.warn_handler,
        )

    @property
    def kind(self, /) -> ValueKind:
        return classify(self._value)

    @property
    def level(self, /) -> int:
        return self._level

    @property
    def path(self, /) -> JsonPath:
        return self._path

    @property
    def policy(self, /) -> ElementPolicy:
        return self._policy

    @property
    def raw(self, /) -> JsonValue:
        return self._value

    @property
    def read_only(self, /) -> bool:
        return self._policy.read_only

    @read_only.setter
    def read_only(self, value: bool, /) -> None:
        self._policy = ElementPolicy(
            fatal_handler=self._policy.fatal_handler,
            read_only=value,
            warn_handler=self._policy.warn_handler,
        )

    @property
    def warn_handler(self, /) -> DiagnosticHandler | None:
        return self._policy.warn_handler

    @warn_handler.setter
    def warn_handler(self, value: DiagnosticHandler | None, /) -> None:
        self._policy = ElementPolicy(
            fatal_handler=self._policy.fatal_handler,
            read_only=self._policy.read_only,
            warn_handler=value,
        )

    def is_array(self, /) -> bool:
        return isinstance(self._value, list)

    def is_null(self, /) -> bool:
        return self._value is None

    def is_object(self, /) -> bool:
        return isinstance(self._value, dict)

    def count(self, /) -> int:
        kind = self.kind
        if kind is ValueKind.NULL:
            self._warn('count', 'Null element has no entries.')
            return 0
        if kind is ValueKind.ARRAY or kind is ValueKind.OBJECT:
            return len(self._value)  # type: ignore[arg-type]
        if (
            kind is ValueKind.BOOLEAN
            or kind is ValueKind.NUMBER
            or kind is ValueKind.STRING
        ):
            return 1
        assert_never(kind)

    def keys(self, /) -> list[str]:
        if not isinstance(self._value, dict):
            self._warn('keys', f'Expected object, but got {self.kind}.')
            return []
        return list(self._value)

    def select(self, /, *steps: PathStep | Sequence[str]) -> Self:
        """Resolves the path of keys and indices left to right.

        A leading list (or tuple) of strings is expanded in place,
        so ``element.select('a/b'.split('/'), 0)`` is the same as
        ``element.select('a', 'b', 0)``.
        Only the first failing step is reported.
        """
        if len(steps) > 0 and isinstance(steps[0], list | tuple):
            steps = (*steps[0], *steps[1:])
        for step in steps:
            if not _is_path_step(step):
                self._fail(
                    ElementTypeError,
                    'select',
                    f'Expected path step to be {str} or {int}, '
                    f'but got {type(step)}.',
                )
        if len(steps) == 0:
            self._warn('select', 'No path steps given.')
            return self._child(None, None)
        return self._resolve(steps, 'select')  # type: ignore[arg-type]

    def select_by_index(self, index: int, /) -> Self:
        if not _is_index(index):
            self._fail(
                ElementTypeError,
                'select_by_index',
                f'Expected index to be {int}, but got {type(index)}.',
            )
        return self._resolve((index,), 'select_by_index')

    def select_by_key(self, key: str, /) -> Self:
        if not isinstance(key, str):
            self._fail(
                ElementTypeError,
                'select_by_key',
                f'Expected key to be {str}, but got {type(key)}.',
            )
        return self._resolve((key,), 'select_by_key')

    def as_bool(self, /) -> bool:
        if not isinstance(self._value, bool):
            self._warn('as_bool', f'Expected boolean, but got {self.kind}.')
            return False
        return self._value

    def as_float(self, /) -> float:
        if self.kind is not ValueKind.NUMBER:
            self._warn('as_float', f'Expected number, but got {self.kind}.')
            return 0.0
        assert isinstance(self._value, int | float), self._value
        try:
            return float(self._value)
        except OverflowError:
            self._warn(
                'as_float', f'Number {self._value!r} does not fit into float.'
            )
            return 0.0

    def as_int(self, /) -> int:
        if self.kind is not ValueKind.NUMBER:
            self._warn('as_int', f'Expected number, but got {self.kind}.')
            return 0
        assert isinstance(self._value, int | float), self._value
        if isinstance(self._value, float) and not math.isfinite(self._value):
            self._warn(
                'as_int', f'Non-finite number {self._value!r} has no integer.'
            )
            return 0
        return int(self._value)

    def as_string(self, /) -> str:
        if not isinstance(self._value, str):
            self._warn('as_string', f'Expected string, but got {self.kind}.')
            return ''
        return self._value

    def append(self, value: Any, /, *values: Any) -> None:
        target = self._check_mutable('append', ValueKind.ARRAY)
        assert isinstance(target, list), target
        target.extend(
            [self._to_json('append', item) for item in (value, *values)]
        )

    def delete(self, key_or_index: PathStep, /) -> None:
        self._check_mutable('delete', None, target=_to_target(key_or_index))
        if isinstance(key_or_index, str):
            self.delete_by_key(key_or_index)
        elif _is_index(key_or_index):
            self.delete_by_index(key_or_index)
        else:
            self._fail(
                ElementTypeError,
                'delete',
                f'Expected key or index, but got {type(key_or_index)}.',
            )

    def delete_by_index(self, index: int, /) -> None:
        target = self._check_mutable(
            'delete_by_index', ValueKind.ARRAY, target=_to_target(index)
        )
        assert isinstance(target, list), target
        if not _is_index(index):
            self._fail(
                ElementTypeError,
                'delete_by_index',
                f'Expected index to be {int}, but got {type(index)}.',
            )
        if not (0 <= index < len(target)):
            self._warn(
                'delete_by_index',
                f'Index {index} is out of range '
                f'for array of length {len(target)}.',
                target=index,
            )
            return
        del target[index]

    def delete_by_key(self, key: str, /) -> None:
        target = self._check_mutable(
            'delete_by_key', ValueKind.OBJECT, target=_to_target(key)
        )
        assert isinstance(target, dict), target
        if not isinstance(key, str):
            self._fail(
                ElementTypeError,
                'delete_by_key',
                f'Expected key to be {str}, but got {type(key)}.',
            )
        try:
            del target[key]
        except KeyError:
            self._warn('delete_by_key', f'No key {key!r}.', target=key)

    def put(self, key: str, value: Any, /, *values: Any) -> None:
        """Stores the value under the key.

        Two or more values are stored as a new array.
        """
        target = self._check_mutable(
            'put', ValueKind.OBJECT, target=_to_target(key)
        )
        assert isinstance(target, dict), target
        if not isinstance(key, str):
            self._fail(
                ElementTypeError,
                'put',
                f'Expected key to be {str}, but got {type(key)}.',
            )
        items = [
            self._to_json('put', item, target=key) for item in (value, *values)
        ]
        target[key] = items[0] if len(values) == 0 else items

    def put_empty_array(self, key: str, /) -> Self:
        self._check_mutable('put_empty_array', None, target=_to_target(key))
        self.put(key, [])
        return self.select_by_key(key)

    def put_empty_object(self, key: str, /) -> Self:
        self._check_mutable('put_empty_object', None, target=_to_target(key))
        self.put(key, {})
        return self.select_by_key(key)

    def as_element_array(self, /) -> list[Self]:
        return [element for _, element in self._iter_array('as_element_array')]

    def enumerate_array(self, visitor: ArrayVisitor, /) -> None:
        for index, element in self._iter_array('enumerate_array'):
            if visitor(index, element) is Traversal.STOP:
                break

    def enumerate_object(self, visitor: ObjectVisitor, /) -> None:
        """Visits object entries in ascending key order."""
        for key, element in self._iter_object('enumerate_object'):
            if visitor(key, element) is Traversal.STOP:
                break

    def iter_array(self, /) -> Iterator[tuple[int, Self]]:
        return self._iter_array('iter_array')

    def iter_object(self, /) -> Iterator[tuple[str, Self]]:
        return self._iter_object('iter_object')

    def iter_walk(self, /) -> Iterator[WalkStep]:
        return _iter_walk((), self._value)

    def walk(self, visitor: WalkVisitor, /) -> None:
        """Visits every descendant depth-first, parents before children.

        Object entries are visited in ascending key order.
        """
        for step in self.iter_walk():
            if visitor(step.parents, step.key, step.value) is Traversal.STOP:
                break

    _level: int
    _path: JsonPath
    _policy: ElementPolicy
    _value: JsonValue

    __slots__ = '_level', '_path', '_policy', '_value'

    def __new__(
        cls,
        value: Any = None,
        /,
        *,
        fatal_handler: DiagnosticHandler | None = None,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        value = _to_raw(value)
        check_value(value)
        return cls._create(
            value,
            level=0,
            path=JsonPath(),
            policy=ElementPolicy(
                fatal_handler=fatal_handler,
                read_only=read_only,
                warn_handler=warn_handler,
            ),
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}({self._value!r}, '
            f'level={self._level!r}, path={self._path!r}, '
            f'policy={self._policy!r})'
        )

    def __str__(self, /) -> str:
        return '' if self._value is None else serialize(self._value)

    @classmethod
    def _create(
        cls,
        value: JsonValue,
        /,
        *,
        level: int,
        path: JsonPath,
        policy: ElementPolicy,
    ) -> Self:
        self = super().__new__(cls)
        self._level, self._path, self._policy, self._value = (
            level,
            path,
            policy,
            value,
        )
        return self

    def _check_mutable(
        self,
        operation: str,
        expected_kind: ValueKind | None,
        /,
        *,
        target: PathStep | None = None,
    ) -> JsonValue:
        if self._value is None:
            self._fail(
                StateError,
                operation,
                'Null element is not mutable.',
                target=target,
            )
        if self._policy.read_only:
            self._fail(
                ReadOnlyError,
                operation,
                'Element is read-only.',
                target=target,
            )
        if expected_kind is not None and self.kind is not expected_kind:
            self._fail(
                ElementTypeError,
                operation,
                f'Expected {expected_kind}, but got {self.kind}.',
                target=target,
            )
        return self._value

    def _child(self, value: JsonValue, step: PathStep | None, /) -> Self:
        return self._create(
            value,
            level=self._level + 1,
            path=(
                self._path
                if step is None
                else (
                    self._path.join_key(step)
                    if isinstance(step, str)
                    else self._path.join_index(step)
                )
            ),
            policy=self._policy,
        )

    def _fail(
        self,
        error_cls: type[ElementError],
        operation: str,
        message: str,
        /,
        *,
        target: PathStep | None = None,
    ) -> NoReturn:
        diagnostic = Diagnostic(
            Severity.FATAL,
            operation,
            message,
            level=self._level,
            path=self._path,
            target=target,
        )
        self._policy.report(self, diagnostic)
        raise error_cls(str(diagnostic))

    def _iter_array(self, operation: str, /) -> Iterator[tuple[int, Self]]:
        if not isinstance(self._value, list):
            self._warn(operation, f'Expected array, but got {self.kind}.')
            return iter(())
        return (
            (index, self._child(value, index))
            for index, value in enumerate(list(self._value))
        )

    def _iter_object(self, operation: str, /) -> Iterator[tuple[str, Self]]:
        if not isinstance(self._value, dict):
            self._warn(operation, f'Expected object, but got {self.kind}.')
            return iter(())
        return (
            (key, self._child(value, key))
            for key, value in sorted(
                self._value.items(), key=operator.itemgetter(0)
            )
        )

    def _lookup(self, step: PathStep, /) -> tuple[JsonValue, str | None]:
        if isinstance(step, str):
            if not isinstance(self._value, dict):
                return None, f'Expected object, but got {self.kind}.'
            try:
                return self._value[step], None
            except KeyError:
                return None, f'No key {step!r}.'
        if not isinstance(self._value, list):
            return None, f'Expected array, but got {self.kind}.'
        if not (0 <= step < len(self._value)):
            return None, (
                f'Index {step} is out of range '
                f'for array of length {len(self._value)}.'
            )
        return self._value[step], None

    def _resolve(self, steps: tuple[PathStep, ...], operation: str, /) -> Self:
        result, is_reported = self, False
        for step in steps:
            value, failure = result._lookup(step)
            if failure is not None and not is_reported:
                result._warn(operation, failure, target=step)
                is_reported = True
            result = result._child(value, step)
        return result

    def _to_json(
        self,
        operation: str,
        value: Any,
        /,
        *,
        target: PathStep | None = None,
    ) -> JsonValue:
        result = _to_raw(value)
        try:
            check_value(result)
        except ElementTypeError as error:
            self._fail(ElementTypeError, operation, str(error), target=target)
        return result

    def _warn(
        self,
        operation: str,
        message: str,
        /,
        *,
        target: PathStep | None = None,
    ) -> None:
        self._policy.report(
            self,
            Diagnostic(
                Severity.WARNING,
                operation,
                message,
                level=self._level,
                path=self._path,
                target=target,
            ),
        )


def _is_index(value: Any, /) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_path_step(value: Any, /) -> bool:
    return isinstance(value, str) or _is_index(value)


def _iter_walk(
    parents: tuple[PathStep, ...], value: JsonValue, /
) -> Iterator[WalkStep]:
    entries: list[tuple[Any, JsonValue]]
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        assert isinstance(value, list), value
        entries = list(enumerate(value))
    elif kind is ValueKind.OBJECT:
        assert isinstance(value, dict), value
        entries = sorted(value.items(), key=operator.itemgetter(0))
    elif (
        kind is ValueKind.NULL
        or kind is ValueKind.BOOLEAN
        or kind is ValueKind.NUMBER
        or kind is ValueKind.STRING
    ):
        return
    else:
        assert_never(kind)
    for key, child in entries:
        yield WalkStep(parents, key, child)
        yield from _iter_walk((*parents, key), child)


def _to_raw(value: Any, /) -> JsonValue:
    return value.raw if isinstance(value, Element) else value


def _to_target(value: Any, /) -> PathStep | None:
    return value if _is_path_step(value) else None
