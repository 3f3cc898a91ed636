from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias, final

from typing_extensions import Self

from .json_path import JsonPath, PathStep

if TYPE_CHECKING:
    from .element import Element


class Severity(str, enum.Enum):
    WARNING = 'warning'
    FATAL = 'fatal'

    def __str__(self, /) -> str:
        return self.value


@final
class Diagnostic:
    """Event passed to diagnostic handlers.

    Soft conditions (absent keys, out-of-range indices, mismatched reads)
    are reported with ``Severity.WARNING``, precondition violations that
    are also raised to the caller with ``Severity.FATAL``.
    """

    @property
    def level(self, /) -> int:
        return self._level

    @property
    def message(self, /) -> str:
        return self._message

    @property
    def operation(self, /) -> str:
        return self._operation

    @property
    def path(self, /) -> JsonPath:
        return self._path

    @property
    def severity(self, /) -> Severity:
        return self._severity

    @property
    def target(self, /) -> PathStep | None:
        return self._target

    _level: int
    _message: str
    _operation: str
    _path: JsonPath
    _severity: Severity
    _target: PathStep | None

    __slots__ = (
        '_level',
        '_message',
        '_operation',
        '_path',
        '_severity',
        '_target',
    )

    def __new__(
        cls,
        severity: Severity,
        operation: str,
        message: str,
        /,
        *,
        level: int,
        path: JsonPath,
        target: PathStep | None = None,
    ) -> Self:
        self = super().__new__(cls)
        (
            self._severity,
            self._operation,
            self._message,
            self._level,
            self._path,
            self._target,
        ) = (severity, operation, message, level, path, target)
        return self

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}('
            f'{self._severity!r}, {self._operation!r}, {self._message!r}, '
            f'level={self._level!r}, path={self._path!r}, '
            f'target={self._target!r}'
            ')'
        )

    def __str__(self, /) -> str:
        return f'{self._path}: {self._operation}: {self._message}'


DiagnosticHandler: TypeAlias = Callable[['Element', Diagnostic], None]


@final
class ElementPolicy:
    """Flags every child element inherits from the element producing it."""

    @property
    def fatal_handler(self, /) -> DiagnosticHandler | None:
        return self._fatal_handler

    @property
    def read_only(self, /) -> bool:
        return self._read_only

    @property
    def warn_handler(self, /) -> DiagnosticHandler | None:
        return self._warn_handler

    def report(self, element: Element, diagnostic: Diagnostic, /) -> None:
        handler = (
            self._warn_handler
            if (
                diagnostic.severity is Severity.WARNING
                or self._fatal_handler is None
            )
            else self._fatal_handler
        )
        if handler is not None:
            handler(element, diagnostic)

    _fatal_handler: DiagnosticHandler | None
    _read_only: bool
    _warn_handler: DiagnosticHandler | None

    __slots__ = '_fatal_handler', '_read_only', '_warn_handler'

    def __new__(
        cls,
        /,
        *,
        fatal_handler: DiagnosticHandler | None = None,
        read_only: bool = False,
        warn_handler: DiagnosticHandler | None = None,
    ) -> Self:
        self = super().__new__(cls)
        self._fatal_handler, self._read_only, self._warn_handler = (
            fatal_handler,
            read_only,
            warn_handler,
        )
        return self

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}('
            f'fatal_handler={self._fatal_handler!r}, '
            f'read_only={self._read_only!r}, '
            f'warn_handler={self._warn_handler!r}'
            ')'
        )
