from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Final

import tomli
from typing_extensions import Self

from .diagnostics import Diagnostic, Severity

if TYPE_CHECKING:
    from .element import Element

PACKAGE_LOGGER_NAME: Final[str] = 'dynajson'


def configure_logging(file_path: Path, /, *, verbosity: int = 0) -> None:
    """Applies TOML logging configuration in ``dictConfig`` schema.

    Every verbosity step lowers the package logger level by 10.
    """
    logging.config.dictConfig(tomli.loads(file_path.read_text('utf-8')))
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(max(1, logger.getEffectiveLevel() - 10 * verbosity))


class LevelRangeFilter(logging.Filter):
    def __init__(
        self,
        *,
        min_level: int | str | None = None,
        max_level: int | str | None = None,
    ) -> None:
        super().__init__()
        self._min_level, self._max_level = (
            _normalize_level(min_level),
            _normalize_level(max_level),
        )
        if self._min_level is None and self._max_level is None:
            raise ValueError('At least one of levels should be specified.')
        if (
            self._min_level is not None
            and self._max_level is not None
            and self._min_level > self._max_level
        ):
            raise ValueError(
                f'Minimum level {min_level!r} should not be greater '
                f'than maximum level {max_level!r}.'
            )

    def filter(self, record: logging.LogRecord) -> bool:
        return (
            self._min_level is None or self._min_level <= record.levelno
        ) and (self._max_level is None or record.levelno <= self._max_level)


class LoggingDiagnosticHandler:
    """Forwards element diagnostics to a logger.

    Warnings are logged with the given level, fatal diagnostics
    with ``logging.ERROR``.
    """

    @property
    def level(self, /) -> int:
        return self._level

    @property
    def logger(self, /) -> logging.Logger:
        return self._logger

    _level: int
    _logger: logging.Logger

    __slots__ = '_level', '_logger'

    def __new__(
        cls, logger: logging.Logger, /, *, level: int = logging.WARNING
    ) -> Self:
        self = super().__new__(cls)
        self._level, self._logger = level, logger
        return self

    def __call__(self, element: Element, diagnostic: Diagnostic, /) -> None:
        self._logger.log(
            (
                logging.ERROR
                if diagnostic.severity is Severity.FATAL
                else self._level
            ),
            '%s (level %s): %s: %s',
            diagnostic.path,
            diagnostic.level,
            diagnostic.operation,
            diagnostic.message,
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}({self._logger!r}, '
            f'level={logging.getLevelName(self._level)!r})'
        )


def _normalize_level(level: int | str | None, /) -> int | None:
    if isinstance(level, str):
        result = logging.getLevelName(level)
        if not isinstance(result, int):
            raise ValueError(f'Unknown logging level: {level!r}.')
        return result
    return level
