from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from dynajson import Diagnostic, Element, Severity

DATA_DIRECTORY_PATH = Path(__file__).parent / 'data'

NESTED_DOCUMENT = (
    '{"str": "abc", "int": 123, "arr": ["a", "b", 1, 2], '
    '"map1": {"map1str": "ABC", "map1int": 455, '
    '"map2": {"map3": {"map3str": "DEF", '
    '"map3arr": [100, 200, [201, 202, {"map4": [10101, 10102]}], 300]}}}}'
)


class DiagnosticsRecorder:
    def __init__(self) -> None:
        self.records: list[tuple[Element, Diagnostic]] = []

    def __call__(self, element: Element, diagnostic: Diagnostic, /) -> None:
        self.records.append((element, diagnostic))

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [diagnostic for _, diagnostic in self.records]

    @property
    def operations(self) -> list[str]:
        return [diagnostic.operation for diagnostic in self.diagnostics]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [
            diagnostic
            for diagnostic in self.diagnostics
            if diagnostic.severity is Severity.WARNING
        ]

    @property
    def fatals(self) -> list[Diagnostic]:
        return [
            diagnostic
            for diagnostic in self.diagnostics
            if diagnostic.severity is Severity.FATAL
        ]


@pytest.fixture
def recorder() -> DiagnosticsRecorder:
    return DiagnosticsRecorder()


@pytest.fixture
def glossary_file_path() -> Path:
    return DATA_DIRECTORY_PATH / 'glossary.json'


@pytest.fixture
def nested_root(recorder: DiagnosticsRecorder) -> Element:
    return Element.parse(NESTED_DOCUMENT, warn_handler=recorder)


@pytest.fixture(autouse=True)
def package_logger_isolation() -> Iterator[None]:
    logger = logging.getLogger('dynajson')
    state = (
        logger.level,
        logger.propagate,
        logger.disabled,
        list(logger.handlers),
        list(logger.filters),
    )
    yield
    level, logger.propagate, logger.disabled, handlers, filters = state
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:], logger.filters[:] = handlers, filters
    logger.setLevel(level)
