from dynajson import (
    Diagnostic,
    Element,
    ElementPolicy,
    JsonPath,
    Severity,
)
from tests.conftest import DiagnosticsRecorder


def test_diagnostic_text() -> None:
    diagnostic = Diagnostic(
        Severity.WARNING,
        'select_by_key',
        "No key 'b'.",
        level=1,
        path=JsonPath('a'),
        target='b',
    )

    assert str(diagnostic) == "$.a: select_by_key: No key 'b'."
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.target == 'b'


def test_policy_is_copied_into_children(
    recorder: DiagnosticsRecorder,
) -> None:
    root = Element.parse('{"a": {"b": {}}}', warn_handler=recorder)
    child = root.select('a')

    root.read_only = True
    root.warn_handler = None

    assert child.policy is not root.policy
    assert not child.read_only
    assert child.warn_handler is recorder
    assert root.select('a').read_only
    assert root.select('a').warn_handler is None


def test_setting_flags_keeps_others(recorder: DiagnosticsRecorder) -> None:
    root = Element.new_object_root(fatal_handler=recorder)

    root.read_only = True
    root.warn_handler = recorder

    assert root.fatal_handler is recorder
    assert root.read_only


def test_missing_handlers_drop_diagnostics() -> None:
    policy = ElementPolicy()
    element = Element()

    policy.report(
        element,
        Diagnostic(
            Severity.FATAL, 'count', 'message', level=0, path=JsonPath()
        ),
    )


def test_depth_counter(recorder: DiagnosticsRecorder) -> None:
    root = Element.parse('{"a": [[{"b": 1}]]}', warn_handler=recorder)

    assert root.level == 0
    assert root.select('a', 0, 0).level == 3
    root.select('a', 0, 0, 'missing')
    assert [diagnostic.level for diagnostic in recorder.warnings] == [3]
