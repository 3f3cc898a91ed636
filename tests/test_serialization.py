import math

import pytest

from dynajson import Element, ElementTypeError, escape_string, serialize


@pytest.mark.parametrize(
    'value, expected',
    [
        ({}, '{}'),
        ([], '[]'),
        (None, 'null'),
        (True, 'true'),
        (False, 'false'),
        (0, '0'),
        (-12, '-12'),
        (0.5, '0.5'),
        (1.0, '1.0'),
        (1e100, '1e+100'),
        (math.inf, 'Infinity'),
        (-math.inf, '-Infinity'),
        (math.nan, 'NaN'),
        ('text', '"text"'),
        ({'k1': 1, 'k2': 'v'}, '{"k1": 1, "k2": "v"}'),
        ([1, [2, []], {}], '[1, [2, []], {}]'),
        ({'a': {'b': [None, True]}}, '{"a": {"b": [null, true]}}'),
    ],
)
def test_layout(value: object, expected: str) -> None:
    assert serialize(value) == expected


@pytest.mark.parametrize(
    'value, expected',
    [
        ('"', r'"\""'),
        ('\\', r'"\\"'),
        ('a"b\\c', r'"a\"b\\c"'),
        ('line\nbreak', '"line\nbreak"'),
        ('tab\there', '"tab\there"'),
        ('ünïcödé', '"ünïcödé"'),
    ],
)
def test_minimal_string_escaping(value: str, expected: str) -> None:
    assert serialize(value) == expected


def test_keys_are_escaped() -> None:
    assert serialize({'qu"ote': 1, 'back\\slash': 2}) == (
        r'{"qu\"ote": 1, "back\\slash": 2}'
    )


def test_escape_string() -> None:
    assert escape_string('\\"') == '\\\\\\"'


def test_element_is_unwrapped() -> None:
    assert serialize(Element({'a': [1, 'x']})) == '{"a": [1, "x"]}'


def test_nested_element_is_not_json() -> None:
    with pytest.raises(ElementTypeError):
        serialize({'a': [1, Element('x')]})


@pytest.mark.parametrize('value', [object(), (1, 2), {1: 'a'}, b'bytes'])
def test_unsupported_values(value: object) -> None:
    with pytest.raises(ElementTypeError):
        serialize(value)


class TestElementText:
    def test_matches_free_function(self, nested_root: Element) -> None:
        assert str(nested_root) == serialize(nested_root.raw)

    def test_subtree(self, nested_root: Element) -> None:
        assert str(nested_root.select('arr')) == '["a", "b", 1, 2]'

    def test_null_element_is_empty(self) -> None:
        assert str(Element()) == ''
        assert str(Element.parse('{"a": null}').select('a')) == ''
