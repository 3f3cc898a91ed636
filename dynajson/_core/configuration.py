from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType, UnionType
from typing import Any, Final, TypeVar, final

import tomli
from typing_extensions import Self

from .json_path import JsonPath

_T = TypeVar('_T')

DEFAULT_TIMEOUT_S: Final[float] = 5.0


@final
class LoaderConfiguration:
    @classmethod
    def from_toml_file_path(
        cls, file_path: Path, /, *, section_name: str = 'loader'
    ) -> Self:
        section = ConfigurationSection(
            tomli.loads(file_path.read_text('utf-8')), JsonPath(), file_path
        )
        return cls.from_section(section.get_subsection(section_name))

    @classmethod
    def from_section(cls, section: ConfigurationSection, /) -> Self:
        headers: dict[str, str] = {}
        if 'headers' in section:
            headers_section = section.get_subsection('headers')
            for name, header_field in headers_section.items():
                headers[name] = header_field.extract_exact(str)
        return cls(
            follow_redirects=(
                section['follow_redirects'].extract_exact(bool)
                if 'follow_redirects' in section
                else True
            ),
            headers=headers,
            timeout_s=(
                section['timeout_s'].extract_positive_number()
                if 'timeout_s' in section
                else DEFAULT_TIMEOUT_S
            ),
        )

    @property
    def follow_redirects(self, /) -> bool:
        return self._follow_redirects

    @property
    def headers(self, /) -> Mapping[str, str]:
        return self._headers

    @property
    def timeout_s(self, /) -> float:
        return self._timeout_s

    _follow_redirects: bool
    _headers: Mapping[str, str]
    _timeout_s: float

    __slots__ = '_follow_redirects', '_headers', '_timeout_s'

    def __new__(
        cls,
        /,
        *,
        follow_redirects: bool = True,
        headers: Mapping[str, str] | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> Self:
        self = super().__new__(cls)
        self._follow_redirects, self._headers, self._timeout_s = (
            follow_redirects,
            MappingProxyType(dict(headers or {})),
            timeout_s,
        )
        return self

    def __eq__(self, other: object, /) -> bool:
        return (
            (
                self._follow_redirects == other._follow_redirects
                and self._headers == other._headers
                and self._timeout_s == other._timeout_s
            )
            if isinstance(other, LoaderConfiguration)
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(
            (
                self._follow_redirects,
                frozenset(self._headers.items()),
                self._timeout_s,
            )
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}('
            f'follow_redirects={self._follow_redirects!r}, '
            f'headers={dict(self._headers)!r}, '
            f'timeout_s={self._timeout_s!r}'
            ')'
        )


@final
class ConfigurationField:
    def extract_exact(self, type_: type[_T] | UnionType, /) -> _T:
        if not isinstance(self._value, type_):
            raise TypeError(
                f'{self} expected to be {type_}, but got {type(self._value)}.'
            )
        return self._value

    def extract_positive_number(self, /) -> float:
        if isinstance(self._value, bool):
            raise ValueError(
                f'{self} should be a positive number, '
                f'but got {self._value!r}.'
            )
        result = self.extract_exact(int | float)
        if result <= 0:
            raise ValueError(
                f'{self} should be positive, but got {result!r}.'
            )
        return float(result)

    _file_path: Path
    _json_path: JsonPath
    _value: Any

    __slots__ = '_file_path', '_json_path', '_value'

    def __new__(
        cls, value: Any, json_path: JsonPath, file_path: Path, /
    ) -> Self:
        self = super().__new__(cls)
        self._file_path, self._json_path, self._value = (
            file_path,
            json_path,
            value,
        )
        return self

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({self._value!r}, {self._json_path!r}, {self._file_path!r})'
        )

    def __str__(self, /) -> str:
        return (
            f'{self._json_path} field of '
            f'{self._file_path.as_posix()} configuration file'
        )


@final
class ConfigurationSection(Mapping[str, ConfigurationField]):
    def get_subsection(self, key: str, /) -> Self:
        return type(self)(
            self[key].extract_exact(dict),
            self._json_path.join_key(key),
            self._file_path,
        )

    def __init__(
        self, raw: dict[str, Any], json_path: JsonPath, file_path: Path, /
    ) -> None:
        self._file_path, self._json_path, self._raw = file_path, json_path, raw

    def __contains__(self, key: object, /) -> bool:
        return key in self._raw

    def __getitem__(self, key: str, /) -> ConfigurationField:
        try:
            value = self._raw[key]
        except KeyError:
            raise KeyError(f'{self} does not contain "{key}" field.') from None
        else:
            return ConfigurationField(
                value, self._json_path.join_key(key), self._file_path
            )

    def __iter__(self, /) -> Iterator[str]:
        return iter(self._raw)

    def __len__(self, /) -> int:
        return len(self._raw)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            '('
            f'{self._raw!r}, {self._json_path!r}, {self._file_path!r}'
            ')'
        )

    def __str__(self, /) -> str:
        return (
            f'{self._json_path} section of '
            f'{self._file_path.as_posix()} configuration file'
        )
