from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import UnionType
from typing import Any, ClassVar, Generic, TypeVar, final

import tomli
from typing_extensions import Self

_T = TypeVar('_T')
_ValueT = TypeVar('_ValueT')


@final
class Configuration(Generic[_T]):
    @classmethod
    def from_toml_file_path(cls, file_path: Path, /) -> Self:
        try:
            raw = tomli.loads(file_path.read_text('utf-8'))
        except tomli.TOMLDecodeError as error:
            raise ValueError(
                f'Invalid {file_path.as_posix()} configuration file: {error}.'
            ) from error
        return cls(ConfigurationSection(raw, JsonPath('$'), file_path))

    def get_section_or_none(
        self: Configuration[Any | dict[str, _ValueT]], key: str, /
    ) -> ConfigurationSection[Any] | None:
        return (
            self._content.get_subsection(key)
            if key in self._content
            else None
        )

    def __init__(self, content: ConfigurationSection[_T], /) -> None:
        self._content = content

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._content!r})'


@final
class ConfigurationField(Generic[_T]):
    __slots__ = '_file_path', '_json_path', '_value'

    def __init__(
        self, value: _T, json_path: JsonPath, file_path: Path, /
    ) -> None:
        self._file_path, self._json_path, self._value = (
            file_path,
            json_path,
            value,
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            '('
            f'{self._value!r}, {self._json_path!r}, {self._file_path!r}'
            ')'
        )

    def __str__(self, /) -> str:
        return (
            f'{self._json_path} field of '
            f'{self._file_path.as_posix()} configuration file'
        )

    def extract_exact(self, type_: type[_T] | UnionType, /) -> _T:
        # TOML booleans are instances of ``int``
        if not isinstance(self._value, type_) or (
            isinstance(self._value, bool) and type_ is int
        ):
            raise TypeError(
                f'{self} expected to be {type_}, but got {type(self._value)}.'
            )
        return self._value


@final
class ConfigurationSection(Mapping[str, ConfigurationField[_ValueT]]):
    def get_field_or_none(
        self, key: str, /
    ) -> ConfigurationField[_ValueT] | None:
        return self[key] if key in self._raw else None

    def get_subsection(
        self: ConfigurationSection[Any | dict[str, _ValueT]], key: str, /
    ) -> ConfigurationSection[_ValueT]:
        return ConfigurationSection(
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

    def __getitem__(self, key: str, /) -> ConfigurationField[_ValueT]:
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


@final
class JsonPath:
    def join_key(self, key: str, /) -> Self:
        if not isinstance(key, self._key_type):
            raise TypeError(
                f'Expected key to be {self._key_type}, but got {type(key)}.'
            )
        return type(self)(*self._components, f'.{key}')

    _key_type: ClassVar[type[str]] = str

    def __init__(self, *components: str) -> None:
        if not all(isinstance(component, str) for component in components):
            raise TypeError(
                f'All components of {type(self).__qualname__} must be {str}.'
            )
        if len(components) == 0:
            raise ValueError(
                f'{type(self).__qualname__} must contain '
                'at least one component.'
            )
        self._components = components

    def __str__(self, /) -> str:
        return ''.join(self._components)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            f'({", ".join(map(repr, self._components))})'
        )
