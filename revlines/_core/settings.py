from __future__ import annotations

from pathlib import Path
from typing import Any, final

from typing_extensions import Self

from .configuration import Configuration, ConfigurationSection
from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_ERRORS,
    DEFAULT_LINES_SEPARATOR,
)

READER_SECTION_NAME = 'reader'


@final
class ReaderSettings:
    @classmethod
    def from_configuration_section(
        cls, section: ConfigurationSection[Any], /
    ) -> Self:
        result = cls()
        chunk_size_field = section.get_field_or_none('chunk_size')
        if chunk_size_field is not None:
            chunk_size = chunk_size_field.extract_exact(int)
            if chunk_size <= 0:
                raise ValueError(
                    f'Invalid {chunk_size_field}: '
                    f'expected positive, but got {chunk_size}.'
                )
            result = result.replace(chunk_size=chunk_size)
        encoding_field = section.get_field_or_none('encoding')
        if encoding_field is not None:
            result = result.replace(encoding=encoding_field.extract_exact(str))
        errors_field = section.get_field_or_none('errors')
        if errors_field is not None:
            result = result.replace(errors=errors_field.extract_exact(str))
        separator_field = section.get_field_or_none('separator')
        if separator_field is not None:
            separator = separator_field.extract_exact(str)
            try:
                lines_separator = separator.encode(result.encoding)
            except (LookupError, UnicodeEncodeError) as error:
                raise ValueError(
                    f'Invalid {separator_field}: {error}.'
                ) from error
            if len(lines_separator) != 1:
                raise ValueError(
                    f'Invalid {separator_field}: '
                    'expected to encode to a single byte, '
                    f'but got {lines_separator!r}.'
                )
            result = result.replace(lines_separator=lines_separator)
        return result

    @classmethod
    def from_toml_file_path(cls, file_path: Path, /) -> Self:
        configuration: Configuration[Any] = Configuration.from_toml_file_path(
            file_path
        )
        section = configuration.get_section_or_none(READER_SECTION_NAME)
        return (
            cls() if section is None else cls.from_configuration_section(section)
        )

    @property
    def chunk_size(self, /) -> int:
        return self._chunk_size

    @property
    def encoding(self, /) -> str:
        return self._encoding

    @property
    def errors(self, /) -> str:
        return self._errors

    @property
    def lines_separator(self, /) -> bytes:
        return self._lines_separator

    def replace(
        self,
        /,
        *,
        chunk_size: int | None = None,
        encoding: str | None = None,
        errors: str | None = None,
        lines_separator: bytes | None = None,
    ) -> Self:
        return type(self)(
            chunk_size=(
                self._chunk_size if chunk_size is None else chunk_size
            ),
            encoding=self._encoding if encoding is None else encoding,
            errors=self._errors if errors is None else errors,
            lines_separator=(
                self._lines_separator
                if lines_separator is None
                else lines_separator
            ),
        )

    def to_reader_options(self, /) -> dict[str, Any]:
        return {
            'chunk_size': self._chunk_size,
            'encoding': self._encoding,
            'errors': self._errors,
            'lines_separator': self._lines_separator,
        }

    _chunk_size: int
    _encoding: str
    _errors: str
    _lines_separator: bytes

    __slots__ = '_chunk_size', '_encoding', '_errors', '_lines_separator'

    def __new__(
        cls,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
        lines_separator: bytes = DEFAULT_LINES_SEPARATOR,
    ) -> Self:
        self = super().__new__(cls)
        (
            self._chunk_size,
            self._encoding,
            self._errors,
            self._lines_separator,
        ) = (chunk_size, encoding, errors, lines_separator)
        return self

    def __eq__(self, other: Any, /) -> Any:
        return (
            (
                self._chunk_size == other._chunk_size
                and self._encoding == other._encoding
                and self._errors == other._errors
                and self._lines_separator == other._lines_separator
            )
            if isinstance(other, ReaderSettings)
            else NotImplemented
        )

    def __hash__(self, /) -> int:
        return hash(
            (
                self._chunk_size,
                self._encoding,
                self._errors,
                self._lines_separator,
            )
        )

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            '('
            f'chunk_size={self._chunk_size!r}, '
            f'encoding={self._encoding!r}, '
            f'errors={self._errors!r}, '
            f'lines_separator={self._lines_separator!r}'
            ')'
        )
