from __future__ import annotations

import codecs
from collections.abc import Iterator
from typing import Any, BinaryIO, final

from typing_extensions import Self

from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_ERRORS,
    DEFAULT_LINES_SEPARATOR,
)
from .errors import DecodeError, SourceError
from .source import ByteSource, StreamByteSource


@final
class ReverseLines(Iterator[str]):
    """
    Lazily yields decoded lines of a byte source from the last to the first.

    Buffer holds source bytes ``[read_pointer, read_pointer + len(buffer))``
    in forward order, the tail is cut off line by line
    and the head grows by ``chunk_size`` blocks pulled from the source.
    Terminator at the very end of the source closes the last line
    without producing an empty one.

    ``DecodeError`` is raised for a single undecodable line
    after its bytes were consumed, so calling ``next`` again continues
    with the previous line.
    ``SourceError`` is raised before any state mutation,
    so calling ``next`` again retries the same read.
    """

    @classmethod
    def from_stream(cls, stream: BinaryIO, /, **options: Any) -> Self:
        return cls(StreamByteSource(stream), **options)

    @property
    def buffered_bytes_count(self, /) -> int:
        return len(self._buffer)

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
    def exhausted(self, /) -> bool:
        return self._exhausted

    @property
    def lines_separator(self, /) -> bytes:
        return self._lines_separator

    @property
    def read_pointer(self, /) -> int:
        return self._read_pointer

    _buffer: bytearray
    _chunk_size: int
    _encoding: str
    _errors: str
    _exhausted: bool
    _lines_separator: bytes
    _read_pointer: int
    _source: ByteSource
    _source_length: int

    __slots__ = (
        '_buffer',
        '_chunk_size',
        '_encoding',
        '_errors',
        '_exhausted',
        '_lines_separator',
        '_read_pointer',
        '_source',
        '_source_length',
    )

    def __new__(
        cls,
        source: ByteSource,
        /,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
        lines_separator: bytes = DEFAULT_LINES_SEPARATOR,
    ) -> Self:
        _validate_chunk_size(chunk_size)
        _validate_codec(encoding, errors)
        _validate_lines_separator(lines_separator)
        source_length = source.length()
        self = super().__new__(cls)
        (
            self._buffer,
            self._chunk_size,
            self._encoding,
            self._errors,
            self._exhausted,
            self._lines_separator,
            self._read_pointer,
            self._source,
            self._source_length,
        ) = (
            bytearray(),
            chunk_size,
            encoding,
            errors,
            source_length == 0,
            lines_separator,
            source_length,
            source,
            source_length,
        )
        return self

    def __iter__(self, /) -> Self:
        return self

    def __next__(self, /) -> str:
        if self._exhausted:
            raise StopIteration
        buffer, separator = self._buffer, self._lines_separator
        separator_index = buffer.rfind(separator)
        while separator_index == -1 and self._read_pointer > 0:
            pulled_bytes_count = self._pull_block()
            separator_index = buffer.rfind(separator, 0, pulled_bytes_count)
        if separator_index == -1:
            line = bytes(buffer)
            buffer.clear()
            self._exhausted = True
        else:
            line = bytes(buffer[separator_index + 1 :])
            del buffer[separator_index:]
        return self._decode(line)

    def __repr__(self, /) -> str:
        return (
            f'{type(self).__qualname__}'
            '('
            f'{self._source!r}, '
            f'chunk_size={self._chunk_size!r}, '
            f'encoding={self._encoding!r}, '
            f'errors={self._errors!r}, '
            f'lines_separator={self._lines_separator!r}'
            ')'
        )

    def _decode(self, line: bytes, /) -> str:
        try:
            return line.decode(self._encoding, self._errors)
        except UnicodeDecodeError as error:
            raise DecodeError(
                f'Failed decoding line of {len(line)} bytes '
                f'with {self._encoding!r} encoding: {error.reason}.',
                line,
            ) from error

    def _pull_block(self, /) -> int:
        block = self._source.read_block(self._read_pointer, self._chunk_size)
        if len(block) == 0:
            raise SourceError(
                f'Invalid {self._source!r} block: '
                f'expected bytes before offset {self._read_pointer}, '
                'but got none.'
            )
        pulled_bytes_count = len(block)
        if self._read_pointer == self._source_length and block.endswith(
            self._lines_separator
        ):
            # trailing terminator closes the last line
            block = block[:-1]
        self._buffer[:0] = block
        self._read_pointer -= pulled_bytes_count
        return len(block)


def _validate_chunk_size(value: int, /) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(
            f'Chunk size expected to be {int}, but got {type(value)}.'
        )
    if value <= 0:
        raise ValueError(
            f'Invalid chunk size: expected positive, but got {value}.'
        )


def _validate_codec(encoding: str, errors: str, /) -> None:
    try:
        codec_info = codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f'Unknown encoding: {encoding!r}.') from None
    # e.g. "hex" or "rot13" are not usable with ``bytes.decode``
    if not codec_info._is_text_encoding:
        raise ValueError(f'Invalid encoding {encoding!r}: not a text one.')
    try:
        codecs.lookup_error(errors)
    except LookupError:
        raise ValueError(f'Unknown error handler: {errors!r}.') from None


def _validate_lines_separator(value: bytes, /) -> None:
    if not isinstance(value, bytes):
        raise TypeError(
            f'Lines separator expected to be {bytes}, but got {type(value)}.'
        )
    if len(value) != 1:
        raise ValueError(
            f'Invalid lines separator {value!r}: '
            f'expected single byte, but got {len(value)}.'
        )
