from __future__ import annotations

import io
from typing import BinaryIO, Protocol, final

from typing_extensions import Self

from .errors import SourceError


class ByteSource(Protocol):
    def length(self, /) -> int:
        """Returns total size of the source in bytes."""

    def read_block(self, end_offset: int, max_length: int, /) -> bytes:
        """
        Returns bytes occupying
        ``[max(0, end_offset - max_length), end_offset)`` span.
        """


@final
class StreamByteSource:
    """Adapts seekable binary stream, never closes it."""

    def length(self, /) -> int:
        if self._length is None:
            try:
                self._length = self._stream.seek(0, io.SEEK_END)
            except (OSError, ValueError) as error:
                raise SourceError(
                    f'Failed querying length of {self._stream!r}.'
                ) from error
        return self._length

    def read_block(self, end_offset: int, max_length: int, /) -> bytes:
        start_offset = _to_block_start_offset(
            end_offset, max_length, length=self.length()
        )
        size = end_offset - start_offset
        try:
            self._stream.seek(start_offset)
            result = _read_exactly(self._stream, size)
        except (OSError, ValueError) as error:
            raise SourceError(
                f'Failed reading {size} bytes at offset {start_offset} '
                f'from {self._stream!r}.'
            ) from error
        if len(result) != size:
            raise SourceError(
                f'Invalid {self._stream!r} block: '
                f'expected {size} bytes at offset {start_offset}, '
                f'but got {len(result)}.'
            )
        return result

    _length: int | None
    _stream: BinaryIO

    __slots__ = '_length', '_stream'

    def __new__(cls, stream: BinaryIO, /) -> Self:
        self = super().__new__(cls)
        self._length, self._stream = None, stream
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._stream!r})'


@final
class BytesByteSource:
    """
    Serves blocks of in-memory bytes without copying them up front.

    Holds a ``memoryview`` of the data, so a ``bytearray`` passed in
    cannot be resized (``BufferError``) while the source is alive.
    """

    def length(self, /) -> int:
        return len(self._data)

    def read_block(self, end_offset: int, max_length: int, /) -> bytes:
        start_offset = _to_block_start_offset(
            end_offset, max_length, length=len(self._data)
        )
        return self._data[start_offset:end_offset].tobytes()

    _data: memoryview

    __slots__ = ('_data',)

    def __new__(cls, data: bytes | bytearray | memoryview, /) -> Self:
        self = super().__new__(cls)
        self._data = memoryview(data).cast('B')
        return self

    def __repr__(self, /) -> str:
        return f'{type(self).__qualname__}({self._data.tobytes()!r})'


def _read_exactly(stream: BinaryIO, size: int, /) -> bytes:
    result = bytearray()
    while len(result) < size:
        chunk = stream.read(size - len(result))
        if not chunk:
            break
        result += chunk
    return bytes(result)


def _to_block_start_offset(
    end_offset: int, max_length: int, /, *, length: int
) -> int:
    if max_length <= 0:
        raise ValueError(
            f'Invalid block length: expected positive, but got {max_length}.'
        )
    if not (0 <= end_offset <= length):
        raise ValueError(
            f'Invalid block end offset: '
            f'expected to be from 0 to {length}, but got {end_offset}.'
        )
    return max(0, end_offset - max_length)
