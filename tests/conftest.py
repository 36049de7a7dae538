from __future__ import annotations

from collections.abc import Callable

import pytest

from revlines import BytesByteSource, SourceError


class RecordingByteSource:
    """Serves bytes from memory, records reads and fails the first ones."""

    def __init__(self, data: bytes, /, *, failures_count: int = 0) -> None:
        self._failures_count = failures_count
        self._wrapped = BytesByteSource(data)
        self.reads: list[tuple[int, int]] = []

    def length(self, /) -> int:
        return self._wrapped.length()

    def read_block(self, end_offset: int, max_length: int, /) -> bytes:
        if self._failures_count > 0:
            self._failures_count -= 1
            raise SourceError(f'Simulated failure at offset {end_offset}.')
        self.reads.append((end_offset, max_length))
        return self._wrapped.read_block(end_offset, max_length)


@pytest.fixture
def recording_source() -> Callable[..., RecordingByteSource]:
    return RecordingByteSource
