from typing import TypeAlias

from ._core import (
    errors as _errors,
    reverse_lines as _reverse_lines,
    settings as _settings,
    source as _source,
)
from ._core.constants import DEFAULT_CHUNK_SIZE, DEFAULT_LINES_SEPARATOR

__version__ = '0.1.0'

ByteSource: TypeAlias = _source.ByteSource
BytesByteSource: TypeAlias = _source.BytesByteSource
DecodeError: TypeAlias = _errors.DecodeError
ReaderSettings: TypeAlias = _settings.ReaderSettings
ReverseLines: TypeAlias = _reverse_lines.ReverseLines
ReverseLinesError: TypeAlias = _errors.ReverseLinesError
SourceError: TypeAlias = _errors.SourceError
StreamByteSource: TypeAlias = _source.StreamByteSource

__all__ = [
    'DEFAULT_CHUNK_SIZE',
    'DEFAULT_LINES_SEPARATOR',
    'ByteSource',
    'BytesByteSource',
    'DecodeError',
    'ReaderSettings',
    'ReverseLines',
    'ReverseLinesError',
    'SourceError',
    'StreamByteSource',
]
