from __future__ import annotations


class ReverseLinesError(Exception):
    pass


class SourceError(ReverseLinesError, OSError):
    """Length query or block read against a byte source failed."""


class DecodeError(ReverseLinesError, ValueError):
    """
    Single line could not be decoded.

    The line bytes are already consumed when this is raised,
    so iteration may proceed with the previous line.
    """

    @property
    def line(self, /) -> bytes:
        return self._line

    _line: bytes

    def __init__(self, message: str, line: bytes, /) -> None:
        super().__init__(message)
        self._line = line
