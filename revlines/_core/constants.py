from __future__ import annotations

from typing import Final

DEFAULT_CHUNK_SIZE: Final[int] = 4096
DEFAULT_ENCODING: Final[str] = 'utf-8'
DEFAULT_ERRORS: Final[str] = 'strict'
DEFAULT_LINES_SEPARATOR: Final[bytes] = b'\n'
