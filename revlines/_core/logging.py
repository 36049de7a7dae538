from __future__ import annotations

import logging
from typing import Any, Final


class LevelRangeFilter(logging.Filter):
    def __init__(
        self,
        *,
        min_level: int | str | None = None,
        max_level: int | str | None = None,
    ) -> None:
        super().__init__()
        normalized_min_level, normalized_max_level = (
            _normalize_level(min_level),
            _normalize_level(max_level),
        )
        if normalized_min_level is None and normalized_max_level is None:
            raise ValueError('At least one level bound should be specified.')
        if (
            normalized_min_level is not None
            and normalized_max_level is not None
            and normalized_min_level > normalized_max_level
        ):
            raise ValueError(
                f'Invalid level range: minimum {min_level!r} '
                f'is greater than maximum {max_level!r}.'
            )
        self._max_level, self._min_level = (
            normalized_max_level,
            normalized_min_level,
        )

    def filter(self, record: logging.LogRecord) -> bool:
        return (
            self._min_level is None or self._min_level <= record.levelno
        ) and (self._max_level is None or record.levelno <= self._max_level)


def _normalize_level(value: int | str | None, /) -> int | None:
    if not isinstance(value, str):
        return value
    result = logging.getLevelName(value.upper())
    if not isinstance(result, int):
        raise ValueError(f'Unknown logging level: {value!r}.')
    return result


LOGGER_NAME: Final[str] = 'revlines'

DEFAULT_LOGGING_CONFIGURATION: Final[dict[str, Any]] = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'verbose_only': {
            '()': f'{__name__}.{LevelRangeFilter.__qualname__}',
            'max_level': 'INFO',
        },
    },
    'formatters': {
        'brief': {'format': '%(levelname)s: %(message)s'},
        'detailed': {
            'format': '%(asctime)s %(name)s %(levelname)s: %(message)s'
        },
    },
    'handlers': {
        'problems': {
            'class': 'logging.StreamHandler',
            'formatter': 'brief',
            'level': 'WARNING',
            'stream': 'ext://sys.stderr',
        },
        'progress': {
            'class': 'logging.StreamHandler',
            'filters': ['verbose_only'],
            'formatter': 'detailed',
            'level': 'DEBUG',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        LOGGER_NAME: {
            'handlers': ['problems', 'progress'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
