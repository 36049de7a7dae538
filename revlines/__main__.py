import copy
import logging
import logging.config
from pathlib import Path

import click
import tomli
from typing_extensions import Self

import revlines
from revlines._core.errors import DecodeError, SourceError
from revlines._core.logging import DEFAULT_LOGGING_CONFIGURATION, LOGGER_NAME
from revlines._core.reverse_lines import ReverseLines
from revlines._core.settings import ReaderSettings


class Context:
    @property
    def logger(self, /) -> logging.Logger:
        return self._logger

    _logger: logging.Logger

    __slots__ = ('_logger',)

    def __new__(cls, *, logger: logging.Logger) -> Self:
        self = super().__new__(cls)
        self._logger = logger
        return self


@click.option(
    '--logging-configuration-file-path',
    default=None,
    help=(
        'Path to a file (in TOML format) with logging configurations, '
        'built-in configuration is used if not specified.'
    ),
    type=click.Path(
        dir_okay=False,
        exists=True,
        file_okay=True,
        path_type=Path,
        readable=True,
    ),
)
@click.option(
    '-v',
    '--verbose',
    count=True,
    help='Controls logs verbosity level.',
    show_default=False,
)
@click.version_option(revlines.__version__, message='%(version)s')
@click.group(context_settings={'show_default': True})
@click.pass_context
def main(
    context: click.Context,
    /,
    *,
    logging_configuration_file_path: Path | None,
    verbose: int,
) -> None:
    logging_configuration = (
        copy.deepcopy(DEFAULT_LOGGING_CONFIGURATION)
        if logging_configuration_file_path is None
        else tomli.loads(logging_configuration_file_path.read_text('utf-8'))
    )
    logging.config.dictConfig(logging_configuration)
    logger = logging.getLogger(LOGGER_NAME)
    new_level = max(1, logger.getEffectiveLevel() - 10 * verbose)
    logger.setLevel(new_level)
    context.obj = Context(logger=logger)


@click.option(
    '--chunk-size',
    default=None,
    help='Number of bytes to read from the file at once.',
    type=click.IntRange(1),
)
@click.option(
    '--configuration-file-path',
    default=None,
    help='Path to a file (in TOML format) with "reader" section.',
    type=click.Path(
        dir_okay=False, exists=True, file_okay=True, path_type=Path
    ),
)
@click.option(
    '--encoding', default=None, help='Encoding to decode lines with.'
)
@click.option(
    '--errors',
    default=None,
    help='Decoding error handler (e.g. "strict", "replace").',
)
@click.option(
    '-n',
    '--lines',
    'lines_count',
    default=0,
    help='Maximum number of lines to print, 0 stands for all of them.',
    type=click.IntRange(0),
)
@click.option(
    '--separator', default=None, help='Single-character lines separator.'
)
@click.argument(
    'file_path',
    type=click.Path(
        dir_okay=False,
        exists=True,
        file_okay=True,
        path_type=Path,
        readable=True,
    ),
)
@main.command
@click.pass_obj
def tail(
    context: Context,
    /,
    *,
    chunk_size: int | None,
    configuration_file_path: Path | None,
    encoding: str | None,
    errors: str | None,
    file_path: Path,
    lines_count: int,
    separator: str | None,
) -> None:
    """Prints lines of a file starting from the last one."""
    logger = context.logger
    try:
        settings = _load_settings(
            configuration_file_path,
            chunk_size=chunk_size,
            encoding=encoding,
            errors=errors,
            separator=separator,
        )
    except (LookupError, TypeError, ValueError) as error:
        raise click.UsageError(str(error)) from error
    logger.debug('Reading %s with %r.', file_path.as_posix(), settings)
    with file_path.open('rb') as file:
        try:
            lines = ReverseLines.from_stream(
                file, **settings.to_reader_options()
            )
        except SourceError as error:
            raise click.ClickException(str(error)) from error
        except (TypeError, ValueError) as error:
            raise click.UsageError(str(error)) from error
        _print_lines(
            lines,
            lines_count=lines_count,
            logger=logger,
            terminator=settings.lines_separator.decode(settings.encoding),
        )


def _load_settings(
    configuration_file_path: Path | None,
    /,
    *,
    chunk_size: int | None,
    encoding: str | None,
    errors: str | None,
    separator: str | None,
) -> ReaderSettings:
    result = (
        ReaderSettings()
        if configuration_file_path is None
        else ReaderSettings.from_toml_file_path(configuration_file_path)
    )
    if separator is None and encoding is not None:
        # configured separator was encoded with the overridden encoding
        separator = result.lines_separator.decode(result.encoding)
    result = result.replace(
        chunk_size=chunk_size, encoding=encoding, errors=errors
    )
    if separator is not None:
        lines_separator = separator.encode(result.encoding)
        if len(lines_separator) != 1:
            raise ValueError(
                f'Invalid separator {separator!r}: '
                'expected to encode to a single byte, '
                f'but got {lines_separator!r}.'
            )
        result = result.replace(lines_separator=lines_separator)
    return result


def _print_lines(
    lines: ReverseLines,
    /,
    *,
    lines_count: int,
    logger: logging.Logger,
    terminator: str,
) -> None:
    printed_lines_count = skipped_lines_count = 0
    while lines_count == 0 or printed_lines_count < lines_count:
        try:
            line = next(lines)
        except StopIteration:
            break
        except DecodeError as error:
            logger.warning('%s Skipping.', error)
            skipped_lines_count += 1
            continue
        except SourceError as error:
            raise click.ClickException(str(error)) from error
        click.echo(line + terminator, nl=False)
        printed_lines_count += 1
    logger.info(
        'Printed %s line(s), skipped %s undecodable one(s).',
        printed_lines_count,
        skipped_lines_count,
    )


if __name__ == '__main__':
    main()
