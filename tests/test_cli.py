from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import revlines
from revlines.__main__ import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def log_file_path(tmp_path: Path) -> Path:
    return tmp_path / 'revlines.log'


@pytest.fixture
def logging_configuration_file_path(
    tmp_path: Path, log_file_path: Path
) -> Path:
    result = tmp_path / 'logging.toml'
    result.write_text(
        'version = 1\n'
        'disable_existing_loggers = false\n'
        '[handlers.file]\n'
        'class = "logging.FileHandler"\n'
        f'filename = "{log_file_path.as_posix()}"\n'
        'level = "DEBUG"\n'
        '[loggers.revlines]\n'
        'handlers = ["file"]\n'
        'level = "WARNING"\n'
        'propagate = false\n',
        encoding='utf-8',
    )
    return result


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ['--version'])

    assert result.exit_code == 0
    assert result.output.strip() == revlines.__version__


def test_tail(runner: CliRunner, tmp_path: Path) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(b'a\nb\nc\n')

    result = runner.invoke(main, ['tail', str(file_path)])

    assert result.exit_code == 0, result.output
    assert result.stdout == 'c\nb\na\n'


def test_tail_lines_count(runner: CliRunner, tmp_path: Path) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(
        b''.join(b'line %d\n' % index for index in range(100))
    )

    result = runner.invoke(
        main, ['tail', '-n', '2', '--chunk-size', '3', str(file_path)]
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == 'line 99\nline 98\n'


def test_tail_empty_file(runner: CliRunner, tmp_path: Path) -> None:
    file_path = tmp_path / 'empty.log'
    file_path.write_bytes(b'')

    result = runner.invoke(main, ['tail', str(file_path)])

    assert result.exit_code == 0, result.output
    assert result.stdout == ''


def test_tail_separator(runner: CliRunner, tmp_path: Path) -> None:
    file_path = tmp_path / 'records'
    file_path.write_bytes(b'a;b;c')

    result = runner.invoke(main, ['tail', '--separator', ';', str(file_path)])

    assert result.exit_code == 0, result.output
    assert result.stdout == 'c;b;a;'


def test_tail_configuration_file(runner: CliRunner, tmp_path: Path) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes('первая\nвторая\n'.encode('cp1251'))
    configuration_file_path = tmp_path / 'revlines.toml'
    configuration_file_path.write_text(
        '[reader]\nchunk_size = 2\nencoding = "cp1251"\n', encoding='utf-8'
    )

    result = runner.invoke(
        main,
        [
            'tail',
            '--configuration-file-path',
            str(configuration_file_path),
            str(file_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == 'вторая\nпервая\n'


def test_tail_options_override_configuration_file(
    runner: CliRunner, tmp_path: Path
) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(b'ok\n\xff\n')
    configuration_file_path = tmp_path / 'revlines.toml'
    configuration_file_path.write_text(
        '[reader]\nerrors = "strict"\n', encoding='utf-8'
    )

    result = runner.invoke(
        main,
        [
            'tail',
            '--configuration-file-path',
            str(configuration_file_path),
            '--errors',
            'replace',
            str(file_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == '\ufffd\nok\n'


def test_tail_encoding_overrides_configured_separator(
    runner: CliRunner, tmp_path: Path
) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes('одинждваж'.encode('koi8-r'))
    configuration_file_path = tmp_path / 'revlines.toml'
    configuration_file_path.write_text(
        '[reader]\nencoding = "cp1251"\nseparator = "ж"\n',
        encoding='utf-8',
    )

    result = runner.invoke(
        main,
        [
            'tail',
            '--configuration-file-path',
            str(configuration_file_path),
            '--encoding',
            'koi8-r',
            str(file_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == 'дважодинж'


def test_tail_skips_undecodable_lines(
    runner: CliRunner,
    tmp_path: Path,
    log_file_path: Path,
    logging_configuration_file_path: Path,
) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(b'first\n\xff\xfe\nlast\n')

    result = runner.invoke(
        main,
        [
            '--logging-configuration-file-path',
            str(logging_configuration_file_path),
            'tail',
            str(file_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == 'last\nfirst\n'
    assert 'Skipping' in log_file_path.read_text('utf-8')


def test_tail_verbose(
    runner: CliRunner,
    tmp_path: Path,
    log_file_path: Path,
    logging_configuration_file_path: Path,
) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(b'a\nb\n')

    result = runner.invoke(
        main,
        [
            '--logging-configuration-file-path',
            str(logging_configuration_file_path),
            '-vv',
            'tail',
            str(file_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout == 'b\na\n'
    assert 'Printed 2 line(s)' in log_file_path.read_text('utf-8')


def test_tail_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(main, ['tail', str(tmp_path / 'missing.log')])

    assert result.exit_code == 2


@pytest.mark.parametrize(
    'options',
    [
        ['--separator', 'ab'],
        ['--encoding', 'no-such-encoding'],
        ['--encoding', 'hex'],
        ['--errors', 'no-such-handler'],
        ['--chunk-size', '0'],
    ],
)
def test_tail_invalid_options(
    runner: CliRunner, tmp_path: Path, options: list[str]
) -> None:
    file_path = tmp_path / 'app.log'
    file_path.write_bytes(b'a\n')

    result = runner.invoke(main, ['tail', *options, str(file_path)])

    assert result.exit_code == 2
