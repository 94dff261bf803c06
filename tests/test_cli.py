import sys
import uuid

import pytest
from click.testing import CliRunner
from loguru import logger

from modinject.cli import cli

MODULES_SOURCE = """
from modinject import module

module('base', []).constant('greeting', 'hello')
module('app', ['base']).provider('message', {'$get': lambda greeting: greeting + ' world'})
module('broken', ['missing'])


def fail():
    raise RuntimeError('database unavailable')


module('failing', []).provider('boom', {'$get': fail})
module('invalid', []).provider('shapeless', {'value': 1})
"""


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def target(tmp_path, monkeypatch):
    name = 'modinject_cli_' + uuid.uuid4().hex
    (tmp_path / f'{name}.py').write_text(MODULES_SOURCE, encoding='utf-8')
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


@pytest.fixture
def runner():
    return CliRunner()


def test_graph_prints_load_order(runner, target):
    result = runner.invoke(cli, ['graph', target, 'app'])

    assert result.exit_code == 0
    lines = [line.strip() for line in result.output.splitlines()]
    assert lines.index('1. base') < lines.index('2. app')
    assert 'requires: base' in lines
    assert 'tokens:   message' in lines


def test_graph_reports_unknown_module(runner, target):
    result = runner.invoke(cli, ['graph', target, 'broken'])

    assert result.exit_code == 1
    assert 'missing' in result.output


def test_resolve_prints_value(runner, target):
    result = runner.invoke(cli, ['resolve', target, 'app', '--token', 'message'])

    assert result.exit_code == 0
    assert "'hello world'" in result.output


def test_resolve_unknown_token(runner, target):
    result = runner.invoke(cli, ['resolve', target, 'app', '--token', 'nothing'])

    assert result.exit_code == 1
    assert 'Unknown provider: nothing' in result.output


def test_resolve_in_strict_mode_requires_annotations(runner, target):
    result = runner.invoke(cli, ['resolve', target, 'app', '--token', 'message', '--strict'])

    assert result.exit_code == 1
    assert 'strict mode' in result.output


def test_unimportable_target(runner):
    result = runner.invoke(cli, ['graph', 'modinject_no_such_module', 'app'])

    assert result.exit_code == 1
    assert 'modinject_no_such_module' in result.output


def test_resolve_reports_provider_failure(runner, target):
    result = runner.invoke(cli, ['resolve', target, 'failing', '--token', 'boom'])

    assert result.exit_code == 1
    assert 'RuntimeError: database unavailable' in result.output
    assert isinstance(result.exception, SystemExit)


def test_resolve_reports_invalid_provider(runner, target):
    result = runner.invoke(cli, ['resolve', target, 'invalid', '--token', 'shapeless'])

    assert result.exit_code == 1
    assert 'does not expose a callable $get' in result.output
    assert isinstance(result.exception, SystemExit)
