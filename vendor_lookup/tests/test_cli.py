"""Tests for the click command line interface."""
import json

import pytest
from click.testing import CliRunner

from ..cli.config import Config
from ..cli.main import cli
from ..commands.watch import WatchCommand
from ..processors.refresh import RefreshOrchestrator
from .conftest import HEADER_CSV, StubFetcher


@pytest.fixture
def runner(monkeypatch):
    for name in ('VENDOR_LOOKUP_SOURCE', 'REFRESH_INTERVAL', 'FETCH_TIMEOUT', 'LOG_LEVEL', 'OUTPUT_FORMAT'):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def test_lookup_exact(runner, csv_file):
    result = runner.invoke(cli, ['--source', str(csv_file), 'lookup', ' ACME   Corp '])
    assert result.exit_code == 0, result.output
    assert 'Exact: ACME   Corp -> Northwind' in result.output


def test_lookup_fuzzy_json(runner, csv_file):
    result = runner.invoke(cli, ['--source', str(csv_file), '--format', 'json', 'lookup', 'acm'])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload['kind'] == 'fuzzy'
    assert payload['matches'] == [{'customer': 'Acme Corp', 'vendor': 'Northwind', 'exact': False}]


def test_lookup_no_match(runner, csv_file):
    result = runner.invoke(cli, ['--source', str(csv_file), 'lookup', 'Umbrella'])
    assert result.exit_code == 0
    assert "No vendor found for 'Umbrella'" in result.output


def test_first_load_failure_exits_non_zero(runner, tmp_path):
    result = runner.invoke(cli, ['--source', str(tmp_path / 'missing.csv'), 'lookup', 'Acme'])
    assert result.exit_code != 0
    assert 'Initial load failed' in result.output


def test_source_from_environment(runner, csv_file, monkeypatch):
    monkeypatch.setenv('VENDOR_LOOKUP_SOURCE', str(csv_file))
    result = runner.invoke(cli, ['lookup', 'globex inc'])
    assert result.exit_code == 0, result.output
    assert 'Initech' in result.output


def test_table_with_filter_and_output(runner, csv_file, tmp_path):
    output = tmp_path / 'table.csv'
    result = runner.invoke(cli, [
        '--source', str(csv_file), '--format', 'csv',
        'table', '--filter', 'north', '--output', str(output)
    ])
    assert result.exit_code == 0, result.output
    assert output.read_text(encoding='utf-8').splitlines() == ['customer,vendor', 'Acme Corp,Northwind']


def test_invalid_interval_is_rejected(runner, csv_file, monkeypatch):
    monkeypatch.setenv('REFRESH_INTERVAL', '0')
    result = runner.invoke(cli, ['--source', str(csv_file), 'table'])
    assert result.exit_code != 0


def test_watch_session(runner, csv_file):
    result = runner.invoke(
        cli,
        ['--source', str(csv_file), 'watch', '--interval', '60'],
        input='acme corp\n:filter globex\n:status\n:quit\n'
    )
    assert result.exit_code == 0, result.output
    assert 'Data updated: 3 records' in result.output
    assert 'Exact: acme corp -> Northwind' in result.output
    assert 'Globex Inc.' in result.output
    assert 'Rebuilds: 1' in result.output
    assert 'Last refresh: updated (startup)' in result.output
    assert 'Failed refreshes: 0' in result.output


def test_config_validate():
    assert Config().validate()
    with pytest.raises(ValueError):
        Config(fetch_timeout=-1).validate()
    with pytest.raises(ValueError):
        Config(output_format='xml').validate()


@pytest.mark.asyncio
async def test_watch_reruns_query_after_update(capsys):
    command = WatchCommand(Config(refresh_interval=60))
    fetcher = StubFetcher(HEADER_CSV, 'customer,vendor\nAcme Corp,Contoso\n')
    orchestrator = RefreshOrchestrator(fetcher, command.store, interval=60)
    orchestrator.add_listener(command.on_update)

    await orchestrator.start()
    assert await command.handle_line(orchestrator, 'Acme Corp')
    assert await command.handle_line(orchestrator, ':pause')
    assert not orchestrator.polling
    assert await command.handle_line(orchestrator, ':resume')
    assert orchestrator.polling
    assert not await command.handle_line(orchestrator, ':quit')
    await orchestrator.stop()

    out = capsys.readouterr().out
    assert 'Exact: Acme Corp -> Northwind' in out
    assert 'Polling paused' in out
    assert 'Exact: Acme Corp -> Contoso' in out
    assert 'Refresh updated' in out
