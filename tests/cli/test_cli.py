"""
Tests for the tokenwatch CLI
"""

import json

import pytest
from click.testing import CliRunner

from conftest import TxBuilder, new_key
from tokenwatch_cli.cli import cli
from tokenwatch.utils.solana_constants import METADATA_PROGRAM_ID, TOKEN_PROGRAM_ID


@pytest.fixture
def runner():
    """Create a CLI runner for testing"""
    return CliRunner(env={"COLUMNS": "250"})


@pytest.fixture
def envelopes():
    transfer = TxBuilder(signature='transfersig')
    transfer.add_transfer(new_key(), new_key(), new_key(), 42)
    transfer.add_inner_transfer(0, new_key(), new_key(), new_key(), 7)

    nft = TxBuilder(signature='nftsig')
    nft.add_create_metadata(new_key(), new_key(), new_key())

    return [transfer.build(), nft.build()]


def test_cli_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert '0.1.0' in result.output


def test_cli_help(runner):
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'extract' in result.output
    assert 'programs' in result.output


def test_programs_command(runner):
    result = runner.invoke(cli, ['--no-color', 'programs'])
    assert result.exit_code == 0
    assert TOKEN_PROGRAM_ID in result.output
    assert METADATA_PROGRAM_ID in result.output
    assert 'transfer' in result.output


def test_extract_json_array(runner, tmp_path, envelopes):
    path = tmp_path / "txs.json"
    path.write_text(json.dumps(envelopes))
    output = tmp_path / "out.json"

    result = runner.invoke(cli, ['--no-color', 'extract', str(path), '--output', str(output)])

    assert result.exit_code == 0
    summary = json.loads(output.read_text())
    assert summary['statistics']['matched_transactions'] == 2
    amounts = [e['amount'] for e in summary['results'][0]['splToken']]
    assert amounts == ['42', '7']
    assert summary['results'][1]['nft'][0]['action'] == 'CREATE'


def test_extract_json_lines(runner, tmp_path, envelopes):
    path = tmp_path / "txs.jsonl"
    path.write_text("\n".join(json.dumps(e) for e in envelopes) + "\n")
    output = tmp_path / "out.json"

    result = runner.invoke(cli, ['extract', str(path), '--output', str(output)])

    assert result.exit_code == 0
    assert json.loads(output.read_text())['statistics']['total_transactions'] == 2


def test_extract_single_envelope_json_format(runner, tmp_path, envelopes):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps(envelopes[0]))

    result = runner.invoke(cli, ['--no-color', 'extract', str(path), '--format', 'json'])

    assert result.exit_code == 0
    assert '"SPL_TOKEN_INNER"' in result.stdout
    assert '"42"' in result.stdout


def test_extract_table(runner, tmp_path, envelopes):
    path = tmp_path / "block.json"
    path.write_text(json.dumps({'slot': 9, 'blockTime': 1700000000, 'transactions': envelopes}))

    result = runner.invoke(cli, ['--no-color', 'extract', str(path)])

    assert result.exit_code == 0
    assert 'Extraction Summary' in result.output
    assert 'SPL Token Transfers' in result.output
    assert 'NFT Metadata Events' in result.output


def test_extract_fail_on_errors(runner, tmp_path, envelopes):
    path = tmp_path / "txs.json"
    path.write_text(json.dumps(envelopes + ['garbage']))

    skipped = runner.invoke(cli, ['--no-color', 'extract', str(path)])
    failed = runner.invoke(cli, ['--no-color', 'extract', str(path), '--fail-on-errors'])

    assert skipped.exit_code == 0
    assert failed.exit_code == 1


def test_extract_invalid_file(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json\n[also not")

    result = runner.invoke(cli, ['--no-color', 'extract', str(path)])

    assert result.exit_code == 2
    assert 'invalid JSON' in result.output


def test_extract_empty_file(runner, tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("")

    result = runner.invoke(cli, ['--no-color', 'extract', str(path)])

    assert result.exit_code == 2


def test_extract_prefilter_reports_malformed_transaction(runner, tmp_path, envelopes):
    malformed = {'signature': 'badsig', 'transaction': {'message': ['not', 'a', 'message']}}
    path = tmp_path / "txs.json"
    path.write_text(json.dumps([malformed] + envelopes))
    output = tmp_path / "out.json"

    result = runner.invoke(cli, ['extract', str(path), '--prefilter', '--output', str(output)])

    assert result.exit_code == 0
    summary = json.loads(output.read_text())
    assert summary['statistics']['matched_transactions'] == 2
    assert summary['errors'][0]['signature'] == 'badsig'
