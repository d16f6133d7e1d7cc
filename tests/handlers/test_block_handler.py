"""
Tests for block-level extraction.
"""

import pytest

from conftest import TxBuilder, b58, new_key
from tokenwatch.utils.handlers.block_handler import BlockHandler
from tokenwatch.utils.solana_error import ValidationError


def rpc_block_transaction(builder: TxBuilder):
    """Shape a built envelope like a getBlock entry: no slot, blockTime or signature"""
    envelope = builder.build()
    transaction = envelope['transaction']
    transaction['signatures'] = [builder.signature]
    return {'transaction': transaction, 'meta': transaction.pop('meta')}


@pytest.fixture
def block():
    sender, receiver, authority = new_key(), new_key(), new_key()

    transfer = TxBuilder(signature='transfer', block_time=None)
    transfer.add_transfer(sender, receiver, authority, 500)

    nft = TxBuilder(signature='nft', block_time=None)
    nft.add_create_metadata(new_key(), authority, new_key())

    vote = TxBuilder(signature='vote', block_time=None)
    vote.add('Vote111111111111111111111111111111111111111', [sender], b58([2, 0, 0, 0]))

    return {
        'slot': 300,
        'blockTime': 1710000000,
        'transactions': [
            rpc_block_transaction(transfer),
            rpc_block_transaction(nft),
            rpc_block_transaction(vote),
            'garbage',
        ]
    }


def test_process_block(block):
    handler = BlockHandler()

    summary = handler.process_block(block)

    assert summary['slot'] == 300
    assert len(summary['results']) == 2
    assert len(summary['errors']) == 1

    transfer_event = summary['results'][0]['splToken'][0]
    assert transfer_event['amount'] == '500'
    assert transfer_event['signature'] == 'transfer'
    assert transfer_event['slot'] == 300
    assert transfer_event['blockTimestamp'] == 1710000000000
    assert transfer_event['timestampEstimated'] is False

    nft_event = summary['results'][1]['nft'][0]
    assert nft_event['action'] == 'CREATE'
    assert nft_event['signature'] == 'nft'

    stats = summary['statistics']
    assert stats['total_transactions'] == 4
    assert stats['matched_transactions'] == 2
    assert stats['skipped_transactions'] == 1
    assert stats['failed_transactions'] == 1
    assert stats['spl_token_events'] == 1
    assert stats['nft_events'] == 1
    assert stats['error_counts'] == {'ValidationError': 1}


def test_block_fields_do_not_override_transaction_fields(block):
    transaction = block['transactions'][0]
    transaction['slot'] = 299
    transaction['blockTime'] = 1600000000

    summary = BlockHandler().process_block(block)

    event = summary['results'][0]['splToken'][0]
    assert event['slot'] == 299
    assert event['blockTimestamp'] == 1600000000000


def test_block_does_not_mutate_input(block):
    first = block['transactions'][0]

    BlockHandler().process_block(block)

    assert 'slot' not in first
    assert 'blockTime' not in first


def test_running_statistics_accumulate(block):
    handler = BlockHandler()

    handler.process_block(block)
    handler.process_block(block)

    assert handler.stats.total_transactions == 8
    assert handler.stats.matched_transactions == 4


def test_prefilter_skips_untracked(block):
    handler = BlockHandler(prefilter=True)

    summary = handler.process_block(block)

    # only the vote transaction is filtered out; the garbage entry is still reported
    assert summary['statistics']['skipped_transactions'] == 1
    assert summary['statistics']['failed_transactions'] == 1
    assert len(summary['results']) == 2


def test_prefilter_isolates_malformed_message(block):
    block['transactions'].insert(0, {'transaction': {'message': ['not', 'a', 'message'], 'signatures': ['bad']}})

    summary = BlockHandler(prefilter=True).process_block(block)

    assert len(summary['results']) == 2
    assert summary['errors'][0]['signature'] == 'bad'
    assert summary['errors'][0]['error'].startswith('AttributeError')
    assert summary['statistics']['failed_transactions'] == 2


def test_empty_block():
    summary = BlockHandler().process_block({'slot': 1, 'transactions': []})

    assert summary['results'] == []
    assert summary['statistics']['total_transactions'] == 0
    assert summary['statistics']['match_rate'] == 0.0


def test_invalid_block():
    with pytest.raises(ValidationError):
        BlockHandler().process_block(['not', 'a', 'block'])
