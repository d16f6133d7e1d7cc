"""
Pytest configuration and transaction builders for the tokenwatch tests.
"""

import os
import struct
from typing import Any, Dict, List, Optional

import base58
import pytest
from solders.pubkey import Pubkey

os.environ.setdefault('LOG_TO_FILE', 'False')

from tokenwatch.utils.solana_constants import METADATA_PROGRAM_ID, TOKEN_PROGRAM_ID

BLOCK_TIME = 1700000000
SLOT = 250000000
SIGNATURE = "5h6xBEauJ3PK6SWCZ1PGjBvj8vDdWG3KpwATGy1ARAXFSDwt8GFXM7W5Ncn16wmqokgpiKRLuS83KUxyZyv2sUYv"


def new_key() -> str:
    return str(Pubkey.new_unique())


def transfer_data(amount: int) -> List[int]:
    """Token Program transfer payload: discriminant 3 then a u64 little-endian amount"""
    return list(bytes([3]) + struct.pack('<Q', amount))


def b58(data: List[int]) -> str:
    return base58.b58encode(bytes(data)).decode('utf-8')


class TxBuilder:
    """Builds RPC-shaped transaction envelopes for the extractor"""

    def __init__(self, signature: str = SIGNATURE, slot: int = SLOT, block_time: Optional[int] = BLOCK_TIME):
        self.signature = signature
        self.slot = slot
        self.block_time = block_time
        self.account_keys: List[str] = []
        self.instructions: List[Dict[str, Any]] = []
        self.inner_groups: List[Dict[str, Any]] = []

    def key_index(self, pubkey: str) -> int:
        if pubkey not in self.account_keys:
            self.account_keys.append(pubkey)
        return self.account_keys.index(pubkey)

    def instruction(self, program_id: str, accounts: List[str], data: Any) -> Dict[str, Any]:
        return {
            'programIdIndex': self.key_index(program_id),
            'accounts': [self.key_index(account) for account in accounts],
            'data': data,
        }

    def add(self, program_id: str, accounts: List[str], data: Any) -> Dict[str, Any]:
        instruction = self.instruction(program_id, accounts, data)
        self.instructions.append(instruction)
        return instruction

    def add_inner(self, parent: int, program_id: str, accounts: List[str], data: Any) -> Dict[str, Any]:
        instruction = self.instruction(program_id, accounts, data)
        for group in self.inner_groups:
            if group['index'] == parent:
                group['instructions'].append(instruction)
                return instruction
        self.inner_groups.append({'index': parent, 'instructions': [instruction]})
        return instruction

    def add_transfer(self, sender: str, receiver: str, authority: str, amount: int,
                     mint: Optional[str] = None) -> Dict[str, Any]:
        accounts = [sender, receiver, authority] + ([mint] if mint else [])
        return self.add(TOKEN_PROGRAM_ID, accounts, b58(transfer_data(amount)))

    def add_inner_transfer(self, parent: int, sender: str, receiver: str, authority: str,
                           amount: int, mint: Optional[str] = None) -> Dict[str, Any]:
        accounts = [sender, receiver, authority] + ([mint] if mint else [])
        return self.add_inner(parent, TOKEN_PROGRAM_ID, accounts, b58(transfer_data(amount)))

    def add_create_metadata(self, metadata: str, update_authority: Optional[str] = None,
                            mint: Optional[str] = None) -> Dict[str, Any]:
        accounts = [metadata] + [a for a in (update_authority, mint) if a]
        return self.add(METADATA_PROGRAM_ID, accounts, b58([0, 1, 2, 3]))

    def build(self) -> Dict[str, Any]:
        envelope = {
            'signature': self.signature,
            'slot': self.slot,
            'transaction': {
                'message': {
                    'accountKeys': list(self.account_keys),
                    'instructions': list(self.instructions),
                },
                'meta': {
                    'innerInstructions': list(self.inner_groups),
                },
            },
        }
        if self.block_time is not None:
            envelope['blockTime'] = self.block_time
        return envelope


@pytest.fixture
def tx() -> TxBuilder:
    return TxBuilder()


@pytest.fixture
def wallets() -> Dict[str, str]:
    return {name: new_key() for name in ('sender', 'receiver', 'authority', 'mint', 'metadata')}
