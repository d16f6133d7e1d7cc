"""
Handlers for extracting token-movement events from Solana transactions
"""

from .base_handler import BaseHandler, AccountField, InstructionLayout, TransactionContext
from .instruction_handler import InstructionHandler
from .token_handler import TokenHandler
from .nft_handler import NFTHandler
from .transaction_extractor import TransactionExtractor, extract, references_tracked_program
from .block_handler import BlockHandler

__all__ = [
    'BaseHandler',
    'AccountField',
    'InstructionLayout',
    'TransactionContext',
    'InstructionHandler',
    'TokenHandler',
    'NFTHandler',
    'TransactionExtractor',
    'extract',
    'references_tracked_program',
    'BlockHandler'
]
