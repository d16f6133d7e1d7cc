"""
tokenwatch - SPL token transfer and Metaplex NFT event extraction for Solana
"""

from .utils.handlers import extract, TransactionExtractor, BlockHandler

__version__ = "0.1.0"

__all__ = ['extract', 'TransactionExtractor', 'BlockHandler', '__version__']
