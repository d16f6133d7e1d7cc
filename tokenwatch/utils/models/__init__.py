"""
Data models for extracted token-movement events.
"""

from .events import (
    SplTokenTransfer,
    NftMetadataEvent,
    TransferEvent,
    ExtractionResult,
    ExtractionError
)
from .statistics import ExtractionStats

__all__ = [
    'SplTokenTransfer',
    'NftMetadataEvent',
    'TransferEvent',
    'ExtractionResult',
    'ExtractionError',
    'ExtractionStats'
]
