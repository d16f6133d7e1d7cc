"""
Models for the token-movement events extracted from Solana transactions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..solana_constants import ACTION_CREATE, METAPLEX_NFT, SPL_TOKEN


@dataclass(frozen=True)
class SplTokenTransfer:
    """An SPL Token Program transfer instruction."""
    sender: str
    receiver: str
    authority: str
    amount: str
    signature: Optional[str]
    slot: Optional[int]
    block_timestamp: int
    mint: Optional[str] = None
    type: str = SPL_TOKEN
    timestamp_estimated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert the transfer to its downstream dictionary shape."""
        result = {
            'type': self.type,
            'sender': self.sender,
            'receiver': self.receiver,
            'authority': self.authority,
            'amount': self.amount,
            'signature': self.signature,
            'slot': self.slot,
            'blockTimestamp': self.block_timestamp,
            'timestampEstimated': self.timestamp_estimated,
        }
        if self.mint is not None:
            result['mint'] = self.mint
        return result


@dataclass(frozen=True)
class NftMetadataEvent:
    """A Metaplex Token Metadata instruction that touched an NFT's metadata."""
    metadata: str
    signature: Optional[str]
    slot: Optional[int]
    block_timestamp: int
    update_authority: Optional[str] = None
    mint: Optional[str] = None
    action: str = ACTION_CREATE
    type: str = METAPLEX_NFT
    timestamp_estimated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to its downstream dictionary shape."""
        result = {
            'type': self.type,
            'metadata': self.metadata,
            'action': self.action,
            'signature': self.signature,
            'slot': self.slot,
            'blockTimestamp': self.block_timestamp,
            'timestampEstimated': self.timestamp_estimated,
        }
        if self.update_authority is not None:
            result['updateAuthority'] = self.update_authority
        if self.mint is not None:
            result['mint'] = self.mint
        return result


TransferEvent = Union[SplTokenTransfer, NftMetadataEvent]


@dataclass
class ExtractionResult:
    """Events found in one transaction, in discovery order."""
    spl_token: List[SplTokenTransfer] = field(default_factory=list)
    nft: List[NftMetadataEvent] = field(default_factory=list)

    def add(self, event: TransferEvent) -> None:
        if isinstance(event, NftMetadataEvent):
            self.nft.append(event)
        else:
            self.spl_token.append(event)

    def is_empty(self) -> bool:
        return not self.spl_token and not self.nft

    def to_dict(self) -> Dict[str, Any]:
        return {
            'splToken': [event.to_dict() for event in self.spl_token],
            'nft': [event.to_dict() for event in self.nft],
        }


@dataclass(frozen=True)
class ExtractionError:
    """Error signal returned when a transaction could not be decoded."""
    error: str
    signature: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': self.error,
            'signature': self.signature,
        }
