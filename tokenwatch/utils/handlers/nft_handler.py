"""
NFT handler for Metaplex Token Metadata instructions.
"""
from typing import Dict, Optional

from ..models.events import NftMetadataEvent
from ..solana_constants import ACTION_CREATE, METADATA_CREATE_DISCRIMINANT, METADATA_PROGRAM_ID
from .base_handler import AccountField, BaseHandler, InstructionLayout, TransactionContext


class NFTHandler(BaseHandler):
    """Handler for Metadata Program instructions"""

    program_id = METADATA_PROGRAM_ID
    program_name = 'metadata'
    # Nested metadata instructions are not decoded
    decodes_inner = False

    # Only create-metadata is modelled. Updates, verification and ownership
    # changes carry other discriminants and are ignored.
    LAYOUTS = {
        METADATA_CREATE_DISCRIMINANT: InstructionLayout(
            name='create_metadata_account',
            accounts=(
                AccountField('metadata', 0),
                AccountField('update_authority', 1, required=False),
                AccountField('mint', 2, required=False),
            ),
        ),
    }

    ACTIONS = {
        METADATA_CREATE_DISCRIMINANT: ACTION_CREATE,
    }

    def build_event(
        self,
        layout: InstructionLayout,
        accounts: Dict[str, Optional[str]],
        data: bytes,
        context: TransactionContext,
        inner: bool
    ) -> NftMetadataEvent:
        return NftMetadataEvent(
            metadata=accounts['metadata'],
            update_authority=accounts['update_authority'],
            mint=accounts['mint'],
            action=self.ACTIONS[data[0]],
            signature=context.signature,
            slot=context.slot,
            block_timestamp=context.block_timestamp,
            timestamp_estimated=context.timestamp_estimated,
        )
