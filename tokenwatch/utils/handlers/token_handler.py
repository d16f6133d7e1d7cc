"""
Handler for SPL Token Program instructions.
"""

import struct
from typing import Dict, Optional

from ..models.events import SplTokenTransfer
from ..solana_constants import (
    SPL_TOKEN,
    SPL_TOKEN_INNER,
    TOKEN_PROGRAM_ID,
    TOKEN_TRANSFER_DISCRIMINANT,
    U64_SIZE
)
from .base_handler import AccountField, BaseHandler, InstructionLayout, TransactionContext


class TokenHandler(BaseHandler):
    """Decodes Token Program transfers, top-level and nested"""

    program_id = TOKEN_PROGRAM_ID
    program_name = 'spl_token'
    decodes_inner = True

    # Only transfer is modelled; mint_to, burn, approve etc. are ignored
    LAYOUTS = {
        TOKEN_TRANSFER_DISCRIMINANT: InstructionLayout(
            name='transfer',
            accounts=(
                AccountField('sender', 0),
                AccountField('receiver', 1),
                AccountField('authority', 2),
                AccountField('mint', 3, required=False),
            ),
            min_data_length=1 + U64_SIZE,
        ),
    }

    def build_event(
        self,
        layout: InstructionLayout,
        accounts: Dict[str, Optional[str]],
        data: bytes,
        context: TransactionContext,
        inner: bool
    ) -> SplTokenTransfer:
        amount = struct.unpack_from('<Q', data, 1)[0]
        return SplTokenTransfer(
            type=SPL_TOKEN_INNER if inner else SPL_TOKEN,
            sender=accounts['sender'],
            receiver=accounts['receiver'],
            authority=accounts['authority'],
            mint=accounts['mint'],
            amount=str(amount),
            signature=context.signature,
            slot=context.slot,
            block_timestamp=context.block_timestamp,
            timestamp_estimated=context.timestamp_estimated,
        )
