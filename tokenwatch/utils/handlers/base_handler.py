"""
Base handler for the on-chain programs the extractor understands.
Provides the layout table and positional account binding shared by all
program handlers.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..models.events import TransferEvent
from ..solana_error import MalformedInstructionError
from .instruction_handler import InstructionHandler


@dataclass(frozen=True)
class AccountField:
    """A named account bound to a fixed position of the instruction's account list"""
    name: str
    position: int
    required: bool = True


@dataclass(frozen=True)
class InstructionLayout:
    """Fixed record layout of one instruction variant, keyed by discriminant"""
    name: str
    accounts: Tuple[AccountField, ...]
    min_data_length: int = 1


@dataclass(frozen=True)
class TransactionContext:
    """Per-transaction values stamped on every event"""
    signature: Optional[str]
    slot: Optional[int]
    block_timestamp: int
    timestamp_estimated: bool = False


class BaseHandler:
    """Base class for program handlers"""

    program_id: str = ''
    program_name: str = ''
    # Discriminant -> layout. Discriminants missing here are ignored.
    LAYOUTS: Dict[int, InstructionLayout] = {}
    # Whether instructions of this program are decoded when nested
    decodes_inner: bool = False

    def __init__(self, instruction_handler: Optional[InstructionHandler] = None):
        self.instructions = instruction_handler or InstructionHandler()

    def decode(
        self,
        instruction: Dict[str, Any],
        account_keys: Sequence[Optional[str]],
        context: TransactionContext,
        inner: bool = False
    ) -> Optional[TransferEvent]:
        """
        Decode one instruction owned by this program.

        Returns None when the discriminant is not one this handler models.
        Raises MalformedInstructionError when a modelled variant lacks the
        accounts or data bytes it needs.
        """
        data = self.instructions.decode_data(instruction.get('data'))
        discriminant = self.instructions.get_discriminant(data)
        if discriminant is None:
            raise MalformedInstructionError(f"{self.program_name}: empty instruction data")

        layout = self.LAYOUTS.get(discriminant)
        if layout is None:
            return None

        if len(data) < layout.min_data_length:
            raise MalformedInstructionError(
                f"{self.program_name} {layout.name}: expected at least "
                f"{layout.min_data_length} data bytes, got {len(data)}"
            )

        accounts = self.bind_accounts(layout, instruction.get('accounts') or [], account_keys)
        return self.build_event(layout, accounts, data, context, inner)

    def bind_accounts(
        self,
        layout: InstructionLayout,
        instruction_accounts: Sequence[Any],
        account_keys: Sequence[Optional[str]]
    ) -> Dict[str, Optional[str]]:
        """Bind the layout's named fields to their account-list positions"""
        bound = {}
        for account in layout.accounts:
            pubkey = self.instructions.resolve_instruction_account(
                account_keys, instruction_accounts, account.position
            )
            if pubkey is None and account.required:
                raise MalformedInstructionError(
                    f"{self.program_name} {layout.name}: missing or out-of-range "
                    f"'{account.name}' account at position {account.position}"
                )
            bound[account.name] = pubkey
        return bound

    def build_event(
        self,
        layout: InstructionLayout,
        accounts: Dict[str, Optional[str]],
        data: bytes,
        context: TransactionContext,
        inner: bool
    ) -> Optional[TransferEvent]:
        raise NotImplementedError
