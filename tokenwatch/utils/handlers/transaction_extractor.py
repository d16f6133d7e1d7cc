"""
Transaction extractor: turns one raw Solana transaction into SPL token
transfer and Metaplex metadata events.

extract() is a pure function of its input. It returns an ExtractionResult
when at least one tracked instruction was decoded, None when there is nothing
to forward, and an ExtractionError when the payload could not be decoded. It
never raises.
"""

import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..logging_config import setup_logging
from ..models.events import ExtractionError, ExtractionResult, TransferEvent
from ..solana_error import (
    InvalidInstructionError,
    InvalidProgramIdError,
    MissingTransactionDataError,
    ValidationError
)
from .base_handler import BaseHandler, TransactionContext
from .instruction_handler import InstructionHandler
from .nft_handler import NFTHandler
from .token_handler import TokenHandler

logger = setup_logging('tokenwatch.extractor')

ExtractionOutcome = Optional[Union[ExtractionResult, ExtractionError]]


class TransactionExtractor:
    """Dispatches instructions to program handlers by program id"""

    def __init__(
        self,
        handlers: Optional[Iterable[BaseHandler]] = None,
        clock: Callable[[], float] = time.time
    ):
        self.instructions = InstructionHandler()
        if handlers is None:
            handlers = [TokenHandler(self.instructions), NFTHandler(self.instructions)]
        self.program_handlers: Dict[str, BaseHandler] = {
            handler.program_id: handler for handler in handlers
        }
        self.clock = clock

    @property
    def tracked_programs(self) -> List[str]:
        return list(self.program_handlers)

    def extract(self, envelope: Any) -> ExtractionOutcome:
        """
        Extract token-movement events from one transaction envelope.

        Args:
            envelope: Transaction record, optionally nested under a "data" key

        Returns:
            ExtractionResult, None if nothing qualifies, or ExtractionError
        """
        signature = None
        try:
            record = self._unwrap(envelope)
            transaction = record['transaction']
            signature = self._get_signature(record, transaction)
            message = transaction.get('message') or {}
            account_keys = self.instructions.normalize_account_keys(message.get('accountKeys') or [])
            context = self._build_context(record, signature)

            result = ExtractionResult()
            for position, instruction in enumerate(message.get('instructions') or []):
                event = self._decode_instruction(instruction, account_keys, context, str(position))
                if event is not None:
                    result.add(event)

            for position, instruction in self._iter_inner_instructions(record, transaction):
                event = self._decode_instruction(
                    instruction, account_keys, context, position, inner=True
                )
                if event is not None:
                    result.add(event)

            if result.is_empty():
                return None
            return result

        except MissingTransactionDataError as e:
            logger.debug(f"Nothing to extract: {e}")
            return None
        except Exception as e:
            logger.error(f"Error extracting transaction {signature}: {type(e).__name__}: {e}", exc_info=True)
            return ExtractionError(error=f"{type(e).__name__}: {e}", signature=signature)

    def references_tracked_program(self, envelope: Any) -> bool:
        """
        Cheap pre-filter for the feed: True if any account key is a tracked
        program. The extractor filters on its own; this only saves work.

        Only envelopes that provably reference no tracked program are
        rejected. Malformed ones pass through so that extract() reports them.
        """
        try:
            record = self._unwrap(envelope)
        except MissingTransactionDataError:
            return False
        except ValidationError:
            return True

        transaction = record['transaction']
        message = transaction.get('message') if isinstance(transaction, dict) else None
        if not isinstance(message, dict):
            return True
        keys = message.get('accountKeys')
        if not isinstance(keys, list):
            return True
        account_keys = self.instructions.normalize_account_keys(keys)
        return any(key in self.program_handlers for key in account_keys)

    def _unwrap(self, envelope: Any) -> Dict[str, Any]:
        if envelope is None:
            raise MissingTransactionDataError("envelope is empty")
        if not isinstance(envelope, dict):
            raise ValidationError(f"expected a transaction object, got {type(envelope).__name__}")

        record = envelope['data'] if 'data' in envelope else envelope
        if record is None:
            raise MissingTransactionDataError("envelope has no data record")
        if not isinstance(record, dict):
            raise ValidationError(f"expected a transaction object, got {type(record).__name__}")
        if record.get('transaction') is None:
            raise MissingTransactionDataError("envelope has no transaction field")
        return record

    def _get_signature(self, record: Dict[str, Any], transaction: Dict[str, Any]) -> Optional[str]:
        signature = record.get('signature')
        if signature:
            return signature
        signatures = transaction.get('signatures') or []
        return signatures[0] if signatures else None

    def _build_context(self, record: Dict[str, Any], signature: Optional[str]) -> TransactionContext:
        block_time = record.get('blockTime')
        if block_time is not None:
            return TransactionContext(
                signature=signature,
                slot=record.get('slot'),
                block_timestamp=int(float(block_time) * 1000),
            )

        # Source omitted blockTime: fall back to wall-clock time and flag it
        logger.debug(f"No blockTime for {signature}, using wall-clock timestamp")
        return TransactionContext(
            signature=signature,
            slot=record.get('slot'),
            block_timestamp=int(self.clock() * 1000),
            timestamp_estimated=True,
        )

    def _iter_inner_instructions(
        self,
        record: Dict[str, Any],
        transaction: Dict[str, Any]
    ) -> Iterator[Tuple[str, Dict[str, Any]]]:
        meta = transaction.get('meta') or record.get('meta') or {}
        for group in meta.get('innerInstructions') or []:
            parent = group.get('index')
            for position, instruction in enumerate(group.get('instructions') or []):
                yield f"{parent}.{position}", instruction

    def _decode_instruction(
        self,
        instruction: Dict[str, Any],
        account_keys: Sequence[Optional[str]],
        context: TransactionContext,
        position: str,
        inner: bool = False
    ) -> Optional[TransferEvent]:
        try:
            program_id = self.instructions.resolve_program_id(instruction, account_keys)
            handler = self.program_handlers.get(program_id)
            if handler is None or (inner and not handler.decodes_inner):
                return None
            return handler.decode(instruction, account_keys, context, inner=inner)
        except (InvalidProgramIdError, InvalidInstructionError) as e:
            logger.debug(f"Skipping instruction {position} of {context.signature}: {e}")
            return None


_default_extractor = TransactionExtractor()


def extract(envelope: Any) -> ExtractionOutcome:
    """Extract events from one envelope with the default program handlers"""
    return _default_extractor.extract(envelope)


def references_tracked_program(envelope: Any) -> bool:
    return _default_extractor.references_tracked_program(envelope)
