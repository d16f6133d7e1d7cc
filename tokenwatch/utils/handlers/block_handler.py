"""
Block handler: runs the transaction extractor over every transaction of a
block and collects the results.
"""

from typing import Any, Dict, List, Optional

from ..logging_config import setup_logging
from ..models.events import ExtractionError
from ..models.statistics import ExtractionStats
from ..solana_error import ValidationError
from .transaction_extractor import TransactionExtractor

logger = setup_logging('tokenwatch.block')


class BlockHandler:
    """Handler for block-level extraction"""

    def __init__(self, extractor: Optional[TransactionExtractor] = None, prefilter: bool = False):
        self.extractor = extractor or TransactionExtractor()
        self.prefilter = prefilter
        # Running totals across every block this handler has seen
        self.stats = ExtractionStats()

    def process_block(self, block_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Extract events from all transactions in a block.

        Transactions in a getBlock response carry neither slot nor blockTime,
        so both are taken from the block when a transaction lacks them. A
        transaction that fails to decode is reported in "errors" and does not
        stop the rest of the block.

        Args:
            block_data: Block object with "slot", "blockTime" and "transactions"

        Returns:
            Dict with the matched results, error signals and block statistics
        """
        if not isinstance(block_data, dict):
            raise ValidationError(f"expected a block object, got {type(block_data).__name__}")

        slot = block_data.get('slot')
        block_time = block_data.get('blockTime')
        transactions = block_data.get('transactions') or []

        block_stats = ExtractionStats()
        results: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []

        for tx in transactions:
            envelope = self._with_block_fields(tx, slot, block_time)
            if self.prefilter and not self.extractor.references_tracked_program(envelope):
                outcome = None
            else:
                outcome = self.extractor.extract(envelope)

            block_stats.record(outcome)
            self.stats.record(outcome)

            if outcome is None:
                continue
            if isinstance(outcome, ExtractionError):
                errors.append(outcome.to_dict())
            else:
                results.append(outcome.to_dict())

        logger.info(
            f"Block {slot}: {block_stats.total_transactions} transactions, "
            f"{block_stats.matched_transactions} matched, "
            f"{block_stats.failed_transactions} failed"
        )

        return {
            'slot': slot,
            'results': results,
            'errors': errors,
            'statistics': block_stats.to_dict()
        }

    def _with_block_fields(self, tx: Any, slot: Optional[int], block_time: Optional[int]) -> Any:
        if not isinstance(tx, dict):
            return tx
        record = tx.get('data') if 'data' in tx else tx
        if not isinstance(record, dict):
            return tx

        filled = dict(record)
        if filled.get('slot') is None:
            filled['slot'] = slot
        if filled.get('blockTime') is None:
            filled['blockTime'] = block_time
        return filled
