"""
Models for tracking extraction statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .events import ExtractionError, ExtractionResult


@dataclass
class ExtractionStats:
    """Counters kept by callers that run the extractor over many transactions"""
    total_transactions: int = 0
    matched_transactions: int = 0
    skipped_transactions: int = 0
    failed_transactions: int = 0
    spl_token_events: int = 0
    nft_events: int = 0
    error_counts: Dict[str, int] = field(default_factory=dict)

    def record(self, outcome: Optional[Union[ExtractionResult, ExtractionError]]) -> None:
        """Count the outcome of one extract() call"""
        self.total_transactions += 1
        if outcome is None:
            self.skipped_transactions += 1
        elif isinstance(outcome, ExtractionError):
            self.failed_transactions += 1
            key = outcome.error.split(':', 1)[0]
            self.error_counts[key] = self.error_counts.get(key, 0) + 1
        else:
            self.matched_transactions += 1
            self.spl_token_events += len(outcome.spl_token)
            self.nft_events += len(outcome.nft)

    def get_match_rate(self) -> float:
        if self.total_transactions == 0:
            return 0.0
        return self.matched_transactions / self.total_transactions

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary format"""
        return {
            'total_transactions': self.total_transactions,
            'matched_transactions': self.matched_transactions,
            'skipped_transactions': self.skipped_transactions,
            'failed_transactions': self.failed_transactions,
            'spl_token_events': self.spl_token_events,
            'nft_events': self.nft_events,
            'match_rate': self.get_match_rate(),
            'error_counts': dict(self.error_counts),
        }
