"""
Extraction endpoints.

Decoding failures are reported in the response body. They are data about a
transaction, not transport errors, so these endpoints answer 200 for them.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException
from prometheus_client import Counter
from pydantic import BaseModel, Field

from ..config import Config
from ..utils.handlers import BlockHandler, TransactionExtractor
from ..utils.logging_config import setup_logging
from ..utils.models import ExtractionError

logger = setup_logging('tokenwatch.routers.extract')

router = APIRouter(tags=["Extract"])

EXTRACTIONS = Counter(
    'tokenwatch_extractions_total',
    'Transactions passed through the extractor, by outcome',
    ['status']
)
EVENTS = Counter(
    'tokenwatch_events_total',
    'Events extracted, by event type',
    ['type']
)

extractor = TransactionExtractor()


class ExtractResponse(BaseModel):
    status: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    signature: Optional[str] = None


class BlockRequest(BaseModel):
    slot: Optional[int] = None
    blockTime: Optional[int] = None
    transactions: List[Dict[str, Any]] = Field(default_factory=list)


class BlockResponse(BaseModel):
    slot: Optional[int] = None
    results: List[Dict[str, Any]]
    errors: List[Dict[str, Any]]
    statistics: Dict[str, Any]


def _count_events(result: Dict[str, Any]) -> None:
    for event in result.get('splToken', []) + result.get('nft', []):
        EVENTS.labels(type=event['type']).inc()


@router.post("/extract", response_model=ExtractResponse)
async def extract_transaction(envelope: Dict[str, Any] = Body(...)):
    """Extract token transfers and NFT metadata events from one transaction"""
    outcome = extractor.extract(envelope)

    if outcome is None:
        EXTRACTIONS.labels(status='skipped').inc()
        return ExtractResponse(status="skipped")

    if isinstance(outcome, ExtractionError):
        EXTRACTIONS.labels(status='error').inc()
        return ExtractResponse(status="error", error=outcome.error, signature=outcome.signature)

    EXTRACTIONS.labels(status='matched').inc()
    result = outcome.to_dict()
    _count_events(result)
    return ExtractResponse(status="matched", result=result)


@router.post("/extract/block", response_model=BlockResponse)
async def extract_block(block: BlockRequest):
    """Extract events from every transaction of a block"""
    if len(block.transactions) > Config.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Block has {len(block.transactions)} transactions, limit is {Config.MAX_BATCH_SIZE}"
        )

    handler = BlockHandler(extractor)
    summary = handler.process_block(block.model_dump())

    stats = summary['statistics']
    EXTRACTIONS.labels(status='matched').inc(stats['matched_transactions'])
    EXTRACTIONS.labels(status='skipped').inc(stats['skipped_transactions'])
    EXTRACTIONS.labels(status='error').inc(stats['failed_transactions'])
    for result in summary['results']:
        _count_events(result)

    return BlockResponse(**summary)
