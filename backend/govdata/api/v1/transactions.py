"""Transaction search endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from govdata.api.deps import get_aggregator
from govdata.schemas.statistics import MarketStatistics
from govdata.schemas.transaction import SearchCriteria, Transaction
from govdata.services.aggregator import TransactionAggregator


router = APIRouter()


@router.post("/search")
async def search_transactions(
    criteria: SearchCriteria,
    aggregator: TransactionAggregator = Depends(get_aggregator),
) -> list[Transaction]:
    """Search every source. Falls back to synthetic data when none responds;
    the ``source`` field on each record carries its provenance.
    """
    return await aggregator.search(criteria)


@router.post("/statistics")
async def search_statistics(
    criteria: SearchCriteria,
    aggregator: TransactionAggregator = Depends(get_aggregator),
) -> MarketStatistics:
    return await aggregator.statistics(criteria)
