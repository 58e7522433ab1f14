"""Statistics over a caller-supplied transaction set."""

from __future__ import annotations

from fastapi import APIRouter

from govdata.schemas.statistics import MarketStatistics
from govdata.schemas.transaction import Transaction
from govdata.services.statistics import compute_statistics

router = APIRouter()


@router.post("")
async def statistics(transactions: list[Transaction]) -> MarketStatistics:
    return compute_statistics(transactions)
