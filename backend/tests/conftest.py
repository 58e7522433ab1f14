from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import replace
from datetime import date
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from govdata.api.deps import get_aggregator
from govdata.main import app
from govdata.schemas.city import Coordinates
from govdata.schemas.transaction import SearchCriteria, Source, Transaction
from govdata.services.aggregator import RateLimiter, TransactionAggregator
from govdata.sources import SourceFetcher

_BASE = Transaction(
    deal_id="T-1",
    deal_date=date(2025, 6, 15),
    deal_amount=2_000_000,
    price_per_sqm=20_000,
    property_type="apartment",
    property_type_he="דירה",
    rooms=4,
    area=100,
    city="Tel Aviv-Yafo",
    city_he="תל אביב-יפו",
    city_code="5000",
    district="Tel Aviv",
    district_he="תל אביב",
    street="רחוב דיזנגוף",
    verified=True,
    source=Source.REGISTRY,
    coordinates=Coordinates(latitude=32.0853, longitude=34.7818),
)


def make_transaction(**overrides: Any) -> Transaction:
    """Build a consistent Transaction; price_per_sqm follows amount/area unless given."""
    if "price_per_sqm" not in overrides and ("deal_amount" in overrides or "area" in overrides):
        amount = overrides.get("deal_amount", _BASE.deal_amount)
        area = overrides.get("area", _BASE.area)
        overrides["price_per_sqm"] = round(amount / area)
    return replace(_BASE, **overrides)


class StubFetcher(SourceFetcher):
    """Fetcher returning canned transactions (or raising) without any HTTP."""

    def __init__(self, name: str, transactions: list[Transaction] | None = None, error: Exception | None = None):
        super().__init__("http://stub.invalid")
        self.name = name
        self.transactions = transactions or []
        self.error = error
        self.calls: list[SearchCriteria] = []

    async def fetch(self, criteria: SearchCriteria) -> list[Transaction]:
        self.calls.append(criteria)
        if self.error is not None:
            raise self.error
        return list(self.transactions)


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_aggregator(*fetchers: SourceFetcher, **kwargs: Any) -> TransactionAggregator:
    kwargs.setdefault("rate_limiter", RateLimiter(0))
    return TransactionAggregator(fetchers=list(fetchers), **kwargs)


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    live = [
        make_transaction(deal_id="A", deal_amount=2_800_000, area=100),
        make_transaction(deal_id="B", deal_amount=1_500_000, area=75, verified=False),
    ]
    aggregator = make_aggregator(StubFetcher("Stub", live))
    app.dependency_overrides[get_aggregator] = lambda: aggregator

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
