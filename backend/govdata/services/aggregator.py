"""National transaction search: fan-out, merge, dedup, filter, paginate"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import replace

from govdata.config import settings
from govdata.schemas.statistics import MarketStatistics
from govdata.schemas.transaction import SearchCriteria, Transaction
from govdata.services.fallback import FallbackSynthesizer
from govdata.services.filters import apply_filters, filter_by_radius
from govdata.services.statistics import compute_statistics
from govdata.sources import SourceFetcher, default_fetchers

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. Rate limiting
# ---------------------------------------------------------------------------


class RateLimiter:
    """Enforces a minimum interval between consecutive searches."""

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        async with self._lock:
            if self._last is not None:
                elapsed = self._clock() - self._last
                if elapsed < self.min_interval:
                    await self._sleep(self.min_interval - elapsed)
            self._last = self._clock()


# ---------------------------------------------------------------------------
# 2. Dedup / pagination
# ---------------------------------------------------------------------------


def dedup_key(t: Transaction) -> tuple[str, str, str, int]:
    return (t.city, t.street, t.deal_date.isoformat(), t.deal_amount)


def deduplicate(transactions: list[Transaction]) -> list[Transaction]:
    """Drop later records sharing (city, street, date, amount). First occurrence wins."""
    seen: set[tuple[str, str, str, int]] = set()
    unique: list[Transaction] = []
    for t in transactions:
        key = dedup_key(t)
        if key in seen:
            continue
        seen.add(key)
        unique.append(t)
    return unique


def paginate(transactions: list[Transaction], criteria: SearchCriteria) -> list[Transaction]:
    if criteria.limit is None:
        return transactions
    offset = criteria.offset or 0
    return transactions[offset : offset + criteria.limit]


# ---------------------------------------------------------------------------
# 3. Aggregator
# ---------------------------------------------------------------------------


class TransactionAggregator:
    """Searches every live source concurrently and falls back to synthetic data."""

    def __init__(
        self,
        fetchers: Sequence[SourceFetcher] | None = None,
        synthesizer: FallbackSynthesizer | None = None,
        rate_limiter: RateLimiter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.fetchers = list(fetchers) if fetchers is not None else default_fetchers()
        self.synthesizer = synthesizer or FallbackSynthesizer()
        self.rate_limiter = rate_limiter or RateLimiter(settings.rate_limit_interval_seconds)
        self.rng = rng

    async def _fetch_all(self, criteria: SearchCriteria) -> list[Transaction]:
        results = await asyncio.gather(
            *(fetcher.fetch(criteria) for fetcher in self.fetchers),
            return_exceptions=True,
        )
        merged: list[Transaction] = []
        for fetcher, result in zip(self.fetchers, results):
            if isinstance(result, BaseException):
                # fetchers swallow their own errors; this guards custom ones
                logger.warning("%s fetch raised: %r", fetcher.name, result)
                continue
            merged.extend(result)
        return merged

    async def search(self, criteria: SearchCriteria) -> list[Transaction]:
        """Search live sources; when all return nothing, use synthesized data.

        Either set is filtered, radius-filtered and paginated. Live results
        are deduplicated first. Synthesized results skip the city/district
        filter: the synthesizer already narrowed cities, widening to the full
        directory when nothing matched.
        """
        await self.rate_limiter.wait()
        logger.info("Searching national transactions: %s", criteria)

        merged = await self._fetch_all(criteria)
        if merged:
            candidates = deduplicate(merged)
            filter_criteria = criteria
        else:
            logger.info("All %d sources returned no data, generating fallback data", len(self.fetchers))
            candidates = self.synthesizer.generate(criteria, rng=self.rng)
            filter_criteria = replace(criteria, cities=[], districts=[])

        filtered = apply_filters(candidates, filter_criteria)
        if criteria.has_radius:
            filtered = filter_by_radius(filtered, criteria.center_lat, criteria.center_lng, criteria.radius_km)
        result = paginate(filtered, criteria)

        logger.info(
            "Found %d transactions (merged=%d, candidates=%d, filtered=%d)",
            len(result), len(merged), len(candidates), len(filtered),
        )
        return result

    async def statistics(self, criteria: SearchCriteria) -> MarketStatistics:
        return compute_statistics(await self.search(criteria))
