"""Market statistics over a transaction set"""

from __future__ import annotations

from collections.abc import Callable
from statistics import mean, median_high

from govdata.schemas.statistics import GroupStats, MarketStatistics, MonthlyPoint
from govdata.schemas.transaction import Transaction

# (label, exclusive upper bound). The last bucket has no upper bound.
DEFAULT_PRICE_BUCKETS: tuple[tuple[str, float | None], ...] = (
    ("<1M", 1_000_000),
    ("1M-2M", 2_000_000),
    ("2M-3M", 3_000_000),
    ("3M-5M", 5_000_000),
    ("5M+", None),
)


# ---------------------------------------------------------------------------
# 1. Grouping
# ---------------------------------------------------------------------------


def _group(
    transactions: list[Transaction],
    key: Callable[[Transaction], str],
    with_area: bool = True,
) -> dict[str, GroupStats]:
    """Group by key in first-seen order."""
    buckets: dict[str, list[Transaction]] = {}
    for t in transactions:
        buckets.setdefault(key(t), []).append(t)

    return {
        k: GroupStats(
            count=len(txns),
            avg_price_per_sqm=round(mean(t.price_per_sqm for t in txns)),
            avg_area=round(mean(t.area for t in txns)) if with_area else None,
        )
        for k, txns in buckets.items()
    }


# ---------------------------------------------------------------------------
# 2. Histogram and trend
# ---------------------------------------------------------------------------


def price_distribution(
    transactions: list[Transaction],
    buckets: tuple[tuple[str, float | None], ...] = DEFAULT_PRICE_BUCKETS,
) -> dict[str, int]:
    """Count deal amounts per price bucket."""
    distribution = {label: 0 for label, _ in buckets}
    for t in transactions:
        for label, upper in buckets:
            if upper is None or t.deal_amount < upper:
                distribution[label] += 1
                break
    return distribution


def monthly_trend(transactions: list[Transaction]) -> list[MonthlyPoint]:
    """Count and mean price per sqm by YYYY-MM, ascending."""
    monthly: dict[str, list[int]] = {}
    for t in transactions:
        monthly.setdefault(t.deal_date.strftime("%Y-%m"), []).append(t.price_per_sqm)
    return [
        MonthlyPoint(month=k, count=len(v), avg_price_per_sqm=round(mean(v)))
        for k, v in sorted(monthly.items())
    ]


# ---------------------------------------------------------------------------
# 3. Aggregate
# ---------------------------------------------------------------------------


def empty_statistics(
    buckets: tuple[tuple[str, float | None], ...] = DEFAULT_PRICE_BUCKETS,
) -> MarketStatistics:
    return MarketStatistics(price_distribution={label: 0 for label, _ in buckets})


def compute_statistics(
    transactions: list[Transaction],
    buckets: tuple[tuple[str, float | None], ...] = DEFAULT_PRICE_BUCKETS,
) -> MarketStatistics:
    """Compute aggregate statistics. Empty input yields a zeroed object.

    The median is the upper middle value of the sorted list.
    """
    if not transactions:
        return empty_statistics(buckets)

    prices_per_sqm = sorted(t.price_per_sqm for t in transactions)
    amounts = sorted(t.deal_amount for t in transactions)

    return MarketStatistics(
        total_transactions=len(transactions),
        avg_price_per_sqm=round(mean(prices_per_sqm)),
        median_price_per_sqm=round(median_high(prices_per_sqm)),
        min_price_per_sqm=prices_per_sqm[0],
        max_price_per_sqm=prices_per_sqm[-1],
        avg_deal_amount=round(mean(amounts)),
        median_deal_amount=round(median_high(amounts)),
        avg_area=round(mean(t.area for t in transactions)),
        avg_rooms=round(mean(t.rooms for t in transactions), 1),
        by_city=_group(transactions, lambda t: t.city),
        by_property_type=_group(transactions, lambda t: t.property_type),
        by_district=_group(transactions, lambda t: t.district, with_area=False),
        price_distribution=price_distribution(transactions, buckets),
        monthly_trend=monthly_trend(transactions),
    )
