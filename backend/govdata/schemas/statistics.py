"""Market statistics schema"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GroupStats:
    """Per-key aggregate. avg_area is omitted (None) for district groups."""

    count: int = 0
    avg_price_per_sqm: int = 0
    avg_area: int | None = None


@dataclass(frozen=True)
class MonthlyPoint:
    month: str  # YYYY-MM
    count: int = 0
    avg_price_per_sqm: int = 0


@dataclass(frozen=True)
class MarketStatistics:
    """Aggregate statistics over a transaction set"""

    total_transactions: int = 0
    avg_price_per_sqm: int = 0
    median_price_per_sqm: int = 0
    min_price_per_sqm: int = 0
    max_price_per_sqm: int = 0

    avg_deal_amount: int = 0
    median_deal_amount: int = 0

    avg_area: int = 0
    avg_rooms: float = 0.0

    by_city: dict[str, GroupStats] = field(default_factory=dict)
    by_property_type: dict[str, GroupStats] = field(default_factory=dict)
    by_district: dict[str, GroupStats] = field(default_factory=dict)

    price_distribution: dict[str, int] = field(default_factory=dict)
    monthly_trend: list[MonthlyPoint] = field(default_factory=list)
