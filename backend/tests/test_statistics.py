"""Market statistics."""

from __future__ import annotations

from datetime import date

from conftest import make_transaction
from govdata.schemas.statistics import GroupStats, MonthlyPoint
from govdata.services.statistics import compute_statistics, price_distribution


def test_empty_input_yields_zeroed_statistics():
    stats = compute_statistics([])

    assert stats.total_transactions == 0
    assert stats.avg_price_per_sqm == 0
    assert stats.median_price_per_sqm == 0
    assert stats.avg_rooms == 0.0
    assert stats.by_city == {}
    assert stats.by_property_type == {}
    assert stats.by_district == {}
    assert stats.monthly_trend == []
    assert stats.price_distribution == {"<1M": 0, "1M-2M": 0, "2M-3M": 0, "3M-5M": 0, "5M+": 0}


def test_price_per_sqm_summary():
    txns = [
        make_transaction(deal_amount=1_000_000, area=100, price_per_sqm=10_000),
        make_transaction(deal_amount=3_000_000, area=100, price_per_sqm=30_000),
        make_transaction(deal_amount=2_000_000, area=100, price_per_sqm=20_000),
    ]
    stats = compute_statistics(txns)

    assert stats.total_transactions == 3
    assert stats.median_price_per_sqm == 20_000
    assert stats.avg_price_per_sqm == 20_000
    assert stats.min_price_per_sqm == 10_000
    assert stats.max_price_per_sqm == 30_000
    assert stats.avg_deal_amount == 2_000_000
    assert stats.median_deal_amount == 2_000_000


def test_even_count_median_takes_upper_middle():
    txns = [make_transaction(price_per_sqm=p) for p in (10_000, 20_000, 30_000, 40_000)]
    assert compute_statistics(txns).median_price_per_sqm == 30_000


def test_groupings():
    txns = [
        make_transaction(deal_amount=2_000_000, area=100, rooms=3),
        make_transaction(deal_amount=3_000_000, area=100, rooms=4),
        make_transaction(
            deal_amount=1_200_000, area=80, rooms=3,
            city="Haifa", city_he="חיפה", city_code="4000", district="Haifa", district_he="חיפה",
            property_type="office", property_type_he="משרד",
        ),
    ]
    stats = compute_statistics(txns)

    assert stats.by_city == {
        "Tel Aviv-Yafo": GroupStats(count=2, avg_price_per_sqm=25_000, avg_area=100),
        "Haifa": GroupStats(count=1, avg_price_per_sqm=15_000, avg_area=80),
    }
    assert stats.by_property_type["apartment"].count == 2
    assert stats.by_property_type["office"].avg_price_per_sqm == 15_000
    assert stats.by_district["Tel Aviv"] == GroupStats(count=2, avg_price_per_sqm=25_000)
    assert stats.avg_rooms == 3.3


def test_price_distribution_boundaries():
    amounts = [999_999, 1_000_000, 2_500_000, 3_000_000, 4_999_999, 5_000_000, 12_000_000]
    txns = [make_transaction(deal_amount=a) for a in amounts]

    assert price_distribution(txns) == {"<1M": 1, "1M-2M": 1, "2M-3M": 1, "3M-5M": 2, "5M+": 2}


def test_custom_buckets():
    txns = [make_transaction(deal_amount=a) for a in (400_000, 800_000, 1_600_000)]
    buckets = (("cheap", 500_000), ("rest", None))

    assert price_distribution(txns, buckets) == {"cheap": 1, "rest": 2}
    assert compute_statistics([], buckets).price_distribution == {"cheap": 0, "rest": 0}


def test_monthly_trend_ascending():
    txns = [
        make_transaction(deal_date=date(2025, 3, 20), price_per_sqm=22_000),
        make_transaction(deal_date=date(2024, 12, 5), price_per_sqm=18_000),
        make_transaction(deal_date=date(2025, 3, 2), price_per_sqm=24_000),
    ]
    assert compute_statistics(txns).monthly_trend == [
        MonthlyPoint(month="2024-12", count=1, avg_price_per_sqm=18_000),
        MonthlyPoint(month="2025-03", count=2, avg_price_per_sqm=23_000),
    ]
