"""Synthetic transaction generator used when every live source is down.

Output is anchored to each city's baseline price per sqm and honours the
caller's area, rooms, type, date, cadastral, amenity and geo-radius
constraints.
Randomness comes from an injectable ``random.Random``; a fixed seed
reproduces the exact same set.
"""

from __future__ import annotations

import logging
import math
import random
from datetime import date, timedelta

from govdata.config import settings
from govdata.schemas.city import City, Coordinates
from govdata.schemas.transaction import DealType, SearchCriteria, Source, Transaction
from govdata.services.cities import DEFAULT_PRICE_PER_SQM, select_cities
from govdata.services.filters import haversine_km

logger = logging.getLogger(__name__)

# Hebrew label → canonical type
PROPERTY_TYPES: dict[str, str] = {
    "דירה": "apartment",
    "משרד": "office",
    "דירת גן": "garden-apartment",
    "פנטהאוז": "penthouse",
    "דו משפחתי": "duplex",
    "מגרש": "land",
    "בית פרטי": "house",
    "חנות": "shop",
}
_PROPERTY_TYPES_HE = {en: he for he, en in PROPERTY_TYPES.items()}
DEFAULT_PROPERTY_TYPES = ["דירה", "משרד", "דירת גן", "פנטהאוז", "דו משפחתי"]

STREETS = [
    "רחוב הרצל", "רחוב ויצמן", "רחוב בן גוריון", "רחוב ז'בוטינסקי",
    "רחוב רוטשילד", "רחוב אחד העם", "רחוב דיזנגוף", "רחוב בן יהודה",
    "רחוב ירושלים", "רחוב תל אביב", "שדרות ירושלים", "רחוב הנשיא",
    "רחוב המלך דוד", "רחוב סוקולוב", "רחוב ביאליק",
]

NEIGHBORHOODS: dict[str, list[str]] = {
    "תל אביב-יפו": ["צפון ישן", "נווה צדק", "רמת אביב", "פלורנטין", "יפו", "רמת שרת"],
    "ירושלים": ["רחביה", "טלביה", "בית הכרם", "קטמון", "גילה", "רמות"],
    "חיפה": ["הדר", "כרמל צרפתי", "נווה שאנן", "רמת אלמוגי"],
    "באר שבע": ["רמות", "נווה נוי", "נווה זאב", "דרום העיר"],
    "ראשון לציון": ["מערב העיר", "שיכון ותיקים", "נווה ילדים"],
    "פתח תקווה": ["קריית אריה", "סגולה", "עין גנים"],
}
DEFAULT_NEIGHBORHOODS = ["מרכז העיר", "שכונה צפונית", "שכונה דרומית"]

CONDITIONS = ["חדש", "משופץ", "שמור", "דורש שיפוץ"]
AIR_DIRECTIONS = ["צפון", "דרום", "מזרח", "מערב"]

DEFAULT_AREA_RANGE = (60.0, 140.0)
DEFAULT_ROOMS_RANGE = (2, 5)
PRICE_VARIATION = (0.75, 1.25)
COORD_JITTER = 0.025
# worst-case jitter offset in km (0.025° lat and lng at ~32°N)
JITTER_KM = 4.0
MIN_SIZE = 1.0  # smallest generated area or room count
LOOKBACK_DAYS = 365

# Probability that an unconstrained flag is set
P_PARKING = 0.7
P_ELEVATOR = 0.6
P_WAREHOUSE = 0.4
P_BALCONY = 0.5
P_RENOVATED = 0.3
P_VERIFIED = 0.8


def translate_property_type(label: str) -> tuple[str, str]:
    """Return (canonical, Hebrew) for a Hebrew or canonical type label."""
    if label in PROPERTY_TYPES:
        return PROPERTY_TYPES[label], label
    if label in _PROPERTY_TYPES_HE:
        return label, _PROPERTY_TYPES_HE[label]
    return "apartment", "דירה"


def _bounds(
    low: float | None,
    high: float | None,
    default: tuple[float, float],
) -> tuple[float, float]:
    """Caller bounds where given, default range otherwise. A one-sided bound keeps the default width."""
    if low is not None and high is not None:
        return low, high
    width = default[1] - default[0]
    if low is not None:
        return (low, default[1]) if low <= default[0] else (low, low + width)
    if high is not None:
        return (default[0], high) if high >= default[1] else (min(max(high - width, MIN_SIZE), high), high)
    return default


def _draw_rooms(rng: random.Random, low: float, high: float) -> float:
    """Draw from the half-room grid inside [low, high]; low when the grid is empty."""
    grid_low, grid_high = math.ceil(low * 2), math.floor(high * 2)
    if grid_low > grid_high:
        return low
    return rng.randint(grid_low, grid_high) / 2


def _flag(rng: random.Random, explicit: bool | None, probability: float) -> bool:
    if explicit is not None:
        return explicit
    return rng.random() < probability


class FallbackSynthesizer:
    """Generates a plausible transaction set per city."""

    def __init__(
        self,
        total_budget: int | None = None,
        min_per_city: int | None = None,
    ) -> None:
        self.total_budget = total_budget if total_budget is not None else settings.fallback_total_budget
        self.min_per_city = min_per_city if min_per_city is not None else settings.fallback_min_per_city

    def generate(
        self,
        criteria: SearchCriteria,
        rng: random.Random | None = None,
        today: date | None = None,
    ) -> list[Transaction]:
        """Synthesize transactions for every city matching criteria, newest first."""
        rng = rng or random.Random()
        today = today or date.today()

        cities = select_cities(criteria.cities, criteria.districts)
        if criteria.has_radius:
            nearby = [
                c
                for c in cities
                if haversine_km(
                    criteria.center_lat, criteria.center_lng, c.coordinates.latitude, c.coordinates.longitude
                )
                <= criteria.radius_km + JITTER_KM
            ]
            cities = nearby or cities
        per_city = max(self.min_per_city, self.total_budget // len(cities))

        transactions: list[Transaction] = []
        for city in cities:
            transactions.extend(self._generate_city(city, per_city, criteria, rng, today))

        transactions.sort(key=lambda t: t.deal_date, reverse=True)
        logger.info("Generated %d synthetic transactions across %d cities", len(transactions), len(cities))
        return transactions

    def _date_window(self, criteria: SearchCriteria, today: date) -> tuple[date, int]:
        start = today - timedelta(days=LOOKBACK_DAYS - 1)
        end = today
        if criteria.from_date is not None:
            start = criteria.from_date
        if criteria.to_date is not None:
            end = criteria.to_date
        span = (end - start).days
        if span < 0:
            # inverted window
            span = 0
        return start, span

    def _generate_city(
        self,
        city: City,
        count: int,
        criteria: SearchCriteria,
        rng: random.Random,
        today: date,
    ) -> list[Transaction]:
        base_price = city.avg_price_per_sqm or DEFAULT_PRICE_PER_SQM
        type_labels = criteria.property_types or DEFAULT_PROPERTY_TYPES
        neighborhoods = NEIGHBORHOODS.get(city.name_he, DEFAULT_NEIGHBORHOODS)

        area_low, area_high = _bounds(criteria.min_area, criteria.max_area, DEFAULT_AREA_RANGE)
        rooms_low, rooms_high = _bounds(criteria.min_rooms, criteria.max_rooms, DEFAULT_ROOMS_RANGE)

        start, span = self._date_window(criteria, today)
        run_tag = f"{rng.getrandbits(32):08x}"

        transactions: list[Transaction] = []
        for i in range(count):
            property_type, property_type_he = translate_property_type(rng.choice(type_labels))

            # round first so the stored area and amount stay consistent
            area = round(rng.uniform(area_low, area_high))
            area = min(max(area, area_low, MIN_SIZE), area_high)
            price_per_sqm = round(base_price * rng.uniform(*PRICE_VARIATION))
            deal_amount = round(area * price_per_sqm)

            transactions.append(
                Transaction(
                    deal_id=f"IL-{city.code}-{run_tag}-{i}",
                    deal_date=start + timedelta(days=rng.randint(0, span)),
                    deal_amount=deal_amount,
                    price_per_sqm=price_per_sqm,
                    property_type=property_type,
                    property_type_he=property_type_he,
                    rooms=_draw_rooms(rng, rooms_low, rooms_high),
                    area=area,
                    floor=rng.randint(0, 9),
                    total_floors=rng.randint(4, 11),
                    city=city.name,
                    city_he=city.name_he,
                    city_code=city.code,
                    district=city.district,
                    district_he=city.district_he,
                    street=rng.choice(STREETS),
                    house_number=str(rng.randint(1, 100)),
                    neighborhood=rng.choice(neighborhoods),
                    block=criteria.block or str(rng.randint(10_000, 59_999)),
                    parcel=criteria.parcel or str(rng.randint(1, 500)),
                    build_year=rng.randint(1990, 2023),
                    condition=rng.choice(CONDITIONS),
                    parking=_flag(rng, criteria.has_parking, P_PARKING),
                    elevator=_flag(rng, criteria.has_elevator, P_ELEVATOR),
                    warehouse=_flag(rng, criteria.has_warehouse, P_WAREHOUSE),
                    balcony=_flag(rng, criteria.has_balcony, P_BALCONY),
                    renovated=_flag(rng, True if criteria.renovated_only else None, P_RENOVATED),
                    air_direction=rng.choice(AIR_DIRECTIONS),
                    verified=_flag(rng, True if criteria.verified_only else None, P_VERIFIED),
                    deal_type=DealType.SALE,
                    source=Source.SYNTHETIC,
                    coordinates=Coordinates(
                        latitude=city.coordinates.latitude + rng.uniform(-COORD_JITTER, COORD_JITTER),
                        longitude=city.coordinates.longitude + rng.uniform(-COORD_JITTER, COORD_JITTER),
                    ),
                )
            )
        return transactions
