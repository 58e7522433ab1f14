"""Mapping of raw source records into the canonical Transaction.

Sources disagree on naming (snake_case vs camelCase) and on boolean encoding
(``true`` vs ``1``). Only the keys listed in :class:`RawTransaction` are read;
everything else on the wire is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, TypedDict
from uuid import uuid4

from govdata.schemas.city import Coordinates
from govdata.schemas.transaction import DealType, Source, Transaction
from govdata.services.cities import resolve_city

logger = logging.getLogger(__name__)

PRICE_TOLERANCE = 0.01

DEFAULT_ROOMS = 3
DEFAULT_AREA = 80.0
DEFAULT_PROPERTY_TYPE = "apartment"
DEFAULT_PROPERTY_TYPE_HE = "דירה"
DEFAULT_STREET = "רחוב הרצל"


class RawTransaction(TypedDict, total=False):
    """Keys read from a source record. Both spellings are accepted where sources differ."""

    deal_id: str
    dealId: str
    id: str | int
    deal_date: str
    dealDate: str
    date: str
    deal_amount: float | str
    dealAmount: float | str
    price: float | str
    price_per_meter: float | str
    pricePerMeter: float | str
    property_type: str
    propertyType: str
    property_type_he: str
    propertyTypeHe: str
    rooms: float | str
    room_count: float | str
    area: float | str
    net_area: float | str
    floor: int | str
    total_floors: int | str
    city: str
    cityCode: str
    city_code: str
    street: str
    street_name: str
    house_number: str
    houseNumber: str
    neighborhood: str
    gush: str
    helka: str
    sub_helka: str
    subHelka: str
    build_year: int | str
    condition: str
    parking: bool | int
    elevator: bool | int
    warehouse: bool | int
    balcony: bool | int
    renovated: bool | int
    air_direction: str
    airDirection: str
    verified: bool | int
    deal_type: str
    dealType: str
    lat: float | str
    lng: float | str


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-empty value among keys."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return value is True or value == 1


def _as_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(float(str(value).replace(",", "")))


def _as_float(value: Any, default: float) -> float:
    if value is None:
        return default
    return float(str(value).replace(",", ""))


def _as_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _as_date(value: Any, today: date) -> date:
    if value is None:
        return today
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _checked_price_per_sqm(reported: int | None, amount: int, area: float, deal_id: str) -> int:
    """Derive price per sqm from amount/area when missing or inconsistent."""
    derived = round(amount / area)
    if not reported:
        return derived
    if abs(reported * area - amount) / amount >= PRICE_TOLERANCE:
        logger.warning(
            "Inconsistent price per sqm on %s: reported %d, derived %d (amount=%d, area=%.1f)",
            deal_id, reported, derived, amount, area,
        )
        return derived
    return reported


def normalize_record(
    raw: RawTransaction | Mapping[str, Any],
    source: Source,
    verified_by_source: bool = False,
    today: date | None = None,
) -> Transaction | None:
    """Map one raw record into a Transaction.

    Returns None when the city cannot be resolved in the directory.
    Raises ValueError/TypeError on values that cannot be coerced.
    """
    today = today or date.today()
    deal_id = str(_first(raw, "deal_id", "dealId", "id") or f"{source.value}-{uuid4().hex[:12]}")

    city = resolve_city(
        name=_as_str(_first(raw, "city")),
        code=_as_str(_first(raw, "cityCode", "city_code")),
    )
    if city is None:
        logger.warning(
            "Rejecting %s record %s: unknown city %r (code %r)",
            source.value, deal_id, raw.get("city"), _first(raw, "cityCode", "city_code"),
        )
        return None

    amount = _as_int(_first(raw, "deal_amount", "dealAmount", "price")) or 0
    area = _as_float(_first(raw, "area", "net_area"), DEFAULT_AREA)
    if amount <= 0 or area <= 0:
        raise ValueError(f"non-positive amount or area on {deal_id}: amount={amount}, area={area}")

    reported = _as_int(_first(raw, "price_per_meter", "pricePerMeter"))

    lat, lng = _first(raw, "lat"), _first(raw, "lng")
    coordinates = (
        Coordinates(latitude=float(lat), longitude=float(lng))
        if lat is not None and lng is not None
        else city.coordinates
    )

    deal_type = str(_first(raw, "deal_type", "dealType") or DealType.SALE.value)

    return Transaction(
        deal_id=deal_id,
        deal_date=_as_date(_first(raw, "deal_date", "dealDate", "date"), today),
        deal_amount=amount,
        price_per_sqm=_checked_price_per_sqm(reported, amount, area, deal_id),
        property_type=str(_first(raw, "property_type", "propertyType") or DEFAULT_PROPERTY_TYPE),
        property_type_he=str(_first(raw, "property_type_he", "propertyTypeHe") or DEFAULT_PROPERTY_TYPE_HE),
        rooms=_as_float(_first(raw, "rooms", "room_count"), DEFAULT_ROOMS),
        area=area,
        floor=_as_int(_first(raw, "floor")),
        total_floors=_as_int(_first(raw, "total_floors")),
        city=city.name,
        city_he=city.name_he,
        city_code=city.code,
        district=city.district,
        district_he=city.district_he,
        street=str(_first(raw, "street", "street_name") or DEFAULT_STREET),
        house_number=_as_str(_first(raw, "house_number", "houseNumber")),
        neighborhood=_as_str(_first(raw, "neighborhood")),
        block=_as_str(_first(raw, "gush")),
        parcel=_as_str(_first(raw, "helka")),
        sub_parcel=_as_str(_first(raw, "sub_helka", "subHelka")),
        build_year=_as_int(_first(raw, "build_year")),
        condition=_as_str(_first(raw, "condition")),
        parking=_as_bool(raw.get("parking")),
        elevator=_as_bool(raw.get("elevator")),
        warehouse=_as_bool(raw.get("warehouse")),
        balcony=_as_bool(raw.get("balcony")),
        renovated=_as_bool(raw.get("renovated")),
        air_direction=_as_str(_first(raw, "air_direction", "airDirection")),
        verified=_as_bool(raw.get("verified")) or verified_by_source,
        deal_type=DealType(deal_type),
        source=source,
        coordinates=coordinates,
    )
