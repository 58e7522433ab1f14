"""Attribute and geo-radius filtering over transaction sets"""

from __future__ import annotations

import math

from govdata.schemas.transaction import SearchCriteria, Transaction
from govdata.services.cities import city_matches, district_matches

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two WGS84 points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _matches(t: Transaction, c: SearchCriteria) -> bool:
    if c.min_price is not None and t.deal_amount < c.min_price:
        return False
    if c.max_price is not None and t.deal_amount > c.max_price:
        return False
    if c.min_area is not None and t.area < c.min_area:
        return False
    if c.max_area is not None and t.area > c.max_area:
        return False
    if c.min_rooms is not None and t.rooms < c.min_rooms:
        return False
    if c.max_rooms is not None and t.rooms > c.max_rooms:
        return False
    if c.from_date is not None and t.deal_date < c.from_date:
        return False
    if c.to_date is not None and t.deal_date > c.to_date:
        return False

    if c.verified_only and not t.verified:
        return False
    if c.renovated_only and not t.renovated:
        return False
    if c.has_parking is not None and t.parking != c.has_parking:
        return False
    if c.has_elevator is not None and t.elevator != c.has_elevator:
        return False
    if c.has_warehouse is not None and t.warehouse != c.has_warehouse:
        return False
    if c.has_balcony is not None and t.balcony != c.has_balcony:
        return False

    if c.block is not None and t.block != c.block:
        return False
    if c.parcel is not None and t.parcel != c.parcel:
        return False

    if c.cities and not city_matches(t.city, t.city_he, c.cities):
        return False
    if c.districts and not district_matches(t.district, t.district_he, c.districts):
        return False
    if c.property_types and not (
        t.property_type in c.property_types or t.property_type_he in c.property_types
    ):
        return False
    return True


def apply_filters(transactions: list[Transaction], criteria: SearchCriteria) -> list[Transaction]:
    """Keep transactions satisfying every bound set on criteria, preserving order.

    Geo-radius and pagination fields are ignored here.
    """
    return [t for t in transactions if _matches(t, criteria)]


def filter_by_radius(
    transactions: list[Transaction],
    center_lat: float,
    center_lng: float,
    radius_km: float,
) -> list[Transaction]:
    """Keep transactions within radius_km of the center. Records without coordinates are dropped."""
    return [
        t
        for t in transactions
        if t.coordinates is not None
        and haversine_km(center_lat, center_lng, t.coordinates.latitude, t.coordinates.longitude)
        <= radius_km
    ]
