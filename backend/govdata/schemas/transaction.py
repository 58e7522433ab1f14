"""Transaction and search criteria schemas"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from govdata.schemas.city import Coordinates


class Source(str, Enum):
    REGISTRY = "registry"  # nadlan.gov.il
    CADASTRE = "cadastre"  # land registry (tabu) via data.gov.il
    TAX_AUTHORITY = "tax-authority"
    STATISTICS_BUREAU = "statistics-bureau"  # CBS
    SYNTHETIC = "synthetic"  # fallback data, no live source responded


class DealType(str, Enum):
    SALE = "sale"
    RENT = "rent"


@dataclass(frozen=True)
class Transaction:
    """A single recorded sale. price_per_sqm * area ≈ deal_amount."""

    deal_id: str
    deal_date: date
    deal_amount: int
    price_per_sqm: int

    property_type: str
    property_type_he: str
    rooms: float
    area: float

    city: str
    city_he: str
    city_code: str
    district: str
    district_he: str
    street: str

    verified: bool
    source: Source
    deal_type: DealType = DealType.SALE

    floor: int | None = None
    total_floors: int | None = None
    house_number: str | None = None
    neighborhood: str | None = None

    block: str | None = None  # gush
    parcel: str | None = None  # helka
    sub_parcel: str | None = None

    build_year: int | None = None
    condition: str | None = None

    parking: bool = False
    elevator: bool = False
    warehouse: bool = False
    balcony: bool = False
    renovated: bool = False
    air_direction: str | None = None

    coordinates: Coordinates | None = None


@dataclass(frozen=True)
class SearchCriteria:
    """Caller constraints. Unset fields impose no constraint."""

    cities: list[str] = field(default_factory=list)
    districts: list[str] = field(default_factory=list)
    property_types: list[str] = field(default_factory=list)

    min_price: int | None = None
    max_price: int | None = None
    min_area: float | None = None
    max_area: float | None = None
    min_rooms: float | None = None
    max_rooms: float | None = None

    from_date: date | None = None
    to_date: date | None = None

    has_parking: bool | None = None
    has_elevator: bool | None = None
    has_warehouse: bool | None = None
    has_balcony: bool | None = None
    renovated_only: bool = False
    verified_only: bool = False

    block: str | None = None
    parcel: str | None = None

    center_lat: float | None = None
    center_lng: float | None = None
    radius_km: float | None = None

    limit: int | None = None
    offset: int = 0

    @property
    def has_radius(self) -> bool:
        return (
            self.center_lat is not None
            and self.center_lng is not None
            and self.radius_km is not None
        )
