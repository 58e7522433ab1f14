"""Municipality reference schema"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """WGS84 point"""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class City:
    """Municipality with a baseline price per sqm used to seed synthetic data"""

    code: str  # CBS locality code
    name: str
    name_he: str
    district: str
    district_he: str
    coordinates: Coordinates
    population: int | None = None
    avg_price_per_sqm: int | None = None
