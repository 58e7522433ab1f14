"""Static municipality directory"""

from __future__ import annotations

from collections.abc import Iterable

from govdata.schemas.city import City, Coordinates

DEFAULT_PRICE_PER_SQM = 18_000


def _city(
    code: str,
    name: str,
    name_he: str,
    district: str,
    district_he: str,
    lat: float,
    lng: float,
    avg_price_per_sqm: int,
) -> City:
    return City(
        code=code,
        name=name,
        name_he=name_he,
        district=district,
        district_he=district_he,
        coordinates=Coordinates(latitude=lat, longitude=lng),
        avg_price_per_sqm=avg_price_per_sqm,
    )


# Declared order matters: list_cities() returns it unchanged.
ISRAELI_CITIES: tuple[City, ...] = (
    # Tel Aviv / Gush Dan
    _city("5000", "Tel Aviv-Yafo", "תל אביב-יפו", "Tel Aviv", "תל אביב", 32.0853, 34.7818, 28_000),
    _city("8600", "Ramat Gan", "רמת גן", "Tel Aviv", "תל אביב", 32.0719, 34.8237, 26_000),
    _city("6300", "Givatayim", "גבעתיים", "Tel Aviv", "תל אביב", 32.0702, 34.8109, 25_000),
    _city("6400", "Herzliya", "הרצליה", "Tel Aviv", "תל אביב", 32.1661, 34.8443, 27_000),
    _city("9700", "Hod HaSharon", "הוד השרון", "Central", "מרכז", 32.1511, 34.8892, 23_000),
    _city("7900", "Petah Tikva", "פתח תקווה", "Central", "מרכז", 32.0878, 34.8878, 20_000),
    _city("8700", "Raanana", "רעננה", "Central", "מרכז", 32.1847, 34.8708, 24_000),
    _city("8300", "Rishon LeZion", "ראשון לציון", "Central", "מרכז", 31.9730, 34.7925, 19_000),
    _city("8400", "Rehovot", "רחובות", "Central", "מרכז", 31.8933, 34.8117, 18_000),
    _city("6200", "Bat Yam", "בת ים", "Tel Aviv", "תל אביב", 32.0167, 34.7500, 17_000),
    _city("6600", "Holon", "חולון", "Tel Aviv", "תל אביב", 32.0114, 34.7742, 18_500),
    # Jerusalem
    _city("3000", "Jerusalem", "ירושלים", "Jerusalem", "ירושלים", 31.7683, 35.2137, 22_000),
    _city("3780", "Betar Illit", "ביתר עילית", "Jerusalem", "ירושלים", 31.6989, 35.1172, 12_000),
    _city("3797", "Modiin Illit", "מודיעין עילית", "Jerusalem", "ירושלים", 31.9367, 35.0544, 11_000),
    _city("1200", "Modiin-Maccabim-Reut", "מודיעין-מכבים-רעות", "Central", "מרכז", 31.8967, 35.0094, 21_000),
    _city("2610", "Beit Shemesh", "בית שמש", "Jerusalem", "ירושלים", 31.7453, 34.9892, 16_000),
    # Haifa / North
    _city("4000", "Haifa", "חיפה", "Haifa", "חיפה", 32.7940, 34.9896, 18_000),
    _city("2500", "Nesher", "נשר", "Haifa", "חיפה", 32.7667, 35.0392, 14_000),
    _city("6800", "Kiryat Ata", "קריית אתא", "Haifa", "חיפה", 32.8042, 35.1028, 13_000),
    _city("9500", "Kiryat Bialik", "קריית ביאליק", "Haifa", "חיפה", 32.8331, 35.0889, 13_500),
    _city("8200", "Kiryat Motzkin", "קריית מוצקין", "Haifa", "חיפה", 32.8372, 35.0756, 13_000),
    _city("9100", "Nahariya", "נהריה", "Northern", "צפון", 33.0058, 35.0944, 15_000),
    _city("7600", "Acre", "עכו", "Northern", "צפון", 32.9281, 35.0783, 12_000),
    _city("1139", "Karmiel", "כרמיאל", "Northern", "צפון", 32.9186, 35.2958, 13_000),
    # Sharon
    _city("7400", "Netanya", "נתניה", "Central", "מרכז", 32.3215, 34.8532, 17_000),
    _city("6500", "Hadera", "חדרה", "Haifa", "חיפה", 32.4340, 34.9186, 14_000),
    _city("6900", "Kfar Saba", "כפר סבא", "Central", "מרכז", 32.1767, 34.9078, 22_000),
    # South
    _city("9000", "Beersheba", "באר שבע", "Southern", "דרום", 31.2518, 34.7913, 14_000),
    _city("70", "Ashdod", "אשדוד", "Southern", "דרום", 31.8044, 34.6553, 16_000),
    _city("7100", "Ashkelon", "אשקלון", "Southern", "דרום", 31.6688, 34.5742, 15_000),
    _city("2600", "Eilat", "אילת", "Southern", "דרום", 29.5569, 34.9517, 20_000),
    # Galilee
    _city("7300", "Nazareth", "נצרת", "Northern", "צפון", 32.7006, 35.2978, 10_000),
    _city("6700", "Tiberias", "טבריה", "Northern", "צפון", 32.7950, 35.5308, 13_000),
    _city("8000", "Safed", "צפת", "Northern", "צפון", 32.9650, 35.4983, 11_000),
    # Shfela
    _city("7000", "Lod", "לוד", "Central", "מרכז", 31.9500, 34.8883, 13_000),
    _city("8500", "Ramla", "רמלה", "Central", "מרכז", 31.9294, 34.8667, 13_000),
    _city("2660", "Yavne", "יבנה", "Central", "מרכז", 31.8783, 34.7417, 17_000),
    _city("7200", "Ness Ziona", "נס ציונה", "Central", "מרכז", 31.9300, 34.7992, 20_000),
    # Gush Dan (cont.)
    _city("6100", "Bnei Brak", "בני ברק", "Tel Aviv", "תל אביב", 32.0806, 34.8333, 22_000),
    _city("2650", "Ramat HaSharon", "רמת השרון", "Tel Aviv", "תל אביב", 32.1461, 34.8394, 26_000),
)


def list_cities() -> list[City]:
    """Return every known municipality in table order."""
    return list(ISRAELI_CITIES)


def find_by_name_or_code(query: str) -> list[City]:
    """Exact lookup: case-insensitive name (English or Hebrew) or exact code."""
    needle = query.strip()
    lowered = needle.lower()
    return [
        c
        for c in ISRAELI_CITIES
        if c.code == needle or c.name.lower() == lowered or c.name_he == needle
    ]


def search_cities(query: str) -> list[City]:
    """Substring search over English (case-insensitive) and Hebrew names."""
    needle = query.strip()
    if not needle:
        return []
    lowered = needle.lower()
    return [c for c in ISRAELI_CITIES if lowered in c.name.lower() or needle in c.name_he]


def resolve_city(name: str | None = None, code: str | None = None) -> City | None:
    """Resolve an ingested record's city by exact name or code. None when unknown."""
    if name:
        matches = find_by_name_or_code(name)
        if matches:
            return matches[0]
    if code:
        for city in ISRAELI_CITIES:
            if city.code == str(code):
                return city
    return None


def city_matches(city_name: str, city_he: str, queries: Iterable[str]) -> bool:
    """True when any query is a substring of the English or Hebrew name."""
    lowered = city_name.lower()
    return any(q and (q in city_he or q.lower() in lowered) for q in queries)


def district_matches(district: str, district_he: str, queries: Iterable[str]) -> bool:
    lowered = district.lower()
    return any(q and (q in district_he or q.lower() in lowered) for q in queries)


def select_cities(cities: list[str], districts: list[str]) -> list[City]:
    """Narrow the directory by city then district queries.

    Falls back to the full directory when the narrowing leaves nothing.
    """
    selected = list(ISRAELI_CITIES)
    if cities:
        selected = [c for c in selected if city_matches(c.name, c.name_he, cities)]
    if districts:
        selected = [c for c in selected if district_matches(c.district, c.district_he, districts)]
    return selected or list(ISRAELI_CITIES)
