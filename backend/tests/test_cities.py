"""City directory lookups."""

from __future__ import annotations

from govdata.services.cities import (
    ISRAELI_CITIES,
    find_by_name_or_code,
    list_cities,
    resolve_city,
    search_cities,
    select_cities,
)


def test_list_cities_keeps_table_order():
    cities = list_cities()
    assert cities == list(ISRAELI_CITIES)
    assert cities[0].name == "Tel Aviv-Yafo"
    assert len(cities) == 40


def test_codes_are_unique():
    codes = [c.code for c in ISRAELI_CITIES]
    assert len(codes) == len(set(codes))


def test_every_city_has_baseline_price():
    assert all(c.avg_price_per_sqm and c.avg_price_per_sqm > 0 for c in ISRAELI_CITIES)


def test_find_by_name_or_code():
    assert [c.code for c in find_by_name_or_code("haifa")] == ["4000"]
    assert [c.name for c in find_by_name_or_code("ירושלים")] == ["Jerusalem"]
    assert [c.name for c in find_by_name_or_code("5000")] == ["Tel Aviv-Yafo"]
    # exact match only
    assert find_by_name_or_code("Tel Aviv") == []


def test_search_cities_substring():
    names = {c.name for c in search_cities("kiryat")}
    assert names == {"Kiryat Ata", "Kiryat Bialik", "Kiryat Motzkin"}
    assert [c.name for c in search_cities("רמת")] == ["Ramat Gan", "Ramat HaSharon"]
    assert search_cities("  ") == []


def test_resolve_city_prefers_name_over_code():
    assert resolve_city(name="Haifa", code="5000").name == "Haifa"
    assert resolve_city(code="70").name == "Ashdod"
    assert resolve_city(name="Atlantis") is None


def test_select_cities_narrows_then_falls_back():
    south = select_cities([], ["דרום"])
    assert {c.district for c in south} == {"Southern"}

    # Tel Aviv is not in the Southern district → empty narrowing → full directory
    assert select_cities(["Tel Aviv"], ["Southern"]) == list(ISRAELI_CITIES)


def test_resolve_city_ignores_case_of_english_name():
    assert resolve_city(name="tel aviv-yafo").name == "Tel Aviv-Yafo"
    assert resolve_city(name="  HAIFA ").code == "4000"
    assert resolve_city(name="חיפה").name == "Haifa"
