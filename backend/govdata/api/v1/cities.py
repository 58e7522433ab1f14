"""Municipality directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from govdata.schemas.city import City
from govdata.services.cities import list_cities, search_cities

router = APIRouter()


@router.get("")
async def get_cities() -> list[City]:
    return list_cities()


@router.get("/search")
async def find_cities(q: str = Query(..., min_length=1)) -> list[City]:
    """Substring search over English and Hebrew city names."""
    return search_cities(q)
