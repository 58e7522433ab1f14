from fastapi import APIRouter

from govdata.api.v1 import cities, health, statistics, transactions

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(cities.router, prefix="/cities", tags=["cities"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
