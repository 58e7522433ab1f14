from fastapi import APIRouter

from govdata.config import settings

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "env": settings.app_env}
