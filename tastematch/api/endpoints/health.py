from fastapi import APIRouter

from tastematch.core.version import __version__
from tastematch.services.stores.redis_service import redis_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness check")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/health/redis", summary="Redis connectivity")
async def redis_health() -> dict[str, str]:
    reachable = await redis_service.ping()
    return {"redis": "ok" if reachable else "unavailable"}
