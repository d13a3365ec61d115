from fastapi import APIRouter

from .endpoints.calibration import router as calibration_router
from .endpoints.favorites import router as favorites_router
from .endpoints.health import router as health_router
from .endpoints.identity import router as identity_router
from .endpoints.naming import router as naming_router
from .endpoints.ranking import router as ranking_router
from .endpoints.scoring import router as scoring_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "TasteMatch API is running"}


api_router.include_router(health_router)
api_router.include_router(identity_router)
api_router.include_router(scoring_router)
api_router.include_router(ranking_router)
api_router.include_router(calibration_router)
api_router.include_router(naming_router)
api_router.include_router(favorites_router)
