import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from tastematch.api.main import api_router
from tastematch.services.reinforcement.session import identity_sessions
from tastematch.services.stores.redis_service import redis_service
from tastematch.services.sync.remote import remote_identity_client

from .config import settings
from .version import __version__

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    logger.info(f"TasteMatch {__version__} starting ({settings.APP_ENV})")
    yield
    await identity_sessions.drain()
    await remote_identity_client.close()
    await redis_service.close()


app = FastAPI(
    title="TasteMatch",
    description="Deterministic taste modeling and ranking engine",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
