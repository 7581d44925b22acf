"""Address Resolution Service — FastAPI application factory."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geo_resolver.adapters.persistence.database import engine
from geo_resolver.config import settings
from geo_resolver.infrastructure.api.routes_geocoding import router as geocoding_router
from geo_resolver.infrastructure.api.routes_health import router as health_router
from geo_resolver.infrastructure.api.routes_records import router as records_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging(settings.log_level)
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Address Resolution Service",
        description="CEP lookup, geocoding fallback chain and bulk coordinate refresh",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the dashboard frontend (Vite dev server)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(geocoding_router, prefix="/api")
    app.include_router(records_router, prefix="/api")

    return app


app = create_app()
