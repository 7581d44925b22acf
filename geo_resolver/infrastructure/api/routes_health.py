"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from geo_resolver.adapters.persistence.database import get_session
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.config import Settings
from geo_resolver.infrastructure.api.dependencies import get_resolve_coordinates_uc, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    resolver: ResolveCoordinatesUseCase = Depends(get_resolve_coordinates_uc),
    config: Settings = Depends(get_settings),
):
    """Check database connectivity and report the geocoding chain in use."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "service": "Address Resolution Service",
        "geocoders": [g.provider.value for g in resolver.chain_for()],
        "google_key_configured": bool(config.google_maps_api_key),
        "google_postal_code_query": config.google_postal_code_query,
    }
