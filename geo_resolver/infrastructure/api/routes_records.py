"""Maintenance endpoints — re-geocode every stored record of a kind."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from geo_resolver.adapters.persistence.database import get_session
from geo_resolver.application.ports.record_repo import RecordRepository
from geo_resolver.application.use_cases.bulk_reresolve import BulkReresolveUseCase
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.config import Settings
from geo_resolver.domain.exceptions import UnknownProviderError
from geo_resolver.domain.value_objects.enums import ProviderId, RecordKind
from geo_resolver.infrastructure.api.dependencies import (
    get_record_repo,
    get_resolve_coordinates_uc,
    get_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["records"])


@router.post("/{kind}/regeocode")
async def regeocode_all(
    kind: RecordKind,
    provider: ProviderId | None = None,
    repo: RecordRepository = Depends(get_record_repo),
    session: AsyncSession = Depends(get_session),
    resolver: ResolveCoordinatesUseCase = Depends(get_resolve_coordinates_uc),
    config: Settings = Depends(get_settings),
):
    """Refresh the coordinates of every record of ``kind``, one at a time."""
    bulk_uc = BulkReresolveUseCase(resolver, repo, delay_seconds=config.bulk_delay_seconds)

    records = await repo.get_all()
    try:
        summary = await bulk_uc.execute(records, provider=provider)
    except UnknownProviderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await session.commit()
    logger.info(
        "Re-geocoded %s: %d refreshed, %d unchanged, %d failed",
        kind.value, summary.refreshed, summary.unchanged, summary.failed,
    )

    return {
        "status": "ok",
        "kind": kind.value,
        "provider": provider.value if provider else None,
        "total": len(records),
        "refreshed": summary.refreshed,
        "unchanged": summary.unchanged,
        "failed": summary.failed,
        "skipped": summary.skipped,
    }
