"""BulkReresolveUseCase — refresh stored coordinates one record at a time."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from geo_resolver.application.ports.record_repo import RecordRepository
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.domain.entities.geo_record import GeoRecord
from geo_resolver.domain.exceptions import AddressValidationError
from geo_resolver.domain.value_objects.enums import ProviderId
from geo_resolver.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

# Degrees. Roughly 11 m at the equator; smaller moves are not written back.
MOVE_THRESHOLD = 0.0001


class _RecordOutcome(Enum):
    REFRESHED = "refreshed"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class BulkSummary:
    """Counts for one bulk run.

    ``refreshed`` records got a new coordinate written. ``unchanged`` ones
    resolved to where they already were and were left alone. Skipped records
    are in none of the other counts.
    """

    refreshed: int = 0
    failed: int = 0
    unchanged: int = 0
    skipped: int = 0
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return self.refreshed + self.unchanged + self.failed


def has_moved(old: GeoPoint | None, new: GeoPoint) -> bool:
    if old is None:
        return True
    return (
        abs(new.latitude - old.latitude) > MOVE_THRESHOLD
        or abs(new.longitude - old.longitude) > MOVE_THRESHOLD
    )


class BulkReresolveUseCase:
    """Re-run resolution for many records, sequentially and politely.

    A fixed delay separates consecutive provider calls so third-party
    geocoders do not throttle us. One record's failure never stops the batch.
    """

    def __init__(
        self,
        resolver: ResolveCoordinatesUseCase,
        record_repo: RecordRepository,
        delay_seconds: float = 0.2,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._resolver = resolver
        self._records = record_repo
        self._delay = delay_seconds
        self._sleep = sleep

    async def execute(
        self,
        records: list[GeoRecord],
        provider: ProviderId | str | None = None,
        cancel: asyncio.Event | None = None,
    ) -> BulkSummary:
        # Fail fast on an unknown provider, before touching any record.
        self._resolver.chain_for(provider)

        summary = BulkSummary()
        logger.info(
            "Bulk re-resolution of %d records (provider=%s)",
            len(records), getattr(provider, "value", provider) or "chain",
        )

        first_call = True
        for record in records:
            if cancel is not None and cancel.is_set():
                logger.warning("Bulk re-resolution cancelled after %d records", summary.processed)
                summary.cancelled = True
                break

            if not record.has_usable_address():
                logger.debug("Skipping record %s (%s): no street or city", record.id, record.name)
                summary.skipped += 1
                continue

            if not first_call and self._delay > 0:
                await self._sleep(self._delay)
            first_call = False

            outcome = await self._refresh(record, provider)
            if outcome is _RecordOutcome.REFRESHED:
                summary.refreshed += 1
            elif outcome is _RecordOutcome.UNCHANGED:
                summary.unchanged += 1
            else:
                summary.failed += 1

        logger.info(
            "Bulk re-resolution complete: %d refreshed, %d unchanged, %d failed, %d skipped",
            summary.refreshed, summary.unchanged, summary.failed, summary.skipped,
        )
        return summary

    async def _refresh(
        self, record: GeoRecord, provider: ProviderId | str | None
    ) -> _RecordOutcome:
        try:
            result = await self._resolver.execute(record.to_address(), provider=provider)
            if not result.succeeded:
                logger.warning(
                    "Record %s (%s) not re-resolved: %s", record.id, record.name, result.reason
                )
                return _RecordOutcome.FAILED

            if not has_moved(record.location, result.point):
                logger.debug("Record %s (%s) already at the resolved point", record.id, record.name)
                return _RecordOutcome.UNCHANGED

            await self._records.update(
                record.id,
                {"latitude": result.point.latitude, "longitude": result.point.longitude},
            )
            record.location = result.point
            return _RecordOutcome.REFRESHED

        except AddressValidationError as e:
            logger.warning("Record %s (%s) has an invalid address: %s", record.id, record.name, e)
            return _RecordOutcome.FAILED
        except Exception:
            logger.exception("Error re-resolving record %s (%s)", record.id, record.name)
            return _RecordOutcome.FAILED
