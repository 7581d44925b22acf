"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from geo_resolver.adapters.persistence.models import MODEL_BY_KIND, AddressColumnsMixin
from geo_resolver.application.ports.record_repo import RecordRepository
from geo_resolver.domain.entities.geo_record import GeoRecord
from geo_resolver.domain.value_objects.enums import RecordKind
from geo_resolver.domain.value_objects.geo_point import GeoPoint

UPDATABLE_FIELDS = frozenset(
    {"postal_code", "street", "number", "neighborhood", "city", "state", "latitude", "longitude"}
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _record_to_domain(m: AddressColumnsMixin, kind: RecordKind) -> GeoRecord:
    location = None
    if m.latitude is not None and m.longitude is not None:
        location = GeoPoint(latitude=m.latitude, longitude=m.longitude)
    return GeoRecord(
        id=m.id,
        kind=kind,
        name=m.name,
        street=m.street,
        number=m.number,
        neighborhood=m.neighborhood,
        city=m.city,
        state=m.state,
        postal_code=m.postal_code,
        location=location,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlRecordRepository(RecordRepository):
    """Records of one kind (supporters, teams, ...)."""

    def __init__(self, session: AsyncSession, kind: RecordKind):
        self._s = session
        self._kind = kind
        self._model = MODEL_BY_KIND[kind]

    async def get_all(self) -> list[GeoRecord]:
        result = await self._s.execute(select(self._model).order_by(self._model.id))
        return [_record_to_domain(m, self._kind) for m in result.scalars().all()]

    async def update(self, record_id: int, fields: dict) -> None:
        """Run the UPDATE inside a savepoint.

        A failed statement rolls back only its savepoint, so the surrounding
        batch transaction stays usable and can still be committed.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        async with self._s.begin_nested():
            await self._s.execute(
                update(self._model).where(self._model.id == record_id).values(**fields)
            )
