"""Port interface for records carrying an address and a location."""

from abc import ABC, abstractmethod

from geo_resolver.domain.entities.geo_record import GeoRecord


class RecordRepository(ABC):
    @abstractmethod
    async def get_all(self) -> list[GeoRecord]:
        ...

    @abstractmethod
    async def update(self, record_id: int, fields: dict) -> None:
        """Write ``fields`` onto one record in a single statement."""
        ...
