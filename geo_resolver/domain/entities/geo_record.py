"""GeoRecord entity — a stored person or team with an address and a location."""

from dataclasses import dataclass

from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.value_objects.enums import RecordKind
from geo_resolver.domain.value_objects.geo_point import GeoPoint

# Records created before the state field existed were all registered in São Paulo.
DEFAULT_STATE = "SP"


@dataclass
class GeoRecord:
    id: int | None
    kind: RecordKind
    name: str
    street: str | None
    number: str | None
    neighborhood: str | None
    city: str | None
    state: str | None
    postal_code: str | None
    location: GeoPoint | None = None

    def has_usable_address(self) -> bool:
        return bool((self.street or "").strip()) and bool((self.city or "").strip())

    def to_address(self) -> Address:
        return Address(
            street=(self.street or "").strip(),
            city=(self.city or "").strip(),
            state=(self.state or "").strip() or DEFAULT_STATE,
            postal_code=(self.postal_code or "").strip(),
            number=(self.number or "").strip(),
            neighborhood=(self.neighborhood or "").strip(),
        )
