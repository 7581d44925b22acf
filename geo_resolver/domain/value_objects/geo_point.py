"""GeoPoint value object — immutable, range-checked (lat, lon) pair."""

from __future__ import annotations

import math
from dataclasses import dataclass

from geo_resolver.domain.exceptions import InvalidCoordinateError


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidCoordinateError(self.latitude, self.longitude)
        if not -90.0 <= self.latitude <= 90.0 or not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError(self.latitude, self.longitude)

    @classmethod
    def from_raw(cls, latitude, longitude) -> GeoPoint | None:
        """Build a point from provider values (numbers or numeric strings).

        Returns None when either value is missing; a missing coordinate is
        "unresolved", never zero. Raises InvalidCoordinateError for values
        that parse but fall outside the valid range, and ValueError for
        values that do not parse at all.
        """
        if latitude is None or longitude is None or latitude == "" or longitude == "":
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))
