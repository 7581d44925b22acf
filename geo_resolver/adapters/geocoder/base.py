"""Shared flow for free-text geocoders: full query, then number-stripped query."""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass

from geo_resolver.application.ports.geocoder_port import GeocoderPort
from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.exceptions import InvalidCoordinateError, ProviderLookupError
from geo_resolver.domain.policies.locality import validate_locality
from geo_resolver.domain.policies.query_builder import build_query_variants
from geo_resolver.domain.value_objects.enums import Precision, QueryMode
from geo_resolver.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


def is_text_or_missing(*values: object) -> bool:
    """True when every locality field a provider reported is a string or absent."""
    return all(v is None or isinstance(v, str) for v in values)


@dataclass(frozen=True)
class ProviderMatch:
    """First-ranked match of one provider query, with the locality it reports."""

    latitude: float
    longitude: float
    city: str | None = None
    state: str | None = None
    country: str | None = None
    precision: Precision = Precision.APPROXIMATE
    confidence: float | None = None


class TextGeocoderAdapter(GeocoderPort):
    """Template for providers that geocode a free-text query string.

    Subclasses implement ``_search``; it returns the top match, None for no
    match, and raises ProviderLookupError for anything else.
    """

    @abstractmethod
    async def _search(self, query: str) -> ProviderMatch | None:
        ...

    def _query_variants(self, address: Address) -> list[tuple[QueryMode, str]]:
        return build_query_variants(address)

    async def try_resolve(self, address: Address) -> ResolutionResult:
        name = self.provider.value

        for mode, query in self._query_variants(address):
            try:
                match = await self._search(query)
            except ProviderLookupError as e:
                logger.warning("%s error for '%s': %s", name, query, e.message)
                return ResolutionResult.provider_error(name, e.message)

            if match is None:
                logger.info("%s: no match for '%s' (%s)", name, query, mode.value)
                continue

            if not is_text_or_missing(match.city, match.state, match.country):
                logger.warning("%s returned a malformed locality for '%s'", name, query)
                return ResolutionResult.provider_error(name, "malformed locality in result")

            check = validate_locality(address, match.city, match.state, match.country)
            if not check.valid:
                logger.warning("%s: match for '%s' rejected: %s", name, query, check.reason)
                return ResolutionResult.not_found(name, check.reason)

            try:
                point = self._to_point(match)
            except InvalidCoordinateError as e:
                logger.warning("%s returned an invalid coordinate for '%s': %s", name, query, e)
                return ResolutionResult.provider_error(name, str(e))

            logger.info(
                "%s resolved '%s' (%s) → (%f, %f), precision=%s",
                name, query, mode.value, point.latitude, point.longitude, match.precision.value,
            )
            return ResolutionResult.success(
                point, name, precision=match.precision, confidence=match.confidence
            )

        return ResolutionResult.not_found(name, "no match")

    @staticmethod
    def _to_point(match: ProviderMatch) -> GeoPoint:
        return GeoPoint(latitude=match.latitude, longitude=match.longitude)
