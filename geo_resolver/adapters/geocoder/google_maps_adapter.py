"""Google Maps geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import logging

import httpx

from geo_resolver.adapters.geocoder.base import ProviderMatch, TextGeocoderAdapter
from geo_resolver.config import Settings
from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.exceptions import ProviderLookupError
from geo_resolver.domain.policies.query_builder import build_query_variants
from geo_resolver.domain.value_objects.enums import Precision, ProviderId, QueryMode

logger = logging.getLogger(__name__)

# geometry.location_type -> (precision, confidence)
LOCATION_TYPES: dict[str, tuple[Precision, float]] = {
    "ROOFTOP": (Precision.EXACT, 1.0),
    "RANGE_INTERPOLATED": (Precision.STREET, 0.9),
    "GEOMETRIC_CENTER": (Precision.STREET, 0.7),
    "APPROXIMATE": (Precision.NEIGHBORHOOD, 0.5),
}
UNKNOWN_LOCATION_TYPE = (Precision.APPROXIMATE, 0.5)


def _component(components: list[dict], types: list[str], short: bool = False) -> str | None:
    for comp in components:
        if any(t in comp.get("types", []) for t in types):
            if short:
                return comp.get("short_name") or comp.get("long_name")
            return comp.get("long_name")
    return None


class GoogleMapsAdapter(TextGeocoderAdapter):
    """Google Geocoding API, biased to Brazil.

    With ``GOOGLE_POSTAL_CODE_QUERY`` on, a bare "{cep}, Brazil" query is
    tried before the street queries.
    """

    provider = ProviderId.GOOGLE

    def __init__(self, config: Settings):
        self._api_key = config.google_maps_api_key
        self._url = config.google_geocode_url
        self._user_agent = config.geocoder_user_agent
        self._timeout = config.geocoder_timeout
        self._postal_code_first = config.google_postal_code_query

    async def try_resolve(self, address: Address) -> ResolutionResult:
        if not self._api_key:
            logger.warning("Google Maps API key is not set. Skipping geocoding.")
            return ResolutionResult.provider_error(self.provider.value, "API key not configured")
        return await super().try_resolve(address)

    def _query_variants(self, address: Address) -> list[tuple[QueryMode, str]]:
        return build_query_variants(address, include_postal_code=self._postal_code_first)

    async def _search(self, query: str) -> ProviderMatch | None:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self._url,
                    params={
                        "address": query,
                        "key": self._api_key,
                        "region": "br",
                        "language": "pt-BR",
                    },
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderLookupError(self.provider.value, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderLookupError(self.provider.value, f"request failed: {e!r}") from e
        except ValueError as e:
            raise ProviderLookupError(self.provider.value, "malformed response body") from e

        if not isinstance(data, dict):
            raise ProviderLookupError(self.provider.value, "malformed response body")

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return None
        if status != "OK" or not data.get("results"):
            raise ProviderLookupError(
                self.provider.value, data.get("error_message") or f"status {status}"
            )

        try:
            result = data["results"][0]
            if not isinstance(result, dict):
                raise TypeError(f"result is {type(result).__name__}")
            components = result.get("address_components") or []
            geometry = result["geometry"]
            loc = geometry["location"]
            precision, confidence = LOCATION_TYPES.get(
                geometry.get("location_type"), UNKNOWN_LOCATION_TYPE
            )
            return ProviderMatch(
                latitude=float(loc["lat"]),
                longitude=float(loc["lng"]),
                city=_component(components, ["locality", "administrative_area_level_2"]),
                state=_component(components, ["administrative_area_level_1"], short=True),
                country=_component(components, ["country"]),
                precision=precision,
                confidence=confidence,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderLookupError(self.provider.value, "malformed result") from e
