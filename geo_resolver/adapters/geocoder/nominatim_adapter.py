"""Nominatim geocoder adapter — implements GeocoderPort."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

import httpx

from geo_resolver.adapters.geocoder.base import ProviderMatch, TextGeocoderAdapter
from geo_resolver.config import Settings
from geo_resolver.domain.exceptions import ProviderLookupError
from geo_resolver.domain.value_objects.enums import Precision, ProviderId

logger = logging.getLogger(__name__)

# Nominatim puts the municipality under different keys depending on its size.
CITY_KEYS = ("city", "town", "municipality", "village")


class NominatimAdapter(TextGeocoderAdapter):
    """OpenStreetMap Nominatim, restricted to Brazil.

    Nominatim's usage policy requires an identifying User-Agent, which is
    sent with every request, and no more than one request per second.
    Requests through one adapter instance are spaced by at least
    ``NOMINATIM_MIN_INTERVAL`` seconds, including the two queries of a
    single address.
    """

    provider = ProviderId.NOMINATIM

    def __init__(
        self,
        config: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._url = config.nominatim_url
        self._user_agent = config.geocoder_user_agent
        self._timeout = config.geocoder_timeout
        self._min_interval = config.nominatim_min_interval
        self._sleep = sleep
        self._clock = clock
        self._last_request: float | None = None
        self._turn = asyncio.Lock()

    async def _wait_turn(self) -> None:
        async with self._turn:
            if self._last_request is not None:
                wait = self._min_interval - (self._clock() - self._last_request)
                if wait > 0:
                    logger.debug("Nominatim rate limit: waiting %.2fs", wait)
                    await self._sleep(wait)
            self._last_request = self._clock()

    async def _search(self, query: str) -> ProviderMatch | None:
        await self._wait_turn()
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self._url,
                    params={
                        "q": query,
                        "format": "json",
                        "limit": 1,
                        "countrycodes": "br",
                        "addressdetails": 1,
                    },
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                response.raise_for_status()
                results = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderLookupError(self.provider.value, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderLookupError(self.provider.value, f"request failed: {e!r}") from e
        except ValueError as e:
            raise ProviderLookupError(self.provider.value, "malformed response body") from e

        if not isinstance(results, list):
            raise ProviderLookupError(self.provider.value, "malformed response body")
        if not results:
            return None

        try:
            top = results[0]
            if not isinstance(top, dict):
                raise TypeError(f"result is {type(top).__name__}")
            details = top.get("address") or {}
            return ProviderMatch(
                latitude=float(top["lat"]),
                longitude=float(top["lon"]),
                city=next((details[k] for k in CITY_KEYS if details.get(k)), None),
                state=details.get("ISO3166-2-lvl4") or details.get("state"),
                country=details.get("country_code") or details.get("country"),
                precision=Precision.EXACT if details.get("house_number") else Precision.STREET,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderLookupError(self.provider.value, "malformed result") from e
