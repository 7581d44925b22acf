"""BrasilAPI CEP-coordinate adapter — implements GeocoderPort.

BrasilAPI's CEP v2 endpoint returns the Correios record for a CEP and, for
covered regions, the coordinate of that CEP. It is the cheapest provider in
the chain and is only asked when the address carries a valid CEP.
"""

from __future__ import annotations

import logging

import httpx

from geo_resolver.adapters.geocoder.base import is_text_or_missing
from geo_resolver.application.ports.geocoder_port import GeocoderPort
from geo_resolver.config import Settings
from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.exceptions import InvalidCoordinateError
from geo_resolver.domain.policies.locality import validate_locality
from geo_resolver.domain.value_objects.enums import Precision, ProviderId
from geo_resolver.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class BrasilApiCepGeocoder(GeocoderPort):
    provider = ProviderId.BRASILAPI

    def __init__(self, config: Settings):
        self._base_url = config.brasilapi_base_url.rstrip("/")
        self._user_agent = config.geocoder_user_agent
        self._timeout = config.postal_lookup_timeout

    async def try_resolve(self, address: Address) -> ResolutionResult:
        name = self.provider.value
        cep = address.cep
        if cep is None:
            return ResolutionResult.not_found(name, "no valid CEP")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self._base_url}/v2/{cep}",
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                if response.status_code == 404:
                    logger.info("BrasilAPI does not know CEP %s", cep)
                    return ResolutionResult.not_found(name, f"CEP {cep} not found")
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("BrasilAPI HTTP %s for CEP %s", e.response.status_code, cep)
            return ResolutionResult.provider_error(name, f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.warning("BrasilAPI request failed for CEP %s: %r", cep, e)
            return ResolutionResult.provider_error(name, f"request failed: {e!r}")
        except ValueError:
            logger.exception("BrasilAPI returned a malformed body for CEP %s", cep)
            return ResolutionResult.provider_error(name, "malformed response body")

        if not isinstance(data, dict):
            return ResolutionResult.provider_error(name, "malformed response body")

        try:
            coords = (data.get("location") or {}).get("coordinates") or {}
            point = GeoPoint.from_raw(coords.get("latitude"), coords.get("longitude"))
        except InvalidCoordinateError as e:
            logger.warning("BrasilAPI returned an invalid coordinate for CEP %s: %s", cep, e)
            return ResolutionResult.provider_error(name, str(e))
        except (AttributeError, TypeError, ValueError):
            return ResolutionResult.provider_error(name, "malformed coordinates")

        if point is None:
            logger.info("BrasilAPI has no coordinates for CEP %s", cep)
            return ResolutionResult.not_found(name, f"no coordinates for CEP {cep}")

        city, state = data.get("city"), data.get("state")
        if not is_text_or_missing(city, state):
            logger.warning("BrasilAPI returned a malformed city/state for CEP %s", cep)
            return ResolutionResult.provider_error(name, "malformed locality in result")

        check = validate_locality(address, city, state, "Brasil")
        if not check.valid:
            logger.warning("BrasilAPI result for CEP %s rejected: %s", cep, check.reason)
            return ResolutionResult.not_found(name, check.reason)

        # CEP centroids sit on the street; a numbered address on a named street is exact.
        precision = Precision.EXACT if address.number.strip() and data.get("street") else Precision.STREET

        logger.info(
            "BrasilAPI resolved CEP %s → (%f, %f), precision=%s",
            cep, point.latitude, point.longitude, precision.value,
        )
        return ResolutionResult.success(point, name, precision=precision, confidence=1.0)
