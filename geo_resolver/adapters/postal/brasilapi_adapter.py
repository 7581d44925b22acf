"""BrasilAPI CEP lookup adapter — implements PostalCodeLookupPort."""

from __future__ import annotations

import logging

import httpx

from geo_resolver.application.ports.postal_code_port import PostalCodeLookupPort
from geo_resolver.config import Settings
from geo_resolver.domain.entities.address import PostalAddress

logger = logging.getLogger(__name__)


class BrasilApiPostalLookup(PostalCodeLookupPort):
    """One BrasilAPI CEP endpoint version ("v2" or "v1")."""

    def __init__(self, config: Settings, version: str = "v2"):
        self.name = f"brasilapi-{version}"
        self._url = f"{config.brasilapi_base_url.rstrip('/')}/{version}"
        self._user_agent = config.geocoder_user_agent
        self._timeout = config.postal_lookup_timeout

    async def lookup(self, cep: str) -> PostalAddress | None:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self._url}/{cep}",
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                if response.status_code >= 400:
                    logger.warning("%s returned HTTP %d for CEP %s", self.name, response.status_code, cep)
                    return None
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning("%s request failed for CEP %s: %r", self.name, cep, e)
            return None
        except ValueError:
            logger.exception("%s returned a malformed body for CEP %s", self.name, cep)
            return None

        if not isinstance(data, dict):
            return None

        return PostalAddress(
            street=data.get("street") or "",
            neighborhood=data.get("neighborhood") or "",
            city=data.get("city") or "",
            state=data.get("state") or "",
        )
