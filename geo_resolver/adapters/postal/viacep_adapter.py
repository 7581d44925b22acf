"""ViaCEP lookup adapter — implements PostalCodeLookupPort."""

from __future__ import annotations

import logging

import httpx

from geo_resolver.application.ports.postal_code_port import PostalCodeLookupPort
from geo_resolver.config import Settings
from geo_resolver.domain.entities.address import PostalAddress

logger = logging.getLogger(__name__)


class ViaCepPostalLookup(PostalCodeLookupPort):
    """ViaCEP answers 200 with {"erro": true} for unknown CEPs."""

    name = "viacep"

    def __init__(self, config: Settings):
        self._base_url = config.viacep_base_url.rstrip("/")
        self._user_agent = config.geocoder_user_agent
        self._timeout = config.postal_lookup_timeout

    async def lookup(self, cep: str) -> PostalAddress | None:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self._base_url}/{cep}/json/",
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout,
                )
                if response.status_code >= 400:
                    logger.warning("ViaCEP returned HTTP %d for CEP %s", response.status_code, cep)
                    return None
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning("ViaCEP request failed for CEP %s: %r", cep, e)
            return None
        except ValueError:
            logger.exception("ViaCEP returned a malformed body for CEP %s", cep)
            return None

        if not isinstance(data, dict) or data.get("erro"):
            logger.info("CEP %s not found in ViaCEP", cep)
            return None

        return PostalAddress(
            street=data.get("logradouro") or "",
            neighborhood=data.get("bairro") or "",
            city=data.get("localidade") or "",
            state=data.get("uf") or "",
        )
