"""ResolvePostalCodeUseCase — prefill an address from its CEP."""

from __future__ import annotations

import logging

from geo_resolver.application.ports.postal_code_port import PostalCodeLookupPort
from geo_resolver.domain.entities.address import PostalAddress, clean_postal_code

logger = logging.getLogger(__name__)


class ResolvePostalCodeUseCase:
    """Try each postal-code provider in order until one knows the CEP."""

    def __init__(self, lookups: list[PostalCodeLookupPort]):
        self._lookups = lookups

    async def execute(self, code: str | None) -> PostalAddress | None:
        cep = clean_postal_code(code)
        if cep is None:
            return None

        for lookup in self._lookups:
            found = await lookup.lookup(cep)
            if found is not None:
                logger.info("CEP %s resolved by %s → %s/%s", cep, lookup.name, found.city, found.state)
                return found
            logger.info("CEP %s not resolved by %s, trying next provider", cep, lookup.name)

        logger.warning("CEP %s not found by any provider", cep)
        return None
