"""Port interface for CEP -> street data lookups."""

from abc import ABC, abstractmethod

from geo_resolver.domain.entities.address import PostalAddress


class PostalCodeLookupPort(ABC):
    name: str

    @abstractmethod
    async def lookup(self, cep: str) -> PostalAddress | None:
        """Fetch street/neighborhood/city/state for an 8-digit CEP.

        Returns None if the provider fails or does not know the CEP.
        """
        ...
