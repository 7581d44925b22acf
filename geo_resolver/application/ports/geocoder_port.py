"""Port interface for coordinate providers."""

from abc import ABC, abstractmethod

from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.value_objects.enums import ProviderId


class GeocoderPort(ABC):
    provider: ProviderId

    @abstractmethod
    async def try_resolve(self, address: Address) -> ResolutionResult:
        """Turn an address into a coordinate with this provider alone.

        Implementations never raise for network or provider failures;
        those come back as PROVIDER_ERROR results.
        """
        ...
