"""ResolveCoordinatesUseCase — walk the provider chain until one succeeds."""

from __future__ import annotations

import logging

from geo_resolver.application.ports.geocoder_port import GeocoderPort
from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.exceptions import UnknownProviderError
from geo_resolver.domain.value_objects.enums import ProviderId, ResolutionOutcome

logger = logging.getLogger(__name__)

USER_MESSAGE = "Address not found. Check the CEP and address or enter the location manually."


class ResolveCoordinatesUseCase:
    """Orchestrates the geocoding fallback chain.

    Each provider is asked exactly once per call, in the order given, and the
    first SUCCESS wins. Validation happens before any provider is touched.
    """

    def __init__(self, geocoders: list[GeocoderPort]):
        self._geocoders = geocoders

    def chain_for(self, provider: ProviderId | str | None = None) -> list[GeocoderPort]:
        """The configured chain, or just the named provider from it."""
        if provider is None:
            return list(self._geocoders)
        chosen = [g for g in self._geocoders if g.provider == provider]
        if not chosen:
            raise UnknownProviderError(str(getattr(provider, "value", provider)))
        return chosen

    async def execute(
        self,
        address: Address,
        provider: ProviderId | str | None = None,
    ) -> ResolutionResult:
        """Resolve ``address`` to a coordinate.

        Raises:
            AddressValidationError: street, city or state is empty.
            UnknownProviderError: ``provider`` is not part of the chain.
        """
        address.validate()
        chain = self.chain_for(provider)

        logger.info("Resolving %s", address.describe())

        failures: list[ResolutionResult] = []
        for geocoder in chain:
            result = await geocoder.try_resolve(address)
            if result.succeeded:
                logger.info(
                    "Resolved via %s → (%f, %f)",
                    result.provider, result.point.latitude, result.point.longitude,
                )
                return result

            logger.info(
                "Provider %s: %s (%s)", geocoder.provider.value, result.outcome.value, result.reason
            )
            failures.append(result)

        return self._exhausted(failures)

    @staticmethod
    def _exhausted(failures: list[ResolutionResult]) -> ResolutionResult:
        reasons = "; ".join(f"{f.provider}: {f.reason}" for f in failures) or "no providers configured"
        if failures and all(f.outcome == ResolutionOutcome.PROVIDER_ERROR for f in failures):
            logger.error("Every provider failed: %s", reasons)
            return ResolutionResult.provider_error(None, f"{USER_MESSAGE} ({reasons})")

        logger.warning("Address not found by any provider: %s", reasons)
        return ResolutionResult.not_found(None, f"{USER_MESSAGE} ({reasons})")
