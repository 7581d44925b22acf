"""Tests for ResolveCoordinatesUseCase with in-memory fakes."""

from __future__ import annotations

from dataclasses import replace

import pytest

from geo_resolver.application.ports.geocoder_port import GeocoderPort
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.domain.entities.resolution import ResolutionResult
from geo_resolver.domain.exceptions import AddressValidationError, UnknownProviderError
from geo_resolver.domain.policies.query_builder import build_query_variants
from geo_resolver.domain.value_objects.enums import ProviderId, ResolutionOutcome
from geo_resolver.domain.value_objects.geo_point import GeoPoint

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeCepGeocoder(GeocoderPort):
    provider = ProviderId.BRASILAPI

    def __init__(self, result: GeoPoint | None = None, error: bool = False):
        self._result = result
        self._error = error
        self.calls = []

    async def try_resolve(self, address):
        self.calls.append(address.cep)
        if self._error:
            return ResolutionResult.provider_error(self.provider.value, "HTTP 503")
        if self._result is None:
            return ResolutionResult.not_found(self.provider.value, "no coordinates for CEP")
        return ResolutionResult.success(self._result, self.provider.value)


class FakeTextGeocoder(GeocoderPort):
    """Answers from a query → point table, recording every query it sees."""

    def __init__(self, provider: ProviderId, answers: dict[str, GeoPoint] | None = None, error=False):
        self.provider = provider
        self._answers = answers or {}
        self._error = error
        self.queries: list[str] = []

    async def try_resolve(self, address):
        if self._error:
            return ResolutionResult.provider_error(self.provider.value, "timeout")
        for _, query in build_query_variants(address):
            self.queries.append(query)
            if query in self._answers:
                return ResolutionResult.success(self._answers[query], self.provider.value)
        return ResolutionResult.not_found(self.provider.value, "no match")


FULL_QUERY = "Avenida Paulista 1578, São Paulo, SP, Brazil"
STRIPPED_QUERY = "Avenida Paulista, São Paulo, SP, Brazil"
FULL_POINT = GeoPoint(latitude=-23.5613, longitude=-46.6565)
STRIPPED_POINT = GeoPoint(latitude=-23.5631, longitude=-46.6544)


# ─── Validation ─────────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["street", "city", "state"])
async def test_incomplete_address_raises_before_any_call(paulista_address, field):
    cep = FakeCepGeocoder(result=FULL_POINT)
    google = FakeTextGeocoder(ProviderId.GOOGLE, {FULL_QUERY: FULL_POINT})
    uc = ResolveCoordinatesUseCase([cep, google])

    with pytest.raises(AddressValidationError):
        await uc.execute(replace(paulista_address, **{field: ""}))

    assert cep.calls == []
    assert google.queries == []


# ─── Fallback order ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_cep_provider_wins_when_it_has_coordinates(paulista_address):
    point = GeoPoint(latitude=-23.56, longitude=-46.65)
    google = FakeTextGeocoder(ProviderId.GOOGLE, {FULL_QUERY: FULL_POINT})
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(result=point), google])

    result = await uc.execute(paulista_address)

    assert result.succeeded
    assert result.point == point
    assert result.provider == "brasilapi"
    assert google.queries == []


@pytest.mark.asyncio
async def test_full_query_used_after_cep_miss(paulista_address):
    cep = FakeCepGeocoder(result=None)
    google = FakeTextGeocoder(ProviderId.GOOGLE, {FULL_QUERY: FULL_POINT})
    uc = ResolveCoordinatesUseCase([cep, google])

    result = await uc.execute(paulista_address)

    assert result.outcome == ResolutionOutcome.SUCCESS
    assert result.point == FULL_POINT
    assert result.provider == "google"
    assert cep.calls == ["01310100"]
    assert google.queries == [FULL_QUERY]


@pytest.mark.asyncio
async def test_number_stripped_query_after_full_miss(paulista_address):
    google = FakeTextGeocoder(ProviderId.GOOGLE, {STRIPPED_QUERY: STRIPPED_POINT})
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(result=None), google])

    result = await uc.execute(paulista_address)

    assert result.succeeded
    assert result.point == STRIPPED_POINT
    assert google.queries == [FULL_QUERY, STRIPPED_QUERY]


@pytest.mark.asyncio
async def test_secondary_geocoder_after_primary_exhausted(paulista_address):
    google = FakeTextGeocoder(ProviderId.GOOGLE)
    nominatim = FakeTextGeocoder(ProviderId.NOMINATIM, {STRIPPED_QUERY: STRIPPED_POINT})
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(result=None), google, nominatim])

    result = await uc.execute(paulista_address)

    assert result.provider == "nominatim"
    assert google.queries == [FULL_QUERY, STRIPPED_QUERY]
    assert nominatim.queries == [FULL_QUERY, STRIPPED_QUERY]


@pytest.mark.asyncio
async def test_provider_error_falls_through(paulista_address):
    google = FakeTextGeocoder(ProviderId.GOOGLE, error=True)
    nominatim = FakeTextGeocoder(ProviderId.NOMINATIM, {FULL_QUERY: FULL_POINT})
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(error=True), google, nominatim])

    result = await uc.execute(paulista_address)

    assert result.provider == "nominatim"


# ─── Exhaustion ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_all_providers_miss_is_not_found(paulista_address):
    google = FakeTextGeocoder(ProviderId.GOOGLE)
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(result=None), google])

    result = await uc.execute(paulista_address)

    assert result.outcome == ResolutionOutcome.NOT_FOUND
    assert result.point is None
    assert google.queries == [FULL_QUERY, STRIPPED_QUERY]


@pytest.mark.asyncio
async def test_all_providers_erroring_is_provider_error(paulista_address):
    uc = ResolveCoordinatesUseCase(
        [FakeCepGeocoder(error=True), FakeTextGeocoder(ProviderId.GOOGLE, error=True)]
    )

    result = await uc.execute(paulista_address)

    assert result.outcome == ResolutionOutcome.PROVIDER_ERROR
    assert result.point is None


@pytest.mark.asyncio
async def test_empty_chain_is_not_found(paulista_address):
    result = await ResolveCoordinatesUseCase([]).execute(paulista_address)
    assert result.outcome == ResolutionOutcome.NOT_FOUND


# ─── Determinism / provider selection ───────────────────────────────


@pytest.mark.asyncio
async def test_resolving_twice_is_idempotent(paulista_address):
    uc = ResolveCoordinatesUseCase(
        [FakeCepGeocoder(result=None), FakeTextGeocoder(ProviderId.GOOGLE, {FULL_QUERY: FULL_POINT})]
    )

    first = await uc.execute(paulista_address)
    second = await uc.execute(paulista_address)

    assert first == second


@pytest.mark.asyncio
async def test_named_provider_only(paulista_address):
    cep = FakeCepGeocoder(result=FULL_POINT)
    nominatim = FakeTextGeocoder(ProviderId.NOMINATIM, {FULL_QUERY: FULL_POINT})
    uc = ResolveCoordinatesUseCase([cep, nominatim])

    result = await uc.execute(paulista_address, provider="nominatim")

    assert result.provider == "nominatim"
    assert cep.calls == []


@pytest.mark.asyncio
async def test_unknown_provider_rejected(paulista_address):
    uc = ResolveCoordinatesUseCase([FakeCepGeocoder(result=FULL_POINT)])
    with pytest.raises(UnknownProviderError):
        await uc.execute(paulista_address, provider=ProviderId.GOOGLE)
