"""Tests for the BrasilAPI and ViaCEP lookup adapters — HTTP mocked with respx."""

import httpx
import pytest
import respx
from httpx import Response

from geo_resolver.adapters.postal.brasilapi_adapter import BrasilApiPostalLookup
from geo_resolver.adapters.postal.viacep_adapter import ViaCepPostalLookup
from geo_resolver.domain.entities.address import PostalAddress

CEP = "01310100"
PAULISTA = PostalAddress(
    street="Avenida Paulista", neighborhood="Bela Vista", city="São Paulo", state="SP"
)


@respx.mock
@pytest.mark.asyncio
async def test_brasilapi_v2_lookup(test_settings):
    respx.get(f"https://brasilapi.test/api/cep/v2/{CEP}").mock(
        return_value=Response(
            200,
            json={
                "cep": CEP, "state": "SP", "city": "São Paulo",
                "neighborhood": "Bela Vista", "street": "Avenida Paulista",
            },
        )
    )

    found = await BrasilApiPostalLookup(test_settings, version="v2").lookup(CEP)

    assert found == PAULISTA


@respx.mock
@pytest.mark.asyncio
async def test_brasilapi_v1_uses_its_own_path(test_settings):
    route = respx.get(f"https://brasilapi.test/api/cep/v1/{CEP}").mock(
        return_value=Response(
            200,
            json={"cep": CEP, "state": "SP", "city": "São Paulo", "neighborhood": None, "street": None},
        )
    )

    lookup = BrasilApiPostalLookup(test_settings, version="v1")
    found = await lookup.lookup(CEP)

    assert route.called
    assert lookup.name == "brasilapi-v1"
    assert found == PostalAddress(street="", neighborhood="", city="São Paulo", state="SP")


@respx.mock
@pytest.mark.asyncio
async def test_brasilapi_not_found_returns_none(test_settings):
    respx.get(f"https://brasilapi.test/api/cep/v2/{CEP}").mock(
        return_value=Response(404, json={"name": "CepPromiseError"})
    )

    assert await BrasilApiPostalLookup(test_settings).lookup(CEP) is None


@respx.mock
@pytest.mark.asyncio
async def test_brasilapi_timeout_returns_none(test_settings):
    respx.get(f"https://brasilapi.test/api/cep/v2/{CEP}").mock(
        side_effect=httpx.ConnectTimeout("timed out")
    )

    assert await BrasilApiPostalLookup(test_settings).lookup(CEP) is None


@respx.mock
@pytest.mark.asyncio
async def test_viacep_lookup(test_settings):
    respx.get(f"https://viacep.test/ws/{CEP}/json/").mock(
        return_value=Response(
            200,
            json={
                "cep": "01310-100", "logradouro": "Avenida Paulista", "bairro": "Bela Vista",
                "localidade": "São Paulo", "uf": "SP",
            },
        )
    )

    assert await ViaCepPostalLookup(test_settings).lookup(CEP) == PAULISTA


@respx.mock
@pytest.mark.asyncio
async def test_viacep_erro_flag_returns_none(test_settings):
    respx.get(f"https://viacep.test/ws/{CEP}/json/").mock(
        return_value=Response(200, json={"erro": True})
    )

    assert await ViaCepPostalLookup(test_settings).lookup(CEP) is None


@respx.mock
@pytest.mark.asyncio
async def test_viacep_malformed_body_returns_none(test_settings):
    respx.get(f"https://viacep.test/ws/{CEP}/json/").mock(
        return_value=Response(200, text="<html>maintenance</html>")
    )

    assert await ViaCepPostalLookup(test_settings).lookup(CEP) is None
