"""Pytest configuration and shared fixtures."""

import pytest

from geo_resolver.config import Settings
from geo_resolver.domain.entities.address import Address


@pytest.fixture
def test_settings():
    return Settings(
        GOOGLE_MAPS_API_KEY="test-key",
        GEOCODER_USER_AGENT="test-agent/1.0",
        BRASILAPI_BASE_URL="https://brasilapi.test/api/cep",
        VIACEP_BASE_URL="https://viacep.test/ws",
        NOMINATIM_URL="https://nominatim.test/search",
        GOOGLE_GEOCODE_URL="https://google.test/geocode/json",
        BULK_DELAY_SECONDS=0.0,
        NOMINATIM_MIN_INTERVAL=0.0,
    )


@pytest.fixture
def paulista_address():
    return Address(
        postal_code="01310-100",
        street="Avenida Paulista",
        number="1578",
        city="São Paulo",
        state="SP",
    )
