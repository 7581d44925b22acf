"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from geo_resolver.adapters.geocoder.brasilapi_adapter import BrasilApiCepGeocoder
from geo_resolver.adapters.geocoder.google_maps_adapter import GoogleMapsAdapter
from geo_resolver.adapters.geocoder.nominatim_adapter import NominatimAdapter
from geo_resolver.adapters.persistence.database import get_session
from geo_resolver.adapters.persistence.repositories import SqlRecordRepository
from geo_resolver.adapters.postal.brasilapi_adapter import BrasilApiPostalLookup
from geo_resolver.adapters.postal.viacep_adapter import ViaCepPostalLookup
from geo_resolver.application.ports.geocoder_port import GeocoderPort
from geo_resolver.application.ports.postal_code_port import PostalCodeLookupPort
from geo_resolver.application.ports.record_repo import RecordRepository
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.application.use_cases.resolve_postal_code import ResolvePostalCodeUseCase
from geo_resolver.config import Settings, settings
from geo_resolver.domain.value_objects.enums import RecordKind

logger = logging.getLogger(__name__)


def build_postal_lookups(config: Settings) -> list[PostalCodeLookupPort]:
    """BrasilAPI v2 → BrasilAPI v1 → ViaCEP."""
    return [
        BrasilApiPostalLookup(config, version="v2"),
        BrasilApiPostalLookup(config, version="v1"),
        ViaCepPostalLookup(config),
    ]


def build_geocoders(config: Settings) -> list[GeocoderPort]:
    """CEP coordinates → Google (when a key is set) → Nominatim."""
    geocoders: list[GeocoderPort] = [BrasilApiCepGeocoder(config)]
    if config.google_maps_api_key:
        geocoders.append(GoogleMapsAdapter(config))
    else:
        logger.info("GOOGLE_MAPS_API_KEY not set; Google is left out of the geocoding chain")
    geocoders.append(NominatimAdapter(config))
    return geocoders


# Built once per process so the Nominatim request spacing covers every caller.
_postal_lookups = build_postal_lookups(settings)
_geocoders = build_geocoders(settings)


def get_settings() -> Settings:
    return settings


def get_resolve_postal_code_uc() -> ResolvePostalCodeUseCase:
    return ResolvePostalCodeUseCase(lookups=_postal_lookups)


def get_resolve_coordinates_uc() -> ResolveCoordinatesUseCase:
    return ResolveCoordinatesUseCase(geocoders=_geocoders)


def get_record_repo(
    kind: RecordKind, session: AsyncSession = Depends(get_session)
) -> RecordRepository:
    return SqlRecordRepository(session, kind)
