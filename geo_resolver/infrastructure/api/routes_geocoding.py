"""Geocoding endpoints — CEP prefill and address → coordinate resolution."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from geo_resolver.application.use_cases.resolve_coordinates import (
    USER_MESSAGE,
    ResolveCoordinatesUseCase,
)
from geo_resolver.application.use_cases.resolve_postal_code import ResolvePostalCodeUseCase
from geo_resolver.domain.entities.address import Address, clean_postal_code
from geo_resolver.domain.exceptions import AddressValidationError, UnknownProviderError
from geo_resolver.domain.value_objects.enums import ProviderId
from geo_resolver.infrastructure.api.dependencies import (
    get_resolve_coordinates_uc,
    get_resolve_postal_code_uc,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocoding"])


class AddressIn(BaseModel):
    postal_code: str = ""
    street: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            number=self.number,
            neighborhood=self.neighborhood,
        )


@router.get("/cep/{code}")
async def lookup_cep(
    code: str,
    uc: ResolvePostalCodeUseCase = Depends(get_resolve_postal_code_uc),
):
    """Prefill street, neighborhood, city and state for a CEP."""
    cep = clean_postal_code(code)
    if cep is None:
        raise HTTPException(status_code=422, detail="CEP must have exactly 8 digits")

    found = await uc.execute(cep)
    if found is None:
        raise HTTPException(
            status_code=404,
            detail="CEP not found. Fill in the address manually.",
        )

    return {
        "cep": cep,
        "street": found.street,
        "neighborhood": found.neighborhood,
        "city": found.city,
        "state": found.state,
    }


@router.post("/geocode")
async def geocode_address(
    body: AddressIn,
    provider: ProviderId | None = None,
    uc: ResolveCoordinatesUseCase = Depends(get_resolve_coordinates_uc),
):
    """Resolve an address to a coordinate through the provider chain."""
    try:
        result = await uc.execute(body.to_domain(), provider=provider)
    except AddressValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UnknownProviderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not result.succeeded:
        logger.info("Geocoding failed: %s", result.reason)
        raise HTTPException(status_code=404, detail=USER_MESSAGE)

    return {
        "status": "ok",
        "latitude": result.point.latitude,
        "longitude": result.point.longitude,
        "provider": result.provider,
        "precision": result.precision.value,
        "confidence": result.confidence,
    }
