"""Free-text geocoding query builder.

Every query string sent to the text geocoders is built here:

- POSTAL_CODE:    "{cep}, Brazil" (opt-in, only when the CEP is valid)
- FULL:           "{street} {number}, {neighborhood}, {city}, {state}, Brazil"
- WITHOUT_NUMBER: "{street}, {neighborhood}, {city}, {state}, Brazil"

Empty parts are dropped so a missing neighborhood does not leave ", ," behind.
"""

from __future__ import annotations

from geo_resolver.domain.entities.address import Address
from geo_resolver.domain.value_objects.enums import QueryMode

COUNTRY = "Brazil"


def build_geocode_query(address: Address, mode: QueryMode = QueryMode.FULL) -> str:
    if mode == QueryMode.POSTAL_CODE:
        return f"{address.cep}, {COUNTRY}" if address.cep else ""

    street_part = address.street.strip()
    if mode == QueryMode.FULL and address.number.strip():
        street_part = f"{street_part} {address.number.strip()}"

    parts = [street_part, address.neighborhood, address.city, address.state, COUNTRY]
    return ", ".join(p.strip() for p in parts if p and p.strip())


def build_query_variants(
    address: Address, include_postal_code: bool = False
) -> list[tuple[QueryMode, str]]:
    """Queries in attempt order, without duplicates.

    When the address has no number both text modes produce the same string,
    and only the FULL one is returned. The POSTAL_CODE query leads only when
    asked for and the address carries a valid CEP.
    """
    modes = [QueryMode.FULL, QueryMode.WITHOUT_NUMBER]
    if include_postal_code:
        modes.insert(0, QueryMode.POSTAL_CODE)

    variants: list[tuple[QueryMode, str]] = []
    seen: set[str] = set()
    for mode in modes:
        query = build_geocode_query(address, mode)
        if query and query not in seen:
            seen.add(query)
            variants.append((mode, query))
    return variants
