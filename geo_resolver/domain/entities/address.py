"""Address entities — a full postal address and the partial one a CEP lookup returns."""

from __future__ import annotations

import re
from dataclasses import dataclass

from geo_resolver.domain.exceptions import AddressValidationError

CEP_LENGTH = 8

REQUIRED_FIELDS = ("street", "city", "state")


def clean_postal_code(code: str | None) -> str | None:
    """Strip a CEP down to its digits.

    Returns the 8-digit string, or None when the input does not contain
    exactly 8 digits ("01310-100" -> "01310100").
    """
    if not code:
        return None
    digits = re.sub(r"\D", "", code)
    return digits if len(digits) == CEP_LENGTH else None


@dataclass(frozen=True)
class Address:
    """A free-text Brazilian address, built fresh from form state.

    Instances are never mutated; use ``dataclasses.replace`` for edits.
    """

    street: str
    city: str
    state: str
    postal_code: str = ""
    number: str = ""
    neighborhood: str = ""

    @property
    def cep(self) -> str | None:
        return clean_postal_code(self.postal_code)

    def missing_required_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not (getattr(self, name) or "").strip()]

    def validate(self) -> None:
        missing = self.missing_required_fields()
        if missing:
            raise AddressValidationError(missing)

    def describe(self) -> str:
        return (
            f"{self.street}, {self.number or 'S/N'} - {self.neighborhood}, "
            f"{self.city}/{self.state} - CEP: {self.postal_code or '-'}"
        )


@dataclass(frozen=True)
class PostalAddress:
    """Street-level data for a CEP. The house number always comes from the user."""

    street: str
    neighborhood: str
    city: str
    state: str

    def to_address(self, postal_code: str, number: str = "") -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=postal_code,
            number=number,
            neighborhood=self.neighborhood,
        )
