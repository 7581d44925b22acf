"""LocalityPolicy — reject provider matches that landed in the wrong place.

Geocoders happily return a street with the same name in another city. A match
is only accepted when the country is Brazil and the city and state the
provider reports agree with the ones requested. Fields the provider does not
report are not checked.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

from geo_resolver.domain.entities.address import Address

# UF code -> normalized state name
BRAZILIAN_STATES: dict[str, str] = {
    "ac": "acre",
    "al": "alagoas",
    "ap": "amapa",
    "am": "amazonas",
    "ba": "bahia",
    "ce": "ceara",
    "df": "distrito federal",
    "es": "espirito santo",
    "go": "goias",
    "ma": "maranhao",
    "mt": "mato grosso",
    "ms": "mato grosso do sul",
    "mg": "minas gerais",
    "pa": "para",
    "pb": "paraiba",
    "pr": "parana",
    "pe": "pernambuco",
    "pi": "piaui",
    "rj": "rio de janeiro",
    "rn": "rio grande do norte",
    "rs": "rio grande do sul",
    "ro": "rondonia",
    "rr": "roraima",
    "sc": "santa catarina",
    "sp": "sao paulo",
    "se": "sergipe",
    "to": "tocantins",
}

_STATE_CODES = {name: code for code, name in BRAZILIAN_STATES.items()}

STATE_PREFIXES = ("estado de ", "estado do ", "estado da ")


@dataclass(frozen=True)
class LocalityCheck:
    valid: bool
    reason: str | None = None


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and punctuation, collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower().strip())
    without_accents = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    without_punct = re.sub(r"[^a-z0-9\s]", "", without_accents)
    return re.sub(r"\s+", " ", without_punct).strip()


def state_code(state: str) -> str | None:
    """Map "SP", "São Paulo" or "BR-SP" to the two-letter UF code."""
    norm = normalize_text(state)
    if norm.startswith("br") and norm[2:] in BRAZILIAN_STATES and len(norm) == 4:
        return norm[2:]
    if norm in BRAZILIAN_STATES:
        return norm
    for prefix in STATE_PREFIXES:
        if norm.startswith(prefix):
            norm = norm[len(prefix):]
            break
    return _STATE_CODES.get(norm)


def cities_equivalent(requested: str, returned: str) -> bool:
    c1 = normalize_text(requested)
    c2 = normalize_text(returned)
    if not c1 or not c2:
        return False
    if c1 == c2:
        return True
    # "Sao Paulo" vs "Sao Paulo - SP"
    return c1 in c2 or c2 in c1


def states_equivalent(requested: str, returned: str) -> bool:
    code1 = state_code(requested)
    code2 = state_code(returned)
    if code1 and code2:
        return code1 == code2
    return normalize_text(requested) == normalize_text(returned)


def validate_locality(
    requested: Address,
    city: str | None = None,
    state: str | None = None,
    country: str | None = None,
) -> LocalityCheck:
    if country:
        country_norm = normalize_text(country)
        if "brasil" not in country_norm and "brazil" not in country_norm and country_norm != "br":
            return LocalityCheck(False, f"Wrong country: expected Brazil, got {country}")

    if city and not cities_equivalent(requested.city, city):
        return LocalityCheck(False, f"Wrong city: expected '{requested.city}', got '{city}'")

    if state and not states_equivalent(requested.state, state):
        return LocalityCheck(False, f"Wrong state: expected '{requested.state}', got '{state}'")

    return LocalityCheck(True)
