"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class ResolutionOutcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    PROVIDER_ERROR = "provider_error"


class ProviderId(str, Enum):
    """Coordinate providers, in default chain order."""

    BRASILAPI = "brasilapi"
    GOOGLE = "google"
    NOMINATIM = "nominatim"


class Precision(str, Enum):
    """How closely a resolved coordinate pins the address, best first."""

    EXACT = "exact"
    STREET = "street"
    NEIGHBORHOOD = "neighborhood"
    CITY = "city"
    APPROXIMATE = "approximate"


class QueryMode(str, Enum):
    POSTAL_CODE = "postal_code"
    FULL = "full"
    WITHOUT_NUMBER = "without_number"


class RecordKind(str, Enum):
    SUPPORTER = "supporters"
    TEAM = "teams"
    LEADER = "leaders"
    COORDINATOR = "coordinators"
