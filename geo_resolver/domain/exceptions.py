"""Domain errors.

Only ``AddressValidationError`` ever reaches a caller of the resolution use
case; provider failures are reported as ``ResolutionResult`` values.
"""


class AddressValidationError(ValueError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Address is missing required fields: {', '.join(missing)}")


class InvalidCoordinateError(ValueError):
    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"Coordinate out of range: ({latitude}, {longitude})")


class ProviderLookupError(Exception):
    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class UnknownProviderError(ValueError):
    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Provider '{provider}' is not configured")
