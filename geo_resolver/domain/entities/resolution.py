"""ResolutionResult — outcome of one geocoding attempt."""

from __future__ import annotations

from dataclasses import dataclass

from geo_resolver.domain.value_objects.enums import Precision, ResolutionOutcome
from geo_resolver.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class ResolutionResult:
    """Never partially filled: ``point`` and ``precision`` are set if and only if
    the outcome is SUCCESS. ``confidence`` is a 0-1 score some providers report.
    """

    outcome: ResolutionOutcome
    provider: str | None = None
    point: GeoPoint | None = None
    precision: Precision | None = None
    confidence: float | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.outcome == ResolutionOutcome.SUCCESS:
            if self.point is None or self.provider is None or self.precision is None:
                raise ValueError("A successful resolution needs a point, a precision and a provider")
        elif self.point is not None or self.precision is not None or self.confidence is not None:
            raise ValueError(f"A {self.outcome.value} resolution cannot carry a location")
        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0 and 1, got {self.confidence}")

    @property
    def succeeded(self) -> bool:
        return self.outcome == ResolutionOutcome.SUCCESS

    @classmethod
    def success(
        cls,
        point: GeoPoint,
        provider: str,
        precision: Precision = Precision.APPROXIMATE,
        confidence: float | None = None,
    ) -> ResolutionResult:
        return cls(
            outcome=ResolutionOutcome.SUCCESS,
            provider=provider,
            point=point,
            precision=precision,
            confidence=confidence,
        )

    @classmethod
    def not_found(cls, provider: str | None, reason: str) -> ResolutionResult:
        return cls(outcome=ResolutionOutcome.NOT_FOUND, provider=provider, reason=reason)

    @classmethod
    def provider_error(cls, provider: str | None, reason: str) -> ResolutionResult:
        return cls(outcome=ResolutionOutcome.PROVIDER_ERROR, provider=provider, reason=reason)
