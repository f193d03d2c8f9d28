"""Lookup outcomes and per-food resolutions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .nutrient_record import NutrientRecord


class LookupStatus(str, Enum):
    """
    How a single nutrition lookup ended.

    Only FOUND and FALLBACK carry a record. Everything else is reported
    to the user as "no data" but kept here as the diagnostic reason.
    """

    FOUND = "FOUND"
    FALLBACK = "FALLBACK"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    NO_MATCH = "NO_MATCH"


@dataclass(frozen=True)
class LookupOutcome:
    """
    Result of asking a nutrition provider about one food name.

    Example:
        >>> LookupOutcome.found(NutrientRecord(calories=89)).has_record()
        True
        >>> LookupOutcome.failed(LookupStatus.NO_MATCH).has_record()
        False
    """

    status: LookupStatus
    record: Optional[NutrientRecord] = None
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        if self.status is LookupStatus.FOUND and self.record is None:
            raise ValueError("FOUND outcome requires a record")
        if self.status is not LookupStatus.FOUND and self.record is not None:
            raise ValueError(f"{self.status.value} outcome cannot carry a record")

    @classmethod
    def found(cls, record: NutrientRecord) -> LookupOutcome:
        return cls(status=LookupStatus.FOUND, record=record)

    @classmethod
    def failed(cls, status: LookupStatus, detail: Optional[str] = None) -> LookupOutcome:
        return cls(status=status, detail=detail)

    def has_record(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class Resolution:
    """Final answer of the resolver for one normalized food name."""

    name: str
    status: LookupStatus
    record: Optional[NutrientRecord] = None
    reason: Optional[str] = None

    def has_record(self) -> bool:
        return self.record is not None
