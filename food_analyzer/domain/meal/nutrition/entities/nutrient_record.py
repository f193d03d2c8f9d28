"""NutrientRecord value object - canonical nutrients for one food."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

NUTRIENT_FIELDS = ("calories", "protein", "fat", "carbs", "fiber")


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round to ``places`` decimals, halves away from zero.

    The builtin ``round`` uses banker's rounding (``round(0.25, 1) == 0.2``);
    displayed nutrient values round halves up instead.

    Example:
        >>> round_half_up(12.34567)
        12.3
        >>> round_half_up(0.25)
        0.3
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class NutrientRecord:
    """
    Value Object: nutrients of one food (or a sum of foods).

    Calories in kcal, everything else in grams.

    Invariants:
    - Every component is >= 0

    Example:
        >>> rice = NutrientRecord(calories=200, protein=5, fat=7, carbs=30, fiber=2)
        >>> (rice + rice).calories
        400.0
    """

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0

    def __post_init__(self) -> None:
        """Validate invariants and coerce components to float."""
        for name in NUTRIENT_FIELDS:
            value = float(getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} cannot be negative, got {value}")
            # frozen dataclass: bypass __setattr__ to store the coerced value
            object.__setattr__(self, name, value)

    @classmethod
    def zero(cls) -> NutrientRecord:
        """All-zero record, the identity for ``+``."""
        return cls()

    def __add__(self, other: object) -> NutrientRecord:
        if not isinstance(other, NutrientRecord):
            return NotImplemented
        return NutrientRecord(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbs=self.carbs + other.carbs,
            fiber=self.fiber + other.fiber,
        )

    @classmethod
    def total_of(cls, records: Iterable[NutrientRecord]) -> NutrientRecord:
        """Component-wise sum of ``records`` (zero for an empty sequence)."""
        total = cls.zero()
        for record in records:
            total = total + record
        return total

    def approx_equals(self, other: NutrientRecord, tolerance: float = 1e-6) -> bool:
        """Component-wise equality allowing float summation drift."""
        return all(
            math.isclose(getattr(self, name), getattr(other, name), abs_tol=tolerance)
            for name in NUTRIENT_FIELDS
        )

    def is_zero(self) -> bool:
        return all(getattr(self, name) == 0.0 for name in NUTRIENT_FIELDS)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for storage/serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> NutrientRecord:
        return cls(**{name: float(data.get(name, 0.0)) for name in NUTRIENT_FIELDS})
