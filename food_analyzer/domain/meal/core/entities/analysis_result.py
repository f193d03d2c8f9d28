"""AnalysisResult entity - outcome of analyzing one image."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord

from .food_entry import FoodEntry


@dataclass(frozen=True)
class AnalysisResult:
    """
    Entity: itemized nutrients for one analyzed image.

    Scoped to one analysis; replaced by the next analysis or cleared on
    reset. Immutable once built by the aggregator.

    Invariants:
    - totals equals the component-wise sum of entries' nutrients
    - foods that resolved to no data are listed in ``missing`` only

    Example:
        >>> rice = FoodEntry("fried rice", NutrientRecord(200, 5, 7, 30, 2))
        >>> result = AnalysisResult.from_entries([rice], missing=["banana"])
        >>> result.totals.calories
        200.0
    """

    entries: tuple[FoodEntry, ...] = ()
    totals: NutrientRecord = field(default_factory=NutrientRecord.zero)
    missing: tuple[str, ...] = ()
    generation: int = 0

    def __post_init__(self) -> None:
        """Validate the totals invariant."""
        expected = NutrientRecord.total_of(e.nutrients for e in self.entries)
        if not expected.approx_equals(self.totals):
            raise ValueError(
                f"Analysis totals {self.totals} do not match sum of entries {expected}"
            )

    @classmethod
    def empty(cls, generation: int = 0) -> AnalysisResult:
        return cls(generation=generation)

    @classmethod
    def from_entries(
        cls,
        entries: "list[FoodEntry] | tuple[FoodEntry, ...]",
        missing: "list[str] | tuple[str, ...]" = (),
        generation: int = 0,
    ) -> AnalysisResult:
        """Build a result whose totals are computed from ``entries``."""
        entries = tuple(entries)
        return cls(
            entries=entries,
            totals=NutrientRecord.total_of(e.nutrients for e in entries),
            missing=tuple(missing),
            generation=generation,
        )

    def is_empty(self) -> bool:
        return not self.entries

    def food_names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "totals": self.totals.to_dict(),
            "missing": list(self.missing),
            "generation": self.generation,
        }
