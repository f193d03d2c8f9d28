"""FoodEntry entity - one resolved food."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord


@dataclass(frozen=True)
class FoodEntry:
    """
    Entity: a food name together with its resolved nutrients.

    Created only from a successful (or fallback) nutrient resolution,
    so it is never partially populated.
    """

    name: str  # normalized, lowercase (e.g. "fried rice")
    nutrients: NutrientRecord

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Food entry name cannot be empty")

    @property
    def display_name(self) -> str:
        """Title-cased name for reports (e.g. "Fried Rice")."""
        return self.name.title()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "nutrients": self.nutrients.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FoodEntry:
        return cls(name=data["name"], nutrients=NutrientRecord.from_dict(data["nutrients"]))
