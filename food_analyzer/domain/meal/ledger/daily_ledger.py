"""Daily ledger - running totals and per-meal log of confirmed foods."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, List, Tuple

from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    Read-only copy of the ledger for presentation.

    ``meals`` lists every MealType in declaration order.
    """

    totals: NutrientRecord
    meals: Tuple[Tuple[MealType, Tuple[FoodEntry, ...]], ...]

    @classmethod
    def empty(cls) -> LedgerSnapshot:
        return cls(totals=NutrientRecord.zero(), meals=tuple((m, ()) for m in MealType))

    def entries_for(self, meal: MealType) -> Tuple[FoodEntry, ...]:
        for meal_type, entries in self.meals:
            if meal_type is meal:
                return entries
        return ()

    def non_empty_meals(self) -> List[Tuple[MealType, Tuple[FoodEntry, ...]]]:
        return [(meal, entries) for meal, entries in self.meals if entries]

    def entry_count(self) -> int:
        return sum(len(entries) for _, entries in self.meals)

    def is_empty(self) -> bool:
        return self.entry_count() == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totals": self.totals.to_dict(),
            "meals": {
                meal.value: [entry.to_dict() for entry in entries] for meal, entries in self.meals
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LedgerSnapshot:
        """
        Rebuild a snapshot; totals are recomputed from the entries.

        Raises:
            InvalidMealTypeError: If a meal key is not a known meal type
        """
        raw_meals = data.get("meals", {})
        by_meal: Dict[MealType, Tuple[FoodEntry, ...]] = {
            MealType.parse(key): tuple(FoodEntry.from_dict(e) for e in entries)
            for key, entries in raw_meals.items()
        }
        meals = tuple((meal, by_meal.get(meal, ())) for meal in MealType)
        totals = NutrientRecord.total_of(e.nutrients for _, entries in meals for e in entries)
        return cls(totals=totals, meals=meals)


class DailyLedger:
    """
    Aggregate: the day's confirmed foods grouped by meal, plus grand totals.

    Invariants:
    - totals equals the component-wise sum of every entry in every meal
    - every MealType always has a (possibly empty) entry list
    - a commit is all-or-nothing; readers never see half of it

    Thread safety: all mutations and snapshots hold one lock.

    Example:
        >>> ledger = DailyLedger()
        >>> ledger.commit(result, MealType.LUNCH)
        True
        >>> ledger.snapshot().entries_for(MealType.LUNCH)
        (FoodEntry(name='fried rice', ...),)
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._totals = NutrientRecord.zero()
        self._meals: Dict[MealType, List[FoodEntry]] = {meal: [] for meal in MealType}

    def commit(self, result: AnalysisResult, meal: MealType) -> bool:
        """
        Append every entry of ``result`` to ``meal`` and add its totals.

        Args:
            result: Final analysis result
            meal: Target meal slot

        Returns:
            False (and no change) when the result has no entries
        """
        if result.is_empty():
            logger.info("Skipping commit of empty analysis", extra={"meal_type": meal.value})
            return False

        with self._lock:
            self._meals[meal].extend(result.entries)
            self._totals = self._totals + result.totals

        logger.info(
            "Analysis committed",
            extra={
                "meal_type": meal.value,
                "entry_count": len(result.entries),
                "calories": result.totals.calories,
            },
        )
        return True

    def reset(self) -> None:
        with self._lock:
            self._totals = NutrientRecord.zero()
            self._meals = {meal: [] for meal in MealType}
        logger.info("Daily ledger reset")

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(
                totals=self._totals,
                meals=tuple((meal, tuple(self._meals[meal])) for meal in MealType),
            )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        """Replace the whole state with ``snapshot`` (totals recomputed)."""
        meals = {meal: list(snapshot.entries_for(meal)) for meal in MealType}
        totals = NutrientRecord.total_of(e.nutrients for entries in meals.values() for e in entries)
        with self._lock:
            self._meals = meals
            self._totals = totals
        logger.info(
            "Daily ledger restored",
            extra={"entry_count": sum(len(v) for v in meals.values())},
        )
