"""Plain-text renderings of analyses and of the daily ledger.

Pure functions; the same input always yields the same text. Calories
are truncated to whole kcal, gram values rounded to one decimal.
"""

from typing import Iterable, Tuple

from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.ledger.daily_ledger import LedgerSnapshot
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import (
    NutrientRecord,
    round_half_up,
)

ANALYZING_TEXT = "Analyzing image...\n\n🔍 Identifying food items"
ANALYZED_PREFIX = "Analyzing...\n\n"
ANALYSIS_COMPLETE_TEXT = "✅ Analysis complete - add to your daily tracking"


def _grams(value: float) -> str:
    return f"{round_half_up(value)}"


def format_identified(names: Iterable[str], merged: Iterable[Tuple[str, str]] = ()) -> str:
    """
    Header shown once recognition finished.

    Example:
        >>> format_identified(["fried rice"], [("fried rice", "egg")])
        'Analyzing...\\n\\n🧠 Merged fried rice components, removed separate egg'
    """
    merges = [
        f"🧠 Merged {composite} components, removed separate {component}"
        for composite, component in merged
    ]
    if merges:
        return ANALYZED_PREFIX + "\n".join(merges)
    return ANALYZED_PREFIX + f"🧠 Identified foods: {', '.join(names)}"


def format_food_block(entry: FoodEntry) -> str:
    """Per-food nutrient block as values were reported by the lookup."""
    n = entry.nutrients
    return (
        f"🍽️ {entry.display_name}:\n"
        f"   - Calories: {n.calories} kcal\n"
        f"   - Protein: {n.protein} g\n"
        f"   - Fat: {n.fat} g\n"
        f"   - Carbohydrates: {n.carbs} g\n"
        f"   - Fiber: {n.fiber} g"
    )


def format_missing(name: str) -> str:
    return f"⚠️ No data found for {name}"


def format_analysis_totals(result: AnalysisResult) -> str:
    """Nutrition summary of one analysis; empty string when nothing resolved."""
    if result.is_empty():
        return ""
    t = result.totals
    return (
        "✅ Nutrition Summary\n"
        f"Total Calories: {int(t.calories)} kcal\n"
        f"Total Protein: {_grams(t.protein)} g\n"
        f"Total Fat: {_grams(t.fat)} g\n"
        f"Total Carbohydrates: {_grams(t.carbs)} g\n"
        f"Total Fiber: {_grams(t.fiber)} g"
    )


def format_totals_section(totals: NutrientRecord) -> str:
    return (
        "Total Nutrient Intake:\n"
        f"  Calories: {int(totals.calories)} kcal\n"
        f"  Protein: {_grams(totals.protein)} g\n"
        f"  Fat: {_grams(totals.fat)} g\n"
        f"  Carbohydrates: {_grams(totals.carbs)} g\n"
        f"  Fiber: {_grams(totals.fiber)} g\n\n"
    )


def format_daily_summary(snapshot: LedgerSnapshot) -> str:
    """
    Render the daily ledger.

    Meals appear in meal-type order; empty meals are skipped and every
    section ends with a blank line.

    Example:
        >>> print(format_daily_summary(snapshot))
        Total Nutrient Intake:
          Calories: 200 kcal
          Protein: 5.0 g
          Fat: 7.0 g
          Carbohydrates: 30.0 g
          Fiber: 2.0 g

        Lunch:
          - Fried Rice
    """
    parts = [format_totals_section(snapshot.totals)]
    for meal, entries in snapshot.non_empty_meals():
        lines = [f"{meal.value}:"] + [f"  - {entry.display_name}" for entry in entries]
        parts.append("\n".join(lines) + "\n\n")
    return "".join(parts)
