"""Unit tests for GetDailySummaryQuery."""

import pytest

from food_analyzer.application.meal.queries import (
    GetDailySummaryQuery,
    GetDailySummaryQueryHandler,
)
from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord


class TestGetDailySummary:
    @pytest.mark.asyncio
    async def test_empty_ledger_has_empty_report(self) -> None:
        summary = await GetDailySummaryQueryHandler(DailyLedger()).handle(GetDailySummaryQuery())

        assert summary.report == ""
        assert not summary.has_data()

    @pytest.mark.asyncio
    async def test_report_for_committed_foods(self, apple: NutrientRecord) -> None:
        ledger = DailyLedger()
        ledger.commit(
            AnalysisResult.from_entries([FoodEntry("apple", apple)]), MealType.AFTERNOON_TEA
        )

        summary = await GetDailySummaryQueryHandler(ledger).handle(GetDailySummaryQuery())

        assert summary.has_data()
        assert summary.report.startswith("Total Nutrient Intake:\n  Calories: 52 kcal\n")
        assert "Afternoon Tea:\n  - Apple\n\n" in summary.report
        assert summary.snapshot.entry_count() == 1
