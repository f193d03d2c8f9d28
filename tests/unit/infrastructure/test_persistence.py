"""Unit tests for ledger persistence and report export."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.shared.errors import EmptySummaryError, LedgerStoreError
from food_analyzer.infrastructure.persistence.json_ledger_store import JsonLedgerStore
from food_analyzer.infrastructure.persistence.report_exporter import save_summary_report


class TestJsonLedgerStore:
    def test_load_missing_file(self, tmp_path: Path) -> None:
        assert JsonLedgerStore(tmp_path / "none.json").load() is None

    def test_save_then_load(
        self, tmp_path: Path, fried_rice: NutrientRecord, apple: NutrientRecord
    ) -> None:
        ledger = DailyLedger()
        ledger.commit(
            AnalysisResult.from_entries([FoodEntry("fried rice", fried_rice)]), MealType.LUNCH
        )
        ledger.commit(
            AnalysisResult.from_entries([FoodEntry("apple", apple)]), MealType.AFTERNOON_TEA
        )
        store = JsonLedgerStore(tmp_path / "nested" / "ledger.json")

        store.save(ledger.snapshot())
        loaded = store.load()

        assert loaded is not None
        assert loaded.totals.approx_equals(ledger.snapshot().totals)
        assert [e.name for e in loaded.entries_for(MealType.AFTERNOON_TEA)] == ["apple"]
        assert list(store.path.parent.glob("*.tmp")) == []

    def test_file_format(self, tmp_path: Path, apple: NutrientRecord) -> None:
        ledger = DailyLedger()
        ledger.commit(AnalysisResult.from_entries([FoodEntry("apple", apple)]), MealType.SNACK)
        path = tmp_path / "ledger.json"

        JsonLedgerStore(path).save(ledger.snapshot())

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["meals"]["Snack"][0]["name"] == "apple"
        assert data["totals"]["calories"] == 52.0

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "ledger.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(LedgerStoreError, match="does not contain an object"):
            JsonLedgerStore(path).load()

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            '{"meals": {"Snack": [{"nutrients": {}}]}}',
            '{"meals": {"Brunch": []}}',
            '{"meals": []}',
            '{"meals": {"Snack": [{"name": "apple", "nutrients": "lots"}]}}',
        ],
    )
    def test_corrupt_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "ledger.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(LedgerStoreError, match="corrupt"):
            JsonLedgerStore(path).load()


class TestSaveSummaryReport:
    def test_writes_timestamped_file(self, tmp_path: Path) -> None:
        path = save_summary_report(
            "Total Nutrient Intake:\n", tmp_path / "reports", now=datetime(2024, 5, 17, 12, 30, 5)
        )

        assert path.name == "nutrition-summary-20240517-123005.txt"
        assert path.read_text(encoding="utf-8") == "Total Nutrient Intake:\n"

    def test_empty_summary_refused(self, tmp_path: Path) -> None:
        with pytest.raises(EmptySummaryError, match="No summary data"):
            save_summary_report("", tmp_path)
        assert list(tmp_path.iterdir()) == []
