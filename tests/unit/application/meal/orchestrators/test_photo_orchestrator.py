"""Unit tests for MealAnalysisOrchestrator.

Tests focus on:
- Full pipeline with fake providers
- Progress text lines
- Recognition failures surfaced as outcome errors
- Stale generations discarded
"""

import asyncio
from typing import Any

import pytest
from PIL import Image

from conftest import FakeNutritionProvider, FakeVisionProvider
from food_analyzer.application.meal.orchestrators.fan_out_aggregator import FanOutAggregator
from food_analyzer.application.meal.orchestrators.photo_orchestrator import (
    AnalysisProgress,
    MealAnalysisOrchestrator,
)
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.meal.nutrition.entities.resolution import LookupOutcome, LookupStatus
from food_analyzer.domain.meal.nutrition.services.resolver_service import NutrientResolver
from food_analyzer.domain.meal.pipeline.normalizer import FoodNameNormalizer
from food_analyzer.domain.meal.recognition.services.recognition_service import (
    FoodRecognitionService,
)
from food_analyzer.domain.shared.errors import InvalidResponseError, RecognitionNetworkError
from food_analyzer.infrastructure.imaging.jpeg_encoder import JpegImageEncoder


def make_orchestrator(vision: Any, nutrition: Any) -> MealAnalysisOrchestrator:
    return MealAnalysisOrchestrator(
        encoder=JpegImageEncoder(),
        recognition_service=FoodRecognitionService(vision),
        normalizer=FoodNameNormalizer(),
        aggregator=FanOutAggregator(NutrientResolver(nutrition)),
    )


class GatedNutritionProvider:
    """Holds the first lookup until released."""

    def __init__(self, record: NutrientRecord):
        self.record = record
        self.first_started = asyncio.Event()
        self.release = asyncio.Event()
        self._calls = 0

    async def lookup(self, name: str) -> LookupOutcome:
        self._calls += 1
        if self._calls == 1:
            self.first_started.set()
            await self.release.wait()
        return LookupOutcome.found(self.record)


class TestAnalysisProgress:
    def test_sections_joined_by_blank_line(self) -> None:
        progress = AnalysisProgress()
        progress.replace("a")
        progress.append("b")
        progress.append("")
        assert progress.text == "a\n\nb"

    def test_replace_and_clear(self) -> None:
        progress = AnalysisProgress()
        progress.append("a")
        progress.replace("b")
        assert progress.text == "b"
        progress.clear()
        assert progress.text == ""


class TestAnalyze:
    """Test analyze()."""

    @pytest.mark.asyncio
    async def test_fried_rice_and_egg(self, jpeg_bytes: bytes, fried_rice: NutrientRecord) -> None:
        nutrition = FakeNutritionProvider(records={"fried rice": fried_rice})
        orchestrator = make_orchestrator(FakeVisionProvider("Fried Rice, Egg"), nutrition)

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.status == "completed"
        assert outcome.result is not None
        assert outcome.result.food_names() == ["fried rice"]
        assert nutrition.calls == ["fried rice"]
        assert orchestrator.current_result == outcome.result
        assert outcome.progress.startswith(
            "Analyzing...\n\n🧠 Merged fried rice components, removed separate egg"
        )
        assert "🍽️ Fried Rice:\n   - Calories: 200.0 kcal" in outcome.progress
        assert "Total Calories: 200 kcal" in outcome.progress
        assert outcome.progress.endswith("✅ Analysis complete - add to your daily tracking")

    @pytest.mark.asyncio
    async def test_missing_food_reported(self, jpeg_bytes: bytes, apple: NutrientRecord) -> None:
        orchestrator = make_orchestrator(
            FakeVisionProvider("apple, unicorn steak"),
            FakeNutritionProvider(records={"apple": apple}),
        )

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.result is not None
        assert outcome.result.missing == ("unicorn steak",)
        assert "⚠️ No data found for unicorn steak" in outcome.progress
        assert "🧠 Identified foods: apple, unicorn steak" in outcome.progress

    @pytest.mark.asyncio
    async def test_no_data_at_all(self, jpeg_bytes: bytes) -> None:
        orchestrator = make_orchestrator(FakeVisionProvider("soup"), FakeNutritionProvider())

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.result is not None
        assert outcome.result.is_empty()
        assert "Nutrition Summary" not in outcome.progress
        assert outcome.progress.endswith("✅ Analysis complete - add to your daily tracking")

    @pytest.mark.asyncio
    async def test_fallback_when_lookup_unreachable(self, jpeg_bytes: bytes) -> None:
        nutrition = FakeNutritionProvider(failures={"fried rice": LookupStatus.NETWORK_ERROR})
        orchestrator = make_orchestrator(FakeVisionProvider("fried rice"), nutrition)

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.result is not None
        assert outcome.result.totals == NutrientRecord(200, 5, 7, 30, 2)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [RecognitionNetworkError("timed out"), InvalidResponseError("Failed to parse response")],
    )
    async def test_recognition_error_surfaced(
        self, jpeg_bytes: bytes, error: Exception
    ) -> None:
        nutrition = FakeNutritionProvider()
        orchestrator = make_orchestrator(FakeVisionProvider(error=error), nutrition)

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.status == "failed"
        assert outcome.error == str(error)
        assert outcome.progress == f"❌ {error}"
        assert nutrition.calls == []
        assert orchestrator.current_result is None

    @pytest.mark.asyncio
    async def test_empty_normalization_is_error(self, jpeg_bytes: bytes) -> None:
        orchestrator = make_orchestrator(FakeVisionProvider(" , ,"), FakeNutritionProvider())

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.status == "failed"
        assert outcome.result is None

    @pytest.mark.asyncio
    async def test_undecodable_image(self) -> None:
        vision = FakeVisionProvider()
        orchestrator = make_orchestrator(vision, FakeNutritionProvider())

        outcome = await orchestrator.analyze(b"not an image")

        assert outcome.status == "failed"
        assert outcome.error is not None
        assert outcome.error.startswith("Unable to load image")
        assert vision.calls == []

    @pytest.mark.asyncio
    async def test_oversized_image_is_inline_error(
        self, jpeg_bytes: bytes, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        vision = FakeVisionProvider("apple")
        orchestrator = make_orchestrator(vision, FakeNutritionProvider())

        outcome = await orchestrator.analyze(jpeg_bytes)

        assert outcome.status == "failed"
        assert outcome.error is not None
        assert outcome.error.startswith("Unable to load image")
        assert orchestrator.current_result is None
        assert vision.calls == []

    @pytest.mark.asyncio
    async def test_generation_increments(self, jpeg_bytes: bytes, apple: NutrientRecord) -> None:
        orchestrator = make_orchestrator(
            FakeVisionProvider("apple"), FakeNutritionProvider(records={"apple": apple})
        )

        first = await orchestrator.analyze(jpeg_bytes)
        second = await orchestrator.analyze(jpeg_bytes)

        assert second.generation == first.generation + 1
        assert orchestrator.current_result == second.result


class TestStaleAnalyses:
    """A superseded analysis must not replace the current result."""

    @pytest.mark.asyncio
    async def test_older_analysis_finishing_last_is_discarded(
        self, jpeg_bytes: bytes, apple: NutrientRecord
    ) -> None:
        nutrition = GatedNutritionProvider(apple)
        orchestrator = make_orchestrator(FakeVisionProvider("apple"), nutrition)

        first = asyncio.create_task(orchestrator.analyze(jpeg_bytes))
        await asyncio.wait_for(nutrition.first_started.wait(), timeout=5)

        second = await orchestrator.analyze(jpeg_bytes)
        nutrition.release.set()
        stale = await first

        assert second.status == "completed"
        assert stale.stale is True
        assert stale.status == "stale"
        assert orchestrator.current_result is second.result
        assert orchestrator.current_result.generation == second.generation

    @pytest.mark.asyncio
    async def test_reset_during_analysis(self, jpeg_bytes: bytes, apple: NutrientRecord) -> None:
        nutrition = GatedNutritionProvider(apple)
        orchestrator = make_orchestrator(FakeVisionProvider("apple"), nutrition)

        task = asyncio.create_task(orchestrator.analyze(jpeg_bytes))
        await asyncio.wait_for(nutrition.first_started.wait(), timeout=5)
        orchestrator.reset_analysis()
        nutrition.release.set()
        outcome = await task

        assert outcome.stale is True
        assert orchestrator.current_result is None
        assert orchestrator.progress_text == ""


class TestResetAnalysis:
    @pytest.mark.asyncio
    async def test_reset_clears_result_and_progress(
        self, jpeg_bytes: bytes, apple: NutrientRecord
    ) -> None:
        orchestrator = make_orchestrator(
            FakeVisionProvider("apple"), FakeNutritionProvider(records={"apple": apple})
        )
        await orchestrator.analyze(jpeg_bytes)
        assert orchestrator.current_result is not None

        orchestrator.reset_analysis()

        assert orchestrator.current_result is None
        assert orchestrator.progress_text == ""
