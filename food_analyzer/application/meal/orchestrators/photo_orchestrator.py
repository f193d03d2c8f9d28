"""Meal photo analysis orchestrator.

Coordinates image encoding, food recognition, name normalization and the
concurrent nutrient lookups into one AnalysisResult, while keeping a
human-readable progress text up to date.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from food_analyzer.application.meal.formatters import (
    ANALYSIS_COMPLETE_TEXT,
    ANALYZING_TEXT,
    format_analysis_totals,
    format_food_block,
    format_identified,
    format_missing,
)
from food_analyzer.application.meal.orchestrators.fan_out_aggregator import FanOutAggregator
from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.nutrition.entities.resolution import Resolution
from food_analyzer.domain.meal.pipeline.normalizer import FoodNameNormalizer
from food_analyzer.domain.meal.recognition.services.recognition_service import (
    FoodRecognitionService,
)
from food_analyzer.domain.shared.errors import EmptyResultError, RecognitionError
from food_analyzer.infrastructure.imaging.jpeg_encoder import ImageInput, JpegImageEncoder

logger = logging.getLogger(__name__)


class AnalysisProgress:
    """
    Live progress text of one analysis.

    Sections are separated by a blank line, like the final report.
    """

    def __init__(self) -> None:
        self._sections: List[str] = []

    @property
    def text(self) -> str:
        return "\n\n".join(self._sections)

    def replace(self, text: str) -> None:
        self._sections = [text]

    def append(self, section: str) -> None:
        if section:
            self._sections.append(section)

    def clear(self) -> None:
        self._sections = []


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    What an ``analyze`` call produced.

    Exactly one of:
    - ``result`` set: the analysis completed and is the current result
    - ``error`` set: recognition failed, nothing was looked up
    - ``stale``: a newer analysis (or a reset) superseded this one
    """

    generation: int
    progress: str
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    stale: bool = False

    @property
    def status(self) -> str:
        if self.stale:
            return "stale"
        if self.error is not None:
            return "failed"
        return "completed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "generation": self.generation,
            "error": self.error,
            "progress": self.progress,
            "result": self.result.to_dict() if self.result is not None else None,
        }


class MealAnalysisOrchestrator:
    """
    Orchestrate the photo analysis workflow.

    Flow:
    1. Encode image as JPEG (JpegImageEncoder)
    2. Recognize foods (FoodRecognitionService)
    3. Normalize and merge names (FoodNameNormalizer)
    4. Resolve nutrients concurrently (FanOutAggregator)

    Each call gets a new generation number. Only the latest generation
    may replace ``current_result``; an older analysis that finishes later
    is discarded.

    Example:
        >>> orchestrator = MealAnalysisOrchestrator(
        ...     encoder, recognition_service, normalizer, aggregator
        ... )
        >>> outcome = await orchestrator.analyze(image_bytes)
        >>> outcome.result.food_names()
        ['fried rice']
    """

    def __init__(
        self,
        encoder: JpegImageEncoder,
        recognition_service: FoodRecognitionService,
        normalizer: FoodNameNormalizer,
        aggregator: FanOutAggregator,
    ):
        """
        Initialize orchestrator.

        Args:
            encoder: Image to JPEG payload encoder
            recognition_service: Service for food recognition
            normalizer: Food name normalizer
            aggregator: Concurrent nutrient resolution
        """
        self._encoder = encoder
        self._recognition = recognition_service
        self._normalizer = normalizer
        self._aggregator = aggregator

        self._generation = 0
        self._current: Optional[AnalysisResult] = None
        self._progress = AnalysisProgress()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_result(self) -> Optional[AnalysisResult]:
        return self._current

    @property
    def progress_text(self) -> str:
        return self._progress.text

    def reset_analysis(self) -> None:
        """Clear the current result and progress; in-flight analyses become stale."""
        self._generation += 1
        self._current = None
        self._progress = AnalysisProgress()
        logger.info("Analysis reset", extra={"generation": self._generation})

    async def analyze(self, image: ImageInput) -> AnalysisOutcome:
        """
        Run one complete analysis.

        Args:
            image: Pillow image or raw image bytes

        Returns:
            AnalysisOutcome; recognition-stage failures are reported in
            ``error`` instead of being raised
        """
        self._generation += 1
        generation = self._generation
        progress = AnalysisProgress()
        progress.replace(ANALYZING_TEXT)
        self._progress = progress

        logger.info("Orchestrating photo analysis", extra={"generation": generation})

        try:
            encoded = await asyncio.to_thread(self._encoder.encode, image)
            raw = await self._recognition.recognize(encoded)
            normalized = self._normalizer.normalize(raw)
            if normalized.is_empty():
                raise EmptyResultError("No food names recognized")
        except RecognitionError as e:
            logger.warning(
                "Photo analysis failed",
                extra={
                    "generation": generation,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            progress.replace(f"❌ {e}")
            return self._finish(generation, progress, error=str(e))

        progress.replace(format_identified(normalized.names, normalized.merged))

        def report(resolution: Resolution) -> None:
            if resolution.record is not None:
                entry = FoodEntry(name=resolution.name, nutrients=resolution.record)
                progress.append(format_food_block(entry))
            else:
                progress.append(format_missing(resolution.name))

        result = await self._aggregator.aggregate(
            normalized.names, generation=generation, on_progress=report
        )

        progress.append(format_analysis_totals(result))
        progress.append(ANALYSIS_COMPLETE_TEXT)
        return self._finish(generation, progress, result=result)

    def _finish(
        self,
        generation: int,
        progress: AnalysisProgress,
        result: Optional[AnalysisResult] = None,
        error: Optional[str] = None,
    ) -> AnalysisOutcome:
        if generation != self._generation:
            logger.info(
                "Discarding stale analysis",
                extra={"generation": generation, "latest": self._generation},
            )
            return AnalysisOutcome(
                generation=generation,
                progress=progress.text,
                result=result,
                error=error,
                stale=True,
            )

        self._current = result
        if result is not None:
            logger.info(
                "Photo analysis complete",
                extra={
                    "generation": generation,
                    "entry_count": len(result.entries),
                    "missing_count": len(result.missing),
                    "calories": result.totals.calories,
                },
            )
        return AnalysisOutcome(
            generation=generation, progress=progress.text, result=result, error=error
        )
