"""Provider factory.

Builds the recognition and nutrition adapters from Settings and wires
the analysis orchestrator on top of them.

Usage:
    settings = load_settings()
    async with open_orchestrator(settings) as orchestrator:
        outcome = await orchestrator.analyze(image_bytes)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from food_analyzer.application.meal.orchestrators.fan_out_aggregator import FanOutAggregator
from food_analyzer.application.meal.orchestrators.photo_orchestrator import (
    MealAnalysisOrchestrator,
)
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.meal.nutrition.ports.nutrition_provider import INutritionProvider
from food_analyzer.domain.meal.nutrition.services.resolver_service import NutrientResolver
from food_analyzer.domain.meal.pipeline.normalizer import FoodNameNormalizer
from food_analyzer.domain.meal.recognition.ports.vision_provider import IVisionProvider
from food_analyzer.domain.meal.recognition.services.recognition_service import (
    FoodRecognitionService,
)
from food_analyzer.infrastructure.ai.openai.client import OpenAIVisionClient
from food_analyzer.infrastructure.config import Settings
from food_analyzer.infrastructure.external_apis.edamam.client import EdamamClient
from food_analyzer.infrastructure.imaging.jpeg_encoder import JpegImageEncoder
from food_analyzer.infrastructure.persistence.json_ledger_store import JsonLedgerStore

logger = logging.getLogger(__name__)


def create_vision_provider(settings: Settings) -> OpenAIVisionClient:
    """
    Create the recognition client.

    Raises:
        ConfigurationError: If RECOGNITION_API_KEY is not set
    """
    return OpenAIVisionClient(
        api_key=settings.require_recognition_key(),
        base_url=settings.recognition_base_url,
        model=settings.recognition_model,
        api_version=settings.recognition_api_version,
        timeout=settings.recognition_timeout_s,
    )


def create_nutrition_provider(settings: Settings) -> EdamamClient:
    """
    Create the (not yet opened) nutrition lookup client.

    Raises:
        ConfigurationError: If the Edamam credentials are not set
    """
    app_id, app_key = settings.require_edamam_credentials()
    return EdamamClient(app_id=app_id, app_key=app_key, timeout=settings.edamam_timeout_s)


def build_orchestrator(
    settings: Settings,
    vision_provider: IVisionProvider,
    nutrition_provider: INutritionProvider,
) -> MealAnalysisOrchestrator:
    """Wire the analysis pipeline around already opened providers."""
    return MealAnalysisOrchestrator(
        encoder=JpegImageEncoder(quality=settings.jpeg_quality),
        recognition_service=FoodRecognitionService(vision_provider),
        normalizer=FoodNameNormalizer(),
        aggregator=FanOutAggregator(
            NutrientResolver(nutrition_provider),
            max_concurrency=settings.lookup_concurrency,
        ),
    )


@asynccontextmanager
async def open_orchestrator(settings: Settings) -> AsyncIterator[MealAnalysisOrchestrator]:
    """Open both HTTP clients for the lifetime of the block."""
    vision_client = create_vision_provider(settings)
    nutrition_client = create_nutrition_provider(settings)

    async with vision_client as vision, nutrition_client as nutrition:
        logger.info(
            "Analysis clients ready",
            extra={
                "vision": type(vision).__name__,
                "nutrition": type(nutrition).__name__,
                "model": settings.recognition_model,
            },
        )
        yield build_orchestrator(settings, vision, nutrition)


def create_ledger_store(settings: Settings) -> Optional[JsonLedgerStore]:
    return JsonLedgerStore(settings.ledger_path) if settings.ledger_path else None


def load_ledger(store: Optional[JsonLedgerStore]) -> DailyLedger:
    """New ledger, restored from ``store`` when it holds a snapshot."""
    ledger = DailyLedger()
    if store is not None:
        snapshot = store.load()
        if snapshot is not None:
            ledger.restore(snapshot)
    return ledger
