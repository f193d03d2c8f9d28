"""Domain service resolving one food name to a nutrient record.

Best-effort contract: ``resolve`` never raises for a per-food failure.
A missing record is an expected outcome that the aggregator reports
without counting it.
"""

import logging
from typing import Dict, Mapping, Optional

from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.meal.nutrition.entities.resolution import (
    LookupOutcome,
    LookupStatus,
    Resolution,
)
from food_analyzer.domain.meal.nutrition.ports.nutrition_provider import INutritionProvider

logger = logging.getLogger(__name__)

# Substituted only when the lookup for these foods fails at the network level.
DEFAULT_FALLBACK_RECORDS: Dict[str, NutrientRecord] = {
    "fried rice": NutrientRecord(calories=200.0, protein=5.0, fat=7.0, carbs=30.0, fiber=2.0),
}


class NutrientResolver:
    """
    Domain service for resolving nutrients of a single food.

    Strategy:
    1. Ask the nutrition provider
    2. On a network failure, use the fallback record for that food if any
    3. Anything else without a record resolves to "no data"

    Example:
        >>> resolver = NutrientResolver(edamam_client)
        >>> resolution = await resolver.resolve("fried rice")
        >>> resolution.status
        <LookupStatus.FALLBACK: 'FALLBACK'>  # when the service is unreachable
    """

    def __init__(
        self,
        provider: INutritionProvider,
        fallback_records: Optional[Mapping[str, NutrientRecord]] = None,
    ):
        """
        Initialize resolver.

        Args:
            provider: Nutrition lookup adapter
            fallback_records: food name -> record used on network failure.
                Matched case-insensitively. Defaults to
                ``DEFAULT_FALLBACK_RECORDS``.
        """
        self._provider = provider
        table = DEFAULT_FALLBACK_RECORDS if fallback_records is None else fallback_records
        self._fallbacks = {name.strip().lower(): record for name, record in table.items()}

    async def resolve(self, name: str) -> Resolution:
        try:
            outcome = await self._provider.lookup(name)
        except Exception as e:
            # adapters report expected failures through LookupOutcome
            logger.warning(
                "Nutrition lookup raised",
                extra={"food": name, "error": str(e), "error_type": type(e).__name__},
            )
            outcome = LookupOutcome.failed(LookupStatus.INVALID_RESPONSE, detail=str(e))

        if outcome.record is not None:
            logger.info(
                "Nutrients resolved",
                extra={"food": name, "calories": outcome.record.calories},
            )
            return Resolution(name=name, status=LookupStatus.FOUND, record=outcome.record)

        if outcome.status is LookupStatus.NETWORK_ERROR:
            fallback = self._fallbacks.get(name.strip().lower())
            if fallback is not None:
                logger.info(
                    "Using fallback nutrients",
                    extra={"food": name, "reason": outcome.detail},
                )
                return Resolution(
                    name=name,
                    status=LookupStatus.FALLBACK,
                    record=fallback,
                    reason=outcome.detail,
                )

        logger.info(
            "No nutrient data",
            extra={"food": name, "status": outcome.status.value, "detail": outcome.detail},
        )
        return Resolution(name=name, status=outcome.status, reason=outcome.detail)
