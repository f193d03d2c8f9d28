"""Edamam food-database client - Implements INutritionProvider port.

Key Features:
- One GET per food name against the parser endpoint
- Circuit breaker (5 failures → 60s timeout) around the transport
- No retries: a failed lookup is reported once and never repeated
- Nutrient code mapping with one-decimal rounding
"""

# mypy: warn-unused-ignores=False

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp
from circuitbreaker import CircuitBreakerError, circuit
from pydantic import ValidationError

from food_analyzer.domain.meal.nutrition.entities.nutrient_record import (
    NutrientRecord,
    round_half_up,
)
from food_analyzer.domain.meal.nutrition.entities.resolution import (
    LookupOutcome,
    LookupStatus,
)
from food_analyzer.domain.shared.errors import LookupFailedError
from food_analyzer.infrastructure.external_apis.edamam.models import (
    EdamamFood,
    ParserResponse,
)

logger = logging.getLogger(__name__)

# Edamam nutrient code -> NutrientRecord field
NUTRIENT_CODES: Dict[str, str] = {
    "ENERC_KCAL": "calories",
    "PROCNT": "protein",
    "FAT": "fat",
    "CHOCDF": "carbs",
    "FIBTG": "fiber",
}


def map_nutrients(food: EdamamFood) -> NutrientRecord:
    """
    Convert an Edamam nutrient map to a NutrientRecord.

    Missing codes count as 0. Calories are kept as reported; the gram
    fields are rounded to one decimal, halves away from zero.
    """
    values = {field: food.nutrients.get(code, 0.0) for code, field in NUTRIENT_CODES.items()}
    return NutrientRecord(
        calories=values["calories"],
        protein=round_half_up(values["protein"]),
        fat=round_half_up(values["fat"]),
        carbs=round_half_up(values["carbs"]),
        fiber=round_half_up(values["fiber"]),
    )


class EdamamClient:
    """
    Edamam food-database client implementing INutritionProvider port.

    Follows Dependency Inversion Principle:
    - Domain defines INutritionProvider interface (port)
    - Infrastructure provides EdamamClient implementation (adapter)

    Example:
        >>> async with EdamamClient(app_id="...", app_key="...") as client:
        ...     outcome = await client.lookup("apple")
        ...     if outcome.has_record():
        ...         print(f"Calories: {outcome.record.calories}")
    """

    BASE_URL = "https://api.edamam.com/api/food-database/v2/parser"

    def __init__(self, app_id: str, app_key: str, timeout: float = 10.0):
        """
        Initialize Edamam client.

        Args:
            app_id: Edamam application id
            app_key: Edamam application key
            timeout: Total request timeout in seconds
        """
        self.app_id = app_id
        self.app_key = app_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "EdamamClient":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.close()
            self._session = None

    @circuit(  # type: ignore[misc]
        failure_threshold=5,
        recovery_timeout=60,
        expected_exception=LookupFailedError,
        name="edamam_parser",
    )
    async def _fetch(self, name: str) -> Tuple[int, str]:
        """
        Raw GET for one ingredient.

        Returns:
            (HTTP status, body text)

        Raises:
            LookupFailedError: Connection failure or timeout
        """
        if not self._session:
            raise RuntimeError("Client not initialized. Use async context manager.")

        params = {"app_id": self.app_id, "app_key": self.app_key, "ingr": name}
        try:
            async with self._session.get(self.BASE_URL, params=params) as response:
                return response.status, await response.text()
        except asyncio.TimeoutError as e:
            raise LookupFailedError(f"Timeout looking up '{name}'") from e
        except aiohttp.ClientError as e:
            raise LookupFailedError(f"Request error: {e}") from e

    async def lookup(self, name: str) -> LookupOutcome:
        """
        Look up nutrients for one food name.

        Implements INutritionProvider.lookup() port. Never raises for a
        per-food failure; the failure kind is the outcome status.

        Args:
            name: Normalized food name

        Returns:
            LookupOutcome (FOUND with a record, or a failure status)
        """
        logger.debug("Looking up nutrients", extra={"food": name})

        try:
            status, body = await self._fetch(name)
        except CircuitBreakerError:
            logger.warning("Edamam circuit open", extra={"food": name})
            return LookupOutcome.failed(LookupStatus.NETWORK_ERROR, "circuit open")
        except LookupFailedError as e:
            logger.warning("Edamam request failed", extra={"food": name, "error": str(e)})
            return LookupOutcome.failed(LookupStatus.NETWORK_ERROR, str(e))

        if not 200 <= status < 300:
            logger.warning("Edamam API warning", extra={"status": status, "food": name})
            return LookupOutcome.failed(LookupStatus.HTTP_ERROR, f"HTTP {status}")

        try:
            parsed = ParserResponse.model_validate_json(body)
        except ValidationError as e:
            logger.warning("Edamam response invalid", extra={"food": name, "error": str(e)})
            return LookupOutcome.failed(LookupStatus.INVALID_RESPONSE, "Failed to parse response")

        food = parsed.best_match()
        if food is None:
            logger.info("No Edamam match", extra={"food": name})
            return LookupOutcome.failed(LookupStatus.NO_MATCH)

        record = map_nutrients(food)
        logger.info(
            "Edamam lookup complete",
            extra={"food": name, "calories": record.calories},
        )
        return LookupOutcome.found(record)
