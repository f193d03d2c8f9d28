"""Concurrent nutrient resolution for the foods of one image.

Every name is resolved in its own task. The result is assembled only
after all dispatched tasks have completed, so a partially aggregated
result is never observable.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from food_analyzer.domain.meal.core.entities.analysis_result import AnalysisResult
from food_analyzer.domain.meal.core.entities.food_entry import FoodEntry
from food_analyzer.domain.meal.nutrition.entities.nutrient_record import NutrientRecord
from food_analyzer.domain.meal.nutrition.entities.resolution import Resolution
from food_analyzer.domain.meal.nutrition.services.resolver_service import NutrientResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8

ProgressCallback = Callable[[Resolution], Union[None, Awaitable[None]]]


class FanOutAggregator:
    """
    Resolve food names concurrently and accumulate an AnalysisResult.

    Entries appear in completion order. Names that resolve to no data
    are listed in ``missing`` and contribute nothing to the totals.

    Example:
        >>> aggregator = FanOutAggregator(resolver, max_concurrency=8)
        >>> result = await aggregator.aggregate(["fried rice", "soup"], generation=3)
        >>> result.food_names()
        ['soup', 'fried rice']  # whichever lookup finished first
    """

    def __init__(self, resolver: NutrientResolver, max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        """
        Initialize aggregator.

        Args:
            resolver: Per-food nutrient resolver
            max_concurrency: Upper bound on lookups in flight
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self._resolver = resolver
        self._max_concurrency = max_concurrency

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def aggregate(
        self,
        names: Sequence[str],
        generation: int = 0,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisResult:
        """
        Resolve every name and build the result.

        Args:
            names: Normalized food names (duplicates resolved separately)
            generation: Analysis generation stamped on the result
            on_progress: Called with each Resolution as it completes

        Returns:
            AnalysisResult whose totals equal the sum of its entries
        """
        if not names:
            return AnalysisResult.empty(generation)

        semaphore = asyncio.Semaphore(self._max_concurrency)
        lock = asyncio.Lock()
        entries: List[FoodEntry] = []
        missing: List[str] = []
        totals = NutrientRecord.zero()

        async def resolve_one(name: str) -> Resolution:
            async with semaphore:
                return await self._resolver.resolve(name)

        tasks = [asyncio.create_task(resolve_one(name)) for name in names]
        completed = 0
        try:
            for next_done in asyncio.as_completed(tasks):
                resolution = await next_done
                async with lock:
                    completed += 1
                    if resolution.record is not None:
                        entries.append(FoodEntry(name=resolution.name, nutrients=resolution.record))
                        totals = totals + resolution.record
                    else:
                        missing.append(resolution.name)

                if on_progress is not None:
                    maybe_awaitable = on_progress(resolution)
                    if asyncio.iscoroutine(maybe_awaitable):
                        await maybe_awaitable
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        logger.info(
            "Lookups aggregated",
            extra={
                "dispatched": len(tasks),
                "completed": completed,
                "resolved": len(entries),
                "missing": len(missing),
                "generation": generation,
            },
        )
        return AnalysisResult(
            entries=tuple(entries),
            totals=totals,
            missing=tuple(missing),
            generation=generation,
        )
