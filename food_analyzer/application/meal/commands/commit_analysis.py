"""Commit analysis command - add the current analysis to a meal."""

import logging
from dataclasses import dataclass
from typing import Optional

from food_analyzer.application.meal.orchestrators.photo_orchestrator import (
    MealAnalysisOrchestrator,
)
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.shared.ports.ledger_store import ILedgerStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitAnalysisCommand:
    """
    Command: Commit the current analysis to the daily ledger.

    Attributes:
        meal_type: Meal slot receiving the analyzed foods
    """

    meal_type: MealType


class CommitAnalysisCommandHandler:
    """Handler for CommitAnalysisCommand."""

    def __init__(
        self,
        orchestrator: MealAnalysisOrchestrator,
        ledger: DailyLedger,
        store: Optional[ILedgerStore] = None,
    ):
        """
        Initialize handler.

        Args:
            orchestrator: Holder of the current analysis
            ledger: Daily ledger aggregate
            store: Optional ledger persistence port
        """
        self._orchestrator = orchestrator
        self._ledger = ledger
        self._store = store

    async def handle(self, command: CommitAnalysisCommand) -> bool:
        """
        Execute commit command.

        Flow:
        1. Take the orchestrator's current result
        2. Commit it to the ledger (no-op when empty)
        3. Persist the ledger if a store is configured

        Returns:
            True if foods were added, False if there was nothing to add
        """
        result = self._orchestrator.current_result
        if result is None or result.is_empty():
            logger.info(
                "Nothing to commit",
                extra={"meal_type": command.meal_type.value},
            )
            return False

        committed = self._ledger.commit(result, command.meal_type)
        if committed and self._store is not None:
            self._store.save(self._ledger.snapshot())
        return committed
