"""Reset ledger command - clear the whole day."""

import logging
from dataclasses import dataclass
from typing import Optional

from food_analyzer.application.meal.orchestrators.photo_orchestrator import (
    MealAnalysisOrchestrator,
)
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.shared.ports.ledger_store import ILedgerStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResetLedgerCommand:
    """
    Command: Reset all data.

    Attributes:
        include_analysis: Also clear the current analysis
    """

    include_analysis: bool = True


class ResetLedgerCommandHandler:
    """Handler for ResetLedgerCommand."""

    def __init__(
        self,
        ledger: DailyLedger,
        orchestrator: Optional[MealAnalysisOrchestrator] = None,
        store: Optional[ILedgerStore] = None,
    ):
        self._ledger = ledger
        self._orchestrator = orchestrator
        self._store = store

    async def handle(self, command: ResetLedgerCommand) -> None:
        self._ledger.reset()
        if command.include_analysis and self._orchestrator is not None:
            self._orchestrator.reset_analysis()
        if self._store is not None:
            self._store.save(self._ledger.snapshot())
        logger.info(
            "All data reset",
            extra={"include_analysis": command.include_analysis},
        )

    async def reset_all(self) -> None:
        await self.handle(ResetLedgerCommand(include_analysis=True))
