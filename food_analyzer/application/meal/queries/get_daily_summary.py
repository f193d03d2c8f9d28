"""Get daily summary query - render the day's ledger."""

import logging
from dataclasses import dataclass

from food_analyzer.application.meal.formatters import format_daily_summary
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger, LedgerSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailySummary:
    """
    Daily nutrition summary.

    Attributes:
        snapshot: Ledger contents at query time
        report: Rendered text; empty when no food was committed
    """

    snapshot: LedgerSnapshot
    report: str

    def has_data(self) -> bool:
        return bool(self.report)


@dataclass(frozen=True)
class GetDailySummaryQuery:
    """Query: Get the daily nutrition summary."""


class GetDailySummaryQueryHandler:
    """Handler for GetDailySummaryQuery."""

    def __init__(self, ledger: DailyLedger):
        self._ledger = ledger

    async def handle(self, query: GetDailySummaryQuery) -> DailySummary:
        """
        Execute query.

        Example:
            >>> summary = await handler.handle(GetDailySummaryQuery())
            >>> summary.report.splitlines()[0]
            'Total Nutrient Intake:'
        """
        snapshot = self._ledger.snapshot()
        report = "" if snapshot.is_empty() else format_daily_summary(snapshot)
        logger.debug(
            "Daily summary built",
            extra={"entry_count": snapshot.entry_count(), "calories": snapshot.totals.calories},
        )
        return DailySummary(snapshot=snapshot, report=report)
