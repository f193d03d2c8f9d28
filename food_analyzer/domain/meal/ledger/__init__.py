"""Daily ledger."""

from .daily_ledger import DailyLedger, LedgerSnapshot

__all__ = ["DailyLedger", "LedgerSnapshot"]
