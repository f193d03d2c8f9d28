"""Ledger store port (interface).

Defines the contract for keeping the daily ledger across restarts.
"""

from typing import Optional, Protocol

from food_analyzer.domain.meal.ledger.daily_ledger import LedgerSnapshot


class ILedgerStore(Protocol):
    """
    Interface for daily ledger persistence.

    Example implementation (infrastructure layer):
        >>> class InMemoryLedgerStore:
        ...     def save(self, snapshot: LedgerSnapshot) -> None:
        ...         self._snapshot = snapshot
        ...
        ...     def load(self) -> Optional[LedgerSnapshot]:
        ...         return self._snapshot
    """

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Persist ``snapshot``, replacing whatever was stored."""
        ...

    def load(self) -> Optional[LedgerSnapshot]:
        """
        Load the stored snapshot.

        Returns:
            Snapshot, or None if nothing was stored yet
        """
        ...
