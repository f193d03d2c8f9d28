"""Meal commands."""

from .commit_analysis import CommitAnalysisCommand, CommitAnalysisCommandHandler
from .reset_ledger import ResetLedgerCommand, ResetLedgerCommandHandler

__all__ = [
    "CommitAnalysisCommand",
    "CommitAnalysisCommandHandler",
    "ResetLedgerCommand",
    "ResetLedgerCommandHandler",
]
