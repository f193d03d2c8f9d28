"""Shared ports."""

from .ledger_store import ILedgerStore

__all__ = ["ILedgerStore"]
