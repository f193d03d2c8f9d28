"""Local file persistence."""

from .json_ledger_store import JsonLedgerStore
from .report_exporter import save_summary_report

__all__ = ["JsonLedgerStore", "save_summary_report"]
