"""JSON file ledger store - Implements ILedgerStore port."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from food_analyzer.domain.meal.ledger.daily_ledger import LedgerSnapshot
from food_analyzer.domain.shared.errors import InvalidMealTypeError, LedgerStoreError

logger = logging.getLogger(__name__)


class JsonLedgerStore:
    """
    Keep the daily ledger in a JSON file.

    Writes go to a temporary file in the same directory which then
    replaces the target, so readers see either the old or the new file.

    Example:
        >>> store = JsonLedgerStore("~/.food-analyzer/ledger.json")
        >>> store.save(ledger.snapshot())
        >>> ledger.restore(store.load())
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def save(self, snapshot: LedgerSnapshot) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(snapshot.to_dict(), fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(
            "Ledger saved",
            extra={"path": str(self._path), "entry_count": snapshot.entry_count()},
        )

    def load(self) -> Optional[LedgerSnapshot]:
        """
        Load the stored snapshot.

        Returns:
            Snapshot, or None when the file does not exist

        Raises:
            LedgerStoreError: If the file is not a valid ledger document
        """
        if not self._path.exists():
            return None
        try:
            with self._path.open(encoding="utf-8") as fh:
                data = json.load(fh)
            if not isinstance(data, dict):
                raise LedgerStoreError(f"Ledger file {self._path} does not contain an object")
            snapshot = LedgerSnapshot.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError, InvalidMealTypeError) as e:
            logger.warning(
                "Ledger file unreadable",
                extra={"path": str(self._path), "error_type": type(e).__name__},
            )
            raise LedgerStoreError(f"Ledger file {self._path} is corrupt: {e}") from e
        logger.debug(
            "Ledger loaded",
            extra={"path": str(self._path), "entry_count": snapshot.entry_count()},
        )
        return snapshot
