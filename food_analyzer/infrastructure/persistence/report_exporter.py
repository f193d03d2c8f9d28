"""Export the daily summary report as a text file."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from food_analyzer.domain.shared.errors import EmptySummaryError

logger = logging.getLogger(__name__)

REPORT_FILENAME_FORMAT = "nutrition-summary-%Y%m%d-%H%M%S.txt"


def save_summary_report(
    text: str,
    directory: Union[str, Path],
    now: Optional[datetime] = None,
) -> Path:
    """
    Write ``text`` to a timestamped file in ``directory``.

    Args:
        text: Rendered daily summary
        directory: Target directory (created if missing)
        now: Timestamp for the file name (default: current local time)

    Returns:
        Path of the written file

    Raises:
        EmptySummaryError: If there is no summary to save
    """
    if not text:
        raise EmptySummaryError("No summary data to save")

    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / (now or datetime.now()).strftime(REPORT_FILENAME_FORMAT)
    path.write_text(text, encoding="utf-8")

    logger.info("Summary report saved", extra={"path": str(path), "chars": len(text)})
    return path
