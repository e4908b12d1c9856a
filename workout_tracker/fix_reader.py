"""Read recorded location fixes from CSV for replay.

Expected columns: ``latitude``, ``longitude``, ``accuracy`` (metres) and
``timestamp_ms`` (epoch milliseconds). Rows with missing, non-numeric or
out-of-range values are dropped here, at the boundary, so the motion filter
only ever sees well-formed fixes.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import List

import pandas as pd

from .errors import FixFormatError
from .models import RawFix

_LAT_COL = "latitude"
_LON_COL = "longitude"
_ACCURACY_COL = "accuracy"
_TIMESTAMP_COL = "timestamp_ms"
_REQUIRED_COLS = {_LAT_COL, _LON_COL, _ACCURACY_COL, _TIMESTAMP_COL}

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FixLoadSummary:
    rows_total: int
    rows_parsed: int
    rows_skipped: int


def fixes_from_frame(frame: pd.DataFrame) -> tuple[List[RawFix], FixLoadSummary]:
    """Convert a DataFrame of fixes into ``RawFix`` values, sorted by time."""

    missing = _REQUIRED_COLS - set(frame.columns)
    if missing:
        raise FixFormatError(
            f"Fix data missing required columns: {', '.join(sorted(missing))}"
        )
    rows_total = len(frame)
    numeric = frame[sorted(_REQUIRED_COLS)].apply(pd.to_numeric, errors="coerce")
    numeric = numeric.dropna()
    numeric = numeric[
        numeric[_LAT_COL].between(-90.0, 90.0)
        & numeric[_LON_COL].between(-180.0, 180.0)
        & (numeric[_ACCURACY_COL] >= 0)
    ]
    numeric = numeric.sort_values(_TIMESTAMP_COL, kind="stable")
    fixes = [
        RawFix(
            latitude=float(row[_LAT_COL]),
            longitude=float(row[_LON_COL]),
            accuracy_m=float(row[_ACCURACY_COL]),
            timestamp_ms=int(row[_TIMESTAMP_COL]),
        )
        for row in numeric.to_dict("records")
    ]
    summary = FixLoadSummary(
        rows_total=rows_total,
        rows_parsed=len(fixes),
        rows_skipped=rows_total - len(fixes),
    )
    if summary.rows_skipped > 0:
        _LOG.warning("Skipped %s malformed fix rows", summary.rows_skipped)
    return fixes, summary


def read_fixes_csv(path: str | Path) -> tuple[List[RawFix], FixLoadSummary]:
    """Load fixes from ``path``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        FixFormatError: If required columns are missing.
    """

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    frame = pd.read_csv(p)
    frame.columns = [str(col).strip() for col in frame.columns]
    return fixes_from_frame(frame)


__all__ = ["FixLoadSummary", "fixes_from_frame", "read_fixes_csv"]
