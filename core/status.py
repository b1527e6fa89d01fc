from __future__ import annotations

from typing import Any, Dict, Mapping

import pandas as pd

from core.records import as_text, column_as_series


STATUS_OPEN = "Open"
STATUS_CLOSED = "Closed"
STATUS_ON_HOLD = "On Hold"
STATUSES = [STATUS_OPEN, STATUS_CLOSED, STATUS_ON_HOLD]

# Aggregate bucket field for each status.
BUCKET_KEYS: Dict[str, str] = {
    STATUS_OPEN: "open",
    STATUS_CLOSED: "closed",
    STATUS_ON_HOLD: "onHold",
}

RESOLVED_COL = "Resolved Y/N"
FOLLOW_UP_COL = "Next Follow Up Date"


def classify_status(resolved: object, follow_up: object) -> str:
    """Closed on yes/y; On Hold on no/n with a follow-up date; otherwise Open.

    A blank resolved flag with a follow-up date is still Open.
    """
    flag = as_text(resolved).lower()
    if flag in {"yes", "y"}:
        return STATUS_CLOSED
    if flag in {"no", "n"} and as_text(follow_up) != "":
        return STATUS_ON_HOLD
    return STATUS_OPEN


def classify_record(row: Mapping[str, Any]) -> str:
    return classify_status(row.get(RESOLVED_COL), row.get(FOLLOW_UP_COL))


def status_series(df: pd.DataFrame) -> pd.Series:
    if df.empty:
        return pd.Series([], index=df.index, dtype=object)
    resolved = column_as_series(df, RESOLVED_COL)
    follow_up = column_as_series(df, FOLLOW_UP_COL)
    return pd.Series(
        [classify_status(r, f) for r, f in zip(resolved, follow_up)],
        index=df.index,
        dtype=object,
    )


def empty_bucket() -> Dict[str, int]:
    return {"open": 0, "closed": 0, "onHold": 0, "total": 0}
