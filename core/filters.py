from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from core.dates import MONTH_NAMES, month_name
from core.records import as_text, column_as_series, unique_values
from core.status import STATUSES, status_series


ALL = "All"


@dataclass(frozen=True)
class IssueFilters:
    search: str = ""
    city: str = ALL
    client: str = ALL
    assigned_to: str = ALL
    status: str = ALL
    vehicle: str = ""
    month: str = ALL


def _choice(raw: dict, *keys: str) -> str:
    for key in keys:
        value = as_text(raw.get(key))
        if value:
            return value
    return ALL


def normalize_issue_filters(raw: Optional[dict]) -> IssueFilters:
    """Accept camelCase or snake_case keys; blank values fall back to ``All``."""
    raw = raw or {}
    return IssueFilters(
        search=as_text(raw.get("search")),
        city=_choice(raw, "city"),
        client=_choice(raw, "client"),
        assigned_to=_choice(raw, "assignedTo", "assigned_to"),
        status=_choice(raw, "status"),
        vehicle="" if as_text(raw.get("vehicle")) == ALL else as_text(raw.get("vehicle")),
        month=_choice(raw, "month"),
    )


def _is_active(value: str) -> bool:
    return bool(value) and value != ALL


def apply_search(df: pd.DataFrame, term: str) -> pd.DataFrame:
    """Keep rows where any field contains ``term`` (case-insensitive)."""
    q = (term or "").strip().lower()
    if not q or df.empty:
        return df
    mask = pd.Series(False, index=df.index)
    for col in df.columns:
        mask |= column_as_series(df, col).str.lower().str.contains(q, regex=False, na=False)
    return df[mask]


def apply_issue_filters(df: pd.DataFrame, filters: IssueFilters | dict) -> pd.DataFrame:
    filt = filters if isinstance(filters, IssueFilters) else normalize_issue_filters(filters)
    if df.empty:
        return df

    mask = pd.Series(True, index=df.index)
    for col, value in (("City", filt.city), ("Client", filt.client), ("Assigned To", filt.assigned_to)):
        if _is_active(value):
            mask &= column_as_series(df, col) == value
    if _is_active(filt.status):
        mask &= status_series(df) == filt.status
    if filt.vehicle:
        mask &= column_as_series(df, "Vehicle Number").str.lower().str.contains(filt.vehicle.lower(), regex=False, na=False)
    if _is_active(filt.month):
        months = column_as_series(df, "Timestamp Issues Raised").map(month_name)
        mask &= months == filt.month

    return apply_search(df[mask], filt.search)


def filter_options(df: pd.DataFrame) -> Dict[str, List[str]]:
    return {
        "cities": unique_values(df, "City"),
        "clients": unique_values(df, "Client"),
        "assignees": unique_values(df, "Assigned To"),
        "statuses": list(STATUSES),
        "months": list(MONTH_NAMES),
    }
