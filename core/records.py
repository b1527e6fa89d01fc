from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd


ISSUE_COLUMNS = [
    "Issue ID",
    "Timestamp Issues Raised",
    "Client",
    "City",
    "Vehicle Number",
    "Issue",
    "Assigned To",
    "Resolved Y/N",
    "Next Follow Up Date",
]

INVALID_CLIENT_TOKENS = {"", "undefined", "null"}


def as_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def get_field(row: Mapping[str, Any], key: str) -> str:
    """Read a cell from a raw row; absent or null cells read as ``""``."""
    return as_text(row.get(key))


def normalize_row(raw: Mapping[str, Any], headers: Optional[Sequence[str]] = None) -> Dict[str, str]:
    keys = list(headers) if headers else list(raw.keys())
    return {str(k): get_field(raw, k) for k in keys}


def column_as_series(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series("", index=df.index, dtype=object)
    val = df[col]
    if isinstance(val, pd.DataFrame):
        val = val.iloc[:, 0]
    return val.map(as_text)


def records_frame(rows: Iterable[Mapping[str, Any]], headers: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Build a string-only frame from raw rows.

    Columns follow ``headers`` when given, then any extra keys in first-seen order.
    Every cell is trimmed text; missing cells become ``""``.
    """
    normalized = [normalize_row(r) for r in rows]
    columns: List[str] = [str(h) for h in (headers or [])]
    seen = set(columns)
    for row in normalized:
        for key in row:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    if not normalized:
        return pd.DataFrame(columns=columns, dtype=object)
    df = pd.DataFrame(normalized, columns=columns)
    return df.fillna("").astype(object)


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, str]]:
    if df.empty:
        return []
    return df.fillna("").to_dict(orient="records")


def drop_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty or len(df.columns) == 0:
        return df
    mask = df.apply(lambda col: col.map(as_text) != "").any(axis=1)
    return df[mask]


def is_valid_client(value: object) -> bool:
    client = as_text(value)
    return client not in INVALID_CLIENT_TOKENS and len(client) > 1


def filter_issue_records(df: pd.DataFrame) -> pd.DataFrame:
    """Drop sheet artifacts: rows whose Client is blank, "undefined", "null" or a single character."""
    if df.empty:
        return df
    return df[column_as_series(df, "Client").map(is_valid_client)]


def unique_values(df: pd.DataFrame, col: str) -> List[str]:
    values = column_as_series(df, col)
    return sorted(v for v in values.unique().tolist() if v)
