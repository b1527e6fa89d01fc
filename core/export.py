from __future__ import annotations

import re
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import pandas as pd


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def escape_csv_field(value: object) -> str:
    """Double internal quotes; quote the field only if it holds a comma or quote."""
    escaped = _cell_text(value).replace('"', '""')
    if "," in escaped or '"' in escaped:
        return f'"{escaped}"'
    return escaped


def records_to_csv(rows: Iterable[Mapping[str, Any]] | pd.DataFrame, headers: Optional[Sequence[str]] = None) -> str:
    """Header line plus one line per row, joined with ``\\n``; empty input gives ``""``."""
    if isinstance(rows, pd.DataFrame):
        headers = list(headers or rows.columns)
        rows = rows.to_dict(orient="records")
    rows = list(rows)
    if not rows:
        return ""
    columns: List[str] = list(headers or rows[0].keys())
    lines = [",".join(escape_csv_field(c) for c in columns)]
    for row in rows:
        lines.append(",".join(escape_csv_field(row.get(col)) for col in columns))
    return "\n".join(lines)


def export_filename(name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    stem = re.sub(r"\s+", "_", name.strip())
    return f"{stem}_{today.isoformat()}.csv"
