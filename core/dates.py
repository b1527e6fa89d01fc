from __future__ import annotations

import math
import warnings
from datetime import datetime, timedelta
from typing import List, Optional

import pandas as pd

from core.records import as_text


MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

MS_PER_DAY = 86_400_000


def _from_day_month_year(parts: List[str]) -> Optional[datetime]:
    try:
        day, month, year = (int(p.strip()) for p in parts)
    except ValueError:
        return None
    # Out-of-range day/month roll over into the following month/year.
    month_index = month - 1
    year += month_index // 12
    month_index %= 12
    try:
        return datetime(year, month_index + 1, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def _parse_generic(text: str) -> Optional[datetime]:
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def parse_date(value: object) -> Optional[datetime]:
    """Parse a sheet date cell.

    Slash dates are day-first (``DD/MM/YYYY``, any time suffix after the first
    space is dropped). Anything else goes through generic parsing. Returns
    ``None`` for blank or unparseable input and never raises.
    """
    text = as_text(value)
    if not text:
        return None
    if "/" in text:
        parts = text.split(" ")[0].split("/")
        if len(parts) == 3:
            return _from_day_month_year(parts)
    return _parse_generic(text)


def month_name(value: object) -> Optional[str]:
    parsed = value if isinstance(value, datetime) else parse_date(value)
    if parsed is None:
        return None
    return MONTH_NAMES[parsed.month - 1]


def calculate_age(value: object, now: Optional[datetime] = None) -> int:
    """Whole days between the parsed date and ``now``, rounded up; 0 when unparseable.

    Future dates give zero or negative ages.
    """
    parsed = parse_date(value)
    if parsed is None:
        return 0
    now = now or datetime.now()
    elapsed_ms = (now - parsed) / timedelta(milliseconds=1)
    return math.ceil(elapsed_ms / MS_PER_DAY)


def age_band(days: int) -> str:
    if days <= 7:
        return "fresh"
    if days <= 30:
        return "aging"
    return "stale"
