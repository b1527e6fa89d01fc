from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import altair as alt
import pandas as pd

from core.charts import status_scale, to_vega_spec
from core.dates import MONTH_NAMES, month_name
from core.filters import IssueFilters, apply_issue_filters, filter_options
from core.records import column_as_series, frame_to_records
from core.status import BUCKET_KEYS, STATUS_CLOSED, STATUS_ON_HOLD, STATUS_OPEN, STATUSES, empty_bucket, status_series


def _bucket_table(keys: pd.Series, statuses: pd.Series, order: Optional[list] = None) -> Dict[str, Dict[str, int]]:
    """Count statuses per key into open/closed/onHold/total buckets.

    Keys keep first-seen order unless ``order`` is given; ``order`` keys with no
    rows get zeroed buckets.
    """
    order = list(order) if order is not None else keys.unique().tolist()
    if keys.empty:
        return {k: empty_bucket() for k in order}
    counts = (
        pd.DataFrame({"key": keys.values, "status": statuses.values})
        .groupby(["key", "status"])
        .size()
        .unstack(fill_value=0)
        .reindex(index=order, columns=STATUSES, fill_value=0)
    )
    out: Dict[str, Dict[str, int]] = {}
    for key, row in counts.iterrows():
        bucket = {BUCKET_KEYS[s]: int(row[s]) for s in STATUSES}
        bucket["total"] = bucket["open"] + bucket["closed"] + bucket["onHold"]
        out[key] = bucket
    return out


def compute_issue_summary(df: pd.DataFrame) -> Dict[str, int]:
    statuses = status_series(df)
    return {
        "totalIssues": int(len(df)),
        "openCount": int((statuses == STATUS_OPEN).sum()),
        "closedCount": int((statuses == STATUS_CLOSED).sum()),
        "onHoldCount": int((statuses == STATUS_ON_HOLD).sum()),
    }


def compute_group_summary(df: pd.DataFrame, column: str, default: str) -> Dict[str, Dict[str, int]]:
    keys = column_as_series(df, column).replace("", default)
    return _bucket_table(keys, status_series(df))


def compute_monthly_trend(df: pd.DataFrame) -> Dict[str, Dict[str, int]]:
    """Bin issues by the calendar month they were raised, across all years."""
    months = column_as_series(df, "Timestamp Issues Raised").map(month_name)
    statuses = status_series(df)
    dated = months.notna()
    return _bucket_table(months[dated], statuses[dated], order=MONTH_NAMES)


def compute_issue_analytics(df: pd.DataFrame) -> Dict[str, Any]:
    return {
        "clientSummary": compute_group_summary(df, "Client", "Unknown"),
        "assigneeSummary": compute_group_summary(df, "Assigned To", "Unassigned"),
        "monthlyData": compute_monthly_trend(df),
    }


def compute_issue_bundle(df: pd.DataFrame) -> Dict[str, Any]:
    return {**compute_issue_summary(df), **compute_issue_analytics(df)}


def _buckets_long(buckets: Dict[str, Dict[str, int]], key_name: str) -> pd.DataFrame:
    rows = []
    for key, bucket in buckets.items():
        for status in STATUSES:
            rows.append({key_name: key, "status": status, "count": bucket[BUCKET_KEYS[status]]})
    return pd.DataFrame(rows, columns=[key_name, "status", "count"])


_STATUS_COLORS = status_scale(STATUSES)


def issue_charts(analytics: Dict[str, Any], top_n: int = 10) -> Dict[str, Any]:
    charts: Dict[str, Any] = {}

    monthly = _buckets_long(analytics.get("monthlyData", {}), "month")
    if not monthly.empty:
        chart = (
            alt.Chart(monthly)
            .mark_bar()
            .encode(
                x=alt.X("month:N", sort=MONTH_NAMES, title="Month Raised"),
                y=alt.Y("count:Q", title="Issues", stack="zero"),
                color=alt.Color("status:N", scale=_STATUS_COLORS, title="Status"),
                tooltip=["month", "status", "count"],
            )
            .properties(height=260)
        )
        charts["monthly_trend"] = to_vega_spec(chart)

    clients = analytics.get("clientSummary", {})
    if clients:
        top = sorted(clients, key=lambda k: clients[k]["total"], reverse=True)[:top_n]
        client_long = _buckets_long({k: clients[k] for k in top}, "client")
        chart = (
            alt.Chart(client_long)
            .mark_bar()
            .encode(
                y=alt.Y("client:N", sort=top, title="Client"),
                x=alt.X("count:Q", title="Issues", stack="zero"),
                color=alt.Color("status:N", scale=_STATUS_COLORS, title="Status"),
                tooltip=["client", "status", "count"],
            )
            .properties(height=max(120, 24 * len(top)))
        )
        charts["client_status"] = to_vega_spec(chart)

    return charts


def compute_issue_tracker(filters: IssueFilters, issues: pd.DataFrame) -> Dict[str, Any]:
    """Filter the issue records, then recompute summary and analytics on the result."""
    filtered = apply_issue_filters(issues, filters)
    table = filtered.copy()
    table["Status"] = status_series(filtered)
    analytics = compute_issue_analytics(filtered)
    return {
        "filters": asdict(filters),
        "options": filter_options(issues),
        "summary": compute_issue_summary(filtered),
        "analytics": analytics,
        "data": frame_to_records(table),
        "charts": issue_charts(analytics),
    }
