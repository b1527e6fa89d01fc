from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from core.demo import demo_issue_rows, demo_misalignment_rows, demo_vehicle_sheets
from core.filters import IssueFilters, normalize_issue_filters
from core.metrics_issues import compute_issue_tracker
from core.metrics_misalignment import compute_misalignment, group_misalignment
from core.metrics_vehicles import compute_vehicle_overview
from core.records import filter_issue_records, records_frame
from core.sheets import FetchResult, SheetsClient, format_last_updated

logger = logging.getLogger(__name__)

SOURCES = ("vehicles", "misalignment", "issues")


def load_dashboard_data(client: SheetsClient) -> Dict[str, FetchResult]:
    """Fetch the three sources in parallel; each result stands on its own."""
    fetchers: Dict[str, Callable[[], FetchResult]] = {
        "vehicles": client.get_vehicle_data,
        "misalignment": client.get_misalignment_data,
        "issues": client.get_issue_data,
    }
    with ThreadPoolExecutor(max_workers=len(fetchers)) as ex:
        futures = {name: ex.submit(fn) for name, fn in fetchers.items()}
        return {name: fut.result() for name, fut in futures.items()}


def demo_dashboard_data() -> Dict[str, FetchResult]:
    stamp = format_last_updated()
    return {
        "vehicles": FetchResult(success=True, data=demo_vehicle_sheets(), last_updated=stamp),
        "misalignment": FetchResult(success=True, data=demo_misalignment_rows(), headers=["Date", "Client Name", "Vehicle Numbers"], last_updated=stamp),
        "issues": FetchResult(success=True, data=demo_issue_rows(), headers=list(demo_issue_rows()[0].keys()), last_updated=stamp),
    }


def with_demo_fallback(data_ctx: Dict[str, FetchResult]) -> Tuple[Dict[str, FetchResult], List[str]]:
    """Swap failed sources for demo data; returns the sources that were swapped."""
    demo = demo_dashboard_data()
    resolved: Dict[str, FetchResult] = {}
    swapped: List[str] = []
    for name in SOURCES:
        result = data_ctx.get(name)
        if result is None or not result.success:
            logger.warning("Falling back to demo data for %s: %s", name, result.error if result else "not fetched")
            resolved[name] = replace(demo[name], error=result.error if result else None)
            swapped.append(name)
        else:
            resolved[name] = result
    return resolved, swapped


def issues_frame(result: FetchResult) -> pd.DataFrame:
    if not result.success:
        return pd.DataFrame()
    return filter_issue_records(records_frame(result.data or [], result.headers))


def compute_vehicle_payload(result: FetchResult, misaligned_vehicles: int = 0) -> Dict[str, Any]:
    if not result.success:
        return result.to_dict()
    return {**result.to_dict(), **compute_vehicle_overview(result.data or {}, misaligned_vehicles=misaligned_vehicles)}


def compute_misalignment_table(result: FetchResult, now: Optional[datetime] = None) -> Dict[str, Any]:
    if not result.success:
        return {**result.to_dict(), "data": [], "headers": []}
    payload = compute_misalignment(group_misalignment(result.data or [], now=now))
    return {**result.to_dict(), **payload}


def compute_issue_payload(result: FetchResult, filters: IssueFilters | dict | None = None) -> Dict[str, Any]:
    if not result.success:
        return {**result.to_dict(), "data": [], "headers": []}
    filt = filters if isinstance(filters, IssueFilters) else normalize_issue_filters(filters)
    payload = compute_issue_tracker(filt, issues_frame(result))
    return {**result.to_dict(), **payload}
