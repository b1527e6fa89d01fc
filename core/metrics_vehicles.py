from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

import altair as alt
import pandas as pd

from core.charts import to_vega_spec
from core.config import (
    OFFLINE_10D_SHEET,
    OFFLINE_24H_SHEET,
    OFFLINE_5D_SHEET,
    ONLINE_SHOWING_OFFLINE_SHEET,
    SOLD_PENDING_SHEET,
    UNRESOLVED_20D_SHEET,
)
from core.records import get_field


# Legacy schema: this category names its id columns differently from every other sheet.
CAMERA_MISALIGNED_CATEGORY = "Camera Misaligned"

SheetMap = Mapping[str, Mapping[str, Any]]


def sheet_rows(sheets: SheetMap, name: str) -> List[Mapping[str, Any]]:
    sheet = sheets.get(name) or {}
    return list(sheet.get("data") or [])


def _sheet_count(sheets: SheetMap, name: str) -> int:
    return len(sheet_rows(sheets, name))


def id_columns(sheet_name: str) -> Tuple[str, str]:
    """(vehicle column, client column) for a sheet category."""
    if sheet_name == CAMERA_MISALIGNED_CATEGORY:
        return "Vehicle No", "Client Name"
    return "Vehicle Number", "Client"


def compute_vehicle_kpis(sheets: SheetMap) -> Dict[str, int]:
    vehicles = set()
    clients = set()
    for sheet_name in sheets:
        vehicle_col, client_col = id_columns(sheet_name)
        for row in sheet_rows(sheets, sheet_name):
            vehicle = get_field(row, vehicle_col)
            if vehicle:
                vehicles.add(vehicle)
            client = get_field(row, client_col)
            if client:
                clients.add(client)

    return {
        "totalVehicles": len(vehicles),
        "totalClients": len(clients),
        "offline24hrs": _sheet_count(sheets, OFFLINE_24H_SHEET),
        "offline5days": _sheet_count(sheets, OFFLINE_5D_SHEET),
        "offline10days": _sheet_count(sheets, OFFLINE_10D_SHEET),
        "misaligned": _sheet_count(sheets, CAMERA_MISALIGNED_CATEGORY),
        "onlineButShowingOffline": _sheet_count(sheets, ONLINE_SHOWING_OFFLINE_SHEET),
        "soldVehiclesPending": _sheet_count(sheets, SOLD_PENDING_SHEET),
        "unresolvedIssues20days": _sheet_count(sheets, UNRESOLVED_20D_SHEET),
    }


def _is_resolved_flag(value: str) -> bool:
    flag = value.lower()
    return "y" in flag or flag == "1"


def compute_vehicle_charts(sheets: SheetMap, misaligned_vehicles: int = 0) -> Dict[str, Dict[str, list]]:
    """Label/value pairs behind the overview charts."""
    offline_24 = _sheet_count(sheets, OFFLINE_24H_SHEET)
    offline_5 = _sheet_count(sheets, OFFLINE_5D_SHEET)
    offline_10 = _sheet_count(sheets, OFFLINE_10D_SHEET)
    sold_pending = _sheet_count(sheets, SOLD_PENDING_SHEET)

    unresolved_rows = sheet_rows(sheets, UNRESOLVED_20D_SHEET)
    resolved = sum(1 for row in unresolved_rows if _is_resolved_flag(get_field(row, "Resolved Y/N")))

    return {
        "offlineByTime": {
            "labels": ["24+ Hours", "5+ Days", "10+ Days"],
            "data": [offline_24, offline_5, offline_10],
        },
        "cameraStatus": {
            "labels": ["Online but Offline", "Total Offline", "Misaligned"],
            "data": [
                _sheet_count(sheets, ONLINE_SHOWING_OFFLINE_SHEET),
                offline_24 + offline_5 + offline_10,
                misaligned_vehicles,
            ],
        },
        "soldVehicles": {
            "labels": ["Camera Pending", "Estimated Completed"],
            "data": [sold_pending, max(0, sold_pending * 0.3)],
        },
        "issuesTimeline": {
            "labels": ["Resolved", "Unresolved"],
            "data": [resolved, len(unresolved_rows) - resolved],
        },
    }


def _chart_frame(pair: Dict[str, list]) -> pd.DataFrame:
    return pd.DataFrame({"label": pair["labels"], "value": pair["data"]})


def compute_vehicle_overview(sheets: SheetMap, misaligned_vehicles: int = 0) -> Dict[str, Any]:
    chart_data = compute_vehicle_charts(sheets, misaligned_vehicles=misaligned_vehicles)

    offline = _chart_frame(chart_data["offlineByTime"])
    offline_bar = (
        alt.Chart(offline)
        .mark_bar(color="#f97316")
        .encode(
            x=alt.X("label:N", sort=chart_data["offlineByTime"]["labels"], title="Offline For"),
            y=alt.Y("value:Q", title="Vehicles"),
            tooltip=["label", "value"],
        )
        .properties(height=260)
    )
    status = _chart_frame(chart_data["cameraStatus"])
    status_donut = (
        alt.Chart(status)
        .mark_arc(innerRadius=60)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("label:N", title="Camera Status"),
            tooltip=["label", "value"],
        )
        .properties(height=260)
    )

    return {
        "kpis": compute_vehicle_kpis(sheets),
        "chartData": chart_data,
        "charts": {"offline_by_time": to_vega_spec(offline_bar), "camera_status": to_vega_spec(status_donut)},
    }
