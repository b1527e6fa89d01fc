from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import altair as alt
import pandas as pd

from core.charts import age_band_scale, to_vega_spec
from core.dates import age_band, calculate_age, parse_date
from core.records import as_text, frame_to_records, get_field


MISALIGNMENT_HEADERS = ["Client Name", "Vehicle Numbers", "Latest Date", "Age (Days)", "Vehicle Count"]


def split_vehicles(value: object) -> List[str]:
    text = as_text(value)
    return [v.strip() for v in text.split(",") if v.strip()]


def group_misalignment(
    rows: Iterable[Mapping[str, Any]] | pd.DataFrame,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Collapse misalignment log rows into one row per client.

    Vehicles are unioned in first-seen order; the latest date only moves when a
    row's parsed date is strictly later than the stored one.
    """
    if isinstance(rows, pd.DataFrame):
        rows = frame_to_records(rows)

    groups: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        client = get_field(row, "Client Name")
        vehicles_raw = get_field(row, "Vehicle Numbers")
        date_str = get_field(row, "Date")
        if not client or not vehicles_raw or not date_str:
            continue

        parsed = parse_date(date_str)
        group = groups.get(client)
        if group is None:
            # vehicles is an insertion-ordered set
            group = {"vehicles": {}, "latest": parsed, "date_string": date_str}
            groups[client] = group
        elif parsed is not None and (group["latest"] is None or parsed > group["latest"]):
            group["latest"] = parsed
            group["date_string"] = date_str

        for vehicle in split_vehicles(vehicles_raw):
            group["vehicles"].setdefault(vehicle, None)

    out: List[Dict[str, Any]] = []
    for client in sorted(groups):
        group = groups[client]
        vehicles = list(group["vehicles"])
        out.append(
            {
                "Client Name": client,
                "Vehicle Numbers": ", ".join(vehicles),
                "Latest Date": group["date_string"],
                "Age (Days)": calculate_age(group["date_string"], now=now),
                "Vehicle Count": len(vehicles),
            }
        )
    return out


def compute_misalignment(groups: List[Dict[str, Any]]) -> Dict[str, Any]:
    table = pd.DataFrame(groups, columns=MISALIGNMENT_HEADERS)
    kpis = {
        "clients": int(len(table)),
        "vehicles": int(table["Vehicle Count"].sum()) if not table.empty else 0,
        "oldest_age_days": int(table["Age (Days)"].max()) if not table.empty else None,
    }

    charts: Dict[str, Any] = {}
    if not table.empty:
        plot = table.assign(age_band=table["Age (Days)"].map(age_band))
        bar = (
            alt.Chart(plot)
            .mark_bar()
            .encode(
                y=alt.Y("Client Name:N", sort="-x", title="Client"),
                x=alt.X("Vehicle Count:Q", title="Misaligned Vehicles"),
                color=alt.Color("age_band:N", scale=age_band_scale(), title="Age"),
                tooltip=["Client Name", "Vehicle Count", "Latest Date", "Age (Days)"],
            )
            .properties(height=max(120, 24 * len(plot)))
        )
        charts["vehicles_by_client"] = to_vega_spec(bar)

    return {"headers": list(MISALIGNMENT_HEADERS), "data": groups, "kpis": kpis, "charts": charts}
