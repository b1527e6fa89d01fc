import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Dict, List, Optional

from core.config import OFFLINE_SHEETS, load_sheets_config
from core.data import (
    compute_issue_payload,
    compute_misalignment_table,
    compute_vehicle_payload,
    load_dashboard_data,
    with_demo_fallback,
)
from core.dates import age_band
from core.export import export_filename, records_to_csv
from core.filters import ALL, apply_search
from core.records import records_frame
from core.sheets import SheetsClient

alt.data_transformers.disable_max_rows()
# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(filters: Dict[str, str]) -> str:
    chips = [f"{label}: {value or ALL}" for label, value in filters.items()]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def render_page_header(title: str, breadcrumb: str, last_updated: str, export_rows=None, export_name: str = "export"):
    inject_base_styles()
    c1, c2 = st.columns([7, 3])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
        st.caption(f"Last Updated: {last_updated}")
    with c2:
        btn_cols = st.columns(2)
        if btn_cols[0].button("Refresh", key=f"refresh_{title}"):
            st.rerun()
        csv_text = records_to_csv(export_rows) if export_rows is not None else ""
        if csv_text:
            btn_cols[1].download_button(
                "Export CSV",
                data=csv_text.encode("utf-8"),
                file_name=export_filename(export_name),
                mime="text/csv",
            )


def render_chart(spec: Optional[dict]):
    if spec:
        st.vega_lite_chart(spec, use_container_width=True)


def age_style(days: object) -> str:
    colors = {"fresh": "#dcfce7", "aging": "#fef9c3", "stale": "#fee2e2"}
    try:
        return f"background-color: {colors[age_band(int(days))]}"
    except (TypeError, ValueError):
        return ""


# ---------- UI setup ----------
st.set_page_config(page_title="Vehicle Camera Dashboard", layout="wide")
inject_base_styles()
st.title("Vehicle Camera Dashboard")
st.caption("Offline vehicles, camera misalignment and issue tracking from the operations sheets.")

client = SheetsClient(load_sheets_config())
data_ctx, demo_sources = with_demo_fallback(load_dashboard_data(client))
if demo_sources:
    errors = {name: data_ctx[name].error for name in demo_sources}
    st.warning(
        "Live data unavailable for " + ", ".join(demo_sources) + ". Showing demo data instead.  \n"
        + "  \n".join(f"{k}: {v}" for k, v in errors.items() if v)
    )

misalignment = compute_misalignment_table(data_ctx["misalignment"])
vehicles = compute_vehicle_payload(data_ctx["vehicles"], misaligned_vehicles=misalignment["kpis"]["vehicles"])

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Overview", "Offline Vehicles", "Issue Tracker"], index=0)


def render_overview():
    kpis = vehicles.get("kpis", {})
    render_page_header("Overview", "Dashboard", vehicles.get("lastUpdated", ""), misalignment["data"], "camera_misaligned")

    cols = st.columns(4)
    cols[0].metric("Total Vehicles", f"{kpis.get('totalVehicles', 0):,}")
    cols[1].metric("Total Clients", f"{kpis.get('totalClients', 0):,}")
    cols[2].metric(
        "Offline Vehicles",
        f"{kpis.get('offline24hrs', 0) + kpis.get('offline5days', 0) + kpis.get('offline10days', 0):,}",
        help="24+ hours, 5+ days and 10+ days offline combined.",
    )
    cols[3].metric("Misaligned Vehicles", f"{misalignment['kpis']['vehicles']:,}")

    cols = st.columns(3)
    cols[0].metric("Online but Showing Offline", kpis.get("onlineButShowingOffline", 0))
    cols[1].metric("Sold - Camera Pending", kpis.get("soldVehiclesPending", 0))
    cols[2].metric("Unresolved Issues (20+ days)", kpis.get("unresolvedIssues20days", 0))

    c1, c2 = st.columns(2)
    with c1, card("Offline by Duration"):
        render_chart(vehicles.get("charts", {}).get("offline_by_time"))
    with c2, card("Camera Status"):
        render_chart(vehicles.get("charts", {}).get("camera_status"))

    with card("Camera Misaligned by Client"):
        table = pd.DataFrame(misalignment["data"], columns=misalignment["headers"])
        if table.empty:
            st.info("No misalignment records.")
        else:
            st.dataframe(table.style.map(age_style, subset=["Age (Days)"]), use_container_width=True, hide_index=True)
            render_chart(misalignment.get("charts", {}).get("vehicles_by_client"))


def render_offline_vehicles():
    sheets = vehicles.get("data", {}) or {}
    labels = dict(zip(OFFLINE_SHEETS, ["24+ Hours Offline", "5+ Days Offline", "10+ Days Offline"]))
    tab_name = st.radio("Offline for", list(OFFLINE_SHEETS), format_func=lambda n: labels[n], horizontal=True)
    search = st.text_input("Search vehicles", "")

    tab = sheets.get(tab_name) or {}
    rows = apply_search(records_frame(tab.get("data") or [], tab.get("headers")), search)
    render_page_header("Offline Vehicles", "Dashboard / Offline Vehicles", vehicles.get("lastUpdated", ""), rows, tab_name)

    st.metric(labels[tab_name], len(rows))
    if rows.empty:
        st.info("No vehicles match the current search.")
    else:
        st.dataframe(rows, use_container_width=True, hide_index=True)


def render_issue_tracker():
    base = compute_issue_payload(data_ctx["issues"])
    options = base.get("options", {})

    with st.sidebar:
        st.markdown("---")
        st.markdown("### Issue filters")
        selected = {
            "search": st.text_input("Search", ""),
            "city": st.selectbox("City", [ALL] + options.get("cities", [])),
            "client": st.selectbox("Client", [ALL] + options.get("clients", [])),
            "assignedTo": st.selectbox("Assigned To", [ALL] + options.get("assignees", [])),
            "status": st.selectbox("Status", [ALL] + options.get("statuses", [])),
            "vehicle": st.text_input("Vehicle Number", ""),
            "month": st.selectbox("Month Raised", [ALL] + options.get("months", [])),
        }

    payload = compute_issue_payload(data_ctx["issues"], selected)
    render_page_header("Issue Tracker", "Dashboard / Issue Tracker", payload.get("lastUpdated", ""), payload.get("data", []), "issues")
    st.markdown(f"<div class='chip-row'>{format_filter_summary(selected)}</div>", unsafe_allow_html=True)

    summary = payload.get("summary", {})
    cols = st.columns(4)
    cols[0].metric("Total Issues", summary.get("totalIssues", 0))
    cols[1].metric("Open", summary.get("openCount", 0))
    cols[2].metric("Closed", summary.get("closedCount", 0))
    cols[3].metric("On Hold", summary.get("onHoldCount", 0))

    charts = payload.get("charts", {})
    c1, c2 = st.columns(2)
    with c1, card("Issues by Month Raised"):
        render_chart(charts.get("monthly_trend"))
    with c2, card("Issues by Client"):
        render_chart(charts.get("client_status"))

    analytics = payload.get("analytics", {})
    with card("Assignee Summary"):
        assignees: List[dict] = [{"Assigned To": k, **v} for k, v in analytics.get("assigneeSummary", {}).items()]
        st.dataframe(pd.DataFrame(assignees), use_container_width=True, hide_index=True)

    with card("Issues"):
        table = pd.DataFrame(payload.get("data", []))
        if table.empty:
            st.info("No issues match the selected filters.")
        else:
            st.dataframe(table, use_container_width=True, hide_index=True)


if nav_choice == "Overview":
    render_overview()
elif nav_choice == "Offline Vehicles":
    render_offline_vehicles()
else:
    render_issue_tracker()
