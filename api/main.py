from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import IssueBundleModel, IssueFiltersModel
from core.config import OFFLINE_24H_SHEET, load_sheets_config
from core.data import (
    compute_issue_payload,
    compute_misalignment_table,
    compute_vehicle_payload,
    demo_dashboard_data,
    issues_frame,
)
from core.export import export_filename, records_to_csv
from core.filters import IssueFilters, apply_issue_filters, apply_search, normalize_issue_filters
from core.metrics_issues import compute_issue_bundle
from core.records import records_frame
from core.sheets import FetchResult, SheetsClient
from core.status import status_series


app = FastAPI(title="Fleet Camera Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def get_sheets_client() -> SheetsClient:
    return SheetsClient(load_sheets_config())


def _filters_from_model(model: IssueFiltersModel) -> IssueFilters:
    return normalize_issue_filters(model.model_dump())


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        ),
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc), "type": type(exc).__name__})


def _failed(result: FetchResult) -> JSONResponse:
    logger.error("Data fetch failed: %s", result.error)
    return _json(result.to_dict(), status_code=500)


@app.get("/vehicle-data")
def vehicle_data(client: SheetsClient = Depends(get_sheets_client)):
    try:
        result = client.get_vehicle_data()
        if not result.success:
            return _failed(result)
        return _json(compute_vehicle_payload(result))
    except Exception as exc:
        logger.exception("vehicle_data failed")
        return _error(exc)


@app.get("/vehicle-data-demo")
def vehicle_data_demo():
    try:
        return _json(compute_vehicle_payload(demo_dashboard_data()["vehicles"]))
    except Exception as exc:
        logger.exception("vehicle_data_demo failed")
        return _error(exc)


@app.get("/camera-misaligned")
def camera_misaligned(client: SheetsClient = Depends(get_sheets_client)):
    try:
        result = client.get_misalignment_data()
        if not result.success:
            return _failed(result)
        return _json(compute_misalignment_table(result))
    except Exception as exc:
        logger.exception("camera_misaligned failed")
        return _error(exc)


@app.post("/issue-data")
def issue_data(filters: IssueFiltersModel, client: SheetsClient = Depends(get_sheets_client)):
    try:
        result = client.get_issue_data()
        if not result.success:
            return _failed(result)
        return _json(compute_issue_payload(result, _filters_from_model(filters)))
    except Exception as exc:
        logger.exception("issue_data failed")
        return _error(exc)


@app.get("/issue-summary", response_model=IssueBundleModel)
def issue_summary(client: SheetsClient = Depends(get_sheets_client)):
    result = client.get_issue_data()
    if not result.success:
        return _failed(result)
    return compute_issue_bundle(issues_frame(result))


@app.get("/debug-connection")
def debug_connection(client: SheetsClient = Depends(get_sheets_client)):
    debug = client.check_connection()
    return _json(debug, status_code=200 if debug.get("success") else 500)


@app.post("/export/{page}")
def export_page(
    page: str,
    filters: IssueFiltersModel,
    sheet: str = Query(default=OFFLINE_24H_SHEET),
    client: SheetsClient = Depends(get_sheets_client),
):
    if page == "issues":
        result = client.get_issue_data()
        if not result.success:
            return _failed(result)
        table = apply_issue_filters(issues_frame(result), _filters_from_model(filters)).copy()
        table["Status"] = status_series(table)
        csv_text, name = records_to_csv(table), "issues"
    elif page == "misalignment":
        result = client.get_misalignment_data()
        if not result.success:
            return _failed(result)
        payload = compute_misalignment_table(result)
        csv_text, name = records_to_csv(payload["data"], payload["headers"]), "camera_misaligned"
    elif page == "offline":
        result = client.get_vehicle_data()
        if not result.success:
            return _failed(result)
        tab = (result.data or {}).get(sheet) or {}
        rows = apply_search(records_frame(tab.get("data") or [], tab.get("headers")), filters.search)
        csv_text, name = records_to_csv(rows), sheet
    else:
        return JSONResponse(status_code=404, content={"success": False, "error": f"Unknown export page: {page}"})

    filename = export_filename(name)
    return Response(
        content=csv_text.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
