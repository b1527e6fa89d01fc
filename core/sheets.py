"""Read-only access to the dashboard's Google Sheets documents.

Every public fetch returns a :class:`FetchResult` instead of raising: missing
credentials, missing tabs and API/network failures all become
``success=False`` with a message, except a missing tab in the vehicle document,
which degrades to an empty sheet while the other tabs still load.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

import gspread
from google.oauth2.service_account import Credentials

from core.config import SCOPES, SheetsConfig
from core.records import drop_blank_rows, filter_issue_records, frame_to_records, records_frame

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Google Sheets credentials not configured"

# key -> spreadsheet handle exposing .title, .worksheets() and .worksheet(title)
SpreadsheetOpener = Callable[[str], Any]


@dataclass(frozen=True)
class FetchResult:
    success: bool
    data: Any = None
    headers: List[str] = field(default_factory=list)
    error: Optional[str] = None
    last_updated: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success, "data": self.data, "headers": self.headers, "lastUpdated": self.last_updated}
        if self.error is not None:
            payload["error"] = self.error
        return payload


def format_last_updated(tz_name: str = "Asia/Kolkata", now: Optional[datetime] = None) -> str:
    now = now or datetime.now(ZoneInfo(tz_name))
    return now.strftime("%d/%m/%Y, %H:%M")


def worksheet_rows(worksheet: Any) -> Tuple[List[str], List[Dict[str, str]]]:
    """Header row plus header-keyed rows; short rows pad with ``""``."""
    values: List[List[str]] = worksheet.get_all_values() or []
    if not values:
        return [], []
    headers = [str(h) for h in values[0]]
    rows = []
    for raw in values[1:]:
        rows.append({h: (raw[i] if i < len(raw) else "") for i, h in enumerate(headers)})
    return headers, rows


class SheetsClient:
    def __init__(self, config: SheetsConfig, opener: Optional[SpreadsheetOpener] = None):
        self.config = config
        self._opener = opener
        self._gspread_client: Optional[gspread.Client] = None

    # ---------------- connection ----------------
    def _open(self, key: str) -> Any:
        if self._opener is not None:
            return self._opener(key)
        if self._gspread_client is None:
            creds = Credentials.from_service_account_info(self.config.service_account_info(), scopes=SCOPES)
            client = gspread.authorize(creds)
            client.set_timeout(self.config.timeout_seconds)
            self._gspread_client = client
        return self._gspread_client.open_by_key(key)

    def _stamp(self) -> str:
        return format_last_updated(self.config.timezone)

    def _credentials_missing(self) -> bool:
        return self._opener is None and not self.config.has_credentials

    def _failure(self, what: str, exc: Exception) -> FetchResult:
        logger.exception("Error fetching %s", what)
        return FetchResult(success=False, data=[], error=str(exc) or type(exc).__name__, last_updated=self._stamp())

    # ---------------- fetches ----------------
    def get_vehicle_data(self) -> FetchResult:
        """All expected vehicle tabs as ``{sheet: {"headers": [...], "data": [...]}}``."""
        if self._credentials_missing():
            logger.error("Missing Google Sheets credentials")
            return FetchResult(success=False, data={}, error=MISSING_CREDENTIALS, last_updated=self._stamp())
        try:
            doc = self._open(self.config.vehicle_spreadsheet_id)
        except Exception as exc:
            return self._failure("vehicle data", exc)

        data: Dict[str, Dict[str, Any]] = {}
        for sheet_name in self.config.vehicle_sheets:
            try:
                headers, rows = worksheet_rows(doc.worksheet(sheet_name))
                frame = drop_blank_rows(records_frame(rows, headers))
                data[sheet_name] = {"headers": headers, "data": frame_to_records(frame)}
            except gspread.exceptions.WorksheetNotFound:
                logger.warning("Sheet %s not found in vehicle document", sheet_name)
                data[sheet_name] = {"headers": [], "data": []}
            except Exception:
                logger.exception("Error processing sheet %s", sheet_name)
                data[sheet_name] = {"headers": [], "data": []}
        return FetchResult(success=True, data=data, last_updated=self._stamp())

    def _fetch_tab(self, key: str, tab: str) -> Tuple[List[str], List[Dict[str, str]]]:
        doc = self._open(key)
        try:
            worksheet = doc.worksheet(tab)
        except gspread.exceptions.WorksheetNotFound as exc:
            raise LookupError(f"{tab} sheet not found") from exc
        return worksheet_rows(worksheet)

    def get_misalignment_data(self) -> FetchResult:
        """Raw misalignment log rows; grouping happens downstream."""
        if self._credentials_missing():
            logger.error("Missing Google Sheets credentials")
            return FetchResult(success=False, data=[], error=MISSING_CREDENTIALS, last_updated=self._stamp())
        try:
            headers, rows = self._fetch_tab(self.config.misalignment_spreadsheet_id, self.config.misalignment_sheet)
        except Exception as exc:
            return self._failure("camera misaligned data", exc)
        return FetchResult(success=True, data=frame_to_records(records_frame(rows, headers)), headers=headers, last_updated=self._stamp())

    def get_issue_data(self) -> FetchResult:
        """Issue rows with sheet artifacts (blank/placeholder clients) removed."""
        if self._credentials_missing():
            logger.error("Missing Google Sheets credentials")
            return FetchResult(success=False, data=[], error=MISSING_CREDENTIALS, last_updated=self._stamp())
        try:
            headers, rows = self._fetch_tab(self.config.issues_spreadsheet_id, self.config.issues_sheet)
        except Exception as exc:
            return self._failure("issue data", exc)
        issues = filter_issue_records(records_frame(rows, headers))
        return FetchResult(success=True, data=frame_to_records(issues), headers=headers, last_updated=self._stamp())

    # ---------------- diagnostics ----------------
    def check_connection(self) -> Dict[str, Any]:
        email = self.config.service_account_email
        debug: Dict[str, Any] = {
            "step": "Checking environment variables",
            "success": False,
            "error": None,
            "details": {
                "hasEmail": bool(email),
                "hasPrivateKey": bool(self.config.private_key),
                "emailValue": (email[:20] + "...") if email else "Not found",
                "privateKeyLength": len(self.config.private_key or ""),
            },
        }
        if self._credentials_missing():
            debug["error"] = "Missing environment variables"
            return debug

        try:
            debug["step"] = "Loading spreadsheet info"
            doc = self._open(self.config.vehicle_spreadsheet_id)
            titles = [ws.title for ws in doc.worksheets()]
            debug["details"].update(
                {
                    "spreadsheetTitle": doc.title,
                    "sheetCount": len(titles),
                    "availableSheets": titles,
                    "expectedSheets": list(self.config.vehicle_sheets),
                    "missingSheets": [s for s in self.config.vehicle_sheets if s not in titles],
                }
            )
            if titles:
                debug["step"] = "Testing data read from first available sheet"
                headers, rows = worksheet_rows(doc.worksheet(titles[0]))
                debug["details"].update(
                    {"firstSheetName": titles[0], "firstSheetHeaders": headers, "firstSheetRowCount": len(rows), "sampleData": rows[:5]}
                )
        except Exception as exc:
            logger.exception("Connection check failed at step: %s", debug["step"])
            debug["error"] = {"message": str(exc), "type": type(exc).__name__}
            debug["message"] = f"Connection failed at step: {debug['step']}"
            return debug

        debug["step"] = "Success!"
        debug["success"] = True
        debug["message"] = "Google Sheets connection successful!"
        return debug
