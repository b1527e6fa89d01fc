from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


VEHICLE_SPREADSHEET_ID = "1tZDbCefO-xSwdYc2zry0eOpLtZrOw1FM3KZPHtpKRU0"
CAMERA_MISALIGNED_SPREADSHEET_ID = "1GPDqOSURZNALalPzfHNbMft0HQ1c_fIkgfu_V3fSroY"
ISSUES_SPREADSHEET_ID = "1oHapc5HADod_2zPi0l1r8Ef2PjQlb4pfe-p9cKZFB2I"

OFFLINE_24H_SHEET = "24+ hours offline vehicles"
OFFLINE_5D_SHEET = "5+ days offline vehicles"
OFFLINE_10D_SHEET = "10+ days offline vehicles"
ONLINE_SHOWING_OFFLINE_SHEET = "Online but Showing Offline"
SOLD_PENDING_SHEET = "Sold Vehicles - Camera Pending"
UNRESOLVED_20D_SHEET = "Unresolved Issues (20+ days)"

VEHICLE_SHEETS: Tuple[str, ...] = (
    OFFLINE_24H_SHEET,
    OFFLINE_5D_SHEET,
    OFFLINE_10D_SHEET,
    ONLINE_SHOWING_OFFLINE_SHEET,
    SOLD_PENDING_SHEET,
    UNRESOLVED_20D_SHEET,
)
OFFLINE_SHEETS: Tuple[str, ...] = (OFFLINE_24H_SHEET, OFFLINE_5D_SHEET, OFFLINE_10D_SHEET)

MISALIGNMENT_SHEET = "Misalignment_Tracking"
ISSUES_SHEET = "Issues- Realtime"

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def _parse_float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class SheetsConfig:
    service_account_email: Optional[str] = None
    private_key: Optional[str] = None
    vehicle_spreadsheet_id: str = VEHICLE_SPREADSHEET_ID
    misalignment_spreadsheet_id: str = CAMERA_MISALIGNED_SPREADSHEET_ID
    issues_spreadsheet_id: str = ISSUES_SPREADSHEET_ID
    vehicle_sheets: Tuple[str, ...] = VEHICLE_SHEETS
    misalignment_sheet: str = MISALIGNMENT_SHEET
    issues_sheet: str = ISSUES_SHEET
    timeout_seconds: float = 30.0
    timezone: str = "Asia/Kolkata"

    @property
    def has_credentials(self) -> bool:
        return bool(self.service_account_email) and bool(self.private_key)

    def service_account_info(self) -> dict:
        """Minimal service-account mapping accepted by google-auth."""
        return {
            "type": "service_account",
            "client_email": self.service_account_email,
            "private_key": self.private_key,
            "token_uri": TOKEN_URI,
        }


def _normalize_private_key(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    # Keys pasted into .env files carry literal "\n" sequences.
    return value.replace("\\n", "\n")


def load_sheets_config() -> SheetsConfig:
    return SheetsConfig(
        service_account_email=os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL") or None,
        private_key=_normalize_private_key(os.getenv("GOOGLE_PRIVATE_KEY")),
        vehicle_spreadsheet_id=os.getenv("VEHICLE_SPREADSHEET_ID", VEHICLE_SPREADSHEET_ID),
        misalignment_spreadsheet_id=os.getenv("CAMERA_MISALIGNED_SPREADSHEET_ID", CAMERA_MISALIGNED_SPREADSHEET_ID),
        issues_spreadsheet_id=os.getenv("ISSUES_SPREADSHEET_ID", ISSUES_SPREADSHEET_ID),
        timeout_seconds=_parse_float(os.getenv("SHEETS_TIMEOUT_SECONDS"), 30.0),
        timezone=os.getenv("DASHBOARD_TIMEZONE", "Asia/Kolkata"),
    )
