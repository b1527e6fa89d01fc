from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import gspread
import pytest

# tests/ is one level under the repo root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import (  # noqa: E402
    CAMERA_MISALIGNED_SPREADSHEET_ID,
    ISSUES_SPREADSHEET_ID,
    OFFLINE_24H_SHEET,
    OFFLINE_5D_SHEET,
    UNRESOLVED_20D_SHEET,
    VEHICLE_SPREADSHEET_ID,
    SheetsConfig,
)
from core.sheets import SheetsClient  # noqa: E402


class FakeWorksheet:
    def __init__(self, title: str, values: List[List[str]]):
        self.title = title
        self._values = values

    def get_all_values(self) -> List[List[str]]:
        return [list(r) for r in self._values]


class FakeSpreadsheet:
    def __init__(self, title: str, tabs: Dict[str, List[List[str]]]):
        self.title = title
        self._tabs = {name: FakeWorksheet(name, values) for name, values in tabs.items()}

    def worksheets(self) -> List[FakeWorksheet]:
        return list(self._tabs.values())

    def worksheet(self, title: str) -> FakeWorksheet:
        if title not in self._tabs:
            raise gspread.exceptions.WorksheetNotFound(title)
        return self._tabs[title]


def make_opener(docs: Dict[str, FakeSpreadsheet]):
    def opener(key: str) -> FakeSpreadsheet:
        if key not in docs:
            raise PermissionError(f"403: caller does not have access to {key}")
        return docs[key]

    return opener


ISSUE_HEADER = [
    "Issue ID",
    "Timestamp Issues Raised",
    "Client",
    "City",
    "Vehicle Number",
    "Issue",
    "Assigned To",
    "Resolved Y/N",
    "Next Follow Up Date",
]


@pytest.fixture
def fake_docs() -> Dict[str, FakeSpreadsheet]:
    vehicle_doc = FakeSpreadsheet(
        "Vehicle Status",
        {
            OFFLINE_24H_SHEET: [
                ["Vehicle Number", "Client", "Location"],
                ["MH01AB1234", "Acme", "Mumbai"],
                ["", "", ""],
                [" DL02CD5678 ", "Globex", "Delhi"],
            ],
            OFFLINE_5D_SHEET: [
                ["Vehicle Number", "Client", "Location"],
                ["MH01AB1234", "Acme", "Mumbai"],
            ],
            UNRESOLVED_20D_SHEET: [
                ["Issue ID", "Vehicle Number", "Client", "Resolved Y/N"],
                ["ISS001", "KA03EF9012", "Initech", "N"],
                ["ISS002", "KA03EF9013", "Initech", "Yes"],
            ],
        },
    )
    misalignment_doc = FakeSpreadsheet(
        "Camera Misaligned",
        {
            "Misalignment_Tracking": [
                ["Date", "Client Name", "Vehicle Numbers"],
                ["01/09/2025", "X", "A,B"],
                ["05/09/2025", "X", "B,C"],
                ["03/09/2025", "Acme", "V1"],
                ["", "Acme", "V2"],
            ]
        },
    )
    issues_doc = FakeSpreadsheet(
        "Issues",
        {
            "Issues- Realtime": [
                ISSUE_HEADER,
                ["1", "02/09/2025 10:15:00", "Acme", "Mumbai", "MH01AB1234", "Offline", "Ravi", "Y", ""],
                ["2", "15/08/2025", "Acme", "Mumbai", "MH01AB9999", "Misaligned", "Ravi", "yes", ""],
                ["3", "20/08/2025", "Acme", "Pune", "MH12XY0001", "No feed", "", "", "10/10/2025"],
                ["4", "21/08/2025", "Globex", "Delhi", "DL02CD5678", "Tampered", "Sara", "N", "12/09/2025"],
                ["5", "21/08/2025", "undefined", "Delhi", "DL02CD0000", "Artifact", "", "", ""],
                ["6", "", "", "", "", "", "", "", ""],
            ]
        },
    )
    return {
        VEHICLE_SPREADSHEET_ID: vehicle_doc,
        CAMERA_MISALIGNED_SPREADSHEET_ID: misalignment_doc,
        ISSUES_SPREADSHEET_ID: issues_doc,
    }


@pytest.fixture
def sheets_client(fake_docs) -> SheetsClient:
    return SheetsClient(SheetsConfig(), opener=make_opener(fake_docs))


@pytest.fixture
def broken_client() -> SheetsClient:
    return SheetsClient(SheetsConfig(), opener=make_opener({}))
