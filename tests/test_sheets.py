from datetime import datetime

from core.config import (
    OFFLINE_10D_SHEET,
    OFFLINE_24H_SHEET,
    UNRESOLVED_20D_SHEET,
    VEHICLE_SHEETS,
    SheetsConfig,
)
from core.sheets import MISSING_CREDENTIALS, FetchResult, SheetsClient, format_last_updated, worksheet_rows

from conftest import FakeSpreadsheet, FakeWorksheet, make_opener


def test_vehicle_data_loads_every_expected_tab(sheets_client) -> None:
    result = sheets_client.get_vehicle_data()

    assert result.success
    assert list(result.data) == list(VEHICLE_SHEETS)
    offline = result.data[OFFLINE_24H_SHEET]
    assert offline["headers"] == ["Vehicle Number", "Client", "Location"]
    # blank row dropped, cells trimmed
    assert [r["Vehicle Number"] for r in offline["data"]] == ["MH01AB1234", "DL02CD5678"]
    assert result.data[UNRESOLVED_20D_SHEET]["data"][1]["Resolved Y/N"] == "Yes"


def test_missing_vehicle_tab_degrades_to_empty_sheet(sheets_client) -> None:
    result = sheets_client.get_vehicle_data()

    assert result.data[OFFLINE_10D_SHEET] == {"headers": [], "data": []}


def test_misalignment_rows_are_returned_raw(sheets_client) -> None:
    result = sheets_client.get_misalignment_data()

    assert result.success
    assert result.headers == ["Date", "Client Name", "Vehicle Numbers"]
    assert len(result.data) == 4
    assert result.data[3] == {"Date": "", "Client Name": "Acme", "Vehicle Numbers": "V2"}


def test_issue_data_drops_sheet_artifacts(sheets_client) -> None:
    result = sheets_client.get_issue_data()

    assert result.success
    assert [r["Issue ID"] for r in result.data] == ["1", "2", "3", "4"]
    assert "Client" in result.headers


def test_missing_credentials_short_circuits() -> None:
    client = SheetsClient(SheetsConfig())

    for result in (client.get_vehicle_data(), client.get_misalignment_data(), client.get_issue_data()):
        assert not result.success
        assert result.error == MISSING_CREDENTIALS


def test_unreachable_document_is_reported(broken_client) -> None:
    result = broken_client.get_issue_data()

    assert not result.success
    assert result.data == []
    assert "403" in result.error


def test_missing_misalignment_tab_is_named_in_error() -> None:
    from core.config import CAMERA_MISALIGNED_SPREADSHEET_ID

    docs = {CAMERA_MISALIGNED_SPREADSHEET_ID: FakeSpreadsheet("Camera Misaligned", {"Sheet1": [["a"]]})}
    client = SheetsClient(SheetsConfig(), opener=make_opener(docs))

    result = client.get_misalignment_data()

    assert not result.success
    assert "Misalignment_Tracking sheet not found" in result.error


def test_fetch_result_to_dict_omits_error_on_success() -> None:
    ok = FetchResult(success=True, data=[], last_updated="18/09/2025, 10:00").to_dict()
    failed = FetchResult(success=False, data=[], error="boom").to_dict()

    assert "error" not in ok
    assert ok["lastUpdated"] == "18/09/2025, 10:00"
    assert failed["error"] == "boom"


def test_worksheet_rows_pads_short_rows() -> None:
    ws = FakeWorksheet("t", [["A", "B", "C"], ["1"], ["1", "2", "3"]])

    headers, rows = worksheet_rows(ws)

    assert headers == ["A", "B", "C"]
    assert rows[0] == {"A": "1", "B": "", "C": ""}
    assert worksheet_rows(FakeWorksheet("empty", [])) == ([], [])


def test_format_last_updated() -> None:
    assert format_last_updated(now=datetime(2025, 9, 8, 7, 5)) == "08/09/2025, 07:05"


def test_check_connection_reports_sheet_inventory(sheets_client) -> None:
    debug = sheets_client.check_connection()

    assert debug["success"] is True
    assert debug["step"] == "Success!"
    details = debug["details"]
    assert details["spreadsheetTitle"] == "Vehicle Status"
    assert OFFLINE_10D_SHEET in details["missingSheets"]
    assert details["firstSheetName"] == OFFLINE_24H_SHEET
    assert len(details["sampleData"]) == 3


def test_check_connection_without_credentials() -> None:
    debug = SheetsClient(SheetsConfig()).check_connection()

    assert debug["success"] is False
    assert debug["error"] == "Missing environment variables"
    assert debug["details"]["hasEmail"] is False
    assert debug["details"]["emailValue"] == "Not found"


def test_check_connection_failure_names_step(broken_client) -> None:
    debug = broken_client.check_connection()

    assert debug["success"] is False
    assert debug["error"]["type"] == "PermissionError"
    assert debug["message"] == "Connection failed at step: Loading spreadsheet info"
