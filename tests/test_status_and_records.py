import pandas as pd
import pytest

from core.records import (
    drop_blank_rows,
    filter_issue_records,
    frame_to_records,
    get_field,
    is_valid_client,
    normalize_row,
    records_frame,
)
from core.status import STATUS_CLOSED, STATUS_ON_HOLD, STATUS_OPEN, classify_record, classify_status, status_series


@pytest.mark.parametrize(
    "row, expected",
    [
        ({"Resolved Y/N": "Y"}, STATUS_CLOSED),
        ({"Resolved Y/N": " yes "}, STATUS_CLOSED),
        ({"Resolved Y/N": "N", "Next Follow Up Date": "10/10/2025"}, STATUS_ON_HOLD),
        ({"Resolved Y/N": "No", "Next Follow Up Date": "10/10/2025"}, STATUS_ON_HOLD),
        ({"Resolved Y/N": "N", "Next Follow Up Date": ""}, STATUS_OPEN),
        ({"Resolved Y/N": "", "Next Follow Up Date": ""}, STATUS_OPEN),
        ({"Resolved Y/N": "", "Next Follow Up Date": "10/10/2025"}, STATUS_OPEN),
        ({"Resolved Y/N": "maybe", "Next Follow Up Date": "10/10/2025"}, STATUS_OPEN),
        ({}, STATUS_OPEN),
    ],
)
def test_classify_record(row, expected) -> None:
    assert classify_record(row) == expected


def test_status_series_matches_row_classifier() -> None:
    rows = [
        {"Resolved Y/N": "Y"},
        {"Resolved Y/N": "n", "Next Follow Up Date": "01/01/2026"},
        {"Next Follow Up Date": "01/01/2026"},
    ]
    df = records_frame(rows)

    assert status_series(df).tolist() == [classify_record(r) for r in rows]
    assert classify_status(None, None) == STATUS_OPEN


def test_status_series_without_status_columns_is_all_open() -> None:
    df = records_frame([{"Client": "Acme"}, {"Client": "Globex"}])

    assert status_series(df).tolist() == [STATUS_OPEN, STATUS_OPEN]


def test_get_field_treats_absent_and_null_as_empty() -> None:
    row = {"Client": "  Acme ", "City": None}

    assert get_field(row, "Client") == "Acme"
    assert get_field(row, "City") == ""
    assert get_field(row, "Vehicle Number") == ""


def test_normalize_row_uses_headers_and_defaults_missing() -> None:
    assert normalize_row({"A": " 1 "}, headers=["A", "B"]) == {"A": "1", "B": ""}


def test_records_frame_fills_missing_cells_and_keeps_header_order() -> None:
    df = records_frame([{"B": "x"}, {"A": "y", "C": "z"}], headers=["A", "B"])

    assert list(df.columns) == ["A", "B", "C"]
    assert frame_to_records(df) == [{"A": "", "B": "x", "C": ""}, {"A": "y", "B": "", "C": "z"}]


def test_records_frame_empty_input_keeps_headers() -> None:
    df = records_frame([], headers=["A", "B"])

    assert df.empty
    assert list(df.columns) == ["A", "B"]


def test_drop_blank_rows() -> None:
    df = records_frame([{"A": "", "B": ""}, {"A": "x", "B": ""}])

    assert frame_to_records(drop_blank_rows(df)) == [{"A": "x", "B": ""}]


@pytest.mark.parametrize(
    "client, valid",
    [("", False), ("undefined", False), ("null", False), ("A", False), (" B ", False), ("AB", True), ("Acme", True)],
)
def test_is_valid_client(client, valid) -> None:
    assert is_valid_client(client) is valid


def test_filter_issue_records_drops_sheet_artifacts() -> None:
    df = pd.DataFrame({"Client": ["Acme", "", "undefined", "null", "X", "Globex"], "Issue": list("abcdef")})

    assert filter_issue_records(df)["Client"].tolist() == ["Acme", "Globex"]


def test_filter_issue_records_without_client_column_drops_everything() -> None:
    df = records_frame([{"Issue": "a"}])

    assert filter_issue_records(df).empty
