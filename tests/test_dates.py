from datetime import datetime

import pytest

from core.dates import MONTH_NAMES, age_band, calculate_age, month_name, parse_date


def test_parse_date_reads_slash_dates_day_first() -> None:
    parsed = parse_date("08/09/2025")

    assert parsed is not None
    assert (parsed.year, parsed.month - 1, parsed.day) == (2025, 8, 8)


def test_parse_date_drops_time_suffix_on_slash_dates() -> None:
    assert parse_date("08/09/2025 14:30:00") == datetime(2025, 9, 8)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-09-08", datetime(2025, 9, 8)),
        ("2025-09-08T10:00:00Z", datetime(2025, 9, 8, 10, 0)),
        (" 1/2/2024 ", datetime(2024, 2, 1)),
    ],
)
def test_parse_date_other_formats(value, expected) -> None:
    assert parse_date(value) == expected


def test_parse_date_rolls_day_overflow_into_next_month() -> None:
    assert parse_date("31/02/2025") == datetime(2025, 3, 3)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "aa/bb/cc", float("nan")])
def test_parse_date_returns_none_for_garbage(value) -> None:
    assert parse_date(value) is None


def test_month_name_ignores_year() -> None:
    assert month_name("15/03/2024") == "March"
    assert month_name("15/03/2019") == "March"
    assert month_name("nope") is None
    assert len(MONTH_NAMES) == 12


def test_calculate_age_now_and_ten_days_ago() -> None:
    now = datetime(2025, 9, 18)

    assert calculate_age("18/09/2025", now=now) == 0
    assert calculate_age("08/09/2025", now=now) == 10


def test_calculate_age_rounds_partial_days_up() -> None:
    assert calculate_age("08/09/2025", now=datetime(2025, 9, 8, 12)) == 1


def test_calculate_age_future_dates_are_not_clamped() -> None:
    assert calculate_age("08/09/2025", now=datetime(2025, 9, 1)) == -7


def test_calculate_age_unparseable_is_zero() -> None:
    assert calculate_age("garbage", now=datetime(2025, 9, 1)) == 0
    assert calculate_age("", now=datetime(2025, 9, 1)) == 0


def test_age_band_thresholds() -> None:
    assert age_band(7) == "fresh"
    assert age_band(8) == "aging"
    assert age_band(30) == "aging"
    assert age_band(31) == "stale"
