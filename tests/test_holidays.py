from app_lib.scheduling.holidays import (
    holidays_between,
    holidays_for_year,
    national_heroes_day,
)


def test_national_heroes_day_is_last_monday_of_august():
    assert national_heroes_day(2025).isoformat() == "2025-08-25"
    assert national_heroes_day(2024).isoformat() == "2024-08-26"


def test_holidays_for_year():
    days = holidays_for_year(2025)
    assert days["2025-06-12"] == "Independence Day"
    assert days["2025-08-25"] == "National Heroes Day"
    assert list(days) == sorted(days)


def test_holidays_between_spans_years():
    found = holidays_between("2025-12-20", "2026-01-05")
    assert list(found) == ["2025-12-25", "2025-12-30", "2026-01-01"]
    assert holidays_between("2025-06-30", "2025-06-01") == {}


def test_holidays_between_accepts_iso_bounds():
    found = holidays_between("2025-06-01T00:00:00", "2025-06-30T23:59:59")
    assert found == {"2025-06-12": "Independence Day"}
