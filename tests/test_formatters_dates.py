from datetime import datetime

import pytest

from app_lib.utils.dates import (
    add_days,
    combine,
    date_range,
    is_weekend,
    month_bounds,
    normalize_date,
    normalize_time,
    time_to_minutes,
)
from app_lib.utils.formatters import (
    acronym_from_name,
    cluster_short_label,
    extract_codes_from_name,
    format_date_range,
    format_time,
    participants_acronyms,
)


@pytest.mark.parametrize("value, expected", [
    ("2025-06-10", "2025-06-10"),
    ("2025-06-10T16:00:00.000Z", "2025-06-10"),
    (datetime(2025, 6, 10, 9, 0), "2025-06-10"),
    ("", ""),
    ("not a date", ""),
])
def test_normalize_date(value, expected):
    assert normalize_date(value) == expected


def test_time_helpers():
    assert normalize_time("09:00") == "09:00:00"
    assert normalize_time("", default="08:00:00") == "08:00:00"
    assert time_to_minutes("13:05:00") == 785
    assert combine("2025-06-10", "13:05") == datetime(2025, 6, 10, 13, 5)
    assert combine("2025-06-10", "") is None


def test_date_helpers():
    assert is_weekend("2025-06-14") and is_weekend("2025-06-15")
    assert not is_weekend("2025-06-13")
    assert date_range("2025-06-30", "2025-07-02") == ["2025-06-30", "2025-07-01", "2025-07-02"]
    assert date_range("2025-06-02", "2025-06-01") == []
    assert add_days("2025-12-31", 1) == "2026-01-01"
    assert month_bounds(2024, 2) == ("2024-02-01", "2024-02-29")
    assert month_bounds(2025, 12) == ("2025-12-01", "2025-12-31")


def test_format_time():
    assert format_time("00:15:00") == "12:15 AM"
    assert format_time("13:05:00") == "1:05 PM"
    assert format_time("") == ""


def test_format_date_range():
    assert format_date_range("2025-06-10") == "Tue, Jun 10, 2025"
    assert format_date_range("2025-06-10", "2025-06-11") == "Tue, Jun 10, 2025 - Wed, Jun 11, 2025"
    assert format_date_range(None) == "N/A"


def test_office_labels():
    assert acronym_from_name("Planning Office (PLO)") == "PLO"
    assert acronym_from_name("Public Information Office") == "PIO"
    assert participants_acronyms("") == "TBA"
    assert participants_acronyms("Planning Office (PLO), Qualifications Office") == "PLO, QO"
    assert cluster_short_label("") == "CLUSTER"
    assert extract_codes_from_name("Regional Office (RO/PO) ICTO") == ["RO", "PO", "ICTO"]
