"""
Philippine regular holidays shown read-only on the calendar.
"""
import calendar
from datetime import date
from typing import Dict

from app_lib.utils.dates import parse_ymd, to_ymd

FIXED_HOLIDAYS = {
    (1, 1): "New Year's Day",
    (4, 9): "Araw ng Kagitingan",
    (5, 1): "Labor Day",
    (6, 12): "Independence Day",
    (11, 30): "Bonifacio Day",
    (12, 25): "Christmas Day",
    (12, 30): "Rizal Day",
}


def national_heroes_day(year: int) -> date:
    """Last Monday of August."""
    last = calendar.monthrange(year, 8)[1]
    day = date(year, 8, last)
    return date(year, 8, last - day.weekday())


def holidays_for_year(year: int) -> Dict[str, str]:
    out = {to_ymd(date(year, month, day)): name for (month, day), name in FIXED_HOLIDAYS.items()}
    out[to_ymd(national_heroes_day(year))] = "National Heroes Day"
    return dict(sorted(out.items()))


def holidays_between(start_ymd: str, end_ymd: str) -> Dict[str, str]:
    start, end = parse_ymd(start_ymd), parse_ymd(end_ymd)
    if start is None or end is None or end < start:
        return {}
    found = {}
    for year in range(start.year, end.year + 1):
        for day, name in holidays_for_year(year).items():
            if start_ymd[:10] <= day <= end_ymd[:10]:
                found[day] = name
    return found

