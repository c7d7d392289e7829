"""
Date and time-of-day helpers.

The backend speaks `YYYY-MM-DD` dates and `HH:MM[:SS]` times in local time.
Everything here works on those strings and on naive local datetimes.
"""
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DateLike = Union[str, date, datetime, None]


def to_ymd(value: Union[date, datetime]) -> str:
    return value.strftime("%Y-%m-%d")


def normalize_date(value: DateLike) -> str:
    """Reduce a date, datetime or ISO string to `YYYY-MM-DD` ('' if unusable)."""
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        return to_ymd(value)
    text = str(value).strip()
    if len(text) >= 10:
        head = text[:10]
        if parse_ymd(head) is not None:
            return head
    try:
        return to_ymd(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return ""


def parse_ymd(value: DateLike) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def normalize_time(value: Optional[str], default: str = "") -> str:
    """`HH:MM` -> `HH:MM:00`; longer values are kept; empty gives `default`."""
    if not value:
        return default
    text = str(value).strip()
    if len(text) == 5:
        return f"{text}:00"
    return text


def time_hhmm(value: Optional[str]) -> str:
    if not value:
        return ""
    return str(value)[:5]


def parse_time(value: Optional[str]):
    text = normalize_time(value)
    if not text:
        return None
    for fmt in ("%H:%M:%S", "%H:%M:%S.%f", "%H:%M"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def combine(day: DateLike, time_of_day: Optional[str]) -> Optional[datetime]:
    """Local datetime for a date and time string, or None when either fails to parse."""
    parsed_day = parse_ymd(normalize_date(day))
    parsed_time = parse_time(time_of_day)
    if parsed_day is None or parsed_time is None:
        return None
    return datetime.combine(parsed_day, parsed_time)


def time_of(moment: datetime) -> str:
    return moment.strftime("%H:%M:00")


def is_weekend(ymd: DateLike) -> bool:
    parsed = parse_ymd(normalize_date(ymd))
    if parsed is None:
        return False
    return parsed.weekday() >= 5


def add_days(ymd: str, days: int) -> str:
    parsed = parse_ymd(ymd)
    if parsed is None:
        return str(ymd)[:10]
    return to_ymd(parsed + timedelta(days=days))


def date_range(start_ymd: str, end_ymd: str) -> List[str]:
    """Every date from start to end inclusive; empty when unparseable or reversed."""
    start = parse_ymd(start_ymd)
    end = parse_ymd(end_ymd)
    if start is None or end is None or end < start:
        return []
    out = []
    current = start
    while current <= end:
        out.append(to_ymd(current))
        current += timedelta(days=1)
    return out


def is_within_range(target_ymd: str, start_ymd: str, end_ymd: Optional[str] = None) -> bool:
    if not target_ymd or not start_ymd:
        return False
    return start_ymd <= target_ymd <= (end_ymd or start_ymd)


def time_to_minutes(value: Optional[str]) -> int:
    if not value:
        return 0
    parts = str(value).split(":")
    try:
        hours = int(parts[0] or 0)
        minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError:
        return 0
    return hours * 60 + minutes


def minutes_to_hhmm(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def minutes_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def month_bounds(year: int, month: int):
    """First and last day (`YYYY-MM-DD`) of a month."""
    first = date(year, month, 1)
    if month == 12:
        last = date(year, 12, 31)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    return to_ymd(first), to_ymd(last)
