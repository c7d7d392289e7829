import re
from datetime import datetime
from typing import List, Optional

from app_lib.utils.dates import parse_ymd


def format_time(value: Optional[str]) -> str:
    """`13:05:00` -> `1:05 PM`"""
    if not value:
        return ""
    parts = str(value).split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return str(value)
    minute = (parts[1] if len(parts) > 1 and parts[1] else "00").zfill(2)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute} {suffix}"


def format_time_range(start: Optional[str], end: Optional[str]) -> str:
    return f"{format_time(start)} – {format_time(end)}"


def format_date(value: Optional[str], long: bool = False) -> str:
    parsed = parse_ymd(value)
    if parsed is None:
        return "N/A"
    if long:
        return f"{parsed.strftime('%A, %B')} {parsed.day}, {parsed.year}"
    return f"{parsed.strftime('%a, %b')} {parsed.day}, {parsed.year}"


def format_date_range(start: Optional[str], end: Optional[str] = None, long: bool = False) -> str:
    start_ymd = str(start or "")[:10]
    end_ymd = str(end or start or "")[:10]
    if not start_ymd:
        return "N/A"
    if not end_ymd or end_ymd == start_ymd:
        return format_date(start_ymd, long=long)
    return f"{format_date(start_ymd, long=long)} - {format_date(end_ymd, long=long)}"


def format_datetime(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return ""
    return f"{moment.strftime('%b')} {moment.day}, {moment.year} {format_time(moment.strftime('%H:%M'))}"


def pretty_status(value: Optional[str]) -> str:
    text = str(value or "")
    return text[:1].upper() + text[1:]


def acronym_from_name(full_name: Optional[str]) -> str:
    """Office acronym: a trailing parenthetical wins, else initials of up to six words."""
    raw = str(full_name or "").strip()
    if not raw:
        return ""
    parenthetical = re.search(r"\(([^()]+)\)$", raw)
    if parenthetical:
        return parenthetical.group(1).strip().upper()
    words = raw.split()
    return "".join(word[0].upper() for word in words[:6]) or raw[:8].upper()


def participants_acronyms(summary: Optional[str]) -> str:
    if not summary or not str(summary).strip():
        return "TBA"
    names = [name.strip() for name in str(summary).split(",") if name.strip()]
    if not names:
        return "TBA"
    return ", ".join(acronym_from_name(name) for name in names)


def cluster_short_label(name: Optional[str]) -> str:
    raw = str(name or "").strip()
    if not raw:
        return "CLUSTER"
    paren = re.search(r"\(([^()]+)\)\s*$", raw)
    if paren:
        return paren.group(1).strip().upper()
    return acronym_from_name(raw)


def extract_codes_from_name(name: Optional[str]) -> List[str]:
    """Candidate office codes in a display name: parenthetical tokens, then all-caps words."""
    text = str(name or "").strip()
    if not text:
        return []
    codes: List[str] = []
    for inner in re.findall(r"\(([^()]+)\)", text):
        for token in re.split(r"[/,]", inner):
            code = token.strip().upper()
            if code and len(code) <= 16 and code not in codes:
                codes.append(code)
    for word in re.findall(r"\b[A-Z]{2,10}\b", text):
        if word not in codes:
            codes.append(word)
    return codes
