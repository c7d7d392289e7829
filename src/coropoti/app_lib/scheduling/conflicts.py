"""
Conflict display helpers: pair de-duplication and interval overlap.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from app_lib.scheduling.status import is_done_at
from app_lib.utils.dates import minutes_to_hhmm, time_hhmm, time_to_minutes
from models.models import ConflictCandidate, ConflictRow


def pair_key(event_id: int, other_id: int) -> Tuple[int, int]:
    a, b = int(event_id), int(other_id)
    return (a, b) if a <= b else (b, a)


def dedupe_conflicts(rows: Iterable[ConflictRow], now: datetime) -> List[ConflictRow]:
    """
    Collapse symmetric pairs (A, B) == (B, A) and drop pairs where either
    event has already ended. First occurrence of each pair wins.
    """
    seen = set()
    out: List[ConflictRow] = []
    for row in rows:
        if is_done_at(row.event_date, row.event_end, now):
            continue
        if is_done_at(row.conflicting_date, row.conflicting_end, now):
            continue
        key = pair_key(row.event_id, row.conflicting_event_id)
        if key in seen:
            continue
        seen.add(key)
        out.append(row)
    return out


def conflict_kinds(row: ConflictRow) -> List[str]:
    kinds = []
    if row.time_conflict:
        kinds.append("time")
    if row.participant_conflict:
        kinds.append("participants")
    return kinds


def overlap_range(
    candidate_start: str,
    candidate_end: str,
    other_start: str,
    other_end: str,
) -> Optional[Tuple[str, str]]:
    """Shared `HH:MM` sub-range of two time ranges on the same day, or None."""
    start = max(time_to_minutes(candidate_start), time_to_minutes(other_start))
    end = min(time_to_minutes(candidate_end), time_to_minutes(other_end))
    if start >= end:
        return None
    return minutes_to_hhmm(start), minutes_to_hhmm(end)


@dataclass(frozen=True)
class ConflictWarning:
    """One line of the event form's conflict panel."""
    candidate: ConflictCandidate
    other_start: str
    other_end: str
    overlap: Optional[Tuple[str, str]]


def build_conflict_warnings(
    candidates: Iterable[ConflictCandidate],
    start_time: str,
    end_time: str,
) -> List[ConflictWarning]:
    warnings = []
    for candidate in candidates:
        other_start = time_hhmm(candidate.start_time)
        other_end = time_hhmm(candidate.end_time)
        warnings.append(ConflictWarning(
            candidate=candidate,
            other_start=other_start,
            other_end=other_end,
            overlap=overlap_range(start_time, end_time, other_start, other_end),
        ))
    return warnings
