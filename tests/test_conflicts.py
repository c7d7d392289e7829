from datetime import datetime

from app_lib.scheduling.conflicts import (
    build_conflict_warnings,
    conflict_kinds,
    dedupe_conflicts,
    overlap_range,
    pair_key,
)
from models.models import ConflictCandidate, ConflictRow

NOW = datetime(2025, 6, 9, 8, 0)


def row(event_id, other_id, **extra):
    data = {
        "event_id": event_id,
        "conflicting_event_id": other_id,
        "event_date": "2025-06-10",
        "event_start": "09:00:00",
        "event_end": "10:00:00",
        "conflicting_date": "2025-06-10",
        "conflicting_start": "09:30:00",
        "conflicting_end": "11:00:00",
        "time_conflict": True,
    }
    data.update(extra)
    return ConflictRow(**data)


def test_symmetric_pairs_collapse():
    result = dedupe_conflicts([row(1, 2), row(2, 1)], NOW)
    assert len(result) == 1
    assert (result[0].event_id, result[0].conflicting_event_id) == (1, 2)


def test_distinct_pairs_keep_order():
    result = dedupe_conflicts([row(3, 4), row(1, 2), row(4, 3), row(2, 1)], NOW)
    assert [pair_key(r.event_id, r.conflicting_event_id) for r in result] == [(3, 4), (1, 2)]


def test_pairs_with_a_finished_side_are_dropped():
    rows = [
        row(1, 2, event_date="2025-06-06", event_end="10:00:00"),
        row(3, 4, conflicting_date="2025-06-09", conflicting_end="07:30:00"),
        row(5, 6),
    ]
    result = dedupe_conflicts(rows, NOW)
    assert [r.event_id for r in result] == [5]


def test_done_rows_do_not_hide_a_live_duplicate():
    rows = [
        row(1, 2, event_date="2025-06-01"),
        row(2, 1, event_date="2025-06-10", conflicting_date="2025-06-10"),
    ]
    result = dedupe_conflicts(rows, NOW)
    assert len(result) == 1
    assert result[0].event_id == 2


def test_conflict_kinds():
    assert conflict_kinds(row(1, 2, participant_conflict=True)) == ["time", "participants"]
    assert conflict_kinds(row(1, 2, time_conflict=False)) == []


def test_overlap_range():
    assert overlap_range("09:00", "10:00", "09:30", "11:00") == ("09:30", "10:00")
    assert overlap_range("09:00:00", "12:00:00", "10:00:00", "11:00:00") == ("10:00", "11:00")
    assert overlap_range("09:00", "10:00", "10:00", "11:00") is None
    assert overlap_range("13:00", "14:00", "09:00", "10:00") is None


def test_build_conflict_warnings():
    candidate = ConflictCandidate(id=5, title="Budget review", date="2025-06-10",
                                  start_time="09:30:00", end_time="11:00:00")
    [warning] = build_conflict_warnings([candidate], "09:00", "10:00")
    assert warning.other_start == "09:30"
    assert warning.other_end == "11:00"
    assert warning.overlap == ("09:30", "10:00")
