from datetime import datetime

import pytest

from app_lib.scheduling.status import derive_status, is_done_at, is_event_done
from models.models import DerivedStatus


@pytest.mark.parametrize("now, expected", [
    (datetime(2025, 6, 10, 8, 59), DerivedStatus.ACTIVE),
    (datetime(2025, 6, 10, 9, 0), DerivedStatus.ONGOING),
    (datetime(2025, 6, 10, 9, 59), DerivedStatus.ONGOING),
    (datetime(2025, 6, 10, 10, 0), DerivedStatus.DONE),
    (datetime(2025, 6, 11, 0, 0), DerivedStatus.DONE),
])
def test_status_follows_the_clock(make_event, now, expected):
    assert derive_status(make_event(), now).status == expected


@pytest.mark.parametrize("now", [
    datetime(2025, 6, 10, 8, 0),
    datetime(2025, 6, 10, 9, 30),
    datetime(2025, 6, 10, 12, 0),
])
def test_cancelled_overrides_everything(make_event, now):
    info = derive_status(make_event(status="cancelled"), now)
    assert info.status == DerivedStatus.CANCELLED
    assert info.edit_locked is True


def test_locks(make_event):
    event = make_event()
    before = derive_status(event, datetime(2025, 6, 10, 8, 0))
    assert not before.response_locked and not before.edit_locked

    during = derive_status(event, datetime(2025, 6, 10, 9, 15))
    assert during.response_locked and not during.edit_locked

    after = derive_status(event, datetime(2025, 6, 10, 10, 0))
    assert after.response_locked and after.edit_locked
    assert after.label == "Done"


def test_unparseable_times_fail_open(make_event):
    info = derive_status(make_event(start_time="later", end_time=""), datetime(2030, 1, 1))
    assert info.status == DerivedStatus.ACTIVE
    assert not info.response_locked and not info.edit_locked


def test_multi_day_uses_end_date(make_event):
    event = make_event(end_date="2025-06-12")
    assert derive_status(event, datetime(2025, 6, 11, 12, 0)).status == DerivedStatus.ONGOING
    assert not is_event_done(event, datetime(2025, 6, 12, 9, 59))
    assert is_event_done(event, datetime(2025, 6, 12, 10, 0))


def test_is_done_at():
    now = datetime(2025, 6, 10, 12, 0)
    assert is_done_at("2025-06-10", "10:00:00", now)
    assert not is_done_at("2025-06-10", "13:00:00", now)
    assert not is_done_at(None, "10:00:00", now)
