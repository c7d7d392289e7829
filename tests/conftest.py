from datetime import datetime
from unittest import mock

import pytest

from app_lib.scheduling.clock import FixedClock, set_clock
from app_lib.scheduling.permissions import PermissionTable
from models.models import Event, User

READ_ONLY_EMAILS = ["po@tesda.gov.ph", "plo@tesda.gov.ph"]


@pytest.fixture
def clock():
    """A pinned clock installed app-wide: Monday 2025-06-09 08:00."""
    fixed = FixedClock(datetime(2025, 6, 9, 8, 0))
    set_clock(fixed)
    try:
        yield fixed
    finally:
        set_clock(None)


@pytest.fixture
def make_event():
    def _make(**overrides):
        data = {
            "id": 1,
            "title": "Quarterly planning",
            "type": "meeting",
            "date": "2025-06-10",
            "start_time": "09:00:00",
            "end_time": "10:00:00",
            "created_by": 7,
            "status": "active",
        }
        data.update(overrides)
        return Event(**data)
    return _make


@pytest.fixture
def admin():
    return User(id=1, name="Admin", email="admin@tesda.gov.ph", role="admin")


@pytest.fixture
def host():
    return User(id=7, name="Host Office", email="host@tesda.gov.ph", role="user")


@pytest.fixture
def other_user():
    return User(id=9, name="Other Office", email="other@tesda.gov.ph", role="user")


@pytest.fixture
def read_only_host():
    # Same id as the event creator, but a read-only office account
    return User(id=7, name="Planning Office", email="PLO@tesda.gov.ph", role="user")


@pytest.fixture
def permissions():
    return PermissionTable(read_only_emails=READ_ONLY_EMAILS)


@pytest.fixture
def api():
    """Stand-in for the API client used by the services."""
    return mock.MagicMock()
