from datetime import datetime

import pytest

from app_lib.scheduling.views import (
    dashboard_counts,
    dashboard_upcoming,
    day_colors,
    events_by_host,
    events_on_day,
    filter_by_type,
    history_timeline,
    host_options,
    recent_events,
    upcoming_events,
    year_events,
)
from models.models import Cluster, User

NOW = datetime(2025, 6, 9, 12, 0)


@pytest.fixture
def events(make_event):
    return [
        make_event(id=1, title="Morning huddle", date="2025-06-09", start_time="08:00", end_time="09:00"),
        make_event(id=2, title="Lunch briefing", date="2025-06-09", start_time="11:30", end_time="13:00",
                   color="#ef4444"),
        make_event(id=3, title="Budget review", date="2025-06-12", location="Room 4", created_by=9),
        make_event(id=4, title="Training week", date="2025-06-16", end_date="2025-06-20", type="event"),
        make_event(id=5, title="Last week", date="2025-06-02"),
        make_event(id=6, title="Midyear summit", date="2025-07-01"),
    ]


def ids(events):
    return [e.id for e in events]


def test_upcoming_and_recent_split_on_now(events):
    assert ids(upcoming_events(events, NOW)) == [2, 3, 4, 6]
    assert ids(recent_events(events, NOW)) == [1, 5]


def test_search_is_case_insensitive(events):
    assert ids(upcoming_events(events, NOW, query="room 4")) == [3]
    assert ids(recent_events(events, NOW, query="HUDDLE")) == [1]


def test_year_search_covers_type(events):
    assert ids(year_events(events, "event")) == [4]
    assert ids(year_events(events)) == [5, 1, 2, 3, 4, 6]


def test_multi_day_event_appears_on_each_day(events):
    assert ids(events_on_day(events, "2025-06-18")) == [4]
    assert ids(events_on_day(events, "2025-06-09")) == [1, 2]


def test_events_by_host(events):
    assert ids(events_by_host(events, 9, NOW)) == [3]


def test_dashboard_counts(events):
    counts = dashboard_counts(events, NOW)
    assert (counts.today, counts.next_7_days, counts.next_30_days) == (2, 4, 5)


def test_dashboard_upcoming_limits_to_horizon(events):
    assert ids(dashboard_upcoming(events, NOW)) == [2, 3, 4]
    assert ids(dashboard_upcoming(events, NOW, limit=1)) == [2]


def test_day_colors(events, make_event):
    extra = make_event(id=7, date="2025-06-09", color="#ef4444")
    assert day_colors(events + [extra], "2025-06-09") == ["#3b82f6", "#ef4444"]
    assert day_colors(events, "2025-06-21") == []


def test_host_options_group_by_cluster():
    clusters = [
        Cluster(
            id=1,
            name="Office of the Secretary (OSEC)",
            color="#ef4444",
            account={"id": 30, "email": "cluster.osec@tesda.gov.ph"},
            offices=[
                {"name": "Planning Office (PLO)", "color": "#8b5cf6"},
                {"name": "Unknown Office"},
            ],
        ),
        Cluster(id=2, name="Empty cluster", offices=[{"name": "Nobody (XYZ)"}]),
    ]
    users = [
        User(id=30, email="cluster.osec@tesda.gov.ph"),
        User(id=12, email="plo@tesda.gov.ph"),
    ]
    groups = host_options(clusters, users)
    assert len(groups) == 1
    cluster_item, office_item = groups[0].items
    assert (cluster_item.short, cluster_item.account_id) == ("OSEC", 30)
    assert (office_item.short, office_item.account_id, office_item.color) == ("PLO", 12, "#8b5cf6")


def test_history_timeline_newest_first(make_event):
    event = make_event(
        created_at="2025-06-01T09:00:00Z",
        canceled_at="2025-06-05T10:00:00Z",
        cancel_reason="Venue unavailable",
        attachments=[{"original_name": "minutes.pdf", "is_post_document": 1,
                      "created_at": "2025-06-03T08:00:00Z"}],
        rsvps=[{"office_user_id": 9, "office_name": "PLO", "status": "accepted",
                "representative_name": "Ana", "responded_at": "2025-06-02T08:00:00Z"}],
    )
    texts = [item.text for item in history_timeline(event)]
    assert texts == [
        "Event cancelled: Venue unavailable",
        "Minutes of the Meeting uploaded: minutes.pdf",
        "PLO response: ACCEPTED (Ana)",
        "Event created.",
    ]


def test_filter_by_type(events):
    assert ids(filter_by_type(events, "event")) == [4]
    assert ids(filter_by_type(events, "zoom")) == []
    assert ids(filter_by_type(events, "all")) == [1, 2, 3, 4, 5, 6]
    assert ids(filter_by_type(events, None)) == [1, 2, 3, 4, 5, 6]
