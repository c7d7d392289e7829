"""
List filters behind the dashboard, upcoming, recent, year and day pages,
plus the host filter options and the event history timeline.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from app_lib.utils.dates import is_within_range, minutes_of_day, time_to_minutes, to_ymd
from app_lib.utils.formatters import cluster_short_label, extract_codes_from_name
from config.constants import DEFAULT_EVENT_COLOR, LEGEND_FALLBACK_COLOR, UPCOMING_HORIZON_DAYS
from models.models import Cluster, Event, User


def _start_key(event: Event) -> str:
    return f"{event.date or ''}{event.start_time or ''}"


def sort_events(events: Iterable[Event], reverse: bool = False) -> List[Event]:
    return sorted(events, key=_start_key, reverse=reverse)


def _matches(event: Event, needle: str, fields: Sequence[str]) -> bool:
    if not needle:
        return True
    values = []
    for name in fields:
        value = getattr(event, name, None)
        if hasattr(value, "value"):
            value = value.value
        if value:
            values.append(str(value))
    return needle in " ".join(values).lower()


def search_events(events: Iterable[Event], query: str, fields: Sequence[str] = ("title", "location", "description")) -> List[Event]:
    needle = (query or "").strip().lower()
    return [e for e in events if _matches(e, needle, fields)]


def upcoming_events(events: Iterable[Event], now: datetime, query: str = "") -> List[Event]:
    """Events after today, or today and not yet ended; soonest first."""
    today, minutes = to_ymd(now), minutes_of_day(now)
    kept = [
        e for e in events
        if e.date > today or (e.date == today and time_to_minutes(e.end_time) > minutes)
    ]
    return sort_events(search_events(kept, query))


def recent_events(events: Iterable[Event], now: datetime, query: str = "") -> List[Event]:
    """Events before today, or today and already ended; latest first."""
    today, minutes = to_ymd(now), minutes_of_day(now)
    kept = [
        e for e in events
        if e.date < today or (e.date == today and time_to_minutes(e.end_time) <= minutes)
    ]
    return sort_events(search_events(kept, query), reverse=True)


YEAR_SEARCH_FIELDS = ("title", "location", "description", "creator_name", "participants_summary", "type")


def year_events(events: Iterable[Event], query: str = "") -> List[Event]:
    return sort_events(search_events(events, query, YEAR_SEARCH_FIELDS))


def filter_by_type(events: Iterable[Event], event_type: Optional[str] = None) -> List[Event]:
    """Events of one type; "all" or nothing keeps every event."""
    if not event_type or event_type == "all":
        return list(events)
    return [e for e in events if e.type.value == event_type]


def events_on_day(events: Iterable[Event], day: str) -> List[Event]:
    return sort_events(e for e in events if is_within_range(day, e.date, e.effective_end_date))


def events_by_host(events: Iterable[Event], host_id: int, now: datetime) -> List[Event]:
    return [e for e in upcoming_events(events, now) if e.created_by is not None and int(e.created_by) == int(host_id)]


# Dashboard

@dataclass(frozen=True)
class DashboardCounts:
    today: int
    next_7_days: int
    next_30_days: int


def _overlapping(events: Sequence[Event], start: str, end: str) -> int:
    return sum(1 for e in events if e.effective_end_date >= start and e.date <= end)


def dashboard_counts(events: Iterable[Event], now: datetime) -> DashboardCounts:
    events = list(events)
    today = to_ymd(now)
    return DashboardCounts(
        today=sum(1 for e in events if is_within_range(today, e.date, e.effective_end_date)),
        next_7_days=_overlapping(events, today, to_ymd(now + timedelta(days=7))),
        next_30_days=_overlapping(events, today, to_ymd(now + timedelta(days=30))),
    )


def dashboard_upcoming(events: Iterable[Event], now: datetime, limit: int = 5) -> List[Event]:
    """Starts within the horizon and has not finished yet."""
    today, minutes = to_ymd(now), minutes_of_day(now)
    horizon = to_ymd(now + timedelta(days=UPCOMING_HORIZON_DAYS))
    kept = []
    for e in events:
        end_date = e.effective_end_date
        still_today = end_date == today and time_to_minutes(e.end_time) > minutes
        if e.date <= horizon and (still_today or end_date > today):
            kept.append(e)
    return sort_events(kept)[:limit]


def day_colors(events: Iterable[Event], day: str, limit: int = 3) -> List[str]:
    """Distinct event colors on a day, in first-seen order, for the mini month."""
    colors: List[str] = []
    for e in events:
        if not is_within_range(day, e.date, e.effective_end_date):
            continue
        color = e.color or DEFAULT_EVENT_COLOR
        if color not in colors:
            colors.append(color)
    return colors[:limit]


# Host filter

@dataclass(frozen=True)
class HostOption:
    key: str
    label: str
    short: str
    color: str
    account_id: int


@dataclass
class HostGroup:
    cluster_id: int
    cluster_name: str
    items: List[HostOption] = field(default_factory=list)


def host_options(clusters: Iterable[Cluster], users: Iterable[User]) -> List[HostGroup]:
    """
    Hosts grouped by cluster: the cluster's own account first, then each
    office whose code matches a user's email local part.
    """
    by_local: Dict[str, User] = {}
    for user in users:
        email = user.email_lower
        if "@" in email:
            by_local[email.split("@")[0]] = user

    groups = []
    for cluster in clusters:
        group = HostGroup(cluster_id=cluster.id, cluster_name=cluster.name)
        account_id = cluster.account.id if cluster.account else None
        if account_id and account_id > 0:
            group.items.append(HostOption(
                key=f"{cluster.id}-cluster",
                label=cluster.name,
                short=cluster_short_label(cluster.name),
                color=cluster.color or LEGEND_FALLBACK_COLOR,
                account_id=int(account_id),
            ))
        for office in cluster.offices:
            matched = None
            for code in extract_codes_from_name(office.name):
                user = by_local.get(code.lower())
                if user and not user.email_lower.startswith("cluster."):
                    matched = user
                    break
            if matched is None or matched.id <= 0:
                continue
            group.items.append(HostOption(
                key=f"{cluster.id}-{office.name}",
                label=office.name,
                short=cluster_short_label(office.name),
                color=office.color or cluster.color or LEGEND_FALLBACK_COLOR,
                account_id=int(matched.id),
            ))
        if group.items:
            groups.append(group)
    return groups


# History

@dataclass(frozen=True)
class HistoryItem:
    when: str
    text: str


def _when_key(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def history_timeline(event: Event) -> List[HistoryItem]:
    """Dated history entries for an event, newest first."""
    items: List[HistoryItem] = []
    if event.created_at:
        items.append(HistoryItem(event.created_at, "Event created."))
    if event.canceled_at:
        suffix = f": {event.cancel_reason}" if event.cancel_reason else "."
        items.append(HistoryItem(event.canceled_at, f"Event cancelled{suffix}"))
    linked_when = event.updated_at or event.created_at
    if event.rescheduled_from_event and linked_when:
        items.append(HistoryItem(linked_when, f"Rescheduled from: {event.rescheduled_from_event.title}"))
    if event.rescheduled_to_event and linked_when:
        items.append(HistoryItem(linked_when, f"Rescheduled to: {event.rescheduled_to_event.title}"))
    label = event.post_document_label
    for attachment in event.post_documents:
        if attachment.created_at:
            items.append(HistoryItem(attachment.created_at, f"{label} uploaded: {attachment.original_name}"))
    for rsvp in event.rsvps:
        if not rsvp.responded_at:
            continue
        rep = f" ({rsvp.representative_name})" if rsvp.representative_name else ""
        items.append(HistoryItem(
            rsvp.responded_at,
            f"{rsvp.office_name or 'Office'} response: {rsvp.status.value.upper()}{rep}",
        ))
    dated = [(item, _when_key(item.when)) for item in items]
    dated = [pair for pair in dated if pair[1] is not None]
    dated.sort(key=lambda pair: pair[1], reverse=True)
    return [item for item, _ in dated]
