"""
Client-side event status.

Derived on every render from the stored status, the date/time fields and the
clock; never cached across time.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app_lib.utils.dates import combine
from models.models import DerivedStatus, Event, EventStatus

STATUS_LABELS = {
    DerivedStatus.CANCELLED: "Cancelled",
    DerivedStatus.DONE: "Done",
    DerivedStatus.ONGOING: "Ongoing",
    DerivedStatus.ACTIVE: "Active",
}


@dataclass(frozen=True)
class StatusInfo:
    status: DerivedStatus
    start_at: Optional[datetime]
    end_at: Optional[datetime]
    response_locked: bool
    edit_locked: bool

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.status]

    @property
    def is_done(self) -> bool:
        return self.status == DerivedStatus.DONE


def event_bounds(event: Event):
    start_at = combine(event.date, event.start_time)
    end_at = combine(event.effective_end_date, event.end_time)
    return start_at, end_at


def derive_status(event: Event, now: datetime) -> StatusInfo:
    start_at, end_at = event_bounds(event)
    started = start_at is not None and now >= start_at
    ended = end_at is not None and now >= end_at

    if event.status == EventStatus.CANCELLED:
        status = DerivedStatus.CANCELLED
    elif ended:
        status = DerivedStatus.DONE
    elif started:
        status = DerivedStatus.ONGOING
    else:
        status = DerivedStatus.ACTIVE

    return StatusInfo(
        status=status,
        start_at=start_at,
        end_at=end_at,
        response_locked=started,
        edit_locked=status in (DerivedStatus.DONE, DerivedStatus.CANCELLED),
    )


def is_event_done(event: Event, now: datetime) -> bool:
    """True once the event's end has passed, whatever its stored status."""
    _, end_at = event_bounds(event)
    return end_at is not None and now >= end_at


def is_done_at(day: Optional[str], end_time: Optional[str], now: datetime) -> bool:
    if not day or not end_time:
        return False
    end_at = combine(day, end_time)
    return end_at is not None and now >= end_at
