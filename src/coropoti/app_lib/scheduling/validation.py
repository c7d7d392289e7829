"""
Event form validation.

Checks run in a fixed order and the first failure is raised as a
ValidationException, so nothing is sent when the form is invalid.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from app_lib.exceptions import ValidationException
from app_lib.scheduling.tentative import build_tentative_description
from app_lib.utils.dates import date_range, is_weekend, normalize_time, parse_time
from config.constants import ERROR_MESSAGES
from models.models import EventPayload, EventType


@dataclass
class EventForm:
    title: str = ""
    type: str = EventType.MEETING.value
    date: str = ""
    end_date: str = ""
    start_time: str = "09:00"
    end_time: str = "10:00"
    location: str = ""
    description: str = ""
    is_tentative: bool = False
    tentative_note: str = ""
    color: Optional[str] = None
    attendee_ids: List[int] = field(default_factory=list)

    def conflict_query(self, is_edit: bool = False, exclude_event_id=None) -> Optional[dict]:
        """Body for the conflict pre-check, or None while date/times are incomplete."""
        if not self.date or not self.start_time or not self.end_time:
            return None
        body = {
            "date": self.date,
            "start_time": normalize_time(self.start_time),
            "end_time": normalize_time(self.end_time),
        }
        if not is_edit and self.end_date:
            body["end_date"] = self.end_date
        if is_edit and exclude_event_id is not None:
            body["exclude_event_id"] = exclude_event_id
        return body

    def to_payload(self, is_edit: bool = False) -> EventPayload:
        return EventPayload(
            title=self.title.strip(),
            type=self.type,
            date=self.date,
            end_date=None if is_edit else (self.end_date or None),
            start_time=normalize_time(self.start_time),
            end_time=normalize_time(self.end_time),
            location=self.location.strip() or None,
            description=build_tentative_description(self.is_tentative, self.tentative_note, self.description),
            color=self.color or None,
            attendee_ids=list(self.attendee_ids) or None,
        )


def validate_event_form(
    form: EventForm,
    is_edit: bool = False,
    original_date: Optional[str] = None,
    conflicts: Sequence = (),
) -> EventPayload:
    if not form.title.strip():
        raise ValidationException("Title is required.", field="title")
    if not form.date:
        raise ValidationException("Date is required.", field="date")

    if not is_edit:
        if not form.end_date:
            raise ValidationException("End date is required.", field="end_date")
        if form.end_date < form.date:
            raise ValidationException("End date must be the same as or after start date.", field="end_date")
        if any(is_weekend(day) for day in date_range(form.date, form.end_date)):
            raise ValidationException(ERROR_MESSAGES["weekend_range"], field="date")
    elif is_weekend(form.date) and form.date != original_date:
        # An event already on a weekend may keep its date
        raise ValidationException(ERROR_MESSAGES["weekend_locked"], field="date")

    if not form.start_time or not form.end_time:
        raise ValidationException("Start and end time are required.", field="start_time")
    start = parse_time(form.start_time)
    end = parse_time(form.end_time)
    if start is None or end is None or end <= start:
        raise ValidationException("End time must be after start time.", field="end_time")

    if conflicts:
        raise ValidationException(
            "Selected time conflicts with existing event(s). Please adjust the time.",
            field="start_time",
        )
    return form.to_payload(is_edit=is_edit)
