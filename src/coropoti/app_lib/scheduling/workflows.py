"""
Per-event workflow rules shown in the event modal and details page:
RSVP responses, admin cancel/reschedule and post-event documents.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from app_lib.exceptions import ValidationException
from app_lib.scheduling.permissions import PermissionTable, permission_table
from app_lib.scheduling.status import derive_status
from app_lib.utils.dates import date_range, is_weekend, parse_ymd
from config.constants import ERROR_MESSAGES
from models.models import (
    CancelMode,
    CancelRequest,
    DerivedStatus,
    Event,
    RsvpRequest,
    RsvpStatus,
    User,
)


@dataclass
class RsvpForm:
    """An invited office's pending response to one event."""
    event: Event
    user: Optional[User]
    status: Optional[RsvpStatus] = None
    representative_name: str = ""
    decline_reason: str = ""

    def is_invited(self) -> bool:
        return self.user is not None and self.event.rsvp_for(self.user.id) is not None

    def is_open(self, now: datetime) -> bool:
        """Responses are accepted until the event starts, and only once."""
        if not self.is_invited():
            return False
        if derive_status(self.event, now).response_locked:
            return False
        return self.event.rsvp_for(self.user.id).status == RsvpStatus.PENDING

    def can_submit(self, now: datetime) -> bool:
        try:
            self.validate(now)
        except ValidationException:
            return False
        return True

    def validate(self, now: datetime) -> RsvpRequest:
        if not self.is_invited():
            raise ValidationException("You are not invited to this event.")
        if derive_status(self.event, now).response_locked:
            raise ValidationException("Response locked (event started).")
        if self.event.rsvp_for(self.user.id).status != RsvpStatus.PENDING:
            raise ValidationException("You have already responded to this invitation.")

        if self.status == RsvpStatus.ACCEPTED:
            name = self.representative_name.strip()
            if not name:
                raise ValidationException("Representative name is required.", field="representative_name")
            return RsvpRequest(status=RsvpStatus.ACCEPTED, representative_name=name)
        if self.status == RsvpStatus.DECLINED:
            reason = self.decline_reason.strip()
            if not reason:
                raise ValidationException("Decline reason is required.", field="decline_reason")
            return RsvpRequest(status=RsvpStatus.DECLINED, decline_reason=reason)
        raise ValidationException("Choose to accept or decline.", field="status")


# Cancel / reschedule

_CANCEL_COPY = {
    CancelMode.CANCEL: {
        "title": "Cancel event",
        "message": "This event will be marked as cancelled and becomes view-only. Invited offices will see the cancellation.",
        "confirm": "Cancel event",
        "dismiss": "Keep event",
        "success": "Event cancelled.",
    },
    CancelMode.RESCHEDULE: {
        "title": "Reschedule event",
        "message": "This event will be cancelled and a new event will be created on the new date.",
        "confirm": "Reschedule",
        "dismiss": "Back",
        "success": "Event rescheduled.",
    },
}


def cancel_dialog_copy(mode) -> Dict[str, str]:
    return dict(_CANCEL_COPY[CancelMode(mode)])


def can_cancel(event: Event, user: Optional[User], now: datetime) -> bool:
    """Admins only, and only while the event is still active or ongoing."""
    if user is None or not user.is_admin:
        return False
    return not derive_status(event, now).edit_locked


def build_cancel_request(
    mode,
    reason: Optional[str] = None,
    new_date: Optional[str] = None,
    new_end_date: Optional[str] = None,
) -> CancelRequest:
    mode = CancelMode(mode)
    clean_reason = (reason or "").strip() or None
    if mode == CancelMode.CANCEL:
        return CancelRequest(mode=mode, reason=clean_reason)

    if not parse_ymd(new_date):
        raise ValidationException("New start date is required to reschedule.", field="new_date")
    end = new_end_date or None
    if end and end < new_date:
        raise ValidationException("New end date must be the same as or after the new start date.", field="new_end_date")
    if any(is_weekend(day) for day in date_range(new_date, end or new_date)):
        raise ValidationException(ERROR_MESSAGES["weekend_range"], field="new_date")
    return CancelRequest(mode=mode, reason=clean_reason, new_date=new_date, new_end_date=end)


# Post-event documents

def can_upload_post_document(
    event: Event,
    user: Optional[User],
    now: datetime,
    permissions: Optional[PermissionTable] = None,
) -> bool:
    """Host only, after the event is done, never for cancelled events."""
    table = permissions or permission_table
    if not table.is_creator(user, event):
        return False
    return derive_status(event, now).status == DerivedStatus.DONE


def can_delete(
    event: Event,
    user: Optional[User],
    now: datetime,
    permissions: Optional[PermissionTable] = None,
) -> bool:
    table = permissions or permission_table
    if not table.for_event(user, event).can_delete:
        return False
    return not derive_status(event, now).is_done


def can_edit(
    event: Event,
    user: Optional[User],
    now: datetime,
    permissions: Optional[PermissionTable] = None,
) -> bool:
    table = permissions or permission_table
    if not table.for_event(user, event).can_edit:
        return False
    return not derive_status(event, now).edit_locked
