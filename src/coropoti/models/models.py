import json
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from enum import Enum

from app_lib.utils.dates import normalize_date, normalize_time, parse_ymd
from config.constants import DEFAULT_POST_DOCUMENT_LABEL, POST_DOCUMENT_LABELS


# Enums
class EventType(str, Enum):
    """Kinds of schedule entries"""
    MEETING = "meeting"
    ZOOM = "zoom"
    EVENT = "event"


class EventStatus(str, Enum):
    """Stored event status"""
    ACTIVE = "active"
    CANCELLED = "cancelled"


class DerivedStatus(str, Enum):
    """Status computed on the client from dates, times and the clock"""
    CANCELLED = "cancelled"
    DONE = "done"
    ONGOING = "ongoing"
    ACTIVE = "active"


class RsvpStatus(str, Enum):
    """Invited office response"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class CancelMode(str, Enum):
    CANCEL = "cancel"
    RESCHEDULE = "reschedule"


def _normalized_date(value):
    return normalize_date(value) or None


def _lower(value) -> str:
    if isinstance(value, Enum):
        return value.value
    return str(value).lower()


# User / directory models
class User(BaseModel):
    """Authenticated account (an office or an individual)"""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role = Role.USER
    cluster: Optional[str] = None
    color: Optional[str] = None

    @field_validator('role', mode='before')
    @classmethod
    def lower_role(cls, v):
        if isinstance(v, str):
            v = v.lower()
            return v if v in ('admin', 'user') else 'user'
        return v or 'user'

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def email_lower(self) -> str:
        return (self.email or '').lower()

    class Config:
        json_schema_extra = {
            "example": {
                "id": 7,
                "name": "Planning Office",
                "email": "plo@tesda.gov.ph",
                "role": "user"
            }
        }


class Profile(BaseModel):
    """Personal profile attached to an account"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    designation: Optional[str] = None
    office: Optional[str] = None
    division: Optional[str] = None
    cluster: Optional[str] = None
    phone_number: Optional[str] = None
    province_district: Optional[str] = None
    region: Optional[str] = None
    picture: Optional[str] = None
    qr_code: Optional[str] = None
    user: Optional[User] = None

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    @property
    def initials(self) -> str:
        return f"{(self.first_name or '')[:1]}{(self.last_name or '')[:1]}".upper()


PROFILE_FORM_FIELDS = [
    'first_name', 'last_name', 'middle_name', 'designation', 'office',
    'division', 'cluster', 'phone_number', 'province_district', 'region',
]


class LegendEntry(BaseModel):
    id: Optional[int] = None
    name: str
    color: Optional[str] = None
    email: Optional[str] = None


class LegendOffice(BaseModel):
    name: str
    color: Optional[str] = None
    divisions: List[str] = Field(default_factory=list)


class ClusterAccount(BaseModel):
    id: Optional[int] = None
    email: Optional[str] = None


class Cluster(BaseModel):
    """Group of offices sharing a legend color"""
    id: int
    name: str
    color: Optional[str] = None
    account: Optional[ClusterAccount] = None
    offices: List[LegendOffice] = Field(default_factory=list)


# Event models
class Attendee(BaseModel):
    user_id: int
    name: Optional[str] = None


class Attachment(BaseModel):
    id: Optional[int] = None
    original_name: str = ""
    url: str = ""
    is_post_document: bool = False
    created_at: Optional[str] = None

    @field_validator('is_post_document', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        return bool(v) if v is not None else False


class Rsvp(BaseModel):
    """One invited office's response to an event"""
    office_user_id: int
    office_name: Optional[str] = None
    status: RsvpStatus = RsvpStatus.PENDING
    representative_name: Optional[str] = None
    decline_reason: Optional[str] = None
    responded_at: Optional[str] = None

    @field_validator('status', mode='before')
    @classmethod
    def default_pending(cls, v):
        return _lower(v) if v else RsvpStatus.PENDING


class LinkedEvent(BaseModel):
    id: int
    title: str = ""
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date_field(cls, v):
        return _normalized_date(v)


class ConflictSummary(BaseModel):
    id: Optional[int] = None
    title: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class Event(BaseModel):
    """A scheduled meeting, zoom call or event"""
    id: int
    title: str
    type: EventType = EventType.MEETING
    date: str
    end_date: Optional[str] = None
    start_time: str = ""
    end_time: str = ""
    location: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    created_by: Optional[int] = None
    creator_name: Optional[str] = None
    status: EventStatus = EventStatus.ACTIVE
    cancel_reason: Optional[str] = None
    canceled_at: Optional[str] = None
    rescheduled_to_event: Optional[LinkedEvent] = None
    rescheduled_from_event: Optional[LinkedEvent] = None
    required_post_document: Optional[str] = None
    post_document_required: bool = False
    attendees: List[Attendee] = Field(default_factory=list)
    rsvps: List[Rsvp] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    conflicts: List[ConflictSummary] = Field(default_factory=list)
    conflict_count: int = 0
    attachment_count: int = 0
    participants_summary: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def normalize_start_date(cls, v):
        return normalize_date(v)

    @field_validator('end_date', mode='before')
    @classmethod
    def normalize_end_date(cls, v):
        return _normalized_date(v)

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def normalize_times(cls, v):
        return normalize_time(v)

    @field_validator('type', mode='before')
    @classmethod
    def lower_type(cls, v):
        return _lower(v) if v else EventType.MEETING

    @field_validator('status', mode='before')
    @classmethod
    def lower_status(cls, v):
        if not v:
            return EventStatus.ACTIVE
        text = _lower(v)
        return 'cancelled' if text in ('cancelled', 'canceled') else 'active'

    @field_validator('conflict_count', 'attachment_count', mode='before')
    @classmethod
    def coerce_count(cls, v):
        try:
            return int(v or 0)
        except (TypeError, ValueError):
            return 0

    @field_validator('post_document_required', mode='before')
    @classmethod
    def coerce_required(cls, v):
        return bool(v) if v is not None else False

    @property
    def effective_end_date(self) -> str:
        return self.end_date or self.date

    @property
    def is_multi_day(self) -> bool:
        return bool(self.date and self.effective_end_date > self.date)

    @property
    def is_cancelled(self) -> bool:
        return self.status == EventStatus.CANCELLED

    @property
    def post_document_label(self) -> str:
        if self.required_post_document:
            return self.required_post_document
        return POST_DOCUMENT_LABELS.get(self.type.value, DEFAULT_POST_DOCUMENT_LABEL)

    @property
    def post_documents(self) -> List[Attachment]:
        return [a for a in self.attachments if a.is_post_document]

    def rsvp_for(self, user_id: Optional[int]) -> Optional[Rsvp]:
        if user_id is None:
            return None
        for rsvp in self.rsvps:
            if rsvp.office_user_id == int(user_id):
                return rsvp
        return None

    class Config:
        json_schema_extra = {
            "example": {
                "id": 42,
                "title": "Quarterly planning",
                "type": "meeting",
                "date": "2025-06-10",
                "start_time": "09:00:00",
                "end_time": "10:00:00",
                "created_by": 7,
                "status": "active"
            }
        }


class ConflictRow(BaseModel):
    """Server-flagged pair of conflicting events"""
    event_id: int
    conflicting_event_id: int
    event_title: Optional[str] = None
    conflicting_title: Optional[str] = None
    event_date: Optional[str] = None
    event_start: Optional[str] = None
    event_end: Optional[str] = None
    conflicting_date: Optional[str] = None
    conflicting_start: Optional[str] = None
    conflicting_end: Optional[str] = None
    time_conflict: bool = False
    participant_conflict: bool = False

    @field_validator('event_date', 'conflicting_date', mode='before')
    @classmethod
    def normalize_date_fields(cls, v):
        return _normalized_date(v)

    @field_validator('time_conflict', 'participant_conflict', mode='before')
    @classmethod
    def coerce_flags(cls, v):
        return bool(v) if v is not None else False


class ConflictCandidate(BaseModel):
    """An existing event returned by the conflict pre-check"""
    id: Optional[int] = None
    title: str = ""
    date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: str = ""
    end_time: str = ""
    creator_name: Optional[str] = None

    @field_validator('date', 'end_date', mode='before')
    @classmethod
    def normalize_date_fields(cls, v):
        return _normalized_date(v)


class Invitation(BaseModel):
    """Pending invitation for the signed-in office"""
    event_id: int
    title: str = ""
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    creator_name: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def normalize_date_field(cls, v):
        return _normalized_date(v)


# Request payloads
class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember: bool = False


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    user: User
    token: str


class EventPayload(BaseModel):
    """Body for creating or updating an event"""
    title: str
    type: EventType = EventType.MEETING
    date: str
    end_date: Optional[str] = None
    start_time: str
    end_time: str
    location: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    attendee_ids: Optional[List[int]] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', exclude_none=True)

    def to_form_fields(self) -> Dict[str, str]:
        """Multipart form fields; attendee ids travel as a JSON array."""
        fields: Dict[str, str] = {}
        for key, value in self.to_json().items():
            if key == 'attendee_ids':
                fields[key] = json.dumps(value)
            else:
                fields[key] = str(value)
        return fields


class EventMove(BaseModel):
    """Date/time change produced by a calendar drag or resize"""
    date: str
    start_time: str
    end_time: str
    move_reason: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RsvpRequest(BaseModel):
    status: RsvpStatus
    representative_name: Optional[str] = None
    decline_reason: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', exclude_none=True)


class CancelRequest(BaseModel):
    """Admin cancel-or-reschedule action"""
    mode: CancelMode = CancelMode.CANCEL
    reason: Optional[str] = None
    new_date: Optional[str] = None
    new_end_date: Optional[str] = None

    @model_validator(mode='after')
    def check_reschedule_dates(self):
        if self.mode == CancelMode.RESCHEDULE:
            if not parse_ymd(self.new_date):
                raise ValueError("New start date is required to reschedule.")
            if self.new_end_date and self.new_end_date < self.new_date:
                raise ValueError("New end date must be the same as or after the new start date.")
        return self

    def to_json(self) -> Dict[str, Any]:
        body = self.model_dump(mode='json', exclude_none=True)
        if self.mode == CancelMode.CANCEL:
            body.pop('new_date', None)
            body.pop('new_end_date', None)
        return body
