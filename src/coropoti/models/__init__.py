"""Type definitions package"""
from .models import (
    Event,
    EventType,
    EventStatus,
    DerivedStatus,
    Rsvp,
    RsvpStatus,
    Attachment,
    ConflictRow,
    ConflictCandidate,
    Invitation,
    User,
    Role,
    Profile,
    Cluster,
)

__all__ = [
    'Event',
    'EventType',
    'EventStatus',
    'DerivedStatus',
    'Rsvp',
    'RsvpStatus',
    'Attachment',
    'ConflictRow',
    'ConflictCandidate',
    'Invitation',
    'User',
    'Role',
    'Profile',
    'Cluster',
]
