"""
Capability lookup for the signed-in account.

Read-only office accounts are a configured list of emails; everything else is
decided by role and event ownership.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from config.settings import config
from models.models import Event, User


@dataclass(frozen=True)
class Capabilities:
    can_edit: bool
    can_delete: bool
    can_drag: bool


NO_CAPABILITIES = Capabilities(can_edit=False, can_delete=False, can_drag=False)


class PermissionTable:
    def __init__(self, read_only_emails: Optional[Iterable[str]] = None):
        emails = config.read_only_office_emails if read_only_emails is None else read_only_emails
        self.read_only_emails = frozenset(e.strip().lower() for e in emails if e and e.strip())

    def is_read_only(self, user: Optional[User]) -> bool:
        return user is not None and user.email_lower in self.read_only_emails

    def is_creator(self, user: Optional[User], event: Event) -> bool:
        return user is not None and event.created_by is not None and int(event.created_by) == int(user.id)

    def account_capabilities(self, user: Optional[User]) -> Capabilities:
        """What the account may do at all, before looking at any event."""
        if user is None or self.is_read_only(user):
            return NO_CAPABILITIES
        return Capabilities(can_edit=True, can_delete=True, can_drag=True)

    def for_event(self, user: Optional[User], event: Event) -> Capabilities:
        """Admin or creator, and not a read-only office."""
        if not self.account_capabilities(user).can_edit:
            return NO_CAPABILITIES
        if user.is_admin or self.is_creator(user, event):
            return Capabilities(can_edit=True, can_delete=True, can_drag=not event.is_multi_day)
        return NO_CAPABILITIES


permission_table = PermissionTable()


def office_color_for(user: Optional[User]) -> str:
    """Assigned calendar color for an account, else a palette slot by id."""
    palette = config.office_color_palette
    if user is None:
        return palette[0]
    assigned = config.office_colors.get(user.email_lower)
    if assigned:
        return assigned
    return palette[abs(int(user.id)) % len(palette)]
