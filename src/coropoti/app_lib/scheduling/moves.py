"""
Calendar drag/drop and resize reconciliation.

The calendar widget reports where it thinks an event landed. That date is
cross-checked against the day cell under the last real pointer position, and
the move is then rejected, sent for admin confirmation, or applied.

The Streamlit move controls report no pointer, so `reconcile_drop` falls
back to the widget date there. `PointerTracker`, `DayCell` and
`resolve_date_at` take over for a calendar component that posts pointer
coordinates and cell bounds back to the app.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from app_lib.exceptions import ValidationException
from app_lib.scheduling.clock import Clock, get_clock
from app_lib.scheduling.mutations import PendingMutation
from app_lib.scheduling.permissions import PermissionTable, permission_table
from app_lib.scheduling.status import derive_status
from app_lib.utils.dates import is_weekend, normalize_time, time_of, to_ymd
from config.constants import ERROR_MESSAGES
from config.settings import config
from models.models import DerivedStatus, Event, EventMove, User

ElementLookup = Callable[[float, float], Optional[str]]


@dataclass(frozen=True)
class DayCell:
    """A rendered day cell and its bounding rectangle in client coordinates."""
    date: str
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


class PointerTracker:
    """Keeps the last known pointer coordinates (fed by every pointer move)."""

    def __init__(self):
        self.position: Optional[Tuple[float, float]] = None

    def record(self, x, y) -> None:
        if isinstance(x, (int, float)) and isinstance(y, (int, float)):
            self.position = (x, y)

    def has_position(self) -> bool:
        return self.position is not None and (self.position[0] or self.position[1])


def resolve_date_at(
    cells: Iterable[DayCell],
    x: float,
    y: float,
    element_lookup: Optional[ElementLookup] = None,
) -> Optional[str]:
    """Date of the cell containing (x, y): rectangle containment first, then point lookup."""
    for cell in cells:
        if cell.date and cell.contains(x, y):
            return cell.date[:10]
    if element_lookup is not None:
        found = element_lookup(x, y)
        if found and len(found) >= 10:
            return found[:10]
    return None


class DropGuard:
    """Suppresses the click-to-create that a mouse-up fires right after a drop."""

    def __init__(self, clock: Optional[Clock] = None, window_seconds: Optional[float] = None):
        self.clock = clock
        self.window_seconds = config.drop_suppress_seconds if window_seconds is None else window_seconds
        self.dragging = False
        self.last_drop_at: Optional[datetime] = None

    def _now(self) -> datetime:
        return (self.clock or get_clock()).now()

    def drag_started(self) -> None:
        self.dragging = True

    def drag_stopped(self) -> None:
        self.dragging = False

    def mark_drop(self) -> None:
        self.last_drop_at = self._now()

    def allows_click(self) -> bool:
        if self.dragging:
            return False
        if self.last_drop_at is None:
            return True
        return (self._now() - self.last_drop_at).total_seconds() >= self.window_seconds


class MoveAction(str, Enum):
    REJECT = "reject"
    CONFIRM = "confirm"
    APPLY = "apply"


@dataclass
class MoveDecision:
    action: MoveAction
    event_id: int
    title: str = ""
    move: Optional[EventMove] = None
    revert_widget: bool = False
    message: str = ""
    mutation: Optional[PendingMutation] = field(default=None, repr=False)

    @property
    def rejected(self) -> bool:
        return self.action == MoveAction.REJECT


def check_create_date(day: str, now: datetime) -> Optional[str]:
    """Message explaining why a click on `day` may not start a new event, if any."""
    if is_weekend(day):
        return ERROR_MESSAGES["weekend_locked"]
    if day < to_ymd(now):
        return ERROR_MESSAGES["date_done"]
    return None


class MoveReconciler:
    def __init__(self, permissions: Optional[PermissionTable] = None, clock: Optional[Clock] = None):
        self.permissions = permissions or permission_table
        self.clock = clock

    def _now(self) -> datetime:
        return (self.clock or get_clock()).now()

    def _reject(self, event: Event, message: str) -> MoveDecision:
        return MoveDecision(
            action=MoveAction.REJECT,
            event_id=event.id,
            title=event.title,
            revert_widget=True,
            message=message,
        )

    def _guard(self, user: Optional[User], event: Event) -> Optional[MoveDecision]:
        if self.permissions.is_read_only(user):
            return self._reject(event, ERROR_MESSAGES["read_only_account"])
        if not self.permissions.for_event(user, event).can_drag:
            return self._reject(event, ERROR_MESSAGES["cannot_edit"])
        info = derive_status(event, self._now())
        if info.status == DerivedStatus.DONE:
            return self._reject(event, ERROR_MESSAGES["event_done"])
        if info.status == DerivedStatus.CANCELLED:
            return self._reject(event, ERROR_MESSAGES["event_cancelled"])
        return None

    def _decide(self, user: User, event: Event, move: EventMove, revert_widget: bool) -> MoveDecision:
        mutation = PendingMutation(event.id, move).begin()
        if user.is_admin:
            # Admin moves wait for a reason; the widget is reset until confirmed
            return MoveDecision(
                action=MoveAction.CONFIRM,
                event_id=event.id,
                title=event.title,
                move=move,
                revert_widget=True,
                mutation=mutation,
            )
        return MoveDecision(
            action=MoveAction.APPLY,
            event_id=event.id,
            title=event.title,
            move=move,
            revert_widget=revert_widget,
            mutation=mutation,
        )

    def reconcile_drop(
        self,
        user: Optional[User],
        event: Event,
        widget_start: datetime,
        widget_end: Optional[datetime] = None,
        pointer: Optional[Tuple[float, float]] = None,
        cells: Iterable[DayCell] = (),
        element_lookup: Optional[ElementLookup] = None,
    ) -> MoveDecision:
        rejection = self._guard(user, event)
        if rejection:
            return rejection

        intended = None
        if pointer and (pointer[0] or pointer[1]):
            intended = resolve_date_at(cells, pointer[0], pointer[1], element_lookup)

        widget_date = to_ymd(widget_start)
        target = intended or widget_date
        if is_weekend(target):
            return self._reject(event, ERROR_MESSAGES["weekend_drop"])

        end = widget_end or widget_start
        # Stored times win over the widget's, which can drift across timezones
        move = EventMove(
            date=target,
            start_time=normalize_time(event.start_time) or time_of(widget_start),
            end_time=normalize_time(event.end_time) or time_of(end),
        )
        return self._decide(user, event, move, revert_widget=bool(intended and intended != widget_date))

    def reconcile_resize(
        self,
        user: Optional[User],
        event: Event,
        widget_start: datetime,
        widget_end: Optional[datetime] = None,
    ) -> MoveDecision:
        rejection = self._guard(user, event)
        if rejection:
            return rejection

        target = to_ymd(widget_start)
        if is_weekend(target):
            return self._reject(event, ERROR_MESSAGES["weekend_resize"])

        end = widget_end or widget_start
        move = EventMove(date=target, start_time=time_of(widget_start), end_time=time_of(end))
        return self._decide(user, event, move, revert_widget=False)


def confirm_move(decision: MoveDecision, reason: str) -> EventMove:
    """Admin confirmation: a non-empty reason is attached to the pending move."""
    if decision.action != MoveAction.CONFIRM or decision.move is None:
        raise ValidationException("There is no move waiting for confirmation.")
    clean = (reason or "").strip()
    if not clean:
        raise ValidationException("A reason is required to move this event.", field="move_reason")
    return decision.move.model_copy(update={"move_reason": clean})
