"""
Month calendar grid with holidays, event chips, click-to-create and the
move/resize controls.

Every move or resize goes through MoveReconciler; admin moves wait in
session state for the confirm dialog and its reason.
"""
import calendar
import logging
from datetime import date, datetime
from typing import Dict, List, Optional

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.conflicts import conflict_kinds, dedupe_conflicts
from app_lib.scheduling.moves import (
    DropGuard,
    MoveAction,
    MoveDecision,
    MoveReconciler,
    check_create_date,
    confirm_move,
)
from app_lib.scheduling.status import derive_status
from app_lib.scheduling.tentative import parse_tentative_description
from app_lib.scheduling.views import day_colors, events_on_day
from app_lib.utils.dates import combine, is_weekend, parse_time, to_ymd
from app_lib.utils.formatters import format_date, format_time, format_time_range
from config.constants import ERROR_MESSAGES
from models.models import ConflictRow, Event, User
from services.event_service import event_service

logger = logging.getLogger(__name__)

PENDING_MOVE_KEY = "pending_move"
DROP_GUARD_KEY = "calendar_drop_guard"
MONTH_KEY = "calendar_month"
OPEN_EVENT_KEY = "calendar_open_event"

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MAX_CHIPS_PER_DAY = 3


def drop_guard() -> DropGuard:
    if DROP_GUARD_KEY not in st.session_state:
        st.session_state[DROP_GUARD_KEY] = DropGuard()
    return st.session_state[DROP_GUARD_KEY]


def visible_month(initial: Optional[str] = None):
    if MONTH_KEY not in st.session_state:
        anchor = initial or get_clock().today()
        st.session_state[MONTH_KEY] = (int(anchor[:4]), int(anchor[5:7]))
    return st.session_state[MONTH_KEY]


def shift_month(delta: int):
    year, month = visible_month()
    month += delta
    while month < 1:
        year, month = year - 1, month + 12
    while month > 12:
        year, month = year + 1, month - 12
    st.session_state[MONTH_KEY] = (year, month)


def month_grid(year: int, month: int) -> List[List[date]]:
    """Weeks (Sunday first) covering the month, including spill-over days."""
    return calendar.Calendar(firstweekday=6).monthdatescalendar(year, month)


def render_month_header():
    year, month = visible_month()
    col1, col2, col3, col4 = st.columns([1, 1, 1, 4])
    with col1:
        if st.button("‹ Prev", key="calendar_prev"):
            shift_month(-1)
            st.rerun()
    with col2:
        if st.button("Today", key="calendar_today"):
            st.session_state.pop(MONTH_KEY, None)
            st.rerun()
    with col3:
        if st.button("Next ›", key="calendar_next"):
            shift_month(1)
            st.rerun()
    with col4:
        st.subheader(f"{calendar.month_name[month]} {year}")


def _chip_label(event: Event, now: datetime) -> str:
    info = derive_status(event, now)
    tentative = "? " if parse_tentative_description(event.description).is_tentative else ""
    marker = {"cancelled": "✕ ", "done": "✓ "}.get(info.status.value, "")
    return f"{marker}{tentative}{format_time(event.start_time)} {event.title}"


def _render_day_cell(day: date, month: int, events: List[Event], holidays: Dict[str, str], now: datetime):
    ymd = to_ymd(day)
    on_day = events_on_day(events, ymd)
    with st.container(border=True):
        faded = day.month != month
        label = f"**{day.day}**" if ymd == to_ymd(now) else str(day.day)
        st.markdown(f"<span style='opacity:{0.45 if faded else 1}'>{label}</span>", unsafe_allow_html=True)
        if ymd in holidays:
            st.caption(f"🎌 {holidays[ymd]}")
        if is_weekend(ymd):
            st.caption("Weekend")
        colors = day_colors(on_day, ymd)
        if colors:
            dots = "".join(
                f"<span style='display:inline-block;width:8px;height:8px;border-radius:50%;"
                f"background:{c};margin-right:3px'></span>" for c in colors
            )
            st.markdown(dots, unsafe_allow_html=True)
        for event in on_day[:MAX_CHIPS_PER_DAY]:
            if st.button(_chip_label(event, now), key=f"chip_{ymd}_{event.id}", use_container_width=True):
                st.session_state[OPEN_EVENT_KEY] = event.id
                st.rerun()
        if len(on_day) > MAX_CHIPS_PER_DAY:
            if st.button(f"+{len(on_day) - MAX_CHIPS_PER_DAY} more", key=f"more_{ymd}"):
                st.session_state["calendar_goto"] = f"/day/{ymd}"
                st.rerun()
        if not faded and st.button("＋", key=f"create_{ymd}", help="Create an event on this day"):
            st.session_state["calendar_create"] = ymd
            st.rerun()


def render_month_grid(events: List[Event], holidays: Dict[str, str]):
    """Grid body; re-run on the refresh tick so status labels stay current."""
    now = get_clock().now()
    year, month = visible_month()
    header = st.columns(7)
    for col, name in zip(header, WEEKDAY_HEADERS):
        col.markdown(f"**{name}**")
    for week in month_grid(year, month):
        cols = st.columns(7)
        for col, day in zip(cols, week):
            with col:
                _render_day_cell(day, month, events, holidays, now)


def handle_create_click(ymd: str) -> Optional[str]:
    """Path of the create form for a clicked day, or None after showing why not."""
    if not drop_guard().allows_click():
        return None
    message = check_create_date(ymd, get_clock().now())
    if message:
        st.warning(message)
        return None
    return f"/events/new?date={ymd}"


def apply_decision(decision: MoveDecision, failure_message: str) -> bool:
    """Act on a reconciled move. Returns True when the server accepted it."""
    if decision.action == MoveAction.REJECT:
        st.error(decision.message)
        return False
    if decision.action == MoveAction.CONFIRM:
        st.session_state[PENDING_MOVE_KEY] = decision
        return False
    try:
        event_service.move_event(decision.event_id, decision.move)
    except ApplicationException as e:
        decision.mutation.revert(e.message)
        st.error(e.message or failure_message)
        return False
    decision.mutation.apply()
    logger.info(f"Event {decision.event_id} moved to {decision.move.date}")
    return True


@st.dialog("Confirm move")
def confirm_move_dialog():
    decision: MoveDecision = st.session_state.get(PENDING_MOVE_KEY)
    if decision is None:
        st.rerun()
        return
    move = decision.move
    st.markdown(
        f"Move **{decision.title}** to {format_date(move.date, long=True)}, "
        f"{format_time_range(move.start_time, move.end_time)}?"
    )
    reason = st.text_area("Reason for moving", key="pending_move_reason")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Confirm move", type="primary", disabled=not (reason or "").strip()):
            try:
                event_service.move_event(decision.event_id, confirm_move(decision, reason))
            except ApplicationException as e:
                decision.mutation.revert(e.message)
                st.session_state.pop(PENDING_MOVE_KEY, None)
                st.error(e.message or ERROR_MESSAGES["move_failed"])
                return
            decision.mutation.apply()
            st.session_state.pop(PENDING_MOVE_KEY, None)
            st.rerun()
    with col2:
        if st.button("Cancel"):
            decision.mutation.revert("Move cancelled")
            st.session_state.pop(PENDING_MOVE_KEY, None)
            st.rerun()


def render_move_controls(events: List[Event], user: User, reconciler: Optional[MoveReconciler] = None):
    """Move an event to another day or change its times."""
    reconciler = reconciler or MoveReconciler()
    movable = [e for e in events if not e.is_multi_day]
    if not movable:
        return
    with st.expander("Move or resize an event"):
        event = st.selectbox(
            "Event",
            movable,
            format_func=lambda e: f"{format_date(e.date)} · {format_time(e.start_time)} · {e.title}",
            key="move_event_select",
        )
        col1, col2 = st.columns(2)
        with col1:
            target = st.date_input("Move to date", value=None, key=f"move_target_{event.id}")
            if st.button("Move", key=f"move_submit_{event.id}", disabled=target is None):
                guard = drop_guard()
                guard.drag_started()
                widget_start = combine(target, event.start_time) or datetime.combine(target, datetime.min.time())
                decision = reconciler.reconcile_drop(user, event, widget_start)
                guard.drag_stopped()
                guard.mark_drop()
                if apply_decision(decision, ERROR_MESSAGES["move_failed"]):
                    st.rerun()
        with col2:
            start = st.time_input("Start", value=parse_time(event.start_time), step=900, key=f"resize_start_{event.id}")
            end = st.time_input("End", value=parse_time(event.end_time), step=900, key=f"resize_end_{event.id}")
            if st.button("Change time", key=f"resize_submit_{event.id}"):
                if start is None or end is None or end <= start:
                    st.error("End time must be after start time.")
                else:
                    day = datetime.strptime(event.date, "%Y-%m-%d").date()
                    decision = reconciler.reconcile_resize(
                        user, event, datetime.combine(day, start), datetime.combine(day, end)
                    )
                    if apply_decision(decision, ERROR_MESSAGES["resize_failed"]):
                        st.rerun()


def render_conflict_list(rows: List[ConflictRow]):
    visible = dedupe_conflicts(rows, get_clock().now())
    st.subheader(f"Conflicts ({len(visible)})")
    if not visible:
        st.caption("No conflicts.")
        return
    for row in visible:
        kinds = " & ".join(conflict_kinds(row)) or "schedule"
        st.markdown(
            f"- **{row.event_title or row.event_id}** ({format_date(row.event_date)} "
            f"{format_time_range(row.event_start, row.event_end)}) vs "
            f"**{row.conflicting_title or row.conflicting_event_id}** ({format_date(row.conflicting_date)} "
            f"{format_time_range(row.conflicting_start, row.conflicting_end)}) · {kinds}"
        )
