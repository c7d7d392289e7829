"""
Create / edit event form with a debounced conflict pre-check.

Widgets write straight into session state; a fragment re-runs on the debounce
delay, fires the pre-check once the date/time inputs settle and renders the
warning panel. Submission uses the latest result and is blocked while any
conflict remains.
"""
import logging
from datetime import time
from typing import List, Optional

import streamlit as st

from app_lib.exceptions import ApplicationException, ValidationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.conflicts import build_conflict_warnings
from app_lib.scheduling.debounce import Debouncer
from app_lib.scheduling.permissions import office_color_for, permission_table
from app_lib.scheduling.tentative import parse_tentative_description
from app_lib.scheduling.validation import EventForm
from app_lib.utils.dates import parse_time, parse_ymd, time_hhmm, to_ymd
from app_lib.utils.formatters import format_date_range, format_time, format_time_range
from config.constants import ERROR_MESSAGES, EVENT_TYPE_LABELS, EVENT_TYPES, FORM_COLORS
from config.settings import config
from models.models import ConflictCandidate, Event, User
from services.event_service import event_service

logger = logging.getLogger(__name__)


def _key(prefix: str, name: str) -> str:
    return f"{prefix}_{name}"


def _init_state(prefix: str, event: Optional[Event], initial_date: Optional[str], user: User):
    if st.session_state.get(_key(prefix, "loaded")):
        return
    today = get_clock().today()
    if event is not None:
        meta = parse_tentative_description(event.description)
        values = {
            "title": event.title,
            "type": event.type.value,
            "date": parse_ymd(event.date),
            "end_date": parse_ymd(event.date),
            "start_time": parse_time(event.start_time) or time(9, 0),
            "end_time": parse_time(event.end_time) or time(10, 0),
            "location": event.location or "",
            "description": meta.plain_description,
            "is_tentative": meta.is_tentative,
            "tentative_note": meta.note,
            "color": event.color or FORM_COLORS[0],
            "attendee_ids": [a.user_id for a in event.attendees],
        }
    else:
        start = initial_date or today
        values = {
            "title": "",
            "type": EVENT_TYPES[0],
            "date": parse_ymd(start),
            "end_date": parse_ymd(start),
            "start_time": time(9, 0),
            "end_time": time(10, 0),
            "location": "",
            "description": "",
            "is_tentative": False,
            "tentative_note": "",
            "color": office_color_for(user),
            "attendee_ids": [],
        }
    for name, value in values.items():
        st.session_state[_key(prefix, name)] = value
    st.session_state[_key(prefix, "debouncer")] = Debouncer()
    st.session_state[_key(prefix, "loaded")] = True


def _read_form(prefix: str) -> EventForm:
    get = lambda name: st.session_state.get(_key(prefix, name))
    day, end_day = get("date"), get("end_date")
    start, end = get("start_time"), get("end_time")
    return EventForm(
        title=get("title") or "",
        type=get("type") or EVENT_TYPES[0],
        date=to_ymd(day) if day else "",
        end_date=to_ymd(end_day) if end_day else "",
        start_time=start.strftime("%H:%M") if start else "",
        end_time=end.strftime("%H:%M") if end else "",
        location=get("location") or "",
        description=get("description") or "",
        is_tentative=bool(get("is_tentative")),
        tentative_note=get("tentative_note") or "",
        color=get("color"),
        attendee_ids=list(get("attendee_ids") or []),
    )


def _latest_conflicts(prefix: str, form: EventForm, event_id) -> List[ConflictCandidate]:
    """Conflicts for the current inputs, checking now if the debounced result is stale."""
    debouncer: Debouncer = st.session_state[_key(prefix, "debouncer")]
    query = form.conflict_query(event_id is not None, event_id)
    key = repr(sorted(query.items())) if query else None
    if key is not None and (debouncer.key != key or debouncer.fired_key != key):
        debouncer.touch(key)
        debouncer.fire(event_service.check_conflict(query))
    return debouncer.result or []


def _render_conflict_panel(prefix: str, event_id):
    form = _read_form(prefix)
    debouncer: Debouncer = st.session_state[_key(prefix, "debouncer")]
    query = form.conflict_query(event_id is not None, event_id)
    if query:
        debouncer.touch(repr(sorted(query.items())))
        if debouncer.due():
            debouncer.fire(event_service.check_conflict(query))

    conflicts = debouncer.result or []
    if not conflicts:
        return
    warnings = build_conflict_warnings(conflicts, time_hhmm(form.start_time), time_hhmm(form.end_time))
    with st.container(border=True):
        st.warning("This time conflicts with existing event(s):")
        for warning in warnings:
            candidate = warning.candidate
            line = (
                f"**{candidate.title}** · {format_date_range(candidate.date, candidate.end_date)} · "
                f"{format_time_range(warning.other_start, warning.other_end)}"
            )
            if candidate.creator_name:
                line += f" · {candidate.creator_name}"
            if warning.overlap:
                line += f" · overlaps {format_time(warning.overlap[0])} - {format_time(warning.overlap[1])}"
            st.markdown(line)


conflict_panel = st.fragment(run_every=config.conflict_check_delay)(_render_conflict_panel)


def render_event_form(user: User, users: List[User], event: Optional[Event] = None, initial_date: Optional[str] = None):
    """Returns the saved server payload, or None when nothing was saved on this run."""
    is_edit = event is not None
    prefix = f"event_form_{event.id}" if is_edit else "event_form_new"

    if is_edit and permission_table.is_read_only(user):
        st.error(ERROR_MESSAGES["read_only_account"])
        return None

    _init_state(prefix, event, initial_date, user)

    st.text_input("Title", key=_key(prefix, "title"))
    st.selectbox("Type", EVENT_TYPES, format_func=lambda t: EVENT_TYPE_LABELS[t], key=_key(prefix, "type"))
    col1, col2 = st.columns(2)
    with col1:
        st.date_input("Date", key=_key(prefix, "date"))
        st.time_input("Start time", key=_key(prefix, "start_time"), step=900)
    with col2:
        if not is_edit:
            st.date_input("End date", key=_key(prefix, "end_date"))
        st.time_input("End time", key=_key(prefix, "end_time"), step=900)

    st.text_input("Location", key=_key(prefix, "location"))
    st.checkbox("Tentative schedule", key=_key(prefix, "is_tentative"))
    if st.session_state.get(_key(prefix, "is_tentative")):
        st.text_input("Tentative note", key=_key(prefix, "tentative_note"))
    st.text_area("Description", key=_key(prefix, "description"))

    if is_edit:
        st.selectbox("Color", FORM_COLORS, key=_key(prefix, "color"))
    else:
        st.caption("Assigned account color is used for new events.")

    user_names = {u.id: u.name or u.email or f"User {u.id}" for u in users if u.id != user.id}
    st.multiselect(
        "Participants",
        list(user_names.keys()),
        format_func=lambda uid: user_names.get(uid, str(uid)),
        key=_key(prefix, "attendee_ids"),
    )
    attachment = None if is_edit else st.file_uploader("Attachment (optional)", key=_key(prefix, "attachment"))

    conflict_panel(prefix, event.id if is_edit else None)

    if not st.button("Save changes" if is_edit else "Create event", type="primary", key=_key(prefix, "submit")):
        return None

    form = _read_form(prefix)
    if not is_edit:
        form.color = office_color_for(user)
    event_id = event.id if is_edit else None
    try:
        conflicts = _latest_conflicts(prefix, form, event_id)
        upload = (attachment.name, attachment.getvalue(), attachment.type) if attachment else None
        saved = event_service.save_event(
            form,
            event_id=event_id,
            original_date=event.date if is_edit else None,
            conflicts=conflicts,
            attachment=upload,
        )
    except ValidationException as e:
        st.error(e.message)
        return None
    except ApplicationException as e:
        refreshed = e.details.get("conflicts")
        if refreshed is not None:
            st.session_state[_key(prefix, "debouncer")].fire(refreshed)
        st.error(e.message or ERROR_MESSAGES["save_failed"])
        return None

    logger.info(f"Event {'updated' if is_edit else 'created'} by user {user.id}")
    for name in list(st.session_state.keys()):
        if str(name).startswith(prefix):
            del st.session_state[name]
    return saved or {"date": form.date}
