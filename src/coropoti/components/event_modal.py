"""
Event modal: details, RSVP, admin cancel/reschedule, post-event documents,
edit and delete. Every action is one request followed by a refetch.
"""
import logging
from datetime import datetime
from typing import Optional

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.status import derive_status
from app_lib.scheduling.tentative import parse_tentative_description
from app_lib.scheduling.workflows import (
    RsvpForm,
    build_cancel_request,
    can_cancel,
    can_delete,
    can_edit,
    can_upload_post_document,
    cancel_dialog_copy,
)
from app_lib.utils.dates import add_days, parse_ymd, to_ymd
from app_lib.utils.formatters import (
    format_date_range,
    format_datetime,
    format_time_range,
    participants_acronyms,
    pretty_status,
)
from components.navigation import go
from models.models import CancelMode, Event, RsvpStatus, User
from services.event_service import event_service

logger = logging.getLogger(__name__)

FLASH_KEY = "event_flash"


def flash(message: str):
    """Message shown once, on the next run of the page that calls `show_flash`."""
    st.session_state[FLASH_KEY] = message


def show_flash():
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)


def render_event_summary(event: Event, now: datetime):
    info = derive_status(event, now)
    meta = parse_tentative_description(event.description)

    if meta.is_tentative:
        st.warning(f"Tentative schedule{': ' + meta.note if meta.note else ''}")
    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**Date:** {format_date_range(event.date, event.effective_end_date, long=True)}")
        st.markdown(f"**Time:** {format_time_range(event.start_time, event.end_time)}")
        st.markdown(f"**Location:** {event.location or 'TBA'}")
    with col2:
        st.markdown(f"**Status:** {info.label}")
        st.markdown(f"**Host:** {event.creator_name or 'Unknown'}")
        st.markdown(f"**Participants:** {participants_acronyms(event.participants_summary)}")
    if meta.plain_description:
        st.markdown(meta.plain_description)
    if event.is_cancelled and event.cancel_reason:
        st.error(f"Cancelled: {event.cancel_reason}")
    if event.rescheduled_to_event:
        linked = event.rescheduled_to_event
        st.info(f"Rescheduled to {linked.title} on {format_date_range(linked.date)}")


def render_rsvps(event: Event):
    if not event.rsvps:
        return
    st.markdown("**Responses**")
    for rsvp in event.rsvps:
        detail = ""
        if rsvp.status == RsvpStatus.ACCEPTED and rsvp.representative_name:
            detail = f" · Representative: {rsvp.representative_name}"
        elif rsvp.status == RsvpStatus.DECLINED and rsvp.decline_reason:
            detail = f" · Reason: {rsvp.decline_reason}"
        st.caption(f"{rsvp.office_name or 'Office'}: {pretty_status(rsvp.status.value)}{detail}")


def render_rsvp_controls(event: Event, user: Optional[User], now: datetime):
    form = RsvpForm(event=event, user=user)
    if not form.is_invited():
        return
    info = derive_status(event, now)
    if info.response_locked:
        st.caption("Response locked (event started)")
    if not form.is_open(now):
        return

    st.markdown("**Your response**")
    choice = st.radio(
        "Response",
        [RsvpStatus.ACCEPTED, RsvpStatus.DECLINED],
        format_func=lambda s: "Accept" if s == RsvpStatus.ACCEPTED else "Decline",
        horizontal=True,
        key=f"rsvp_choice_{event.id}",
    )
    form.status = choice
    if choice == RsvpStatus.ACCEPTED:
        form.representative_name = st.text_input("Representative name", key=f"rsvp_rep_{event.id}")
    else:
        form.decline_reason = st.text_area("Decline reason", key=f"rsvp_reason_{event.id}")

    if st.button("Submit response", key=f"rsvp_submit_{event.id}", disabled=not form.can_submit(now)):
        try:
            request = form.validate(get_clock().now())
            event_service.rsvp(event.id, request)
            flash("Response submitted.")
            st.rerun()
        except ApplicationException as e:
            st.error(e.message)


def render_cancel_controls(event: Event, user: Optional[User], now: datetime):
    if not can_cancel(event, user, now):
        return
    with st.expander("Cancel or reschedule"):
        mode = st.radio(
            "Action",
            [CancelMode.CANCEL, CancelMode.RESCHEDULE],
            format_func=lambda m: cancel_dialog_copy(m)["title"],
            horizontal=True,
            key=f"cancel_mode_{event.id}",
        )
        copy = cancel_dialog_copy(mode)
        st.caption(copy["message"])
        reason = st.text_area("Reason (optional)", key=f"cancel_reason_{event.id}")
        new_date = new_end_date = None
        if mode == CancelMode.RESCHEDULE:
            default = parse_ymd(add_days(to_ymd(now), 1))
            picked = st.date_input("New start date", value=default, key=f"resched_start_{event.id}")
            picked_end = st.date_input("New end date (optional)", value=None, key=f"resched_end_{event.id}")
            new_date = to_ymd(picked) if picked else None
            new_end_date = to_ymd(picked_end) if picked_end else None

        confirmed = st.checkbox("I understand", key=f"cancel_confirm_{event.id}")
        if st.button(copy["confirm"], key=f"cancel_submit_{event.id}", type="primary", disabled=not confirmed):
            try:
                request = build_cancel_request(mode, reason, new_date, new_end_date)
                event_service.cancel_event(event.id, request)
                flash(copy["success"])
                st.rerun()
            except ApplicationException as e:
                st.error(e.message)


def render_post_documents(event: Event, user: Optional[User], now: datetime):
    label = event.post_document_label
    documents = event.post_documents
    if not documents and not can_upload_post_document(event, user, now):
        return
    st.markdown(f"**{label}**")
    for document in documents:
        uploaded = format_datetime(document.created_at)
        st.markdown(f"- [{document.original_name}]({document.url}) {uploaded}")
    if can_upload_post_document(event, user, now):
        upload = st.file_uploader(f"Upload {label}", key=f"postdoc_{event.id}")
        if upload is not None and st.button("Upload", key=f"postdoc_submit_{event.id}"):
            try:
                event_service.upload_post_document(event.id, (upload.name, upload.getvalue(), upload.type))
                flash(f"{label} uploaded.")
                st.rerun()
            except ApplicationException as e:
                st.error(e.message)


def render_owner_actions(event: Event, user: Optional[User], now: datetime):
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Open details", key=f"details_{event.id}"):
            go(f"/events/{event.id}")
    with col2:
        if can_edit(event, user, now) and st.button("Edit", key=f"edit_{event.id}"):
            go(f"/events/{event.id}/edit")
    with col3:
        if can_delete(event, user, now):
            sure = st.checkbox("Confirm delete", key=f"delete_sure_{event.id}")
            if st.button("Delete", key=f"delete_{event.id}", disabled=not sure):
                try:
                    event_service.delete_event(event.id)
                    flash("Event deleted.")
                    st.rerun()
                except ApplicationException as e:
                    st.error(e.message)


def render_event_panel(event_id, user: Optional[User]):
    """Body of the event modal; also embedded on the details page."""
    try:
        event = event_service.get_event(event_id)
    except ApplicationException as e:
        st.error(e.message)
        return None

    now = get_clock().now()
    st.subheader(event.title)
    render_event_summary(event, now)
    if event.conflicts:
        st.warning("Conflicts: " + ", ".join(c.title for c in event.conflicts if c.title))
    render_rsvps(event)
    render_rsvp_controls(event, user, now)
    render_post_documents(event, user, now)
    render_cancel_controls(event, user, now)
    render_owner_actions(event, user, now)
    return event


@st.dialog("Event", width="large")
def event_modal(event_id, user: Optional[User]):
    render_event_panel(event_id, user)
