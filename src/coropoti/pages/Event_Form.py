import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.utils.dates import normalize_date
from components.event_form import render_event_form
from components.legend import load_users
from components.navigation import go, require_user, route_param
from services.auth_service import auth_service
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
event_id = route_param("id")

event = None
if event_id:
    try:
        event = event_service.get_event(event_id)
    except ApplicationException as e:
        logger.error(f"Failed to load event {event_id}: {e.message}")
        go("/dashboard")

st.title("Edit Event" if event else "Create Event")
if st.button("← Back"):
    go("/calendar")

saved = render_event_form(
    user,
    load_users(auth_service.token),
    event=event,
    initial_date=normalize_date(route_param("date")) or None,
)
if saved is not None:
    target = saved.get("date") or (event.date if event else "")
    go(f"/calendar?date={normalize_date(target)}" if target else "/calendar")
