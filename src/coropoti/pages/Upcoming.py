import logging
from datetime import timedelta

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.views import events_by_host, upcoming_events
from app_lib.utils.dates import to_ymd
from components.event_list import render_event_list
from components.event_modal import event_modal, show_flash
from components.legend import load_clusters, load_users, render_host_filter
from components.navigation import require_user
from config.constants import UPCOMING_FETCH_AHEAD_DAYS, UPCOMING_FETCH_BACK_DAYS
from services.auth_service import auth_service
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
now = get_clock().now()
st.title("Upcoming events")
show_flash()

try:
    events = event_service.list_events(
        start=to_ymd(now - timedelta(days=UPCOMING_FETCH_BACK_DAYS)),
        end=to_ymd(now + timedelta(days=UPCOMING_FETCH_AHEAD_DAYS)),
    )
except ApplicationException as e:
    logger.error(f"Failed to load upcoming events: {e.message}")
    st.error(e.message)
    events = []

col1, col2 = st.columns([2, 1])
with col1:
    query = st.text_input("Search", key="upcoming_search")
with col2:
    host = render_host_filter(load_clusters(auth_service.token), load_users(auth_service.token), key="upcoming_host")

if host is not None:
    shown = events_by_host(events, host.account_id, now)
    st.caption(f"Hosted by {host.label}")
else:
    shown = upcoming_events(events, now, query)

selected = render_event_list(shown, now, "upcoming", empty_text="No upcoming events.")
if selected is not None:
    event_modal(selected, user)
