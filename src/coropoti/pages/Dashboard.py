import logging
from datetime import timedelta

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.views import dashboard_counts, dashboard_upcoming, day_colors
from app_lib.utils.dates import date_range, month_bounds, to_ymd
from components.event_list import render_event_card
from components.event_modal import event_modal, show_flash
from components.navigation import go, require_user
from config.constants import DASHBOARD_WINDOW_DAYS
from config.settings import config
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
now = get_clock().now()

st.title(f"Welcome, {user.name or user.email}")
show_flash()

try:
    events = event_service.list_events(
        start=to_ymd(now - timedelta(days=DASHBOARD_WINDOW_DAYS)),
        end=to_ymd(now + timedelta(days=DASHBOARD_WINDOW_DAYS)),
    )
except ApplicationException as e:
    logger.error(f"Failed to load dashboard events: {e.message}")
    st.error(e.message)
    events = []


@st.fragment(run_every=config.refresh_interval_seconds)
def live_dashboard():
    now = get_clock().now()
    counts = dashboard_counts(events, now)
    col1, col2, col3 = st.columns(3)
    col1.metric("Today", counts.today)
    col2.metric("Next 7 days", counts.next_7_days)
    col3.metric("Next 30 days", counts.next_30_days)

    left, right = st.columns([3, 2])
    with left:
        st.subheader("Upcoming")
        upcoming = dashboard_upcoming(events, now)
        if not upcoming:
            st.caption("No upcoming events in the next 7 days.")
        for event in upcoming:
            if render_event_card(event, now, "dashboard"):
                st.session_state["dashboard_open_event"] = event.id
                st.rerun()
    with right:
        st.subheader(now.strftime("%B %Y"))
        first, last = month_bounds(now.year, now.month)
        lines = []
        for day in date_range(first, last):
            colors = day_colors(events, day)
            if colors:
                dots = "".join(f"<span style='color:{c}'>●</span>" for c in colors)
                lines.append(f"{int(day[8:])} {dots}")
        st.markdown(" &nbsp; ".join(lines) or "No events this month.", unsafe_allow_html=True)


live_dashboard()

open_id = st.session_state.pop("dashboard_open_event", None)
if open_id is not None:
    event_modal(open_id, user)

col1, col2 = st.columns(2)
with col1:
    if st.button("Create event", type="primary"):
        go("/events/new")
with col2:
    if st.button("Open calendar"):
        go("/calendar")
