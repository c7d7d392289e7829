import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.views import year_events
from components.event_list import render_event_list
from components.event_modal import event_modal, show_flash
from components.navigation import require_user
from config.constants import YEAR_OPTIONS_BACK
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
now = get_clock().now()
st.title("Events by year")
show_flash()

years = list(range(now.year + 1, now.year - YEAR_OPTIONS_BACK - 1, -1))
col1, col2 = st.columns([1, 3])
with col1:
    year = st.selectbox("Year", years, index=1, key="year_events_year")
with col2:
    query = st.text_input("Search", key="year_events_search",
                          placeholder="Title, location, host, participants or type")

try:
    events = event_service.list_events(start=f"{year}-01-01", end=f"{year}-12-31")
except ApplicationException as e:
    logger.error(f"Failed to load events for {year}: {e.message}")
    st.error(e.message)
    events = []

shown = year_events(events, query)
st.caption(f"{len(shown)} event(s)")
selected = render_event_list(shown, now, "year_events", empty_text=f"No events in {year}.")
if selected is not None:
    event_modal(selected, user)
