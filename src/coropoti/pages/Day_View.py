import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.holidays import holidays_between
from app_lib.scheduling.views import events_on_day
from app_lib.utils.dates import add_days, normalize_date
from app_lib.utils.formatters import format_date
from components.event_list import render_event_card
from components.event_modal import event_modal, show_flash
from components.navigation import go, require_user, route_param

from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
day = normalize_date(route_param("date")) or get_clock().today()

st.title(format_date(day, long=True))
show_flash()

holiday = holidays_between(day, day).get(day)
if holiday:
    st.info(holiday)

col1, col2, col3 = st.columns([1, 1, 4])
with col1:
    if st.button("‹ Previous day"):
        go(f"/day/{add_days(day, -1)}")
with col2:
    if st.button("Next day ›"):
        go(f"/day/{add_days(day, 1)}")

try:
    events = events_on_day(event_service.list_events(start=day, end=day), day)
except ApplicationException as e:
    logger.error(f"Failed to load events for {day}: {e.message}")
    st.error(e.message)
    events = []

now = get_clock().now()
if not events:
    st.info("No events on this day.")
for event in events:
    if render_event_card(event, now, "day_view"):
        event_modal(event.id, user)
