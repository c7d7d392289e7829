import logging
from datetime import timedelta

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.clock import get_clock
from app_lib.scheduling.views import recent_events
from app_lib.utils.dates import to_ymd
from components.event_list import render_event_list
from components.event_modal import event_modal, show_flash
from components.navigation import require_user
from config.constants import RECENT_FETCH_BACK_DAYS
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
now = get_clock().now()
st.title("Recent events")
show_flash()

try:
    events = event_service.list_events(
        start=to_ymd(now - timedelta(days=RECENT_FETCH_BACK_DAYS)),
        end=to_ymd(now),
    )
except ApplicationException as e:
    logger.error(f"Failed to load recent events: {e.message}")
    st.error(e.message)
    events = []

query = st.text_input("Search", key="recent_search")
selected = render_event_list(recent_events(events, now, query), now, "recent", empty_text="No recent events.")
if selected is not None:
    event_modal(selected, user)
