import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.holidays import holidays_between
from app_lib.scheduling.views import filter_by_type
from app_lib.utils.dates import add_days, month_bounds
from components.calendar_view import (
    OPEN_EVENT_KEY,
    PENDING_MOVE_KEY,
    confirm_move_dialog,
    handle_create_click,
    render_conflict_list,
    render_month_grid,
    render_month_header,
    render_move_controls,
    visible_month,
)
from components.event_modal import event_modal, show_flash
from components.legend import load_clusters, render_legend
from components.navigation import go, require_user, route_param
from config.constants import EVENT_TYPE_LABELS, EVENT_TYPES
from config.settings import config
from services.auth_service import auth_service
from services.event_service import event_service

logger = logging.getLogger(__name__)

user = require_user()
st.title("Calendar")
show_flash()

year, month = visible_month(route_param("date"))
first, last = month_bounds(year, month)
# Include the spill-over days shown around the month
range_start, range_end = add_days(first, -7), add_days(last, 7)

query = st.text_input("Search events", key="calendar_search", placeholder="Title, location or description")
with st.sidebar:
    type_filter = st.selectbox(
        "Event type",
        ["all"] + EVENT_TYPES,
        format_func=lambda t: "All" if t == "all" else EVENT_TYPE_LABELS[t],
        key="calendar_type_filter",
    )

try:
    events = filter_by_type(event_service.list_events(start=range_start, end=range_end, q=query), type_filter)
except ApplicationException as e:
    logger.error(f"Failed to load calendar events: {e.message}")
    st.error(e.message)
    events = []

holidays = holidays_between(range_start, range_end)

render_month_header()
st.fragment(run_every=config.refresh_interval_seconds)(render_month_grid)(events, holidays)

# Actions collected from the grid on this run
open_id = st.session_state.pop(OPEN_EVENT_KEY, None)
if open_id is not None:
    event_modal(open_id, user)

create_day = st.session_state.pop("calendar_create", None)
if create_day:
    target = handle_create_click(create_day)
    if target:
        go(target)

goto = st.session_state.pop("calendar_goto", None)
if goto:
    go(goto)

if st.session_state.get(PENDING_MOVE_KEY) is not None:
    confirm_move_dialog()

render_move_controls(events, user)

left, right = st.columns(2)
with left:
    try:
        render_conflict_list(event_service.conflicts_list())
    except ApplicationException as e:
        logger.error(f"Failed to load conflicts: {e.message}")
        st.caption("Conflicts are unavailable.")
with right:
    render_legend(load_clusters(auth_service.token))
