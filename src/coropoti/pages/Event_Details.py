import streamlit as st

from app_lib.scheduling.views import history_timeline
from app_lib.utils.formatters import format_datetime
from components.event_modal import render_event_panel, show_flash
from components.navigation import go, require_user, route_param

user = require_user()
event_id = route_param("id")

if st.button("Back to Calendar"):
    go("/calendar")

if not event_id:
    st.error("Event not found.")
    st.stop()

show_flash()
event = render_event_panel(event_id, user)

if event is not None:
    accepted = [r for r in event.rsvps if r.status.value == "accepted"]
    st.subheader("Attendance")
    if not accepted:
        st.caption("No confirmed attendance yet.")
    for rsvp in accepted:
        rep = f" ({rsvp.representative_name})" if rsvp.representative_name else ""
        st.markdown(f"- {rsvp.office_name or 'Office'}{rep}")

    st.subheader("History")
    items = history_timeline(event)
    if not items:
        st.caption("No history records yet.")
    for item in items:
        st.markdown(f"- {format_datetime(item.when)}: {item.text}")
