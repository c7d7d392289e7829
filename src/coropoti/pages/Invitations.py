import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.utils.formatters import format_date, format_time_range
from components.event_modal import event_modal, show_flash
from components.navigation import require_user
from services.directory_service import directory_service

logger = logging.getLogger(__name__)

user = require_user()
st.title("Invitations")
st.caption("Events you are invited to that still need a response.")
show_flash()

load_failed = False
try:
    invitations = directory_service.invitations()
except ApplicationException as e:
    logger.error(f"Failed to load invitations: {e.message}")
    st.error(e.message)
    load_failed = True
    invitations = []

if not invitations and not load_failed:
    st.info("No pending invitations.")

for invitation in invitations:
    with st.container(border=True):
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(f"**{invitation.title}**")
            st.caption(
                f"{format_date(invitation.date)} · {format_time_range(invitation.start_time, invitation.end_time)}"
                f" · {invitation.location or 'TBA'} · Host: {invitation.creator_name or 'Unknown'}"
            )
        with col2:
            if st.button("Respond", key=f"invite_{invitation.event_id}"):
                event_modal(invitation.event_id, user)
