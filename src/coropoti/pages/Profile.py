import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from components.event_modal import flash, show_flash
from components.navigation import require_user
from models.models import PROFILE_FORM_FIELDS
from services.auth_service import auth_service
from services.profile_service import profile_service

logger = logging.getLogger(__name__)

user = require_user()
st.title("Profile")
show_flash()

try:
    profile = profile_service.get_my_profile()
except ApplicationException as e:
    logger.error(f"Failed to load profile: {e.message}")
    st.error(e.message)
    profile = None

if profile is not None:
    col1, col2 = st.columns([1, 3])
    with col1:
        if profile.picture:
            st.image(profile.picture, width=120)
        else:
            st.markdown(f"## {profile.initials or '?'}")
    with col2:
        st.markdown(f"**{profile.full_name or user.name}**")
        st.caption(" · ".join(v for v in [profile.designation, profile.office, profile.division] if v))
        if profile.qr_code:
            st.image(profile.qr_code, width=120, caption="QR code")

current = profile.model_dump() if profile else {}
with st.form("profile_form"):
    values = {}
    cols = st.columns(2)
    for index, name in enumerate(PROFILE_FORM_FIELDS):
        with cols[index % 2]:
            values[name] = st.text_input(name.replace("_", " ").title(), value=current.get(name) or "")
    picture = st.file_uploader("Picture", type=["png", "jpg", "jpeg"])
    submitted = st.form_submit_button("Save profile", type="primary")

if submitted:
    try:
        upload = (picture.name, picture.getvalue(), picture.type) if picture else None
        profile_service.save_profile(values, picture=upload)
        auth_service.refresh()
        flash("Profile saved.")
        st.rerun()
    except ApplicationException as e:
        st.error(e.message)

with st.expander("Remove profile"):
    sure = st.checkbox("I want to remove my profile details")
    if st.button("Remove profile", disabled=not sure):
        try:
            profile_service.remove_profile()
            flash("Profile removed.")
            st.rerun()
        except ApplicationException as e:
            st.error(e.message)
