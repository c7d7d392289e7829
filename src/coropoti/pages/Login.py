import logging

import streamlit as st

from app_lib.exceptions import ApplicationException
from components.navigation import go
from services.auth_service import auth_service

logger = logging.getLogger(__name__)

st.title("📅 Scheduling Management")
st.caption("Plan, coordinate, and confirm events across offices.")

with st.form("login_form"):
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")
    remember = st.checkbox("Remember me")
    submitted = st.form_submit_button("Sign in", type="primary")

if submitted:
    try:
        with st.spinner("Signing in..."):
            user = auth_service.login(email, password, remember)
        logger.info(f"User {user.id} signed in")
        st.rerun()
    except ApplicationException as e:
        st.error(e.message or "Login failed.")

col1, col2 = st.columns(2)
with col1:
    if st.button("Create an account"):
        go("/register")
with col2:
    if st.button("Forgot password?"):
        go("/forgot-password")
