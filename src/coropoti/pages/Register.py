import streamlit as st

from app_lib.exceptions import ApplicationException
from components.navigation import go
from config.constants import MIN_PASSWORD_LENGTH
from services.auth_service import auth_service

st.title("Create an account")

with st.form("register_form"):
    name = st.text_input("Office / full name")
    email = st.text_input("Email")
    password = st.text_input("Password", type="password", help=f"At least {MIN_PASSWORD_LENGTH} characters.")
    confirm = st.text_input("Confirm password", type="password")
    submitted = st.form_submit_button("Register", type="primary")

if submitted:
    try:
        with st.spinner("Creating account..."):
            auth_service.register(name, email, password, confirm)
        st.rerun()
    except ApplicationException as e:
        st.error(e.message or "Registration failed.")

if st.button("Back to Sign in"):
    go("/login")
