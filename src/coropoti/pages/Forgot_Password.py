import streamlit as st

from components.navigation import go

st.title("Forgot password?")
st.info("Password reset is not configured. Contact your administrator to reset your password.")
st.caption(
    "If your organization has enabled email-based password reset, a link would be sent to your "
    "registered email. Otherwise, ask an admin to update your account."
)

if st.button("Back to Sign in"):
    go("/login")
