"""
Page switching and the signed-in sidebar.

Routes such as `/events/12/edit` carry parameters. `go` parks them in session
state for the target page; when that page is entered they become its query
string, which is the only place pages read them from. Menu navigation clears
the query string, so a page opened from the sidebar never sees parameters
left over from an earlier visit.
"""
import logging
from typing import MutableMapping, Optional
from urllib.parse import parse_qsl

import streamlit as st

from app_lib.routes import resolve_route
from app_lib.scheduling.clock import get_clock
from app_lib.utils.formatters import format_date
from models.models import User
from services.auth_service import auth_service

logger = logging.getLogger(__name__)

PARAMS_KEY = "route_params"
CURRENT_PAGE_KEY = "current_page"


def go(path: str):
    """Switch to the page serving `path` (query string allowed), applying the auth redirects."""
    resolution = resolve_route(path, auth_service.is_authenticated)
    params = dict(resolution.params)
    if "?" in path and not resolution.redirected:
        params.update(parse_qsl(path.split("?", 1)[1]))
    st.session_state[PARAMS_KEY] = {"page": resolution.route.page, "params": params}
    st.switch_page(resolution.route.page)


def route_param(name: str, default: Optional[str] = None, query: Optional[MutableMapping] = None) -> Optional[str]:
    query = st.query_params if query is None else query
    value = query.get(name)
    return str(value) if value else default


def enter_page(page: str, state: Optional[MutableMapping] = None, query: Optional[MutableMapping] = None):
    """Called by the entry script before a page runs; hands parameters from `go` to their page once."""
    state = st.session_state if state is None else state
    query = st.query_params if query is None else query
    state[CURRENT_PAGE_KEY] = page
    handed = state.pop(PARAMS_KEY, None)
    if handed and handed.get("page") == page:
        query.clear()
        query.update(handed.get("params") or {})


def current_user() -> Optional[User]:
    return auth_service.user


def require_user() -> User:
    """The signed-in user; a guest is sent to the login page."""
    user = auth_service.user
    if user is None:
        go("/login")
        st.stop()
    return user


def render_sidebar(user: Optional[User]):
    if user is None:
        return
    with st.sidebar:
        st.markdown(f"**{user.name or user.email}**")
        st.caption(f"{user.email or ''} · {user.role.value}")
        st.caption(f"Today: {format_date(get_clock().today(), long=True)}")
        if st.button("Sign out", key="sidebar_sign_out", use_container_width=True):
            logger.info(f"User {user.id} signed out")
            auth_service.logout()
            st.session_state.pop(PARAMS_KEY, None)
            st.rerun()
