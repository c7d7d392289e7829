"""
Office legend and host filter, shared by the calendar and upcoming pages.
"""
import logging
from typing import List, Optional

import streamlit as st

from app_lib.exceptions import ApplicationException
from app_lib.scheduling.views import HostOption, host_options
from app_lib.utils.formatters import cluster_short_label
from config.constants import LEGEND_FALLBACK_COLOR
from models.models import Cluster, User
from services.directory_service import directory_service

logger = logging.getLogger(__name__)


@st.cache_data(show_spinner=False, ttl=300)  # 5-minute cache
def _legend_clusters_cached(token: Optional[str]) -> List[dict]:
    return [c.model_dump() for c in directory_service.legend_clusters()]


@st.cache_data(show_spinner=False, ttl=300)
def _users_cached(token: Optional[str]) -> List[dict]:
    return [u.model_dump() for u in directory_service.users()]


def load_clusters(token: Optional[str]) -> List[Cluster]:
    """Cluster legend for the session; an unreachable backend gives an empty legend."""
    try:
        return [Cluster(**row) for row in _legend_clusters_cached(token)]
    except ApplicationException as e:
        logger.error(f"Failed to load legend clusters: {e.message}")
        return []


def load_users(token: Optional[str]) -> List[User]:
    try:
        return [User(**row) for row in _users_cached(token)]
    except ApplicationException as e:
        logger.error(f"Failed to load users: {e.message}")
        return []


def _swatch(color: Optional[str], label: str) -> str:
    return (
        f'<span style="display:inline-block;width:10px;height:10px;border-radius:50%;'
        f'background:{color or LEGEND_FALLBACK_COLOR};margin-right:6px"></span>{label}'
    )


def render_legend(clusters: List[Cluster]):
    st.subheader("Legend")
    if not clusters:
        st.caption("No legend available.")
        return
    for cluster in clusters:
        st.markdown(_swatch(cluster.color, f"**{cluster_short_label(cluster.name)}** {cluster.name}"),
                    unsafe_allow_html=True)
        for office in cluster.offices:
            st.markdown(
                "&nbsp;&nbsp;&nbsp;" + _swatch(office.color or cluster.color, office.name),
                unsafe_allow_html=True,
            )


def render_host_filter(clusters: List[Cluster], users: List[User], key: str) -> Optional[HostOption]:
    """Select a host account; returns None for "All hosts"."""
    options: List[Optional[HostOption]] = [None]
    for group in host_options(clusters, users):
        options.extend(group.items)
    return st.selectbox(
        "Host",
        options,
        format_func=lambda option: "All hosts" if option is None else f"{option.short} - {option.label}",
        key=key,
    )
