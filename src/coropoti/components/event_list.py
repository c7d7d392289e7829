import streamlit as st
import pandas as pd
from datetime import datetime
from typing import Iterable, List, Optional

from app_lib.scheduling.status import derive_status
from app_lib.scheduling.tentative import parse_tentative_description
from app_lib.utils.formatters import (
    format_date_range,
    format_time_range,
    participants_acronyms,
)
from config.constants import EVENT_TYPE_LABELS
from models.models import Event


def events_dataframe(events: Iterable[Event], now: datetime) -> pd.DataFrame:
    """Table view of events with their live status."""
    rows = []
    for event in events:
        meta = parse_tentative_description(event.description)
        title = f"{event.title} (Tentative)" if meta.is_tentative else event.title
        rows.append({
            "ID": event.id,
            "Date": format_date_range(event.date, event.effective_end_date),
            "Time": format_time_range(event.start_time, event.end_time),
            "Title": title,
            "Type": EVENT_TYPE_LABELS.get(event.type.value, event.type.value),
            "Host": event.creator_name or "Unknown",
            "Participants": participants_acronyms(event.participants_summary),
            "Location": event.location or "TBA",
            "Status": derive_status(event, now).label,
        })
    return pd.DataFrame(rows, columns=[
        "ID", "Date", "Time", "Title", "Type", "Host", "Participants", "Location", "Status",
    ])


def render_event_list(
    events: List[Event],
    now: datetime,
    key_prefix: str,
    empty_text: str = "No events found.",
) -> Optional[int]:
    """
    Render events as a selectable table; returns the id of the selected row.

    A selection is reported once: the table is re-keyed afterwards so later
    reruns start with nothing selected.
    """
    if not events:
        st.info(empty_text)
        return None

    version_key = f"{key_prefix}_table_version"
    df = events_dataframe(events, now)
    selection = st.dataframe(
        df.drop(columns=["ID"]),
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=f"{key_prefix}_table_{st.session_state.get(version_key, 0)}",
    )
    rows = selection.selection.rows if selection else []
    if not rows:
        return None
    st.session_state[version_key] = st.session_state.get(version_key, 0) + 1
    return int(df.iloc[rows[0]]["ID"])


def render_event_card(event: Event, now: datetime, key_prefix: str) -> bool:
    """Compact card; returns True when "View" is clicked."""
    info = derive_status(event, now)
    meta = parse_tentative_description(event.description)
    with st.container(border=True):
        col1, col2 = st.columns([5, 1])
        with col1:
            badge = " · Tentative" if meta.is_tentative else ""
            st.markdown(f"**{event.title}**{badge}")
            st.caption(
                f"{format_date_range(event.date, event.effective_end_date)} · "
                f"{format_time_range(event.start_time, event.end_time)} · {info.label}"
            )
            if event.location:
                st.caption(event.location)
        with col2:
            return st.button("View", key=f"{key_prefix}_view_{event.id}")
