"""
Application constants
Centralized constant definitions shared by components, services and pages.
"""
from typing import Dict, List

# Event types
EVENT_TYPES: List[str] = ["meeting", "zoom", "event"]
EVENT_TYPE_LABELS: Dict[str, str] = {
    "meeting": "Meeting",
    "zoom": "Zoom",
    "event": "Event",
}
DEFAULT_EVENT_COLOR = "#3b82f6"
LEGEND_FALLBACK_COLOR = "#94a3b8"

# Colors offered on the edit form
FORM_COLORS: List[str] = ["#3b82f6", "#22c55e", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899"]

# Palette used when an account has no assigned office color
OFFICE_COLOR_PALETTE: List[str] = [
    "#3b82f6",
    "#22c55e",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#14b8a6",
]

# Office accounts that may only view and create events
DEFAULT_READ_ONLY_OFFICE_EMAILS: List[str] = [
    "romo@tesda.gov.ph",
    "po@tesda.gov.ph",
    "smo@tesda.gov.ph",
    "co@tesda.gov.ph",
    "icto@tesda.gov.ph",
    "as@tesda.gov.ph",
    "plo@tesda.gov.ph",
    "pio@tesda.gov.ph",
    "qso@tesda.gov.ph",
    "fms@tesda.gov.ph",
    "clgeo@tesda.gov.ph",
    "ebeto@tesda.gov.ph",
]

# Assigned calendar color per office / cluster account
OFFICE_COLORS: Dict[str, str] = {
    "cluster.osec@tesda.gov.ph": "#ef4444",
    "cluster.oddg.pp@tesda.gov.ph": "#ec4899",
    "cluster.oddg.ai@tesda.gov.ph": "#eab308",
    "cluster.oddg.sc@tesda.gov.ph": "#f59e0b",
    "cluster.oddg.pl@tesda.gov.ph": "#8b5cf6",
    "cluster.oddg.fla@tesda.gov.ph": "#22c55e",
    "cluster.oddg.tesdo@tesda.gov.ph": "#3b82f6",
    "romo@tesda.gov.ph": "#3b82f6",
    "osec@tesda.gov.ph": "#ef4444",
    "po@tesda.gov.ph": "#ec4899",
    "smo@tesda.gov.ph": "#ef4444",
    "co@tesda.gov.ph": "#3b82f6",
    "icto@tesda.gov.ph": "#eab308",
    "as@tesda.gov.ph": "#eab308",
    "plo@tesda.gov.ph": "#8b5cf6",
    "pio@tesda.gov.ph": "#ef4444",
    "qso@tesda.gov.ph": "#ec4899",
    "fms@tesda.gov.ph": "#22c55e",
    "clgeo@tesda.gov.ph": "#f59e0b",
    "ebeto@tesda.gov.ph": "#8b5cf6",
}

# Required post-event document labels
POST_DOCUMENT_LABELS: Dict[str, str] = {
    "event": "After Activity Report (AAR)",
}
DEFAULT_POST_DOCUMENT_LABEL = "Minutes of the Meeting"

# Tentative schedule marker embedded in event descriptions
TENTATIVE_PREFIX = "[TENTATIVE]"

# UI Constants
UI_CONSTANTS = {
    "page_title": "COROPOTI Schedule Management",
    "page_icon": "📅",
    "layout": "wide",
    "sidebar_state": "expanded"
}

# Dashboard windows (days)
DASHBOARD_WINDOW_DAYS = 30
UPCOMING_HORIZON_DAYS = 7
UPCOMING_FETCH_BACK_DAYS = 7
UPCOMING_FETCH_AHEAD_DAYS = 60
RECENT_FETCH_BACK_DAYS = 60
YEAR_OPTIONS_BACK = 7

# Password rules on registration
MIN_PASSWORD_LENGTH = 6

# Error Messages
ERROR_MESSAGES = {
    "connection_error": "Cannot reach server. Please check that the backend is running and try again.",
    "timeout_error": "Request timed out. Please try again.",
    "weekend_locked": "Weekends are locked. Please select a weekday.",
    "weekend_drop": "Weekends are locked. Please drop on a weekday.",
    "weekend_resize": "Weekends are locked. Please use a weekday.",
    "weekend_range": "Weekends are locked. Please use weekdays only in the selected date range.",
    "event_done": "This event is already done and is view-only.",
    "event_cancelled": "This event is cancelled and is view-only.",
    "date_done": "This date is already done. It is view-only.",
    "cannot_edit": "You cannot edit this event.",
    "read_only_account": "This account cannot edit events.",
    "move_failed": "Failed to reschedule.",
    "resize_failed": "Failed to resize.",
    "save_failed": "Failed to save event.",
}
