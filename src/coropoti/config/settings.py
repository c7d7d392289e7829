"""
Application Settings
Centralized configuration - Single Source of Truth for all endpoints and settings
"""
from dataclasses import dataclass
from typing import Dict, List
from .env import env
from .constants import (
    DEFAULT_READ_ONLY_OFFICE_EMAILS,
    OFFICE_COLORS,
    OFFICE_COLOR_PALETTE,
)


@dataclass
class APIEndpoints:
    base: str
    auth: str
    events: str
    invitations: str
    users: str
    profile: str

    def event(self, event_id) -> str:
        return f"{self.events}/{event_id}"


class AppConfig:
    def __init__(self):
        # Environment
        self.env = env

        # Base URL
        self.api_url = env.api_url.rstrip('/')

        # API Endpoints - SINGLE SOURCE OF TRUTH
        self.endpoints = APIEndpoints(
            base=self.api_url,
            auth=f"{self.api_url}/auth",
            events=f"{self.api_url}/events",
            invitations=f"{self.api_url}/invitations",
            users=f"{self.api_url}/users",
            profile=f"{self.api_url}/profile",
        )

        # Timing
        self.request_timeout = env.request_timeout
        self.upload_timeout = env.upload_timeout
        self.refresh_interval_seconds = env.refresh_interval_seconds
        self.conflict_check_delay = env.conflict_check_delay_ms / 1000.0
        self.drop_suppress_seconds = env.drop_suppress_ms / 1000.0

        # Permission and color tables
        self.read_only_office_emails: List[str] = [
            email.lower() for email in (env.read_only_office_emails or DEFAULT_READ_ONLY_OFFICE_EMAILS)
        ]
        self.office_colors: Dict[str, str] = dict(OFFICE_COLORS)
        self.office_color_palette: List[str] = list(OFFICE_COLOR_PALETTE)

    @classmethod
    def get_instance(cls):
        if not hasattr(cls, '_instance'):
            cls._instance = cls()
        return cls._instance

# Export singleton instance - Use this throughout the app
config = AppConfig.get_instance()

