"""
Environment variable management
Centralized access to environment variables with defaults
"""
import os
from typing import List, Optional


def get_env(key: str, default: Optional[str] = None) -> str:
    return os.getenv(key, default)


def get_env_int(key: str, default: int = 0) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_list(key: str, default: Optional[List[str]] = None) -> List[str]:
    value = os.getenv(key)
    if value is None:
        return list(default or [])
    return [item.strip() for item in value.split(',') if item.strip()]


# Environment configuration
class EnvironmentConfig:
    """Environment configuration singleton"""

    def __init__(self):
        # API Configuration
        self.api_url = get_env("COROPOTI_API_URL", "http://localhost:3001/api")

        # Application Settings
        self.log_level = get_env("LOG_LEVEL", "INFO")
        self.timezone = get_env("TIMEZONE", "Asia/Manila")

        # Performance Settings
        self.request_timeout = get_env_int("REQUEST_TIMEOUT", 30)
        self.upload_timeout = get_env_int("UPLOAD_TIMEOUT", 300)

        # Scheduling behaviour
        self.refresh_interval_seconds = get_env_int("REFRESH_INTERVAL_SECONDS", 60)
        self.conflict_check_delay_ms = get_env_int("CONFLICT_CHECK_DELAY_MS", 500)
        self.drop_suppress_ms = get_env_int("DROP_SUPPRESS_MS", 400)
        self.read_only_office_emails = get_env_list("READ_ONLY_OFFICE_EMAILS")

    @classmethod
    def get_instance(cls):
        """Get singleton instance"""
        if not hasattr(cls, '_instance'):
            cls._instance = cls()
        return cls._instance


# Export singleton
env = EnvironmentConfig.get_instance()
