"""
Browser cookie holding the bearer token between visits.

Session state is lost on a page reload, so the token is also written to a
cookie and read back by `AuthService.restore`.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "coropoti_token"
REMEMBER_DAYS = 30


class BrowserTokenStore:
    """Token cookie on top of an `extra_streamlit_components.CookieManager`."""

    def __init__(self, cookies, name: str = TOKEN_COOKIE):
        self.cookies = cookies
        self.name = name

    def load(self) -> Optional[str]:
        value = self.cookies.get(self.name)
        return str(value) if value else None

    def save(self, token: str, remember: bool = False):
        # Without "remember me" the cookie ends with the browser session
        expires_at = datetime.now() + timedelta(days=REMEMBER_DAYS) if remember else None
        self.cookies.set(self.name, token, expires_at=expires_at, key=f"{self.name}_set")

    def clear(self):
        if self.cookies.get(self.name) is None:
            return
        self.cookies.delete(self.name, key=f"{self.name}_delete")
        logger.info("Token cookie cleared")
