"""
AuthService - sign-in state for the current browser session.

The bearer token and the signed-in user live in a session store
(`st.session_state` in the app, any dict in tests). The API client reads the
token from the same key on every request. An optional token store (a browser
cookie in the app) keeps the token across page reloads.
"""

import logging
from typing import MutableMapping, Optional

import streamlit as st
from pydantic import ValidationError

from app_lib.api.client import TOKEN_SESSION_KEY, api_client
from app_lib.exceptions import AuthorizationException, ValidationException
from config.constants import MIN_PASSWORD_LENGTH
from config.settings import config
from models.models import AuthResult, LoginRequest, RegisterRequest, User

logger = logging.getLogger(__name__)

USER_SESSION_KEY = "auth_user"


class AuthService:
    def __init__(self, client=None, store: Optional[MutableMapping] = None, token_store=None):
        self.client = client or api_client
        self.endpoints = config.endpoints
        self._store = store
        self.token_store = token_store

    def attach_token_store(self, token_store):
        self.token_store = token_store

    @property
    def store(self) -> MutableMapping:
        return st.session_state if self._store is None else self._store

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_SESSION_KEY)

    @property
    def user(self) -> Optional[User]:
        data = self.store.get(USER_SESSION_KEY)
        if data is None:
            return None
        return data if isinstance(data, User) else User(**data)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    def _remember(self, token: str, user: Optional[User], remember: bool = False):
        self.store[TOKEN_SESSION_KEY] = token
        if self.token_store is not None:
            self.token_store.save(token, remember)
        if user is not None:
            self.store[USER_SESSION_KEY] = user.model_dump()

    def login(self, email: str, password: str, remember: bool = False) -> User:
        try:
            request = LoginRequest(email=email.strip(), password=password, remember=remember)
        except ValidationError:
            raise ValidationException("Email and password are required.")

        response = self.client.post(f"{self.endpoints.auth}/login", data=request.model_dump())
        result = AuthResult(**response)
        self._remember(result.token, result.user, remember)
        # Prefer the server's current view of the account over the login echo
        return self.refresh() or result.user

    def register(self, name: str, email: str, password: str, confirm_password: str) -> User:
        if password != confirm_password:
            raise ValidationException("Passwords do not match.", field="confirm_password")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", field="password"
            )
        try:
            request = RegisterRequest(name=name.strip(), email=email.strip(), password=password)
        except ValidationError:
            raise ValidationException("Name, email and password are required.")

        response = self.client.post(f"{self.endpoints.auth}/register", data=request.model_dump())
        result = AuthResult(**response)
        self._remember(result.token, result.user)
        return self.refresh() or result.user

    def me(self) -> User:
        return User(**self.client.get(f"{self.endpoints.auth}/me"))

    def refresh(self) -> Optional[User]:
        """Reload the signed-in user; a rejected token signs the session out."""
        if not self.token:
            return None
        try:
            user = self.me()
        except AuthorizationException as e:
            logger.warning(f"Stored token rejected, signing out: {e.message}")
            self.logout()
            return None
        self.store[USER_SESSION_KEY] = user.model_dump()
        return user

    def restore(self) -> Optional[User]:
        """Resolve the user for a stored token once per session."""
        if not self.token and self.token_store is not None:
            saved = self.token_store.load()
            if saved:
                self.store[TOKEN_SESSION_KEY] = saved
        if self.token and self.store.get(USER_SESSION_KEY) is None:
            return self.refresh()
        return self.user

    def logout(self):
        self.store.pop(TOKEN_SESSION_KEY, None)
        self.store.pop(USER_SESSION_KEY, None)
        if self.token_store is not None:
            self.token_store.clear()


# Export singleton
auth_service = AuthService()
