import logging
import requests
from typing import Dict, Any, Optional, List, Callable, Union
import streamlit as st
from config.settings import config
from config.constants import ERROR_MESSAGES
from app_lib.exceptions import (
    APIException,
    AuthorizationException,
    NetworkException,
    ServerRejectedException,
)

logger = logging.getLogger(__name__)

TOKEN_SESSION_KEY = "auth_token"

JSONResponse = Union[Dict[str, Any], List[Any]]


def session_token() -> Optional[str]:
    """Read the bearer token of the current browser session."""
    return st.session_state.get(TOKEN_SESSION_KEY)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if body.get(key):
                return str(body[key])
    return response.reason or f"HTTP {response.status_code}"


class APIClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.session = session or requests.Session()
        self.base_url = (base_url or config.endpoints.base).rstrip('/')
        self.token_provider = token_provider or session_token
        self._setup_defaults()

    def _setup_defaults(self):
        """Setup default headers and session configuration"""
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def _headers(self, multipart: bool = False) -> Dict[str, Optional[str]]:
        headers: Dict[str, Optional[str]] = {}
        if multipart:
            # None removes the session default so requests sets the multipart boundary
            headers['Content-Type'] = None
        token = self.token_provider()
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers

    def _handle_error(self, error: Exception, url: str, show_ui_error: bool = False):
        if isinstance(error, APIException):
            exc = error
        elif isinstance(error, requests.exceptions.Timeout):
            exc = NetworkException(ERROR_MESSAGES["timeout_error"], url=url)
        elif isinstance(error, requests.exceptions.ConnectionError):
            exc = NetworkException(ERROR_MESSAGES["connection_error"], url=url)
        elif isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
            status_code = error.response.status_code
            message = _error_message(error.response)
            if status_code in (401, 403):
                exc = AuthorizationException(message, status_code=status_code, url=url)
            else:
                exc = ServerRejectedException(message, status_code=status_code, url=url)
        else:
            exc = APIException(f"Request failed: {error}", url=url)

        logger.error(f"Request to {url} failed: {exc.message}")

        # Show in UI if enabled
        if show_ui_error:
            st.error(exc.message)

        raise exc from error

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith('http'):
            return endpoint
        if endpoint.startswith('/'):
            return f"{self.base_url}{endpoint}"
        return f"{self.base_url}/{endpoint}"

    def _send(self, method: str, endpoint: str, show_errors: bool = False, multipart: bool = False, **kwargs) -> JSONResponse:
        url = self._build_url(endpoint)
        request_config = {
            "method": method,
            "url": url,
            "headers": self._headers(multipart=multipart),
            **kwargs,
        }
        try:
            response = self.session.request(**request_config)
            response.raise_for_status()
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                return {}
        except Exception as e:
            self._handle_error(e, url, show_errors)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: int = 30,
        show_errors: bool = False
    ) -> JSONResponse:
        return self._send("GET", endpoint, show_errors=show_errors, params=params, timeout=timeout)

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[List] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: int = 30,
        show_errors: bool = False
    ) -> JSONResponse:
        if files:
            # Multipart: form fields go alongside the files, never as JSON
            return self._send(
                "POST", endpoint, show_errors=show_errors, multipart=True,
                files=files, data=data, params=params, timeout=timeout,
            )
        return self._send("POST", endpoint, show_errors=show_errors, json=data, params=params, timeout=timeout)

    def put(
        self,
        endpoint: str,
        data: Dict[str, Any],
        timeout: int = 30,
        show_errors: bool = False
    ) -> JSONResponse:
        return self._send("PUT", endpoint, show_errors=show_errors, json=data, timeout=timeout)

    def delete(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: int = 30,
        show_errors: bool = False
    ) -> JSONResponse:
        return self._send("DELETE", endpoint, show_errors=show_errors, params=params, timeout=timeout)

    def upload(
        self,
        endpoint: str,
        files: List,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: int = 300,
        show_errors: bool = False
    ) -> JSONResponse:
        return self.post(
            endpoint=endpoint,
            files=files,
            data=data,
            params=params,
            timeout=timeout,
            show_errors=show_errors
        )


# Export singleton instance - use this throughout the app
api_client = APIClient()

