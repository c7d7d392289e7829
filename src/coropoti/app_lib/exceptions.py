"""
Custom exceptions for the scheduling client.

Every failure a view can surface derives from ApplicationException so pages
can catch one type, show the message and keep their prior state.
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ApplicationException):
    """Client-side validation failure; raised before any request is sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else {})
        self.field = field


class APIException(ApplicationException):
    """Exception raised when a call to the scheduling backend fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.status_code = status_code
        self.url = url


class NetworkException(APIException):
    """The backend could not be reached (connection refused, DNS, timeout)."""
    pass


class ServerRejectedException(APIException):
    """The backend answered with an error status for a request."""
    pass


class AuthorizationException(ServerRejectedException):
    """The backend refused the request for the current identity (401/403)."""
    pass


class NotFoundException(ServerRejectedException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any, url: Optional[str] = None):
        message = f"{resource} not found: {identifier}"
        super().__init__(message, status_code=404, url=url,
                         details={"resource": resource, "identifier": identifier})
