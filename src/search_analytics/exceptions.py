"""Error taxonomy for the search analytics client.

Every failure of a remote call surfaces as one of three kinds:

- ``AuthRequiredError``: no access token was available, nothing was sent.
- ``TransportError``: the request never reached the service.
- ``ServerError``: the service answered with a non-success status, or with a
  body that could not be understood.
"""

from typing import Any


class SearchAnalyticsError(Exception):
    """Base exception for search analytics errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class AuthRequiredError(SearchAnalyticsError):
    """Raised when no access token is available."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message=message, status_code=401)


class TransportError(SearchAnalyticsError):
    """Raised when the request could not reach the service."""

    def __init__(self, message: str, route: str | None = None):
        super().__init__(message=message, details={"route": route} if route else None)
        self.route = route


class ServerError(SearchAnalyticsError):
    """Raised on a non-success response or a malformed response body."""

    def __init__(self, status: int, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status, details=details)
        self.status = status

    def __str__(self) -> str:
        return f"{self.message} (status {self.status})"
