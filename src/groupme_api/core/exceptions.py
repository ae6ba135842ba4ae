"""Exceptions raised by the GroupMe API client.

Transport and decode failures are raised from the dispatcher. Application
errors reported by the service stay in the decoded response and are only
raised when the caller asks for it via ``ApiResponse.raise_for_error()``.
"""

from __future__ import annotations


class GroupMeError(Exception):
    """Base exception for GroupMe client errors."""

    pass


class GroupMeTransportError(GroupMeError):
    """Raised when a request cannot be completed (network, timeout, TLS).

    Attributes:
        method: HTTP method of the failed request.
        endpoint: API endpoint path.
    """

    def __init__(self, message: str, method: str = "", endpoint: str = ""):
        self.method = method
        self.endpoint = endpoint
        super().__init__(message)


class GroupMeDecodeError(GroupMeError):
    """Raised when a response body is not valid JSON.

    Attributes:
        status_code: HTTP status of the response, None when served from cache.
        body: Leading part of the offending body.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body[:200]
        super().__init__(message)


class GroupMeAPIError(GroupMeError):
    """Error reported by the GroupMe service inside a decoded response.

    Attributes:
        code: Status code from the response envelope.
        errors: Error messages from the response envelope.
    """

    def __init__(self, code: int, errors: list[str] | None = None):
        self.code = code
        self.errors = errors or []
        detail = "; ".join(self.errors) or "no details"
        super().__init__(f"GroupMe API Error {code}: {detail}")
