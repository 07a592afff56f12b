"""
Custom exceptions for the API test client.
"""


class APIClientError(Exception):
    """Base exception for all API client errors."""
    pass


class NotInitializedError(APIClientError):
    """Raised when a request is issued before initialize() was called."""

    def __init__(self, message: str = "API client not initialized"):
        super().__init__(message)


class LoginError(APIClientError):
    """Raised when the login convenience call does not yield a token."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Login failed: {status_code} {reason}".rstrip())


class ResponseParseError(APIClientError, ValueError):
    """Raised when a response body was requested as JSON but is not JSON."""

    def __init__(self, status_code: int, body_preview: str):
        self.status_code = status_code
        self.body_preview = body_preview
        super().__init__(
            f"Response body (status {status_code}) is not valid JSON: {body_preview!r}"
        )


class RequestTimeoutError(APIClientError):
    """Raised when a bounded wait elapses before the request completes."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Request timeout after {timeout}s")
