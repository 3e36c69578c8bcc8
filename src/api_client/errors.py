"""
Exception hierarchy for generation-service calls.

Every error carries a human-readable message via ``str(exc)``; the quiz
orchestration layer shows that message to the user as-is.
"""

from __future__ import annotations


class APIError(Exception):
    """Base class for all generation-client failures."""

    message = "API request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidURLError(APIError):
    message = "Invalid service URL"

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__(f"Invalid service URL: {url!r}" if url else None)


class EncodingError(APIError):
    message = "Failed to encode request as JSON"

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__(
            f"{self.message}: {cause}" if cause is not None else None
        )


class TransportError(APIError):
    """Network-level failure (DNS, connection refused, timeout, ...)."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ServerError(APIError):
    """Non-2xx HTTP response that was not (or no longer) retryable."""

    def __init__(self, status: int, body: bytes | None = None):
        self.status = status
        self.body = body
        super().__init__(f"Server error: HTTP {status}")


class DecodingError(APIError):
    """Response body did not match the expected schema."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to decode response JSON: {cause}")


class MalformedResponseError(APIError):
    """Batch response cardinality does not match the request."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Malformed response: expected {expected} item(s), received {received}"
        )


class CancelledError(APIError):
    message = "Request was cancelled"
