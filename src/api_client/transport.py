"""
HTTP transport: single request execution, status classification, retry with
linear backoff, and cooperative cancellation.

Retry schedule (attempt n is the 1-based retry about to be made):
  transport failure          → wait 0.4 × n s
  HTTP 429 / 5xx             → wait 0.5 × n s
  any other non-2xx          → fail immediately
"""

from __future__ import annotations

import logging
import threading

import requests

from .config import (
    DEFAULT_RETRIES,
    RATE_LIMIT_STATUS,
    SERVER_BACKOFF_SECONDS,
    TRANSPORT_BACKOFF_SECONDS,
)
from .errors import CancelledError, ServerError, TransportError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------

class CancelToken:
    """
    Cooperative cancellation flag shared between a caller and in-flight work.

    Backoff waits block on the underlying event, so :meth:`cancel` wakes a
    sleeping retry loop immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError()

    def wait(self, seconds: float) -> None:
        """Sleep for ``seconds``; raise :class:`CancelledError` if cancelled meanwhile."""
        if self._event.wait(seconds):
            raise CancelledError()


# ---------------------------------------------------------------------------
# Status classification and backoff helpers
# ---------------------------------------------------------------------------

def is_success(status: int) -> bool:
    return 200 <= status < 300


def is_retryable_status(status: int) -> bool:
    """429 and every 5xx are transient; everything else is terminal."""
    return status == RATE_LIMIT_STATUS or 500 <= status < 600


def transport_backoff(attempt: int) -> float:
    return TRANSPORT_BACKOFF_SECONDS * attempt


def server_backoff(attempt: int) -> float:
    return SERVER_BACKOFF_SECONDS * attempt


def wait_before_retry(seconds: float, cancel_token: CancelToken) -> None:
    """Suspension point between attempts."""
    cancel_token.wait(seconds)


# ---------------------------------------------------------------------------
# Main retry loop
# ---------------------------------------------------------------------------

def send_with_retry(
    session: requests.Session,
    method: str,
    url: str,
    body: bytes | None = None,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
    retries: int = DEFAULT_RETRIES,
    cancel_token: CancelToken | None = None,
) -> tuple[bytes, int]:
    """
    Send one HTTP request, retrying transient failures.

    At most ``retries + 1`` requests are issued.  Cancellation is checked
    before every attempt, after every response and throughout every backoff
    wait.

    Args:
        session: ``requests.Session`` (or compatible) used to send.
        method: HTTP verb.
        url: Fully resolved request URL.
        body: Encoded request body.
        headers: Request headers.
        timeout: Per-attempt timeout in seconds.
        retries: Number of retries after the first attempt.
        cancel_token: Optional token; a fresh, never-cancelled token is used
            when omitted.

    Returns:
        Tuple of (response body bytes, HTTP status code).

    Raises:
        TransportError: Network failure on the final attempt.
        ServerError: Non-retryable status, or retryable status on the final
            attempt.
        CancelledError: ``cancel_token`` was cancelled.
    """
    token = cancel_token or CancelToken()
    attempt = 0

    while True:
        token.raise_if_cancelled()
        try:
            response = session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=timeout,
            )
        except requests.RequestException as exc:
            token.raise_if_cancelled()
            if attempt < retries:
                attempt += 1
                delay = transport_backoff(attempt)
                logger.warning(
                    "%s %s failed (%s); retry %d/%d in %.1fs",
                    method, url, exc, attempt, retries, delay,
                )
                wait_before_retry(delay, token)
                continue
            raise TransportError(exc) from exc

        token.raise_if_cancelled()
        status = response.status_code

        if is_success(status):
            return response.content, status

        if is_retryable_status(status) and attempt < retries:
            attempt += 1
            delay = server_backoff(attempt)
            logger.warning(
                "%s %s returned HTTP %d; retry %d/%d in %.1fs",
                method, url, status, attempt, retries, delay,
            )
            wait_before_retry(delay, token)
            continue

        raise ServerError(status, response.content)
