"""
Client-side view of the service configuration.

Values are imported from config/api_config.py (the authoritative source) so
that the api_client modules have a single local import point.
"""

from config.api_config import (
    API_BASE_URL,
    DEFAULT_HEADERS,
    DEFAULT_RETRIES,
    ENDPOINT_PATHS,
    MAX_PARALLEL_REQUESTS,
    PATTERN_LITERALS,
    RATE_LIMIT_STATUS,
    REQUEST_TIMEOUT_SECONDS,
    SERVER_BACKOFF_SECONDS,
    TRANSPORT_BACKOFF_SECONDS,
    WIRE_KEYS,
)

__all__ = [
    "API_BASE_URL",
    "DEFAULT_HEADERS",
    "DEFAULT_RETRIES",
    "ENDPOINT_PATHS",
    "MAX_PARALLEL_REQUESTS",
    "PATTERN_LITERALS",
    "RATE_LIMIT_STATUS",
    "REQUEST_TIMEOUT_SECONDS",
    "SERVER_BACKOFF_SECONDS",
    "TRANSPORT_BACKOFF_SECONDS",
    "WIRE_KEYS",
]
