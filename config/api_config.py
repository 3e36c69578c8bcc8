"""
Generation service endpoint and request configuration.

This is the AUTHORITATIVE source for service configuration.
src/api_client/config.py imports from here — do not maintain parallel copies.

ENVIRONMENT VARIABLES (optional):
    QUIZ_API_BASE_URL   — base URL of the generation service
    QUIZ_API_TIMEOUT    — per-request timeout in seconds
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Service location
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL: str = "http://127.0.0.1:8000"

API_BASE_URL: str = os.getenv("QUIZ_API_BASE_URL", DEFAULT_BASE_URL)

# Per-request timeout in seconds
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("QUIZ_API_TIMEOUT", "20"))

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}

# ---------------------------------------------------------------------------
# Retry policy
# ---------------------------------------------------------------------------
#
# Total attempts = DEFAULT_RETRIES + 1.  Backoff is linear in the attempt
# number; transport failures and retryable HTTP statuses use different
# multipliers.

DEFAULT_RETRIES: int = 1
TRANSPORT_BACKOFF_SECONDS: float = 0.4   # DNS / connection / timeout
SERVER_BACKOFF_SECONDS: float = 0.5      # 429 and 5xx

RATE_LIMIT_STATUS: int = 429

# ---------------------------------------------------------------------------
# Endpoint paths (appended to the base URL path)
# ---------------------------------------------------------------------------

ENDPOINT_PATHS: dict[str, str] = {
    "single_qa":  "/generator/generate_problem/",
    "batch_qa":   "/generator/generate_workbook_for_q_and_a/",
    "single_mcq": "/generator/generate_question_4choice_api/",
    "batch_mcq":  "/generator/generate_4_choice_workbook_for_q_and_a/",
}

# ---------------------------------------------------------------------------
# Wire schema
# ---------------------------------------------------------------------------
#
# The service speaks Japanese field names.  These are contractual literals:
# do not translate or rename.  "問題文" is used both for the existing-question
# list in requests and for the generated question text in responses.

WIRE_KEYS: dict[str, str] = {
    "answer":             "解答",
    "answers":            "解答",
    "existing_questions": "問題文",
    "question":           "問題文",
    "explanation":        "解説",
    "choices":            "選択肢",
    "pattern":            "pattern",
}

# Problem-style tokens accepted by the service's `pattern` field
PATTERN_LITERALS: dict[str, str] = {
    "free_response": "1問1答",
    "fill_in_blank": "穴埋め",
}

# ---------------------------------------------------------------------------
# Fan-out
# ---------------------------------------------------------------------------

# Upper bound on worker threads for client-side parallel generation
MAX_PARALLEL_REQUESTS: int = 8
