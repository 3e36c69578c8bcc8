"""
Generation client: URL and header construction plus the four typed
generation operations.

Each operation is build request → encode → send with retry → decode.
Errors from the transport and codec layers propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlsplit, urlunsplit

import requests
from pydantic import TypeAdapter

from .codec import MCQ_ITEM_LIST, QA_ITEM, QA_ITEM_LIST, build_request, decode, encode
from .config import API_BASE_URL, DEFAULT_HEADERS, DEFAULT_RETRIES, REQUEST_TIMEOUT_SECONDS
from .endpoints import Endpoint, Operation, resolve
from .errors import InvalidURLError, MalformedResponseError
from .schemas import (
    BatchGenerationRequest,
    MCQResponseItem,
    ProblemPattern,
    QAResponseItem,
    SingleGenerationRequest,
)
from .transport import CancelToken, send_with_retry


class GenerationClient:
    """
    HTTP client for the question generation service.

    Args:
        base_url: Service root; endpoint paths are appended to its path.
        session: ``requests.Session`` to send with.  When omitted the client
            creates one and closes it in :meth:`close`.
        headers: Extra headers merged over ``Content-Type: application/json``.
        timeout: Per-attempt request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "GenerationClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    # ------------------------------------------------------------------
    # Request construction
    # ------------------------------------------------------------------

    def build_url(self, endpoint: Endpoint) -> str:
        """
        Append ``endpoint.path`` to the base URL's path component.

        ``http://host:8000/api`` + ``/generator/x/`` →
        ``http://host:8000/api/generator/x/``.

        Raises:
            InvalidURLError: Base URL lacks a scheme or host.
        """
        try:
            parts = urlsplit(self.base_url)
        except ValueError as exc:
            raise InvalidURLError(self.base_url) from exc
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidURLError(self.base_url)
        path = parts.path.rstrip("/") + endpoint.path
        return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))

    def _post(
        self,
        operation: Operation,
        request,
        shape: TypeAdapter,
        retries: int,
        cancel_token: CancelToken | None,
    ):
        endpoint = resolve(operation)
        body = encode(request)
        url = self.build_url(endpoint)
        data, _status = send_with_retry(
            self.session,
            endpoint.method,
            url,
            body=body,
            headers=self.headers,
            timeout=self.timeout,
            retries=retries,
            cancel_token=cancel_token,
        )
        return decode(data, shape)

    # ------------------------------------------------------------------
    # Generation operations
    # ------------------------------------------------------------------

    def generate_single_qa(
        self,
        answer: str,
        existing_questions: Sequence[str] = (),
        pattern: ProblemPattern = ProblemPattern.FREE_RESPONSE,
        retries: int = DEFAULT_RETRIES,
        cancel_token: CancelToken | None = None,
    ) -> QAResponseItem:
        """Generate one free-response question for ``answer``."""
        request = build_request(
            SingleGenerationRequest,
            answer=answer,
            existing_questions=list(existing_questions),
            pattern=pattern,
        )
        return self._post(Operation.SINGLE_QA, request, QA_ITEM, retries, cancel_token)

    def generate_batch_qa(
        self,
        answers: Sequence[str],
        pattern: ProblemPattern = ProblemPattern.FREE_RESPONSE,
        retries: int = DEFAULT_RETRIES,
        cancel_token: CancelToken | None = None,
    ) -> list[QAResponseItem]:
        """
        Generate one free-response question per answer.

        Returns:
            Items in request order; ``result[i]`` answers ``answers[i]``.

        Raises:
            MalformedResponseError: Service returned a different number of
                items than answers sent.
        """
        request = build_request(
            BatchGenerationRequest, answers=list(answers), pattern=pattern
        )
        items = self._post(Operation.BATCH_QA, request, QA_ITEM_LIST, retries, cancel_token)
        _check_cardinality(len(request.answers), items)
        return items

    def generate_single_mcq(
        self,
        answer: str,
        existing_questions: Sequence[str] = (),
        pattern: ProblemPattern = ProblemPattern.FREE_RESPONSE,
        retries: int = DEFAULT_RETRIES,
        cancel_token: CancelToken | None = None,
    ) -> list[MCQResponseItem]:
        """
        Generate one 4-choice question for ``answer``.

        The service always answers with an array; callers take the first
        element and treat an empty array as "no result".
        """
        request = build_request(
            SingleGenerationRequest,
            answer=answer,
            existing_questions=list(existing_questions),
            pattern=pattern,
        )
        return self._post(Operation.SINGLE_MCQ, request, MCQ_ITEM_LIST, retries, cancel_token)

    def generate_batch_mcq(
        self,
        answers: Sequence[str],
        pattern: ProblemPattern = ProblemPattern.FREE_RESPONSE,
        retries: int = DEFAULT_RETRIES,
        cancel_token: CancelToken | None = None,
    ) -> list[MCQResponseItem]:
        """Generate one 4-choice question per answer, in request order."""
        request = build_request(
            BatchGenerationRequest, answers=list(answers), pattern=pattern
        )
        items = self._post(Operation.BATCH_MCQ, request, MCQ_ITEM_LIST, retries, cancel_token)
        _check_cardinality(len(request.answers), items)
        return items


def _check_cardinality(expected: int, items: list) -> None:
    if len(items) != expected:
        raise MalformedResponseError(expected, len(items))
