"""
Client-side concurrent fan-out over the single-item generation endpoints.

Use these helpers instead of the server batch endpoints when each answer
needs its own ``existing_questions`` context.  Calls run on a thread pool;
results are collected in completion order, so no ordering is guaranteed
across items.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, NamedTuple

from .config import DEFAULT_RETRIES, MAX_PARALLEL_REQUESTS
from .schemas import MCQResponseItem, ProblemPattern, QAResponseItem
from .transport import CancelToken

logger = logging.getLogger(__name__)


class GenerationParams(NamedTuple):
    """Per-item parameters; plain ``(answer, existing, pattern)`` tuples also work."""

    answer: str
    existing_questions: Sequence[str]
    pattern: ProblemPattern


@dataclass(frozen=True)
class ItemResult:
    """Outcome of one fan-out task: exactly one of ``value`` / ``error`` is set."""

    index: int
    params: GenerationParams
    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fan_out(
    call: Callable[..., Any],
    pairs: Iterable[tuple],
    retries: int = DEFAULT_RETRIES,
    max_workers: int | None = None,
    cancel_token: CancelToken | None = None,
) -> list[ItemResult]:
    """
    Run ``call`` once per parameter tuple concurrently and report every item.

    Every worker thread goes through the same bound client, and therefore the
    same ``requests.Session``.  requests does not document ``Session`` as
    thread-safe; it holds up for these stateless POSTs (no cookies, no auth
    flow), but callers that need strict isolation should give each thread its
    own client, e.g. a ``call`` that wraps ``GenerationClient(base_url)`` per
    invocation.

    Args:
        call: Bound client method with the single-generation signature
            ``(answer, existing_questions, pattern, retries, cancel_token)``.
        pairs: ``(answer, existing_questions, pattern)`` tuples.
        retries: Retry count passed to every call.
        max_workers: Thread pool size (defaults to one per item, capped at
            ``MAX_PARALLEL_REQUESTS``).
        cancel_token: Shared token; cancelling it stops every pending call.

    Returns:
        One :class:`ItemResult` per input, in completion order.
    """
    params = [GenerationParams(*p) for p in pairs]
    if not params:
        return []

    workers = max_workers or min(len(params), MAX_PARALLEL_REQUESTS)
    results: list[ItemResult] = []

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = {
            ex.submit(
                call,
                p.answer,
                list(p.existing_questions),
                p.pattern,
                retries=retries,
                cancel_token=cancel_token,
            ): (i, p)
            for i, p in enumerate(params)
        }
        for fut in as_completed(futures):
            i, p = futures[fut]
            try:
                results.append(ItemResult(index=i, params=p, value=fut.result()))
            except Exception as exc:
                results.append(ItemResult(index=i, params=p, error=exc))

    return results


def _successes(results: list[ItemResult], label: str) -> list[ItemResult]:
    ok = []
    for r in results:
        if r.ok:
            ok.append(r)
        else:
            logger.warning(
                "%s generation for answer %r dropped: %s",
                label, r.params.answer, r.error,
            )
    return ok


def generate_single_qa_in_parallel(
    client,
    pairs: Iterable[tuple],
    retries: int = DEFAULT_RETRIES,
    max_workers: int | None = None,
    cancel_token: CancelToken | None = None,
) -> list[QAResponseItem]:
    """
    Issue one single-QA request per tuple concurrently.

    Failed items are dropped; use :func:`fan_out` for per-item failures.
    """
    results = fan_out(
        client.generate_single_qa, pairs, retries, max_workers, cancel_token
    )
    return [r.value for r in _successes(results, "QA")]


def generate_single_mcq_in_parallel(
    client,
    pairs: Iterable[tuple],
    retries: int = DEFAULT_RETRIES,
    max_workers: int | None = None,
    cancel_token: CancelToken | None = None,
) -> list[MCQResponseItem]:
    """
    Issue one single-MCQ request per tuple concurrently and flatten the
    returned arrays into one list.  Failed items are dropped.
    """
    results = fan_out(
        client.generate_single_mcq, pairs, retries, max_workers, cancel_token
    )
    items: list[MCQResponseItem] = []
    for r in _successes(results, "MCQ"):
        items.extend(r.value)
    return items
