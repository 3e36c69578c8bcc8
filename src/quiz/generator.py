"""
Question generation for quiz categories.

Turns raw answers into domain ``Question`` objects by calling the generation
service, and reports progress through an ``is_loading`` flag plus the most
recent ``error_message``.  Failures never propagate past this layer: callers
get an empty list or ``None`` and read the message.

One ``QuestionGenerator`` tracks one call at a time.  A second call issued
while the first is still running is logged and rejected without touching the
network; ``is_loading`` and ``error_message`` keep reporting the running call.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Optional

from src.api_client import GenerationClient, ProblemPattern

from .models import Question, QuestionType, SubQuestion

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Question generation is already in progress"


class QuestionGenerator:
    """
    Args:
        client: Generation client to call.  A default ``GenerationClient`` is
            built from configuration when omitted, and closed by
            :meth:`close`.
    """

    def __init__(self, client: GenerationClient | None = None):
        self._owns_client = client is None
        self.client = client if client is not None else GenerationClient()
        self.is_loading = False
        self.error_message: Optional[str] = None
        self._in_flight = threading.Lock()

    def __enter__(self) -> "QuestionGenerator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    # ------------------------------------------------------------------
    # Call bookkeeping
    # ------------------------------------------------------------------

    def _begin(self) -> bool:
        if not self._in_flight.acquire(blocking=False):
            logger.warning(BUSY_MESSAGE)
            return False
        self.is_loading = True
        self.error_message = None
        return True

    def _end(self) -> None:
        self.is_loading = False
        self._in_flight.release()

    def _fail(self, exc: Exception) -> None:
        self.error_message = str(exc) or exc.__class__.__name__
        logger.warning("Question generation failed: %s", self.error_message)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def generate_questions_for_category(
        self,
        category_name: str,
        answers: Sequence[str],
        is_multiple_choice: bool,
        is_fill_in_blank: bool,
    ) -> list[Question]:
        """
        Generate one question per answer with the server batch endpoints.

        Result ``i`` carries ``answers[i]``; the client rejects responses
        whose length differs from ``answers``.  The batch is all-or-nothing: on
        any failure the message is recorded and ``[]`` is returned.
        """
        if not answers:
            return []
        if not self._begin():
            return []

        try:
            pattern = ProblemPattern.from_flag(is_fill_in_blank)
            if is_multiple_choice:
                items = self.client.generate_batch_mcq(list(answers), pattern)
                return [
                    Question(
                        sub_questions=[SubQuestion(
                            question=item.question,
                            choices=list(item.choices),
                            explanation=item.explanation,
                        )],
                        answer=answer,
                        category=category_name,
                    )
                    for answer, item in zip(answers, items)
                ]

            items = self.client.generate_batch_qa(list(answers), pattern)
            return [
                Question(
                    sub_questions=[SubQuestion(
                        question=item.question,
                        explanation=item.explanation,
                    )],
                    answer=answer,
                    category=category_name,
                )
                for answer, item in zip(answers, items)
            ]
        except Exception as exc:
            self._fail(exc)
            return []
        finally:
            self._end()

    def generate_sub_question(
        self,
        original: Question,
        question_type: QuestionType,
    ) -> Optional[SubQuestion]:
        """
        Generate one more prompt for an existing question.

        The question's current prompts are sent so the service avoids
        repeating them.  Returns ``None`` on failure, or when the 4-choice
        endpoint answers with an empty array.
        """
        if not self._begin():
            return None

        try:
            pattern = ProblemPattern.from_flag(question_type.is_fill_in_blank)
            existing = original.prompts

            if question_type.is_multiple_choice:
                items = self.client.generate_single_mcq(
                    original.answer, existing, pattern
                )
                if not items:
                    return None
                item = items[0]
                return SubQuestion(
                    question=item.question,
                    choices=list(item.choices),
                    explanation=item.explanation,
                )

            res = self.client.generate_single_qa(original.answer, existing, pattern)
            return SubQuestion(question=res.question, explanation=res.explanation)
        except Exception as exc:
            self._fail(exc)
            return None
        finally:
            self._end()
