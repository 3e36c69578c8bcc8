"""
Quiz session: walking a category, checking answers, scoring and review.

A session shows one prompt per question.  When a question has several
sub-questions, one is picked at random each time the question comes up.
Answers are compared after trimming whitespace, ignoring case.
"""

from __future__ import annotations

import random
from typing import Optional

import pandas as pd

from config.quiz_params import RESULT_MESSAGES

from .models import Question, QuizCategory, SubQuestion, UserAnswer

RESULT_COLUMNS: list[str] = [
    "question_id",
    "sub_question_id",
    "category",
    "answer",
    "user_answer",
    "is_correct",
    "timestamp",
]


def answers_match(given: str, expected: str) -> bool:
    return given.strip().casefold() == expected.strip().casefold()


def result_message(accuracy: float) -> str:
    for threshold, message in RESULT_MESSAGES:
        if accuracy >= threshold:
            return message
    return RESULT_MESSAGES[-1][1]


class QuizSession:
    """
    Args:
        category: Category to quiz on.
        seed: Seed for the sub-question picker (reproducible sessions).
    """

    def __init__(self, category: QuizCategory, seed: Optional[int] = None):
        self.category = category
        self._rng = random.Random(seed)
        self.reset()

    def reset(self) -> None:
        """Start over from the first question with no recorded answers."""
        self.answers: list[UserAnswer] = []
        self.current_index = 0
        self.answered: set[int] = set()
        self.finished = not self.category.questions
        self._pick_sub_question()

    def _pick_sub_question(self) -> None:
        if self.finished:
            self.current_sub_index = 0
            return
        count = len(self.current_question.sub_questions)
        self.current_sub_index = self._rng.randrange(count)

    # ------------------------------------------------------------------
    # Current position
    # ------------------------------------------------------------------

    @property
    def current_question(self) -> Question:
        return self.category.questions[self.current_index]

    @property
    def current_prompt(self) -> SubQuestion:
        return self.current_question.sub_questions[self.current_sub_index]

    @property
    def current_choices(self) -> list[str]:
        return list(self.current_prompt.choices or [])

    @property
    def is_choice_based(self) -> bool:
        return self.category.question_type.is_multiple_choice

    @property
    def progress(self) -> float:
        if not self.category.questions:
            return 0.0
        return len(self.answered) / len(self.category.questions)

    # ------------------------------------------------------------------
    # Answering
    # ------------------------------------------------------------------

    def check_answer(self, text: str) -> bool:
        """Check a typed answer against the current question and record it."""
        given = text.strip()
        return self._record(given, answers_match(given, self.current_question.answer))

    def check_choice(self, index: int) -> bool:
        """
        Check the choice at ``index`` of the current prompt and record it.

        Raises:
            IndexError: ``index`` is outside the prompt's choice list.
        """
        choices = self.current_choices
        if not 0 <= index < len(choices):
            raise IndexError(f"Choice index {index} out of range (0..{len(choices) - 1})")
        chosen = choices[index]
        return self._record(chosen, answers_match(chosen, self.current_question.answer))

    def _record(self, given: str, is_correct: bool) -> bool:
        if self.finished:
            raise RuntimeError("Quiz session is already finished")
        if self.current_index in self.answered:
            raise RuntimeError("Current question has already been answered")
        self.answers.append(UserAnswer(
            question_id=self.current_question.id,
            sub_question_id=self.current_prompt.id,
            user_answer=given,
            is_correct=is_correct,
        ))
        self.answered.add(self.current_index)
        return is_correct

    def next_question(self) -> bool:
        """Advance; returns ``False`` (and marks the session finished) after the last question."""
        if self.finished:
            return False
        if self.current_index < len(self.category.questions) - 1:
            self.current_index += 1
            self._pick_sub_question()
            return True
        self.finished = True
        return False

    def clear_answers(self, question_ids: set[str]) -> None:
        self.answers = [a for a in self.answers if a.question_id not in question_ids]

    # ------------------------------------------------------------------
    # Scoring and review
    # ------------------------------------------------------------------

    @property
    def correct_count(self) -> int:
        return correct_count_for(self.category, self.answers)

    @property
    def total_count(self) -> int:
        return len(self.answered)

    @property
    def accuracy(self) -> float:
        return self.correct_count / self.total_count if self.total_count else 0.0

    @property
    def score(self) -> float:
        """Accuracy as a percentage rounded to one decimal."""
        return round(self.accuracy * 100, 1)

    @property
    def message(self) -> str:
        return result_message(self.accuracy)

    def wrong_answers(self) -> list[tuple[Question, UserAnswer]]:
        """Incorrect answers paired with their questions, in answer order."""
        by_id = {q.id: q for q in self.category.questions}
        return [
            (by_id[a.question_id], a)
            for a in self.answers
            if not a.is_correct and a.question_id in by_id
        ]

    def results_frame(self) -> pd.DataFrame:
        """One row per recorded answer (columns: ``RESULT_COLUMNS``)."""
        by_id = {q.id: q for q in self.category.questions}
        rows = [
            {
                "question_id": a.question_id,
                "sub_question_id": a.sub_question_id,
                "category": by_id[a.question_id].category if a.question_id in by_id else None,
                "answer": by_id[a.question_id].answer if a.question_id in by_id else None,
                "user_answer": a.user_answer,
                "is_correct": a.is_correct,
                "timestamp": a.timestamp,
            }
            for a in self.answers
        ]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)


# ---------------------------------------------------------------------------
# Category-level helpers
# ---------------------------------------------------------------------------

def _answers_for(category: QuizCategory, answers: list[UserAnswer]) -> list[UserAnswer]:
    ids = {q.id for q in category.questions}
    return [a for a in answers if a.question_id in ids]


def correct_count_for(category: QuizCategory, answers: list[UserAnswer]) -> int:
    return sum(1 for a in _answers_for(category, answers) if a.is_correct)


def total_count_for(category: QuizCategory, answers: list[UserAnswer]) -> int:
    return len(_answers_for(category, answers))


def summarize_by_category(results_df: pd.DataFrame) -> pd.DataFrame:
    """
    Aggregate a results frame per category.

    Returns:
        DataFrame indexed by category with ``total``, ``correct`` and
        ``accuracy`` (0–1) columns.
    """
    if results_df.empty:
        return pd.DataFrame(columns=["total", "correct", "accuracy"])

    summary = results_df.groupby("category").agg(
        total=("is_correct", "size"),
        correct=("is_correct", "sum"),
    )
    summary["correct"] = summary["correct"].astype(int)
    summary["accuracy"] = summary["correct"] / summary["total"]
    return summary


def print_session_summary(session: QuizSession) -> None:
    """Print the result screen for a finished (or abandoned) session."""
    sep = "=" * 48
    print(f"\n{sep}")
    print(f"RESULT: {session.category.name}")
    print(sep)
    print(f"  Correct:  {session.correct_count} / {session.total_count}")
    print(f"  Score:    {session.score:.1f}%")
    print(f"  {session.message}")

    wrong = session.wrong_answers()
    if wrong:
        print(f"\nREVIEW ({len(wrong)}):")
        for question, answer in wrong:
            prompt = question.get_sub_question(answer.sub_question_id) if answer.sub_question_id else None
            text = prompt.question if prompt else question.prompts[0]
            print(f"  Q: {text}")
            print(f"     yours: {answer.user_answer or '(blank)'}  correct: {question.answer}")
            if prompt:
                print(f"     {prompt.explanation}")
    print(f"{sep}\n")
