"""Data classes for the quiz domain model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from config.quiz_params import DEFAULT_EXPLANATION, QUESTION_TYPE_LABELS


def new_id() -> str:
    return str(uuid.uuid4())


class QuestionType(str, Enum):
    FREE_TEXT = QUESTION_TYPE_LABELS["free_text"]
    MULTIPLE_CHOICE = QUESTION_TYPE_LABELS["multiple_choice"]
    FILL_IN_BLANK_MULTIPLE_CHOICE = QUESTION_TYPE_LABELS["fill_in_blank_multiple_choice"]
    FILL_IN_BLANK_FREE_TEXT = QUESTION_TYPE_LABELS["fill_in_blank_free_text"]

    @property
    def is_multiple_choice(self) -> bool:
        return self in (
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.FILL_IN_BLANK_MULTIPLE_CHOICE,
        )

    @property
    def is_fill_in_blank(self) -> bool:
        return self in (
            QuestionType.FILL_IN_BLANK_FREE_TEXT,
            QuestionType.FILL_IN_BLANK_MULTIPLE_CHOICE,
        )


@dataclass
class SubQuestion:
    """One prompt for a question's answer; ``choices`` is set for 4-choice prompts."""

    question: str
    explanation: str = DEFAULT_EXPLANATION
    choices: Optional[list[str]] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "choices": list(self.choices) if self.choices is not None else None,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SubQuestion":
        choices = data.get("choices")
        return cls(
            id=data.get("id") or new_id(),
            question=data["question"],
            choices=list(choices) if choices is not None else None,
            explanation=data["explanation"],
        )


@dataclass
class Question:
    """
    An answer together with every prompt that leads to it.

    All sub-questions share ``answer``; the list is never empty.
    """

    sub_questions: list[SubQuestion]
    answer: str
    category: str
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.sub_questions:
            raise ValueError("Question needs at least one sub-question")

    @property
    def prompts(self) -> list[str]:
        return [sq.question for sq in self.sub_questions]

    def add_sub_question(self, sub_question: SubQuestion) -> None:
        self.sub_questions.append(sub_question)

    def get_sub_question(self, sub_question_id: str) -> Optional[SubQuestion]:
        return next((sq for sq in self.sub_questions if sq.id == sub_question_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sub_questions": [sq.to_dict() for sq in self.sub_questions],
            "answer": self.answer,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            id=data.get("id") or new_id(),
            sub_questions=[SubQuestion.from_dict(sq) for sq in data["sub_questions"]],
            answer=data["answer"],
            category=data["category"],
        )


@dataclass
class QuizCategory:
    name: str
    question_type: QuestionType
    questions: list[Question] = field(default_factory=list)
    icon_name: str = "questionmark"
    primary_color: str = "#007AFF"
    secondary_color: str = "#5AC8FA"
    id: str = field(default_factory=new_id)

    def get_question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)

    def add_questions(self, questions: list[Question]) -> None:
        self.questions.extend(questions)

    def delete_question(self, question_id: str) -> bool:
        """Remove a question by id. Returns ``False`` if it was not found."""
        before = len(self.questions)
        self.questions = [q for q in self.questions if q.id != question_id]
        return len(self.questions) != before

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon_name": self.icon_name,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "questions": [q.to_dict() for q in self.questions],
            "question_type": self.question_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuizCategory":
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            icon_name=data["icon_name"],
            primary_color=data["primary_color"],
            secondary_color=data["secondary_color"],
            questions=[Question.from_dict(q) for q in data["questions"]],
            question_type=QuestionType(data["question_type"]),
        )


@dataclass
class UserAnswer:
    question_id: str
    user_answer: str
    is_correct: bool
    sub_question_id: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    id: str = field(default_factory=new_id)
