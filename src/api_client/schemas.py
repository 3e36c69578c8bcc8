"""
Request and response models for the generation service.

Field names on the wire are the Japanese literals from ``WIRE_KEYS``; the
Python attribute names are English.  Models are declared with aliases so the
same class both validates incoming JSON and serializes outgoing JSON.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .config import PATTERN_LITERALS, WIRE_KEYS


class ProblemPattern(str, Enum):
    """Problem style sent as the ``pattern`` field (service vocabulary)."""

    FREE_RESPONSE = PATTERN_LITERALS["free_response"]
    FILL_IN_BLANK = PATTERN_LITERALS["fill_in_blank"]

    @classmethod
    def from_flag(cls, is_fill_in_blank: bool) -> "ProblemPattern":
        return cls.FILL_IN_BLANK if is_fill_in_blank else cls.FREE_RESPONSE


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class _RequestModel(_WireModel):
    # requests are built from Python attribute names, responses only from wire keys
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class SingleGenerationRequest(_RequestModel):
    """One answer plus the prompts already generated for it."""

    answer: str = Field(alias=WIRE_KEYS["answer"])
    existing_questions: list[str] = Field(
        default_factory=list, alias=WIRE_KEYS["existing_questions"]
    )
    pattern: ProblemPattern = Field(alias=WIRE_KEYS["pattern"])


class BatchGenerationRequest(_RequestModel):
    """Several answers; response element i answers ``answers[i]``."""

    answers: list[str] = Field(alias=WIRE_KEYS["answers"])
    pattern: ProblemPattern = Field(alias=WIRE_KEYS["pattern"])


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class QAResponseItem(_WireModel):
    question: str = Field(alias=WIRE_KEYS["question"])
    explanation: str = Field(alias=WIRE_KEYS["explanation"])


class MCQResponseItem(_WireModel):
    question: str = Field(alias=WIRE_KEYS["question"])
    choices: tuple[str, ...] = Field(alias=WIRE_KEYS["choices"])
    explanation: str = Field(alias=WIRE_KEYS["explanation"])
