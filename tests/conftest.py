"""
Shared pytest fixtures for the generation client and quiz tests.

The HTTP layer is never hit: every test drives a ``MagicMock`` session whose
``request`` method returns canned responses, and backoff waits are replaced
by a recorder so retry tests run instantly.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from src.api_client import GenerationClient
from src.quiz.models import Question, QuestionType, QuizCategory, SubQuestion


# ---------------------------------------------------------------------------
# Wire-format bodies (Japanese keys, as the service sends them)
# ---------------------------------------------------------------------------

QA_BODY = {"問題文": "1603年に江戸幕府を開いた人物は？", "解説": "徳川家康が開いた。"}

MCQ_BODY = {
    "問題文": "1192年に鎌倉幕府を開いた人物は？",
    "選択肢": ["源頼朝", "足利尊氏", "北条政子", "平清盛"],
    "解説": "正解は源頼朝。",
}


def to_bytes(obj) -> bytes:
    return json.dumps(obj, ensure_ascii=False).encode("utf-8")


def make_response(status: int = 200, body=None) -> MagicMock:
    """Mock ``requests.Response`` with ``status_code`` and ``content``."""
    resp = MagicMock()
    resp.status_code = status
    resp.content = to_bytes(body) if body is not None else b""
    return resp


def sent_json(session: MagicMock, call_index: int = 0) -> dict:
    """Decode the JSON body of the n-th request sent through ``session``."""
    return json.loads(session.request.call_args_list[call_index].kwargs["data"].decode("utf-8"))


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_session():
    return MagicMock()


@pytest.fixture
def client(mock_session):
    return GenerationClient("http://quiz.test:8000", session=mock_session)


@pytest.fixture
def waits(monkeypatch):
    """Record backoff delays instead of sleeping."""
    recorded: list[float] = []

    def _record(seconds, cancel_token):
        recorded.append(seconds)
        cancel_token.raise_if_cancelled()

    monkeypatch.setattr("src.api_client.transport.wait_before_retry", _record)
    return recorded


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def history_question():
    return Question(
        sub_questions=[
            SubQuestion(question="1603年に江戸幕府を開いた人物は？", explanation="江戸幕府の初代将軍。"),
            SubQuestion(question="江戸幕府の初代将軍は？", explanation="1603年に征夷大将軍に。"),
        ],
        answer="徳川家康",
        category="日本史",
    )


@pytest.fixture
def free_text_category():
    questions = [
        Question(sub_questions=[SubQuestion(question="日本で最も高い山は？", explanation="3776m")],
                 answer="富士山", category="地理"),
        Question(sub_questions=[SubQuestion(question="「重要な」を英語で言うと？", explanation="形容詞")],
                 answer="Important", category="地理"),
        Question(sub_questions=[SubQuestion(question="オーストラリアの首都は？", explanation="キャンベラ")],
                 answer="キャンベラ", category="地理"),
    ]
    return QuizCategory(name="地理", question_type=QuestionType.FREE_TEXT, questions=questions)


@pytest.fixture
def choice_category():
    questions = [
        Question(
            sub_questions=[SubQuestion(
                question="1192年に鎌倉幕府を開いた人物は？",
                choices=["源頼朝", "足利尊氏", "北条政子", "平清盛"],
                explanation="源頼朝が正解。",
            )],
            answer="源頼朝",
            category="日本史",
        ),
    ]
    return QuizCategory(name="日本史（4択）", question_type=QuestionType.MULTIPLE_CHOICE,
                        questions=questions)
