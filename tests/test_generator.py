"""
Unit tests for src/quiz/generator.py (QuestionGenerator).

Covers:
- Empty-answers guard: no network call, no flag flip.
- Batch endpoint selection from (is_multiple_choice, is_fill_in_blank).
- Positional correspondence between answers and generated questions.
- Loading flag reset and error message recording on failure.
- Sub-question generation: pattern choice, existing prompts as context,
  empty 4-choice array → None without error.
- Overlapping calls on one generator are rejected without disturbing the
  running call's state.
- Closing a generator closes only a client it created.
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock, patch

import pytest

from src.api_client import GenerationClient
from src.api_client.codec import MCQ_ITEM_LIST, QA_ITEM, QA_ITEM_LIST
from src.api_client.errors import MalformedResponseError, ServerError
from src.api_client.schemas import ProblemPattern
from src.quiz.generator import BUSY_MESSAGE, QuestionGenerator
from src.quiz.models import QuestionType

from .conftest import MCQ_BODY, QA_BODY, make_response, to_bytes


def _qa_items(answers):
    return QA_ITEM_LIST.validate_python(
        [{"問題文": f"Q-{a}", "解説": f"E-{a}"} for a in answers]
    )


def _mcq_items(answers):
    return MCQ_ITEM_LIST.validate_python(
        [dict(MCQ_BODY, 問題文=f"Q-{a}") for a in answers]
    )


@pytest.fixture
def api():
    return MagicMock(spec=GenerationClient)


@pytest.fixture
def generator(api):
    return QuestionGenerator(client=api)


# ---------------------------------------------------------------------------
# generate_questions_for_category
# ---------------------------------------------------------------------------

class TestGenerateQuestionsForCategory:

    def test_empty_answers_returns_empty_without_network(self, mock_session):
        gen = QuestionGenerator(GenerationClient("http://quiz.test", session=mock_session))
        gen._begin = MagicMock(wraps=gen._begin)

        result = gen.generate_questions_for_category("日本史", [], True, False)

        assert result == []
        mock_session.request.assert_not_called()
        gen._begin.assert_not_called()
        assert gen.is_loading is False
        assert gen.error_message is None

    def test_empty_answers_keeps_previous_error(self, generator):
        generator.error_message = "previous"
        generator.generate_questions_for_category("x", [], False, False)
        assert generator.error_message == "previous"

    def test_free_text_uses_batch_qa(self, generator, api):
        answers = ["光合成", "関ヶ原の戦い"]
        api.generate_batch_qa.return_value = _qa_items(answers)

        questions = generator.generate_questions_for_category("理科", answers, False, False)

        api.generate_batch_qa.assert_called_once_with(answers, ProblemPattern.FREE_RESPONSE)
        api.generate_batch_mcq.assert_not_called()
        assert [q.sub_questions[0].choices for q in questions] == [None, None]

    def test_multiple_choice_fill_in_blank_uses_batch_mcq(self, generator, api):
        answers = ["源頼朝"]
        api.generate_batch_mcq.return_value = _mcq_items(answers)

        questions = generator.generate_questions_for_category("日本史", answers, True, True)

        api.generate_batch_mcq.assert_called_once_with(answers, ProblemPattern.FILL_IN_BLANK)
        assert questions[0].sub_questions[0].choices == MCQ_BODY["選択肢"]
        assert questions[0].sub_questions[0].explanation == MCQ_BODY["解説"]

    @pytest.mark.parametrize("is_mc", [True, False])
    def test_positional_correspondence(self, generator, api, is_mc):
        answers = [f"answer-{i}" for i in range(6)]
        api.generate_batch_mcq.return_value = _mcq_items(answers)
        api.generate_batch_qa.return_value = _qa_items(answers)

        questions = generator.generate_questions_for_category("cat", answers, is_mc, False)

        assert len(questions) == len(answers)
        for i, q in enumerate(questions):
            assert q.answer == answers[i]
            assert q.sub_questions[0].question == f"Q-{answers[i]}"
            assert q.category == "cat"
            assert len(q.sub_questions) == 1

    def test_flag_true_during_call_and_reset_after(self, generator, api):
        seen = []

        def _batch(answers, pattern):
            seen.append(generator.is_loading)
            return _qa_items(answers)

        api.generate_batch_qa.side_effect = _batch

        generator.generate_questions_for_category("c", ["a"], False, False)

        assert seen == [True]
        assert generator.is_loading is False

    def test_error_recorded_and_empty_returned(self, generator, api):
        api.generate_batch_mcq.side_effect = ServerError(503, b"")

        result = generator.generate_questions_for_category("c", ["a", "b"], True, False)

        assert result == []
        assert generator.error_message == "Server error: HTTP 503"
        assert generator.is_loading is False

    def test_error_cleared_on_next_call(self, generator, api):
        generator.error_message = "old"
        api.generate_batch_qa.return_value = _qa_items(["a"])

        generator.generate_questions_for_category("c", ["a"], False, False)

        assert generator.error_message is None

    def test_short_response_is_an_error_not_truncation(self, mock_session):
        mock_session.request.return_value = make_response(200, [{"問題文": "Qa", "解説": "Ea"}])
        gen = QuestionGenerator(GenerationClient("http://quiz.test", session=mock_session))

        result = gen.generate_questions_for_category("c", ["a", "b"], False, False)

        assert result == []
        assert "expected 2" in gen.error_message

    def test_end_to_end_with_real_client(self, mock_session):
        answers = ["a", "b"]
        mock_session.request.return_value = make_response(
            200, [{"問題文": "Qa", "解説": "Ea"}, {"問題文": "Qb", "解説": "Eb"}]
        )
        gen = QuestionGenerator(GenerationClient("http://quiz.test", session=mock_session))

        questions = gen.generate_questions_for_category("c", answers, False, True)

        assert [q.answer for q in questions] == answers
        assert [q.prompts for q in questions] == [["Qa"], ["Qb"]]

    def test_malformed_response_from_real_client(self, mock_session):
        mock_session.request.return_value = make_response(200, [])
        gen = QuestionGenerator(GenerationClient("http://quiz.test", session=mock_session))

        assert gen.generate_questions_for_category("c", ["a"], True, False) == []
        assert "Malformed response" in gen.error_message


# ---------------------------------------------------------------------------
# generate_sub_question
# ---------------------------------------------------------------------------

class TestGenerateSubQuestion:

    @pytest.mark.parametrize("question_type, pattern", [
        (QuestionType.FREE_TEXT, ProblemPattern.FREE_RESPONSE),
        (QuestionType.FILL_IN_BLANK_FREE_TEXT, ProblemPattern.FILL_IN_BLANK),
    ])
    def test_free_text_types_use_single_qa(self, generator, api, history_question,
                                           question_type, pattern):
        api.generate_single_qa.return_value = QA_ITEM.validate_python(QA_BODY)

        sub = generator.generate_sub_question(history_question, question_type)

        api.generate_single_qa.assert_called_once_with(
            "徳川家康", history_question.prompts, pattern
        )
        assert sub.question == QA_BODY["問題文"]
        assert sub.choices is None

    @pytest.mark.parametrize("question_type, pattern", [
        (QuestionType.MULTIPLE_CHOICE, ProblemPattern.FREE_RESPONSE),
        (QuestionType.FILL_IN_BLANK_MULTIPLE_CHOICE, ProblemPattern.FILL_IN_BLANK),
    ])
    def test_choice_types_use_single_mcq_first_item(self, generator, api, history_question,
                                                    question_type, pattern):
        api.generate_single_mcq.return_value = _mcq_items(["first", "second"])

        sub = generator.generate_sub_question(history_question, question_type)

        api.generate_single_mcq.assert_called_once_with(
            "徳川家康", history_question.prompts, pattern
        )
        assert sub.question == "Q-first"
        assert sub.choices == MCQ_BODY["選択肢"]

    def test_existing_prompts_sent_in_order(self, mock_session, history_question):
        mock_session.request.return_value = make_response(200, QA_BODY)
        gen = QuestionGenerator(GenerationClient("http://quiz.test", session=mock_session))

        gen.generate_sub_question(history_question, QuestionType.FREE_TEXT)

        body = mock_session.request.call_args.kwargs["data"]
        assert body == to_bytes({
            "解答": "徳川家康",
            "問題文": ["1603年に江戸幕府を開いた人物は？", "江戸幕府の初代将軍は？"],
            "pattern": "1問1答",
        })

    def test_empty_mcq_array_returns_none_without_error(self, generator, api, history_question):
        api.generate_single_mcq.return_value = []

        sub = generator.generate_sub_question(history_question, QuestionType.MULTIPLE_CHOICE)

        assert sub is None
        assert generator.error_message is None
        assert generator.is_loading is False

    def test_error_recorded_and_none_returned(self, generator, api, history_question):
        api.generate_single_qa.side_effect = MalformedResponseError(1, 0)

        sub = generator.generate_sub_question(history_question, QuestionType.FREE_TEXT)

        assert sub is None
        assert "expected 1" in generator.error_message
        assert generator.is_loading is False

    def test_unexpected_exception_is_contained(self, generator, api, history_question):
        api.generate_single_qa.side_effect = RuntimeError("boom")

        assert generator.generate_sub_question(history_question, QuestionType.FREE_TEXT) is None
        assert generator.error_message == "boom"


# ---------------------------------------------------------------------------
# Overlapping calls
# ---------------------------------------------------------------------------

class TestSingleFlight:

    @pytest.fixture
    def blocked(self, generator, api):
        """Start a batch-QA call on a worker thread and hold it inside the client."""
        entered = threading.Event()
        release = threading.Event()
        outcome = {}

        def _slow(answers, pattern):
            entered.set()
            release.wait(5)
            return _qa_items(answers)

        api.generate_batch_qa.side_effect = _slow

        def _first():
            outcome["first"] = generator.generate_questions_for_category("c", ["a"], False, False)

        worker = threading.Thread(target=_first)
        worker.start()
        assert entered.wait(5)
        yield release, outcome, worker
        release.set()
        worker.join(5)

    def test_second_call_while_first_in_flight_is_rejected(self, generator, api,
                                                           history_question, blocked, caplog):
        release, outcome, worker = blocked

        second = generator.generate_sub_question(history_question, QuestionType.FREE_TEXT)

        assert second is None
        assert BUSY_MESSAGE in caplog.text
        api.generate_single_qa.assert_not_called()
        assert generator.is_loading is True
        assert generator.error_message is None

    def test_rejected_call_leaves_no_error_after_first_succeeds(self, generator, api, blocked):
        release, outcome, worker = blocked

        assert generator.generate_questions_for_category("c", ["b"], False, False) == []

        release.set()
        worker.join(5)

        assert len(outcome["first"]) == 1
        assert generator.error_message is None

    def test_generator_reusable_after_failure(self, generator, api):
        api.generate_batch_qa.side_effect = [ServerError(500), _qa_items(["a"])]

        assert generator.generate_questions_for_category("c", ["a"], False, False) == []
        assert len(generator.generate_questions_for_category("c", ["a"], False, False)) == 1


# ---------------------------------------------------------------------------
# Session ownership
# ---------------------------------------------------------------------------

class TestClose:

    def test_default_client_closed(self):
        with patch("src.quiz.generator.GenerationClient") as client_cls:
            with QuestionGenerator():
                pass
        client_cls.return_value.close.assert_called_once()

    def test_injected_client_left_open(self, api):
        with QuestionGenerator(client=api):
            pass
        api.close.assert_not_called()
