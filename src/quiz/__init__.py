"""
src/quiz — Quiz domain model, AI question generation, storage and sessions.

Module layout
-------------
models.py       — Question, SubQuestion, QuizCategory, QuestionType, UserAnswer
generator.py    — QuestionGenerator: answers → generated Questions (loading flag,
                  latest error message)
store.py        — JSON persistence of categories with sample-data fallback
sample_data.py  — built-in sample categories
session.py      — QuizSession: answer checking, scoring, review, result tables

Public interface
----------------
Generate questions:
    generator = QuestionGenerator(client)
    generator.generate_questions_for_category(name, answers, is_mc, is_fill)
    generator.generate_sub_question(question, question_type)

Persist categories:
    store = CategoryStore(path)

Run a quiz:
    session = QuizSession(category)
    print_session_summary(session)
"""

from .generator import QuestionGenerator
from .models import Question, QuestionType, QuizCategory, SubQuestion, UserAnswer
from .sample_data import sample_categories
from .session import (
    QuizSession,
    answers_match,
    correct_count_for,
    print_session_summary,
    summarize_by_category,
    total_count_for,
)
from .store import CategoryStore, load_categories, save_categories

__all__ = [
    # Models
    "Question",
    "SubQuestion",
    "QuizCategory",
    "QuestionType",
    "UserAnswer",
    # Generation
    "QuestionGenerator",
    # Storage
    "CategoryStore",
    "load_categories",
    "save_categories",
    "sample_categories",
    # Sessions
    "QuizSession",
    "answers_match",
    "correct_count_for",
    "total_count_for",
    "summarize_by_category",
    "print_session_summary",
]
