"""
Local persistence of quiz categories as a single JSON file.

Both directions are best-effort: a missing, unreadable or malformed file
loads the sample dataset instead, and a failed save is logged and ignored.
Every mutating method saves immediately.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from config.quiz_params import CATEGORIES_PATH, DEFAULT_EXPLANATION

from .models import Question, QuizCategory, SubQuestion
from .sample_data import sample_categories

logger = logging.getLogger(__name__)


def load_categories(path: Path = CATEGORIES_PATH) -> list[QuizCategory]:
    """
    Load categories from ``path``, falling back to the sample dataset.

    Args:
        path: JSON file written by :func:`save_categories`.

    Returns:
        Saved categories, or :func:`sample_categories` when the file cannot be
        read or parsed.
    """
    if not path.exists():
        logger.info("No saved categories at %s; loading sample data", path)
        return sample_categories()

    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return [QuizCategory.from_dict(c) for c in raw]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Could not load categories from %s (%s); loading sample data", path, exc)
        return sample_categories()


def save_categories(categories: list[QuizCategory], path: Path = CATEGORIES_PATH) -> bool:
    """
    Write ``categories`` to ``path`` as UTF-8 JSON.

    Returns:
        ``True`` on success, ``False`` if the write failed.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump([c.to_dict() for c in categories], fh, ensure_ascii=False, indent=2)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Could not save categories to %s: %s", path, exc)
        return False
    return True


class CategoryStore:
    """In-memory category list backed by :func:`load_categories` / :func:`save_categories`."""

    def __init__(self, path: Path = CATEGORIES_PATH):
        self.path = path
        self.categories: list[QuizCategory] = load_categories(path)

    def save(self) -> bool:
        return save_categories(self.categories, self.path)

    def reload(self) -> None:
        self.categories = load_categories(self.path)

    def get(self, category_id: str) -> Optional[QuizCategory]:
        return next((c for c in self.categories if c.id == category_id), None)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, category: QuizCategory) -> None:
        self.categories.append(category)
        self.save()

    def delete_category(self, category_id: str) -> None:
        self.categories = [c for c in self.categories if c.id != category_id]
        self.save()

    def delete_category_at(self, index: int) -> None:
        if 0 <= index < len(self.categories):
            del self.categories[index]
            self.save()

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def add_questions(self, questions: list[Question], category_id: str) -> None:
        category = self.get(category_id)
        if category is None:
            return
        category.add_questions(questions)
        self.save()

    def delete_question(self, question_id: str, category_id: str) -> None:
        category = self.get(category_id)
        if category is None:
            return
        category.delete_question(question_id)
        self.save()

    def add_sub_question(
        self,
        text: str,
        question_id: str,
        category_id: str,
        choices: Optional[list[str]] = None,
        explanation: str = DEFAULT_EXPLANATION,
    ) -> Optional[SubQuestion]:
        """
        Append a hand-typed (or generated) prompt to an existing question.

        Returns:
            The new sub-question, or ``None`` if the category or question id
            is unknown.
        """
        category = self.get(category_id)
        question = category.get_question(question_id) if category else None
        if question is None:
            return None

        sub = SubQuestion(question=text, choices=choices, explanation=explanation)
        question.add_sub_question(sub)
        self.save()
        return sub
