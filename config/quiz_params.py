"""
Quiz-side configuration: local storage location and domain defaults.

ENVIRONMENT VARIABLES (optional):
    QUIZ_DATA_DIR  — directory holding the saved category file
"""

from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

# Resolve from this file: config/quiz_params.py → config → root
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = Path(os.getenv("QUIZ_DATA_DIR", str(PROJECT_ROOT / "data")))
CATEGORIES_PATH = DATA_DIR / "quiz_categories.json"

# ---------------------------------------------------------------------------
# Domain defaults
# ---------------------------------------------------------------------------

# Explanation used when a sub-question is typed in by hand without one
DEFAULT_EXPLANATION: str = "解説なし"

# Question type literals (display labels persisted with each category)
QUESTION_TYPE_LABELS: dict[str, str] = {
    "free_text":                     "記述式問題",
    "multiple_choice":               "4択問題",
    "fill_in_blank_multiple_choice": "穴埋め4択問題",
    "fill_in_blank_free_text":       "記述式穴埋め問題",
}

# ---------------------------------------------------------------------------
# Result messages
# ---------------------------------------------------------------------------
#
# (minimum accuracy, message), checked top to bottom; the first threshold the
# session accuracy reaches wins.

RESULT_MESSAGES: list[tuple[float, str]] = [
    (1.0, "素晴らしい！完璧な結果です！"),
    (0.9, "おしい！もう少しで完璧です！"),
    (0.7, "よくできました！もうちょっとです！"),
    (0.5, "まずまずの結果です。復習して再挑戦しましょう！"),
    (0.0, "もう一度復習してから挑戦してみましょう！"),
]
