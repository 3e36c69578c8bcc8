"""Built-in sample categories, used when no saved data can be loaded."""

from __future__ import annotations

from .models import Question, QuestionType, QuizCategory, SubQuestion


def _free_text(question: str, explanation: str, answer: str, category: str) -> Question:
    return Question(
        sub_questions=[SubQuestion(question=question, explanation=explanation)],
        answer=answer,
        category=category,
    )


def _four_choice(
    question: str, choices: list[str], explanation: str, answer: str, category: str
) -> Question:
    return Question(
        sub_questions=[
            SubQuestion(question=question, choices=choices, explanation=explanation)
        ],
        answer=answer,
        category=category,
    )


def sample_categories() -> list[QuizCategory]:
    """Return a fresh copy of the sample dataset (new ids on every call)."""
    japanese_history = [
        _free_text("1192年に鎌倉幕府を開いた人物は？",
                   "鎌倉幕府の初代将軍である源氏の武将。", "源頼朝", "日本史"),
        _free_text("1603年に江戸幕府を開いた人物は？",
                   "徳川家が約260年の江戸時代を築いた。", "徳川家康", "日本史"),
        _free_text("1868年に始まった新しい時代の名前は？",
                   "明治維新により近代国家への改革が始まった。", "明治時代", "日本史"),
        _free_text("794年に平安京に都を移した天皇は？",
                   "長岡京から平安京へ遷都した。", "桓武天皇", "日本史"),
    ]

    japanese_history_choice = [
        _four_choice("1192年に鎌倉幕府を開いた人物は？",
                     ["源頼朝", "足利尊氏", "北条政子", "平清盛"],
                     "正解は源頼朝。鎌倉幕府初代将軍。", "源頼朝", "日本史"),
        _four_choice("1603年に江戸幕府を開いた人物は？",
                     ["徳川家康", "豊臣秀吉", "織田信長", "足利義満"],
                     "徳川家康が正解。", "徳川家康", "日本史"),
    ]

    world_history = [
        _free_text("1789年に始まったフランスの革命は？",
                   "人権宣言などを生んだフランス革命。", "フランス革命", "世界史"),
        _free_text("1492年にアメリカ大陸に到達した人物は？",
                   "コロンブスが到達した。", "コロンブス", "世界史"),
        _free_text("古代エジプトの王を何と呼ぶ？",
                   "古代エジプトの君主はファラオ。", "ファラオ", "世界史"),
    ]

    geography = [
        _free_text("日本で最も高い山は？",
                   "標高3776m。静岡県と山梨県に跨る。", "富士山", "地理"),
        _free_text("オーストラリアの首都は？",
                   "シドニーやメルボルンではなくキャンベラ。", "キャンベラ", "地理"),
        _free_text("世界で最も大きな砂漠は？",
                   "北アフリカに広がる砂漠。", "サハラ砂漠", "地理"),
    ]

    english = [
        _free_text("「美しい」を英語で言うと？",
                   "形容詞。例: a beautiful day", "beautiful", "英単語"),
        _free_text("「重要な」を英語で言うと？",
                   "形容詞。例: an important notice", "important", "英単語"),
        _free_text("「必要な」を英語で言うと？",
                   "形容詞。例: necessary documents", "necessary", "英単語"),
    ]

    return [
        QuizCategory(name="日本史", icon_name="building.columns",
                     primary_color="#FF3B30", secondary_color="#FF9500",
                     questions=japanese_history, question_type=QuestionType.FREE_TEXT),
        QuizCategory(name="日本史（4択）", icon_name="building.columns",
                     primary_color="#FF3B30", secondary_color="#FF9500",
                     questions=japanese_history_choice,
                     question_type=QuestionType.MULTIPLE_CHOICE),
        QuizCategory(name="世界史", icon_name="globe",
                     primary_color="#007AFF", secondary_color="#32ADE6",
                     questions=world_history, question_type=QuestionType.FREE_TEXT),
        QuizCategory(name="地理", icon_name="map",
                     primary_color="#34C759", secondary_color="#00C7BE",
                     questions=geography, question_type=QuestionType.FREE_TEXT),
        QuizCategory(name="英単語", icon_name="textbook",
                     primary_color="#AF52DE", secondary_color="#FF2D55",
                     questions=english, question_type=QuestionType.FREE_TEXT),
    ]
