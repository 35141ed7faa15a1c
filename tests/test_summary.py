"""
Summary aggregation tests for LyricDrill.
"""

import pytest

from lyricdrill.classroom import summarize_lesson
from lyricdrill.schemas import ArrangeItem, FillBlankItem, ItemType, Lesson, LessonAnswer


def fill(line_index: int, correct: str) -> FillBlankItem:
    return FillBlankItem(
        line_index=line_index,
        rendered_line=f"___ {line_index}",
        options=[correct, "x", "y", "z"],
        correct_word=correct,
    )


def answer(item_index: int, user_input: str, correct: bool) -> LessonAnswer:
    return LessonAnswer(
        item_index=item_index,
        type=ItemType.FILL_BLANK,
        user_input=user_input,
        correct=correct,
    )


class TestSummarizeLesson:
    """Test score aggregation."""

    def test_mixed_lesson(self):
        lesson = Lesson(
            song_id="s1",
            items=[fill(0, "love"), fill(1, "sun")] + [ArrangeItem(line_index=i, words=["a"]) for i in range(2, 6)],
            answers=[answer(0, "love", True), answer(1, "run", False)],
        )
        summary = summarize_lesson(lesson)

        assert summary.total == 6
        assert summary.correct == 5
        assert summary.wrong == 1
        assert summary.accuracy == pytest.approx(500 / 6)
        assert summary.scheduled_for_repractice == ["run"]

    def test_repractice_keeps_user_input_in_order(self):
        lesson = Lesson(
            song_id="s1",
            items=[fill(0, "love"), fill(1, "sun"), fill(2, "moon")],
            answers=[answer(2, "Mon", False), answer(0, "glove", False), answer(1, "sun", True)],
        )
        summary = summarize_lesson(lesson)

        assert summary.scheduled_for_repractice == ["Mon", "glove"]
        assert summary.correct == 1
        assert summary.wrong == 2

    def test_unanswered_fill_items_count_as_neither(self):
        lesson = Lesson(song_id="s1", items=[fill(0, "love"), ArrangeItem(line_index=1, words=["a"])])
        summary = summarize_lesson(lesson)

        assert summary.correct == 1
        assert summary.wrong == 0
        assert summary.accuracy == pytest.approx(50.0)

    def test_only_fill_answers_are_scored(self):
        lesson = Lesson(
            song_id="s1",
            items=[ArrangeItem(line_index=0, words=["a"])],
            answers=[LessonAnswer(item_index=0, type=ItemType.ARRANGE, user_input="b", correct=False)],
        )
        summary = summarize_lesson(lesson)

        assert summary.correct == 1
        assert summary.wrong == 0
        assert summary.scheduled_for_repractice == []

    def test_empty_lesson(self):
        summary = summarize_lesson(Lesson(song_id="s1"))

        assert summary.total == 0
        assert summary.accuracy == 0
        assert summary.scheduled_for_repractice == []
