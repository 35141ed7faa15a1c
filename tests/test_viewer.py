"""
Viewer helper tests for LyricDrill.
"""

import random

from lyricdrill.schemas import ArrangeItem, ItemType, Lesson, LessonAnswer, LessonItemView, LessonSummary
from lyricdrill.viewer import (
    get_quiz_css,
    is_arrangement_correct,
    recorded_results,
    render_fill_blank,
    render_summary,
    shuffle_for_display,
)


class TestFillBlankRendering:
    """Test fill-in-the-blank display."""

    def test_blank_is_highlighted(self):
        item = LessonItemView(
            type=ItemType.FILL_BLANK,
            line_index=0,
            rendered_line="I ___ you",
            words=["love", "me", "sun", "moon"],
            correct_word="love",
        )
        html_out = render_fill_blank(item, 0)

        assert "Exercise 1" in html_out
        assert '<span class="quiz-blank">___</span>' in html_out
        assert "love" not in html_out

    def test_lyrics_are_escaped(self):
        item = LessonItemView(
            type=ItemType.FILL_BLANK,
            line_index=0,
            rendered_line="<b>rock</b> ___",
            words=["roll", "a", "b", "c"],
            correct_word="roll",
        )
        assert "&lt;b&gt;rock&lt;/b&gt;" in render_fill_blank(item, 2)

    def test_css(self):
        assert ".quiz-blank" in get_quiz_css()


class TestArrangeHelpers:
    """Test arrange exercise helpers."""

    def test_shuffle_changes_order(self):
        words = ["run", "fast", "now"]
        for seed in range(20):
            shuffled = shuffle_for_display(words, random.Random(seed))
            assert sorted(shuffled) == sorted(words)
            assert shuffled != words

    def test_shuffle_single_word(self):
        assert shuffle_for_display(["hey"]) == ["hey"]

    def test_shuffle_repeated_word(self):
        assert shuffle_for_display(["la", "la", "la"]) == ["la", "la", "la"]

    def test_arrangement_check(self):
        assert is_arrangement_correct(["moon", "is", "dark"], ["moon", "is", "dark"])
        assert not is_arrangement_correct(["moon", "is", "dark"], ["is", "moon", "dark"])
        assert not is_arrangement_correct(["moon", "is", "dark"], ["moon", "is"])


class TestSummaryRendering:
    """Test summary display."""

    def test_summary_with_repractice(self):
        summary = LessonSummary(
            total=6, correct=5, wrong=1, accuracy=500 / 6, scheduled_for_repractice=["run"],
        )
        html_out = render_summary(summary)

        assert "83%" in html_out
        assert "5 of 6 correct" in html_out
        assert "Practice again: run" in html_out

    def test_summary_without_repractice(self):
        summary = LessonSummary(total=2, correct=2, wrong=0, accuracy=100.0)
        assert "Practice again" not in render_summary(summary)


class TestRecordedResults:
    """Test restoring answered items when a lesson is resumed."""

    def test_maps_stored_answers(self):
        lesson = Lesson(
            song_id="s1",
            items=[ArrangeItem(line_index=i, words=["a"]) for i in range(3)],
            answers=[
                LessonAnswer(item_index=2, type=ItemType.FILL_BLANK, user_input="x", correct=False),
                LessonAnswer(item_index=0, type=ItemType.FILL_BLANK, user_input="a", correct=True),
            ],
        )
        assert recorded_results(lesson) == {0: True, 2: False}

    def test_fresh_lesson(self):
        assert recorded_results(Lesson(song_id="s1")) == {}
