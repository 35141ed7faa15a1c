"""
Schema validation tests for LyricDrill.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import datetime, timezone

from pydantic import ValidationError as SchemaError

from lyricdrill.schemas import (
    # Song
    Song,
    # Lesson
    LESSON_SIZE,
    ItemType,
    FillBlankItem,
    ArrangeItem,
    LessonAnswer,
    Lesson,
    LessonItemView,
    CreateLessonResponse,
    SubmitAnswerResponse,
    LessonSummary,
)


class TestSongSchema:
    """Test song schema."""

    def test_song_valid(self):
        song = Song(id="s1", title="Song", artist="Band", lyrics=[["I", "love", "you"], ["hey"]])
        assert song.line_count == 2

    def test_song_defaults(self):
        song = Song(id="s1", title="Untitled")
        assert song.artist == ""
        assert song.lyrics == []
        assert song.line_count == 0


class TestLessonItemSchemas:
    """Test fill-blank / arrange item variants."""

    def test_fill_blank_valid(self):
        item = FillBlankItem(
            line_index=0,
            rendered_line="I ___ you",
            options=["love", "me", "sun", "moon"],
            correct_word="love",
        )
        assert item.type == "fillblanks"
        assert item.correct_word in item.options

    def test_fill_blank_requires_four_options(self):
        with pytest.raises(SchemaError):
            FillBlankItem(
                line_index=0,
                rendered_line="I ___ you",
                options=["love", "me", "sun"],
                correct_word="love",
            )

    def test_fill_blank_requires_correct_word_in_options(self):
        with pytest.raises(SchemaError):
            FillBlankItem(
                line_index=0,
                rendered_line="I ___ you",
                options=["hate", "me", "sun", "moon"],
                correct_word="love",
            )

    def test_fill_blank_allows_padded_options(self):
        item = FillBlankItem(
            line_index=0,
            rendered_line="___ b",
            options=["a", "b", "a", "a"],
            correct_word="a",
        )
        assert item.options.count("a") == 3

    def test_arrange_valid(self):
        item = ArrangeItem(line_index=3, words=["moon", "is", "dark"])
        assert item.type == "arrange"
        assert item.words == ["moon", "is", "dark"]

    def test_arrange_rejects_fill_fields(self):
        with pytest.raises(SchemaError):
            ArrangeItem(line_index=0, words=["a"], correct_word="a")

    def test_arrange_rejects_empty_line(self):
        with pytest.raises(SchemaError):
            ArrangeItem(line_index=0, words=[])

    def test_negative_line_index(self):
        with pytest.raises(SchemaError):
            ArrangeItem(line_index=-1, words=["a"])


class TestLessonSchema:
    """Test lesson parsing and helpers."""

    def test_items_discriminated_by_type(self):
        lesson = Lesson(
            song_id="s1",
            items=[
                {
                    "type": "fillblanks",
                    "line_index": 0,
                    "rendered_line": "___ love you",
                    "options": ["I", "me", "sun", "moon"],
                    "correct_word": "I",
                },
                {"type": "arrange", "line_index": 1, "words": ["you", "love", "me"]},
            ],
        )
        assert isinstance(lesson.items[0], FillBlankItem)
        assert isinstance(lesson.items[1], ArrangeItem)

    def test_unknown_item_type(self):
        with pytest.raises(SchemaError):
            Lesson(song_id="s1", items=[{"type": "matching", "line_index": 0}])

    def test_items_capped_at_lesson_size(self):
        items = [ArrangeItem(line_index=i, words=["w"]) for i in range(LESSON_SIZE + 1)]
        with pytest.raises(SchemaError):
            Lesson(song_id="s1", items=items)

        assert len(Lesson(song_id="s1", items=items[:LESSON_SIZE]).items) == LESSON_SIZE

    def test_defaults(self):
        lesson = Lesson(song_id="s1")
        assert lesson.id is None
        assert lesson.items == []
        assert lesson.answers == []
        assert lesson.created_at is None

    def test_answer_for(self):
        lesson = Lesson(
            song_id="s1",
            answers=[LessonAnswer(item_index=2, type=ItemType.FILL_BLANK, user_input="x", correct=False)],
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        assert lesson.answer_for(2).user_input == "x"
        assert lesson.answer_for(0) is None

    def test_answer_type_from_string(self):
        answer = LessonAnswer(item_index=0, type="fillblanks", user_input="love", correct=True)
        assert answer.type == ItemType.FILL_BLANK

    def test_answer_negative_index(self):
        with pytest.raises(SchemaError):
            LessonAnswer(item_index=-1, type="fillblanks", user_input="x", correct=False)


class TestResponseSchemas:
    """Test service response models."""

    def test_view_from_fill_item_exposes_answer_key(self):
        item = FillBlankItem(
            line_index=2,
            rendered_line="sun is ___",
            options=["bright", "dark", "run", "now"],
            correct_word="bright",
        )
        view = LessonItemView.from_item(item)
        assert view.type == ItemType.FILL_BLANK
        assert view.rendered_line == "sun is ___"
        assert view.words == ["bright", "dark", "run", "now"]
        assert view.correct_word == "bright"

    def test_view_from_arrange_item(self):
        view = LessonItemView.from_item(ArrangeItem(line_index=4, words=["run", "fast", "now"]))
        assert view.type == ItemType.ARRANGE
        assert view.rendered_line is None
        assert view.correct_word is None
        assert view.words == ["run", "fast", "now"]

    def test_create_lesson_response(self):
        response = CreateLessonResponse(lesson_id="l1", items=[])
        assert response.lesson_id == "l1"

    def test_submit_answer_response_defaults_ok(self):
        assert SubmitAnswerResponse(correct=False).ok is True

    def test_summary_rejects_negative_counts(self):
        with pytest.raises(SchemaError):
            LessonSummary(total=-1, correct=0, wrong=0, accuracy=0)
