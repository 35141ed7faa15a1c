"""
LessonService - Create lessons, record answers and report scores.

Combines a SongRepository (corpus) with a LessonRepository (lesson state).
The service itself holds no per-request state; each generation call draws
a fresh random source from the injected provider.
"""

import logging
from typing import Union

from lyricdrill.errors import ConflictError, NotFoundError, ValidationError
from lyricdrill.schemas import (
    CreateLessonResponse,
    FillBlankItem,
    ItemType,
    Lesson,
    LessonAnswer,
    LessonItemView,
    LessonSummary,
    SubmitAnswerResponse,
)

from .generator import ItemBuilder, RandomProvider, choose_song, time_seeded_random
from .store import AppendResult, LessonRepository, SongRepository
from .summary import summarize_lesson


logger = logging.getLogger(__name__)


class LessonService:
    """
    Lesson lifecycle: generate, answer (once per item), summarize.
    """

    def __init__(
        self,
        songs: SongRepository,
        lessons: LessonRepository,
        rng_provider: RandomProvider = time_seeded_random,
    ):
        """
        Initialize service.

        Args:
            songs: Song corpus accessor
            lessons: Lesson persistence
            rng_provider: Returns a new random.Random per generation call
        """
        self.songs = songs
        self.lessons = lessons
        self.rng_provider = rng_provider

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def create_lesson(self, user_id: str) -> CreateLessonResponse:
        """
        Generate a lesson from a random song and persist it.

        Raises:
            ValidationError: Blank user ID, empty corpus or song without lines
            StorageError: The song or lesson store failed
        """
        if not user_id or not user_id.strip():
            raise ValidationError("userId is required")

        rng = self.rng_provider()
        song = choose_song(self.songs.find_all_songs(), rng)

        builder = ItemBuilder(song.lyrics, rng)
        items = builder.build()

        lesson = self.lessons.create_lesson(
            user_id,
            Lesson(user_id=user_id, song_id=song.id, items=items),
        )
        logger.info(
            f"Created lesson {lesson.id} for {user_id} from song {song.id} "
            f"({len(items)} items{', fallback used' if builder.used_fallback else ''})"
        )

        return self._to_response(lesson)

    def resume_lesson(self, lesson_id: str) -> CreateLessonResponse:
        """
        Return a stored lesson in the same shape as a freshly created one.

        Raises:
            NotFoundError: Unknown lesson
            StorageError: The lesson store failed
        """
        return self._to_response(self._get_lesson(lesson_id))

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit_answer(
        self,
        lesson_id: str,
        item_index: int,
        answer_type: Union[ItemType, str],
        user_input: str,
    ) -> SubmitAnswerResponse:
        """
        Check an answer and record it if it is a fill-in-the-blank answer.

        Arrange answers are verified by the client; they are acknowledged as
        correct and not stored.

        Raises:
            NotFoundError: Unknown lesson
            ConflictError: The item already has an answer
            ValidationError: Item index out of range, or a fill answer for an arrange item
            StorageError: The lesson store failed
        """
        lesson = self._get_lesson(lesson_id)

        if lesson.answer_for(item_index) is not None:
            logger.warning(f"Duplicate submission for lesson {lesson_id} item {item_index}")
            raise ConflictError(f"duplicate submission for item {item_index}")

        if item_index < 0 or item_index >= len(lesson.items):
            raise ValidationError(f"invalid item index: {item_index}")

        if answer_type != ItemType.FILL_BLANK:
            return SubmitAnswerResponse(correct=True)

        item = lesson.items[item_index]
        if not isinstance(item, FillBlankItem):
            raise ValidationError(f"item {item_index} is not a fill-in-the-blank item")
        correct = user_input.casefold() == item.correct_word.casefold()

        result = self.lessons.append_answer(lesson_id, LessonAnswer(
            item_index=item_index,
            type=ItemType.FILL_BLANK,
            user_input=user_input,
            correct=correct,
        ))
        if result == AppendResult.CONFLICT:
            logger.warning(f"Concurrent duplicate for lesson {lesson_id} item {item_index}")
            raise ConflictError(f"duplicate submission for item {item_index}")
        if result == AppendResult.NOT_FOUND:
            raise NotFoundError(f"lesson not found: {lesson_id}")

        return SubmitAnswerResponse(correct=correct)

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def get_summary(self, lesson_id: str) -> LessonSummary:
        """
        Score a lesson.

        Raises:
            NotFoundError: Unknown lesson
            StorageError: The lesson store failed
        """
        return summarize_lesson(self._get_lesson(lesson_id))

    def _get_lesson(self, lesson_id: str) -> Lesson:
        lesson = self.lessons.get_lesson_by_id(lesson_id)
        if lesson is None:
            raise NotFoundError(f"lesson not found: {lesson_id}")
        return lesson

    @staticmethod
    def _to_response(lesson: Lesson) -> CreateLessonResponse:
        return CreateLessonResponse(
            lesson_id=lesson.id,
            items=[LessonItemView.from_item(item) for item in lesson.items],
        )
