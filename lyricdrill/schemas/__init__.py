"""
LyricDrill Schemas - Pydantic models for the lyrics practice platform.

This module exports all schema classes for:
- Song: title, artist and tokenized lyrics
- Lesson: lesson items, answers and service responses
"""

# Song schemas
from .song import Song

# Lesson schemas
from .lesson import (
    BLANK_MARKER,
    OPTION_COUNT,
    LESSON_SIZE,
    ItemType,
    FillBlankItem,
    ArrangeItem,
    LessonItem,
    LessonAnswer,
    Lesson,
    LessonItemView,
    CreateLessonResponse,
    SubmitAnswerResponse,
    LessonSummary,
)

__all__ = [
    # Song
    'Song',
    # Lesson
    'BLANK_MARKER',
    'OPTION_COUNT',
    'LESSON_SIZE',
    'ItemType',
    'FillBlankItem',
    'ArrangeItem',
    'LessonItem',
    'LessonAnswer',
    'Lesson',
    'LessonItemView',
    'CreateLessonResponse',
    'SubmitAnswerResponse',
    'LessonSummary',
]
