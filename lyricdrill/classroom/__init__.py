"""
LyricDrill Classroom - Runtime components for generating and scoring lessons.

This module provides:
- SongLibrary: Song corpus in SQLite
- LessonStore: Lesson and answer persistence in SQLite
- ItemBuilder: Exercise generation from lyrics
- LessonService: Create lessons, submit answers, summarize
"""

from .library import SongLibrary

from .store import (
    LessonStore,
    AppendResult,
    SongRepository,
    LessonRepository,
)

from .generator import (
    ItemBuilder,
    CandidatePools,
    RandomProvider,
    LESSON_SIZE,
    time_seeded_random,
    seeded_random,
    choose_song,
    classify_lines,
    build_vocabulary,
    build_options,
    render_blank,
    item_signature,
    build_lesson_items,
)

from .summary import summarize_lesson

from .service import LessonService

__all__ = [
    # Library
    "SongLibrary",
    # Store
    "LessonStore",
    "AppendResult",
    "SongRepository",
    "LessonRepository",
    # Generator
    "ItemBuilder",
    "CandidatePools",
    "RandomProvider",
    "LESSON_SIZE",
    "time_seeded_random",
    "seeded_random",
    "choose_song",
    "classify_lines",
    "build_vocabulary",
    "build_options",
    "render_blank",
    "item_signature",
    "build_lesson_items",
    # Summary
    "summarize_lesson",
    # Service
    "LessonService",
]
