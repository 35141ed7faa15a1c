"""
LyricDrill Viewer - Rendering components for the practice UI.

This module provides:
- Exercise display (fill-in-the-blank, arrange)
- Lesson summary display
"""

from .quiz import (
    get_quiz_css,
    render_fill_blank,
    shuffle_for_display,
    is_arrangement_correct,
    recorded_results,
    render_summary,
)

__all__ = [
    "get_quiz_css",
    "render_fill_blank",
    "shuffle_for_display",
    "is_arrangement_correct",
    "recorded_results",
    "render_summary",
]
