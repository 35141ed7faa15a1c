"""
Quiz renderer - Exercise display helpers for the practice UI.

Provides:
- Fill-in-the-blank line rendering
- Arrange exercise shuffling and client-side checking
- Restoring stored results when a lesson is resumed
- Lesson summary display
"""

import html
import random
from typing import Optional, Sequence

from lyricdrill.schemas import BLANK_MARKER, Lesson, LessonItemView, LessonSummary


def get_quiz_css() -> str:
    """Get CSS styles for exercise display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.8em;
    }
    .quiz-line {
        font-size: 1.2em;
        color: #333;
        line-height: 1.6;
    }
    .quiz-blank {
        display: inline-block;
        min-width: 4em;
        border-bottom: 2px solid #1976D2;
        color: #1976D2;
        text-align: center;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    .quiz-repractice {
        color: #e65100;
        margin-top: 0.8em;
    }
    </style>
    """


def render_fill_blank(item: LessonItemView, position: int) -> str:
    """
    Render a fill-in-the-blank line with the blank highlighted.

    Args:
        item: Fill item view (rendered_line must be set)
        position: 0-based item position in the lesson

    Returns:
        HTML string for the exercise header and line
    """
    line = html.escape(item.rendered_line or "")
    line = line.replace(BLANK_MARKER, f'<span class="quiz-blank">{BLANK_MARKER}</span>', 1)

    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Exercise {position + 1}: fill in the blank</div>')
    parts.append(f'<div class="quiz-line">{line}</div>')
    parts.append('</div>')
    return ''.join(parts)


def shuffle_for_display(words: Sequence[str], rng: Optional[random.Random] = None) -> list[str]:
    """
    Shuffle a line's words for an arrange exercise.

    Lines of two or more distinct words never come back in their original
    order, so the exercise is never already solved.
    """
    rng = rng or random.Random()
    shuffled = list(words)
    if len(set(shuffled)) < 2:
        return shuffled
    while shuffled == list(words):
        rng.shuffle(shuffled)
    return shuffled


def is_arrangement_correct(words: Sequence[str], submitted: Sequence[str]) -> bool:
    """Check a learner's ordering against the line's correct order."""
    return list(submitted) == list(words)


def recorded_results(lesson: Lesson) -> dict[int, bool]:
    """Map item index to correctness for the answers already stored on a lesson."""
    return {answer.item_index: answer.correct for answer in lesson.answers}


def render_summary(summary: LessonSummary) -> str:
    """Render lesson score display."""
    parts = ['<div class="quiz-score-box">']
    parts.append(f'<div class="quiz-score-value">{round(summary.accuracy)}%</div>')
    parts.append(
        f'<div class="quiz-score-label">{summary.correct} of {summary.total} correct, '
        f'{summary.wrong} wrong</div>'
    )
    if summary.scheduled_for_repractice:
        words = ", ".join(html.escape(w) for w in summary.scheduled_for_repractice)
        parts.append(f'<div class="quiz-repractice">Practice again: {words}</div>')
    parts.append('</div>')
    return ''.join(parts)
