"""
Lesson summary - Reduce a lesson's items and answers into a score report.

Arrange items are never verified server-side, so every arrange item in the
lesson counts as correct whether or not the learner reached it. Only
persisted fill-in-the-blank answers can be wrong.
"""

from lyricdrill.schemas import ArrangeItem, ItemType, Lesson, LessonSummary


def summarize_lesson(lesson: Lesson) -> LessonSummary:
    """
    Score a lesson.

    Returns:
        LessonSummary where accuracy = correct / total * 100 (0 for an
        empty lesson) and scheduled_for_repractice lists the learner's
        wrong fill-in inputs in the order they were submitted
    """
    total = len(lesson.items)

    fill_correct = 0
    fill_wrong = 0
    scheduled = []
    for answer in lesson.answers:
        if answer.type != ItemType.FILL_BLANK:
            continue
        if answer.correct:
            fill_correct += 1
        else:
            fill_wrong += 1
            scheduled.append(answer.user_input)

    arrange_count = sum(1 for item in lesson.items if isinstance(item, ArrangeItem))

    correct = fill_correct + arrange_count
    accuracy = correct / total * 100 if total > 0 else 0.0

    return LessonSummary(
        total=total,
        correct=correct,
        wrong=fill_wrong,
        accuracy=accuracy,
        scheduled_for_repractice=scheduled,
    )
