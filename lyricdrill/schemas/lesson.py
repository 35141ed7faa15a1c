"""
Lesson schemas for LyricDrill.

Defines Pydantic models for generated lessons including:
- Lesson items (fill-in-the-blank and word arrangement)
- Persisted answers
- Service responses (created lesson, submission result, summary)
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


BLANK_MARKER = "___"
OPTION_COUNT = 4
LESSON_SIZE = 6


class ItemType(str, Enum):
    FILL_BLANK = "fillblanks"
    ARRANGE = "arrange"


# -----------------------------------------------------------------------------
# Lesson item types
# -----------------------------------------------------------------------------

class FillBlankItem(BaseModel):
    """
    One word of a line hidden behind BLANK_MARKER.
    The learner picks the missing word among `options`.
    """
    model_config = ConfigDict(extra="forbid")

    type: Literal["fillblanks"] = "fillblanks"
    line_index: int = Field(..., ge=0)
    rendered_line: str
    options: list[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_word: str

    @model_validator(mode="after")
    def correct_word_offered(self):
        if self.correct_word not in self.options:
            raise ValueError("options must contain the correct word")
        return self


class ArrangeItem(BaseModel):
    """A line whose words the learner puts back in order (checked client-side)."""
    model_config = ConfigDict(extra="forbid")

    type: Literal["arrange"] = "arrange"
    line_index: int = Field(..., ge=0)
    words: list[str] = Field(..., min_length=1)


LessonItem = Annotated[
    Union[FillBlankItem, ArrangeItem],
    Field(discriminator="type"),
]


class LessonAnswer(BaseModel):
    item_index: int = Field(..., ge=0)
    type: ItemType
    user_input: str
    correct: bool


# -----------------------------------------------------------------------------
# Lesson
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    id: Optional[str] = None
    user_id: str = ""
    song_id: str
    items: list[LessonItem] = Field(default_factory=list, max_length=LESSON_SIZE)
    answers: list[LessonAnswer] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    def answer_for(self, item_index: int) -> Optional[LessonAnswer]:
        """Return the recorded answer for an item, if any."""
        for answer in self.answers:
            if answer.item_index == item_index:
                return answer
        return None


# -----------------------------------------------------------------------------
# Service responses
# -----------------------------------------------------------------------------

class LessonItemView(BaseModel):
    """
    Client-facing item shape.

    For fill items `words` holds the four options and `correct_word` is
    included; for arrange items `words` is the line in correct order.
    """
    type: ItemType
    line_index: int
    rendered_line: Optional[str] = None
    words: list[str]
    correct_word: Optional[str] = None

    @classmethod
    def from_item(cls, item: Union[FillBlankItem, ArrangeItem]) -> "LessonItemView":
        if isinstance(item, FillBlankItem):
            return cls(
                type=ItemType.FILL_BLANK,
                line_index=item.line_index,
                rendered_line=item.rendered_line,
                words=list(item.options),
                correct_word=item.correct_word,
            )
        return cls(
            type=ItemType.ARRANGE,
            line_index=item.line_index,
            words=list(item.words),
        )


class CreateLessonResponse(BaseModel):
    lesson_id: str
    items: list[LessonItemView]


class SubmitAnswerResponse(BaseModel):
    ok: bool = True
    correct: bool


class LessonSummary(BaseModel):
    total: int = Field(..., ge=0)
    correct: int = Field(..., ge=0)
    wrong: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0)
    scheduled_for_repractice: list[str] = Field(default_factory=list)
