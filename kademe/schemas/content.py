"""
Content snapshot schemas for Kademe.

Defines Pydantic models for the read-only content hierarchy:
- Levels, units, lessons and exams (the learning path skeleton)
- Exercises and exam questions (gradable items)
- Localized translation records used for display metadata

A snapshot is whatever the content API returned for one layout pass.
The engine never mutates it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .progress import CompletionRecord


class QuestionType(str, Enum):
    """Question types with a dedicated grading rule.

    Any other type string is graded like a multiple-choice question.
    """
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_BLANK = "fill_blank"
    MATCHING = "matching"


# -----------------------------------------------------------------------------
# Localized records
# -----------------------------------------------------------------------------

class Translation(BaseModel):
    """Localized title/description of a level, unit, lesson or exam."""
    language_id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    content_md: Optional[str] = None  # lesson body, markdown


class QuestionPrompt(BaseModel):
    language_id: Optional[str] = None
    question_text: str


class OptionTranslation(BaseModel):
    language_id: Optional[str] = None
    option_text: Optional[str] = None


class AnswerOption(BaseModel):
    """A selectable option of a multiple-choice item."""
    id: str
    order: int = 0
    translations: list[OptionTranslation] = []


# -----------------------------------------------------------------------------
# Gradable items
# -----------------------------------------------------------------------------

class GradableItem(BaseModel):
    """
    Common shape of exercises and exam questions.

    correct_answer is stored as a string whose meaning depends on type:
    an option id or option text (multiple_choice), a JSON array of accepted
    strings (fill_blank), or a JSON array of {left, right} pairs (matching).
    """
    id: str
    order: int = 0
    type: str = QuestionType.MULTIPLE_CHOICE.value
    correct_answer: Optional[str] = None
    media_url: Optional[str] = None
    prompts: list[QuestionPrompt] = []
    options: list[AnswerOption] = []


class Exercise(GradableItem):
    lesson_id: Optional[str] = None


class Question(GradableItem):
    exam_id: Optional[str] = None


# -----------------------------------------------------------------------------
# Hierarchy
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    id: str
    unit_id: Optional[str] = None
    order: int
    is_free: bool = False
    passing_score: Optional[float] = None  # falls back to the configured default
    icon_type: Optional[str] = None
    translations: list[Translation] = []
    exercises: list[Exercise] = []
    completion: Optional[CompletionRecord] = None  # current user's record, if the API embeds it


class Exam(BaseModel):
    """
    Exam attached to a unit.

    When lesson_id is set the exam is placed right after that lesson in the
    learning path, otherwise at the end of the unit.
    """
    id: str
    unit_id: Optional[str] = None
    lesson_id: Optional[str] = None
    order: int
    passing_score: Optional[float] = None
    translations: list[Translation] = []
    questions: list[Question] = []
    completion: Optional[CompletionRecord] = None


class Unit(BaseModel):
    id: str
    level_id: Optional[str] = None
    order: int
    slug: Optional[str] = None
    translations: list[Translation] = []
    lessons: list[Lesson] = []
    exams: list[Exam] = []


class Level(BaseModel):
    id: str
    code: str = ""
    order: int
    units: list[Unit] = []


class ContentSnapshot(BaseModel):
    """Root of a fetched content hierarchy."""
    levels: list[Level] = []


def first_title(translations: list[Translation], fallback: str) -> str:
    """Title of the first translation, or fallback when it has none."""
    if translations and translations[0].title:
        return translations[0].title
    return fallback
