"""
Kademe Schemas - Pydantic models for the progression and assessment engine.

This module exports all schema classes for:
- Content: levels, units, lessons, exams, exercises, questions
- Answers: decoded answer keys (choice, blank, matching)
- Progress: question results and completion records
- Path: learning path items and their visual state
- Config: layout and grading settings
"""

# Progress schemas
from .progress import (
    QuestionResult,
    CompletionRecord,
    DEFAULT_PASSING_SCORE,
    compute_score,
)

# Content schemas
from .content import (
    QuestionType,
    Translation,
    QuestionPrompt,
    OptionTranslation,
    AnswerOption,
    GradableItem,
    Exercise,
    Question,
    Lesson,
    Exam,
    Unit,
    Level,
    ContentSnapshot,
    first_title,
)

# Answer key schemas
from .answers import (
    MatchPair,
    ChoiceKey,
    BlankKey,
    MatchingKey,
    AnswerKey,
    normalize_text,
    decode_pairs,
    decode_json_array,
    decode_accepted_answers,
    decode_answer_key,
)

# Path schemas
from .path import (
    PathItemKind,
    StepClass,
    STEP_KINDS,
    Position,
    PathItemMetadata,
    PathItem,
)

# Config schemas
from .config import (
    LayoutConfig,
    GradingConfig,
    EngineConfig,
)

__all__ = [
    # Progress
    'QuestionResult',
    'CompletionRecord',
    'DEFAULT_PASSING_SCORE',
    'compute_score',
    # Content
    'QuestionType',
    'Translation',
    'QuestionPrompt',
    'OptionTranslation',
    'AnswerOption',
    'GradableItem',
    'Exercise',
    'Question',
    'Lesson',
    'Exam',
    'Unit',
    'Level',
    'ContentSnapshot',
    'first_title',
    # Answers
    'MatchPair',
    'ChoiceKey',
    'BlankKey',
    'MatchingKey',
    'AnswerKey',
    'normalize_text',
    'decode_pairs',
    'decode_json_array',
    'decode_accepted_answers',
    'decode_answer_key',
    # Path
    'PathItemKind',
    'StepClass',
    'STEP_KINDS',
    'Position',
    'PathItemMetadata',
    'PathItem',
    # Config
    'LayoutConfig',
    'GradingConfig',
    'EngineConfig',
]
