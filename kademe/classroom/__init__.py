"""
Kademe Classroom - Runtime engine for learning paths and grading.

This module provides:
- Answer evaluation for single questions
- Score aggregation into completion records
- PathBuilder: flatten content into positioned path items
- Sequential gating: unlock, step class and active item
"""

from .evaluator import (
    evaluate,
    evaluate_item,
    option_is_correct,
)

from .scoring import (
    is_answered,
    unanswered_questions,
    aggregate,
    grade_lesson,
    grade_exam,
)

from .builder import (
    PathBuilder,
    CompletionLookup,
    build,
    collect_completions,
    sorted_units,
    unit_sequence,
    normalize_positions,
)

from .gating import (
    apply_gating,
    active_item,
)

from .layout import layout_path

__all__ = [
    # Evaluator
    "evaluate",
    "evaluate_item",
    "option_is_correct",
    # Scoring
    "is_answered",
    "unanswered_questions",
    "aggregate",
    "grade_lesson",
    "grade_exam",
    # Builder
    "PathBuilder",
    "CompletionLookup",
    "build",
    "collect_completions",
    "sorted_units",
    "unit_sequence",
    "normalize_positions",
    # Gating
    "apply_gating",
    "active_item",
    "layout_path",
]
