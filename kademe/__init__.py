"""
Kademe - Progression and assessment engine for a language-learning path.

Lays out levels, units, lessons and exams as a gated learning path and
grades lesson/exam attempts into completion records.
"""

from .classroom import (
    evaluate,
    aggregate,
    grade_lesson,
    grade_exam,
    build,
    apply_gating,
    layout_path,
)

__version__ = "0.1.0"

__all__ = [
    "evaluate",
    "aggregate",
    "grade_lesson",
    "grade_exam",
    "build",
    "apply_gating",
    "layout_path",
    "__version__",
]
