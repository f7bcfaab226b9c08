"""
Learning path schemas for Kademe.

A learning path is a flat list of PathItem, rebuilt on every layout pass.
Positions are in screen points with top=0 at the visual top of the column;
the first item of the path sits at the bottom.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PathItemKind(str, Enum):
    UNIT_CARD = "unit_card"
    LESSON_STEP = "lesson_step"
    EXERCISE_STEP = "exercise_step"
    TROPHY = "trophy"  # exam
    MASCOT = "mascot"


class StepClass(str, Enum):
    """Visual state of a path node."""
    PASS = "pass"        # completed and reachable
    LOCK = "lock"        # an earlier step is still open
    DEFAULT = "default"  # reachable, not yet completed


# Kinds that take part in pass/active classification
STEP_KINDS = frozenset({
    PathItemKind.LESSON_STEP,
    PathItemKind.EXERCISE_STEP,
    PathItemKind.TROPHY,
})


class Position(BaseModel):
    top: float
    left: float
    size: Optional[float] = None


class PathItemMetadata(BaseModel):
    title: Optional[str] = None
    background_color: Optional[str] = None
    lesson_number: Optional[int] = None


class PathItem(BaseModel):
    id: str
    kind: PathItemKind
    order: int
    position: Position
    is_completed: bool = False
    is_unlocked: bool = False
    is_active: bool = False
    step_class: StepClass = StepClass.DEFAULT

    # Display extras
    unit_id: Optional[str] = None
    lesson_id: Optional[str] = None
    exercise_id: Optional[str] = None
    exam_id: Optional[str] = None
    icon: Optional[str] = None
    mascot_type: Optional[str] = None
    trophy_number: Optional[int] = None
    metadata: PathItemMetadata = PathItemMetadata()

    @property
    def is_step(self) -> bool:
        return self.kind in STEP_KINDS
