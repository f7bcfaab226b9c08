"""
Progress schemas for Kademe.

Defines Pydantic models for grading output:
- Per-question results
- Completion records for a lesson or exam attempt
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime


DEFAULT_PASSING_SCORE = 70.0


class QuestionResult(BaseModel):
    question_id: str
    correct: bool


class CompletionRecord(BaseModel):
    """
    Score summary of one graded lesson or exam attempt.

    score is a percentage: 100 * correct_count / total_count, or 0 when
    there were no questions. passed is score >= passing_score.
    """
    subject_id: str  # lesson or exam id
    correct_count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    passed: bool = False
    passing_score: Optional[float] = None  # threshold applied when graded
    completed_at: Optional[datetime] = None

    @model_validator(mode='after')
    def counts_consistent(self):
        if self.correct_count > self.total_count:
            raise ValueError('correct_count cannot exceed total_count')
        return self


def compute_score(correct_count: int, total_count: int) -> float:
    """Percentage score, 0.0 for an empty lesson or exam."""
    if total_count <= 0:
        return 0.0
    return 100.0 * correct_count / total_count
