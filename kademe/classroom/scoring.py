"""
Score aggregation - Grade a whole lesson or exam attempt.

Provides:
- Submission completeness checks (the caller blocks submit until complete)
- Per-question grading via the answer evaluator
- Completion records with score and pass/fail
"""

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from kademe.schemas import (
    CompletionRecord,
    DEFAULT_PASSING_SCORE,
    Exam,
    GradableItem,
    Lesson,
    QuestionResult,
    QuestionType,
    compute_score,
    decode_json_array,
)

from .evaluator import evaluate_item

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Submission checks
# -------------------------------------------------------------------------

def is_answered(item: GradableItem, submission: Optional[str]) -> bool:
    """
    Check whether a question has a usable answer.

    Blank answers never count. A matching answer counts once it is a JSON
    array with at least one element. Element shape is left to the evaluator.
    """
    if not submission or not submission.strip():
        return False
    if item.type == QuestionType.MATCHING.value:
        entries = decode_json_array(submission)
        return bool(entries)
    return True


def unanswered_questions(
    questions: Sequence[GradableItem],
    submissions: Mapping[str, str],
) -> list[str]:
    """IDs of questions that still need an answer, in question order."""
    return [
        q.id for q in questions
        if not is_answered(q, submissions.get(q.id))
    ]


# -------------------------------------------------------------------------
# Aggregation
# -------------------------------------------------------------------------

def aggregate(
    subject_id: str,
    questions: Sequence[GradableItem],
    submissions: Mapping[str, str],
    passing_score: Optional[float] = None,
    completed_at: Optional[datetime] = None,
) -> tuple[CompletionRecord, list[QuestionResult]]:
    """
    Grade every question and build the completion record.

    Args:
        subject_id: lesson or exam ID the record belongs to
        questions: exercises or exam questions to grade
        submissions: question ID -> submitted answer
        passing_score: percentage needed to pass (default: 70)
        completed_at: attempt time to stamp on the record, if known

    Returns:
        Tuple of (completion record, per-question results)
    """
    if passing_score is None:
        passing_score = DEFAULT_PASSING_SCORE

    results = [
        QuestionResult(question_id=q.id, correct=evaluate_item(q, submissions.get(q.id)))
        for q in questions
    ]
    correct_count = sum(1 for r in results if r.correct)
    total_count = len(results)
    score = compute_score(correct_count, total_count)

    record = CompletionRecord(
        subject_id=subject_id,
        correct_count=correct_count,
        total_count=total_count,
        score=score,
        passed=score >= passing_score,
        passing_score=passing_score,
        completed_at=completed_at,
    )
    logger.info(
        f"Graded {subject_id}: {correct_count}/{total_count} correct, "
        f"score {score:.0f}% ({'passed' if record.passed else 'failed'}, needs {passing_score:g}%)"
    )
    return record, results


def grade_lesson(
    lesson: Lesson,
    submissions: Mapping[str, str],
    default_passing_score: float = DEFAULT_PASSING_SCORE,
) -> tuple[CompletionRecord, list[QuestionResult]]:
    """Grade a lesson attempt over its exercises."""
    passing = lesson.passing_score if lesson.passing_score is not None else default_passing_score
    return aggregate(lesson.id, lesson.exercises, submissions, passing)


def grade_exam(
    exam: Exam,
    submissions: Mapping[str, str],
    default_passing_score: float = DEFAULT_PASSING_SCORE,
) -> tuple[CompletionRecord, list[QuestionResult]]:
    """Grade an exam attempt over its questions."""
    passing = exam.passing_score if exam.passing_score is not None else default_passing_score
    return aggregate(exam.id, exam.questions, submissions, passing)
