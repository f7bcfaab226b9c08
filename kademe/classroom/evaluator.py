"""
Answer evaluator - Grade one exercise or exam question.

Provides:
- evaluate(): grade a submission against a stored correct_answer string
- evaluate_item(): same, for a GradableItem
- option_is_correct(): whether an option is the right one (result highlighting)

Grading never raises. Anything that cannot be decoded or matched is
graded as incorrect.
"""

from typing import Optional

from kademe.schemas import (
    AnswerOption,
    BlankKey,
    ChoiceKey,
    GradableItem,
    MatchingKey,
    decode_answer_key,
    decode_pairs,
    normalize_text,
)


def _option_has_text(option: AnswerOption, text: str) -> bool:
    """True if any translation of the option reads as text."""
    wanted = normalize_text(text)
    return any(
        t.option_text and normalize_text(t.option_text) == wanted
        for t in option.translations
    )


def _check_choice(key: ChoiceKey, submission: str, options: list[AnswerOption]) -> bool:
    selected = next((opt for opt in options if opt.id == submission), None)
    if selected is None:
        return False
    if submission == key.value:
        return True
    return _option_has_text(selected, key.value)


def _check_blank(key: BlankKey, submission: str) -> bool:
    answer = normalize_text(submission)
    if not answer:
        return False
    return any(normalize_text(accepted) == answer for accepted in key.accepted)


def _check_matching(key: MatchingKey, submission: str) -> bool:
    user_pairs = decode_pairs(submission)
    if key.pairs is None or user_pairs is None:
        return False
    if len(key.pairs) != len(user_pairs):
        return False
    return all(
        any(correct.matches(user) for user in user_pairs)
        for correct in key.pairs
    )


def evaluate(
    question_type: str,
    correct_answer: Optional[str],
    submission: Optional[str],
    options: Optional[list[AnswerOption]] = None,
) -> bool:
    """
    Grade a single submission.

    Args:
        question_type: multiple_choice, fill_blank or matching; anything
            else is graded as multiple choice
        correct_answer: stored answer encoding for the question
        submission: option id, free text, or JSON array of pairs
        options: the question's options (multiple choice only)

    Returns:
        True if the submission is correct
    """
    if not submission or not correct_answer:
        return False

    key = decode_answer_key(question_type, correct_answer)
    if isinstance(key, BlankKey):
        return _check_blank(key, submission)
    if isinstance(key, MatchingKey):
        return _check_matching(key, submission)
    return _check_choice(key, submission, options or [])


def evaluate_item(item: GradableItem, submission: Optional[str]) -> bool:
    """Grade a submission for an exercise or exam question."""
    return evaluate(item.type, item.correct_answer, submission, item.options)


def option_is_correct(item: GradableItem, option: AnswerOption) -> bool:
    """Whether option is the correct choice of a multiple-choice item."""
    if not item.correct_answer:
        return False
    if option.id == item.correct_answer:
        return True
    return _option_has_text(option, item.correct_answer)
