"""
Answer key schemas for Kademe.

The stored correct_answer string is decoded once per question type into an
explicit answer key:
- ChoiceKey: option id or option text (multiple choice and unknown types)
- BlankKey: list of accepted strings (fill in the blank)
- MatchingKey: list of {left, right} pairs (matching)

Decoding never raises. A malformed fill_blank key falls back to the raw
string as the only accepted answer; a malformed matching key decodes to
pairs=None, which grades every submission as incorrect.
"""

import logging
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from .content import QuestionType

logger = logging.getLogger(__name__)


class MatchPair(BaseModel):
    left: str
    right: str

    def matches(self, other: "MatchPair") -> bool:
        """Both sides equal, ignoring case and surrounding whitespace."""
        return (
            normalize_text(self.left) == normalize_text(other.left)
            and normalize_text(self.right) == normalize_text(other.right)
        )


# -----------------------------------------------------------------------------
# Answer key variants
# -----------------------------------------------------------------------------

class AnswerKeyBase(BaseModel):
    kind: str


class ChoiceKey(AnswerKeyBase):
    kind: Literal["choice"] = "choice"
    value: str  # option id, or the correct option's text


class BlankKey(AnswerKeyBase):
    kind: Literal["blank"] = "blank"
    accepted: list[str]


class MatchingKey(AnswerKeyBase):
    kind: Literal["matching"] = "matching"
    pairs: Optional[list[MatchPair]] = None  # None when the stored JSON is malformed


AnswerKey = Union[ChoiceKey, BlankKey, MatchingKey]


_string_list = TypeAdapter(list[str])
_pair_list = TypeAdapter(list[MatchPair])
_any_list = TypeAdapter(list[Any])


def normalize_text(value: str) -> str:
    return value.strip().lower()


def decode_pairs(raw: Optional[str]) -> Optional[list[MatchPair]]:
    """Decode a JSON array of {left, right} pairs, None if malformed."""
    if not raw:
        return None
    try:
        return _pair_list.validate_json(raw)
    except ValidationError:
        logger.debug(f"Malformed matching pairs: {raw!r}")
        return None


def decode_json_array(raw: Optional[str]) -> Optional[list[Any]]:
    """Decode any JSON array without checking its elements, None otherwise."""
    if not raw:
        return None
    try:
        return _any_list.validate_json(raw)
    except ValidationError:
        return None


def decode_accepted_answers(raw: str) -> list[str]:
    """Decode a JSON array of accepted strings, falling back to [raw]."""
    try:
        return _string_list.validate_json(raw)
    except ValidationError:
        logger.debug(f"fill_blank key is not a JSON string array, using literal: {raw!r}")
        return [raw]


def decode_answer_key(question_type: str, correct_answer: str) -> AnswerKey:
    """Decode a stored correct_answer according to its question type."""
    if question_type == QuestionType.FILL_BLANK.value:
        return BlankKey(accepted=decode_accepted_answers(correct_answer))
    if question_type == QuestionType.MATCHING.value:
        return MatchingKey(pairs=decode_pairs(correct_answer))
    return ChoiceKey(value=correct_answer)
