"""
Sequential gating tests for Kademe.
"""

import itertools

import pytest

from kademe.classroom import active_item, apply_gating
from kademe.schemas import PathItem, PathItemKind, Position, StepClass


def make_items(*specs: tuple[PathItemKind, bool]) -> list[PathItem]:
    """Items from (kind, is_completed) pairs, in order."""
    return [
        PathItem(
            id=f"item-{n}",
            kind=kind,
            order=n,
            position=Position(top=0, left=0),
            is_completed=completed,
        )
        for n, (kind, completed) in enumerate(specs, start=1)
    ]


LESSON = PathItemKind.LESSON_STEP
EXERCISE = PathItemKind.EXERCISE_STEP
TROPHY = PathItemKind.TROPHY
UNIT = PathItemKind.UNIT_CARD
MASCOT = PathItemKind.MASCOT


class TestApplyGating:
    """Test unlock, step class and active item."""

    def test_empty(self):
        assert apply_gating([]) == []

    def test_three_lessons_first_done(self):
        items = apply_gating(make_items((LESSON, True), (LESSON, False), (LESSON, False)))
        assert [i.step_class for i in items] == [StepClass.PASS, StepClass.DEFAULT, StepClass.LOCK]
        assert [i.is_unlocked for i in items] == [True, True, False]
        assert [i.is_active for i in items] == [False, True, False]

    def test_first_item_always_unlocked(self):
        items = apply_gating(make_items((LESSON, False), (EXERCISE, False)))
        assert items[0].is_unlocked
        assert items[0].is_active
        assert not items[1].is_unlocked

    def test_completed_item_after_gap_is_relocked(self):
        # Strictly linear progression: a passed lesson behind an open one
        # is shown locked, not passed.
        items = apply_gating(make_items((LESSON, False), (LESSON, True), (TROPHY, True)))
        assert [i.is_unlocked for i in items] == [True, False, False]
        assert [i.step_class for i in items] == [StepClass.DEFAULT, StepClass.LOCK, StepClass.LOCK]
        assert items[1].is_completed

    def test_all_completed_has_no_active(self):
        items = apply_gating(make_items((LESSON, True), (EXERCISE, True), (TROPHY, True), (UNIT, True)))
        assert active_item(items) is None
        assert all(i.is_unlocked for i in items)
        assert [i.step_class for i in items] == [StepClass.PASS, StepClass.PASS, StepClass.PASS, StepClass.DEFAULT]

    def test_containers_never_pass(self):
        items = apply_gating(make_items((MASCOT, True), (UNIT, True), (UNIT, False), (MASCOT, False)))
        assert [i.step_class for i in items] == [
            StepClass.DEFAULT, StepClass.DEFAULT, StepClass.DEFAULT, StepClass.LOCK,
        ]

    def test_containers_are_never_active(self):
        items = apply_gating(make_items((UNIT, False), (LESSON, False)))
        assert not items[0].is_active
        assert items[0].is_unlocked
        # the incomplete unit card locks everything after it
        assert not items[1].is_unlocked
        assert active_item(items) is None

    def test_trophy_can_be_active(self):
        items = apply_gating(make_items((LESSON, True), (TROPHY, False)))
        assert active_item(items).kind == TROPHY

    def test_input_not_mutated(self):
        items = make_items((LESSON, True), (LESSON, False))
        apply_gating(items)
        assert not any(i.is_unlocked for i in items)

    def test_nested_models_are_copied(self):
        items = make_items((LESSON, False))
        gated = apply_gating(items)
        assert gated[0].position is not items[0].position
        assert gated[0].metadata is not items[0].metadata

    def test_sorted_by_order(self):
        items = make_items((LESSON, True), (LESSON, False))
        gated = apply_gating(list(reversed(items)))
        assert [i.order for i in gated] == [1, 2]
        assert gated[1].is_active


KINDS = [LESSON, EXERCISE, TROPHY, UNIT, MASCOT]


@pytest.mark.parametrize(
    "completed",
    list(itertools.product([True, False], repeat=5)),
)
@pytest.mark.parametrize("kinds", [KINDS, [LESSON] * 5, [UNIT, LESSON, EXERCISE, TROPHY, MASCOT]])
def test_gating_invariants(completed, kinds):
    items = apply_gating(make_items(*zip(kinds, completed)))

    assert sum(1 for i in items if i.is_active) <= 1

    for n, item in enumerate(items):
        if not item.is_completed:
            assert not any(later.is_unlocked for later in items[n + 1:])
        if item.is_unlocked:
            assert all(earlier.is_completed for earlier in items[:n])

    first_open = next((i for i in items if i.is_step and i.is_unlocked and not i.is_completed), None)
    assert active_item(items) == first_open
