"""
Sequential gating - Decide which path items are unlocked and active.

One forward pass over the built path, in order:
- An item is unlocked only if every earlier item is completed
- The first unlocked, incomplete step is the active one

A completed item after an incomplete one stays locked. Progression is
strictly linear, so earlier gaps must be closed first.
"""

from typing import Optional

from kademe.schemas import PathItem, StepClass


def _step_class(item: PathItem, is_unlocked: bool) -> StepClass:
    if not is_unlocked:
        return StepClass.LOCK
    if item.is_step and item.is_completed:
        return StepClass.PASS
    return StepClass.DEFAULT


def apply_gating(items: list[PathItem]) -> list[PathItem]:
    """
    Apply the sequential unlock rule.

    Args:
        items: path items as produced by the builder

    Returns:
        New items, in order, with is_unlocked, is_active and step_class set
    """
    previous_steps_completed = True
    first_active_found = False
    gated = []

    for item in sorted(items, key=lambda it: it.order):
        is_unlocked = previous_steps_completed
        if not item.is_completed:
            previous_steps_completed = False

        is_active = (
            item.is_step
            and is_unlocked
            and not item.is_completed
            and not first_active_found
        )
        if is_active:
            first_active_found = True

        gated.append(item.model_copy(deep=True, update={
            "is_unlocked": is_unlocked,
            "is_active": is_active,
            "step_class": _step_class(item, is_unlocked),
        }))

    return gated


def active_item(items: list[PathItem]) -> Optional[PathItem]:
    """The item the learner should do next, if any."""
    return next((item for item in items if item.is_active), None)
