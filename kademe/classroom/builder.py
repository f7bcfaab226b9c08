"""
PathBuilder - Flatten a content snapshot into learning path items.

Provides:
- Level/unit ordering and the merged lesson/exam sequence of a unit
- Zig-zag screen positions, rendered bottom-to-top
- Raw completion flags looked up from completion records

Unlocking and step classes are not decided here; see gating.apply_gating.
"""

import logging
from typing import Mapping, Optional, Union

from kademe.schemas import (
    CompletionRecord,
    Exam,
    LayoutConfig,
    Lesson,
    Level,
    PathItem,
    PathItemKind,
    PathItemMetadata,
    Position,
    Unit,
    first_title,
)

logger = logging.getLogger(__name__)


# Synthetic sort keys for merging lessons and exams within a unit
LESSON_KEY_STRIDE = 10000
TIED_EXAM_OFFSET = 5000
UNTIED_EXAM_OFFSET = 100000

DEFAULT_LESSON_ICON = "star"
DEFAULT_EXERCISE_ICON = "checkmark"

EXERCISE_TYPE_ICONS = {
    "multiple_choice": "checkmark",
    "listening": "microphone",
    "writing": "edit",
    "reading": "document",
    "speaking": "microphone",
    "translation": "edit",
    "fill_blank": "checkmark",
}

UNIT_COLORS = [
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFA07A",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E2",
    "#F8B739",
    "#6C5CE7",
]

MASCOT_TYPES = ["spirit", "happy", "thinking", "cool", "meditation"]


CompletionLookup = Mapping[str, CompletionRecord]
UnitEntry = Union[Lesson, Exam]


# -----------------------------------------------------------------------------
# Snapshot helpers
# -----------------------------------------------------------------------------

def collect_completions(levels: list[Level]) -> dict[str, CompletionRecord]:
    """Gather completion records embedded in the snapshot, keyed by lesson/exam ID."""
    completions: dict[str, CompletionRecord] = {}
    for level in levels:
        for unit in level.units:
            for lesson in unit.lessons:
                if lesson.completion is not None:
                    completions[lesson.id] = lesson.completion
            for exam in unit.exams:
                if exam.completion is not None:
                    completions[exam.id] = exam.completion
    return completions


def sorted_units(levels: list[Level]) -> list[Unit]:
    """All units, levels in order and units in order within each level."""
    return [
        unit
        for level in sorted(levels, key=lambda lv: lv.order)
        for unit in sorted(level.units, key=lambda u: u.order)
    ]


def unit_sequence(unit: Unit) -> list[UnitEntry]:
    """
    Merge a unit's lessons and exams into path order.

    Lessons sort by order * 10000. An exam tied to one of the unit's lessons
    sorts right after that lesson, other exams after the last lesson. Sorting
    is stable, so equal orders keep their snapshot order.
    """
    lesson_orders = {lesson.id: lesson.order for lesson in unit.lessons}
    max_lesson_order = max(lesson_orders.values(), default=0)

    keyed: list[tuple[int, UnitEntry]] = [
        (lesson.order * LESSON_KEY_STRIDE, lesson) for lesson in unit.lessons
    ]
    for exam in unit.exams:
        if exam.lesson_id is not None and exam.lesson_id in lesson_orders:
            key = lesson_orders[exam.lesson_id] * LESSON_KEY_STRIDE + TIED_EXAM_OFFSET + exam.order
        else:
            if exam.lesson_id is not None:
                logger.debug(f"Exam {exam.id} points at lesson {exam.lesson_id} outside unit {unit.id}")
            key = max_lesson_order * LESSON_KEY_STRIDE + UNTIED_EXAM_OFFSET + exam.order
        keyed.append((key, exam))

    keyed.sort(key=lambda pair: pair[0])
    return [entry for _, entry in keyed]


def normalize_positions(items: list[PathItem]) -> list[PathItem]:
    """
    Flip the column so the first item sits at the bottom.

    The largest top becomes 0 and every top stays non-negative.
    """
    if not items:
        return []

    max_top = max(item.position.top for item in items)
    inverted = [max_top - item.position.top for item in items]
    min_top = min(inverted)

    return [
        item.model_copy(update={
            "position": item.position.model_copy(update={"top": top - min_top}),
        })
        for item, top in zip(items, inverted)
    ]


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------

class PathBuilder:
    """
    Build the ungated learning path for a content snapshot.

    Each call to build() starts from a fresh cursor, so one builder can lay
    out any number of snapshots.
    """

    def __init__(self, layout: Optional[LayoutConfig] = None):
        self.layout = layout or LayoutConfig()
        self._reset()

    def _reset(self):
        self._items: list[PathItem] = []
        self._top = 0.0
        self._lane_index = 0
        self._order = 1
        self._trophy_count = 0

    def _next_left(self) -> float:
        lanes = self.layout.lanes
        left = lanes[self._lane_index % len(lanes)]
        self._lane_index += 1
        return left

    def _emit(self, item_id: str, kind: PathItemKind, top: float,
              size: Optional[float], is_completed: bool, **extra) -> PathItem:
        item = PathItem(
            id=item_id,
            kind=kind,
            order=self._order,
            position=Position(top=top, left=self._next_left(), size=size),
            is_completed=is_completed,
            **extra,
        )
        self._order += 1
        self._items.append(item)
        return item

    def _emit_step(self, item_id: str, kind: PathItemKind, is_completed: bool,
                   size: Optional[float] = None, **extra) -> PathItem:
        item = self._emit(item_id, kind, self._top, size or self.layout.step_size, is_completed, **extra)
        self._top += self.layout.step_vertical_gap
        return item

    # -------------------------------------------------------------------------
    # Per-entry emission
    # -------------------------------------------------------------------------

    def _add_lesson(self, unit: Unit, lesson: Lesson, completed: bool):
        self._emit_step(
            f"lesson-{lesson.id}",
            PathItemKind.LESSON_STEP,
            completed,
            unit_id=unit.id,
            lesson_id=lesson.id,
            icon=lesson.icon_type or DEFAULT_LESSON_ICON,
            metadata=PathItemMetadata(
                title=first_title(lesson.translations, f"Lesson {lesson.order}"),
                lesson_number=lesson.order,
            ),
        )
        # Exercises share their lesson's completion
        for exercise in sorted(lesson.exercises, key=lambda ex: ex.order):
            self._emit_step(
                f"exercise-{exercise.id}",
                PathItemKind.EXERCISE_STEP,
                completed,
                unit_id=unit.id,
                lesson_id=lesson.id,
                exercise_id=exercise.id,
                icon=EXERCISE_TYPE_ICONS.get(exercise.type, DEFAULT_EXERCISE_ICON),
            )

    def _add_exam(self, unit: Unit, exam: Exam, completed: bool):
        self._trophy_count += 1
        self._emit_step(
            f"exam-{exam.id}",
            PathItemKind.TROPHY,
            completed,
            unit_id=unit.id,
            lesson_id=exam.lesson_id,
            exam_id=exam.id,
            trophy_number=self._trophy_count,
            metadata=PathItemMetadata(
                title=first_title(exam.translations, f"Exam {exam.order}"),
            ),
        )

    def _add_unit(self, unit_index: int, unit: Unit, completions: CompletionLookup):
        sequence = unit_sequence(unit)
        if not sequence:
            return

        unit_completed = True
        for entry in sequence:
            record = completions.get(entry.id)
            completed = bool(record and record.passed)
            unit_completed = unit_completed and completed
            if isinstance(entry, Lesson):
                self._add_lesson(unit, entry, completed)
            else:
                self._add_exam(unit, entry, completed)

        if self.layout.include_mascots:
            self._emit_step(
                f"mascot-{unit.id}",
                PathItemKind.MASCOT,
                unit_completed,
                size=self.layout.mascot_size,
                unit_id=unit.id,
                mascot_type=MASCOT_TYPES[unit_index % len(MASCOT_TYPES)],
            )

        card_top = self._top + self.layout.step_vertical_gap / 2
        self._emit(
            f"unit-{unit.id}",
            PathItemKind.UNIT_CARD,
            card_top,
            None,
            unit_completed,
            unit_id=unit.id,
            metadata=PathItemMetadata(
                title=first_title(unit.translations, f"Unit {unit.order}"),
                background_color=UNIT_COLORS[(unit.order - 1) % len(UNIT_COLORS)],
                lesson_number=unit.order,
            ),
        )
        self._top = card_top + self.layout.unit_section_gap

    def build(
        self,
        levels: list[Level],
        completions: Optional[CompletionLookup] = None,
    ) -> list[PathItem]:
        """
        Lay out the learning path.

        Args:
            levels: content snapshot levels
            completions: lesson/exam ID -> completion record. When omitted,
                records embedded in the snapshot are used.

        Returns:
            Path items in order, positioned, with raw completion flags and
            every item still locked
        """
        self._reset()
        if completions is None:
            completions = collect_completions(levels)

        units = sorted_units(levels)
        for unit_index, unit in enumerate(units):
            self._add_unit(unit_index, unit, completions)

        items = normalize_positions(self._items)
        self._items = []
        logger.debug(f"Built {len(items)} path items from {len(units)} units")
        return items


def build(
    levels: list[Level],
    completions: Optional[CompletionLookup] = None,
    layout: Optional[LayoutConfig] = None,
) -> list[PathItem]:
    """Build the ungated learning path with a one-off PathBuilder."""
    return PathBuilder(layout).build(levels, completions)
