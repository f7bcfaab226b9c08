"""
PathBuilder tests for Kademe.

Positions below use the default layout: steps 180 apart, lanes at 84 and
306 on a 390 wide screen.
"""

from kademe.classroom import (
    PathBuilder,
    build,
    collect_completions,
    normalize_positions,
    sorted_units,
    unit_sequence,
)
from kademe.schemas import (
    CompletionRecord,
    Exam,
    Exercise,
    LayoutConfig,
    Lesson,
    Level,
    PathItemKind,
    Translation,
    Unit,
)

NO_MASCOTS = LayoutConfig(include_mascots=False)


def passed(*subject_ids: str) -> dict[str, CompletionRecord]:
    return {
        sid: CompletionRecord(subject_id=sid, correct_count=1, total_count=1, score=100, passed=True)
        for sid in subject_ids
    }


def one_unit(*lessons: Lesson, exams: list[Exam] | None = None) -> list[Level]:
    return [Level(id="a1", order=1, units=[Unit(id="u1", order=1, lessons=list(lessons), exams=exams or [])])]


class TestUnitSequence:
    """Test the merged lesson/exam order within a unit."""

    def test_exam_tied_to_lesson_follows_it(self):
        unit = Unit(
            id="u1",
            order=1,
            lessons=[Lesson(id="l1", order=1), Lesson(id="l2", order=2), Lesson(id="l3", order=3)],
            exams=[Exam(id="x1", order=1, lesson_id="l2")],
        )
        assert [e.id for e in unit_sequence(unit)] == ["l1", "l2", "x1", "l3"]

    def test_untied_exam_goes_last(self):
        unit = Unit(
            id="u1",
            order=1,
            lessons=[Lesson(id="l2", order=2), Lesson(id="l1", order=1)],
            exams=[Exam(id="x_end", order=1), Exam(id="x_mid", order=1, lesson_id="l1")],
        )
        assert [e.id for e in unit_sequence(unit)] == ["l1", "x_mid", "l2", "x_end"]

    def test_exam_order_breaks_ties(self):
        unit = Unit(
            id="u1",
            order=1,
            lessons=[Lesson(id="l1", order=1)],
            exams=[Exam(id="x2", order=2, lesson_id="l1"), Exam(id="x1", order=1, lesson_id="l1")],
        )
        assert [e.id for e in unit_sequence(unit)] == ["l1", "x1", "x2"]

    def test_exam_tied_to_foreign_lesson_is_untied(self):
        unit = Unit(
            id="u1",
            order=1,
            lessons=[Lesson(id="l1", order=1), Lesson(id="l2", order=2)],
            exams=[Exam(id="x1", order=1, lesson_id="elsewhere")],
        )
        assert [e.id for e in unit_sequence(unit)] == ["l1", "l2", "x1"]

    def test_equal_lesson_orders_keep_snapshot_order(self):
        unit = Unit(id="u1", order=1, lessons=[Lesson(id="b", order=1), Lesson(id="a", order=1)])
        assert [e.id for e in unit_sequence(unit)] == ["b", "a"]

    def test_exams_only(self):
        unit = Unit(id="u1", order=1, exams=[Exam(id="x2", order=2), Exam(id="x1", order=1)])
        assert [e.id for e in unit_sequence(unit)] == ["x1", "x2"]


class TestSortedUnits:
    """Test level and unit ordering."""

    def test_levels_then_units(self):
        levels = [
            Level(id="a2", order=2, units=[Unit(id="u3", order=1)]),
            Level(id="a1", order=1, units=[Unit(id="u2", order=2), Unit(id="u1", order=1)]),
        ]
        assert [u.id for u in sorted_units(levels)] == ["u1", "u2", "u3"]


class TestBuild:
    """Test item emission, positions and completion flags."""

    def test_empty_snapshot(self):
        assert build([]) == []
        assert build([Level(id="a1", order=1, units=[Unit(id="u1", order=1)])]) == []

    def test_items_in_order(self):
        levels = one_unit(
            Lesson(id="l1", order=1, exercises=[Exercise(id="e2", order=2), Exercise(id="e1", order=1)]),
            Lesson(id="l2", order=2),
        )
        items = build(levels, {}, NO_MASCOTS)
        assert [i.id for i in items] == ["lesson-l1", "exercise-e1", "exercise-e2", "lesson-l2", "unit-u1"]
        assert [i.order for i in items] == [1, 2, 3, 4, 5]
        assert [i.kind for i in items] == [
            PathItemKind.LESSON_STEP,
            PathItemKind.EXERCISE_STEP,
            PathItemKind.EXERCISE_STEP,
            PathItemKind.LESSON_STEP,
            PathItemKind.UNIT_CARD,
        ]

    def test_positions_bottom_to_top(self):
        levels = one_unit(
            Lesson(id="l1", order=1, exercises=[Exercise(id="e1", order=1), Exercise(id="e2", order=2)]),
            Lesson(id="l2", order=2),
        )
        items = build(levels, {}, NO_MASCOTS)
        assert [i.position.top for i in items] == [810, 630, 450, 270, 0]
        assert [i.position.left for i in items] == [84, 306, 84, 306, 84]
        assert items[0].position.size == 120
        assert items[-1].position.size is None

    def test_unit_gap(self):
        levels = [Level(id="a1", order=1, units=[
            Unit(id="u1", order=1, lessons=[Lesson(id="l1", order=1)]),
            Unit(id="u2", order=2, lessons=[Lesson(id="l2", order=1)]),
        ])]
        items = build(levels, {}, NO_MASCOTS)
        # before flipping: l1 0, u1 270, l2 490, u2 760
        assert [i.id for i in items] == ["lesson-l1", "unit-u1", "lesson-l2", "unit-u2"]
        assert [i.position.top for i in items] == [760, 490, 270, 0]

    def test_completion_lookup(self):
        levels = one_unit(
            Lesson(id="l1", order=1, exercises=[Exercise(id="e1", order=1)]),
            Lesson(id="l2", order=2),
        )
        lookup = passed("l1")
        lookup["l2"] = CompletionRecord(subject_id="l2", correct_count=1, total_count=2, score=50, passed=False)
        items = {i.id: i for i in build(levels, lookup, NO_MASCOTS)}
        assert items["lesson-l1"].is_completed
        assert items["exercise-e1"].is_completed
        assert not items["lesson-l2"].is_completed
        assert not items["unit-u1"].is_completed

    def test_unit_completed_needs_exams_too(self):
        levels = one_unit(Lesson(id="l1", order=1), exams=[Exam(id="x1", order=1)])
        assert not build(levels, passed("l1"), NO_MASCOTS)[-1].is_completed
        assert build(levels, passed("l1", "x1"), NO_MASCOTS)[-1].is_completed

    def test_embedded_completions_used_by_default(self):
        lesson = Lesson(
            id="l1",
            order=1,
            completion=CompletionRecord(subject_id="l1", correct_count=2, total_count=2, score=100, passed=True),
        )
        assert collect_completions(one_unit(lesson)) == {"l1": lesson.completion}
        items = build(one_unit(lesson, Lesson(id="l2", order=2)), layout=NO_MASCOTS)
        assert items[0].is_completed
        assert not items[1].is_completed

    def test_explicit_lookup_overrides_embedded(self):
        lesson = Lesson(
            id="l1",
            order=1,
            completion=CompletionRecord(subject_id="l1", score=100, passed=True),
        )
        assert not build(one_unit(lesson), {}, NO_MASCOTS)[0].is_completed

    def test_builder_leaves_gating_fields_unset(self):
        items = build(one_unit(Lesson(id="l1", order=1)), passed("l1"), NO_MASCOTS)
        assert all(not i.is_unlocked and not i.is_active for i in items)

    def test_trophies_numbered_across_units(self):
        levels = [Level(id="a1", order=1, units=[
            Unit(id="u1", order=1, lessons=[Lesson(id="l1", order=1)], exams=[Exam(id="x1", order=1)]),
            Unit(id="u2", order=2, exams=[Exam(id="x2", order=1)]),
        ])]
        trophies = [i for i in build(levels, {}, NO_MASCOTS) if i.kind == PathItemKind.TROPHY]
        assert [(t.exam_id, t.trophy_number) for t in trophies] == [("x1", 1), ("x2", 2)]

    def test_metadata(self):
        levels = [Level(id="a1", order=1, units=[
            Unit(
                id="u1",
                order=11,
                translations=[Translation(title="Tanışma")],
                lessons=[
                    Lesson(id="l1", order=3, icon_type="document", exercises=[Exercise(id="e1", type="speaking")]),
                    Lesson(id="l2", order=4, translations=[Translation(title="Sayılar")]),
                ],
            ),
        ])]
        items = {i.id: i for i in build(levels, {}, NO_MASCOTS)}
        assert items["lesson-l1"].metadata.title == "Lesson 3"
        assert items["lesson-l1"].metadata.lesson_number == 3
        assert items["lesson-l1"].icon == "document"
        assert items["exercise-e1"].icon == "microphone"
        assert items["lesson-l2"].metadata.title == "Sayılar"
        assert items["lesson-l2"].icon == "star"
        assert items["unit-u1"].metadata.title == "Tanışma"
        assert items["unit-u1"].metadata.background_color == "#FF6B6B"

    def test_mascot_per_unit(self):
        levels = [Level(id="a1", order=1, units=[
            Unit(id="u1", order=1, lessons=[Lesson(id="l1", order=1)]),
            Unit(id="u2", order=2, lessons=[Lesson(id="l2", order=1)]),
        ])]
        items = build(levels, passed("l1"))
        assert [i.id for i in items] == ["lesson-l1", "mascot-u1", "unit-u1", "lesson-l2", "mascot-u2", "unit-u2"]
        mascots = [i for i in items if i.kind == PathItemKind.MASCOT]
        assert [m.mascot_type for m in mascots] == ["spirit", "happy"]
        assert mascots[0].position.size == 96
        assert mascots[0].is_completed
        assert not mascots[1].is_completed

    def test_lanes_alternate_for_every_kind(self):
        levels = one_unit(Lesson(id="l1", order=1), exams=[Exam(id="x1", order=1)])
        lefts = [i.position.left for i in build(levels)]
        assert lefts == [84, 306, 84, 306]

    def test_builder_is_reusable(self):
        levels = one_unit(Lesson(id="l1", order=1), Lesson(id="l2", order=2))
        builder = PathBuilder(NO_MASCOTS)
        assert builder.build(levels, {}) == builder.build(levels, {})


class TestNormalizePositions:
    """Test the bottom-to-top coordinate flip."""

    def test_empty(self):
        assert normalize_positions([]) == []

    def test_first_item_at_bottom(self):
        levels = one_unit(*[Lesson(id=f"l{n}", order=n) for n in range(1, 6)])
        items = build(levels, {}, NO_MASCOTS)
        tops = [i.position.top for i in items]
        assert tops == sorted(tops, reverse=True)
        assert min(tops) == 0
