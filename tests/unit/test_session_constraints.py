"""
Unit tests for the session shape constraint enforcer.

Tests:
- Exercise targets per session length
- Core day placement and core rest
- Deduplication and calf conflicts
- Filling and trimming to target
- Idempotence over every template, mode and length
"""

import pytest

from core.constants import CORE_REST_SECONDS, REST_SECONDS
from models.program import Day, EquipmentMode, Exercise, FocusPoint
from services.session_constraints import (
    CORE_EXERCISES,
    DayContext,
    SessionLengthError,
    SessionShapeEnforcer,
    core_day_indices,
    dedupe,
    fill_to_target,
    is_core_exercise,
    resolve_calf_conflict,
    target_exercise_count,
)
from services.template_library import TemplateLibrary


def _exercise(name: str, sets: int = 3, rest_seconds: int = REST_SECONDS) -> Exercise:
    return Exercise(name=name, sets=sets, reps="8-12", rest_seconds=rest_seconds)


def _day(focus: str, *names: str) -> Day:
    return Day(day_number=1, focus=focus, exercises=[_exercise(n) for n in names])


@pytest.fixture
def enforcer():
    return SessionShapeEnforcer()


@pytest.mark.unit
class TestTargetExerciseCount:

    @pytest.mark.parametrize(
        "minutes,expected",
        [(30, 4), (45, 5), (60, 6), (90, 7), (75, 6), (20, 4), (120, 7), (None, 6)],
    )
    def test_target_for_session_length(self, minutes, expected):
        assert target_exercise_count(minutes) == expected

    @pytest.mark.parametrize("minutes", [0, -15])
    def test_non_positive_length_raises(self, minutes):
        with pytest.raises(SessionLengthError):
            target_exercise_count(minutes)


@pytest.mark.unit
class TestCoreDayIndices:

    @pytest.mark.parametrize(
        "total,expected",
        [(0, []), (1, [0]), (2, [0, 1]), (3, [0, 1]), (4, [0, 2]), (5, [0, 2]), (6, [0, 3])],
    )
    def test_core_days(self, total, expected):
        assert core_day_indices(total) == expected


@pytest.mark.unit
class TestCorePlacement:

    def test_core_days_get_one_core_exercise_last(self, enforcer):
        days = enforcer.enforce_week(TemplateLibrary().build_week(4), EquipmentMode.GYM, 60)
        for index, day in enumerate(days):
            core = [e for e in day.exercises if is_core_exercise(e.name)]
            if index in (0, 2):
                assert len(core) == 1
                assert day.exercises[-1] is core[0]
            else:
                assert core == []

    def test_core_exercise_per_slot_and_mode(self, enforcer):
        for mode in EquipmentMode:
            days = enforcer.enforce_week(TemplateLibrary().build_week(4), mode, 60)
            assert days[0].exercises[-1].name == CORE_EXERCISES[mode][0]
            assert days[2].exercises[-1].name == CORE_EXERCISES[mode][1]

    def test_core_rest_is_120_and_others_180(self, enforcer):
        days = enforcer.enforce_week(TemplateLibrary().build_week(3), EquipmentMode.GYM, 60)
        for day in days:
            for exercise in day.exercises:
                if is_core_exercise(exercise.name):
                    assert exercise.rest_seconds == CORE_REST_SECONDS
                else:
                    assert exercise.rest_seconds == REST_SECONDS

    def test_one_day_week_has_core_on_day_one(self, enforcer):
        day = _day("Upper", "Barbell Bench Press", "Lat Pulldown")
        enforced = enforcer.enforce_week([day], EquipmentMode.GYM, 60)
        assert enforced[0].exercises[-1].name == "Cable Crunch"


@pytest.mark.unit
class TestDedupeAndCalves:

    def test_duplicates_after_substitution_removed(self):
        day = _day("Upper", "Barbell Bench Press", "Dumbbell Bench Press", "Lat Pulldown")
        ctx = DayContext(mode=EquipmentMode.DUMBBELLS, target=6)
        result = dedupe(day, ctx)
        assert [e.name for e in result.exercises] == ["Dumbbell Bench Press", "One-Arm Dumbbell Row"]

    def test_first_occurrence_keeps_its_sets(self):
        day = Day(
            day_number=1,
            focus="Upper",
            exercises=[_exercise("Barbell Bench Press", sets=4), _exercise("Dumbbell Bench Press", sets=2)],
        )
        result = dedupe(day, DayContext(mode=EquipmentMode.DUMBBELLS, target=6))
        assert len(result.exercises) == 1
        assert result.exercises[0].sets == 4

    def test_later_calf_raise_dropped(self):
        day = _day("Lower", "Standing Calf Raise", "Leg Press", "Seated Calf Raise")
        result = resolve_calf_conflict(day, DayContext(mode=EquipmentMode.GYM, target=6))
        assert [e.name for e in result.exercises] == ["Standing Calf Raise", "Leg Press"]

    def test_single_calf_raise_untouched(self):
        day = _day("Lower", "Leg Press", "Seated Calf Raise")
        ctx = DayContext(mode=EquipmentMode.GYM, target=6)
        assert resolve_calf_conflict(day, ctx) == day


@pytest.mark.unit
class TestFillAndTrim:

    def test_fill_from_focus_pool(self):
        day = _day("Lower 2", "Conventional Deadlift", "Front Squat")
        result = fill_to_target(day, DayContext(mode=EquipmentMode.GYM, target=5))
        assert [e.name for e in result.exercises] == [
            "Conventional Deadlift",
            "Front Squat",
            "Leg Extension",
            "Lying Leg Curl",
            "Seated Calf Raise",
        ]

    def test_filled_accessories_use_accessory_prescription(self):
        day = _day("Push", "Barbell Bench Press")
        result = fill_to_target(day, DayContext(mode=EquipmentMode.GYM, target=3))
        for added in result.exercises[1:]:
            assert (added.sets, added.reps, added.rpe, added.rest_seconds) == (2, "10-15", 7, 180)

    def test_fill_goes_before_trailing_core(self):
        day = _day("Upper", "Barbell Bench Press", "Cable Crunch")
        result = fill_to_target(day, DayContext(mode=EquipmentMode.GYM, target=4, core_exercise="Cable Crunch"))
        assert len(result.exercises) == 4
        assert result.exercises[-1].name == "Cable Crunch"

    def test_fill_never_adds_second_calf_raise(self):
        day = _day("Legs", "Standing Calf Raise")
        result = fill_to_target(day, DayContext(mode=EquipmentMode.GYM, target=7))
        names = [e.name for e in result.exercises]
        assert "Seated Calf Raise" not in names
        assert len(names) == 7

    def test_exhausted_pool_uses_variations(self, enforcer):
        day = _day("Pull", "Barbell Row")
        result = enforcer.enforce_day(day, 1, 4, EquipmentMode.BARBELL, 7)
        names = [e.name for e in result.exercises]
        assert len(names) == 7
        assert len(set(n.lower() for n in names)) == 7
        assert any("(Variation" in n for n in names)

    def test_trim_drops_from_the_end(self, enforcer):
        day = TemplateLibrary().build_week(3)[0]
        result = enforcer.enforce_day(day, 0, 3, EquipmentMode.GYM, 4)
        assert [e.name for e in result.exercises] == [
            "Barbell Bench Press",
            "Chest-Supported Row",
            "Seated Dumbbell Shoulder Press",
            "Cable Crunch",
        ]

    def test_trim_keeps_protected_exercises_over_target(self, enforcer):
        day = _day("Upper", "Barbell Bench Press", "Lateral Raise", "Face Pull", "Cable Crunch")
        result = enforcer.enforce_day(day, 0, 1, EquipmentMode.GYM, 1)
        assert [e.name for e in result.exercises] == ["Barbell Bench Press", "Cable Crunch"]


@pytest.mark.unit
class TestEnforceWeek:

    @pytest.mark.parametrize("days", [2, 3, 4, 5, 6])
    @pytest.mark.parametrize("minutes", [30, 45, 60, 90])
    def test_every_day_hits_target(self, enforcer, days, minutes):
        week = TemplateLibrary().build_week(days, FocusPoint.ARMS)
        for mode in EquipmentMode:
            for day in enforcer.enforce_week(week, mode, minutes):
                assert len(day.exercises) == target_exercise_count(minutes)

    @pytest.mark.parametrize("days", [2, 3, 4, 5, 6])
    @pytest.mark.parametrize("minutes", [30, 45, 60, 90])
    def test_enforcement_is_idempotent(self, enforcer, days, minutes):
        week = TemplateLibrary().build_week(days, FocusPoint.DELTS)
        for mode in EquipmentMode:
            once = enforcer.enforce_week(week, mode, minutes)
            twice = enforcer.enforce_week(once, mode, minutes)
            assert once == twice

    def test_no_duplicate_names_within_a_day(self, enforcer):
        week = TemplateLibrary().build_week(5)
        for mode in EquipmentMode:
            for day in enforcer.enforce_week(week, mode, 90):
                names = [e.name.lower() for e in day.exercises]
                assert len(names) == len(set(names))

    def test_dumbbell_week_has_no_barbell_or_cable_work(self, enforcer):
        week = TemplateLibrary().build_week(4)
        for day in enforcer.enforce_week(week, EquipmentMode.DUMBBELLS, 60):
            for exercise in day.exercises:
                lowered = exercise.name.lower()
                assert "barbell" not in lowered
                assert "cable" not in lowered

    def test_input_days_not_mutated(self, enforcer):
        week = TemplateLibrary().build_week(4)
        before = [d.model_dump() for d in week]
        enforcer.enforce_week(week, EquipmentMode.DUMBBELLS, 30)
        assert [d.model_dump() for d in week] == before

    def test_zero_session_length_raises(self, enforcer):
        with pytest.raises(SessionLengthError):
            enforcer.enforce_week(TemplateLibrary().build_week(3), EquipmentMode.GYM, 0)

    def test_failing_day_kept_while_others_enforced(self, enforcer, monkeypatch):
        import services.session_constraints as session_constraints

        real_substitute = session_constraints.substitute

        def failing_substitute(name, mode):
            if name == "Broken Press":
                raise RuntimeError("substitution table corrupted")
            return real_substitute(name, mode)

        monkeypatch.setattr(session_constraints, "substitute", failing_substitute)
        good = _day("Upper", "Barbell Bench Press")
        broken = Day(day_number=2, focus="Lower", exercises=[_exercise("Broken Press")])

        days = enforcer.enforce_week([good, broken], EquipmentMode.GYM, 60)

        assert len(days[0].exercises) == 6
        assert days[0].exercises[0].name == "Barbell Bench Press"
        assert days[1] == broken
