"""
Unit tests for the LLM candidate sanitizer.

Candidates are tolerated when arrays are missing, numbers arrive as
strings, or weeks carry the wrong number of days.
"""

import pytest

from models.generation import Profile
from models.program import Plan
from services.plan_sanitizer import (
    CandidateFormatError,
    apply_session_constraints,
    coerce_candidate,
    coerce_day,
    coerce_exercise,
    enforce_days_split,
)
from services.session_constraints import is_core_exercise
from services.template_library import TemplateLibrary
from tests.fakes import build_candidate


@pytest.fixture
def profile():
    return Profile(
        experience_level="Intermediate",
        training_frequency_preference=4,
        equipment_available=["Dumbbells"],
        session_length_min=45,
    )


@pytest.mark.unit
class TestCoerceExercise:

    def test_numeric_strings_coerced(self):
        result = coerce_exercise({"name": "Lat Pulldown", "sets": "4", "rpe": "8.4", "rest_seconds": "90"})
        assert result["sets"] == 4
        assert result["rpe"] == 8
        assert result["rest_seconds"] == 90

    def test_defaults_applied(self):
        result = coerce_exercise({"name": "Face Pull"})
        assert result["sets"] == 2
        assert result["reps"] == "10-15"
        assert result["rpe"] == 7
        assert result["rest_seconds"] == 180
        assert result["id"] == "face-pull"

    def test_rpe_clamped(self):
        assert coerce_exercise({"name": "Dips", "rpe": 14})["rpe"] == 10
        assert coerce_exercise({"name": "Dips", "rpe": -2})["rpe"] == 1

    def test_sets_at_least_one(self):
        assert coerce_exercise({"name": "Dips", "sets": 0})["sets"] == 1

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "NaN", "-Infinity", "1e400"])
    def test_non_finite_numbers_use_defaults(self, value):
        result = coerce_exercise(
            {"name": "Dips", "sets": value, "rpe": value, "rest_seconds": value, "intensity_pct": value}
        )
        assert result["sets"] == 2
        assert result["rpe"] == 7
        assert result["rest_seconds"] == 180
        assert result["intensity_pct"] is None

    def test_huge_integer_intensity_dropped(self):
        assert coerce_exercise({"name": "Dips", "intensity_pct": 10**400})["intensity_pct"] is None

    def test_unusable_entries_dropped(self):
        assert coerce_exercise({"sets": 3}) is None
        assert coerce_exercise({"name": "  "}) is None
        assert coerce_exercise("Bench Press") is None


@pytest.mark.unit
class TestCoerceCandidate:

    def test_missing_arrays_become_empty(self):
        result = coerce_candidate({"weeks": [{"days": [{"focus": "Upper"}]}]}, "prog-1")
        day = result["weeks"][0]["days"][0]
        assert day["exercises"] == []
        assert day["day_number"] == 1

    def test_missing_weeks_become_empty(self):
        assert coerce_candidate({"name": "Plan"}, "prog-1")["weeks"] == []

    def test_program_id_always_used(self):
        assert coerce_candidate({"id": "llm-id"}, "prog-1")["id"] == "prog-1"

    def test_default_focus_label(self):
        assert coerce_day({}, 3)["focus"] == "Day 3"

    def test_paid_string_coerced(self):
        assert coerce_candidate({"paid": "true"}, "p")["paid"] is True
        assert coerce_candidate({"paid": "no"}, "p")["paid"] is False

    def test_metadata_defaults_merged(self):
        result = coerce_candidate({"metadata": {"volume_profile": {"chest": 12}}}, "p")
        assert result["metadata"]["volume_profile"] == {"chest": 12}
        assert "created_at" in result["metadata"]
        assert result["metadata"]["source"]

    @pytest.mark.parametrize("raw", [[], "plan", 42, None])
    def test_non_object_rejected(self, raw):
        with pytest.raises(CandidateFormatError):
            coerce_candidate(raw, "p")


@pytest.mark.unit
class TestEnforceDaysSplit:

    def test_short_weeks_padded_from_template(self):
        template = TemplateLibrary().build_week(4)
        candidate = coerce_candidate(build_candidate(days_per_week=2), "p")
        result = enforce_days_split(candidate, template)
        for week in result["weeks"]:
            assert [d["day_number"] for d in week["days"]] == [1, 2, 3, 4]
            assert week["days"][2]["focus"] == "Upper 2"

    def test_long_weeks_truncated(self):
        template = TemplateLibrary().build_week(3)
        candidate = coerce_candidate(build_candidate(days_per_week=5), "p")
        result = enforce_days_split(candidate, template)
        assert all(len(w["days"]) == 3 for w in result["weeks"])


@pytest.mark.unit
class TestApplySessionConstraints:

    def test_candidate_days_brought_into_shape(self, profile):
        template = TemplateLibrary().build_week(4)
        candidate = enforce_days_split(coerce_candidate(build_candidate(4), "p"), template)
        result = apply_session_constraints(candidate, profile)
        for week in result["weeks"]:
            for index, day in enumerate(week["days"]):
                names = [e["name"] for e in day["exercises"]]
                assert len(names) == 5
                assert not any("barbell" in n.lower() for n in names)
                assert any(is_core_exercise(n) for n in names) == (index in (0, 2))

    def test_result_validates_as_plan(self, profile):
        template = TemplateLibrary().build_week(4)
        candidate = enforce_days_split(coerce_candidate(build_candidate(4), "p"), template)
        candidate["name"] = candidate["name"] or "Plan"
        plan = Plan.model_validate(apply_session_constraints(candidate, profile))
        assert len(plan.weeks) == 12

    def test_empty_day_filled(self, profile):
        candidate = {"weeks": [{"week_number": 1, "days": [{"day_number": 1, "focus": "Legs", "exercises": []}]}]}
        result = apply_session_constraints(candidate, profile)
        assert len(result["weeks"][0]["days"][0]["exercises"]) == 5

    def test_failing_day_kept_while_others_enforced(self, profile, monkeypatch):
        import services.session_constraints as session_constraints

        real_substitute = session_constraints.substitute

        def failing_substitute(name, mode):
            if name == "Broken Press":
                raise RuntimeError("substitution table corrupted")
            return real_substitute(name, mode)

        monkeypatch.setattr(session_constraints, "substitute", failing_substitute)
        broken_day = {
            "day_number": 2,
            "focus": "Lower",
            "exercises": [{"id": "broken-press", "name": "Broken Press", "sets": 3, "reps": "8-12"}],
        }
        candidate = {
            "weeks": [
                {
                    "week_number": 1,
                    "days": [
                        {"day_number": 1, "focus": "Upper", "exercises": []},
                        broken_day,
                    ],
                }
            ]
        }

        days = apply_session_constraints(candidate, profile)["weeks"][0]["days"]

        assert len(days[0]["exercises"]) == 5
        assert days[1] is broken_day
