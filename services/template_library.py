"""
Weekly template library.

Static per-frequency week skeletons (2 to 6 training days). Each day carries a
focus label and its starting exercise list; the session constraint enforcer
takes it from there. Templates are rebuilt on every call so callers never
share day instances.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from core.constants import DEFAULT_TRAINING_DAYS, MAX_TRAINING_DAYS, MIN_TRAINING_DAYS, REST_SECONDS
from models.program import Day, Exercise, FocusPoint

logger = logging.getLogger(__name__)

# (name, sets, reps)
ExerciseSpec = Tuple[str, int, str]

FOCUS_DAY_EXERCISES: Dict[FocusPoint, List[ExerciseSpec]] = {
    FocusPoint.ARMS: [
        ("EZ Bar Curl", 3, "10-12"),
        ("Cable Triceps Pushdown", 3, "10-12"),
        ("Incline Dumbbell Curl", 3, "10-12"),
        ("Overhead Triceps Extension", 3, "10-15"),
        ("Hammer Curl", 3, "10-12"),
    ],
    FocusPoint.CHEST: [
        ("Incline Dumbbell Press", 3, "8-12"),
        ("Dumbbell Bench Press", 3, "8-12"),
        ("Cable Flye", 3, "12-15"),
        ("Dips", 3, "8-12"),
        ("Cable Triceps Pushdown", 2, "10-12"),
    ],
    FocusPoint.BACK: [
        ("Chest-Supported Row", 3, "8-12"),
        ("Lat Pulldown", 3, "8-12"),
        ("One-Arm Dumbbell Row", 3, "8-12"),
        ("Face Pull", 3, "12-15"),
        ("Hammer Curl", 2, "10-12"),
    ],
    FocusPoint.QUADS: [
        ("Front Squat", 3, "6-8"),
        ("Leg Press", 3, "10-12"),
        ("Bulgarian Split Squat", 3, "8-10"),
        ("Leg Extension", 3, "12-15"),
        ("Walking Lunge", 2, "10-12"),
    ],
    FocusPoint.GLUTES: [
        ("Hip Thrust", 3, "8-12"),
        ("Romanian Deadlift", 3, "8-10"),
        ("Bulgarian Split Squat", 3, "8-10"),
        ("Walking Lunge", 3, "10-12"),
        ("Lying Leg Curl", 2, "10-12"),
    ],
    FocusPoint.DELTS: [
        ("Seated Dumbbell Shoulder Press", 3, "8-12"),
        ("Lateral Raise", 3, "12-15"),
        ("Cable Lateral Raise", 3, "12-15"),
        ("Face Pull", 3, "12-15"),
        ("Rear Delt Flye", 3, "12-15"),
    ],
}


def _day(day_number: int, focus: str, specs: List[ExerciseSpec]) -> Day:
    exercises = [
        Exercise(name=name, sets=sets, reps=reps, rpe=7, tempo="", rest_seconds=REST_SECONDS)
        for name, sets, reps in specs
    ]
    return Day(day_number=day_number, focus=focus, exercises=exercises)


def _two_day() -> List[Day]:
    return [
        _day(1, "Full Body A", [
            ("Barbell Back Squat", 4, "5-8"),
            ("Barbell Bench Press", 4, "6-8"),
            ("Chest-Supported Row", 3, "6-10"),
            ("EZ Bar Curl", 2, "10-12"),
            ("Overhead Triceps Extension", 2, "10-15"),
        ]),
        _day(2, "Full Body B", [
            ("Conventional Deadlift", 3, "4-6"),
            ("Seated Dumbbell Shoulder Press", 3, "8-12"),
            ("Lat Pulldown", 3, "8-12"),
            ("Leg Press", 2, "10-12"),
            ("Seated Calf Raise", 2, "12-15"),
        ]),
    ]


def _three_day() -> List[Day]:
    return [
        _day(1, "Upper", [
            ("Barbell Bench Press", 4, "6-8"),
            ("Chest-Supported Row", 4, "6-10"),
            ("Seated Dumbbell Shoulder Press", 3, "8-12"),
            ("Lat Pulldown", 3, "8-12"),
            ("Lateral Raise", 2, "12-15"),
            ("Overhead Triceps Extension", 2, "10-15"),
        ]),
        _day(2, "Lower", [
            ("Barbell Back Squat", 4, "6-8"),
            ("Romanian Deadlift", 3, "8-10"),
            ("Leg Press", 3, "10-12"),
            ("Lying Leg Curl", 2, "10-12"),
            ("Seated Calf Raise", 3, "12-15"),
        ]),
        _day(3, "Full body", [
            ("Conventional Deadlift", 3, "4-6"),
            ("Incline Dumbbell Press", 3, "8-12"),
            ("Front Squat", 3, "6-8"),
            ("Face Pull", 2, "12-15"),
            ("Cable Crunch", 2, "10-15"),
        ]),
    ]


def _four_day() -> List[Day]:
    return [
        _day(1, "Upper 1", [
            ("Barbell Bench Press", 4, "6-8"),
            ("Chest-Supported Row", 4, "6-10"),
            ("Lateral Raise", 2, "12-15"),
            ("Overhead Triceps Extension", 2, "10-15"),
        ]),
        _day(2, "Lower 1", [
            ("Barbell Back Squat", 4, "6-8"),
            ("Romanian Deadlift", 3, "8-10"),
            ("Leg Press", 3, "10-12"),
            ("Seated Calf Raise", 3, "12-15"),
        ]),
        _day(3, "Upper 2", [
            ("Standing Overhead Press", 4, "6-8"),
            ("Lat Pulldown", 3, "8-12"),
            ("Incline Dumbbell Press", 3, "8-12"),
            ("EZ Bar Curl", 3, "10-12"),
        ]),
        _day(4, "Lower 2", [
            ("Conventional Deadlift", 3, "4-6"),
            ("Front Squat", 3, "6-8"),
            ("Lying Leg Curl", 3, "10-12"),
            ("Cable Crunch", 3, "10-15"),
        ]),
    ]


def _five_day() -> List[Day]:
    return [
        _day(1, "Push", [
            ("Barbell Bench Press", 4, "6-8"),
            ("Seated Dumbbell Shoulder Press", 3, "8-12"),
            ("Incline Dumbbell Press", 3, "10-12"),
            ("Lateral Raise", 3, "12-15"),
            ("Overhead Triceps Extension", 3, "10-15"),
        ]),
        _day(2, "Pull", [
            ("Chest-Supported Row", 4, "6-10"),
            ("Lat Pulldown", 3, "8-12"),
            ("Face Pull", 3, "12-15"),
            ("EZ Bar Curl", 3, "10-12"),
        ]),
        _day(3, "Legs", [
            ("Barbell Back Squat", 4, "6-8"),
            ("Romanian Deadlift", 3, "8-10"),
            ("Leg Press", 3, "10-12"),
            ("Seated Calf Raise", 3, "12-15"),
        ]),
        _day(4, "Upper", [
            ("Close-Grip Bench Press", 3, "6-8"),
            ("Standing Overhead Press", 3, "6-8"),
            ("Lat Pulldown", 3, "8-12"),
            ("EZ Bar Curl", 2, "10-12"),
        ]),
        _day(5, "Lower", [
            ("Conventional Deadlift", 3, "4-6"),
            ("Front Squat", 3, "6-8"),
            ("Lying Leg Curl", 3, "10-12"),
            ("Cable Crunch", 3, "10-15"),
        ]),
    ]


def _six_day(focus_point: Optional[FocusPoint]) -> List[Day]:
    focus = focus_point or FocusPoint.ARMS
    push, pull, legs = _five_day()[:3]
    upper, lower = _four_day()[:2]
    days = [push, pull, legs, upper, lower]
    days = [day.model_copy(update={"day_number": i + 1}) for i, day in enumerate(days)]
    days.append(_day(6, f"Focus - {focus.value}", FOCUS_DAY_EXERCISES[focus]))
    return days


TEMPLATES: Dict[int, Callable[[], List[Day]]] = {
    2: _two_day,
    3: _three_day,
    4: _four_day,
    5: _five_day,
}


def resolve_frequency(days_per_week: int) -> int:
    """
    Map a requested training frequency onto a supported template.

    Values outside 2..6 fall back to the 3-day template. This is the only
    place that fallback happens.
    """
    if MIN_TRAINING_DAYS <= days_per_week <= MAX_TRAINING_DAYS:
        return days_per_week
    logger.warning(
        f"Unsupported training frequency {days_per_week}, "
        f"using the {DEFAULT_TRAINING_DAYS}-day template"
    )
    return DEFAULT_TRAINING_DAYS


class TemplateLibrary:
    """Builds base week skeletons by training frequency."""

    def build_week(
        self,
        days_per_week: int,
        focus_point: Optional[FocusPoint] = None,
    ) -> List[Day]:
        """
        Build the base week for a training frequency.

        Args:
            days_per_week: Requested training days per week
            focus_point: Emphasis for the sixth day; ignored below 6 days

        Returns:
            Ordered day skeletons numbered from 1
        """
        frequency = resolve_frequency(days_per_week)
        if frequency == 6:
            return _six_day(focus_point)
        return TEMPLATES[frequency]()
