"""
Session shape constraint enforcer.

Brings a day into shape for the user's equipment and session length:

1. Rest normalization (every exercise rests 180s)
2. Equipment substitution
3. Deduplication on the equipment-normalized name, first occurrence wins
4. Standing/seated calf raise conflict resolution (the later one goes)
5. Core placement (one core exercise on each of the two core days, none elsewhere)
6. Fill up to the session-length target from the focus accessory pool
7. Steps 2-4 again for the freshly added accessories
8. Trim down to target without touching the core exercise or the first main lift

Each pass takes a Day and returns a new Day, so a day is enforced by folding
the pass list over it. Enforcing an already enforced day returns it unchanged.
"""

import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, List, Optional, Sequence, Tuple

from core.constants import (
    CORE_REST_SECONDS,
    DEFAULT_SESSION_EXERCISES,
    MIN_SESSION_EXERCISES,
    REST_SECONDS,
    SESSION_EXERCISE_TARGETS,
)
from models.program import Day, EquipmentMode, Exercise
from services.equipment import normalized_key, substitute

logger = logging.getLogger(__name__)


class SessionLengthError(ValueError):
    """Session length that cannot produce a workout (zero or negative minutes)."""

    pass


CORE_EXERCISE_PATTERN = re.compile(
    r"cable\s+crunch|hanging\s+leg\s+raise|dumbbell\s+crunch|\bplank\b",
    re.IGNORECASE,
)
MAIN_COMPOUND_PATTERN = re.compile(
    r"barbell\s+bench\s+press|barbell\s+back\s+squat|standing\s+overhead\s+press"
    r"|conventional\s+deadlift|romanian\s+deadlift|front\s+squat",
    re.IGNORECASE,
)
STANDING_CALF_PATTERN = re.compile(r"standing\s+calf\s+raise", re.IGNORECASE)
SEATED_CALF_PATTERN = re.compile(r"seated\s+calf\s+raise", re.IGNORECASE)

CORE_EXERCISES = {
    EquipmentMode.GYM: ("Cable Crunch", "Hanging Leg Raise"),
    EquipmentMode.DUMBBELLS: ("Dumbbell Crunch", "Plank"),
    EquipmentMode.BARBELL: ("Hanging Leg Raise", "Plank"),
}

UPPER_POOL = (
    "Face Pull",
    "Lateral Raise",
    "Incline Dumbbell Curl",
    "Hammer Curl",
    "Overhead Triceps Extension",
    "Cable Triceps Pushdown",
    "Chest-Supported Row",
    "Dumbbell Bench Press",
)
LOWER_POOL = (
    "Leg Extension",
    "Lying Leg Curl",
    "Seated Calf Raise",
    "Standing Calf Raise",
    "Hip Thrust",
    "Bulgarian Split Squat",
    "Walking Lunge",
    "Leg Press",
)
PULL_POOL = ("Face Pull", "Rear Delt Flye", "Chest-Supported Row", "Hammer Curl")
PUSH_POOL = ("Lateral Raise", "Cable Flye", "Overhead Triceps Extension", "Cable Triceps Pushdown")

LAST_RESORT_FILLER = "Hammer Curl"

ACCESSORY_SETS = 2
ACCESSORY_REPS = "10-15"
ACCESSORY_RPE = 7


def _unique(names: Sequence[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def accessory_pool_for_focus(focus: str) -> Tuple[str, ...]:
    """Accessory candidates for a day, picked by keywords in its focus label."""
    label = (focus or "").lower()
    if "upper" in label or "pull" in label:
        return tuple(
            name for name in _unique(UPPER_POOL + PULL_POOL)
            if not re.search(r"\blateral\s+raise\b", name, re.IGNORECASE)
        )
    if "push" in label:
        return PUSH_POOL
    if "lower" in label or "leg" in label:
        return LOWER_POOL
    return _unique(UPPER_POOL + LOWER_POOL)


def filler_for_focus(focus: str) -> str:
    """Accessory used once the focus pool is exhausted."""
    label = (focus or "").lower()
    if "pull" in label:
        return "Chest-Supported Row"
    if "push" in label:
        return "Cable Flye"
    if "leg" in label:
        return "Leg Extension"
    return "Dumbbell Curl"


def is_core_exercise(name: str) -> bool:
    return bool(CORE_EXERCISE_PATTERN.search(name))


def is_main_compound(name: str) -> bool:
    return bool(MAIN_COMPOUND_PATTERN.search(name))


def target_exercise_count(session_length_min: Optional[int]) -> int:
    """
    Exercises per day for a session length.

    30 minutes gives 4, 45 gives 5, 60 gives 6 and 90 gives 7. Lengths in
    between round down to the nearest step; no length at all means 6.

    Raises:
        SessionLengthError: If the session length is zero or negative
    """
    if session_length_min is None:
        return DEFAULT_SESSION_EXERCISES
    if session_length_min <= 0:
        raise SessionLengthError(
            f"Session length must be positive, got {session_length_min} minutes"
        )
    for minutes, count in SESSION_EXERCISE_TARGETS:
        if session_length_min >= minutes:
            return count
    return MIN_SESSION_EXERCISES


def core_day_indices(total_days: int) -> List[int]:
    """
    Zero-based indices of the days that carry a core exercise.

    The first day always does; the second core day sits mid-week. A one-day
    week has a single core day.
    """
    if total_days <= 0:
        return []
    if total_days == 1:
        return [0]
    second = total_days // 2
    if second == 0:
        second = min(total_days - 1, 1)
    return [0, second]


def build_accessory(name: str, rest_seconds: int = REST_SECONDS) -> Exercise:
    return Exercise(
        name=name,
        sets=ACCESSORY_SETS,
        reps=ACCESSORY_REPS,
        rpe=ACCESSORY_RPE,
        tempo="",
        rest_seconds=rest_seconds,
    )


@dataclass(frozen=True)
class DayContext:
    """What a pass needs to know about the day's place in the week."""

    mode: EquipmentMode
    target: int
    core_exercise: Optional[str] = None


DayPass = Callable[[Day, DayContext], Day]


def normalize_rest(day: Day, ctx: DayContext) -> Day:
    return day.with_exercises(
        [e.model_copy(update={"rest_seconds": REST_SECONDS}) for e in day.exercises]
    )


def substitute_equipment(day: Day, ctx: DayContext) -> Day:
    return day.with_exercises([e.renamed(substitute(e.name, ctx.mode)) for e in day.exercises])


def dedupe(day: Day, ctx: DayContext) -> Day:
    seen = set()
    kept = []
    for exercise in day.exercises:
        key = normalized_key(exercise.name, ctx.mode)
        if key in seen:
            continue
        seen.add(key)
        kept.append(exercise.renamed(substitute(exercise.name, ctx.mode)))
    return day.with_exercises(kept)


def _first_index(exercises: Sequence[Exercise], pattern: re.Pattern) -> int:
    return next((i for i, e in enumerate(exercises) if pattern.search(e.name)), -1)


def resolve_calf_conflict(day: Day, ctx: DayContext) -> Day:
    standing = _first_index(day.exercises, STANDING_CALF_PATTERN)
    seated = _first_index(day.exercises, SEATED_CALF_PATTERN)
    if standing < 0 or seated < 0:
        return day
    drop = max(standing, seated)
    return day.with_exercises([e for i, e in enumerate(day.exercises) if i != drop])


def place_core(day: Day, ctx: DayContext) -> Day:
    exercises = [e for e in day.exercises if not is_core_exercise(e.name)]
    if ctx.core_exercise:
        exercises.append(build_accessory(ctx.core_exercise, rest_seconds=CORE_REST_SECONDS))
    return day.with_exercises(exercises)


def _calf_conflict(names: Sequence[str], candidate: str) -> bool:
    if STANDING_CALF_PATTERN.search(candidate):
        return any(SEATED_CALF_PATTERN.search(n) for n in names)
    if SEATED_CALF_PATTERN.search(candidate):
        return any(STANDING_CALF_PATTERN.search(n) for n in names)
    return False


def fill_to_target(day: Day, ctx: DayContext) -> Day:
    exercises = list(day.exercises)
    if len(exercises) >= ctx.target:
        return day

    # Fills go in front of the core exercise so it stays last.
    trailing = []
    if exercises and is_core_exercise(exercises[-1].name):
        trailing = [exercises.pop()]

    taken = {normalized_key(e.name, ctx.mode) for e in exercises + trailing}
    present = [substitute(e.name, ctx.mode) for e in exercises + trailing]

    def room() -> bool:
        return len(exercises) + len(trailing) < ctx.target

    def try_add(name: str) -> bool:
        substituted = substitute(name, ctx.mode)
        key = substituted.strip().lower()
        if key in taken or is_core_exercise(name) or is_core_exercise(substituted):
            return False
        if _calf_conflict(present, substituted):
            return False
        exercises.append(build_accessory(name))
        taken.add(key)
        present.append(substituted)
        return True

    for name in accessory_pool_for_focus(day.focus):
        if not room():
            break
        try_add(name)

    for name in (filler_for_focus(day.focus), LAST_RESORT_FILLER):
        if not room():
            break
        try_add(name)

    variation_base = substitute(LAST_RESORT_FILLER, ctx.mode)
    attempt = 2
    while room() and attempt <= ctx.target + len(taken) + 1:
        try_add(f"{variation_base} (Variation {attempt})")
        attempt += 1

    if room():
        logger.warning(f"Could not fill '{day.focus}' to {ctx.target} exercises")

    return day.with_exercises(exercises + trailing)


def trim_to_target(day: Day, ctx: DayContext) -> Day:
    exercises = day.exercises
    excess = len(exercises) - ctx.target
    if excess <= 0:
        return day

    protected = {
        i
        for i in (
            _first_index(exercises, CORE_EXERCISE_PATTERN),
            _first_index(exercises, MAIN_COMPOUND_PATTERN),
        )
        if i >= 0
    }
    removable = [i for i in reversed(range(len(exercises))) if i not in protected]
    dropped = set(removable[:excess])
    if len(dropped) < excess:
        logger.debug(
            f"'{day.focus}' stays at {len(exercises) - len(dropped)} exercises, "
            f"only protected exercises left to remove"
        )
    return day.with_exercises([e for i, e in enumerate(exercises) if i not in dropped])


NORMALIZATION_PASSES: Tuple[DayPass, ...] = (
    substitute_equipment,
    dedupe,
    resolve_calf_conflict,
)

DAY_PASSES: Tuple[DayPass, ...] = (
    normalize_rest,
    *NORMALIZATION_PASSES,
    place_core,
    fill_to_target,
    *NORMALIZATION_PASSES,
    trim_to_target,
)


def run_passes(day: Day, ctx: DayContext, passes: Sequence[DayPass] = DAY_PASSES) -> Day:
    return reduce(lambda current, day_pass: day_pass(current, ctx), passes, day)


class SessionShapeEnforcer:
    """Applies the session passes to each day of a week."""

    def context_for(
        self,
        index: int,
        total_days: int,
        mode: EquipmentMode,
        target: int,
    ) -> DayContext:
        core_days = core_day_indices(total_days)
        core_exercise = None
        if index in core_days:
            core_exercise = CORE_EXERCISES[mode][core_days.index(index)]
        return DayContext(mode=mode, target=target, core_exercise=core_exercise)

    def enforce_day(
        self,
        day: Day,
        index: int,
        total_days: int,
        mode: EquipmentMode,
        target: int,
    ) -> Day:
        """
        Enforce the session constraints on one day.

        Args:
            day: Day to enforce
            index: Zero-based position of the day within its week
            total_days: Number of days in the week
            mode: Equipment mode of the user
            target: Exercises the day should end up with

        Returns:
            The enforced day
        """
        return run_passes(day, self.context_for(index, total_days, mode, target))

    def enforce_week(
        self,
        days: Sequence[Day],
        mode: EquipmentMode,
        session_length_min: Optional[int],
    ) -> List[Day]:
        """
        Enforce the session constraints on every day of a week.

        A day that fails enforcement is kept as it was so one bad day never
        costs the whole week.

        Raises:
            SessionLengthError: If the session length is zero or negative
        """
        target = target_exercise_count(session_length_min)
        enforced = []
        for index, day in enumerate(days):
            try:
                enforced.append(self.enforce_day(day, index, len(days), mode, target))
            except Exception as e:
                logger.warning(f"Session constraints failed for day {day.day_number}, keeping it as is: {e}")
                enforced.append(day)
        return enforced
