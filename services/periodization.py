"""
Periodization scheduler.

Projects one enforced base week across the 12-week program using a repeating
4-week block: three accumulation weeks at 1.00x, 1.05x and 1.10x volume, then
a deload week at 0.60x. Only set counts change from week to week.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence

from core.constants import PROGRAM_WEEKS
from models.program import Day, Exercise, Week

BLOCK_LENGTH = 4
ACCUMULATION_STEP = 0.05
DELOAD_MULTIPLIER = 0.60


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def cycle_position(week: int) -> int:
    """Position of a week inside its 4-week block, 1..4."""
    if week < 1:
        raise ValueError(f"Week numbers start at 1, got {week}")
    return ((week - 1) % BLOCK_LENGTH) + 1


def is_deload_week(week: int) -> bool:
    return cycle_position(week) == BLOCK_LENGTH


def volume_multiplier(week: int) -> float:
    """
    Set-count multiplier for a week.

    Args:
        week: 1-based week number

    Returns:
        1.00, 1.05, 1.10 or 0.60 depending on the week's block position
    """
    position = cycle_position(week)
    if position == BLOCK_LENGTH:
        return DELOAD_MULTIPLIER
    return round(1 + ACCUMULATION_STEP * (position - 1), 2)


def scale_sets(sets: int, multiplier: float) -> int:
    return max(1, round_half_up(sets * multiplier))


@dataclass(frozen=True)
class WeekParameters:
    """Volume parameters for a single week."""

    week_number: int
    volume_multiplier: float
    is_deload: bool


class PeriodizationScheduler:
    """Expands a base week into the full program."""

    def week_parameters(self, week: int) -> WeekParameters:
        return WeekParameters(
            week_number=week,
            volume_multiplier=volume_multiplier(week),
            is_deload=is_deload_week(week),
        )

    def schedule(self, days: Sequence[Day], total_weeks: int = PROGRAM_WEEKS) -> List[Week]:
        """
        Build every week of the program from the base week's days.

        Exercise identity, order, names and rest are carried over unchanged;
        each week gets its own copies so no two weeks share a day.

        Args:
            days: Enforced days of the base week
            total_weeks: Number of weeks to produce

        Returns:
            Weeks numbered 1..total_weeks
        """
        weeks = []
        for week in range(1, total_weeks + 1):
            params = self.week_parameters(week)
            weeks.append(
                Week(
                    week_number=params.week_number,
                    days=self._scale_days(days, params.volume_multiplier),
                )
            )
        return weeks

    def _scale_days(self, days: Sequence[Day], multiplier: float) -> List[Day]:
        return [
            day.with_exercises([self._scale_exercise(e, multiplier) for e in day.exercises])
            for day in days
        ]

    def _scale_exercise(self, exercise: Exercise, multiplier: float) -> Exercise:
        return exercise.model_copy(update={"sets": scale_sets(exercise.sets, multiplier)})
