"""
Weight prescription calculator.

Suggests working weights from the user's bench, squat and deadlift one-rep
maxes. Each exercise is matched against an ordered rule table that ties it to
one reference lift and a ratio range; the first matching rule wins, so the
order of ACCESSORY_RULES matters where patterns overlap.

No match, or no usable max for the matched lift, means no suggestion (None).
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from models.generation import WeightBasis, WeightRange
from models.program import BaseLift, Big3PRs, ExperienceLevel

WORKING_PERCENT = 0.82
MAIN_LIFT_RANGE = (0.80, 0.85)
ROUNDING_INCREMENT = 5

PER_HAND_PATTERN = re.compile(
    r"dumbbell|\bdb\b|\beach\b|one[- ]arm|single[- ]arm",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AccessoryRule:
    """Ties an exercise name pattern to a reference lift and ratio range."""

    pattern: re.Pattern
    base_lift: BaseLift
    ratio_low: float
    ratio_high: float

    @property
    def is_main_lift(self) -> bool:
        return self.ratio_low == 1.0 and self.ratio_high == 1.0

    def ratio_for(self, experience: ExperienceLevel) -> float:
        """Midpoint of the range for beginners, the top end otherwise."""
        if experience == ExperienceLevel.BEGINNER:
            return (self.ratio_low + self.ratio_high) / 2
        return self.ratio_high


def _rule(pattern: str, base_lift: BaseLift, low: float, high: float) -> AccessoryRule:
    return AccessoryRule(re.compile(pattern, re.IGNORECASE), base_lift, low, high)


BENCH, SQUAT, DEADLIFT = BaseLift.BENCH, BaseLift.SQUAT, BaseLift.DEADLIFT

ACCESSORY_RULES: Tuple[AccessoryRule, ...] = (
    # Main lifts
    _rule(r"barbell\s+bench\s+press", BENCH, 1.0, 1.0),
    _rule(r"barbell\s+back\s+squat", SQUAT, 1.0, 1.0),
    _rule(r"(conventional\s+)?deadlift", DEADLIFT, 1.0, 1.0),
    # Presses
    _rule(r"\b(barbell\s+)?overhead\s+press\b|^standing\s+overhead\s+press$", BENCH, 0.55, 0.65),
    _rule(r"dumbbell.*(overhead|shoulder)\s+press", BENCH, 0.40, 0.50),
    _rule(r"incline\s+barbell\s+(press|bench)", BENCH, 0.65, 0.75),
    _rule(r"incline\s+dumbbell\s+(press|bench)", BENCH, 0.45, 0.55),
    _rule(r"dumbbell\s+bench", BENCH, 0.75, 0.85),
    _rule(r"close[- ]?grip\s+bench", BENCH, 0.80, 0.90),
    _rule(r"\bdips?\b", BENCH, 0.50, 0.60),
    _rule(r"triceps?.*pushdown", BENCH, 0.35, 0.45),
    _rule(r"(overhead\s+)?triceps?.*extension", BENCH, 0.30, 0.40),
    _rule(r"cable\s+tricep\s+kickback", BENCH, 0.15, 0.25),
    # Rows and pulls
    _rule(r"\bbarbell\s+row\b|chest[- ]supported\s+row|\brow\b", DEADLIFT, 0.45, 0.55),
    _rule(r"pendlay\s+row", DEADLIFT, 0.40, 0.50),
    _rule(r"dumbbell\s+row", DEADLIFT, 0.35, 0.45),
    _rule(r"pull[- ]?up", DEADLIFT, 0.35, 0.45),
    _rule(r"lat\s+pull\s*down", DEADLIFT, 0.45, 0.55),
    _rule(r"face\s+pull", DEADLIFT, 0.20, 0.30),
    # Squat variants and single leg
    _rule(r"front\s+squat", SQUAT, 0.70, 0.80),
    _rule(r"bulgarian.*split.*squat", SQUAT, 0.35, 0.45),
    _rule(r"walking\s+lunge", SQUAT, 0.30, 0.40),
    # Hinges
    _rule(r"(romanian\s+deadlift|\brdl\b)", DEADLIFT, 0.60, 0.70),
    _rule(r"hip\s+thrust", DEADLIFT, 0.80, 0.90),
    # Machine legs
    _rule(r"leg\s+press", SQUAT, 1.80, 2.20),
    _rule(r"leg\s+extension", SQUAT, 0.35, 0.45),
    _rule(r"leg\s+curl|lying\s+leg\s+curl|hamstring\s+curl", DEADLIFT, 0.30, 0.40),
    # Arms and shoulders
    _rule(r"(biceps?|ez).*bar.*curl|^ez\s+bar\s+curl$", BENCH, 0.25, 0.35),
    _rule(r"dumbbell\s+curl", BENCH, 0.15, 0.25),
    _rule(r"hammer\s+curl", BENCH, 0.15, 0.25),
    _rule(r"lateral\s+raise", BENCH, 0.08, 0.12),
    _rule(r"shrugs?\s*\(barbell\)|barbell\s+shrugs?", DEADLIFT, 0.60, 0.70),
    _rule(r"shrugs?\s*\(dumbbell\)|dumbbell\s+shrugs?", DEADLIFT, 0.35, 0.45),
)


def round_to_increment(value: float, increment: int = ROUNDING_INCREMENT) -> int:
    """Round to the nearest increment, halves going up."""
    return int(math.floor(value / increment + 0.5)) * increment


def find_rule(exercise_name: str) -> Optional[AccessoryRule]:
    for rule in ACCESSORY_RULES:
        if rule.pattern.search(exercise_name):
            return rule
    return None


def is_per_hand(exercise_name: str) -> bool:
    """Whether a suggestion is a per-hand load rather than a single bar load."""
    return bool(PER_HAND_PATTERN.search(exercise_name))


def _base_max(rule: AccessoryRule, prs: Big3PRs) -> Optional[float]:
    value = prs.get(rule.base_lift)
    if not value or value <= 0:
        return None
    return value


def suggested_weight(
    exercise_name: str,
    prs: Big3PRs,
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
) -> Optional[int]:
    """
    Suggested working weight for an exercise.

    Args:
        exercise_name: Exercise display name
        prs: The user's reference one-rep maxes
        experience: Experience level, picks the ratio within the rule's range

    Returns:
        Weight rounded to the nearest 5, or None when there is no suggestion
    """
    rule = find_rule(exercise_name)
    if rule is None:
        return None
    base = _base_max(rule, prs)
    if base is None:
        return None
    return round_to_increment(base * rule.ratio_for(experience) * WORKING_PERCENT)


def suggested_range(exercise_name: str, prs: Big3PRs) -> Optional[WeightRange]:
    """
    Suggested working-weight window for an exercise.

    Main lifts get 80-85% of the lift's max; everything else applies the
    working percentage to both ends of the rule's ratio range.
    """
    rule = find_rule(exercise_name)
    if rule is None:
        return None
    base = _base_max(rule, prs)
    if base is None:
        return None

    if rule.is_main_lift:
        low_ratio, high_ratio = MAIN_LIFT_RANGE
        low = round_to_increment(base * low_ratio)
        high = round_to_increment(base * high_ratio)
    else:
        low = round_to_increment(base * rule.ratio_low * WORKING_PERCENT)
        high = round_to_increment(base * rule.ratio_high * WORKING_PERCENT)

    return WeightRange(
        low=min(low, high),
        high=max(low, high),
        per_hand=is_per_hand(exercise_name),
    )


def describe_basis(exercise_name: str) -> Optional[WeightBasis]:
    """Reference lift and ratio range behind an exercise's suggestion."""
    rule = find_rule(exercise_name)
    if rule is None:
        return None
    return WeightBasis(
        base=rule.base_lift.value,
        ratio_range=[rule.ratio_low, rule.ratio_high],
    )
