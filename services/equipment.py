"""
Equipment substitution resolver.

Maps an exercise name onto what the user can actually perform with their
equipment. Each equipment mode has its own priority-ordered rule table; the
first rule whose pattern matches (case-insensitive) decides the replacement
and unmatched names pass through unchanged.

Every replacement a table can produce is left alone by that same table, so
substituting an already substituted name is a no-op.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple, Union

from models.program import EquipmentMode, equipment_mode_for

Replacement = Union[str, Callable[[str], str]]


@dataclass(frozen=True)
class SubstitutionRule:
    """A single name pattern and what to replace a matching name with."""

    pattern: re.Pattern
    replacement: Replacement

    def apply(self, name: str) -> str:
        if callable(self.replacement):
            return self.replacement(name)
        return self.replacement


def _rules(entries: List[Tuple[str, Replacement]]) -> Tuple[SubstitutionRule, ...]:
    return tuple(
        SubstitutionRule(re.compile(pattern, re.IGNORECASE), replacement)
        for pattern, replacement in entries
    )


def _swap_dumbbell_for_barbell(name: str) -> str:
    return re.sub("dumbbell", "Barbell", name, flags=re.IGNORECASE)


DUMBBELL_RULES = _rules([
    (r"barbell\s+back\s+squat", "Bulgarian Split Squat"),
    (r"front\s+squat", "Goblet Squat"),
    (r"conventional\s+deadlift", "Dumbbell Romanian Deadlift"),
    (r"(?<!dumbbell )romanian\s+deadlift", "Dumbbell Romanian Deadlift"),
    (r"(?<!dumbbell )bench\s+press", "Dumbbell Bench Press"),
    (r"standing\s+overhead\s+press", "Seated Dumbbell Shoulder Press"),
    (r"lat\s+pulldown", "One-Arm Dumbbell Row"),
    (r"leg\s+press", "Bulgarian Split Squat"),
    (r"(lying\s+)?leg\s+curl", "Single-Leg Dumbbell Romanian Deadlift"),
    (r"leg\s+extension", "Lunges"),
    (r"seated\s+calf\s+raise", "Standing Calf Raise"),
    (r"cable\s+triceps\s+pushdown", "Overhead Dumbbell Triceps Extension"),
    (r"overhead\s+triceps\s+extension", "Overhead Dumbbell Triceps Extension"),
    (r"ez\s+bar\s+curl", "Dumbbell Curl"),
    (r"cable\s+flye", "Dumbbell Flye"),
    (r"cable\s+lateral\s+raise", "Lateral Raise"),
    (r"face\s+pull", "Rear Delt Flye"),
    (r"cable\s+crunch", "Dumbbell Crunch"),
    # Anything else tied to a cable stack or machine
    (r"cable|machine|smith", "Dumbbell Curl"),
    (r"^(?!.*dumbbell).*\brow\b", "One-Arm Dumbbell Row"),
    (r"^(?!.*dumbbell).*\bpress\b", "Dumbbell Bench Press"),
])

BARBELL_RULES = _rules([
    (r"incline\s+dumbbell\s+press", "Incline Barbell Bench Press"),
    (r"dumbbell\s+bench\s+press", "Barbell Bench Press"),
    (r"seated\s+dumbbell\s+shoulder\s+press", "Standing Overhead Press"),
    (r"lat\s+pulldown", "Barbell Row"),
    (r"chest-supported\s+row", "Barbell Row"),
    (r"face\s+pull", "Barbell Row"),
    (r"rear\s+delt\s+flye", "Barbell Row"),
    (r"cable\s+flye", "Close-Grip Bench Press"),
    (r"cable\s+triceps\s+pushdown", "Lying Barbell Triceps Extension"),
    (r"lateral\s+raise", "Standing Overhead Press"),
    (r"leg\s+press", "Barbell Lunge"),
    (r"lying\s+leg\s+curl", "Romanian Deadlift"),
    (r"leg\s+extension", "Front Squat"),
    (r"seated\s+calf\s+raise", "Standing Calf Raise"),
    (r"cable\s+crunch", "Plank"),
    (r"hammer\s+curl", "Reverse-Grip Barbell Curl"),
    (r"dumbbell", _swap_dumbbell_for_barbell),
    (r"cable|machine|smith", "Barbell Row"),
])

# A commercial gym has everything; only the row variant is normalized.
GYM_RULES = _rules([
    (r"barbell\s+row", "Chest-Supported Row"),
])

RULES_BY_MODE: Dict[EquipmentMode, Tuple[SubstitutionRule, ...]] = {
    EquipmentMode.DUMBBELLS: DUMBBELL_RULES,
    EquipmentMode.BARBELL: BARBELL_RULES,
    EquipmentMode.GYM: GYM_RULES,
}


def equipment_mode(equipment: Sequence[str]) -> EquipmentMode:
    """Equipment mode for an equipment list (first entry decides)."""
    return equipment_mode_for(list(equipment))


def substitute(name: str, mode: EquipmentMode) -> str:
    """
    Substitute an exercise for the given equipment mode.

    Args:
        name: Exercise display name
        mode: Equipment mode of the user

    Returns:
        Replacement name, or the input unchanged when no rule matches
    """
    for rule in RULES_BY_MODE[mode]:
        if rule.pattern.search(name):
            return rule.apply(name)
    return name


def normalized_key(name: str, mode: EquipmentMode) -> str:
    """Identity of an exercise for deduplication within a day."""
    return substitute(name, mode).strip().lower()
