"""Models package for the hypertrophy program API."""

from models.program import (
    BaseLift,
    Big3PRs,
    Day,
    EquipmentMode,
    Exercise,
    ExperienceLevel,
    FocusPoint,
    Plan,
    Week,
    equipment_mode_for,
)
from models.generation import (
    GenerateProgramRequest,
    GenerateProgramResponse,
    PRUpdateRequest,
    Profile,
    WeightBasis,
    WeightRange,
    WeightSuggestionResponse,
)

__all__ = [
    "BaseLift",
    "Big3PRs",
    "Day",
    "EquipmentMode",
    "Exercise",
    "ExperienceLevel",
    "FocusPoint",
    "Plan",
    "Week",
    "equipment_mode_for",
    "GenerateProgramRequest",
    "GenerateProgramResponse",
    "PRUpdateRequest",
    "Profile",
    "WeightBasis",
    "WeightRange",
    "WeightSuggestionResponse",
]
