"""
Domain models for hypertrophy programs.

A Plan is twelve Weeks, each Week an ordered list of Days, each Day an ordered
list of Exercises. Exercises and Days are frozen: the synthesis passes build
new instances with model_copy(update=...) instead of mutating in place.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from core.constants import PROGRAM_WEEKS, REST_SECONDS


class ExperienceLevel(str, Enum):
    """User experience levels."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class FocusPoint(str, Enum):
    """Muscle group emphasised by the sixth day of a 6-day week."""

    ARMS = "Arms"
    CHEST = "Chest"
    BACK = "Back"
    QUADS = "Quads"
    GLUTES = "Glutes"
    DELTS = "Delts"


class EquipmentMode(str, Enum):
    """Equipment context derived from the user's equipment list."""

    GYM = "gym"
    DUMBBELLS = "dumbbells"
    BARBELL = "barbell"


def equipment_mode_for(equipment: List[str]) -> EquipmentMode:
    """
    Derive the equipment mode from the first equipment entry.

    "dumbbell" anywhere in it selects dumbbells, "barbell" selects barbell,
    anything else (including no equipment at all) is a full gym.
    """
    first = equipment[0].lower() if equipment else ""
    if "dumbbell" in first:
        return EquipmentMode.DUMBBELLS
    if "barbell" in first:
        return EquipmentMode.BARBELL
    return EquipmentMode.GYM


class BaseLift(str, Enum):
    """Reference lifts with a recorded one-rep max."""

    BENCH = "bench"
    SQUAT = "squat"
    DEADLIFT = "deadlift"


def exercise_slug(name: str) -> str:
    """Stable identifier derived from an exercise name."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class Exercise(BaseModel):
    """A single prescribed exercise within a day."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Stable exercise identifier")
    name: str = Field(min_length=1)
    sets: int = Field(ge=1, description="Working sets for the week")
    reps: str = Field(description="Rep range, e.g. '6-8'")
    rpe: int = Field(default=7, ge=1, le=10, description="Target rate of perceived exertion")
    tempo: str = Field(default="")
    rest_seconds: int = Field(default=REST_SECONDS, ge=0)
    intensity_pct: Optional[float] = Field(
        default=None, description="Optional load as a fraction of 1RM"
    )

    @model_validator(mode="before")
    @classmethod
    def default_id_from_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id") and data.get("name"):
            data = {**data, "id": exercise_slug(str(data["name"]))}
        return data

    def renamed(self, name: str) -> "Exercise":
        """Copy of this exercise under a new name (identifier follows the name)."""
        if name == self.name:
            return self
        return self.model_copy(update={"name": name, "id": exercise_slug(name)})


class Day(BaseModel):
    """One training session of a week."""

    model_config = ConfigDict(frozen=True)

    day_number: int = Field(ge=1)
    focus: str
    exercises: List[Exercise] = Field(default_factory=list)
    notes: str = ""

    def with_exercises(self, exercises: List[Exercise]) -> "Day":
        return self.model_copy(update={"exercises": list(exercises)})


class Week(BaseModel):
    """A week of the plan."""

    model_config = ConfigDict(frozen=True)

    week_number: int = Field(ge=1, le=PROGRAM_WEEKS)
    days: List[Day] = Field(default_factory=list)


class Plan(BaseModel):
    """A complete 12-week program."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "program_id"))
    name: str
    paid: bool = False
    weeks: List[Week] = Field(min_length=PROGRAM_WEEKS, max_length=PROGRAM_WEEKS)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Big3PRs(BaseModel):
    """One-rep maxes for the three reference lifts."""

    bench: Optional[float] = None
    squat: Optional[float] = None
    deadlift: Optional[float] = None

    def get(self, lift: BaseLift) -> Optional[float]:
        return getattr(self, lift.value)
