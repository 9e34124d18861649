"""
Request/response models for program generation.

These models define the API contract for generating a program from an
onboarding profile, and for weight suggestions.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from core.constants import (
    DEFAULT_SESSION_LENGTH,
    MAX_CITATION_LENGTH,
    MAX_CITATIONS_COUNT,
    MAX_TRAINING_DAYS,
    MIN_TRAINING_DAYS,
    SUPPORTED_SESSION_LENGTHS,
)
from core.sanitization import sanitize_text_list
from models.program import (
    Big3PRs,
    EquipmentMode,
    ExperienceLevel,
    FocusPoint,
    Plan,
    equipment_mode_for,
)


class Profile(BaseModel):
    """Onboarding profile the plan is synthesised from."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    experience_level: ExperienceLevel = Field(
        description="User's training experience level"
    )
    training_frequency_preference: int = Field(
        ge=MIN_TRAINING_DAYS,
        le=MAX_TRAINING_DAYS,
        description="Training days per week",
    )
    equipment_available: List[str] = Field(
        default_factory=list,
        description="Available equipment; the first entry decides the equipment mode",
    )
    big3_prs: Big3PRs = Field(
        default_factory=Big3PRs,
        validation_alias=AliasChoices("big3_prs", "big3_PRs"),
    )
    session_length_min: int = Field(
        default=DEFAULT_SESSION_LENGTH,
        description="Session length in minutes (30, 45, 60 or 90)",
    )
    focus_point: Optional[FocusPoint] = Field(
        default=None,
        description="Emphasis for the sixth day; required for 6-day weeks",
    )
    goals: List[str] = Field(default_factory=lambda: ["hypertrophy"])
    injuries: List[str] = Field(default_factory=list)
    movement_preferences: List[str] = Field(default_factory=list)
    preferred_split: Optional[str] = None
    rest_pref: Literal["auto", "custom"] = "auto"
    nutrition: Optional[Literal["deficit", "surplus", "maintenance"]] = None
    age: Optional[int] = Field(default=None, ge=10, le=100)
    sex: Optional[str] = None
    bodyweight: Optional[float] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("bodyweight", "BW"),
    )

    @field_validator("goals", "injuries", "movement_preferences", mode="before")
    @classmethod
    def validate_free_text(cls, v: Any, info: ValidationInfo) -> List[str]:
        """Sanitize free-text lists that are forwarded to the LLM prompt."""
        cleaned = sanitize_text_list(v, info.field_name)
        if info.field_name == "goals" and not cleaned:
            return ["hypertrophy"]
        return cleaned

    @field_validator("equipment_available", mode="before")
    @classmethod
    def validate_equipment(cls, v: Any) -> List[str]:
        return sanitize_text_list(v, "equipment entries")

    @field_validator("session_length_min")
    @classmethod
    def validate_session_length(cls, v: int) -> int:
        if v not in SUPPORTED_SESSION_LENGTHS:
            raise ValueError(
                f"Invalid session length {v}. Must be one of: {SUPPORTED_SESSION_LENGTHS}"
            )
        return v

    @model_validator(mode="after")
    def require_focus_for_six_days(self) -> "Profile":
        if self.training_frequency_preference == 6 and self.focus_point is None:
            raise ValueError("focus_point is required when training 6 days per week")
        return self

    @property
    def equipment_mode(self) -> EquipmentMode:
        return equipment_mode_for(self.equipment_available)


class GenerateProgramRequest(BaseModel):
    """Request model for generating a program."""

    input: Profile = Field(description="Onboarding profile")
    use_llm: bool = Field(
        default=False,
        description="Ask the LLM for a candidate plan before falling back to the rule engine",
    )
    program_id: Optional[str] = Field(
        default=None,
        description="Identifier to store the program under; generated when absent",
    )
    citations: List[str] = Field(
        default_factory=list,
        description="Reference snippets included in the LLM prompt",
    )

    @field_validator("citations", mode="before")
    @classmethod
    def validate_citations(cls, v: Any) -> List[str]:
        return sanitize_text_list(
            v,
            "citations",
            max_count=MAX_CITATIONS_COUNT,
            max_length=MAX_CITATION_LENGTH,
        )


class GenerateProgramResponse(BaseModel):
    """Response model for a generated program."""

    program: Plan = Field(description="The generated 12-week program")
    generation_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata about the generation process",
    )


class PRUpdateRequest(BaseModel):
    """New one-rep maxes for the reference lifts. Omitted lifts are left unchanged."""

    bench: Optional[float] = Field(default=None, gt=0)
    squat: Optional[float] = Field(default=None, gt=0)
    deadlift: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def require_one_lift(self) -> "PRUpdateRequest":
        if self.bench is None and self.squat is None and self.deadlift is None:
            raise ValueError("At least one of bench, squat or deadlift is required")
        return self


class WeightRange(BaseModel):
    """Suggested working-weight window for an exercise."""

    low: float
    high: float
    per_hand: bool = False


class WeightBasis(BaseModel):
    """Which reference lift a suggestion is derived from, and at what ratio."""

    base: str
    ratio_range: List[float]


class WeightSuggestionResponse(BaseModel):
    exercise: str
    weight: Optional[float] = None
    range: Optional[WeightRange] = None
    basis: Optional[WeightBasis] = None
