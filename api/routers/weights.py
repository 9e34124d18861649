"""
Working-weight suggestion router.

Suggestions are derived from the bench, squat and deadlift maxes passed in
the query; nothing is read from storage.
"""

from typing import Optional

from fastapi import APIRouter, Query

from models.generation import WeightSuggestionResponse
from models.program import Big3PRs, ExperienceLevel
from services.weight_prescription import describe_basis, suggested_range, suggested_weight

router = APIRouter(
    prefix="/weights",
    tags=["Weights"],
)


@router.get("/suggestion", response_model=WeightSuggestionResponse)
def get_weight_suggestion(
    exercise: str = Query(..., min_length=1, max_length=100),
    bench: Optional[float] = Query(default=None, gt=0),
    squat: Optional[float] = Query(default=None, gt=0),
    deadlift: Optional[float] = Query(default=None, gt=0),
    experience: ExperienceLevel = Query(default=ExperienceLevel.INTERMEDIATE),
):
    """
    Suggest a working weight for an exercise.

    `weight` and `range` are null when no rule covers the exercise or the
    max it is based on was not given. `basis` names the reference lift and
    its ratio range whenever a rule matches.
    """
    prs = Big3PRs(bench=bench, squat=squat, deadlift=deadlift)
    return WeightSuggestionResponse(
        exercise=exercise,
        weight=suggested_weight(exercise, prs, experience),
        range=suggested_range(exercise, prs),
        basis=describe_basis(exercise),
    )
