"""
Stored programs router.

- Latest program of the user
- Program details, with unpaid weeks locked
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.deps import get_current_user, get_program_repo
from application.ports import ProgramRepository
from models.program import Week
from services.program_generator import can_view_week

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs",
    tags=["Programs"],
)


class LatestProgramResponse(BaseModel):
    program_id: str
    name: str
    created_at: Optional[str] = None


class ProgramDetailResponse(BaseModel):
    """A stored program as the user may see it."""

    id: str
    name: str
    paid: bool
    weeks: List[Week]
    locked_weeks: List[int]
    metadata: Dict[str, Any]


# =============================================================================
# Custom Exceptions
# =============================================================================


class ProgramNotFoundError(HTTPException):
    """Raised when a program cannot be found."""

    def __init__(self, program_id: str):
        super().__init__(
            status_code=404,
            detail=f"Program {program_id} not found",
        )


class ProgramAccessDeniedError(HTTPException):
    """
    Raised when user doesn't own a program.

    Returns 404 instead of 403 so another user's program IDs cannot be probed.
    """

    def __init__(self, program_id: str):
        super().__init__(
            status_code=404,
            detail=f"Program {program_id} not found",
        )


# =============================================================================
# Helper Functions
# =============================================================================


def _get_program_or_404(
    program_id: str,
    user_id: str,
    program_repo: ProgramRepository,
) -> dict:
    program = program_repo.get_by_id(program_id)
    if not program:
        raise ProgramNotFoundError(program_id)
    if program.get("user_id") != user_id:
        logger.warning(f"User {user_id} requested program {program_id} owned by another user")
        raise ProgramAccessDeniedError(program_id)
    return program


def _visible_weeks(weeks_data: List[dict], paid: bool) -> Tuple[List[Week], List[int]]:
    """Weeks with days stripped from those the user may not view yet."""
    weeks: List[Week] = []
    locked: List[int] = []
    for week_data in weeks_data:
        week = Week.model_validate(week_data)
        if can_view_week(week.week_number, paid):
            weeks.append(week)
        else:
            weeks.append(week.model_copy(update={"days": []}))
            locked.append(week.week_number)
    return weeks, locked


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/latest", response_model=LatestProgramResponse)
def get_latest_program(
    user_id: str = Depends(get_current_user),
    program_repo: ProgramRepository = Depends(get_program_repo),
):
    """
    Get the most recently generated program of the user.

    Raises:
        HTTPException 404: If the user has no program yet
    """
    program = program_repo.get_latest_for_user(user_id)
    if not program:
        raise HTTPException(status_code=404, detail="No program found")
    return LatestProgramResponse(
        program_id=program["id"],
        name=program.get("name") or "",
        created_at=program.get("created_at"),
    )


@router.get("/{program_id}", response_model=ProgramDetailResponse)
def get_program(
    program_id: str,
    user_id: str = Depends(get_current_user),
    program_repo: ProgramRepository = Depends(get_program_repo),
):
    """
    Get a program by ID.

    Week 1 is always included. Later weeks carry their days only for paid
    programs; otherwise they come back empty and are listed in `locked_weeks`.

    Raises:
        HTTPException 404: If the program doesn't exist or isn't owned by the user
    """
    program = _get_program_or_404(program_id, user_id, program_repo)
    data = program.get("data") or {}
    paid = bool(program.get("paid", data.get("paid", False)))
    weeks, locked = _visible_weeks(data.get("weeks", []), paid)

    return ProgramDetailResponse(
        id=program["id"],
        name=program.get("name") or data.get("name", ""),
        paid=paid,
        weeks=weeks,
        locked_weeks=locked,
        metadata=data.get("metadata", {}),
    )
