"""
One-rep max router.

- Record new bench/squat/deadlift maxes (also appended to the history)
- Read the current maxes and their history
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.deps import get_current_user, get_pr_repo
from application.exceptions import PRPersistenceError
from application.ports import PRRepository
from models.generation import PRUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/prs",
    tags=["PRs"],
)

LIFTS = ("bench", "squat", "deadlift")


class PRRecord(BaseModel):
    bench: Optional[float] = None
    squat: Optional[float] = None
    deadlift: Optional[float] = None
    recorded_at: Optional[str] = None


class PRResponse(BaseModel):
    """Current maxes of the user with their update history."""

    current: PRRecord
    history: List[PRRecord] = []


def _record(row: Optional[dict], timestamp_field: str) -> PRRecord:
    row = row or {}
    return PRRecord(
        **{lift: row.get(lift) for lift in LIFTS},
        recorded_at=row.get(timestamp_field),
    )


@router.post("", response_model=PRRecord)
def update_prs(
    request: PRUpdateRequest,
    user_id: str = Depends(get_current_user),
    pr_repo: PRRepository = Depends(get_pr_repo),
):
    """
    Record new one-rep maxes.

    Lifts omitted from the request keep their stored value.

    Raises:
        HTTPException 422: If no lift is given or a value is not positive
        HTTPException 500: If the maxes cannot be stored
    """
    existing = pr_repo.get_by_user(user_id) or {}
    update = request.model_dump(exclude_none=True)
    merged = {lift: update.get(lift, existing.get(lift)) for lift in LIFTS}

    try:
        stored = pr_repo.upsert(user_id, merged)
        pr_repo.append_history(user_id, merged)
    except PRPersistenceError as e:
        logger.error(f"Saving PRs for user {user_id} failed: {e}")
        raise HTTPException(status_code=500, detail="PRs could not be saved")

    logger.info(f"Updated PRs for user {user_id}: {sorted(update)}")
    return _record(stored, "updated_at")


@router.get("", response_model=PRResponse)
def get_prs(
    user_id: str = Depends(get_current_user),
    pr_repo: PRRepository = Depends(get_pr_repo),
):
    """Get the current maxes of the user, with the history oldest first."""
    return PRResponse(
        current=_record(pr_repo.get_by_user(user_id), "updated_at"),
        history=[_record(row, "recorded_at") for row in pr_repo.get_history(user_id)],
    )
