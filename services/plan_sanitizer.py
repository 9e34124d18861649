"""
Sanitizer for candidate plans proposed by the LLM.

Candidates arrive as parsed JSON and may be missing arrays, carry numbers as
strings, or have the wrong number of days. The functions here tolerate all
of that: missing arrays become empty, numeric strings are coerced, and the
session constraints then refill and reshape every day.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from core.constants import PROGRAM_SOURCES, REST_SECONDS
from models.generation import Profile
from models.program import Day, exercise_slug
from services.periodization import round_half_up
from services.session_constraints import (
    ACCESSORY_REPS,
    ACCESSORY_RPE,
    ACCESSORY_SETS,
    SessionShapeEnforcer,
    target_exercise_count,
)

logger = logging.getLogger(__name__)


class CandidateFormatError(ValueError):
    """Candidate is not a JSON object at all."""

    pass


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_float(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string; NaN and infinities give None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    number = _as_float(value)
    if number is None:
        return default
    return round_half_up(number)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def coerce_exercise(raw: Any) -> Optional[Dict[str, Any]]:
    """Coerce one exercise; exercises without a usable name are dropped."""
    if not isinstance(raw, dict):
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    name = name.strip()

    sets = _as_int(raw.get("sets"), ACCESSORY_SETS)
    rpe = _as_int(raw.get("rpe"), ACCESSORY_RPE)
    reps = raw.get("reps")
    exercise_id = raw.get("id")
    return {
        "id": str(exercise_id) if exercise_id else exercise_slug(name),
        "name": name,
        "sets": max(1, sets),
        "reps": str(reps) if reps not in (None, "") else ACCESSORY_REPS,
        "rpe": _clamp(rpe, 1, 10),
        "tempo": str(raw.get("tempo") or ""),
        "rest_seconds": max(0, _as_int(raw.get("rest_seconds"), REST_SECONDS)),
        "intensity_pct": _as_float(raw.get("intensity_pct")),
    }


def coerce_day(raw: Any, position: int) -> Dict[str, Any]:
    day = raw if isinstance(raw, dict) else {}
    day_number = _as_int(day.get("day_number"), position)
    focus = day.get("focus")
    notes = day.get("notes")
    exercises = [coerce_exercise(e) for e in _as_list(day.get("exercises"))]
    return {
        "day_number": day_number if day_number and day_number >= 1 else position,
        "focus": focus.strip() if isinstance(focus, str) and focus.strip() else f"Day {position}",
        "exercises": [e for e in exercises if e is not None],
        "notes": notes if isinstance(notes, str) else "",
    }


def coerce_week(raw: Any, position: int) -> Dict[str, Any]:
    week = raw if isinstance(raw, dict) else {}
    week_number = _as_int(week.get("week_number"), position)
    return {
        "week_number": week_number if week_number and week_number >= 1 else position,
        "days": [coerce_day(d, i + 1) for i, d in enumerate(_as_list(week.get("days")))],
    }


def default_metadata() -> Dict[str, Any]:
    return {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "source": list(PROGRAM_SOURCES),
        "volume_profile": {},
    }


def coerce_candidate(raw: Any, program_id: str) -> Dict[str, Any]:
    """
    Coerce a parsed candidate into the plan shape.

    Args:
        raw: Parsed JSON from the LLM
        program_id: Identifier the plan is stored under

    Returns:
        Plan-shaped dictionary (not yet validated)

    Raises:
        CandidateFormatError: If the candidate is not a JSON object
    """
    if not isinstance(raw, dict):
        raise CandidateFormatError(f"Expected a JSON object, got {type(raw).__name__}")

    metadata = raw.get("metadata") if isinstance(raw.get("metadata"), dict) else {}
    name = raw.get("name")
    return {
        "id": program_id,
        "name": name.strip() if isinstance(name, str) and name.strip() else "",
        "paid": _as_bool(raw.get("paid", False)),
        "weeks": [coerce_week(w, i + 1) for i, w in enumerate(_as_list(raw.get("weeks")))],
        "metadata": {**default_metadata(), **metadata},
    }


def enforce_days_split(candidate: Dict[str, Any], template_days: Sequence[Day]) -> Dict[str, Any]:
    """
    Give every week exactly as many days as the template week.

    Short weeks are padded with the template's remaining days, long weeks are
    truncated; existing day content is kept and days are renumbered from 1.
    """
    desired = len(template_days)
    weeks = []
    for week in candidate.get("weeks", []):
        days = list(week.get("days", []))[:desired]
        for template_day in template_days[len(days):]:
            days.append(template_day.model_dump())
        days = [{**day, "day_number": i + 1} for i, day in enumerate(days)]
        weeks.append({**week, "days": days})
    return {**candidate, "weeks": weeks}


def apply_session_constraints(
    candidate: Dict[str, Any],
    profile: Profile,
    enforcer: Optional[SessionShapeEnforcer] = None,
) -> Dict[str, Any]:
    """
    Run the session constraints over every day of every week.

    A day that cannot be enforced is left as it is.
    """
    enforcer = enforcer or SessionShapeEnforcer()
    mode = profile.equipment_mode
    target = target_exercise_count(profile.session_length_min)

    weeks = []
    for week in candidate.get("weeks", []):
        raw_days = week.get("days", [])
        days = []
        for index, raw_day in enumerate(raw_days):
            try:
                day = Day.model_validate(raw_day)
                enforced = enforcer.enforce_day(day, index, len(raw_days), mode, target)
                days.append(enforced.model_dump())
            except Exception as e:
                logger.warning(
                    f"Could not enforce day {index + 1} of week {week.get('week_number')}: {e}"
                )
                days.append(raw_day)
        weeks.append({**week, "days": days})
    return {**candidate, "weeks": weeks}
