"""
LLM prompt templates for plan generation.

Profile free text is sanitized by the request models before it reaches these
templates.
"""

import json
from typing import Any, List

from models.generation import Profile

DEFAULT_CITATIONS = ["Schoenfeld", "Nuckols", "Jeff Nippard", "Mike Israetel", "Helms"]

PLAN_GENERATION_SYSTEM_PROMPT = """You are an expert evidence-based strength coach specializing in hypertrophy training.
Generate a complete 12-week program as strict JSON. Return ONLY valid JSON.

MANDATORY CONSTRAINTS:
- 12 weeks total; training days per week follow the user's preference (2-6 days)
- Compound movements first, compound variations second, accessories last
- Weekly sets per muscle group: Beginner 10-14, Intermediate 14-18, Advanced 18-26
- Rep ranges: main lifts 6-12 reps, accessories 8-20 reps
- 3:1 accumulation-to-deload cycle (weeks 1-3 accumulate, week 4 deloads by ~40% of sets)
- RPE between 5 and 10
- Rest periods: 180 seconds for ALL exercises
- Exercises per session: 30min -> 4, 45min -> 5, 60min -> 6, 90min -> 7

SPLITS:
- 2 days: Full body both sessions
- 3 days: Upper/Lower/Full body
- 4 days: Upper/Lower/Upper/Lower
- 5 days: Push/Pull/Legs/Upper/Lower
- 6 days: Push/Pull/Legs/Upper/Lower/Focus

EXERCISE SELECTION:
- Only use exercises the available equipment allows
- Respect injuries and movement preferences
- Avoid high-risk exercises for beginners

Return a JSON object with this exact structure:
{
  "name": "12-week Hypertrophy Program",
  "paid": false,
  "weeks": [
    {
      "week_number": 1,
      "days": [
        {
          "day_number": 1,
          "focus": "Upper",
          "notes": "",
          "exercises": [
            {"id": "bp-01", "name": "Barbell Bench Press", "sets": 4, "reps": "6-8",
             "rpe": 7, "tempo": "", "rest_seconds": 180}
          ]
        }
      ]
    }
  ],
  "metadata": {"source": [], "volume_profile": {}}
}

The "weeks" array MUST contain exactly 12 week objects (week_number 1 through 12).
"paid" is a boolean; sets, rpe, rest_seconds, week_number and day_number are integers.
"""

REPAIR_SYSTEM_PROMPT = "You return strictly valid JSON matching the provided schema. No prose."

REPAIR_USER_PROMPT = """Fix this program JSON so it passes validation. Only return the corrected JSON.
Errors:
{errors}
JSON:
{raw}"""


def _joined(values: List[str], default: str) -> str:
    return ", ".join(values) or default


def build_user_profile(profile: Profile) -> str:
    """One-paragraph description of the user for the generation prompt."""
    prs = profile.big3_prs

    def pr(value: Any) -> str:
        return "n/a" if value is None else f"{value:g}"

    parts = [
        f"Experience: {profile.experience_level.value}.",
        f"Training days/week: {profile.training_frequency_preference}.",
        f"Session length: {profile.session_length_min} min.",
        f"Goals: {_joined(profile.goals, 'hypertrophy')}.",
        f"Equipment: {_joined(profile.equipment_available, 'Gym')}.",
        f"Preferred split: {profile.preferred_split or 'auto'}.",
        f"Rest preference: {profile.rest_pref}.",
        f"Nutrition: {profile.nutrition or 'maintenance'}.",
        f"PRs (lbs): bench={pr(prs.bench)}, squat={pr(prs.squat)}, deadlift={pr(prs.deadlift)}.",
        f"Injuries: {_joined(profile.injuries, 'none')}.",
        f"Movement prefs: {_joined(profile.movement_preferences, 'none')}.",
    ]
    if profile.focus_point:
        parts.append(f"Focus: {profile.focus_point.value}.")
    return " ".join(parts)


def build_generation_prompt(profile: Profile, program_id: str, citations: List[str]) -> str:
    return (
        f"User profile:\n{build_user_profile(profile)}\n"
        f"Program id: {program_id}\n"
        f"Citations to include in metadata.source: {', '.join(citations or DEFAULT_CITATIONS)}"
    )


def build_repair_prompt(raw: str, errors: List[Any]) -> str:
    return REPAIR_USER_PROMPT.format(errors=json.dumps(errors, default=str), raw=raw)
