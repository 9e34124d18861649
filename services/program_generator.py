"""
Program generator service.

Orchestrates plan synthesis:
1. Template selection - base week for the training frequency
2. Session constraints - equipment, dedup, core days, exercise count
3. Periodization - twelve weeks on a 3:1 accumulation/deload block
4. Optional LLM candidate - sanitized by the same constraints, with repair
   and a deterministic fallback
5. Persistence - save to database
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import ValidationError

from application.ports import ProgramRepository
from core.constants import DEFAULT_PROGRAM_NAME
from models.generation import GenerateProgramRequest, GenerateProgramResponse, Profile
from models.program import Day, Plan
from services.llm import OpenAIPlanGenerator, PlanGeneratorError, QuotaExceededError
from services.periodization import PeriodizationScheduler
from services.plan_sanitizer import (
    apply_session_constraints,
    coerce_candidate,
    default_metadata,
    enforce_days_split,
)
from services.session_constraints import SessionShapeEnforcer, target_exercise_count
from services.template_library import TemplateLibrary

logger = logging.getLogger(__name__)

DEFAULT_MAX_LLM_ATTEMPTS = 3

VALIDATION_FALLBACK = ("Validation Fallback", "AI validation failed")
PARSE_FALLBACK = ("Parse Fallback", "AI parsing failed")
QUOTA_FALLBACK = ("Fallback", "OpenAI quota exceeded")


class ProgramGenerationError(Exception):
    """Error during program generation."""

    pass


def can_view_week(week_number: int, paid: bool) -> bool:
    """The first week is free; the rest need a paid program."""
    return week_number <= 1 or paid


class ProgramGenerator:
    """
    Service for generating 12-week hypertrophy programs.

    The rule engine always produces a valid plan. When asked to, the LLM is
    tried first and its candidate is pushed through the same session
    constraints; any candidate that still does not validate ends in the
    rule-engine plan.
    """

    def __init__(
        self,
        program_repo: ProgramRepository,
        llm_generator: Optional[OpenAIPlanGenerator] = None,
        max_llm_attempts: int = DEFAULT_MAX_LLM_ATTEMPTS,
    ):
        """
        Initialize the program generator.

        Args:
            program_repo: Repository for program persistence
            llm_generator: Candidate plan generator; None disables the LLM path
            max_llm_attempts: Candidates to try before falling back
        """
        self._program_repo = program_repo
        self._llm = llm_generator
        self._max_llm_attempts = max_llm_attempts
        self._templates = TemplateLibrary()
        self._enforcer = SessionShapeEnforcer()
        self._scheduler = PeriodizationScheduler()

    # -------------------------------------------------------------------------
    # Rule engine
    # -------------------------------------------------------------------------

    def build_base_week(self, profile: Profile) -> List[Day]:
        """Template week for the profile with every session constraint applied."""
        days = self._templates.build_week(
            profile.training_frequency_preference,
            profile.focus_point,
        )
        return self._enforcer.enforce_week(
            days,
            profile.equipment_mode,
            profile.session_length_min,
        )

    def generate_deterministic(
        self,
        profile: Profile,
        program_id: Optional[str] = None,
        name: str = DEFAULT_PROGRAM_NAME,
        fallback_reason: Optional[str] = None,
    ) -> Plan:
        """
        Build the full plan with the rule engine alone.

        Args:
            profile: Onboarding profile
            program_id: Identifier for the plan; generated when absent
            name: Plan name
            fallback_reason: Why the LLM candidate was abandoned, if it was

        Returns:
            A 12-week plan
        """
        weeks = self._scheduler.schedule(self.build_base_week(profile))
        metadata = self._profile_metadata(profile, default_metadata())
        if fallback_reason:
            metadata["fallback_reason"] = fallback_reason
        return Plan(
            id=program_id or str(uuid4()),
            name=name,
            paid=False,
            weeks=weeks,
            metadata=metadata,
        )

    # -------------------------------------------------------------------------
    # Generation entry point
    # -------------------------------------------------------------------------

    async def generate(
        self,
        request: GenerateProgramRequest,
        user_id: str,
    ) -> GenerateProgramResponse:
        """
        Generate and store a program.

        Args:
            request: Profile plus generation options
            user_id: Owner of the program

        Returns:
            The stored plan with generation metadata

        Raises:
            ProgramGenerationError: If the LLM fails for a reason other than quota
            ProgramPersistenceError: If the plan cannot be stored
        """
        start_time = time.time()
        profile = request.input
        program_id = request.program_id or str(uuid4())

        logger.info(
            f"Generating program {program_id}: days={profile.training_frequency_preference}, "
            f"session={profile.session_length_min}min, mode={profile.equipment_mode.value}, "
            f"use_llm={request.use_llm}"
        )

        if request.use_llm and self._llm is not None:
            plan, source, attempts = await self._generate_with_llm(
                profile, program_id, request.citations
            )
        else:
            if request.use_llm:
                logger.warning("LLM requested but not configured, using the rule engine")
            plan, source, attempts = self.generate_deterministic(profile, program_id), "deterministic", 0

        self._save(plan, user_id)

        generation_time = time.time() - start_time
        logger.info(f"Program {plan.id} generated from {source} in {generation_time:.2f}s")

        metadata: Dict[str, Any] = {
            "source": source,
            "llm_attempts": attempts,
            "equipment_mode": profile.equipment_mode.value,
            "exercises_per_session": target_exercise_count(profile.session_length_min),
            "generation_time_seconds": round(generation_time, 3),
        }
        if "fallback_reason" in plan.metadata:
            metadata["fallback_reason"] = plan.metadata["fallback_reason"]
        return GenerateProgramResponse(program=plan, generation_metadata=metadata)

    # -------------------------------------------------------------------------
    # LLM path
    # -------------------------------------------------------------------------

    async def _generate_with_llm(
        self,
        profile: Profile,
        program_id: str,
        citations: List[str],
    ) -> Tuple[Plan, str, int]:
        template_days = self.build_base_week(profile)
        fallback = VALIDATION_FALLBACK

        for attempt in range(1, self._max_llm_attempts + 1):
            try:
                raw = await self._llm.generate_candidate(profile, program_id, citations)
            except QuotaExceededError as e:
                logger.warning(f"OpenAI quota exceeded, falling back to the rule engine: {e}")
                return self._fallback(profile, program_id, QUOTA_FALLBACK), "fallback", attempt
            except PlanGeneratorError as e:
                logger.error(f"AI program generation failed: {e}")
                raise ProgramGenerationError(f"AI program generation failed: {e}") from e

            plan, errors, fallback = self._try_prepare(raw, program_id, profile, template_days)
            if plan is not None:
                return plan, "llm", attempt

            logger.warning(f"Candidate rejected on attempt {attempt}, requesting repair")
            repaired = await self._llm.repair(raw, errors)
            if repaired:
                plan, _, _ = self._try_prepare(repaired, program_id, profile, template_days)
                if plan is not None:
                    logger.info(f"Repaired candidate accepted on attempt {attempt}")
                    return plan, "llm_repaired", attempt

        logger.warning(
            f"No usable candidate after {self._max_llm_attempts} attempts, "
            f"falling back to the rule engine"
        )
        return self._fallback(profile, program_id, fallback), "fallback", self._max_llm_attempts

    def _try_prepare(
        self,
        raw: str,
        program_id: str,
        profile: Profile,
        template_days: List[Day],
    ) -> Tuple[Optional[Plan], List[Dict[str, Any]], Tuple[str, str]]:
        """
        Parse, sanitize and validate a candidate.

        Returns:
            (plan, [], _) on success; (None, errors, fallback) otherwise
        """
        try:
            candidate = coerce_candidate(json.loads(_extract_json(raw)), program_id)
        # JSONDecodeError and CandidateFormatError are both ValueErrors
        except (ValueError, OverflowError) as e:
            logger.warning(f"Candidate could not be parsed: {e}")
            return None, [{"loc": [], "msg": str(e)}], PARSE_FALLBACK

        candidate["name"] = candidate["name"] or DEFAULT_PROGRAM_NAME
        candidate["metadata"] = self._profile_metadata(profile, candidate["metadata"])
        candidate = enforce_days_split(candidate, template_days)
        candidate = apply_session_constraints(candidate, profile, self._enforcer)

        try:
            return Plan.model_validate(candidate), [], VALIDATION_FALLBACK
        except ValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"]}
                for err in e.errors(include_url=False)
            ]
            logger.warning(f"Candidate failed validation with {len(errors)} errors")
            return None, errors, VALIDATION_FALLBACK

    def _fallback(self, profile: Profile, program_id: str, fallback: Tuple[str, str]) -> Plan:
        suffix, reason = fallback
        return self.generate_deterministic(
            profile,
            program_id,
            name=f"{DEFAULT_PROGRAM_NAME} ({suffix})",
            fallback_reason=reason,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _profile_metadata(self, profile: Profile, metadata: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **metadata,
            "big3_prs": profile.big3_prs.model_dump(exclude_none=True),
            "experience_level": profile.experience_level.value,
        }

    def _save(self, plan: Plan, user_id: str) -> None:
        self._program_repo.upsert(
            {
                "id": plan.id,
                "user_id": user_id,
                "name": plan.name,
                "paid": plan.paid,
                "data": plan.model_dump(mode="json"),
                "created_at": plan.metadata.get("created_at"),
            }
        )
        logger.info(f"Saved program {plan.id} for user {user_id}")


def _extract_json(text: str) -> str:
    """Outermost JSON object in a model response (models sometimes wrap it in prose)."""
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        raise json.JSONDecodeError("No JSON object in response", text, 0)
    return text[start : end + 1]
