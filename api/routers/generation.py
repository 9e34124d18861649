"""
Program generation router.

Builds a 12-week program from an onboarding profile, optionally starting
from an LLM candidate, and stores it for the requesting user.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_current_user, get_plan_generator, get_program_repo, get_settings
from application.exceptions import ProgramPersistenceError
from application.ports import ProgramRepository
from backend.settings import Settings
from models.generation import GenerateProgramRequest, GenerateProgramResponse
from services.llm import OpenAIPlanGenerator
from services.program_generator import ProgramGenerationError, ProgramGenerator

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/generate",
    tags=["Generation"],
)


def get_program_generator(
    settings: Settings = Depends(get_settings),
    program_repo: ProgramRepository = Depends(get_program_repo),
    llm_generator: Optional[OpenAIPlanGenerator] = Depends(get_plan_generator),
) -> ProgramGenerator:
    """Create a ProgramGenerator wired to the request's repository and LLM client."""
    return ProgramGenerator(
        program_repo=program_repo,
        llm_generator=llm_generator,
        max_llm_attempts=settings.llm_max_attempts,
    )


@router.post("", response_model=GenerateProgramResponse, status_code=201)
async def generate_program(
    request: GenerateProgramRequest,
    user_id: str = Depends(get_current_user),
    generator: ProgramGenerator = Depends(get_program_generator),
):
    """
    Generate a new 12-week hypertrophy program.

    1. **Template**: base week for the training frequency (2-6 days).

    2. **Session shape**: equipment substitutions, duplicate removal, core
       work on the right days and an exercise count that fits the session.

    3. **Periodization**: three accumulation weeks with rising volume, then
       a deload, repeated to twelve weeks.

    4. **LLM (optional)**: with `use_llm`, a candidate plan is requested and
       pushed through the same constraints; invalid candidates fall back to
       the rule engine.

    5. **Persistence**: the program is stored for the user.

    Raises:
        HTTPException 422: If the profile is invalid
        HTTPException 500: If generation or storage fails
    """
    profile = request.input
    logger.info(
        f"Generate program request: days={profile.training_frequency_preference}, "
        f"session={profile.session_length_min}min, experience={profile.experience_level.value}"
    )

    try:
        return await generator.generate(request, user_id)

    except ProgramGenerationError as e:
        logger.error(f"Program generation failed: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Program generation failed: {str(e)}",
        )
    except ProgramPersistenceError as e:
        logger.error(f"Program could not be saved: {e}")
        raise HTTPException(
            status_code=500,
            detail="Program was generated but could not be saved",
        )
    except Exception as e:
        logger.exception(f"Unexpected error during program generation: {e}")
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred during program generation",
        )
