"""
OpenAI client wrapper for plan generation.

Provides the OpenAIPlanGenerator class, which asks the model for a complete
candidate plan and, when a candidate fails validation, for a repaired one.
Candidates are returned as raw JSON text; parsing and validation belong to
the program generator.
"""

import asyncio
import logging
import random
from typing import Any, List, Optional

from openai import APIStatusError, AsyncOpenAI, RateLimitError

from models.generation import Profile
from services.llm.prompts import (
    PLAN_GENERATION_SYSTEM_PROMPT,
    REPAIR_SYSTEM_PROMPT,
    build_generation_prompt,
    build_repair_prompt,
)

logger = logging.getLogger(__name__)


class PlanGeneratorError(Exception):
    """Error while requesting a plan from the LLM."""

    pass


class QuotaExceededError(PlanGeneratorError):
    """The account is out of quota, or still rate limited after every retry."""

    pass


def is_quota_error(error: Exception) -> bool:
    """Whether an OpenAI error means quota or rate limiting rather than a bad request."""
    if isinstance(error, RateLimitError):
        return True
    if isinstance(error, APIStatusError) and error.status_code == 429:
        return True
    message = str(error).lower()
    return "insufficient_quota" in message or "quota" in message


class OpenAIPlanGenerator:
    """
    OpenAI-powered candidate plan generator.

    Uses GPT-4o in JSON mode with a low temperature so candidates stay close
    to the requested structure.
    """

    DEFAULT_MODEL = "gpt-4o"
    MAX_RETRIES = 2
    GENERATION_TEMPERATURE = 0.2
    REPAIR_TEMPERATURE = 0.1

    # Backoff configuration
    BASE_BACKOFF_SECONDS = 1.0
    RATE_LIMIT_BACKOFF_SECONDS = 5.0
    MAX_BACKOFF_SECONDS = 30.0

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL):
        """
        Initialize the plan generator.

        Args:
            api_key: OpenAI API key
            model: Model to use (default: gpt-4o)
        """
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model

    async def generate_candidate(
        self,
        profile: Profile,
        program_id: str,
        citations: Optional[List[str]] = None,
    ) -> str:
        """
        Ask the model for a complete 12-week plan.

        Transient errors are retried with exponential backoff and jitter;
        rate limits wait longer between attempts.

        Args:
            profile: The user's onboarding profile
            program_id: Identifier the plan will be stored under
            citations: Sources the model should list in metadata

        Returns:
            Raw JSON text of the candidate

        Raises:
            QuotaExceededError: If the account is out of quota or still rate limited
            PlanGeneratorError: If every attempt failed for another reason
        """
        user_prompt = build_generation_prompt(profile, program_id, citations or [])

        last_error: Optional[Exception] = None
        for attempt in range(self.MAX_RETRIES + 1):
            try:
                return await self._call_llm(
                    PLAN_GENERATION_SYSTEM_PROMPT,
                    user_prompt,
                    self.GENERATION_TEMPERATURE,
                )
            except RateLimitError as e:
                last_error = e
                logger.warning(f"Rate limit error on attempt {attempt + 1}: {e}")
                if "insufficient_quota" in str(e):
                    break
                if attempt < self.MAX_RETRIES:
                    delay = self._calculate_backoff(attempt, self.RATE_LIMIT_BACKOFF_SECONDS)
                    logger.info(f"Rate limit backoff: sleeping {delay:.2f}s")
                    await asyncio.sleep(delay)
                continue
            except Exception as e:
                last_error = e
                logger.warning(f"LLM call error on attempt {attempt + 1}: {e}")

            if attempt < self.MAX_RETRIES:
                delay = self._calculate_backoff(attempt, self.BASE_BACKOFF_SECONDS)
                logger.debug(f"Backoff: sleeping {delay:.2f}s before retry")
                await asyncio.sleep(delay)

        logger.error(f"All LLM attempts failed: {last_error}")
        if last_error is not None and is_quota_error(last_error):
            raise QuotaExceededError(str(last_error)) from last_error
        raise PlanGeneratorError(str(last_error)) from last_error

    async def repair(self, raw: str, errors: List[Any]) -> Optional[str]:
        """
        Ask the model to fix a candidate that failed validation.

        Args:
            raw: The candidate as JSON text
            errors: Validation errors to report back to the model

        Returns:
            Repaired JSON text, or None if the repair request failed
        """
        try:
            return await self._call_llm(
                REPAIR_SYSTEM_PROMPT,
                build_repair_prompt(raw, errors),
                self.REPAIR_TEMPERATURE,
            )
        except Exception as e:
            logger.warning(f"Plan repair request failed: {e}")
            return None

    async def _call_llm(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content
        if not content:
            raise PlanGeneratorError("Empty response from LLM")
        return content

    def _calculate_backoff(self, attempt: int, base_delay: float) -> float:
        """
        Calculate exponential backoff delay with jitter, capped at MAX_BACKOFF_SECONDS.

        Args:
            attempt: Current attempt number (0-indexed)
            base_delay: Base delay in seconds

        Returns:
            Delay in seconds
        """
        exponential_delay = (2**attempt) * base_delay
        jitter = random.uniform(0, 1)
        return min(exponential_delay + jitter, self.MAX_BACKOFF_SECONDS)
