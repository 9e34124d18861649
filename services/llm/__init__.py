"""
LLM integration module.

Provides the OpenAI-backed candidate plan generator used ahead of the
deterministic rule engine.
"""

from services.llm.client import (
    OpenAIPlanGenerator,
    PlanGeneratorError,
    QuotaExceededError,
    is_quota_error,
)

__all__ = [
    "OpenAIPlanGenerator",
    "PlanGeneratorError",
    "QuotaExceededError",
    "is_quota_error",
]
