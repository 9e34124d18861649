"""
Fake implementations for testing.

In-memory fakes of the repository interfaces and the LLM candidate
generator, for fast, isolated tests without database or network access.
"""

from tests.fakes.llm_client import FailingPlanGenerator, FakePlanGenerator, build_candidate
from tests.fakes.pr_repository import FakePRRepository
from tests.fakes.program_repository import FakeProgramRepository

__all__ = [
    "FailingPlanGenerator",
    "FakePlanGenerator",
    "FakePRRepository",
    "FakeProgramRepository",
    "build_candidate",
]
