"""
Pytest fixtures for hypertrophy-api tests.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from backend.main import create_app
from backend.settings import Settings
from api.deps import get_current_user, get_plan_generator, get_pr_repo, get_program_repo


# ---------------------------------------------------------------------------
# Auth Mock
# ---------------------------------------------------------------------------

TEST_USER_ID = "test-user-123"
OTHER_USER_ID = "other-user-456"


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(
        environment="test",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
        _env_file=None,
    )


@pytest.fixture(scope="session")
def app(test_settings):
    """Create test application instance."""
    return create_app(settings=test_settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """
    Per-test FastAPI TestClient.
    Cleans up dependency overrides after each test.
    """
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_plan_generator] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Mock Environment Variables
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set mock environment variables for tests."""
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-supabase-key")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


# ---------------------------------------------------------------------------
# Domain Fixtures - Profiles
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_profile() -> Dict[str, Any]:
    """Onboarding profile as sent by the app."""
    return {
        "experience_level": "Intermediate",
        "training_frequency_preference": 4,
        "equipment_available": ["Full gym"],
        "big3_PRs": {"bench": 225, "squat": 315, "deadlift": 405},
        "session_length_min": 60,
        "goals": ["hypertrophy"],
        "injuries": [],
        "movement_preferences": [],
    }


@pytest.fixture
def sample_generation_request(sample_profile) -> Dict[str, Any]:
    """Valid payload for program generation."""
    return {"input": sample_profile, "use_llm": False}


# ---------------------------------------------------------------------------
# Fake Repository Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_program_repo():
    """Create a fake program repository for testing."""
    from tests.fakes import FakeProgramRepository
    return FakeProgramRepository()


@pytest.fixture
def fake_pr_repo():
    """Create a fake PR repository for testing."""
    from tests.fakes import FakePRRepository
    return FakePRRepository()


@pytest.fixture
def fake_plan_generator():
    """Create a fake LLM candidate generator for testing."""
    from tests.fakes import FakePlanGenerator
    return FakePlanGenerator()


@pytest.fixture
def client_with_fake_repo(app, fake_program_repo) -> Generator[TestClient, None, None]:
    """TestClient with fake program repository injected and no LLM."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_program_repo] = lambda: fake_program_repo
    app.dependency_overrides[get_plan_generator] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_fake_llm(
    app,
    fake_program_repo,
    fake_plan_generator,
) -> Generator[TestClient, None, None]:
    """TestClient with fake program repository and fake LLM injected."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_program_repo] = lambda: fake_program_repo
    app.dependency_overrides[get_plan_generator] = lambda: fake_plan_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_fake_pr_repo(app, fake_pr_repo) -> Generator[TestClient, None, None]:
    """TestClient with fake PR repository injected."""
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_pr_repo] = lambda: fake_pr_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Service Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def program_generator(fake_program_repo):
    """ProgramGenerator with a fake repository and no LLM."""
    from services.program_generator import ProgramGenerator
    return ProgramGenerator(program_repo=fake_program_repo)


@pytest.fixture
def llm_program_generator(fake_program_repo, fake_plan_generator):
    """ProgramGenerator with a fake repository and fake LLM."""
    from services.program_generator import ProgramGenerator
    return ProgramGenerator(program_repo=fake_program_repo, llm_generator=fake_plan_generator)
