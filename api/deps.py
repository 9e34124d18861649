"""
FastAPI Dependency Providers for the Hypertrophy Program API.

Providers return interface types (Protocols) rather than concrete
implementations, so tests can override them with in-memory fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Auth providers extract user from headers

Testing:
    app.dependency_overrides[get_program_repo] = lambda: FakeProgramRepository()
"""

import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

from application.ports import PRRepository, ProgramRepository
from backend.settings import Settings, get_settings as _get_settings
from infrastructure.db import SupabasePRRepository, SupabaseProgramRepository
from services.llm import OpenAIPlanGenerator


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """Cached Settings instance from backend.settings."""
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_program_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramRepository:
    return SupabaseProgramRepository(client)


def get_pr_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PRRepository:
    return SupabasePRRepository(client)


# =============================================================================
# LLM Provider
# =============================================================================


def get_plan_generator(
    settings: Settings = Depends(get_settings),
) -> Optional[OpenAIPlanGenerator]:
    """
    Get the LLM candidate generator.

    Returns:
        OpenAIPlanGenerator, or None when no OpenAI key is configured
        (generation then always uses the rule engine)
    """
    if not settings.llm_enabled:
        return None
    return OpenAIPlanGenerator(api_key=settings.openai_api_key, model=settings.openai_model)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> str:
    """
    Get the current authenticated user ID from the Authorization header.

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
        RuntimeError: If auth stub is used in production
    """
    # The bearer token is trusted as the user ID; never allowed in production
    environment = os.environ.get("ENVIRONMENT", "development").lower()
    if environment == "production":
        raise RuntimeError(
            "Authentication stub cannot be used in production. "
            "Configure JWT validation before deploying."
        )

    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing authorization header",
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format",
        )

    token = authorization[7:].strip()
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
        )

    return token


async def get_optional_user(
    authorization: Optional[str] = Header(None),
) -> Optional[str]:
    """User ID if authenticated, None otherwise."""
    if not authorization:
        return None

    try:
        return await get_current_user(authorization)
    except HTTPException:
        return None


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_pr_repo",
    "get_program_repo",
    # LLM
    "get_plan_generator",
    # Authentication
    "get_current_user",
    "get_optional_user",
]
