"""
Health check router for monitoring and load balancers.
"""

from fastapi import APIRouter

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """Simple liveness endpoint."""
    return {"status": "ok", "service": "hypertrophy-api"}
