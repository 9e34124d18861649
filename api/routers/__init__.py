"""
Router package for the Hypertrophy Program API.

- health: Health check endpoint
- generation: Program generation from an onboarding profile
- programs: Reading stored programs
- prs: Recording one-rep maxes
- weights: Working-weight suggestions
"""

from api.routers.generation import router as generation_router
from api.routers.health import router as health_router
from api.routers.programs import router as programs_router
from api.routers.prs import router as prs_router
from api.routers.weights import router as weights_router

__all__ = [
    "generation_router",
    "health_router",
    "programs_router",
    "prs_router",
    "weights_router",
]
