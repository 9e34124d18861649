"""
Database infrastructure package.
"""

from infrastructure.db.pr_repository import SupabasePRRepository
from infrastructure.db.program_repository import SupabaseProgramRepository

__all__ = [
    "SupabasePRRepository",
    "SupabaseProgramRepository",
]
