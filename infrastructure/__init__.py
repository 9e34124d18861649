"""
Infrastructure layer package for the program API.

This package contains concrete implementations of the port interfaces.
"""

from infrastructure.db import SupabasePRRepository, SupabaseProgramRepository

__all__ = [
    "SupabasePRRepository",
    "SupabaseProgramRepository",
]
