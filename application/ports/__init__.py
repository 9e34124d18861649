"""
Port interfaces (Protocols) for the program API.

This package defines the interface contracts that the infrastructure
layer must implement, so services and routers depend on abstractions and
tests can swap in in-memory fakes.
"""

from application.ports.pr_repository import PRRepository
from application.ports.program_repository import ProgramRepository

__all__ = [
    "PRRepository",
    "ProgramRepository",
]
