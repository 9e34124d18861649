"""
Program repository port (interface).

This Protocol defines the contract for program persistence operations.
Infrastructure implementations (e.g., Supabase) must satisfy this interface.
"""

from typing import Dict, Optional, Protocol


class ProgramRepository(Protocol):
    """
    Repository interface for generated program persistence.

    Rows hold the owner, the plan name, the paid flag and the full plan as
    JSON under "data".
    """

    def get_by_id(self, program_id: str) -> Optional[Dict]:
        """
        Get a program by its ID.

        Args:
            program_id: The program's ID

        Returns:
            Program row if found, None otherwise
        """
        ...

    def get_latest_for_user(self, user_id: str) -> Optional[Dict]:
        """
        Get the most recently created program of a user.

        Args:
            user_id: The user's ID

        Returns:
            Program row if the user has any, None otherwise
        """
        ...

    def upsert(self, data: Dict) -> Dict:
        """
        Insert a program, or replace the row with the same ID.

        Args:
            data: Program row

        Returns:
            Stored program row

        Raises:
            ProgramPersistenceError: If the write fails
        """
        ...
