"""
PR repository port (interface).

Current one-rep maxes live in one row per user; every update is also
appended to a history table for progress charts.
"""

from typing import Dict, List, Optional, Protocol


class PRRepository(Protocol):
    """Repository interface for one-rep max persistence."""

    def get_by_user(self, user_id: str) -> Optional[Dict]:
        """
        Get the current maxes of a user.

        Returns:
            Row with bench, squat and deadlift, or None if nothing is recorded
        """
        ...

    def upsert(self, user_id: str, prs: Dict) -> Dict:
        """
        Store the current maxes of a user.

        Args:
            user_id: The user's ID
            prs: Mapping with bench, squat and deadlift

        Returns:
            Stored row
        """
        ...

    def append_history(self, user_id: str, prs: Dict) -> Dict:
        """Record one update in the PR history."""
        ...

    def get_history(self, user_id: str) -> List[Dict]:
        """PR history of a user, oldest first."""
        ...
