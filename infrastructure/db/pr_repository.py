"""
Supabase implementation of PRRepository.

Queries against:
- prs: current bench/squat/deadlift maxes, one row per user
- pr_history: every update, for progress charts
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import PRPersistenceError


class SupabasePRRepository:
    """Supabase-backed PR repository implementation."""

    def __init__(self, client: Client):
        self._client = client

    def get_by_user(self, user_id: str) -> Optional[Dict]:
        response = (
            self._client.table("prs")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def upsert(self, user_id: str, prs: Dict) -> Dict:
        """
        Store the current maxes of a user.

        Raises:
            PRPersistenceError: If the write fails
        """
        row = {
            "user_id": user_id,
            "bench": prs.get("bench"),
            "squat": prs.get("squat"),
            "deadlift": prs.get("deadlift"),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            response = (
                self._client.table("prs")
                .upsert(row, on_conflict="user_id")
                .execute()
            )
        except Exception as e:
            raise PRPersistenceError(f"Saving PRs failed: {e}") from e
        return response.data[0] if response.data else row

    def append_history(self, user_id: str, prs: Dict) -> Dict:
        row = {
            "user_id": user_id,
            "bench": prs.get("bench"),
            "squat": prs.get("squat"),
            "deadlift": prs.get("deadlift"),
            "recorded_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            response = self._client.table("pr_history").insert(row).execute()
        except Exception as e:
            raise PRPersistenceError(f"Saving PR history failed: {e}") from e
        return response.data[0] if response.data else row

    def get_history(self, user_id: str) -> List[Dict]:
        response = (
            self._client.table("pr_history")
            .select("*")
            .eq("user_id", user_id)
            .order("recorded_at")
            .execute()
        )
        return response.data
