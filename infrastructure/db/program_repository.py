"""
Supabase implementation of ProgramRepository.

Programs are stored one row per plan in the "programs" table; the plan itself
is kept as JSON in the "data" column.
"""

from typing import Dict, Optional

from supabase import Client

from application.exceptions import ProgramPersistenceError


class SupabaseProgramRepository:
    """Supabase-backed program repository implementation."""

    TABLE = "programs"

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get_by_id(self, program_id: str) -> Optional[Dict]:
        response = (
            self._client.table(self.TABLE)
            .select("*")
            .eq("id", program_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_latest_for_user(self, user_id: str) -> Optional[Dict]:
        response = (
            self._client.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def upsert(self, data: Dict) -> Dict:
        """
        Insert a program, or replace the row with the same ID.

        Args:
            data: Program row (id, user_id, name, paid, data, created_at)

        Returns:
            Stored program row

        Raises:
            ProgramPersistenceError: If the write fails or returns nothing
        """
        try:
            response = self._client.table(self.TABLE).upsert(data).execute()
            if not response.data:
                raise ProgramPersistenceError("Upsert returned no data")
            return response.data[0]
        except Exception as e:
            if isinstance(e, ProgramPersistenceError):
                raise
            raise ProgramPersistenceError(f"Saving program failed: {e}") from e
