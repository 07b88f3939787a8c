"""Supabase implementation of WeightLogRepository."""

from typing import List, Optional

from app.domain.models.weight_log import WeightLog
from app.domain.repositories.weight_log_repository import WeightLogRepository
from app.infrastructure.repositories.base_repository import SupabaseRepository


class SupabaseWeightLogRepository(SupabaseRepository[WeightLog], WeightLogRepository):
    table = "weight_logs"

    async def list_for_client(self, client_id: str) -> List[WeightLog]:
        rows = await self.run(
            self.query().select("*").eq("client_id", client_id).order("date").order("created_at")
        )
        return [self.to_model(row) for row in rows]

    async def latest_for_client(self, client_id: str) -> Optional[WeightLog]:
        rows = await self.run(
            self.query()
            .select("*")
            .eq("client_id", client_id)
            .order("date", desc=True)
            .order("created_at", desc=True)
            .limit(1)
        )
        return self.to_model(rows[0]) if rows else None
