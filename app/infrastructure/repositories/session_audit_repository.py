"""Supabase implementation of SessionAuditRepository."""

from typing import Any, Dict, List

from app.domain.models.user_session import UserSessionAudit
from app.domain.repositories.session_audit_repository import SessionAuditRepository
from app.infrastructure.repositories.base_repository import SupabaseRepository


class SupabaseSessionAuditRepository(SupabaseRepository[UserSessionAudit], SessionAuditRepository):
    table = "user_sessions"

    def to_model(self, row: Dict[str, Any]) -> UserSessionAudit:
        row = dict(row)
        owner = row.pop("user_profiles", None) or {}
        row.setdefault("full_name", owner.get("full_name"))
        return UserSessionAudit.model_validate(row)

    async def list_with_profiles(self) -> List[UserSessionAudit]:
        rows = await self.run(
            self.query().select("*, user_profiles(full_name)").order("created_at", desc=True)
        )
        return [self.to_model(row) for row in rows]
