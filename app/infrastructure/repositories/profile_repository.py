"""Supabase implementation of ProfileRepository."""

from typing import List

from app.domain.models.profile import Role, UserProfile
from app.domain.repositories.profile_repository import ProfileRepository
from app.infrastructure.repositories.base_repository import SupabaseRepository


class SupabaseProfileRepository(SupabaseRepository[UserProfile], ProfileRepository):
    table = "user_profiles"

    async def list_by_role(self, role: Role) -> List[UserProfile]:
        rows = await self.run(
            self.query().select("*").eq("role", role.value).order("full_name")
        )
        return [self.to_model(row) for row in rows]
