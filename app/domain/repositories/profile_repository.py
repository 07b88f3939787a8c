"""
Profile Repository Interface.
"""

from typing import List

from app.domain.models.profile import Role, UserProfile
from app.domain.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[UserProfile]):
    """Interface for profile-specific operations."""

    async def list_by_role(self, role: Role) -> List[UserProfile]:
        """Get every profile with the given role."""
        ...
