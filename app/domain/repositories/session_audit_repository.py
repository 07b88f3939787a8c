"""
Session Audit Repository Interface.
"""

from typing import List

from app.domain.models.user_session import UserSessionAudit
from app.domain.repositories.base import BaseRepository


class SessionAuditRepository(BaseRepository[UserSessionAudit]):
    """Interface for the logout audit trail."""

    async def list_with_profiles(self) -> List[UserSessionAudit]:
        """Get every audit row joined with the user's name, newest first."""
        ...
