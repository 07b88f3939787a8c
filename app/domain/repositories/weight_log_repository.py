"""
Weight Log Repository Interface.
"""

from typing import List, Optional

from app.domain.models.weight_log import WeightLog
from app.domain.repositories.base import BaseRepository


class WeightLogRepository(BaseRepository[WeightLog]):
    """Interface for weight-log operations."""

    async def list_for_client(self, client_id: str) -> List[WeightLog]:
        """Get a client's weight logs, oldest first."""
        ...

    async def latest_for_client(self, client_id: str) -> Optional[WeightLog]:
        """Get a client's most recent weight log."""
        ...
