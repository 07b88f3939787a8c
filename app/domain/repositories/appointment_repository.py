"""
Appointment Repository Interface.
"""

from typing import List

from app.domain.models.appointment import Appointment
from app.domain.repositories.base import BaseRepository


class AppointmentRepository(BaseRepository[Appointment]):
    """Interface for appointment reads."""

    async def list_for_client(self, client_id: str) -> List[Appointment]:
        """Get a client's appointments, earliest first."""
        ...

    async def list_with_clients(self) -> List[Appointment]:
        """Get every appointment joined with its client's name, earliest first."""
        ...
