"""Supabase implementation of AppointmentRepository."""

from typing import Any, Dict, List

from app.domain.models.appointment import Appointment
from app.domain.repositories.appointment_repository import AppointmentRepository
from app.infrastructure.repositories.base_repository import SupabaseRepository


class SupabaseAppointmentRepository(SupabaseRepository[Appointment], AppointmentRepository):
    table = "appointments"

    def to_model(self, row: Dict[str, Any]) -> Appointment:
        row = dict(row)
        owner = row.pop("user_profiles", None) or {}
        if owner.get("full_name"):
            row["client_name"] = owner["full_name"]
        return Appointment.model_validate(row)

    async def list_for_client(self, client_id: str) -> List[Appointment]:
        rows = await self.run(
            self.query().select("*").eq("client_id", client_id).order("date_time")
        )
        return [self.to_model(row) for row in rows]

    async def list_with_clients(self) -> List[Appointment]:
        rows = await self.run(
            self.query().select("*, user_profiles(full_name)").order("date_time")
        )
        return [self.to_model(row) for row in rows]
