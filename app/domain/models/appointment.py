"""Appointment — mirrors the 'appointments' table (read-only here)."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(BaseModel):
    id: str
    client_id: str
    date_time: datetime
    status: AppointmentStatus = AppointmentStatus.PENDING
    price: Decimal = Decimal("0")
    client_name: Optional[str] = None

    model_config = {"from_attributes": True}
