"""Pydantic schemas for the client and admin dashboards."""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from app.domain.models.appointment import Appointment
from app.domain.models.invoice import Invoice
from app.domain.models.profile import UserProfile
from app.domain.models.user_session import UserSessionAudit


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class WeightStats(BaseModel):
    initial: float
    current: float
    difference: float
    trend: Trend
    average: float
    minimum: float
    maximum: float


class WeightPoint(BaseModel):
    date: date_type
    label: str
    weight: float


class WeightCreate(BaseModel):
    # Raw form input; validated by the service so each rejection gets its own message
    weight: Union[str, float]


class ClientDashboard(BaseModel):
    weights: list[WeightPoint]
    stats: Optional[WeightStats] = None
    appointments: list[Appointment]


class MonthlyRevenue(BaseModel):
    month: str
    amount: Decimal


class AdminStats(BaseModel):
    total_revenue: Decimal
    client_count: int
    completed_appointments: int


class AdminDashboard(BaseModel):
    stats: AdminStats
    monthly_revenue: list[MonthlyRevenue]
    clients: list[UserProfile]
    invoices: list[Invoice]
    appointments: list[Appointment]
    sessions: list[UserSessionAudit]
