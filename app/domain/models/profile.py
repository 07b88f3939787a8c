"""User profile — mirrors the 'user_profiles' table."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    CLIENT = "client"
    ADMIN = "admin"


class UserProfile(BaseModel):
    id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    role: Role = Role.CLIENT
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
