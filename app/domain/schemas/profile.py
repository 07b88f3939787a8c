"""Pydantic schemas for the profile edit form."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from app.domain.models.profile import UserProfile


class ProfileUpdate(BaseModel):
    full_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None

    def row_fields(self) -> dict:
        """Columns written to the profile row; email lives with the credential."""
        return self.model_dump(mode="json", exclude={"email"})


class ProfileUpdateResult(BaseModel):
    profile: UserProfile
    email_updated: bool
    partial_failure: bool = False
    error: Optional[str] = None
